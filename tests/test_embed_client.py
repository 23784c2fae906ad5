"""Tests for the Hugging Face embedding client with a mocked transport."""

import json

import httpx
import pytest

from shared.clients.embed.EmbedClientManager import EmbedClientManager
from shared.clients.embed.huggingface.EmbedClientHuggingface import EmbedClientHuggingface
from shared.clients.errors import EmbeddingRequestFailed, InvalidResponseShape


async def _booted_client(helper_config, handler) -> EmbedClientHuggingface:
    client = EmbedClientHuggingface(helper_config=helper_config)
    await client.boot(transport=httpx.MockTransport(handler))
    return client


class TestEmbedDocuments:
    @pytest.mark.asyncio
    async def test_one_request_per_text_in_order(self, helper_config):
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            bodies.append(body)
            return httpx.Response(200, json=[float(len(bodies)), 0.5])

        client = await _booted_client(helper_config, handler)
        vectors = await client.do_embed_documents(["first", "second", "third"])
        await client.close()

        assert [b["inputs"] for b in bodies] == ["first", "second", "third"]
        assert vectors == [[1.0, 0.5], [2.0, 0.5], [3.0, 0.5]]

    @pytest.mark.asyncio
    async def test_request_shape_and_auth(self, helper_config):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("Authorization")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=[0.1])

        client = await _booted_client(helper_config, handler)
        await client.do_embed_documents(["hello"])
        await client.close()

        assert seen["url"].endswith(
            "/sentence-transformers/all-mpnet-base-v2/pipeline/feature-extraction"
        )
        assert seen["auth"] == "Bearer test-hf-key"
        assert seen["body"] == {
            "model": "sentence-transformers/all-mpnet-base-v2",
            "inputs": "hello",
            "provider": "hf-inference",
        }

    @pytest.mark.asyncio
    async def test_nested_response_is_flattened(self, helper_config):
        client = await _booted_client(
            helper_config, lambda request: httpx.Response(200, json=[[0.1, 0.2], [0.3, 0.4]])
        )
        vectors = await client.do_embed_documents(["tokens"])
        await client.close()

        assert vectors == [[0.1, 0.2, 0.3, 0.4]]

    @pytest.mark.asyncio
    async def test_failure_aborts_remaining_texts(self, helper_config):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            if len(calls) == 2:
                return httpx.Response(503, text="Service Unavailable")
            return httpx.Response(200, json=[0.1])

        client = await _booted_client(helper_config, handler)
        with pytest.raises(EmbeddingRequestFailed) as exc_info:
            await client.do_embed_documents(["a", "b", "c"])
        await client.close()

        assert exc_info.value.status_code == 503
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_non_list_response_raises_invalid_shape(self, helper_config):
        client = await _booted_client(
            helper_config, lambda request: httpx.Response(200, json={"error": "loading"})
        )
        with pytest.raises(InvalidResponseShape, match="not an array"):
            await client.do_embed_documents(["a"])
        await client.close()

    @pytest.mark.asyncio
    async def test_dimension_mismatch_raises(self, helper_config, monkeypatch):
        monkeypatch.setenv("EMBED_DIMENSION", "3")
        client = await _booted_client(helper_config, lambda request: httpx.Response(200, json=[0.1, 0.2]))
        with pytest.raises(ValueError, match="Embedding dimension mismatch"):
            await client.do_embed_documents(["a"])
        await client.close()


class TestEmbedQuery:
    @pytest.mark.asyncio
    async def test_returns_single_vector_with_model_override(self, helper_config):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            seen["path"] = request.url.path
            return httpx.Response(200, json=[0.7, 0.8])

        client = await _booted_client(helper_config, handler)
        vector = await client.do_embed_query("run faster", model="org/other-model")
        await client.close()

        assert vector == [0.7, 0.8]
        assert seen["body"]["model"] == "org/other-model"
        assert "/org/other-model/pipeline/feature-extraction" in seen["path"]


class TestConfiguration:
    def test_missing_api_key_fails_fast(self, helper_config, monkeypatch):
        monkeypatch.delenv("EMBED_HUGGINGFACE_API_KEY")
        with pytest.raises(ValueError, match="EMBED_HUGGINGFACE_API_KEY"):
            EmbedClientHuggingface(helper_config=helper_config)

    def test_manager_resolves_engine(self, helper_config, monkeypatch):
        monkeypatch.setenv("EMBED_ENGINE", "HuggingFace")
        client = EmbedClientManager(helper_config=helper_config).get_client()
        assert isinstance(client, EmbedClientHuggingface)
        assert client.get_engine_name() == "huggingface"

    def test_manager_rejects_unknown_engine(self, helper_config, monkeypatch):
        monkeypatch.setenv("EMBED_ENGINE", "nonexistent")
        with pytest.raises(ValueError, match="Unsupported Embed engine"):
            EmbedClientManager(helper_config=helper_config)

    @pytest.mark.asyncio
    async def test_request_before_boot_raises(self, helper_config):
        client = EmbedClientHuggingface(helper_config=helper_config)
        with pytest.raises(RuntimeError, match="boot"):
            await client.do_embed_query("a")
