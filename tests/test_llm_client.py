"""Tests for the OpenRouter completion client."""

import json

import httpx
import pytest

from shared.clients.errors import CompletionRequestFailed
from shared.clients.llm.LLMClientManager import LLMClientManager
from shared.clients.llm.openrouter.LLMClientOpenrouter import LLMClientOpenrouter


def _completion(content) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


async def _booted_client(helper_config, handler) -> LLMClientOpenrouter:
    client = LLMClientOpenrouter(helper_config=helper_config)
    await client.boot(transport=httpx.MockTransport(handler))
    return client


class TestInvoke:
    @pytest.mark.asyncio
    async def test_sends_prompt_as_single_user_message(self, helper_config):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("Authorization")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_completion([{"type": "text", "text": "ok"}]))

        client = await _booted_client(helper_config, handler)
        result = await client.do_invoke("Build me a plan", model="google/gemma-3-4b-it:free")
        await client.close()

        assert result == "ok"
        assert seen["url"] == "https://openrouter.ai/api/v1/chat/completions"
        assert seen["auth"] == "Bearer test-openrouter-key"
        assert seen["body"] == {
            "model": "google/gemma-3-4b-it:free",
            "messages": [
                {"role": "user", "content": [{"type": "text", "text": "Build me a plan"}]}
            ],
            "parameters": {"max_new_tokens": 512},
        }

    @pytest.mark.asyncio
    async def test_keeps_only_text_segments(self, helper_config):
        content = [
            {"type": "text", "text": "Plan A"},
            {"type": "image", "url": "x"},
            {"type": "text", "text": "Plan B"},
        ]
        client = await _booted_client(helper_config, lambda r: httpx.Response(200, json=_completion(content)))
        result = await client.do_invoke("prompt")
        await client.close()

        assert result == "Plan A\nPlan B"

    @pytest.mark.asyncio
    async def test_rate_limit_raises_with_status(self, helper_config):
        client = await _booted_client(
            helper_config, lambda r: httpx.Response(429, text='{"error":"rate limited"}')
        )
        with pytest.raises(CompletionRequestFailed, match="429") as exc_info:
            await client.do_invoke("prompt")
        await client.close()

        assert exc_info.value.status_code == 429
        assert "rate limited" in exc_info.value.body

    @pytest.mark.asyncio
    async def test_uses_configured_model_and_token_cap(self, helper_config, monkeypatch):
        monkeypatch.setenv("LLM_CHAT_MODEL", "meta/llama")
        monkeypatch.setenv("LLM_MAX_NEW_TOKENS", "128")
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_completion("plain"))

        client = await _booted_client(helper_config, handler)
        await client.do_invoke("prompt")
        await client.close()

        assert seen["body"]["model"] == "meta/llama"
        assert seen["body"]["parameters"] == {"max_new_tokens": 128}


class TestExtractChatResponse:
    def test_plain_string_content(self, helper_config):
        client = LLMClientOpenrouter(helper_config=helper_config)
        assert client.extract_chat_response(_completion("Just text")) == "Just text"

    def test_missing_choices_yield_empty_text(self, helper_config):
        client = LLMClientOpenrouter(helper_config=helper_config)
        assert client.extract_chat_response({}) == ""
        assert client.extract_chat_response({"choices": [{"message": {}}]}) == ""


def test_missing_api_key_fails_fast(helper_config, monkeypatch):
    monkeypatch.delenv("LLM_OPENROUTER_API_KEY")
    with pytest.raises(ValueError, match="LLM_OPENROUTER_API_KEY"):
        LLMClientManager(helper_config=helper_config)
