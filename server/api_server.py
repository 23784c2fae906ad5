"""FastAPI application entry point for the fitness plan RAG service."""

import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.logging.logging_setup import setup_logging
from shared.helper.HelperConfig import HelperConfig
from shared.clients.ClientInterface import ClientInterface
from shared.clients.embed.EmbedClientManager import EmbedClientManager
from shared.clients.llm.LLMClientManager import LLMClientManager
from shared.clients.store.StoreClientManager import StoreClientManager
from services.doc_embedding.EmbeddingService import EmbeddingService
from server.core.PlanService import PlanService
from server.routers.PlanRouter import router as plan_router

logging = setup_logging()
app_version = os.getenv("APP_VERSION", "unknown")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # when the app starts
    app.state.logging = logging
    app.state.helper_config = HelperConfig(logger=logging)

    # missing keys raise here, before the server accepts requests
    store_client = StoreClientManager(helper_config=app.state.helper_config).get_client()
    embed_client = EmbedClientManager(helper_config=app.state.helper_config).get_client()
    llm_client = LLMClientManager(helper_config=app.state.helper_config).get_client()
    clients: list[ClientInterface] = [store_client, embed_client, llm_client]

    logging.info("Booting all clients...")
    for client in clients:
        await client.boot()
    logging.info("All clients booted successfully.")

    app.state.embedding_service = EmbeddingService(
        helper_config=app.state.helper_config,
        store_client=store_client,
        embed_client=embed_client,
    )
    app.state.plan_service = PlanService(
        helper_config=app.state.helper_config,
        store_client=store_client,
        embed_client=embed_client,
        llm_client=llm_client,
        embedding_service=app.state.embedding_service,
    )

    if app.state.helper_config.get_bool_val("CHECK_CONNECTIONS", default=True):
        await check_connections(clients)

    # while the app is running...
    yield

    # when the app shuts down, close all client connections
    logging.info("Shutting down, closing all clients...")
    for client in clients:
        await client.close()
    logging.info("All clients closed.")


app = FastAPI(
    title="fitplan_rag",
    description=(
        "Generates fitness plans from a user's journal. Plans and entries are "
        "embedded into the datastore and the nearest ones are used as context "
        "for a hosted chat model via POST /plan/generate."
    ),
    version=app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(plan_router)


async def check_connections(clients: list[ClientInterface]) -> None:
    """Check connectivity to all configured backends on startup.

    Failures are logged as warnings only: each request reports its own error,
    and the server stays up.
    """
    for client in clients:
        try:
            result: httpx.Response = await client.do_healthcheck()
        except httpx.HTTPError as exc:
            logging.warning(
                "%s client '%s' is not reachable: %s",
                client.get_client_type().upper(), client.get_engine_name(), exc,
            )
            continue
        if not result.is_success:
            logging.warning(
                "%s client '%s' answered healthcheck with status %d.",
                client.get_client_type().upper(), client.get_engine_name(), result.status_code,
            )


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "3001"))
    logging.info(
        "Starting fitplan_rag API Server v%s from root dir: %s on port %d...",
        app_version,
        os.environ.get("ROOT_DIR", "unknown"),
        port,
    )
    uvicorn.run(app, host="0.0.0.0", port=port)
