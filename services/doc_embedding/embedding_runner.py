"""Embedding runner entry point.

Embeds every plan and journal entry that is not embedded yet and stores the
vectors for the given user. Useful for backfills outside the HTTP flow.

Usage:
    python -m services.doc_embedding.embedding_runner --user-id <uuid>
"""

import argparse
import asyncio

from services.doc_embedding.EmbeddingService import EmbeddingService
from shared.clients.embed.EmbedClientManager import EmbedClientManager
from shared.clients.store.StoreClientManager import StoreClientManager
from shared.helper.HelperConfig import HelperConfig
from shared.logging.logging_setup import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Embed unembedded plans and entries.")
    parser.add_argument("--user-id", required=True, help="Owner recorded on the vector records.")
    return parser.parse_args(argv)


async def main(user_id: str) -> int:
    """Run one embed-and-persist pass.

    Returns:
        int: Process exit code.
    """
    logger = setup_logging()
    config = HelperConfig(logger=logger)
    store_client = StoreClientManager(helper_config=config).get_client()
    embed_client = EmbedClientManager(helper_config=config).get_client()

    try:
        # both backends are required, there is no point in continuing without one
        for client in (store_client, embed_client):
            await client.boot()

        service = EmbeddingService(
            helper_config=config,
            store_client=store_client,
            embed_client=embed_client,
        )
        summary = await service.do_sync(user_id)
        logger.info(
            "Embedding run finished: %d plans, %d entries.",
            summary.plans, summary.entries, extra={"color": "green"},
        )
        return 0
    except Exception as e:
        logger.error("Embedding run failed: %s", e)
        return 1
    finally:
        await embed_client.close()
        await store_client.close()


if __name__ == "__main__":
    args = parse_args()
    raise SystemExit(asyncio.run(main(args.user_id)))
