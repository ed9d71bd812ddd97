"""CLI entry: create the schema and load demo data. Usage: python -m seed (from backend dir)."""
from __future__ import annotations

import asyncio
import logging
import sys

from core.config import get_settings
from core.database import dispose_database, get_database_manager, init_database
from core.logging import setup_logging
from seed.seed_demo import seed_demo

logger = logging.getLogger("seed")


async def _main() -> int:
    settings = get_settings()
    setup_logging(settings)
    await init_database(settings.database_url, create_schema=True)
    try:
        async with get_database_manager().session() as session:
            counts = await seed_demo(session)
    finally:
        await dispose_database()
    logger.info("Seed complete: %s", counts)
    return 0


def main() -> None:
    exit_code = asyncio.run(_main())
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
