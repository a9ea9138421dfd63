#!/usr/bin/env python3
"""Initialize row-store tables (Users, Categories, Orders, Logs)."""

import asyncio
import sys
from pathlib import Path

from loguru import logger

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config.database import close_db, create_engine, init_db  # noqa: E402
from app.config.settings import get_settings  # noqa: E402
from app.models.tables import SQL_TABLES  # noqa: E402


async def main() -> None:
    """Create all row-store tables."""
    settings = get_settings()
    logger.info(f"Creating tables: {', '.join(SQL_TABLES)}")

    engine = create_engine(settings)
    try:
        await init_db(engine)
    finally:
        await close_db(engine)

    logger.success("Database tables created successfully")


if __name__ == "__main__":
    asyncio.run(main())
