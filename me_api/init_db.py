"""Create the database schema (tables and indexes) if it does not exist."""

import asyncio
import logging

from me_api.config import settings
from me_api.database import Database
from me_api.logging_config import setup_logging
from me_api.models import Base

logger = logging.getLogger(__name__)


async def initialize_database(database: Database) -> list[str]:
    """Create all tables and return their names."""
    await database.init()
    return sorted(Base.metadata.tables)


async def _run() -> None:
    database = Database.from_settings(settings)
    try:
        tables = await initialize_database(database)
        logger.info(f"Tables created: {', '.join(tables)}")
        logger.info('Run "me-api-seed" to populate the database with sample data.')
    finally:
        await database.close()


def main() -> None:
    setup_logging(level=settings.log_level, json_format=settings.log_json, log_dir=settings.log_dir)
    asyncio.run(_run())


if __name__ == "__main__":
    main()
