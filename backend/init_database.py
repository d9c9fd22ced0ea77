"""
Initialise the guidance database from scratch.

Checks the connection, applies the Alembic migrations and verifies that the
sessions/interactions tables exist.

Usage:
    python backend/init_database.py
"""
import asyncio
import logging
import sys
from pathlib import Path

backend_path = Path(__file__).parent
sys.path.insert(0, str(backend_path))

from alembic import command
from alembic.config import Config
from sqlalchemy import inspect

from guidance.config import Settings
from guidance.database.connection import Database

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

EXPECTED_TABLES = ("sessions", "interactions")


def run_migrations() -> None:
    alembic_cfg = Config(str(backend_path.parent / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(backend_path.parent / "data" / "migrations"))
    command.upgrade(alembic_cfg, "head")


async def verify_tables(database: Database) -> bool:
    async with database.engine.connect() as conn:
        table_names = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())

    missing = [t for t in EXPECTED_TABLES if t not in table_names]
    if missing:
        logger.warning("Missing tables: %s", ", ".join(missing))
        return False
    logger.info("All expected tables present: %s", ", ".join(EXPECTED_TABLES))
    return True


async def main() -> bool:
    settings = Settings.from_env()
    database = Database(settings)
    try:
        try:
            await database.ping()
        except Exception as e:
            logger.error("Cannot connect to the database: %s", e)
            return False

        logger.info("Applying migrations...")
        run_migrations()

        return await verify_tables(database)
    finally:
        await database.dispose()


if __name__ == "__main__":
    if sys.platform == "win32":
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

    success = asyncio.run(main())
    sys.exit(0 if success else 1)
