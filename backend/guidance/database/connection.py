import logging
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base

from guidance.config import Settings, mask_database_url

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """Async engine and session factory built from explicit settings."""

    def __init__(self, settings: Settings):
        self.url = settings.database_url
        engine_kwargs = {"echo": False, "pool_pre_ping": True}
        if not self.url.startswith("sqlite"):
            engine_kwargs.update(pool_size=5, max_overflow=10)

        self.engine: AsyncEngine = create_async_engine(self.url, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def ping(self) -> None:
        """Run SELECT 1; raises if the store is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Database connection OK: %s", mask_database_url(self.url))

    async def create_all(self) -> None:
        """Create the sessions/interactions tables if they do not exist yet."""
        # models must be imported so their tables are registered on Base.metadata
        import guidance.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ready")

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Dependency yielding one async DB session per request."""
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
