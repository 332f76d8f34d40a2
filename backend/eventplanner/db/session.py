"""
Async engine and per-request session dependency.

Each request gets one session and therefore one transaction: the session is
committed when the route returns and rolled back if anything raises. Counter
recomputation and the event cascade delete rely on this to be all-or-nothing.
Routes that invalidate the event cache commit first; the final commit here
is then a no-op.
"""

from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from eventplanner.core.config import get_settings
from eventplanner.core.logging import get_logger

logger = get_logger(__name__)
settings = get_settings()


def create_engine(url: str):
    if url.startswith("sqlite"):
        # SQLite has no server-side pool to size
        return create_async_engine(url, echo=settings.DEBUG, future=True)
    return create_async_engine(
        url,
        echo=settings.DEBUG,
        future=True,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=True,
    )


engine = create_engine(settings.DATABASE_URL)
AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def check_database() -> bool:
    """Return True if a trivial query succeeds."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error("database_ping_failed", error=str(e))
        return False


async def create_tables() -> None:
    from eventplanner.db.base import Base
    import eventplanner.models  # noqa: F401 - register tables on the metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("database_tables_created")
