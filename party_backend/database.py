"""Database connection and session management."""
import logging
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from party_backend.config import Settings, get_settings

logger = logging.getLogger(__name__)

# Base class for models
Base = declarative_base()


def build_engine(settings: Settings | None = None) -> AsyncEngine:
    """Create the async engine for the configured database.

    SQLite URLs skip pool sizing since aiosqlite does not use a queue pool.
    """
    settings = settings or get_settings()

    connect_args = {}
    needs_ssl = (
        "amazonaws" in settings.database_url or
        settings.environment == "production"
    ) and "sqlite" not in settings.database_url

    if needs_ssl:
        connect_args["ssl"] = "require"
        logger.debug("SSL connection enabled (ssl=require)")

    engine_kwargs = {
        "echo": False,
        "future": True,
        "connect_args": connect_args,
        "pool_pre_ping": True,  # Verify connections before use
    }

    if "sqlite" not in settings.database_url:
        # Keep production connection usage conservative
        pool_size = max(1, settings.db_pool_size)
        max_overflow = max(0, settings.db_max_overflow)
        if settings.environment == "production":
            pool_size = min(pool_size, 2)
            max_overflow = min(max_overflow, 2)
        engine_kwargs.update(
            pool_recycle=3600,
            pool_size=pool_size,
            max_overflow=max_overflow,
        )

    try:
        engine = create_async_engine(settings.database_url, **engine_kwargs)
        logger.debug("Database engine created successfully")
    except Exception as e:
        logger.error(f"Failed to create database engine: {e}")
        raise
    return engine


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory shared by every Store call."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create all tables registered on ``Base``."""
    # Import models so they register with the metadata
    import party_backend.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")
