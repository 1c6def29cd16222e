"""Async engine and session factory for the project registry database."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

engine: AsyncEngine | None = None
async_session_factory: async_sessionmaker[AsyncSession] | None = None


async def init_engine(database_url: str, *, echo: bool = False) -> None:
    """Create the async engine and session factory.

    Args:
        database_url: SQLAlchemy URL, normally PostgreSQL through asyncpg.
        echo: Log every SQL statement (debug only).
    """
    global engine, async_session_factory  # noqa: PLW0603

    engine = create_async_engine(
        database_url,
        pool_size=5,
        max_overflow=2,
        pool_pre_ping=True,
        echo=echo,
    )

    async_session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def dispose_engine() -> None:
    """Dispose the engine and forget the session factory."""
    global engine, async_session_factory  # noqa: PLW0603

    if engine is not None:
        await engine.dispose()
        engine = None
        async_session_factory = None
