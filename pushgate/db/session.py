"""Database session dependency for FastAPI routes."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from pushgate.db import engine as _engine


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session for the duration of one request.

    Push handling only reads configuration, but the session still commits on
    success and rolls back on error so write paths can share it.

    Raises:
        RuntimeError: If ``init_engine()`` has not been called.
    """
    if _engine.async_session_factory is None:
        msg = "Database session factory not initialized. Call init_engine() first."
        raise RuntimeError(msg)

    async with _engine.async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
