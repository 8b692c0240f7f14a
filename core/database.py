"""
Engines and sessions for running comment statements

The library never opens connections on import. Callers either bring their
own AsyncSession or use get_session(), which builds a short-lived engine
from settings and disposes of it afterwards.
"""

from typing import AsyncGenerator, Optional
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from core.config import settings
import logging

logger = logging.getLogger(__name__)


def create_engine_from_settings(url: Optional[str] = None, echo: Optional[bool] = None) -> AsyncEngine:
    """
    Create an async engine for ``url`` (default: settings.DATABASE_URL).

    Statement echo is off unless SQL_ECHO is set; the comments package logs
    its own statements at DEBUG.
    """
    return create_async_engine(
        url or settings.DATABASE_URL,
        echo=settings.SQL_ECHO if echo is None else echo,
        poolclass=NullPool,
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker:
    """Session factory bound to ``engine``"""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False
    )


async def get_session(url: Optional[str] = None) -> AsyncGenerator[AsyncSession, None]:
    """Yield one session on a fresh engine, disposing of the engine afterwards"""
    engine = create_engine_from_settings(url)
    try:
        async with create_session_maker(engine)() as session:
            yield session
    finally:
        await engine.dispose()
        logger.debug("Disposed comment session engine")
