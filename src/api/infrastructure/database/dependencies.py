"""Database dependency injection for FastAPI.

Owns the single process-wide engine and its sessionmaker. Sessions are
handed out per request; the engine is created once on first use and
disposed on shutdown.
"""

from __future__ import annotations

import threading
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_engine
from infrastructure.observability import DefaultConnectionProbe
from infrastructure.settings import get_database_settings

# Module-level probe for observability
_probe = DefaultConnectionProbe()

# Module-level engine instance (created on first use)
_engine: AsyncEngine | None = None

# Module-level sessionmaker instance (created with the engine)
_sessionmaker: async_sessionmaker[AsyncSession] | None = None

# Thread lock for safe engine initialization
_engine_lock = threading.Lock()


def get_engine() -> AsyncEngine:
    """Get the database engine (singleton).

    Creates engine on first call and caches for subsequent calls.
    Uses double-check locking for thread-safe initialization.
    Also creates and caches the sessionmaker for efficient session creation.

    Returns:
        Configured async engine
    """
    global _engine, _sessionmaker
    if _engine is None:
        with _engine_lock:
            # Double-check after acquiring lock
            if _engine is None:
                settings = get_database_settings()
                _engine = create_engine(settings)
                _sessionmaker = async_sessionmaker(
                    _engine,
                    expire_on_commit=False,
                    class_=AsyncSession,
                )
                _probe.engine_created(
                    host=settings.host,
                    database=settings.database,
                    pool_size=settings.pool_max_connections,
                )
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the sessionmaker bound to the shared engine.

    Used by background workers and scripts that open their own sessions
    outside of a request.

    Returns:
        The cached async sessionmaker
    """
    get_engine()
    assert _sessionmaker is not None
    return _sessionmaker


async def get_write_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a session for the request's business operations (FastAPI dependency).

    The session is configured to NOT auto-commit. Application services
    manage transactions using `async with session.begin()`.

    Yields:
        AsyncSession for database operations
    """
    factory = get_session_factory()

    async with factory() as session:
        yield session


async def get_directory_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a dedicated session for tenant directory lookups.

    Tenant resolution runs before (and independently of) the request's
    business transaction, so it uses its own session to avoid transaction
    conflicts with the main request session.

    Yields:
        AsyncSession for tenant lookups
    """
    factory = get_session_factory()

    async with factory() as session:
        yield session


async def close_database_connections() -> None:
    """Close all database engine connections.

    Should be called on application shutdown to properly cleanup connections.
    Also resets the sessionmaker to allow reinitialization.
    """
    global _engine, _sessionmaker

    if _engine is not None:
        await _engine.dispose()
        _probe.pool_closed()
        _engine = None
        _sessionmaker = None
