"""
Database Connection Management
Async SQLite connection using aiosqlite
"""
import asyncio
from pathlib import Path
from typing import Optional, AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker, AsyncEngine
from sqlalchemy.pool import StaticPool
from loguru import logger

from .errors import StorageError
from .models import Base
from config import settings

# Async engine
_engine: Optional[AsyncEngine] = None
_session_factory = None
# Serializes transactions on the single pooled connection
_lock: Optional[asyncio.Lock] = None


def _casefold(value):
    """Unicode-aware lower-casing; SQLite's lower() only folds ASCII"""
    if isinstance(value, str):
        return value.casefold()
    return value


def _on_connect(dbapi_connection, connection_record):
    """Register SQL helper functions on every new connection"""
    dbapi_connection.create_function("casefold", 1, _casefold)


def _ensure_parent_dir(database_url: str) -> None:
    """Create the directory holding a file-based SQLite database"""
    database = make_url(database_url).database
    if not database or database == ":memory:":
        return
    try:
        Path(database).parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StorageError(f"Cannot create database directory for {database}: {e}") from e


def get_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """Get or create async engine"""
    global _engine, _lock
    if _engine is None:
        _lock = asyncio.Lock()
        db_url = database_url or settings.DATABASE_URL
        _ensure_parent_dir(db_url)
        logger.info(f"Creating database engine: {db_url}")

        _engine = create_async_engine(
            db_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        event.listen(_engine.sync_engine, "connect", _on_connect)
    return _engine


def get_db_lock() -> asyncio.Lock:
    """Lock shared by every user of the engine"""
    get_engine()
    return _lock


def get_session_factory():
    """Get or create session factory"""
    global _session_factory
    if _session_factory is None:
        engine = get_engine()
        _session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _session_factory


async def init_db(database_url: Optional[str] = None):
    """Initialize database - create tables if not exist

    Passing ``database_url`` replaces any engine created earlier.
    """
    if database_url is not None:
        await close_db()
    engine = get_engine(database_url)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except SQLAlchemyError as e:
        logger.error(f"Database initialization failed: {e}")
        raise StorageError(f"Database initialization failed: {e}") from e
    logger.info("Database initialized successfully")


async def close_db():
    """Close database connection"""
    global _engine, _session_factory, _lock
    if _engine:
        await _engine.dispose()
        _engine = None
        _session_factory = None
        _lock = None
        logger.info("Database connection closed")


@asynccontextmanager
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session as async context manager

    The whole block is one transaction: committed on success, rolled back on
    any error. Persistence failures surface as StorageError.
    """
    session_factory = get_session_factory()
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except (SQLAlchemyError, OSError) as e:
            await session.rollback()
            logger.error(f"Database error: {e}")
            raise StorageError(str(e)) from e
        except Exception:
            await session.rollback()
            raise
