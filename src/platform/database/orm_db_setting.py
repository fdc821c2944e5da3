"""
SQLAlchemy async engine and session management

This module provides:
1. Base: declarative base for all ORM models
2. storage_guard: bounds one unit of storage work in time and turns driver faults
   into StorageUnavailableError
3. Database: explicitly constructed storage handle (opened at startup, disposed at
   shutdown) injected through the DI container

Transaction model:
- PostgreSQL (asyncpg): default READ COMMITTED, row locks via SELECT ... FOR UPDATE
- SQLite (aiosqlite): every transaction starts with BEGIN IMMEDIATE, so the write
  lock is taken up front and concurrent writers (also from other processes) queue
  on the busy timeout instead of interleaving
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

import anyio
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import StorageUnavailableError
from src.platform.logging.loguru_io import Logger


# =============================================================================
# Base Model
# =============================================================================


class Base(DeclarativeBase):
    pass


# =============================================================================
# Storage Guard
# =============================================================================


@asynccontextmanager
async def storage_guard(*, timeout: float) -> AsyncGenerator[None, None]:
    """
    Bound a unit of storage work.

    - Exceeding `timeout` seconds cancels the work and raises StorageUnavailableError
    - Any SQLAlchemy / driver error escaping the block becomes StorageUnavailableError
    - Domain errors raised inside the block pass through untouched
    """
    try:
        with anyio.fail_after(timeout):
            yield
    except TimeoutError as e:
        Logger.base.error(f'⏱️ [DB] Storage operation exceeded {timeout}s')
        raise StorageUnavailableError() from e
    except SQLAlchemyError as e:
        Logger.base.opt(exception=e).error(f'❌ [DB] Storage fault: {type(e).__name__}')
        raise StorageUnavailableError() from e


# =============================================================================
# SQLite transaction control
# =============================================================================


def _enable_sqlite_transaction_control(engine: AsyncEngine) -> None:
    """
    Take over BEGIN from the sqlite3 driver.

    pysqlite/aiosqlite defer BEGIN until the first DML statement and then use a
    DEFERRED transaction, which lets two connections read the same row before either
    writes. Emitting BEGIN IMMEDIATE ourselves makes every transaction serializable.
    """

    @event.listens_for(engine.sync_engine, 'connect')
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()

    @event.listens_for(engine.sync_engine, 'begin')
    def _on_begin(conn: Any) -> None:
        conn.exec_driver_sql('BEGIN IMMEDIATE')


# =============================================================================
# Database Class (storage handle for DI)
# =============================================================================


class Database:
    """
    Storage handle with an explicit lifecycle

    Usage:
        database = Database()
        await database.create_db_and_tables()   # startup
        async with database.session() as session:
            ...
        await database.dispose()                # shutdown

    The engine is created lazily on first use so that it binds to the event loop
    that actually serves requests.
    """

    def __init__(
        self,
        *,
        database_url: Optional[str] = None,
        echo: Optional[bool] = None,
        operation_timeout: Optional[float] = None,
    ) -> None:
        self.database_url = database_url or settings.DATABASE_URL_ASYNC
        self._echo = settings.DB_ECHO if echo is None else echo
        self.operation_timeout = operation_timeout or settings.DB_OPERATION_TIMEOUT
        self._engine: Optional[AsyncEngine] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith('sqlite')

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = self._create_engine()
            Logger.base.info(f'🔗 [DB] Engine created for {self._engine.url.render_as_string()}')
        return self._engine

    @property
    def session_maker(self) -> async_sessionmaker[AsyncSession]:
        if self._session_maker is None:
            self._session_maker = async_sessionmaker(
                self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_maker

    def _create_engine(self) -> AsyncEngine:
        if self.is_sqlite:
            engine = create_async_engine(
                self.database_url,
                echo=self._echo,
                future=True,
                connect_args={'timeout': settings.SQLITE_BUSY_TIMEOUT},
            )
            _enable_sqlite_transaction_control(engine)
            return engine

        return create_async_engine(
            self.database_url,
            echo=self._echo,
            future=True,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_POOL_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_pre_ping=True,
        )

    async def create_db_and_tables(self) -> None:
        """Create database tables if they don't exist (safe to run on every startup)"""
        # Register all models with the metadata before create_all
        import src.service.mealshare.driven_adapter.model  # noqa: F401

        async with storage_guard(timeout=self.operation_timeout):
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all, checkfirst=True)
        Logger.base.info('🗄️ [DB] Schema ready')

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager for database sessions

        Note: Session close rolls back anything that was not committed. Close runs
        shielded so the connection goes back to the pool even after a timeout.
        """
        async with storage_guard(timeout=self.operation_timeout):
            session = self.session_maker()
            try:
                yield session
            finally:
                with anyio.CancelScope(shield=True):
                    await session.close()

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            Logger.base.info('🔌 [DB] Engine disposed')
        self._engine = None
        self._session_maker = None
