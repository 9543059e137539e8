"""
Adapters: directory providers.

Implement the DirectoryProvider port. Three strategies, chosen at startup:

- per_request: open a fresh psycopg2 connection per request, close it after.
- pool: lazily build one shared psycopg2 ThreadedConnectionPool.
- orm: lazily build one shared SQLAlchemy engine, one session per request.

Shared resources are created at most once, under a lock, on first use.
Connection failures surface as StorageUnavailableError; nothing is retried.
"""

import logging
import threading
from typing import Optional

import psycopg2
from psycopg2.pool import ThreadedConnectionPool
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from email_hint.core.config import ConnectionConfig, Settings
from email_hint.domain.directory.errors import StorageUnavailableError
from email_hint.domain.directory.ports import DirectoryProvider, PhoneDirectory
from email_hint.infrastructure.directory.orm_directory import OrmPhoneDirectory
from email_hint.infrastructure.directory.psycopg_directory import (
    PsycopgPhoneDirectory,
)

logger = logging.getLogger(__name__)

PING_SQL = "SELECT 1"


class PerRequestDirectoryProvider(DirectoryProvider):
    """Opens a dedicated connection for every handle.

    No shared mutable state; each handle closes its connection on release.
    """

    def __init__(self, config: ConnectionConfig, connect_timeout_s: int = 1) -> None:
        self._config = config
        self._connect_timeout_s = connect_timeout_s

    def _connect(self):
        try:
            return psycopg2.connect(
                self._config.dsn(), connect_timeout=self._connect_timeout_s
            )
        except psycopg2.Error as exc:
            raise StorageUnavailableError(
                f"failed to connect to {self._config.host}:{self._config.port}"
            ) from exc

    def acquire(self) -> PhoneDirectory:
        return PsycopgPhoneDirectory(self._connect())

    def ping(self) -> None:
        connection = self._connect()
        try:
            _ping_connection(connection)
        finally:
            connection.close()

    def close(self) -> None:
        return None


class PooledDirectoryProvider(DirectoryProvider):
    """Hands out connections from a lazily built, shared connection pool.

    The first caller builds and pings the pool while holding the lock;
    concurrent first callers wait and then reuse it. Once built, the pool
    reference is read without locking.

    ThreadedConnectionPool raises as soon as every connection is checked
    out, so checkouts are gated by a semaphore sized to the pool. A caller
    finding the pool busy waits up to ``acquire_timeout_s`` for a handle
    to be released before giving up.
    """

    def __init__(
        self,
        config: ConnectionConfig,
        connect_timeout_s: int = 1,
        min_size: int = 1,
        max_size: int = 10,
        acquire_timeout_s: Optional[float] = None,
    ) -> None:
        self._config = config
        self._connect_timeout_s = connect_timeout_s
        self._min_size = min_size
        self._max_size = max(max_size, min_size, 1)
        self._acquire_timeout_s = (
            connect_timeout_s if acquire_timeout_s is None else acquire_timeout_s
        )
        self._pool: Optional[ThreadedConnectionPool] = None
        self._lock = threading.Lock()
        self._slots = threading.BoundedSemaphore(self._max_size)

    def _get_pool(self) -> ThreadedConnectionPool:
        pool = self._pool
        if pool is not None:
            return pool
        with self._lock:
            if self._pool is None:
                self._pool = self._init_pool()
            return self._pool

    def _init_pool(self) -> ThreadedConnectionPool:
        logger.info(
            "Initializing connection pool to %s:%s/%s (min=%d, max=%d)",
            self._config.host,
            self._config.port,
            self._config.dbname,
            self._min_size,
            self._max_size,
        )
        try:
            pool = ThreadedConnectionPool(
                self._min_size,
                self._max_size,
                self._config.dsn(),
                connect_timeout=self._connect_timeout_s,
            )
        except psycopg2.Error as exc:
            raise StorageUnavailableError(
                "failed to initialize a connection pool"
            ) from exc

        try:
            _ping_pool(pool)
        except StorageUnavailableError:
            pool.closeall()
            raise
        return pool

    def acquire(self) -> PhoneDirectory:
        pool = self._get_pool()
        return PsycopgPhoneDirectory(
            self._checkout(pool),
            release=lambda connection: self._put_back(pool, connection),
        )

    def _checkout(self, pool: ThreadedConnectionPool):
        if not self._slots.acquire(timeout=self._acquire_timeout_s):
            raise StorageUnavailableError(
                f"no pooled connection became free within {self._acquire_timeout_s}s"
            )
        try:
            return pool.getconn()
        except psycopg2.Error as exc:
            self._slots.release()
            raise StorageUnavailableError(
                "failed to get a connection from the pool"
            ) from exc

    def _put_back(self, pool: ThreadedConnectionPool, connection) -> None:
        try:
            if pool is not self._pool or pool.closed:
                connection.close()
                return
            pool.putconn(connection, close=bool(connection.closed))
        finally:
            self._slots.release()

    def ping(self) -> None:
        pool = self._get_pool()
        connection = self._checkout(pool)
        try:
            _ping_connection(connection)
        finally:
            self._put_back(pool, connection)

    def close(self) -> None:
        with self._lock:
            pool, self._pool = self._pool, None
        if pool is not None and not pool.closed:
            pool.closeall()
            logger.info("Connection pool closed.")


class OrmDirectoryProvider(DirectoryProvider):
    """Opens a SQLAlchemy session per handle on a lazily built engine."""

    def __init__(
        self,
        config: ConnectionConfig,
        connect_timeout_s: int = 1,
        pool_size: int = 5,
    ) -> None:
        self._config = config
        self._connect_timeout_s = connect_timeout_s
        self._pool_size = max(pool_size, 1)
        self._engine: Optional[Engine] = None
        self._lock = threading.Lock()

    def _get_engine(self) -> Engine:
        engine = self._engine
        if engine is not None:
            return engine
        with self._lock:
            if self._engine is None:
                self._engine = self._init_engine()
            return self._engine

    def _init_engine(self) -> Engine:
        logger.info(
            "Initializing SQLAlchemy engine for %s:%s/%s",
            self._config.host,
            self._config.port,
            self._config.dbname,
        )
        engine = create_engine(
            self._config.sqlalchemy_url(),
            pool_pre_ping=True,
            pool_size=self._pool_size,
            pool_timeout=self._connect_timeout_s,
            connect_args={"connect_timeout": self._connect_timeout_s},
        )
        try:
            _ping_engine(engine)
        except StorageUnavailableError:
            engine.dispose()
            raise
        return engine

    def acquire(self) -> PhoneDirectory:
        session = Session(self._get_engine())
        try:
            session.connection()
        except SQLAlchemyError as exc:
            session.close()
            raise StorageUnavailableError(
                "failed to open a database session"
            ) from exc
        return OrmPhoneDirectory(session)

    def ping(self) -> None:
        _ping_engine(self._get_engine())

    def close(self) -> None:
        with self._lock:
            engine, self._engine = self._engine, None
        if engine is not None:
            engine.dispose()
            logger.info("SQLAlchemy engine disposed.")


def _ping_connection(connection) -> None:
    try:
        with connection.cursor() as cur:
            cur.execute(PING_SQL)
            cur.fetchone()
        connection.rollback()
    except psycopg2.Error as exc:
        raise StorageUnavailableError("failed to ping the database") from exc


def _ping_pool(pool: ThreadedConnectionPool) -> None:
    try:
        connection = pool.getconn()
    except psycopg2.Error as exc:
        raise StorageUnavailableError(
            "failed to get a connection from the pool"
        ) from exc
    try:
        _ping_connection(connection)
    finally:
        pool.putconn(connection, close=bool(connection.closed))


def _ping_engine(engine: Engine) -> None:
    try:
        with engine.connect() as conn:
            conn.execute(text(PING_SQL))
    except SQLAlchemyError as exc:
        raise StorageUnavailableError("failed to ping the database") from exc


def build_directory_provider(settings: Settings) -> DirectoryProvider:
    """Build the provider selected by ``settings.storage_backend``.

    Nothing connects here; shared resources are created on first use.
    """
    config = settings.connection_config()
    timeout = settings.connect_timeout_whole_seconds()

    if settings.storage_backend == "per_request":
        provider: DirectoryProvider = PerRequestDirectoryProvider(config, timeout)
    elif settings.storage_backend == "orm":
        provider = OrmDirectoryProvider(
            config, timeout, pool_size=settings.pool_max_size
        )
    else:
        provider = PooledDirectoryProvider(
            config,
            timeout,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
        )

    logger.info(
        "Using %s directory provider for %r", settings.storage_backend, config
    )
    return provider
