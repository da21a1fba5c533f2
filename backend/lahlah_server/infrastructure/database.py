"""Connection Pool Manager — bounded async connection pool with classified errors.

Invariants:
    - At most config.connection_limit connections are checked out at once
    - Saturated + wait_for_connections=False → PoolExhaustedError immediately
    - Saturated + queue_limit waiters already queued → PoolExhaustedError
    - A checked-out slot is returned on every exit path; callers never close
      pooled connections themselves
    - All SQLAlchemy/driver exceptions leave as DatabaseError subclasses
      (core/classify_errors.py)

Design Decisions:
    - Constructed explicitly and passed to its users; no module-level instance
    - The slot gate (asyncio.Semaphore) sits in front of the engine pool, which
      is sized to the same limit with max_overflow=0
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

from lahlah_server.config import PoolConfig
from lahlah_server.core.classify_errors import classify_database_error
from lahlah_server.core.errors import DatabaseError, ErrorContext, PoolExhaustedError

logger = logging.getLogger(__name__)


def create_pool_engine(config: PoolConfig) -> AsyncEngine:
    """Async engine whose pool matches the configured connection limit."""
    return create_async_engine(
        config.url(),
        pool_size=config.connection_limit,
        max_overflow=0,
        pool_pre_ping=True,
        pool_recycle=3600,
    )


class ConnectionPoolManager:
    """Owns a bounded set of reusable connections to one database."""

    def __init__(self, config: PoolConfig, engine: AsyncEngine | None = None):
        self.config = config
        self.engine = engine or create_pool_engine(config)
        self._slots = asyncio.Semaphore(config.connection_limit)
        self._checked_out = 0
        self._waiting = 0
        logger.info(
            f"Connection pool ready for {config.describe()} "
            f"(limit={config.connection_limit}, queue_limit={config.queue_limit}, "
            f"wait={config.wait_for_connections})",
        )

    @property
    def checked_out(self) -> int:
        return self._checked_out

    @property
    def waiting(self) -> int:
        return self._waiting

    def _context(self) -> ErrorContext:
        return ErrorContext(database=self.config.database, host=self.config.host)

    async def _reserve_slot(self) -> None:
        if self._slots.locked():
            if not self.config.wait_for_connections:
                raise PoolExhaustedError(
                    f"All {self.config.connection_limit} connections are in use",
                    context=self._context(),
                )
            if self.config.queue_limit and self._waiting >= self.config.queue_limit:
                raise PoolExhaustedError(
                    f"Connection queue is full ({self.config.queue_limit} waiting)",
                    context=self._context(),
                )
        self._waiting += 1
        try:
            await self._slots.acquire()
        finally:
            self._waiting -= 1
        self._checked_out += 1

    def _release_slot(self) -> None:
        self._checked_out -= 1
        self._slots.release()

    @asynccontextmanager
    async def acquire_connection(self) -> AsyncIterator[AsyncConnection]:
        """Check out one pooled connection for the duration of the block."""
        await self._reserve_slot()
        try:
            async with self.engine.connect() as conn:
                yield conn
        except SQLAlchemyError as e:
            error = classify_database_error(e, self._context())
            logger.error(
                f"DB error ({error.code}): {error.message}",
                extra={"error_code": error.code, "hint": error.hint},
            )
            raise error from e
        finally:
            self._release_slot()

    async def query(
        self, sql: str, params: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Run one statement and return its rows (empty for non-row statements)."""
        async with self.acquire_connection() as conn:
            result = await conn.execute(text(sql), params or {})
            rows = (
                [dict(row) for row in result.mappings()]
                if result.returns_rows else []
            )
            await conn.commit()
            return rows

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            await self.query("SELECT 1")
            return True
        except DatabaseError as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        """Close every pooled connection. Called once at process exit."""
        await self.engine.dispose()
        logger.info("Connection pool disposed")
