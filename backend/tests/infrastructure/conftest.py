"""Infrastructure fixtures — SQLite-backed engines and refusing fakes.

Invariants:
    - Each test gets its own SQLite file under tmp_path
    - Fake engines raise the same wrapped driver errors aiomysql produces
"""

import pymysql
import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool, NullPool


def sqlite_url(path) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture
def sqlite_path(tmp_path):
    return tmp_path / "lahlah.db"


@pytest.fixture
async def sqlite_engine(sqlite_path):
    engine = create_async_engine(sqlite_url(sqlite_path), poolclass=NullPool)
    yield engine
    await engine.dispose()


@pytest.fixture
async def queued_sqlite_engine(sqlite_path):
    """Engine whose own pool counts real checkouts; three connections, no overflow."""
    engine = create_async_engine(
        sqlite_url(sqlite_path),
        poolclass=AsyncAdaptedQueuePool,
        pool_size=3,
        max_overflow=0,
    )
    yield engine
    await engine.dispose()


@pytest.fixture
def sqlite_engine_factory(sqlite_path):
    """engine_factory for DatabaseBootstrapper; a fresh engine per run."""
    def factory(config):
        return create_async_engine(sqlite_url(sqlite_path), poolclass=NullPool)
    return factory


class _FailingConnect:
    def __init__(self, orig: Exception):
        self.orig = orig

    async def __aenter__(self):
        raise OperationalError("SELECT 1 + 1 AS solution", {}, self.orig)

    async def __aexit__(self, *exc_info):
        return False


class FailingEngine:
    """Stands in for an AsyncEngine whose every connect() fails."""

    def __init__(self, orig: Exception):
        self.orig = orig
        self.disposed = False

    def connect(self):
        return _FailingConnect(self.orig)

    async def dispose(self):
        self.disposed = True


@pytest.fixture
def refused_error() -> pymysql.err.OperationalError:
    return pymysql.err.OperationalError(
        2003, "Can't connect to MySQL server on '127.0.0.1' ([Errno 111] Connection refused)",
    )


@pytest.fixture
def access_denied_error() -> pymysql.err.OperationalError:
    return pymysql.err.OperationalError(
        1045, "Access denied for user 'root'@'localhost' (using password: YES)",
    )


@pytest.fixture
def bad_database_error() -> pymysql.err.OperationalError:
    return pymysql.err.OperationalError(1049, "Unknown database 'lahlah_os_db'")


@pytest.fixture
def make_failing_engine():
    return FailingEngine
