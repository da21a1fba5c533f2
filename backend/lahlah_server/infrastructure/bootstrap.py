"""Database Bootstrap — one-shot creation of the database and its tables.

Invariants:
    - Uses its own NullPool engine without a selected database; never the shared pool
    - Only SchemaDocument.structural_statements are executed; the document's
      CREATE DATABASE / USE statements are replaced by the configured name
    - The connection and engine are released on every exit path
    - Failures are logged with their hint and returned, never raised
    - Running twice against the same target leaves the table set unchanged

Design Decisions:
    - Structural statements run one at a time on a single connection rather
      than as one multi-statement batch, so a failing statement is reported
      on its own and no driver multi-statement flag is needed
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from lahlah_server.config import PoolConfig
from lahlah_server.core.classify_errors import classify_database_error
from lahlah_server.core.errors import BootstrapError, ErrorContext
from lahlah_server.db.schema_document import SCHEMA_PATH, SchemaDocument, load_schema

logger = logging.getLogger(__name__)

EngineFactory = Callable[[PoolConfig], AsyncEngine]

_RAW = {"no_parameters": True}


def create_admin_engine(config: PoolConfig) -> AsyncEngine:
    """Engine for administrative DDL: no database selected, no pooling."""
    return create_async_engine(config.url(with_database=False), poolclass=NullPool)


@dataclass
class BootstrapResult:
    """Outcome of one initialize_database() run."""
    database: str
    tables: list[str] = field(default_factory=list)
    error: BootstrapError | None = None

    @property
    def success(self) -> bool:
        return self.error is None


async def ensure_database(conn: AsyncConnection, name: str) -> None:
    """CREATE DATABASE IF NOT EXISTS, then USE it."""
    quoted = conn.dialect.identifier_preparer.quote_identifier(name)
    await conn.exec_driver_sql(f"CREATE DATABASE IF NOT EXISTS {quoted}", execution_options=_RAW)
    await conn.exec_driver_sql(f"USE {quoted}", execution_options=_RAW)


async def apply_schema(conn: AsyncConnection, schema: SchemaDocument) -> int:
    """Execute the structural statements in order; returns how many ran."""
    for statement in schema.structural_statements:
        await conn.exec_driver_sql(statement, execution_options=_RAW)
    return len(schema.structural_statements)


def table_schema(conn: AsyncConnection, name: str) -> str | None:
    """Schema to scope the table listing to.

    MySQL reflection needs the database named explicitly because the admin
    engine connects without one; single-namespace dialects take None.
    """
    return name if conn.dialect.name == "mysql" else None


async def list_tables(conn: AsyncConnection, schema: str | None = None) -> list[str]:
    return await conn.run_sync(
        lambda sync_conn: inspect(sync_conn).get_table_names(schema=schema),
    )


class DatabaseBootstrapper:
    """Creates the configured database and its tables if absent."""

    def __init__(
        self,
        config: PoolConfig,
        schema: SchemaDocument | None = None,
        schema_path: str | Path = SCHEMA_PATH,
        engine_factory: EngineFactory = create_admin_engine,
    ):
        self.config = config
        self._schema = schema
        self._schema_path = Path(schema_path)
        self._engine_factory = engine_factory

    async def initialize_database(self) -> BootstrapResult:
        name = self.config.database
        context = ErrorContext(database=name, host=self.config.host)
        logger.info("Initializing database...")

        engine = self._engine_factory(self.config)
        step = "connect"
        try:
            async with engine.connect() as conn:
                step = "create_database"
                logger.info(f"Creating database '{name}' if not exists...", extra={"database": name})
                await ensure_database(conn, name)

                step = "load_schema"
                schema = self._schema or await load_schema(self._schema_path)

                step = "create_tables"
                logger.info("Creating tables...")
                count = await apply_schema(conn, schema)
                await conn.commit()
                logger.info(f"Tables created successfully ({count} statements)")

                step = "verify"
                tables = await list_tables(conn, table_schema(conn, name))
        except SQLAlchemyError as e:
            cause = classify_database_error(e, context)
            return self._failed(name, BootstrapError(cause.message, step, cause, context))
        except (OSError, ValueError) as e:
            # unreadable or undecodable schema file
            return self._failed(name, BootstrapError(str(e), step, context=context))
        finally:
            await engine.dispose()

        logger.info("Tables in database:", extra={"table_count": len(tables)})
        for table in tables:
            logger.info(f"   - {table}")
        logger.info("Database initialization complete!")
        return BootstrapResult(name, tables)

    def _failed(self, name: str, error: BootstrapError) -> BootstrapResult:
        logger.error(
            f"Error initializing database: {error.message}",
            extra={"error_code": error.cause.code if error.cause else error.code},
        )
        if error.hint:
            logger.error(f"Hint: {error.hint}", extra={"hint": error.hint})
        return BootstrapResult(name, error=error)
