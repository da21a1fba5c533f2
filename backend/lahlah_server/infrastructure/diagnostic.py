"""Connectivity Diagnostic — single-shot SELECT 1 + 1 probe through the pool.

Invariants:
    - Exactly one query attempt; no retries
    - Failures are returned as DiagnosticFailure carrying code, hint and raw message
"""

import logging
from dataclasses import dataclass
from typing import Any

from lahlah_server.core.errors import DatabaseError
from lahlah_server.infrastructure.database import ConnectionPoolManager

logger = logging.getLogger(__name__)

PROBE_SQL = "SELECT 1 + 1 AS solution"


@dataclass(frozen=True)
class DiagnosticSuccess:
    value: Any
    ok: bool = True


@dataclass(frozen=True)
class DiagnosticFailure:
    code: str
    hint: str | None
    message: str
    driver_code: int | None = None
    ok: bool = False


DiagnosticResult = DiagnosticSuccess | DiagnosticFailure


def exit_status(result: DiagnosticResult) -> int:
    return 0 if result.ok else 1


async def check_connection(pool: ConnectionPoolManager) -> DiagnosticResult:
    """Probe the database once and report what happened."""
    config = pool.config
    logger.info("Checking database connection...")
    logger.info(
        f"Trying to connect to database: [{config.database}] at [{config.host}:{config.port}]",
        extra={"database": config.database},
    )

    try:
        rows = await pool.query(PROBE_SQL)
    except DatabaseError as e:
        logger.error("Connection failed!")
        logger.error(f"Error details: {e.message}")
        logger.error(f"Code: {e.code}", extra={"error_code": e.code})
        if e.hint:
            logger.error(f"Hint: {e.hint}", extra={"hint": e.hint})
        return DiagnosticFailure(e.code, e.hint, e.message, e.driver_code)

    value = rows[0]["solution"]
    logger.info("Connection successful! Database is reachable.")
    logger.info(f"Result of test query (1 + 1): {value}")
    return DiagnosticSuccess(value)
