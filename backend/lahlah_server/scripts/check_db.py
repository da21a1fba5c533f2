"""lahlah-check-db — verify the database is reachable (exit 0) or explain why not (exit 1)."""

import asyncio
import sys

from lahlah_server.config import PoolConfig
from lahlah_server.infrastructure.database import ConnectionPoolManager
from lahlah_server.infrastructure.diagnostic import (
    DiagnosticResult, check_connection, exit_status,
)
from lahlah_server.scripts import load_script_settings


async def run_check(config: PoolConfig) -> DiagnosticResult:
    pool = ConnectionPoolManager(config)
    try:
        return await check_connection(pool)
    finally:
        await pool.dispose()


def main() -> None:
    settings = load_script_settings()
    result = asyncio.run(run_check(settings.pool_config()))
    sys.exit(exit_status(result))


if __name__ == "__main__":
    main()
