"""lahlah-init-db — create the database and its tables if they do not exist."""

import argparse
import asyncio
import dataclasses
import logging
import sys

from lahlah_server.config import validate_database_name
from lahlah_server.db.schema_document import SCHEMA_PATH
from lahlah_server.infrastructure.bootstrap import DatabaseBootstrapper
from lahlah_server.scripts import (
    EXIT_CONFIG_ERROR, EXIT_FAILURE, EXIT_OK, load_script_settings,
)

logger = logging.getLogger(__name__)


def create_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lahlah-init-db",
        description="Create the lahlah-os database and its tables (idempotent).",
    )
    parser.add_argument(
        "--schema",
        default=str(SCHEMA_PATH),
        help=f"Path to the SQL schema file (default: {SCHEMA_PATH})",
    )
    parser.add_argument(
        "--database",
        default=None,
        help="Database name to create (default: DB_NAME or lahlah_os_db)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = create_argument_parser().parse_args(argv)
    settings = load_script_settings()
    config = settings.pool_config()

    if args.database:
        try:
            config = dataclasses.replace(config, database=validate_database_name(args.database))
        except ValueError as e:
            logger.error(str(e))
            sys.exit(EXIT_CONFIG_ERROR)

    bootstrapper = DatabaseBootstrapper(config, schema_path=args.schema)
    result = asyncio.run(bootstrapper.initialize_database())
    sys.exit(EXIT_OK if result.success else EXIT_FAILURE)


if __name__ == "__main__":
    main()
