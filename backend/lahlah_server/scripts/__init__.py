"""Administrative Scripts — one-shot command-line entry points.

Invariants:
    - Each script configures logging itself and exits with an explicit status
    - Errors are handled and reported here; nothing escapes as a traceback
"""

import logging
import sys

from pydantic import ValidationError

from lahlah_server.config import Settings, get_settings
from lahlah_server.core.errors import ConfigError
from lahlah_server.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2


def load_script_settings() -> Settings:
    """Settings for a script run; invalid configuration exits with status 2."""
    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging("INFO", "text")
        error = ConfigError(f"Invalid configuration: {e}")
        logger.error(error.message, extra={"error_code": error.code})
        sys.exit(EXIT_CONFIG_ERROR)
    setup_logging(settings.log_level, "text")
    return settings
