"""Root conftest — shared test configuration.

Invariants:
    - Every test starts from an environment without lahlah settings
    - The cached Settings instance is cleared around every test
"""

import pytest

from lahlah_server.config import get_settings

SETTINGS_ENV_VARS = (
    "DB_HOST", "DB_PORT", "DB_USER", "DB_PASSWORD", "DB_NAME",
    "DB_WAIT_FOR_CONNECTIONS", "DB_CONNECTION_LIMIT", "DB_QUEUE_LIMIT",
    "SERVER_PORT", "CORS_ORIGINS", "LOG_LEVEL", "LOG_FORMAT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
