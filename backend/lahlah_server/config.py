"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every option has a default; the server starts with an empty environment
    - get_settings() is cached (lru_cache) — single instance per process
    - PoolConfig is frozen: connection_limit >= 1, queue_limit >= 0 (0 = unbounded)

Design Decisions:
    - .env.local is the file the frontend tooling already writes; environment
      variables take precedence over it
"""

from dataclasses import dataclass
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

DRIVERNAME = "mysql+aiomysql"


def validate_database_name(name: str) -> str:
    """Database names are restricted to unquoted MySQL identifier characters."""
    name = name.strip()
    if not name or not all(c.isalnum() or c in "_$" for c in name):
        raise ValueError(
            f"DB_NAME must contain only letters, digits, '_' or '$', got {name!r}",
        )
    return name


class Settings(BaseSettings):
    """Process settings read once from the environment and .env.local."""

    model_config = SettingsConfigDict(
        env_file=".env.local", case_sensitive=False, extra="ignore",
    )

    # Database
    db_host: str = "localhost"
    db_port: int = Field(3306, ge=1, le=65535)
    db_user: str = "root"
    db_password: str = ""
    db_name: str = "lahlah_os_db"
    db_wait_for_connections: bool = True
    db_connection_limit: int = Field(10, ge=1)
    db_queue_limit: int = Field(0, ge=0)

    # HTTP
    server_port: int = Field(5000, ge=1, le=65535)
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("db_host")
    @classmethod
    def host_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("DB_HOST cannot be empty")
        return v

    @field_validator("db_name")
    @classmethod
    def name_is_identifier(cls, v: str) -> str:
        return validate_database_name(v)

    @field_validator("log_format")
    @classmethod
    def known_log_format(cls, v: str) -> str:
        if v not in ("json", "text"):
            raise ValueError("LOG_FORMAT must be 'json' or 'text'")
        return v

    def pool_config(self) -> "PoolConfig":
        return PoolConfig(
            host=self.db_host,
            port=self.db_port,
            user=self.db_user,
            password=self.db_password,
            database=self.db_name,
            wait_for_connections=self.db_wait_for_connections,
            connection_limit=self.db_connection_limit,
            queue_limit=self.db_queue_limit,
        )


@dataclass(frozen=True)
class PoolConfig:
    """Connection pool options. Immutable after construction."""
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "lahlah_os_db"
    wait_for_connections: bool = True
    connection_limit: int = 10
    queue_limit: int = 0

    def __post_init__(self):
        if self.connection_limit < 1:
            raise ValueError(
                f"connection_limit must be at least 1, got {self.connection_limit}",
            )
        if self.queue_limit < 0:
            raise ValueError(
                f"queue_limit must be non-negative, got {self.queue_limit}",
            )

    def url(self, with_database: bool = True) -> URL:
        """SQLAlchemy URL for the aiomysql driver, optionally without a database."""
        return URL.create(
            DRIVERNAME,
            username=self.user,
            password=self.password or None,
            host=self.host,
            port=self.port,
            database=self.database if with_database else None,
        )

    def describe(self) -> str:
        """Target description safe for logs (no password)."""
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


@lru_cache
def get_settings() -> Settings:
    return Settings()
