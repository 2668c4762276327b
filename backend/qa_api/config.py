"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting has a default that works with the bundled docker-compose
      style setup (database host "db")
    - get_settings() is cached (lru_cache) — single instance per process
    - DATABASE_URL, when set, wins over the DB_* parts

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - URL assembled with sqlalchemy URL.create so passwords with reserved
      characters survive
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, env_ignore_empty=True,
    )

    # HTTP
    http_host: str = "0.0.0.0"
    http_port: int = 8080
    shutdown_grace_seconds: int = 5

    # Database
    database_url: str = ""
    db_host: str = "db"
    db_port: int = 5432
    db_user: str = "qa_user"
    db_password: str = "qa_password"
    db_name: str = "qa_db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms hand out postgres:// URLs; asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str):
            for prefix in ("postgresql://", "postgres://"):
                if v.startswith(prefix):
                    return v.replace(prefix, "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 10
    database_max_overflow: int = 10
    db_operation_timeout_seconds: float = 5.0
    auto_create_schema: bool = True

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def resolved_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql+asyncpg",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        ).render_as_string(hide_password=False)


@lru_cache
def get_settings() -> Settings:
    return Settings()
