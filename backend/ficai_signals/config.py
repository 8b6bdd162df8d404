"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - Every variable is prefixed FICAI_ (FICAI_PWD_PEPPER, FICAI_BETA_KEY, ...)
    - get_settings() is cached (lru_cache): single immutable instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - pwd_pepper and beta_key have no default: the process refuses to start without them
    - fichub_timeout_seconds bounds the whole upstream call and stays below any
      sane request deadline
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


def normalize_database_url(url: str) -> str:
    """Hosting platforms hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="FICAI_", case_sensitive=False,
        frozen=True,
    )

    # Database
    database_url: str = (
        "postgresql+asyncpg://ficai:ficai@db:5432/ficai"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: object) -> object:
        return normalize_database_url(v) if isinstance(v, str) else v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Accounts
    pwd_pepper: str
    password_hash_method: str = "scrypt"
    beta_key: str

    # Session cookie
    domain: str = "localhost"
    session_cookie_max_age_days: int = Field(400, ge=1)

    # Fic metadata lookup
    fichub_base_url: str = "https://fichub.net"
    fichub_timeout_seconds: float = Field(10.0, gt=0)

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
