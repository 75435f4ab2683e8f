"""Library Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting has a default: importing the library never requires env vars
    - get_settings() is cached (lru_cache): single instance per process
    - Only the shell (services/, infrastructure/) reads settings; core/ receives values

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - MATCHER_DSL_ prefix: the library shares the environment with the host test suite
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MATCHER_DSL_", env_file=".env", case_sensitive=False,
        extra="ignore",
    )

    # Registry
    warn_on_redefine: bool = True

    # Default messages: truncate reprs of actual/expected (0 disables)
    repr_max_length: int = 0

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v

    @field_validator("repr_max_length")
    @classmethod
    def check_repr_max_length(cls, v: int) -> int:
        if v < 0:
            raise ValueError("repr_max_length cannot be negative")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
