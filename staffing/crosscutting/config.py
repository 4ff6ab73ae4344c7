"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Decide the storage backend (DATABASE_URL present -> Postgres, else JSON files)
  - Provide defaults that match current behavior

Collaborators:
  - container.py: reads settings to build the record stores
  - infrastructure.db.pool: statement timeout
  - infrastructure.storage.file_lock: lock retry policy

Constraints:
  - No business logic, configuration only

Notes:
  - Singleton via lru_cache
  - Call get_settings.cache_clear() in tests after changing env vars
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        database_url: PostgreSQL connection string (empty -> file backend)
        data_dir: Directory holding the per-resource JSON files
        db_pool_min_size: Minimum pooled connections
        db_pool_max_size: Maximum pooled connections
        db_statement_timeout_ms: Per-statement timeout (0 disables)
        lock_retries: Lock-file acquisition attempts before giving up
        lock_retry_delay_ms: Sleep between lock-file attempts
        log_level: Root level for the structured logger
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage backend
    database_url: str = ""
    data_dir: str = "data"

    # Database - Connection Pool
    db_pool_min_size: int = 1
    db_pool_max_size: int = 5
    db_statement_timeout_ms: int = 30000  # 30 seconds

    # File backend - Write locking (60 x 25ms ~= 1.5s)
    lock_retries: int = 60
    lock_retry_delay_ms: int = 25

    # Observability
    log_level: str = "INFO"

    @field_validator("lock_retries", "lock_retry_delay_ms")
    @classmethod
    def lock_policy_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("lock retry settings must be greater than 0")
        return v

    @field_validator("db_pool_min_size")
    @classmethod
    def pool_min_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("db_pool_min_size must be >= 0")
        return v

    def validate_pool_params(self) -> None:
        """
        Cross-field validation: min pool size cannot exceed max pool size.
        Called explicitly after instantiation.
        """
        if self.db_pool_min_size > self.db_pool_max_size:
            raise ValueError(
                f"db_pool_min_size ({self.db_pool_min_size}) must be <= "
                f"db_pool_max_size ({self.db_pool_max_size})"
            )

    @property
    def uses_postgres(self) -> bool:
        return bool(self.database_url.strip())

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir).expanduser().resolve()

    @property
    def lock_retry_delay_seconds(self) -> float:
        return self.lock_retry_delay_ms / 1000.0


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If env vars are invalid
    """
    settings = Settings()
    settings.validate_pool_params()
    return settings
