"""
Configuration settings for tablepeek.

Uses Pydantic Settings to load environment variables (and an optional `.env`
file) for the database connection, logging, and the default set of tables to
dump. Command-line flags override these values by building a fresh copy via
`Settings.with_overrides`; the resulting instance is passed explicitly to the
connection factory and materializer rather than kept as global state.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DUMP_TABLES = ["ProgrammingLanguages", "Notes"]


class Settings(BaseSettings):
    # Database
    db_host: str = Field("localhost", alias="DB_HOST")
    db_port: int = Field(3306, alias="DB_PORT")
    db_user: str = Field("root", alias="DB_USER")
    db_password: str = Field("", alias="DB_PASSWORD")
    db_name: str = Field("", alias="DB_NAME")
    db_connect_timeout: int = Field(10, alias="DB_CONNECT_TIMEOUT")
    db_connect_attempts: int = Field(1, ge=1, alias="DB_CONNECT_ATTEMPTS")

    # Application
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Dump defaults
    dump_tables: List[str] = Field(
        default_factory=lambda: list(DEFAULT_DUMP_TABLES), alias="DUMP_TABLES"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    def with_overrides(self, **overrides: Any) -> "Settings":
        """
        Return a copy with the given fields replaced, skipping `None` values.

        CLI options default to `None` so that anything the user did not pass
        falls through to the environment/default value.
        """
        update = {key: value for key, value in overrides.items() if value is not None}
        if not update:
            return self
        return self.model_copy(update=update)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["DEFAULT_DUMP_TABLES", "Settings", "get_settings"]
