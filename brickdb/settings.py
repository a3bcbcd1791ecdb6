"""Runtime configuration for brickDB.

Settings are read from ``BRICKDB_*`` environment variables (and an optional
``.env`` file in the working directory)::

    BRICKDB_PATH=app.db
    BRICKDB_TIMEOUT=10
    BRICKDB_FOREIGN_KEYS=true
    BRICKDB_LOG_SQL=true

Explicit arguments always win over the environment::

    from brickdb import BrickDBSettings, Database

    db = Database(settings=BrickDBSettings(path="app.db", log_sql=True))
"""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BrickDBSettings(BaseSettings):
    """Connection and diagnostics settings.

    Attributes:
        path: SQLite database file, or ``":memory:"`` for a private
            in-memory database.
        timeout: Seconds to wait on a locked database before failing.
        foreign_keys: Issue ``PRAGMA foreign_keys = ON`` when connecting.
        log_sql: Log every executed statement at DEBUG level.
    """

    model_config = SettingsConfigDict(
        env_prefix="BRICKDB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    path: str = Field(
        default=":memory:",
        description="SQLite database path or ':memory:'",
    )
    timeout: float = Field(
        default=5.0,
        gt=0,
        description="Seconds to wait on a locked database",
    )
    foreign_keys: bool = Field(
        default=True,
        description="Enforce foreign key constraints on the connection",
    )
    log_sql: bool = Field(
        default=False,
        description="Log compiled SQL and parameter counts at DEBUG level",
    )
