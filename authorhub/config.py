"""Application configuration assembled from the environment."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

from .loader import env_int, env_string, load_env, must_env_int, must_env_string

_REQUIRED_DATABASE_KEYS = ("DB_HOST", "DB_USER", "DB_NAME", "DB_PASSWORD")


@dataclass
class ServerConfig:
    """HTTP server options."""

    env: str = "dev"  # "prod", "staging", "dev"
    port: int = 8080
    read_timeout: timedelta = timedelta(seconds=5)


@dataclass
class DatabaseConfig:
    """Relational database options."""

    host: str
    user: str
    password: str = field(repr=False)
    name: str
    port: int
    type: str = "mysql"  # "mysql", "postgresql"
    max_open_conns: int = 10
    max_idle_conns: int = 5


@dataclass
class Config:
    """Server and database configuration."""

    server: ServerConfig
    database: DatabaseConfig

    def __str__(self) -> str:
        return (
            f"Config{{Server: [Port: {self.server.port}], "
            f"DB: [Host: {mask_string(self.database.host)}, "
            f"User: {mask_string(self.database.user)}, "
            f"Name: {self.database.name}, Pass: ****]}}"
        )


def mask_string(s: str) -> str:
    """Hide all but the first character of ``s``; short values are hidden fully."""
    if len(s) <= 2:
        return "****"
    return s[:1] + "***"


def load() -> Config:
    """Build the configuration, reading ``.env`` first when it exists."""
    try:
        load_env("")
    except OSError:
        pass

    server = ServerConfig(
        env=env_string("APP_ENV", "dev"),
        port=env_int("PORT", 8080),
        read_timeout=timedelta(seconds=5),
    )
    required = {key: must_env_string(key) for key in _REQUIRED_DATABASE_KEYS}
    db_type = env_string("DB_TYPE", "mysql")
    port = must_env_int("DB_PORT")
    database = DatabaseConfig(
        required["DB_HOST"],
        required["DB_USER"],
        required["DB_PASSWORD"],
        required["DB_NAME"],
        port,
        db_type,
        env_int("DB_MAX_OPEN_CONNS", 10),
        env_int("DB_MAX_IDLE_CONNS", 5),
    )
    return Config(server=server, database=database)