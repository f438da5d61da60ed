from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List

from .repositories import MEMORY_STORAGE

DEFAULT_DB_PATH = "./data/todos.db"
DEFAULT_PORT = 8080


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - DB_PATH: path to the sqlite db file, or 'memory' for the in-process store. Default './data/todos.db'
    - PORT: port the HTTP server listens on. Default 8080
    - HOST: bind address. Default '0.0.0.0'
    - LOG_LEVEL: DEBUG, INFO, WARNING or ERROR. Default 'INFO'
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - ENABLE_TEST_ROUTES: 'true' to expose the bulk-delete route used by test suites (default: false)
    """

    db_path: str = DEFAULT_DB_PATH
    port: int = DEFAULT_PORT
    host: str = "0.0.0.0"
    log_level: str = "INFO"
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])
    enable_test_routes: bool = False

    @property
    def backend(self) -> str:
        """Name of the storage backend selected by db_path."""
        return "memory" if self.db_path.strip().lower() == MEMORY_STORAGE else "sqlite"


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_bool(value: str, default: bool = False) -> bool:
    v = value.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_port(value: str, default: int = DEFAULT_PORT) -> int:
    try:
        port = int(value.strip())
    except ValueError:
        return default
    if not 0 < port < 65536:
        return default
    return port


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    return Settings(
        db_path=_get_env("DB_PATH", DEFAULT_DB_PATH).strip(),
        port=_parse_port(_get_env("PORT", str(DEFAULT_PORT))),
        host=_get_env("HOST", "0.0.0.0").strip(),
        log_level=_get_env("LOG_LEVEL", "INFO").strip().upper(),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        enable_test_routes=_parse_bool(_get_env("ENABLE_TEST_ROUTES", "false"), False),
    )
