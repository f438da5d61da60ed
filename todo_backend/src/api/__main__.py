"""
Run the todo backend with uvicorn.

Usage:
    python -m src.api

Host, port, storage and log level come from the environment (see settings.py).
"""
from __future__ import annotations

import uvicorn

from .logging_config import configure_logging
from .main import create_app
from .settings import get_settings


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
