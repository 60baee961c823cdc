"""
Logging setup for the batch runner, the CLI and the API.
JSON lines when APP_ENV=production, a readable single-line format otherwise.
Everything goes to stderr; stdout is reserved for CLI output.
"""

from __future__ import annotations

import logging
import sys

import json_log_formatter

from gi_atlas.config import get_settings

DEV_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"
DEV_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Server loggers that would otherwise drown out ingestion diagnostics
QUIET_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "uvicorn.error": logging.INFO,
    "watchfiles": logging.WARNING,
}


def _build_handler(production: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    if production:
        handler.setFormatter(json_log_formatter.JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(DEV_FORMAT, datefmt=DEV_DATEFMT))
    return handler


def setup_logging() -> None:
    """Configure the root logger from LOG_LEVEL / APP_ENV."""
    settings = get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    production = settings.env == "production"

    root = logging.getLogger()
    root.setLevel(level)
    if production:
        root.handlers = [_build_handler(production=True)]
    elif not root.handlers:
        root.addHandler(_build_handler(production=False))

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)
