"""
Process-wide logging setup.

Modules log through `logging.getLogger(__name__)` with `event key=value`
messages; this module only decides where those records go.
"""

from __future__ import annotations

import logging
import os
import sys

_configured = False

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"


def configure_logging(level: str | None = None) -> None:
    """
    Install a single stdout handler on the root logger.

    Safe to call more than once (uvicorn reload, tests); only the first call
    adds a handler.
    """
    global _configured
    if _configured:
        return None

    resolved = (level or log_level()).upper()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(getattr(logging, resolved, logging.INFO))
    root.addHandler(handler)

    # asyncpg logs connection chatter at DEBUG.
    logging.getLogger("asyncpg").setLevel(logging.WARNING)

    _configured = True
    root.debug("logging_configured level=%s", resolved)
