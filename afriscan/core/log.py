# afriscan/core/log.py
"""
Package logging: stderr plus a best-effort rotating file under ./logs.

Environment:
  AFRISCAN_DEBUG=1        → DEBUG level (default INFO)
  AFRISCAN_LOG_DIR=<dir>  → log directory (default ./logs)
  AFRISCAN_LOG_FILE=0     → disable the file handler
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

_ROOT_NAME = "afriscan"
_CONFIGURED = False

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_DATEFMT = "(%Y-%m-%d %H:%M:%S)"


def _truthy(name: str, default: str = "") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _configure_root() -> logging.Logger:
    """Attach handlers to the package root logger once."""
    global _CONFIGURED
    root = logging.getLogger(_ROOT_NAME)
    if _CONFIGURED:
        return root

    root.setLevel(logging.DEBUG if _truthy("AFRISCAN_DEBUG") else logging.INFO)
    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    # Avoid duplicate handlers if reloaded in REPL/tests
    if not root.handlers:
        stream = logging.StreamHandler(sys.stderr)
        stream.setFormatter(formatter)
        root.addHandler(stream)

        if _truthy("AFRISCAN_LOG_FILE", "1"):
            log_path = os.path.join(os.getenv("AFRISCAN_LOG_DIR", "logs"), "afriscan.log")
            try:
                os.makedirs(os.path.dirname(log_path), exist_ok=True)
                handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
                handler.setFormatter(formatter)
                root.addHandler(handler)
            except OSError:
                # stderr keeps working without the file handler
                pass

    _CONFIGURED = True
    return root


def get_logger(name: str) -> logging.Logger:
    """Return a child of the `afriscan` logger (module names are used as-is when already namespaced)."""
    _configure_root()
    if name == _ROOT_NAME or name.startswith(f"{_ROOT_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_NAME}.{name}")
