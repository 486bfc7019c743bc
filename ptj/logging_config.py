"""Logging setup shared by the API and the services."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Configure the root ``ptj`` logger once per process."""
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger("ptj")
    root.setLevel(level.upper())
    root.addHandler(handler)
    root.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    if not name.startswith("ptj"):
        name = f"ptj.{name}"
    return logging.getLogger(name)
