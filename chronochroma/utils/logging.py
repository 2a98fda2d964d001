"""
Logging helpers.

Modules obtain their logger with ``logging.getLogger(__name__)`` and never
configure handlers themselves. Applications that do not configure logging
can call :func:`setup_default_logging` once.
"""

from __future__ import annotations

import logging


def setup_default_logging(level: int | str = "INFO") -> None:
    """Apply a minimal logging configuration once.

    - no-op when the root logger already has handlers
    - meant to be called from an application entry point, never on import
    """
    if isinstance(level, str):
        lvl = getattr(logging, level.upper(), logging.INFO)
    else:
        lvl = int(level)

    root = logging.getLogger()
    if root.handlers:
        return
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


__all__ = ["setup_default_logging"]
