"""
Logging bootstrap for runners.

Notes:
- Every library module obtains its logger with `logging.getLogger(__name__)`
  and never configures handlers on import.
- The CLI calls `setup_default_logging`, which configures the root logger at
  most once and leaves an application's own configuration alone.
"""

from __future__ import annotations

import logging
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_level(level: Optional[int | str]) -> int:
    """Level name or number -> logging level; unknown names map to INFO.

    `None` reads `LOG_LEVEL` from `common.settings`.
    """
    if level is None:
        from . import settings

        level = settings.get().LOG_LEVEL
    if isinstance(level, str):
        value = logging.getLevelName(level.strip().upper())
        return value if isinstance(value, int) else logging.INFO
    return int(level)


def setup_default_logging(level: Optional[int | str] = None, fmt: str = DEFAULT_FORMAT) -> bool:
    """Configure the root logger unless it already has handlers.

    Returns True when a handler was installed.
    """
    root = logging.getLogger()
    if root.handlers:
        return False
    logging.basicConfig(level=resolve_level(level), format=fmt)
    return True


__all__ = ["DEFAULT_FORMAT", "resolve_level", "setup_default_logging"]
