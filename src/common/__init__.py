"""
Where: `common` package.
What: ambient helpers shared by the engine and its runners (env parsing, settings, logging).
Why: keeps configuration and logging bootstrap out of the numerical code.
"""

from . import settings
from .logging import setup_default_logging

__all__ = [
    "settings",
    "setup_default_logging",
]
