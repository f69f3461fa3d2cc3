"""
Where: `common.settings`
What: typed snapshot of the engine's tunables, loaded from the environment at import.
Why: one place for defaults and types instead of `os.getenv` calls spread through the solver.
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_float, env_int, env_str


@dataclass
class _Settings:
    # Contrast solver
    SOLVER_TOLERANCE: float = 0.01
    SOLVER_MAX_ITER: int = 50

    # Gamut clamper
    CLAMP_ITERATIONS: int = 20

    # Background resolution
    FALLBACK_BACKGROUND: str = "#ffffff"
    SELF_REFERENCE_POLICY: str = "fallback"

    # Misc
    LOG_LEVEL: str = "INFO"


_settings = _Settings()


def reload_from_env() -> None:
    """Reload settings from the environment.

    - Numeric values go through `env_int` / `env_float` with lower bounds.
    - Strings are taken as-is; they are validated where they are consumed.
    """
    _settings.SOLVER_TOLERANCE = env_float("OKR_SOLVER_TOLERANCE", 0.01, min_value=0.0)
    _settings.SOLVER_MAX_ITER = env_int("OKR_SOLVER_MAX_ITER", 50, min_value=1) or 50
    _settings.CLAMP_ITERATIONS = env_int("OKR_CLAMP_ITERATIONS", 20, min_value=1) or 20

    _settings.FALLBACK_BACKGROUND = env_str("OKR_FALLBACK_BACKGROUND", "#ffffff")
    _settings.SELF_REFERENCE_POLICY = env_str("OKR_SELF_REFERENCE_POLICY", "fallback").lower()

    _settings.LOG_LEVEL = env_str("OKR_LOG_LEVEL", "INFO").upper()


def get() -> _Settings:
    """Return the current settings snapshot."""
    return _settings


# Initial load
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
