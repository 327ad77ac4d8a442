"""Runtime settings for stackcalc, read from STACKCALC_* environment variables.

CLI options override whatever is loaded here.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_PRECISION = 10
DEFAULT_LOG_LEVEL = "WARNING"

# %g switches to exponent form above this; more digits than a double holds is noise
_MAX_PRECISION = 17


def parse_precision(raw: Optional[str], default: int = DEFAULT_PRECISION) -> int:
    """Parse a significant-digit count, clamped to 1..17. Bad input → default."""
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return max(1, min(value, _MAX_PRECISION))


def parse_log_level(raw: Optional[str], default: str = DEFAULT_LOG_LEVEL) -> int:
    """Turn a level name ('debug', 'INFO') into a logging constant. Bad input → default."""
    name = (raw or "").strip().upper() or default
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    return logging.getLevelName(default)


@dataclass(frozen=True)
class Settings:
    """Display and logging configuration."""

    precision: int = DEFAULT_PRECISION
    log_level: int = logging.WARNING
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> Settings:
        """Build settings from the process environment (or a given mapping)."""
        e = os.environ if env is None else env
        return cls(
            precision=parse_precision(e.get("STACKCALC_PRECISION")),
            log_level=parse_log_level(e.get("STACKCALC_LOG_LEVEL")),
            log_file=e.get("STACKCALC_LOG_FILE") or None,
        )
