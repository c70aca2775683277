from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Optional

from lispy.errors import LispyConfigError


_DEFAULT_INT_BITS = 64
_DEFAULT_LOG_LEVEL = 'WARNING'
_DEFAULT_MAX_NESTING = 256


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise LispyConfigError(f"{var} must be an integer, got {raw!r}")


def get_int_bits() -> int:
    """Width of the signed range accepted for numeric literals."""
    bits = int_from_env('LISPY_INT_BITS', _DEFAULT_INT_BITS)
    if bits < 2:
        raise LispyConfigError(f"LISPY_INT_BITS must be at least 2, got {bits}")
    return bits


def get_int_range() -> tuple[int, int]:
    bits = get_int_bits()
    return -(1 << (bits - 1)), (1 << (bits - 1)) - 1


def get_log_level() -> int:
    name = os.environ.get('LISPY_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise LispyConfigError(f"Unknown log level {name!r}")
    return level


def get_prelude_path() -> Optional[Path]:
    raw = os.environ.get('LISPY_PRELUDE_PATH')
    if not raw or not raw.strip():
        return None
    return Path(raw.strip())


def get_max_nesting() -> int:
    """Deepest bracket nesting the parser accepts."""
    depth = int_from_env('LISPY_MAX_NESTING', _DEFAULT_MAX_NESTING)
    if depth < 1:
        raise LispyConfigError(f"LISPY_MAX_NESTING must be at least 1, got {depth}")
    return depth
