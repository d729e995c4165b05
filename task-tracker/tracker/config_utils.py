"""Environment lookups used by ``tracker.config``."""

from __future__ import annotations

import os
from typing import Optional

_TRUE = {"1", "true", "yes", "y", "on"}
_FALSE = {"0", "false", "no", "n", "off"}


def env_str(name: str, default: str) -> str:
    value = os.environ.get(name)
    return default if value is None else value.strip()


def env_optional_str(name: str, default: Optional[str] = None) -> Optional[str]:
    """Like env_str but treats an empty value as unset."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip() or default


def env_bool(name: str, default: bool) -> bool:
    """Parse a yes/no flag; unrecognised values give ``default``."""
    raw = (os.environ.get(name) or "").strip().lower()
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    return default
