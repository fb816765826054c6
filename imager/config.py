"""
Typed reads of the environment (and of a .env file, via python-dotenv).
Malformed values raise ConfigError so the CLI reports them like bad flags.
"""

from __future__ import annotations

import math
import os
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigError

# Load environment variables
load_dotenv()


def env_int(name: str, default: int, minimum: Optional[int] = None) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as err:
        raise ConfigError(name, raw, "an integer") from err
    if minimum is not None and value < minimum:
        raise ConfigError(name, raw, f"an integer >= {minimum}")
    return value


def env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as err:
        raise ConfigError(name, raw, "a number") from err
    if not math.isfinite(value):
        raise ConfigError(name, raw, "a finite number")
    return value
