"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Entry defaults and explicit config loading.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass

from .errors import XFetchConfigError

DEFAULT_BETA = 1.0


def validate_beta(beta: float | str) -> float:
    """Return `beta` as float, rejecting non-finite or non-positive values."""
    try:
        value = float(beta)
    except (TypeError, ValueError) as exc:
        raise XFetchConfigError(f"beta must be a number, got {beta!r}") from exc
    if not math.isfinite(value) or value <= 0.0:
        raise XFetchConfigError(f"beta must be finite and > 0, got {beta!r}")
    return value


@dataclass(frozen=True, slots=True)
class XFetchSettings:
    """Defaults applied by `CacheEntry.builder` when nothing is overridden."""

    beta: float = DEFAULT_BETA

    def __post_init__(self) -> None:
        object.__setattr__(self, "beta", validate_beta(self.beta))

    @staticmethod
    def from_env() -> "XFetchSettings":
        """Load settings from environment variables."""
        raw = os.getenv("XFETCH_BETA")
        if raw is None or not raw.strip():
            return XFetchSettings()
        return XFetchSettings(beta=validate_beta(raw))


DEFAULT_SETTINGS = XFetchSettings()
