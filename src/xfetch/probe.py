"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Instrumented expiration checks and early-expiry rate estimation.
"""

from __future__ import annotations

import logging
from typing import Any

from .entry import EXPIRED_DECISIONS, CacheEntry, ExpiryDecision
from .errors import XFetchConfigError
from .metrics import ExpiryMetrics, NoOpExpiryMetrics
from .sampling import UniformSource, default_source

logger = logging.getLogger("xfetch.probe")

CHECKS_METRIC = "checks"


class ExpiryProbe:
    """
    Runs entry checks and reports each decision to a metrics sink.

    Counts land in the `checks` counter tagged with `decision` and `key`
    (empty when no key is passed), so the label set never changes. Early
    expirations are also logged at debug level.
    """

    def __init__(
        self,
        metrics: ExpiryMetrics | None = None,
        source: UniformSource | None = None,
    ) -> None:
        self._metrics = metrics or NoOpExpiryMetrics()
        self._source = source or default_source()

    def check(self, entry: CacheEntry[Any], *, key: str | None = None) -> ExpiryDecision:
        decision = entry.check_with(self._source)
        tags = {"decision": decision, "key": key or ""}
        self._metrics.incr(CHECKS_METRIC, tags=tags)
        if decision == "early":
            logger.debug(
                "Early expiration (key=%s, delta_s=%.6f, beta=%s)",
                key,
                entry.delta_s,
                entry.beta,
            )
        return decision

    def is_expired(self, entry: CacheEntry[Any], *, key: str | None = None) -> bool:
        return self.check(entry, key=key) in EXPIRED_DECISIONS


def estimate_early_expiry_rate(
    entry: CacheEntry[Any],
    samples: int,
    *,
    source: UniformSource | None = None,
) -> float:
    """Return the fraction of `samples` checks that report the entry expired."""
    if samples <= 0:
        raise XFetchConfigError(f"samples must be > 0, got {samples!r}")
    rng = source or default_source()
    expired = sum(1 for _ in range(samples) if entry.is_expired_with(rng))
    return expired / samples
