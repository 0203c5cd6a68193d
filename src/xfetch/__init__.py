"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Probabilistic early expiration (XFetch) for cached values.

Each reader of a cached value independently decides, with a probability that
rises as expiry nears, to treat the value as expired and recompute it. This
spreads recomputation over time and prevents cache stampedes.

Quick start::

    from datetime import timedelta
    from xfetch import CacheEntry

    entry = (
        CacheEntry.builder(load_report)
        .with_ttl(lambda _: timedelta(minutes=5))
        .build()
    )
    if entry.is_expired():
        ...  # recompute, then store a fresh entry in your cache
    report = entry.get()
"""

from .entry import (
    EXPIRED_DECISIONS,
    CacheEntry,
    CacheEntryBuilder,
    DurationLike,
    ExpiryDecision,
)
from .errors import XFetchConfigError, XFetchError
from .metrics import ExpiryMetrics, NoOpExpiryMetrics, PrometheusExpiryMetrics
from .probe import CHECKS_METRIC, ExpiryProbe, estimate_early_expiry_rate
from .sampling import (
    MAX_SAMPLE,
    MIN_SAMPLE,
    FixedSource,
    StepSource,
    ThreadLocalUniformSource,
    UniformSource,
    default_source,
)
from .settings import DEFAULT_BETA, DEFAULT_SETTINGS, XFetchSettings

__all__ = [
    "CacheEntry",
    "CacheEntryBuilder",
    "DurationLike",
    "ExpiryDecision",
    "EXPIRED_DECISIONS",
    "XFetchError",
    "XFetchConfigError",
    "ExpiryMetrics",
    "NoOpExpiryMetrics",
    "PrometheusExpiryMetrics",
    "ExpiryProbe",
    "CHECKS_METRIC",
    "estimate_early_expiry_rate",
    "UniformSource",
    "ThreadLocalUniformSource",
    "StepSource",
    "FixedSource",
    "default_source",
    "MIN_SAMPLE",
    "MAX_SAMPLE",
    "XFetchSettings",
    "DEFAULT_SETTINGS",
    "DEFAULT_BETA",
]
