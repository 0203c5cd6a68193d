"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cache entries with probabilistic early expiration (XFetch).

Any reader may volunteer to recompute a value before it really expires. Each
check draws `r` in (0, 1] and treats the entry as expired when

    now + delta * beta * -ln(r) >= expiry

`delta` is the time the value took to compute and `beta` scales how eagerly
entries expire early (> 1.0 earlier, < 1.0 later). The chance of early
expiration rises as `expiry` approaches, so readers of a hot key refresh it
at different moments instead of stampeding together at expiry.

Reference: Vattani, Chierichetti, Lowenstein, "Optimal Probabilistic Cache
Stampede Prevention", VLDB 8(8), 2015.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import timedelta
from typing import Generic, Literal, TypeVar

from .errors import XFetchConfigError
from .sampling import UniformSource, default_source
from .settings import DEFAULT_SETTINGS, XFetchSettings, validate_beta

logger = logging.getLogger("xfetch.entry")

T = TypeVar("T")

DurationLike = float | int | timedelta

ExpiryDecision = Literal["eternal", "fresh", "early", "expired"]

EXPIRED_DECISIONS: frozenset[ExpiryDecision] = frozenset({"early", "expired"})


def _to_seconds(value: DurationLike, *, name: str) -> float:
    if isinstance(value, timedelta):
        seconds = value.total_seconds()
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        seconds = float(value)
    else:
        raise XFetchConfigError(
            f"{name} must be seconds or a timedelta, got {type(value).__name__}"
        )
    if not math.isfinite(seconds):
        raise XFetchConfigError(f"{name} must be finite, got {value!r}")
    return seconds


def _neg_log(sample: float) -> float:
    # Zero, negative and NaN draws saturate to an unbounded horizon.
    if not sample > 0.0:
        return math.inf
    if sample >= 1.0:
        return 0.0
    return -math.log(sample)


@dataclass(frozen=True, slots=True)
class CacheEntryBuilder(Generic[T]):
    """
    Accumulates entry parameters before `build()`.

    Every `with_*` method returns a new builder and leaves the receiver
    unchanged, so calls chain without intermediate variables.
    """

    value: T
    delta_s: float
    beta: float = DEFAULT_SETTINGS.beta
    expires_at_s: float | None = None

    @classmethod
    def begin(
        cls,
        compute: Callable[[], T],
        *,
        settings: XFetchSettings | None = None,
    ) -> "CacheEntryBuilder[T]":
        """Run `compute` now and record its wall-clock time as the delta."""
        cfg = settings or DEFAULT_SETTINGS
        started = time.perf_counter()
        value = compute()
        elapsed_s = time.perf_counter() - started
        logger.debug("Computed cache value in %.6fs", elapsed_s)
        return cls(value=value, delta_s=elapsed_s, beta=cfg.beta)

    def with_beta(self, beta: float) -> "CacheEntryBuilder[T]":
        """
        Set the beta value.

        Beta > 1.0 favors eager early expiration, beta < 1.0 lazier early
        expiration. The default 1.0 suits most workloads.
        """
        return replace(self, beta=validate_beta(beta))

    def with_delta(self, f: Callable[[T], DurationLike]) -> "CacheEntryBuilder[T]":
        """
        Override the recompute cost with `f(value)`.

        Use this when the time measured by `begin` does not reflect the real
        cost, e.g. the value was computed asynchronously or elsewhere.
        """
        delta_s = _to_seconds(f(self.value), name="delta")
        if delta_s < 0.0:
            raise XFetchConfigError(f"delta must be >= 0, got {delta_s!r}")
        return replace(self, delta_s=delta_s)

    def with_ttl(self, f: Callable[[T], DurationLike]) -> "CacheEntryBuilder[T]":
        """
        Set the time to live to `f(value)`.

        Expiry is anchored to the moment this method runs, not to `build()`.
        Without a ttl the entry is eternal.
        """
        ttl_s = _to_seconds(f(self.value), name="ttl")
        return replace(self, expires_at_s=time.monotonic() + ttl_s)

    def build(self) -> "CacheEntry[T]":
        """Return an immutable `CacheEntry` with the accumulated parameters."""
        return CacheEntry(
            value=self.value,
            delta_s=self.delta_s,
            beta=self.beta,
            expires_at_s=self.expires_at_s,
        )


@dataclass(frozen=True, slots=True)
class CacheEntry(Generic[T]):
    """
    Immutable cached value with probabilistic early expiration.

    Example::

        entry = (
            CacheEntry.builder(lambda: expensive_computation())
            .with_ttl(lambda value: value.ttl_s)
            .build()
        )
        if entry.is_expired():
            ...  # recompute and replace the entry

    Entries hold no mutable state and can be stored as values in any map or
    LRU structure and checked from several threads at once.
    """

    value: T
    delta_s: float
    beta: float
    expires_at_s: float | None

    @staticmethod
    def builder(
        compute: Callable[[], T],
        *,
        settings: XFetchSettings | None = None,
    ) -> CacheEntryBuilder[T]:
        """Return a builder holding the result of `compute()`."""
        return CacheEntryBuilder.begin(compute, settings=settings)

    def horizon_s(self, sample: float) -> float:
        """Early-expiration horizon in seconds for one draw in (0, 1]."""
        gap = _neg_log(sample)
        if math.isinf(gap):
            return math.inf
        return self.delta_s * self.beta * gap

    def check_with(self, source: UniformSource) -> ExpiryDecision:
        """Classify this entry using one draw from `source`."""
        if self.expires_at_s is None:
            return "eternal"
        sample = source.sample()
        now = time.monotonic()
        if now >= self.expires_at_s:
            return "expired"
        if now + self.horizon_s(sample) >= self.expires_at_s:
            return "early"
        return "fresh"

    def check(self) -> ExpiryDecision:
        return self.check_with(default_source())

    def is_expired_with(self, source: UniformSource) -> bool:
        return self.check_with(source) in EXPIRED_DECISIONS

    def is_expired(self) -> bool:
        """
        Check whether the entry should be recomputed.

        With probabilistic early expiration this may return `True` before
        the entry has really expired.
        """
        return self.is_expired_with(default_source())

    def is_eternal(self) -> bool:
        """Return `True` when the entry was built without a ttl."""
        return self.expires_at_s is None

    def get(self) -> T:
        """Return the cached value."""
        return self.value

    def into_owned(self) -> T:
        """Hand the cached value to the caller, e.g. before dropping the entry."""
        return self.value
