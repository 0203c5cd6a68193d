"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Metrics sinks for expiration checks.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from .errors import XFetchConfigError

logger = logging.getLogger("xfetch.metrics")


class ExpiryMetrics(Protocol):
    """Minimal metrics interface for expiration check instrumentation."""

    def incr(
        self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None
    ) -> None:
        """Increment a counter metric."""


class NoOpExpiryMetrics:
    """Default metrics sink when no metrics backend is provided."""

    def incr(
        self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None
    ) -> None:
        _ = name
        _ = value
        _ = tags


class PrometheusExpiryMetrics(ExpiryMetrics):
    """
    Prometheus-backed expiry metrics adapter.

    Requires `prometheus_client` package. Counters are created lazily, one
    per metric name and label set, in `registry` (the global default
    registry when omitted).
    """

    def __init__(self, *, namespace: str = "xfetch", registry: Any = None) -> None:
        try:
            from prometheus_client import REGISTRY, Counter
        except ModuleNotFoundError as exc:  # pragma: no cover
            raise RuntimeError(
                "PrometheusExpiryMetrics requires `prometheus_client` to be installed."
            ) from exc

        self._Counter = Counter
        self._namespace = namespace
        self._registry = registry if registry is not None else REGISTRY
        self._counters: dict[str, tuple[tuple[str, ...], Any]] = {}

    def incr(
        self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None
    ) -> None:
        label_names = tuple(sorted((tags or {}).keys()))
        row = self._counters.get(name)
        if row is None:
            logger.debug("Registering counter %s_%s %s", self._namespace, name, label_names)
            counter = self._Counter(
                name=name,
                documentation=f"xfetch metric {name}",
                namespace=self._namespace,
                labelnames=label_names,
                registry=self._registry,
            )
            self._counters[name] = (label_names, counter)
        else:
            registered, counter = row
            if registered != label_names:
                raise XFetchConfigError(
                    f"Metric '{name}' registered with labels {registered}, got {label_names}"
                )

        if label_names:
            label_values = [str((tags or {})[label]) for label in label_names]
            counter.labels(*label_values).inc(value)
        else:
            counter.inc(value)
