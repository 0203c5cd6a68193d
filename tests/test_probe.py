from __future__ import annotations

import logging
from collections.abc import Mapping

import pytest

from xfetch import (
    CHECKS_METRIC,
    CacheEntry,
    ExpiryProbe,
    FixedSource,
    StepSource,
    XFetchConfigError,
    estimate_early_expiry_rate,
)


class _RecordingMetrics:
    def __init__(self) -> None:
        self.rows: list[tuple[str, int, dict[str, str]]] = []

    def incr(
        self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None
    ) -> None:
        self.rows.append((name, value, dict(tags or {})))


def _entry(ttl_s: float | None = 120.0) -> CacheEntry[str]:
    builder = CacheEntry.builder(lambda: "payload").with_delta(lambda _: 10.0)
    if ttl_s is not None:
        builder = builder.with_ttl(lambda _: ttl_s)
    return builder.build()


def test_probe_records_decision_with_key():
    metrics = _RecordingMetrics()
    probe = ExpiryProbe(metrics=metrics, source=StepSource(0, 0))

    assert probe.check(_entry(), key="apple") == "early"
    assert metrics.rows == [(CHECKS_METRIC, 1, {"decision": "early", "key": "apple"})]


def test_probe_records_fresh_and_eternal():
    metrics = _RecordingMetrics()
    probe = ExpiryProbe(metrics=metrics, source=FixedSource(1.0))

    assert not probe.is_expired(_entry())
    assert not probe.is_expired(_entry(ttl_s=None))
    assert [row[2]["decision"] for row in metrics.rows] == ["fresh", "eternal"]
    assert [row[2]["key"] for row in metrics.rows] == ["", ""]


def test_probe_reports_real_expiry():
    probe = ExpiryProbe(source=FixedSource(1.0))
    assert probe.check(_entry(ttl_s=-1.0)) == "expired"
    assert probe.is_expired(_entry(ttl_s=-1.0))


def test_probe_logs_early_expiration(caplog):
    caplog.set_level(logging.DEBUG, logger="xfetch.probe")
    probe = ExpiryProbe(source=StepSource(0, 0))
    probe.check(_entry(), key="banana")
    assert "Early expiration" in caplog.text
    assert "banana" in caplog.text


def test_estimate_rate_extremes():
    entry = _entry()
    assert estimate_early_expiry_rate(entry, 50, source=FixedSource(1.0)) == 0.0
    assert estimate_early_expiry_rate(entry, 50, source=StepSource(0, 0)) == 1.0
    assert estimate_early_expiry_rate(_entry(ttl_s=None), 50, source=StepSource(0, 0)) == 0.0


def test_estimate_rate_alternating_source():
    # Alternates between the minimum draw and a draw just above 0.5.
    source = StepSource(0, 2**63)
    half = StepSource(2**63, 0).sample()
    assert half == pytest.approx(0.5)
    rate = estimate_early_expiry_rate(_entry(), 10, source=source)
    assert rate == 0.5


def test_estimate_rate_rejects_non_positive_samples():
    with pytest.raises(XFetchConfigError):
        estimate_early_expiry_rate(_entry(), 0)
