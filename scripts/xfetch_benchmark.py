#!/usr/bin/env python3
"""
XFetch benchmark utility for per-operation latency characterization.

Latencies are per-operation means of each batch; the p50/p95 figures are
percentiles over those batch means.

Usage examples:
  PYTHONPATH=src python scripts/xfetch_benchmark.py
  PYTHONPATH=src python scripts/xfetch_benchmark.py --iterations 200000 --probe
"""

from __future__ import annotations

import argparse
import statistics
import time

from xfetch import CacheEntry, ExpiryProbe, PrometheusExpiryMetrics


def xfetch(value: int, probe: ExpiryProbe | None) -> int | None:
    entry = (
        CacheEntry.builder(lambda: value)
        .with_ttl(lambda _: 120.0)
        .with_delta(lambda _: 10.0)
        .build()
    )
    expired = probe.is_expired(entry) if probe is not None else entry.is_expired()
    if expired:
        return None
    return entry.get()


def run_benchmark(*, iterations: int, batch: int, use_probe: bool) -> None:
    probe = ExpiryProbe(metrics=PrometheusExpiryMetrics()) if use_probe else None
    batch_latencies: list[float] = []
    misses = 0

    started = time.perf_counter()
    remaining = iterations
    while remaining > 0:
        size = min(batch, remaining)
        batch_started = time.perf_counter()
        for i in range(size):
            if xfetch(i, probe) is None:
                misses += 1
        batch_latencies.append((time.perf_counter() - batch_started) / size)
        remaining -= size
    elapsed = time.perf_counter() - started

    p50 = statistics.median(batch_latencies)
    p95 = sorted(batch_latencies)[int(0.95 * (len(batch_latencies) - 1))]

    print(f"iterations={iterations}")
    print(f"probe={use_probe}")
    print(f"elapsed_s={elapsed:.3f}")
    print(f"ops_per_s={iterations / elapsed if elapsed > 0 else 0.0:.0f}")
    print(f"batch_mean_us={statistics.fmean(batch_latencies) * 1e6:.3f}")
    print(f"batch_mean_p50_us={p50 * 1e6:.3f}")
    print(f"batch_mean_p95_us={p95 * 1e6:.3f}")
    print(f"early_expirations={misses}")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="XFetch benchmark utility")
    parser.add_argument("--iterations", type=int, default=100000)
    parser.add_argument("--batch", type=int, default=1000)
    parser.add_argument(
        "--probe",
        action="store_true",
        help="Route checks through ExpiryProbe with Prometheus counters",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    run_benchmark(iterations=args.iterations, batch=args.batch, use_probe=args.probe)


if __name__ == "__main__":
    main()
