#!/usr/bin/env python3
"""
Print how the early-expiry rate of one entry grows as its expiry nears.

Each line is `<elapsed seconds> <fraction of checks reporting expired>`.

Usage examples:
  PYTHONPATH=src python scripts/early_expiry_probability.py
  PYTHONPATH=src python scripts/early_expiry_probability.py --ttl-s 20 --beta 2.0
"""

from __future__ import annotations

import argparse
import time

from xfetch import CacheEntry, estimate_early_expiry_rate


def run_demo(
    *,
    compute_s: float,
    ttl_s: float,
    interval_s: float,
    steps: int,
    samples: int,
    beta: float,
) -> None:
    def compute() -> int:
        time.sleep(compute_s)
        return 42

    entry = (
        CacheEntry.builder(compute)
        .with_beta(beta)
        .with_ttl(lambda _: ttl_s)
        .build()
    )

    started = time.monotonic()
    for _ in range(steps):
        time.sleep(interval_s)
        rate = estimate_early_expiry_rate(entry, samples)
        print(f"{time.monotonic() - started:.1f} {rate:.3f}")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Early expiry probability demo")
    parser.add_argument("--compute-s", type=float, default=1.0)
    parser.add_argument("--ttl-s", type=float, default=60.0)
    parser.add_argument("--interval-s", type=float, default=0.5)
    parser.add_argument("--steps", type=int, default=120)
    parser.add_argument("--samples", type=int, default=1000)
    parser.add_argument("--beta", type=float, default=1.0)
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    run_demo(
        compute_s=args.compute_s,
        ttl_s=args.ttl_s,
        interval_s=args.interval_s,
        steps=args.steps,
        samples=args.samples,
        beta=args.beta,
    )


if __name__ == "__main__":
    main()
