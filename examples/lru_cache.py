"""
lru_cache.py: XFetch entries stored in a small LRU map.

The cache structure belongs to the caller; entries are plain values in it.
A reader that sees `is_expired()` recomputes and replaces the entry.

Usage:
    PYTHONPATH=src python examples/lru_cache.py
"""

from __future__ import annotations

import time
from collections import OrderedDict
from dataclasses import dataclass

from xfetch import CacheEntry


@dataclass(frozen=True)
class Quote:
    symbol: str
    price: float
    ttl_s: float


class LRUCache:
    def __init__(self, capacity: int) -> None:
        self._capacity = capacity
        self._rows: OrderedDict[str, CacheEntry[Quote]] = OrderedDict()

    def get(self, key: str) -> CacheEntry[Quote] | None:
        row = self._rows.get(key)
        if row is not None:
            self._rows.move_to_end(key)
        return row

    def put(self, key: str, entry: CacheEntry[Quote]) -> None:
        self._rows[key] = entry
        self._rows.move_to_end(key)
        while len(self._rows) > self._capacity:
            self._rows.popitem(last=False)


def load_quote(symbol: str) -> Quote:
    time.sleep(0.05)
    return Quote(symbol=symbol, price=float(len(symbol)), ttl_s=10.0)


def fresh_entry(symbol: str) -> CacheEntry[Quote]:
    return (
        CacheEntry.builder(lambda: load_quote(symbol))
        .with_ttl(lambda quote: quote.ttl_s)
        .build()
    )


def read_quote(cache: LRUCache, symbol: str) -> Quote:
    entry = cache.get(symbol)
    if entry is None or entry.is_expired():
        entry = fresh_entry(symbol)
        cache.put(symbol, entry)
    return entry.get()


def main() -> None:
    cache = LRUCache(capacity=2)
    for symbol in ("apple", "banana", "apple", "cherry", "banana"):
        quote = read_quote(cache, symbol)
        print(f"{quote.symbol} {quote.price:.2f}")


if __name__ == "__main__":
    main()
