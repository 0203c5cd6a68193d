"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Uniform sample sources over the open-closed interval (0, 1].
"""

from __future__ import annotations

import random
import threading
from typing import Protocol, runtime_checkable

_U64_MASK = (1 << 64) - 1
_SCALE = 2.0**-53

MIN_SAMPLE = _SCALE
MAX_SAMPLE = 1.0


@runtime_checkable
class UniformSource(Protocol):
    """Capability drawing one uniform value in (0, 1] per call."""

    def sample(self) -> float: ...


class ThreadLocalUniformSource:
    """
    Default source backed by one OS-seeded `random.Random` per thread.

    Threads never share generator state, so concurrent checks need no lock.
    """

    def __init__(self) -> None:
        self._local = threading.local()

    def _rng(self) -> random.Random:
        rng = getattr(self._local, "rng", None)
        if rng is None:
            rng = random.Random()
            self._local.rng = rng
        return rng

    def sample(self) -> float:
        # random() is [0, 1); flip it onto (0, 1].
        return 1.0 - self._rng().random()


class StepSource:
    """
    Deterministic source stepping a 64-bit counter by `increment` per draw.

    Each state maps to `((state >> 11) + 1) * 2**-53`, so `StepSource(0, 0)`
    always yields `MIN_SAMPLE` and `StepSource(2**64 - 1, 0)` always yields
    `MAX_SAMPLE`. Not thread-safe; one instance per test.
    """

    def __init__(self, initial: int, increment: int) -> None:
        self._state = initial & _U64_MASK
        self._increment = increment & _U64_MASK

    def sample(self) -> float:
        value = ((self._state >> 11) + 1) * _SCALE
        self._state = (self._state + self._increment) & _U64_MASK
        return value


class FixedSource:
    """Source returning the same value on every draw, unchecked."""

    def __init__(self, value: float) -> None:
        self.value = value

    def sample(self) -> float:
        return self.value


_DEFAULT_SOURCE = ThreadLocalUniformSource()


def default_source() -> UniformSource:
    """Return the process-wide default source."""
    return _DEFAULT_SOURCE
