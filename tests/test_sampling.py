from __future__ import annotations

import threading

from xfetch import (
    MAX_SAMPLE,
    MIN_SAMPLE,
    FixedSource,
    StepSource,
    ThreadLocalUniformSource,
    UniformSource,
    default_source,
)


def test_step_source_extremes():
    assert StepSource(0, 0).sample() == MIN_SAMPLE
    assert StepSource(2**64 - 1, 0).sample() == MAX_SAMPLE == 1.0


def test_step_source_steps_and_wraps():
    source = StepSource(0, 1 << 11)
    assert [source.sample() for _ in range(3)] == [MIN_SAMPLE, 2 * MIN_SAMPLE, 3 * MIN_SAMPLE]

    wrapping = StepSource(2**64 - 1, 1)
    assert wrapping.sample() == 1.0
    assert wrapping.sample() == MIN_SAMPLE


def test_fixed_source_returns_value_unchecked():
    source = FixedSource(-3.0)
    assert source.sample() == -3.0
    assert source.sample() == -3.0


def test_sources_satisfy_protocol():
    for source in (StepSource(0, 0), FixedSource(0.5), ThreadLocalUniformSource()):
        assert isinstance(source, UniformSource)


def test_default_source_stays_in_open_closed_interval():
    source = default_source()
    assert source is default_source()
    for _ in range(10000):
        value = source.sample()
        assert 0.0 < value <= 1.0


def test_thread_local_source_draws_from_each_thread():
    source = ThreadLocalUniformSource()
    results: list[float] = []
    lock = threading.Lock()

    def draw() -> None:
        values = [source.sample() for _ in range(200)]
        with lock:
            results.extend(values)

    threads = [threading.Thread(target=draw) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(results) == 800
    assert all(0.0 < value <= 1.0 for value in results)
