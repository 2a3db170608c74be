"""
Tests for the bar indicator and its atomic counter.
"""

from __future__ import annotations

import threading

import pytest

from pollbar.progress.core.bar import AtomicCounter, Bar, BarState


def _label(bar: Bar) -> str:
    return f"{bar.position}/{bar.target}"


@pytest.mark.parametrize("producers, increments", [(1, 10_000), (8, 2_500), (50, 1_000)])
def test_concurrent_advance_never_loses_increments(producers: int, increments: int) -> None:
    """Verify N threads advancing M times each land exactly on N*M."""
    bar = Bar(producers * increments, _label)
    start = threading.Barrier(producers)

    def produce() -> None:
        start.wait()
        for _ in range(increments):
            bar.advance()

    threads = [threading.Thread(target=produce) for _ in range(producers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert bar.position == producers * increments
    assert bar.is_finished()


def test_atomic_counter_returns_previous_value() -> None:
    counter = AtomicCounter(5)

    assert counter.add(3) == 5
    assert counter.value == 8


def test_new_bar_starts_unfinished_at_zero() -> None:
    bar = Bar(3, _label, name="job")

    assert bar.position == 0
    assert bar.target == 3
    assert not bar.is_finished()
    assert bar.snapshot() == BarState(name="job", position=0, target=3)


def test_zero_target_is_finished_immediately() -> None:
    assert Bar(0, _label).is_finished()


def test_advance_by_amount() -> None:
    bar = Bar(10, _label)
    bar.advance(4)
    bar.advance()

    assert bar.position == 5


def test_negative_advance_is_rejected() -> None:
    bar = Bar(10, _label)

    with pytest.raises(ValueError):
        bar.advance(-1)
    assert bar.position == 0


def test_invalid_construction_is_rejected() -> None:
    with pytest.raises(ValueError):
        Bar(-1, _label)
    with pytest.raises(ValueError):
        Bar(1, "not callable")


def test_render_uses_format_callback() -> None:
    bar = Bar(4, _label)
    bar.advance(2)

    assert bar.render() == "2/4"


def test_render_is_idempotent_for_unchanged_state() -> None:
    bar = Bar(4, _label)
    bar.advance()

    assert bar.render() == bar.render()


def test_from_template() -> None:
    bar = Bar.from_template(8, "{name}: {position}/{target} ({percent:.0f}%)", name="copy")
    bar.advance(2)

    assert bar.render() == "copy: 2/8 (25%)"


def test_state_percent_is_capped() -> None:
    assert BarState(name="", position=12, target=10).percent == 100.0
    assert BarState(name="", position=0, target=0).percent == 100.0
    assert BarState(name="", position=5, target=10).finished is False
