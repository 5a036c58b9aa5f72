from __future__ import annotations

import random

import pytest

from branching_corpses.core.meter import ResourceMeter


def test_decay_and_gain_stay_within_bounds_for_any_sequence() -> None:
    rng = random.Random(4242)
    meter = ResourceMeter(value=50.0, decay_per_tick=7, gain_per_event=6.5)
    for _ in range(2000):
        roll = rng.random()
        if roll < 0.4:
            meter.decay()
        elif roll < 0.7:
            meter.gain()
        elif roll < 0.85:
            meter.decay(rng.uniform(0, 150))
        else:
            meter.gain(rng.uniform(0, 150))
        assert 0.0 <= meter.snapshot() <= 100.0


def test_exhausted_fires_once_per_zero_crossing() -> None:
    fired: list[float] = []
    meter = ResourceMeter(value=50.0, decay_per_tick=25)
    meter.on_exhausted = lambda: fired.append(meter.snapshot())

    assert meter.decay() == 25.0
    assert fired == []
    assert meter.decay() == 0.0
    assert fired == [0.0]

    for _ in range(4):
        meter.decay()
    assert fired == [0.0]

    meter.gain(10)
    meter.decay()
    assert fired == [0.0, 0.0]


def test_overshooting_decay_saturates_at_zero() -> None:
    fired: list[bool] = []
    meter = ResourceMeter(value=3.0, decay_per_tick=25, on_exhausted=lambda: fired.append(True))
    assert meter.decay() == 0.0
    assert fired == [True]


def test_gain_saturates_at_hundred() -> None:
    meter = ResourceMeter(value=97.0, gain_per_event=8)
    assert meter.gain() == 100.0
    assert meter.gain() == 100.0


def test_on_change_only_fires_when_value_changes() -> None:
    changes: list[float] = []
    meter = ResourceMeter(value=100.0, decay_per_tick=5, gain_per_event=4, on_change=changes.append)
    meter.gain()
    meter.decay()
    meter.decay(0)
    meter.gain()
    assert changes == [95.0, 99.0]


def test_initial_value_is_clamped() -> None:
    assert ResourceMeter(value=150.0).snapshot() == 100.0
    assert ResourceMeter(value=-4.0).snapshot() == 0.0


def test_negative_amounts_are_rejected() -> None:
    meter = ResourceMeter(value=50.0)
    with pytest.raises(ValueError, match="non-negative"):
        meter.decay(-1)
    with pytest.raises(ValueError, match="non-negative"):
        meter.gain(-1)
    with pytest.raises(ValueError, match="decay_per_tick"):
        ResourceMeter(decay_per_tick=-2)
