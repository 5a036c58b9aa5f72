from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .models import METER_MAX, METER_MIN, clamp_meter


@dataclass(slots=True)
class ResourceMeter:
    """Bounded struggle gauge.

    ``decay`` and ``gain`` saturate at the bounds. ``on_exhausted`` is edge
    triggered: it fires when a decay takes the value from above zero to zero,
    and stays quiet while the value remains at zero.
    """

    value: float = 50.0
    decay_per_tick: int = 2
    gain_per_event: float = 4.0
    on_exhausted: Callable[[], None] | None = None
    on_change: Callable[[float], None] | None = None

    def __post_init__(self) -> None:
        if self.decay_per_tick < 0:
            raise ValueError("decay_per_tick must be non-negative.")
        if self.gain_per_event < 0:
            raise ValueError("gain_per_event must be non-negative.")
        self.value = clamp_meter(self.value)

    def snapshot(self) -> float:
        return self.value

    def _set(self, value: float) -> bool:
        previous = self.value
        self.value = value
        if value == previous:
            return False
        if self.on_change:
            self.on_change(value)
        return True

    def decay(self, amount: float | None = None) -> float:
        step = self.decay_per_tick if amount is None else amount
        if step < 0:
            raise ValueError(f"Decay amount must be non-negative, got {step}.")
        previous = self.value
        self._set(max(self.value - step, METER_MIN))
        if previous > METER_MIN and self.value == METER_MIN and self.on_exhausted:
            self.on_exhausted()
        return self.value

    def gain(self, amount: float | None = None) -> float:
        step = self.gain_per_event if amount is None else amount
        if step < 0:
            raise ValueError(f"Gain amount must be non-negative, got {step}.")
        self._set(min(self.value + step, METER_MAX))
        return self.value
