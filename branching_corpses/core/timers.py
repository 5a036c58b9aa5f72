"""Elapsed-time timers polled once per tick. Nothing here blocks or sleeps."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class PeriodicTimer:
    interval: float
    elapsed: float = 0.0
    running: bool = False

    def start(self, fire_immediately: bool = False) -> bool:
        if self.running:
            return False
        self.running = True
        self.elapsed = self.interval if fire_immediately else 0.0
        return True

    def stop(self) -> None:
        self.running = False
        self.elapsed = 0.0

    def poll(self, dt: float) -> bool:
        """Accumulate ``dt`` and report whether the timer is due.

        A due timer restarts from zero; leftover time is dropped so a long
        frame never produces a burst of firings.
        """
        if not self.running:
            return False
        self.elapsed += max(0.0, dt)
        if self.elapsed >= self.interval:
            self.elapsed = 0.0
            return True
        return False


@dataclass(slots=True)
class CooldownTimer:
    duration: float
    elapsed: float = 0.0
    cooling: bool = False
    disabled: bool = False

    def __post_init__(self) -> None:
        if self.duration < 0:
            raise ValueError("Cooldown duration must be non-negative.")
        self.elapsed = self.duration

    @property
    def ready(self) -> bool:
        return not self.disabled and not self.cooling

    @property
    def progress(self) -> float:
        if self.duration <= 0 or not self.cooling:
            return 1.0
        return max(0.0, min(1.0, self.elapsed / self.duration))

    def trigger(self) -> bool:
        if not self.ready:
            return False
        if self.duration > 0:
            self.cooling = True
            self.elapsed = 0.0
        return True

    def tick(self, dt: float) -> None:
        if not self.cooling:
            return
        self.elapsed += max(0.0, dt)
        if self.elapsed >= self.duration:
            self.elapsed = self.duration
            self.cooling = False

    def disable(self) -> None:
        self.disabled = True
        self.cooling = False
