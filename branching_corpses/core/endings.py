from __future__ import annotations

from dataclasses import dataclass

from .models import EndingKind


@dataclass(frozen=True, slots=True)
class EndingResolver:
    losing_max: float = 0.0
    hero_min: float = 20.0

    def __post_init__(self) -> None:
        if self.hero_min <= self.losing_max:
            raise ValueError(
                f"hero_min ({self.hero_min}) must be greater than losing_max ({self.losing_max})."
            )

    def resolve(self, final_value: float) -> EndingKind:
        if final_value <= self.losing_max:
            return "losing"
        if final_value < self.hero_min:
            return "retribution"
        return "hero"


def resolve_ending(final_value: float, losing_max: float = 0.0, hero_min: float = 20.0) -> EndingKind:
    return EndingResolver(losing_max=losing_max, hero_min=hero_min).resolve(final_value)
