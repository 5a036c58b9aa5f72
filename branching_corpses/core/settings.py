from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TimingSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    intro_interval: float = Field(default=3.0, gt=0)
    dialogue_interval: float = Field(default=4.0, gt=0)
    decay_interval: float = Field(default=1.0, gt=0)
    action_cooldown: float = Field(default=0.6, ge=0)


class StruggleSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    initial: float = Field(default=50.0, ge=0, le=100)
    decay_per_tick: int = Field(default=3, ge=0, le=25)
    gain_per_action: float = Field(default=4.0, ge=0, le=8)


class EndingSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    losing_max: float = 0.0
    hero_min: float = 20.0

    @model_validator(mode="after")
    def validate_order(self) -> "EndingSettings":
        if self.hero_min <= self.losing_max:
            raise ValueError("endings.hero_min must be greater than endings.losing_max.")
        return self


class SessionSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    timing: TimingSettings = Field(default_factory=TimingSettings)
    struggle: StruggleSettings = Field(default_factory=StruggleSettings)
    endings: EndingSettings = Field(default_factory=EndingSettings)

    def as_dict(self) -> dict[str, Any]:
        return json.loads(self.model_dump_json())


def merge_settings(payload: dict[str, Any] | None) -> dict[str, Any]:
    if not isinstance(payload, dict):
        payload = {}
    return SessionSettings.model_validate(payload).as_dict()


def default_settings() -> dict[str, Any]:
    return SessionSettings().as_dict()
