from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SessionPhase = Literal["intro", "main_loop", "ended"]
EndingKind = Literal["losing", "retribution", "hero"]
Channel = Literal["dialogue", "player_log"]

ENDING_KINDS: tuple[EndingKind, EndingKind, EndingKind] = ("losing", "retribution", "hero")

METER_MIN = 0.0
METER_MAX = 100.0


class StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)


class DialogueNode(StrictModel):
    id: str = Field(min_length=1)
    speaker: str = ""
    text: str
    portrait: str | None = None
    next: str | None = None


class PlayerLogNode(StrictModel):
    id: str = Field(min_length=1)
    text: str
    next_button_label: str = Field(default="", alias="nextButtonLabel")
    sound_effect: str | None = Field(default=None, alias="soundEffect")
    pitch: float = Field(default=1.0, ge=-3.0, le=3.0)
    next: str | None = None


class EndingEntries(StrictModel):
    losing: str = Field(min_length=1)
    retribution: str = Field(min_length=1)
    hero: str = Field(min_length=1)

    def entry_for(self, ending: EndingKind) -> str:
        return getattr(self, ending)


class StoryManifest(StrictModel):
    title: str = "Branching Corpses"
    intro: str = Field(min_length=1)
    main: str = Field(min_length=1)
    player_log: str = Field(alias="playerLog", min_length=1)
    endings: EndingEntries
    losing_player_log: str | None = Field(default=None, alias="losingPlayerLog")


def clamp_meter(value: float) -> float:
    return max(METER_MIN, min(METER_MAX, float(value)))
