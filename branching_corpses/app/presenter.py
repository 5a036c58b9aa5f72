from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from rich.console import Console

from branching_corpses.core.models import DialogueNode, EndingKind, PlayerLogNode, SessionPhase
from branching_corpses.core.session import SessionListener


@dataclass(slots=True)
class TimelineEntry:
    time: float
    kind: str
    message: str

    def format(self) -> str:
        return f"[{self.time:7.2f}s] {self.kind.upper():<8} {self.message}"

    def to_dict(self) -> dict[str, object]:
        return {"time": round(self.time, 6), "kind": self.kind, "message": self.message}


@dataclass(slots=True)
class TimelineRecorder(SessionListener):
    """Collects every session notification as a timestamped entry."""

    clock: Callable[[], float] = lambda: 0.0
    entries: list[TimelineEntry] = field(default_factory=list)
    record_meter: bool = False

    def _record(self, kind: str, message: str) -> TimelineEntry:
        entry = TimelineEntry(time=self.clock(), kind=kind, message=message)
        self.entries.append(entry)
        return entry

    def render_node(self, node: DialogueNode | None) -> None:
        if node is None:
            return
        speaker = node.speaker or "..."
        self._record("dialogue", f"{speaker}: {node.text}")

    def render_player_log(self, node: PlayerLogNode | None) -> None:
        if node is None:
            return
        label = f" [{node.next_button_label}]" if node.next_button_label else ""
        self._record("log", f"{node.text}{label}")

    def render_meter(self, value: float) -> None:
        if self.record_meter:
            self._record("struggle", f"{value:.2f}")

    def phase_changed(self, phase: SessionPhase) -> None:
        self._record("phase", phase)

    def ending_resolved(self, ending: EndingKind, final_value: float) -> None:
        self._record("ending", f"{ending} (struggle {final_value:.2f})")

    def session_finished(self, ending: EndingKind) -> None:
        self._record("finish", ending)


class ConsolePresenter(TimelineRecorder):
    """Prints the timeline with rich as it happens and mirrors it to the gameplay log."""

    def __init__(
        self,
        console: Console | None = None,
        gameplay_logger: logging.Logger | None = None,
        record_meter: bool = False,
    ) -> None:
        super().__init__(record_meter=record_meter)
        self.console = console or Console()
        self.gameplay_logger = gameplay_logger or logging.getLogger("branching_corpses.gameplay")

    def _record(self, kind: str, message: str) -> TimelineEntry:
        entry = super()._record(kind, message)
        self.console.print(entry.format(), markup=False)
        self.gameplay_logger.info("[%s] %s", entry.kind, entry.message)
        return entry
