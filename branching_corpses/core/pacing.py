from __future__ import annotations

from typing import Any, Callable, Literal

from .cursor import NarrativeCursor
from .timers import PeriodicTimer

PacingState = Literal["stopped", "running"]


class PacingController:
    """Timed auto-advance of a narrative cursor.

    Each firing advances the cursor, reports the advance to ``on_advance`` and
    then renders the new node. The listener may stop the controller, in which
    case the render is skipped.
    """

    def __init__(
        self,
        cursor: NarrativeCursor,
        render: Callable[[Any], None],
        on_advance: Callable[[NarrativeCursor], None] | None = None,
    ) -> None:
        self.cursor = cursor
        self._render = render
        self._on_advance = on_advance
        self._timer: PeriodicTimer | None = None
        self.state: PacingState = "stopped"

    @property
    def running(self) -> bool:
        return self.state == "running"

    def start(self, interval: float) -> bool:
        if self.state == "running":
            return False
        self.state = "running"
        self._timer = PeriodicTimer(interval=interval)
        self._timer.start()
        self._render(self.cursor.node)
        return True

    def stop(self) -> None:
        self.state = "stopped"
        if self._timer is not None:
            self._timer.stop()
            self._timer = None

    def tick(self, dt: float) -> bool:
        if self.state != "running" or self._timer is None:
            return False
        if not self._timer.poll(dt):
            return False
        self.cursor.advance()
        if self._on_advance:
            self._on_advance(self.cursor)
        if self.state == "running":
            self._render(self.cursor.node)
        return True
