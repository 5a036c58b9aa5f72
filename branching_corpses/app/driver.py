from __future__ import annotations

import logging
from dataclasses import dataclass

from branching_corpses.core.session import StorySession
from branching_corpses.core.timers import PeriodicTimer

logger = logging.getLogger(__name__)

DEFAULT_FRAME_DT = 1.0 / 30.0


@dataclass(slots=True)
class HeadlessResult:
    ticks: int
    elapsed: float
    actions_attempted: int
    actions_accepted: int
    timed_out: bool


def run_headless(
    session: StorySession,
    dt: float = DEFAULT_FRAME_DT,
    max_seconds: float = 600.0,
    clicks_per_second: float = 0.0,
    skip_intro: bool = False,
) -> HeadlessResult:
    """Drive ``session`` with fixed frames and a metronome player until it finishes.

    The player presses the action button ``clicks_per_second`` times per second
    of game time; presses during the cooldown are rejected by the session.
    Once the ending is resolved the next-dialogue button is pressed every frame.
    """
    if dt <= 0:
        raise ValueError("dt must be positive.")

    clicker: PeriodicTimer | None = None
    if clicks_per_second > 0:
        clicker = PeriodicTimer(interval=1.0 / clicks_per_second)

    attempted = 0
    accepted = 0
    session.start()
    if skip_intro:
        session.skip_intro()

    while not session.finished and session.elapsed < max_seconds:
        session.tick(dt)
        if session.phase == "main_loop" and clicker is not None:
            clicker.start()
            if clicker.poll(dt):
                attempted += 1
                if session.player_action():
                    accepted += 1
        elif session.phase == "ended":
            session.next_dialogue()

    timed_out = not session.finished
    if timed_out:
        logger.warning("Headless run stopped after %.1fs in phase '%s'.", session.elapsed, session.phase)
    return HeadlessResult(
        ticks=session.ticks,
        elapsed=session.elapsed,
        actions_attempted=attempted,
        actions_accepted=accepted,
        timed_out=timed_out,
    )
