from __future__ import annotations

import logging
from dataclasses import dataclass

from .cursor import NarrativeCursor
from .endings import EndingResolver
from .loader import NarrativeStore
from .meter import ResourceMeter
from .models import DialogueNode, EndingKind, PlayerLogNode, SessionPhase
from .pacing import PacingController
from .settings import SessionSettings
from .timers import CooldownTimer, PeriodicTimer

logger = logging.getLogger(__name__)


class SessionListener:
    """Presentation boundary. Subclasses override the notifications they care about."""

    def render_node(self, node: DialogueNode | None) -> None:
        return

    def render_player_log(self, node: PlayerLogNode | None) -> None:
        return

    def render_meter(self, value: float) -> None:
        return

    def phase_changed(self, phase: SessionPhase) -> None:
        return

    def ending_resolved(self, ending: EndingKind, final_value: float) -> None:
        return

    def session_finished(self, ending: EndingKind) -> None:
        return


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    phase: SessionPhase
    started: bool
    meter_value: float
    dialogue_id: str | None
    player_log_id: str | None
    ending: EndingKind | None
    final_value: float | None
    finished: bool
    elapsed: float
    ticks: int


class StorySession:
    """One playthrough: intro cutscene, timed main loop, then the resolved ending.

    Driven by ``tick(dt)`` from an external loop. Within a tick the struggle
    decay runs before dialogue pacing, so exhaustion ends the loop before a
    stale dialogue advance is shown.
    """

    def __init__(
        self,
        store: NarrativeStore,
        settings: SessionSettings | None = None,
        listener: SessionListener | None = None,
    ) -> None:
        self.store = store
        self.settings = settings or SessionSettings()
        self.listener = listener or SessionListener()

        timing = self.settings.timing
        struggle = self.settings.struggle
        endings = self.settings.endings

        self.dialogue: NarrativeCursor[DialogueNode] = NarrativeCursor(store.dialogues, "dialogue")
        self.player_log: NarrativeCursor[PlayerLogNode] = NarrativeCursor(store.player_logs, "player_log")
        self.meter = ResourceMeter(
            value=struggle.initial,
            decay_per_tick=struggle.decay_per_tick,
            gain_per_event=struggle.gain_per_action,
            on_exhausted=self._on_exhausted,
            on_change=self.listener.render_meter,
        )
        self.resolver = EndingResolver(losing_max=endings.losing_max, hero_min=endings.hero_min)
        self.pacing = PacingController(
            self.dialogue,
            render=self.listener.render_node,
            on_advance=self._on_dialogue_advance,
        )
        self.cooldown = CooldownTimer(duration=timing.action_cooldown)
        self._intro_timer = PeriodicTimer(interval=timing.intro_interval)
        self._decay_timer = PeriodicTimer(interval=timing.decay_interval)

        self.phase: SessionPhase = "intro"
        self.started = False
        self.ending: EndingKind | None = None
        self.final_value: float | None = None
        self.end_reason: str | None = None
        self.finished = False
        self.elapsed = 0.0
        self.ticks = 0

    def start(self) -> bool:
        if self.started:
            return False
        self.started = True
        logger.info("Session started; playing intro cutscene.")
        self.dialogue.reset(self.store.intro_entry)
        self.listener.phase_changed("intro")
        self.listener.render_node(self.dialogue.node)
        self._intro_timer.start()
        return True

    def tick(self, dt: float) -> None:
        if not self.started:
            return
        self.elapsed += max(0.0, dt)
        self.ticks += 1

        if self.phase == "intro":
            self._tick_intro(dt)
        elif self.phase == "main_loop":
            self._tick_main_loop(dt)

    def _tick_intro(self, dt: float) -> None:
        if not self._intro_timer.poll(dt):
            return
        if self.dialogue.is_at_end():
            self._enter_main_loop(reason="intro_complete")
            return
        node = self.dialogue.advance()
        logger.debug("Intro advanced to '%s'.", node.id if node else None)
        self.listener.render_node(node)

    def _tick_main_loop(self, dt: float) -> None:
        self.cooldown.tick(dt)
        if self._decay_timer.poll(dt):
            logger.debug("Struggle decayed to %.2f.", self.meter.decay())
            if self.meter.snapshot() <= 0:
                # A meter configured to start empty never crosses zero.
                self._end_session(reason="exhausted")
        if self.phase != "main_loop":
            return
        self.pacing.tick(dt)

    def skip_intro(self) -> bool:
        if not self.started or self.phase != "intro":
            return False
        self._enter_main_loop(reason="skipped")
        return True

    def player_action(self) -> bool:
        if not self.started or self.phase != "main_loop":
            return False
        if not self.cooldown.trigger():
            return False
        self.meter.gain()
        if not self.player_log.is_at_end():
            self.listener.render_player_log(self.player_log.advance())
            if self.player_log.is_at_end():
                self._end_session(reason="player_log_end")
        return True

    def next_dialogue(self) -> bool:
        if self.phase != "ended" or self.finished:
            return False
        previous = self.dialogue.active
        self.dialogue.advance()
        if self.dialogue.active != previous:
            self.listener.render_node(self.dialogue.node)
        if self.dialogue.is_at_end():
            self.finished = True
            logger.info("Ending '%s' finished.", self.ending)
            self.listener.session_finished(self.ending)
        return True

    def _enter_main_loop(self, reason: str) -> None:
        if self.phase != "intro":
            return
        self._intro_timer.stop()
        self.phase = "main_loop"
        logger.info("Intro ended (%s); entering main loop.", reason)

        self.dialogue.reset(self.store.main_entry)
        self.player_log.reset(self.store.player_log_entry)
        self.listener.phase_changed("main_loop")
        self.listener.render_player_log(self.player_log.node)
        self.listener.render_meter(self.meter.snapshot())

        self._decay_timer.start(fire_immediately=True)
        self.pacing.start(self.settings.timing.dialogue_interval)

    def _on_exhausted(self) -> None:
        self._end_session(reason="exhausted")

    def _on_dialogue_advance(self, cursor: NarrativeCursor) -> None:
        if cursor.is_at_end():
            self._end_session(reason="dialogue_end")

    def _end_session(self, reason: str) -> None:
        if self.phase != "main_loop":
            return
        self.pacing.stop()
        self._decay_timer.stop()
        self.cooldown.disable()

        self.final_value = self.meter.snapshot()
        self.ending = self.resolver.resolve(self.final_value)
        self.end_reason = reason
        self.phase = "ended"
        logger.info(
            "Main loop ended (%s) with struggle %.2f; resolved '%s' ending.",
            reason,
            self.final_value,
            self.ending,
        )

        self.dialogue.reset(self.store.ending_entry(self.ending))
        self.listener.phase_changed("ended")
        self.listener.ending_resolved(self.ending, self.final_value)
        if self.ending == "losing" and self.store.losing_player_log_entry is not None:
            self.listener.render_player_log(self.player_log.reset(self.store.losing_player_log_entry))
        self.listener.render_node(self.dialogue.node)

    def snapshot(self) -> SessionSnapshot:
        dialogue_node = self.dialogue.node
        log_node = self.player_log.node
        return SessionSnapshot(
            phase=self.phase,
            started=self.started,
            meter_value=self.meter.snapshot(),
            dialogue_id=dialogue_node.id if dialogue_node else None,
            player_log_id=log_node.id if log_node else None,
            ending=self.ending,
            final_value=self.final_value,
            finished=self.finished,
            elapsed=self.elapsed,
            ticks=self.ticks,
        )
