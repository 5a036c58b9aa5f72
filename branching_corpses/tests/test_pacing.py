from __future__ import annotations

from branching_corpses.core.cursor import NarrativeCursor
from branching_corpses.core.loader import build_arena
from branching_corpses.core.pacing import PacingController

from story_helpers import dialogue_chain


def _controller(count: int = 4, on_advance=None) -> tuple[PacingController, list[str | None]]:
    arena = build_arena("dialogue", dialogue_chain("main", count))
    cursor = NarrativeCursor(arena, "dialogue", active=arena.handle("main_1"))
    rendered: list[str | None] = []
    controller = PacingController(
        cursor,
        render=lambda node: rendered.append(node.id if node else None),
        on_advance=on_advance,
    )
    return controller, rendered


def test_start_renders_then_advances_on_interval() -> None:
    controller, rendered = _controller()
    assert controller.start(2.0) is True
    assert rendered == ["main_1"]

    assert controller.tick(1.0) is False
    assert controller.tick(1.0) is True
    assert rendered == ["main_1", "main_2"]
    assert controller.cursor.node.id == "main_2"


def test_start_while_running_is_noop() -> None:
    controller, rendered = _controller()
    controller.start(1.0)
    controller.tick(0.5)
    assert controller.start(1.0) is False
    assert rendered == ["main_1"]
    assert controller.tick(0.5) is True


def test_stop_is_idempotent_and_silences_controller() -> None:
    controller, rendered = _controller()
    controller.stop()
    controller.start(1.0)
    controller.stop()
    controller.stop()
    assert controller.state == "stopped"
    assert controller.tick(5.0) is False
    assert rendered == ["main_1"]


def test_listener_that_stops_controller_suppresses_render() -> None:
    advanced: list[str] = []

    def on_advance(cursor) -> None:
        advanced.append(cursor.node.id)
        if cursor.is_at_end():
            controller.stop()

    controller, rendered = _controller(count=2, on_advance=on_advance)
    controller.start(1.0)
    assert controller.tick(1.0) is True
    assert advanced == ["main_2"]
    assert rendered == ["main_1"]
    assert controller.tick(1.0) is False


def test_advance_at_chain_end_keeps_rendering_terminal_node() -> None:
    controller, rendered = _controller(count=2)
    controller.start(1.0)
    for _ in range(3):
        controller.tick(1.0)
    assert rendered == ["main_1", "main_2", "main_2", "main_2"]
