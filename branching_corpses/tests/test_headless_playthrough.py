from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from branching_corpses.app.driver import run_headless
from branching_corpses.app.presenter import TimelineRecorder
from branching_corpses.core.loader import default_content_dir, load_story
from branching_corpses.core.session import StorySession
from branching_corpses.tools.simulate import app


def _play(clicks_per_second: float) -> tuple[StorySession, TimelineRecorder]:
    recorder = TimelineRecorder(record_meter=True)
    session = StorySession(load_story(default_content_dir()), listener=recorder)
    recorder.clock = lambda: session.elapsed
    result = run_headless(session, clicks_per_second=clicks_per_second)
    assert result.timed_out is False
    return session, recorder


def test_idle_player_loses() -> None:
    session, recorder = _play(clicks_per_second=0.0)
    assert session.ending == "losing"
    assert session.end_reason == "exhausted"
    assert session.finished is True
    assert [entry.message for entry in recorder.entries if entry.kind == "phase"] == ["intro", "main_loop", "ended"]


def test_fast_player_breaks_free_as_hero() -> None:
    session, _ = _play(clicks_per_second=2.0)
    assert session.ending == "hero"
    assert session.end_reason == "player_log_end"


def test_same_inputs_produce_identical_timelines() -> None:
    _, first = _play(clicks_per_second=1.5)
    _, second = _play(clicks_per_second=1.5)
    assert [entry.format() for entry in first.entries] == [entry.format() for entry in second.entries]


def test_simulate_cli_prints_summary() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--skip-intro", "--clicks-per-second", "0"])
    assert result.exit_code == 0, result.output
    assert "Session Summary" in result.output
    assert "losing" in result.output
    assert "Deterministic signature" in result.output


def test_simulate_cli_writes_session_logs_and_archives_previous_run(tmp_path: Path) -> None:
    runner = CliRunner()
    args = ["--skip-intro", "--clicks-per-second", "0", "--logs-dir", str(tmp_path)]

    first = runner.invoke(app, args)
    assert first.exit_code == 0, first.output
    timeline = (tmp_path / "gameplay.log").read_text(encoding="utf-8")
    assert "[phase] intro" in timeline
    assert "[phase] main_loop" in timeline
    latest = (tmp_path / "latest.log").read_text(encoding="utf-8")
    assert "Main loop ended (exhausted)" in latest
    assert "Struggle decayed" not in latest
    assert list(tmp_path.glob("session_*.log")) == []

    second = runner.invoke(app, [*args, "--verbose"])
    assert second.exit_code == 0, second.output
    assert len(list(tmp_path.glob("session_*.log"))) == 1
    assert "Struggle decayed to" in (tmp_path / "latest.log").read_text(encoding="utf-8")
