from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from branching_corpses.app.driver import DEFAULT_FRAME_DT, run_headless
from branching_corpses.app.presenter import ConsolePresenter
from branching_corpses.app.services.logger import configure_logging
from branching_corpses.app.services.settings_store import SettingsStore
from branching_corpses.core.loader import ContentValidationError, default_content_dir, load_story
from branching_corpses.core.session import StorySession
from branching_corpses.core.settings import SessionSettings

app = typer.Typer(add_completion=False, help="Play a deterministic headless session of Branching Corpses.")
console = Console()


@app.command()
def main(
    content: Path = typer.Option(default_content_dir(), "--content", help="Story content directory."),
    settings_path: Optional[Path] = typer.Option(None, "--settings", help="Settings JSON file (created if missing)."),
    dt: float = typer.Option(DEFAULT_FRAME_DT, "--dt", min=0.001, help="Seconds of game time per tick."),
    max_seconds: float = typer.Option(300.0, "--max-seconds", min=1.0, help="Give up after this much game time."),
    clicks_per_second: float = typer.Option(0.5, "--clicks-per-second", min=0.0, help="Scripted player click rate."),
    skip_intro: bool = typer.Option(False, "--skip-intro", help="Skip the intro cutscene."),
    show_meter: bool = typer.Option(False, "--show-meter", help="Include every struggle change in the timeline."),
    logs_dir: Optional[Path] = typer.Option(None, "--logs-dir", help="Write latest.log and gameplay.log here."),
    verbose: bool = typer.Option(False, "--verbose", help="With --logs-dir, also record per-tick debug lines."),
) -> None:
    session_logs = configure_logging(logs_dir, verbose=verbose) if logs_dir is not None else None
    try:
        _play(content, settings_path, dt, max_seconds, clicks_per_second, skip_intro, show_meter)
    finally:
        if session_logs is not None:
            session_logs.close()


def _play(
    content: Path,
    settings_path: Path | None,
    dt: float,
    max_seconds: float,
    clicks_per_second: float,
    skip_intro: bool,
    show_meter: bool,
) -> None:
    try:
        store = load_story(content)
    except ContentValidationError as exc:
        console.print(f"[bold red]Content load failed:[/bold red] {exc}")
        raise typer.Exit(1) from exc

    settings = SettingsStore(settings_path).load_model() if settings_path else SessionSettings()

    presenter = ConsolePresenter(console=console, record_meter=show_meter)
    session = StorySession(store, settings=settings, listener=presenter)
    presenter.clock = lambda: session.elapsed

    console.print(f"[bold]{store.manifest.title}[/bold]")
    result = run_headless(
        session,
        dt=dt,
        max_seconds=max_seconds,
        clicks_per_second=clicks_per_second,
        skip_intro=skip_intro,
    )
    final = session.snapshot()

    summary = Table(title="Session Summary")
    summary.add_column("Field", style="cyan", no_wrap=True)
    summary.add_column("Value", style="white")
    summary.add_row("Phase", final.phase)
    summary.add_row("Ending", final.ending or "-")
    summary.add_row("End Reason", session.end_reason or "-")
    summary.add_row("Final Struggle", f"{final.final_value:.2f}" if final.final_value is not None else "-")
    summary.add_row("Ticks", str(result.ticks))
    summary.add_row("Game Time", f"{result.elapsed:.2f}s")
    summary.add_row("Actions", f"{result.actions_accepted}/{result.actions_attempted} accepted")
    summary.add_row("Timed Out", str(result.timed_out))
    console.print()
    console.print(summary)

    payload = [entry.to_dict() for entry in presenter.entries]
    signature = hashlib.sha256(json.dumps(payload, sort_keys=True).encode("utf-8")).hexdigest()[:16]
    console.print(f"\n[bold green]Deterministic signature:[/bold green] {signature}")

    if result.timed_out:
        raise typer.Exit(2)


if __name__ == "__main__":
    app()
