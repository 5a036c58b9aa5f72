from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

APP_LOGGER_NAME = "branching_corpses"
GAMEPLAY_LOGGER_NAME = "branching_corpses.gameplay"


@dataclass(slots=True)
class SessionLogs:
    app: logging.Logger
    gameplay: logging.Logger
    latest_log_path: Path
    gameplay_log_path: Path

    def close(self) -> None:
        for target in (self.app, self.gameplay):
            for handler in list(target.handlers):
                handler.close()
                target.removeHandler(handler)


def _archive_previous_session(logs_dir: Path, keep_archives: int) -> Path:
    """Move last session's ``latest.log`` aside and prune old archives."""
    logs_dir.mkdir(parents=True, exist_ok=True)
    latest = logs_dir / "latest.log"
    if latest.exists():
        stamp = datetime.fromtimestamp(latest.stat().st_mtime).strftime("%Y%m%d_%H%M%S_%f")
        latest.replace(logs_dir / f"session_{stamp}.log")

    archives = sorted(logs_dir.glob("session_*.log"), key=lambda p: p.name, reverse=True)
    for stale in archives[keep_archives:]:
        stale.unlink(missing_ok=True)
    return latest


def _reset_logger(name: str, level: int) -> logging.Logger:
    target = logging.getLogger(name)
    target.setLevel(level)
    for handler in list(target.handlers):
        handler.close()
        target.removeHandler(handler)
    target.propagate = False
    return target


def configure_logging(logs_dir: Path, verbose: bool = False, keep_archives: int = 5) -> SessionLogs:
    """Send session records to ``latest.log`` and the presenter timeline to ``gameplay.log``.

    The console only shows warnings unless ``verbose`` is set, in which case
    per-tick debug records (struggle decay, intro advances) are shown and kept.
    """
    latest = _archive_previous_session(logs_dir, keep_archives)
    gameplay_path = logs_dir / "gameplay.log"
    level = logging.DEBUG if verbose else logging.INFO

    app_logger = _reset_logger(APP_LOGGER_NAME, level)
    record_format = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(record_format)
    app_logger.addHandler(console_handler)

    session_handler = logging.FileHandler(latest, mode="w", encoding="utf-8")
    session_handler.setFormatter(record_format)
    app_logger.addHandler(session_handler)

    gameplay_logger = _reset_logger(GAMEPLAY_LOGGER_NAME, logging.INFO)
    timeline_handler = logging.FileHandler(gameplay_path, mode="w", encoding="utf-8")
    timeline_handler.setFormatter(logging.Formatter("%(message)s"))
    gameplay_logger.addHandler(timeline_handler)

    return SessionLogs(
        app=app_logger,
        gameplay=gameplay_logger,
        latest_log_path=latest,
        gameplay_log_path=gameplay_path,
    )
