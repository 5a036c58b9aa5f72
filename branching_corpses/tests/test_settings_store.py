from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from branching_corpses.app.services.settings_store import SettingsStore
from branching_corpses.core.settings import SessionSettings, merge_settings


def test_settings_store_read_write(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    store = SettingsStore(path)
    loaded = store.load()
    assert path.exists()
    assert loaded["struggle"]["initial"] == 50.0

    loaded["struggle"]["decay_per_tick"] = 5
    loaded["timing"]["dialogue_interval"] = 2.5
    store.save(loaded)

    reloaded = store.load_model()
    assert reloaded.struggle.decay_per_tick == 5
    assert reloaded.timing.dialogue_interval == 2.5


def test_settings_store_recovers_from_corrupt_file(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    assert SettingsStore(path).load() == SessionSettings().as_dict()

    path.write_text('{"struggle": {"decay_per_tick": 99}}', encoding="utf-8")
    assert SettingsStore(path).load()["struggle"]["decay_per_tick"] == 3


def test_merge_settings_ignores_unknown_keys() -> None:
    merged = merge_settings({"struggle": {"initial": 80, "colour": "red"}, "video": {}})
    assert merged["struggle"]["initial"] == 80
    assert "video" not in merged


def test_inverted_ending_thresholds_fail_validation() -> None:
    with pytest.raises(ValidationError, match="hero_min"):
        SessionSettings.model_validate({"endings": {"losing_max": 30, "hero_min": 10}})
