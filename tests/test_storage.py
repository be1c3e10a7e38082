import json

from roto_clash.storage import (
    DEFAULT_SETTINGS,
    GameHistoryEntry,
    GameSettings,
    JsonHistoryStore,
    JsonSettingsStore,
    compute_stats,
)
from roto_clash.types import Difficulty, GameMode


def _entry(mode, winner, turns, duration) -> GameHistoryEntry:
    return GameHistoryEntry(game_mode=mode, winner=winner, turn_count=turns, duration=duration)


def test_history_is_newest_first_and_capped(tmp_path):
    store = JsonHistoryStore(tmp_path / "history.json", limit=3)
    entries = [_entry(GameMode.AI, "AI", n, 10) for n in range(5)]
    for entry in entries:
        store.save_game(entry)

    loaded = store.load()
    assert [e.turn_count for e in loaded] == [4, 3, 2]
    assert loaded[0].id == entries[4].id


def test_history_file_uses_camel_case(tmp_path):
    path = tmp_path / "history.json"
    JsonHistoryStore(path).save_game(_entry(GameMode.LOCAL, "Player 2", 3, 42))

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw[0]["gameMode"] == "local"
    assert raw[0]["turnCount"] == 3
    assert raw[0]["duration"] == 42
    assert "date" in raw[0] and "id" in raw[0]


def test_corrupt_history_loads_empty(tmp_path):
    path = tmp_path / "history.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonHistoryStore(path)

    assert store.load() == []
    store.save_game(_entry(GameMode.AI, "Player 1", 1, 1))
    assert len(store.load()) == 1


def test_clear_removes_file(tmp_path):
    store = JsonHistoryStore(tmp_path / "history.json")
    store.save_game(_entry(GameMode.AI, "AI", 2, 5))
    store.clear()
    assert store.load() == []
    assert not store.path.exists()


def test_stats():
    history = [
        _entry(GameMode.AI, "Player 1", 4, 60),
        _entry(GameMode.AI, "AI", 6, 30),
        _entry(GameMode.LOCAL, "Player 2", 5, 45),
    ]
    stats = compute_stats(history)

    assert stats.total_games == 3
    assert stats.wins == 1
    assert stats.ai_wins == 1
    assert stats.local_wins == 1
    assert stats.win_rate == 33
    assert stats.average_turns == 5
    assert stats.average_duration == 45


def test_stats_empty(tmp_path):
    stats = JsonHistoryStore(tmp_path / "none.json").stats()
    assert stats.total_games == 0
    assert stats.win_rate == 0


def test_settings_merge_over_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"theme": "dark", "timeLimit": 30}), encoding="utf-8")

    settings = JsonSettingsStore(path).load()

    assert settings.theme == "dark"
    assert settings.time_limit == 30
    assert settings.difficulty is Difficulty.MEDIUM
    assert settings.sound_enabled is True


def test_fractional_time_limit_keeps_other_settings(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"theme": "dark", "difficulty": "hard", "timeLimit": 30.5}), encoding="utf-8")

    settings = JsonSettingsStore(path).load()

    assert settings.theme == "dark"
    assert settings.difficulty is Difficulty.HARD
    assert settings.time_limit == 30.5


def test_invalid_settings_fall_back_to_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"theme": "neon"}), encoding="utf-8")
    assert JsonSettingsStore(path).load() == DEFAULT_SETTINGS

    path.write_text("[1, 2]", encoding="utf-8")
    assert JsonSettingsStore(path).load() == DEFAULT_SETTINGS


def test_settings_update_and_reset(tmp_path):
    store = JsonSettingsStore(tmp_path / "nested" / "settings.json")

    updated = store.update(difficulty="hard", music_enabled=False)
    assert updated.difficulty is Difficulty.HARD
    assert store.load().music_enabled is False

    raw = json.loads(store.path.read_text(encoding="utf-8"))
    assert raw["musicEnabled"] is False
    assert raw["difficulty"] == "hard"

    assert store.reset() == GameSettings()
    assert store.load() == DEFAULT_SETTINGS
