from __future__ import annotations

import json
from pathlib import Path

import pytest

from armsrace.core.rng import RNG
from armsrace.domain.profile import ELO_START, Profile, record_game, updated_elo
from armsrace.domain.state import GameState
from armsrace.services import ProfileService, SaveLoadError


def _finished_state(outcomes: list[tuple[str, str]]) -> GameState:
    state = GameState(seed=1, rng=RNG(1), difficulty_id="normal")
    for weapon_name, outcome in outcomes:
        state.record_round(weapon_name, outcome)
    return state


def test_updated_elo_moves_sixteen_points() -> None:
    assert updated_elo(ELO_START, True) == 1216
    assert updated_elo(ELO_START, False) == 1184


def test_record_game_tallies_result_and_weapons() -> None:
    profile = Profile()
    state = _finished_state([("AK-47", "win"), ("AWP", "loss"), ("AK-47", "win")])

    unlocked = record_game(profile, state, total_rounds=3)

    assert profile.total_games == 1
    assert profile.wins == 1
    assert profile.weapon_usage == {"AK-47": 2, "AWP": 1}
    assert profile.weapon_wins == {"AK-47": 1, "AWP": 0}
    assert profile.weapon_elo == {"AK-47": 1216, "AWP": 1184}
    assert unlocked == ["economist"]
    assert profile.win_rate == 100.0


def test_record_game_unlocks_each_achievement_once() -> None:
    profile = Profile()
    sweep = _finished_state([("AK-47", "win"), ("M4A4", "win"), ("AWP", "win")])
    stalemate = _finished_state([("Glock-18", "draw"), ("P250", "draw"), ("AWP", "win")])

    first = record_game(profile, sweep, total_rounds=3)
    second = record_game(profile, stalemate, total_rounds=3)

    assert first == ["economist", "streaker"]
    assert second == ["draw_master"]
    assert profile.achievements == ["economist", "streaker", "draw_master"]


def test_lost_game_unlocks_nothing() -> None:
    profile = Profile()
    state = _finished_state([("Glock-18", "loss"), ("P250", "loss")])

    assert record_game(profile, state, total_rounds=2) == []
    assert profile.losses == 1
    assert profile.win_rate == 0.0


def test_profile_round_trip(tmp_path: Path) -> None:
    service = ProfileService()
    profile = Profile()
    record_game(profile, _finished_state([("AK-47", "win"), ("AWP", "draw")]), total_rounds=2)
    path = tmp_path / "nested" / "profile.json"

    service.save(profile, path)
    loaded = service.load(path)

    assert loaded == profile
    assert json.loads(path.read_text(encoding="utf-8"))["profile_version"] == ProfileService.PROFILE_VERSION


def test_missing_profile_is_fresh(tmp_path: Path) -> None:
    assert ProfileService().load(tmp_path / "absent.json") == Profile()


def test_corrupted_profile_raises(tmp_path: Path) -> None:
    path = tmp_path / "profile.json"
    path.write_text("{broken", encoding="utf-8")

    with pytest.raises(SaveLoadError, match="corrupted"):
        ProfileService().load(path)


def test_profile_version_mismatch_raises() -> None:
    payload = ProfileService().serialize(Profile())
    payload["profile_version"] = 99

    with pytest.raises(SaveLoadError, match="version"):
        ProfileService().deserialize(payload)


def test_profile_rejects_negative_counts() -> None:
    payload = ProfileService().serialize(Profile())
    payload["wins"] = -1

    with pytest.raises(SaveLoadError, match="wins"):
        ProfileService().deserialize(payload)


def test_statistics_rank_weapons() -> None:
    profile = Profile(
        total_games=3,
        wins=2,
        losses=1,
        weapon_usage={"AK-47": 4, "AWP": 2, "M4A4": 4},
        weapon_wins={"AK-47": 3, "AWP": 1, "M4A4": 3},
        weapon_elo={"AK-47": 1248, "AWP": 1184, "M4A4": 1232},
        achievements=["economist"],
    )

    stats = ProfileService.statistics(profile)

    assert stats.win_rate == 66.7
    assert stats.most_used_weapon == ("M4A4", 4)
    assert stats.top_weapons_by_wins == [("AK-47", 3), ("M4A4", 3), ("AWP", 1)]
    assert stats.top_weapons_by_elo[0] == ("AK-47", 1248)
    assert stats.achievements == ["economist"]


def test_statistics_for_empty_profile() -> None:
    stats = ProfileService.statistics(Profile())

    assert stats.most_used_weapon is None
    assert stats.top_weapons_by_wins == []
    assert stats.win_rate == 0.0


def test_reset_overwrites_saved_profile(tmp_path: Path) -> None:
    service = ProfileService()
    profile = Profile()
    record_game(profile, _finished_state([("AK-47", "win")]), total_rounds=1)
    path = tmp_path / "profile.json"
    service.save(profile, path)

    fresh = service.reset(path)

    assert fresh == Profile()
    assert service.load(path) == Profile()
