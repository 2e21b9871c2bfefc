"""Serialization helpers for the career profile."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple

from armsrace.domain.profile import Profile
from armsrace.services.errors import SaveLoadError

ProfilePayload = Dict[str, Any]

TOP_WEAPON_COUNT = 5


@dataclass(slots=True)
class ProfileStatistics:
    total_games: int
    wins: int
    losses: int
    draws: int
    win_rate: float
    most_used_weapon: Tuple[str, int] | None
    top_weapons_by_wins: List[Tuple[str, int]]
    top_weapons_by_elo: List[Tuple[str, int]]
    achievements: List[str]


class ProfileService:
    """Converts a Profile to/from a validated, versioned payload."""

    PROFILE_VERSION = 1

    def serialize(self, profile: Profile) -> ProfilePayload:
        return {
            "profile_version": self.PROFILE_VERSION,
            "total_games": profile.total_games,
            "wins": profile.wins,
            "losses": profile.losses,
            "draws": profile.draws,
            "weapon_usage": dict(profile.weapon_usage),
            "weapon_wins": dict(profile.weapon_wins),
            "weapon_elo": dict(profile.weapon_elo),
            "achievements": list(profile.achievements),
        }

    def deserialize(self, payload: Mapping[str, Any]) -> Profile:
        if not isinstance(payload, Mapping):
            raise SaveLoadError("Profile data must be a JSON object.")
        version = payload.get("profile_version")
        if version != self.PROFILE_VERSION:
            raise SaveLoadError(f"Unsupported profile version: {version!r}.")
        return Profile(
            total_games=self._require_count(payload.get("total_games"), "total_games"),
            wins=self._require_count(payload.get("wins"), "wins"),
            losses=self._require_count(payload.get("losses"), "losses"),
            draws=self._require_count(payload.get("draws"), "draws"),
            weapon_usage=self._coerce_int_dict(payload.get("weapon_usage", {}), "weapon_usage"),
            weapon_wins=self._coerce_int_dict(payload.get("weapon_wins", {}), "weapon_wins"),
            weapon_elo=self._coerce_int_dict(payload.get("weapon_elo", {}), "weapon_elo"),
            achievements=self._coerce_str_list(payload.get("achievements", []), "achievements"),
        )

    def load(self, path: Path) -> Profile:
        """Load a profile from disk; a missing file yields a fresh profile."""
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return Profile()
        except OSError as exc:
            raise SaveLoadError(f"Unable to read profile: {path}") from exc
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SaveLoadError(f"Profile file is corrupted: {path}") from exc
        return self.deserialize(payload)

    def save(self, profile: Profile, path: Path) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(self.serialize(profile), indent=2, sort_keys=True), encoding="utf-8")
        except OSError as exc:
            raise SaveLoadError(f"Unable to write profile: {path}") from exc

    def reset(self, path: Path) -> Profile:
        """Overwrite the profile at ``path`` with a fresh one and return it."""
        profile = Profile()
        self.save(profile, path)
        return profile

    @staticmethod
    def statistics(profile: Profile) -> ProfileStatistics:
        most_used: Tuple[str, int] | None = None
        if profile.weapon_usage:
            most_used = max(profile.weapon_usage.items(), key=lambda item: (item[1], item[0]))
        by_wins = sorted(profile.weapon_wins.items(), key=lambda item: (-item[1], item[0]))
        by_elo = sorted(profile.weapon_elo.items(), key=lambda item: (-item[1], item[0]))
        return ProfileStatistics(
            total_games=profile.total_games,
            wins=profile.wins,
            losses=profile.losses,
            draws=profile.draws,
            win_rate=profile.win_rate,
            most_used_weapon=most_used,
            top_weapons_by_wins=by_wins[:TOP_WEAPON_COUNT],
            top_weapons_by_elo=by_elo[:TOP_WEAPON_COUNT],
            achievements=list(profile.achievements),
        )

    @staticmethod
    def _require_count(value: object, field_name: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise SaveLoadError(f"Profile field '{field_name}' must be a non-negative integer.")
        return value

    @staticmethod
    def _coerce_int_dict(value: object, field_name: str) -> Dict[str, int]:
        if not isinstance(value, Mapping):
            raise SaveLoadError(f"Profile field '{field_name}' must be an object.")
        result: Dict[str, int] = {}
        for key, entry in value.items():
            if not isinstance(key, str) or isinstance(entry, bool) or not isinstance(entry, int):
                raise SaveLoadError(f"Profile field '{field_name}' must map names to integers.")
            result[key] = entry
        return result

    @staticmethod
    def _coerce_str_list(value: object, field_name: str) -> List[str]:
        if not isinstance(value, list) or not all(isinstance(entry, str) for entry in value):
            raise SaveLoadError(f"Profile field '{field_name}' must be a list of strings.")
        return list(value)
