"""Persistence for user preferences kept between sessions."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping

from armsrace.core.types import DIFFICULTY_IDS, DifficultyId
from armsrace.services.errors import SaveLoadError

SettingsPayload = Dict[str, Any]


@dataclass
class Settings:
    difficulty: DifficultyId = "normal"
    events_enabled: bool = True
    colored_output: bool = True


class SettingsService:
    """Converts Settings to/from a validated, versioned payload on disk."""

    SETTINGS_VERSION = 1

    def serialize(self, settings: Settings) -> SettingsPayload:
        return {
            "settings_version": self.SETTINGS_VERSION,
            "difficulty": settings.difficulty,
            "events_enabled": settings.events_enabled,
            "colored_output": settings.colored_output,
        }

    def deserialize(self, payload: Mapping[str, Any]) -> Settings:
        if not isinstance(payload, Mapping):
            raise SaveLoadError("Settings data must be a JSON object.")
        version = payload.get("settings_version")
        if version != self.SETTINGS_VERSION:
            raise SaveLoadError(f"Unsupported settings version: {version!r}.")
        difficulty = payload.get("difficulty")
        if difficulty not in DIFFICULTY_IDS:
            raise SaveLoadError(f"Settings difficulty must be one of {list(DIFFICULTY_IDS)}.")
        return Settings(
            difficulty=difficulty,
            events_enabled=self._require_bool(payload.get("events_enabled"), "events_enabled"),
            colored_output=self._require_bool(payload.get("colored_output"), "colored_output"),
        )

    def load(self, path: Path) -> Settings:
        """Load settings from disk; a missing file yields the defaults."""
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return Settings()
        except OSError as exc:
            raise SaveLoadError(f"Unable to read settings: {path}") from exc
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SaveLoadError(f"Settings file is corrupted: {path}") from exc
        return self.deserialize(payload)

    def save(self, settings: Settings, path: Path) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(self.serialize(settings), indent=2, sort_keys=True), encoding="utf-8")
        except OSError as exc:
            raise SaveLoadError(f"Unable to write settings: {path}") from exc

    @staticmethod
    def _require_bool(value: object, field_name: str) -> bool:
        if not isinstance(value, bool):
            raise SaveLoadError(f"Settings field '{field_name}' must be true or false.")
        return value
