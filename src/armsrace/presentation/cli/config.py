"""CLI configuration helpers for profile persistence."""
from __future__ import annotations

import os
from pathlib import Path


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "ArmsRace"
        return Path.home() / "ArmsRace"
    return Path.home() / ".config" / "arms_race"


def get_default_profile_path() -> Path:
    """Return the default per-user profile path."""
    return get_user_data_dir() / "profile.json"


def get_settings_path(profile_path: Path) -> Path:
    """Return the settings file stored next to ``profile_path``."""
    return profile_path.with_name("settings.json")
