from __future__ import annotations

from pathlib import Path

import pytest

from armsrace.data.config import GameConfig, load_game_config
from tests.helpers.definitions import DEFAULT_FILES, write_json


@pytest.fixture
def definitions_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "definitions"
    directory.mkdir()
    for filename, data in DEFAULT_FILES.items():
        write_json(directory / filename, data)
    return directory


@pytest.fixture
def game_config(definitions_dir: Path) -> GameConfig:
    return load_game_config(definitions_dir)
