from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Iterable

import pytest

from armsrace.presentation.cli.app import build_parser, main


def _scripted_input(responses: Iterable[str]) -> Callable[[str], str]:
    queue = list(responses)

    def _input(prompt: str) -> str:
        if not queue:
            raise AssertionError(f"Unexpected prompt: {prompt}")
        return queue.pop(0)

    return _input


def test_parser_defaults() -> None:
    args = build_parser().parse_args([])

    assert args.diff is None
    assert args.seed is None
    assert args.sim is None
    assert args.auto is False
    assert args.no_events is False
    assert args.no_color is False


def test_parser_rejects_unknown_difficulty() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--diff", "nightmare"])


def test_sim_prints_report(definitions_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["--sim", "2", "--seed", "4", "--definitions", str(definitions_dir)])

    output = capsys.readouterr().out
    assert code == 0
    assert "Simulated 84 battles over 2 iterations." in output
    assert "Rifle A" in output


def test_sim_rejects_non_positive_count(definitions_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["--sim", "0", "--definitions", str(definitions_dir)])

    assert code == 1
    assert "must be positive" in capsys.readouterr().out


def test_bad_definitions_exit_with_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["--definitions", str(tmp_path), "--profile", str(tmp_path / "profile.json")])

    assert code == 1
    assert "Could not load game data" in capsys.readouterr().out


def test_auto_game_saves_profile(definitions_dir: Path, tmp_path: Path) -> None:
    profile_path = tmp_path / "profile.json"

    code = main(
        [
            "--auto",
            "--seed",
            "21",
            "--diff",
            "hard",
            "--definitions",
            str(definitions_dir),
            "--profile",
            str(profile_path),
        ],
        input_fn=_scripted_input([]),
    )

    payload = json.loads(profile_path.read_text(encoding="utf-8"))
    assert code == 0
    assert payload["total_games"] == 1
    assert sum(payload["weapon_usage"].values()) == 3


def test_menu_quit(definitions_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(
        ["--definitions", str(definitions_dir), "--profile", str(tmp_path / "profile.json")],
        input_fn=_scripted_input(["6"]),
    )

    assert code == 0
    assert "Goodbye!" in capsys.readouterr().out


def test_menu_rejects_invalid_choice(
    definitions_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main(
        ["--definitions", str(definitions_dir), "--profile", str(tmp_path / "profile.json")],
        input_fn=_scripted_input(["9", "x", "6"]),
    )

    assert capsys.readouterr().out.count("Invalid selection") == 2


def test_menu_weapons_and_statistics(
    definitions_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main(
        ["--definitions", str(definitions_dir), "--profile", str(tmp_path / "profile.json")],
        input_fn=_scripted_input(["4", "5", "6"]),
    )

    output = capsys.readouterr().out
    assert "SMG B" in output
    assert "Games: 0" in output
    assert "Achievements: none yet" in output


def test_interactive_game_with_shopping(
    definitions_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    profile_path = tmp_path / "profile.json"
    responses = ["1", "1"]
    # Economist perk, a grip in round 1, then the cheapest weapon every round without selling.
    responses += ["2", "0", "1", "n"]
    responses += ["0", "1", "n"]
    responses += ["0", "1", "n"]
    responses += ["6"]

    code = main(
        ["--seed", "8", "--definitions", str(definitions_dir), "--profile", str(profile_path)],
        input_fn=_scripted_input(responses),
    )

    output = capsys.readouterr().out
    assert code == 0
    assert "Bought Grip. Balance: $700" in output
    assert "Bought Pistol A for $200" in output
    assert "Final score:" in output
    assert json.loads(profile_path.read_text(encoding="utf-8"))["total_games"] == 1


def test_corrupted_profile_starts_fresh(
    definitions_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    profile_path = tmp_path / "profile.json"
    profile_path.write_text("{oops", encoding="utf-8")

    code = main(
        ["--definitions", str(definitions_dir), "--profile", str(profile_path)],
        input_fn=_scripted_input(["6"]),
    )

    assert code == 0
    assert "Starting with a fresh profile." in capsys.readouterr().out


def _menu_args(definitions_dir: Path, profile_path: Path, *extra: str) -> list[str]:
    return ["--definitions", str(definitions_dir), "--profile", str(profile_path), *extra]


def _read_settings(profile_path: Path) -> dict:
    return json.loads((profile_path.parent / "settings.json").read_text(encoding="utf-8"))


def test_help_entry(definitions_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(_menu_args(definitions_dir, tmp_path / "profile.json"), input_fn=_scripted_input(["3", "6"]))

    assert "How to play" in capsys.readouterr().out


def test_options_change_difficulty_is_saved(
    definitions_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    profile_path = tmp_path / "profile.json"

    main(_menu_args(definitions_dir, profile_path), input_fn=_scripted_input(["2", "1", "3", "0", "6"]))

    assert "Difficulty set to Hard." in capsys.readouterr().out
    assert _read_settings(profile_path)["difficulty"] == "hard"


def test_options_toggle_events_is_saved(
    definitions_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    profile_path = tmp_path / "profile.json"

    main(_menu_args(definitions_dir, profile_path), input_fn=_scripted_input(["2", "2", "0", "6"]))

    output = capsys.readouterr().out
    assert "2. Random events (enabled)" in output
    assert "Random events disabled." in output
    assert _read_settings(profile_path)["events_enabled"] is False


def test_saved_difficulty_applies_unless_overridden(
    definitions_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    profile_path = tmp_path / "profile.json"
    main(_menu_args(definitions_dir, profile_path), input_fn=_scripted_input(["2", "1", "3", "0", "6"]))
    capsys.readouterr()

    main(_menu_args(definitions_dir, profile_path, "--auto", "--seed", "3"), input_fn=_scripted_input([]))
    assert "Difficulty: Hard" in capsys.readouterr().out

    main(
        _menu_args(definitions_dir, profile_path, "--auto", "--seed", "3", "--diff", "easy"),
        input_fn=_scripted_input([]),
    )
    assert "Difficulty: Easy" in capsys.readouterr().out
    assert _read_settings(profile_path)["difficulty"] == "hard"


def test_output_is_colored_by_default(
    definitions_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main(_menu_args(definitions_dir, tmp_path / "profile.json"), input_fn=_scripted_input(["6"]))

    assert "\x1b[" in capsys.readouterr().out


def test_no_color_flag_prints_plain_text(
    definitions_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main(
        _menu_args(definitions_dir, tmp_path / "profile.json", "--no-color", "--auto", "--seed", "5"),
        input_fn=_scripted_input([]),
    )

    output = capsys.readouterr().out
    assert "Final score:" in output
    assert "\x1b[" not in output


def test_options_toggle_colors_persists(
    definitions_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    profile_path = tmp_path / "profile.json"
    main(_menu_args(definitions_dir, profile_path), input_fn=_scripted_input(["2", "3", "0", "6"]))
    capsys.readouterr()

    main(_menu_args(definitions_dir, profile_path), input_fn=_scripted_input(["3", "6"]))

    assert _read_settings(profile_path)["colored_output"] is False
    assert "\x1b[" not in capsys.readouterr().out


def test_corrupted_settings_fall_back_to_defaults(
    definitions_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    profile_path = tmp_path / "profile.json"
    (tmp_path / "settings.json").write_text("{oops", encoding="utf-8")

    code = main(_menu_args(definitions_dir, profile_path), input_fn=_scripted_input(["6"]))

    assert code == 0
    assert "Using default settings." in capsys.readouterr().out


def test_options_reset_profile_after_confirmation(
    definitions_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    profile_path = tmp_path / "profile.json"
    main(_menu_args(definitions_dir, profile_path, "--auto", "--seed", "2"), input_fn=_scripted_input([]))
    capsys.readouterr()

    main(
        _menu_args(definitions_dir, profile_path, "--no-color"),
        input_fn=_scripted_input(["2", "4", "y", "0", "5", "6"]),
    )

    output = capsys.readouterr().out
    assert "Profile reset." in output
    assert "Games: 0" in output
    assert json.loads(profile_path.read_text(encoding="utf-8"))["total_games"] == 0


def test_options_reset_profile_can_be_cancelled(
    definitions_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    profile_path = tmp_path / "profile.json"
    main(_menu_args(definitions_dir, profile_path, "--auto", "--seed", "2"), input_fn=_scripted_input([]))
    capsys.readouterr()

    main(_menu_args(definitions_dir, profile_path), input_fn=_scripted_input(["2", "4", "n", "0", "5", "6"]))

    output = capsys.readouterr().out
    assert "Reset cancelled." in output
    assert "Games: 1" in output
    assert json.loads(profile_path.read_text(encoding="utf-8"))["total_games"] == 1


def test_auto_game_buys_attachments(
    definitions_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main(
        _menu_args(definitions_dir, tmp_path / "profile.json", "--auto", "--seed", "11", "--no-color"),
        input_fn=_scripted_input([]),
    )

    output = capsys.readouterr().out
    assert "Bought Grip." in output or "Bought Extended Magazine." in output
    assert output.count("Score: You") == 3
