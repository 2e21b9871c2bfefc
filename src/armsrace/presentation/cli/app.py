"""Console-driven UI loops for Arms Race."""
from __future__ import annotations

import argparse
import logging
import secrets
from pathlib import Path
from typing import Callable, List, Literal, Sequence, Tuple

from colorama import Fore, just_fix_windows_console

from armsrace.core.rng import RNG
from armsrace.core.types import DIFFICULTY_IDS, DifficultyId
from armsrace.data.config import GameConfig, load_game_config
from armsrace.data.errors import DataError
from armsrace.domain.profile import Profile
from armsrace.domain.state import GameState
from armsrace.domain.weapon import WeaponInstance
from armsrace.presentation.cli import render
from armsrace.presentation.cli.config import get_default_profile_path, get_settings_path
from armsrace.services import (
    GameService,
    ProfileService,
    ProfileStatistics,
    RoundActionFailedEvent,
    RoundResolvedEvent,
    RoundService,
    SaveLoadError,
    Settings,
    SettingsService,
    ShopService,
    SimulationService,
)

MenuAction = Literal["play", "options", "help", "weapons", "statistics", "quit"]
_MAIN_MENU: Tuple[Tuple[MenuAction, str], ...] = (
    ("play", "Play"),
    ("options", "Options"),
    ("help", "Help"),
    ("weapons", "Weapons"),
    ("statistics", "Statistics"),
    ("quit", "Quit"),
)
_MAX_RANDOM_SEED = 2**31 - 1
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
_AUTO_ATTACHMENTS_PER_ROUND = 2

InputFn = Callable[[str], str]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="armsrace", description="Turn-based weapon battle simulator.")
    parser.add_argument(
        "--diff", choices=DIFFICULTY_IDS, default=None, help="Computer difficulty (overrides saved settings)."
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible runs.")
    parser.add_argument("--sim", type=int, metavar="COUNT", default=None, help="Run COUNT simulation passes.")
    parser.add_argument("--auto", action="store_true", help="Play one game with random choices.")
    parser.add_argument("--no-events", action="store_true", help="Disable random round events.")
    parser.add_argument("--no-color", action="store_true", help="Print plain text without ANSI colors.")
    parser.add_argument("--definitions", type=Path, default=None, help="Directory of JSON definitions.")
    parser.add_argument("--profile", type=Path, default=None, help="Profile JSON file.")
    parser.add_argument("--log-level", choices=_LOG_LEVELS, default="WARNING")
    return parser


def main(argv: Sequence[str] | None = None, input_fn: InputFn = input) -> int:
    """Start the CLI session and return a process exit code."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")
    just_fix_windows_console()

    profile_path = args.profile or get_default_profile_path()
    settings_path = get_settings_path(profile_path)
    settings = _load_settings(settings_path)
    render.set_color_enabled(settings.colored_output and not args.no_color)

    try:
        config = load_game_config(args.definitions)
    except DataError as exc:
        print(render.colorize(f"Could not load game data: {exc}", Fore.RED))
        return 1
    if not config.weapons:
        print(render.colorize("No playable weapons were loaded.", Fore.RED))
        return 1

    seed = args.seed if args.seed is not None else secrets.randbelow(_MAX_RANDOM_SEED)

    if args.sim is not None:
        if args.sim <= 0:
            print(render.colorize("Simulation count must be positive.", Fore.RED))
            return 1
        events_enabled = settings.events_enabled and not args.no_events
        simulation = SimulationService(config, RNG(seed), events_enabled=events_enabled)
        _print_lines(render.format_simulation(simulation.simulate(args.sim)))
        return 0

    session = _Session(
        config,
        args,
        seed,
        input_fn,
        settings=settings,
        settings_path=settings_path,
        profile_path=profile_path,
    )
    if args.auto:
        session.play_game()
        session.save_profile()
        return 0

    print(render.colorize("=== Arms Race ===", render.TITLE_COLOR))
    while True:
        action = _main_menu_loop(input_fn)
        if action == "quit":
            break
        if action == "play":
            session.play_game()
            session.save_profile()
        elif action == "options":
            session.options_menu()
        elif action == "help":
            _print_lines(render.format_help())
        elif action == "statistics":
            _print_lines(render.format_statistics(session.statistics()))
        else:
            weights = config.rules.weights
            _print_lines(render.format_catalog(WeaponInstance.from_def(w, weights) for w in config.weapons))
    print("Goodbye!")
    return 0


class _Session:
    """Interactive (or automatic) play of whole games plus the player's stored preferences."""

    def __init__(
        self,
        config: GameConfig,
        args: argparse.Namespace,
        seed: int,
        input_fn: InputFn,
        *,
        settings: Settings,
        settings_path: Path,
        profile_path: Path,
    ) -> None:
        self._config = config
        self._args = args
        self._seed = seed
        self._input = input_fn
        # Separate stream so auto choices never shift the game's own draws.
        self._picker = RNG(seed ^ 0x5EED)
        self._game_service = GameService(config)
        self._round_service = RoundService(config)
        self._shop_service = ShopService(config)
        self._profile_service = ProfileService()
        self._settings_service = SettingsService()
        self._settings = settings
        self._settings_path = settings_path
        self._profile_path = profile_path
        self.difficulty: DifficultyId = args.diff or settings.difficulty
        self.events_enabled = settings.events_enabled and not args.no_events
        self.profile = self._load_profile()

    def play_game(self) -> None:
        state = self._game_service.new_game(
            seed=self._seed,
            difficulty_id=self.difficulty,
            perk_id=self._choose_perk(),
            events_enabled=self.events_enabled,
        )
        print(f"Difficulty: {state.difficulty_id.capitalize()}  Rounds: {self._config.rules.rounds}")
        while not self._game_service.is_finished(state):
            _print_lines(render.format_events(self._game_service.begin_round(state)))
            if self._args.auto:
                self._auto_shop(state)
            else:
                self._shop_loop(state)
            if not self._play_round(state):
                print(render.colorize("No affordable weapons left. The game ends early.", Fore.YELLOW))
                break
        if state.round_results:
            _print_lines(render.format_events([self._game_service.finish_game(state, self.profile)]))
        # Each new game gets a fresh seed so replays differ unless --seed was given.
        if self._args.seed is None:
            self._seed = secrets.randbelow(_MAX_RANDOM_SEED)

    def statistics(self) -> ProfileStatistics:
        return self._profile_service.statistics(self.profile)

    def save_profile(self) -> None:
        try:
            self._profile_service.save(self.profile, self._profile_path)
        except SaveLoadError as exc:
            print(render.colorize(f"Could not save profile: {exc}", Fore.RED))

    def options_menu(self) -> None:
        while True:
            _print_lines(
                render.format_options(self.difficulty, self.events_enabled, self._settings.colored_output)
            )
            choice = _prompt_number(self._input, "Select an option: ", 0, 4)
            if choice == 0:
                return
            if choice == 4:
                self._reset_profile()
                continue
            if choice == 1:
                self.difficulty = self._choose_difficulty()
                self._settings.difficulty = self.difficulty
                print(f"Difficulty set to {self.difficulty.capitalize()}.")
            elif choice == 2:
                self.events_enabled = not self.events_enabled
                self._settings.events_enabled = self.events_enabled
                print("Random events " + ("enabled." if self.events_enabled else "disabled."))
            else:
                self._settings.colored_output = not self._settings.colored_output
                render.set_color_enabled(self._settings.colored_output and not self._args.no_color)
                print("Colored output " + ("enabled." if self._settings.colored_output else "disabled."))
            self._save_settings()

    def _choose_difficulty(self) -> DifficultyId:
        print("Choose difficulty:")
        for index, difficulty_id in enumerate(DIFFICULTY_IDS, start=1):
            print(f"{index}. {difficulty_id.capitalize()}")
        return DIFFICULTY_IDS[_prompt_index(self._input, "Difficulty: ", len(DIFFICULTY_IDS)) - 1]

    def _reset_profile(self) -> None:
        answer = self._input("Reset your profile? All statistics will be lost. (y/n): ").strip().lower()
        if answer != "y":
            print("Reset cancelled.")
            return
        try:
            self.profile = self._profile_service.reset(self._profile_path)
        except SaveLoadError as exc:
            print(render.colorize(f"Could not reset profile: {exc}", Fore.RED))
            return
        print(render.colorize("Profile reset.", Fore.GREEN))

    def _save_settings(self) -> None:
        try:
            self._settings_service.save(self._settings, self._settings_path)
        except SaveLoadError as exc:
            print(render.colorize(f"Could not save settings: {exc}", Fore.RED))

    def _load_profile(self) -> Profile:
        try:
            return self._profile_service.load(self._profile_path)
        except SaveLoadError as exc:
            print(render.colorize(f"{exc} Starting with a fresh profile.", Fore.YELLOW))
            return Profile()

    def _choose_perk(self) -> str | None:
        perks = sorted(self._config.perks.values(), key=lambda perk: perk.id)
        if not perks:
            return None
        if self._args.auto:
            return self._picker.choice(perks).id
        print("Choose your perk:")
        for index, perk in enumerate(perks, start=1):
            print(f"{index}. {perk.name}")
        return perks[_prompt_index(self._input, "Perk: ", len(perks)) - 1].id

    def _shop_loop(self, state: GameState) -> None:
        while True:
            view = self._shop_service.build_shop_view(state)
            _print_lines(render.format_shop(view))
            choice = _prompt_number(self._input, "Buy attachment: ", 0, len(view.entries))
            if choice == 0:
                return
            entry = view.entries[choice - 1]
            _print_lines(render.format_events(self._shop_service.buy_attachment(state, entry.attachment_id)))

    def _auto_shop(self, state: GameState) -> None:
        eligible = self._round_service.eligible_weapons(state)
        if not eligible:
            return
        # Keep enough for the cheapest weapon of the round.
        budget = state.balance - min(weapon.price for weapon in eligible)
        picks: List[str] = []
        for _ in range(_AUTO_ATTACHMENTS_PER_ROUND):
            candidates = [entry for entry in self._shop_service.build_shop_view(state).entries if entry.price <= budget]
            if not candidates:
                break
            entry = self._picker.choice(candidates)
            picks.append(entry.attachment_id)
            budget -= entry.price
        if picks:
            result = self._shop_service.buy_many(state, picks)
            _print_lines(render.format_events(result.events))

    def _play_round(self, state: GameState) -> bool:
        eligible = self._round_service.eligible_weapons(state)
        affordable = [weapon for weapon in eligible if weapon.price <= state.balance]
        if not affordable:
            return False
        print(f"{self._round_service.round_label(state)} (balance ${state.balance})")
        for index, weapon in enumerate(eligible, start=1):
            print(render.format_weapon_line(index, weapon, weapon.price, state.balance))

        while True:
            if self._args.auto:
                weapon = self._picker.choice(affordable)
                print(f"Auto-selected {weapon.name}.")
            else:
                weapon = eligible[_prompt_index(self._input, "Choose weapon: ", len(eligible)) - 1]
            events = self._round_service.play_round(state, weapon.id)
            _print_lines(render.format_events(events))
            if not isinstance(events[0], RoundActionFailedEvent):
                break

        resolved = events[-1]
        assert isinstance(resolved, RoundResolvedEvent)
        self._offer_sale(state, resolved.player_weapon)
        print(f"Score: You {state.player_score} - {state.computer_score} Computer")
        return True

    def _offer_sale(self, state: GameState, weapon: WeaponInstance) -> None:
        amount = self._round_service.sell_price(weapon)
        if self._args.auto:
            sell = True
        else:
            sell = self._input(f"Sell your weapon for ${amount}? (y/n): ").strip().lower() == "y"
        if sell:
            _print_lines(render.format_events([self._round_service.sell_weapon(state, weapon)]))


def _load_settings(path: Path) -> Settings:
    try:
        return SettingsService().load(path)
    except SaveLoadError as exc:
        print(f"{exc} Using default settings.")
        return Settings()


def _main_menu_loop(input_fn: InputFn) -> MenuAction:
    print()
    print(render.colorize("Main Menu", render.TITLE_COLOR))
    for index, (_, label) in enumerate(_MAIN_MENU, start=1):
        print(f"{index}. {label}")
    return _MAIN_MENU[_prompt_index(input_fn, "Select an option: ", len(_MAIN_MENU)) - 1][0]


def _prompt_index(input_fn: InputFn, prompt: str, count: int) -> int:
    return _prompt_number(input_fn, prompt, 1, count)


def _prompt_number(input_fn: InputFn, prompt: str, minimum: int, maximum: int) -> int:
    while True:
        raw = input_fn(prompt).strip()
        if raw.isdigit() and minimum <= int(raw) <= maximum:
            return int(raw)
        print(render.colorize(f"Invalid selection. Please enter a number from {minimum} to {maximum}.", Fore.RED))


def _print_lines(lines: Sequence[str]) -> None:
    for line in lines:
        print(line)
