"""Career profile bookkeeping: totals, weapon ELO and achievements."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from armsrace.domain.state import GameState

ELO_START = 1200
ELO_K_FACTOR = 32
ELO_EXPECTED_SCORE = 0.5

ACHIEVEMENT_ECONOMIST = "economist"
ACHIEVEMENT_STREAKER = "streaker"
ACHIEVEMENT_DRAW_MASTER = "draw_master"
DRAW_MASTER_THRESHOLD = 2


@dataclass
class Profile:
    total_games: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    weapon_usage: Dict[str, int] = field(default_factory=dict)
    weapon_wins: Dict[str, int] = field(default_factory=dict)
    weapon_elo: Dict[str, int] = field(default_factory=dict)
    achievements: List[str] = field(default_factory=list)

    @property
    def win_rate(self) -> float:
        if self.total_games == 0:
            return 0.0
        return round(self.wins / self.total_games * 100, 1)


def record_game(profile: Profile, state: GameState, *, total_rounds: int) -> List[str]:
    """Fold a finished game into the profile and return newly unlocked achievements."""
    profile.total_games += 1
    if state.player_score > state.computer_score:
        profile.wins += 1
    elif state.player_score < state.computer_score:
        profile.losses += 1
    else:
        profile.draws += 1

    for weapon_name in state.used_weapons:
        profile.weapon_usage[weapon_name] = profile.weapon_usage.get(weapon_name, 0) + 1

    for weapon_name, won in state.weapon_results.items():
        profile.weapon_wins.setdefault(weapon_name, 0)
        if won:
            profile.weapon_wins[weapon_name] += 1
        profile.weapon_elo[weapon_name] = updated_elo(
            profile.weapon_elo.get(weapon_name, ELO_START), won
        )

    return _unlock_achievements(profile, state, total_rounds)


def updated_elo(current: int, won: bool) -> int:
    # Opponent strength is unknown, so every result is scored against an even match.
    actual = 1.0 if won else 0.0
    return round(current + ELO_K_FACTOR * (actual - ELO_EXPECTED_SCORE))


def _unlock_achievements(profile: Profile, state: GameState, total_rounds: int) -> List[str]:
    unlocked: List[str] = []
    candidates = (
        (ACHIEVEMENT_ECONOMIST, state.player_score > 0),
        (
            ACHIEVEMENT_STREAKER,
            state.player_score == total_rounds and state.computer_score == 0,
        ),
        (ACHIEVEMENT_DRAW_MASTER, state.draws >= DRAW_MASTER_THRESHOLD),
    )
    for achievement, earned in candidates:
        if earned and achievement not in profile.achievements:
            profile.achievements.append(achievement)
            unlocked.append(achievement)
    return unlocked
