"""Domain-level state tracking for a single game."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from armsrace.core.rng import RNG
from armsrace.core.types import DifficultyId, RoundOutcome


@dataclass
class GameState:
    """Mutable state of one game, from perk selection to the final round."""

    seed: int | None
    rng: RNG
    difficulty_id: DifficultyId
    perk_id: str | None = None
    events_enabled: bool = True
    balance: int = 0
    round_number: int = 0
    attachments: List[str] = field(default_factory=list)
    player_score: int = 0
    computer_score: int = 0
    draws: int = 0
    used_weapons: List[str] = field(default_factory=list)
    round_results: List[RoundOutcome] = field(default_factory=list)
    weapon_results: Dict[str, bool] = field(default_factory=dict)
    round_played: bool = False

    def record_round(self, weapon_name: str, outcome: RoundOutcome) -> None:
        if outcome == "win":
            self.player_score += 1
        elif outcome == "loss":
            self.computer_score += 1
        else:
            self.draws += 1
        self.used_weapons.append(weapon_name)
        self.round_results.append(outcome)
        self.weapon_results[weapon_name] = outcome == "win"
        self.round_played = True
