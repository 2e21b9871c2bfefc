"""Game rule definitions loaded from rules.json."""
from __future__ import annotations

from dataclasses import dataclass

from armsrace.core.types import WeaponCategory


@dataclass(frozen=True, slots=True)
class ScoringWeights:
    damage: float = 1.0
    firerate: float = 1.0
    magazine: float = 1.0
    range: float = 1.0
    denominator: float = 1.0


@dataclass(frozen=True, slots=True)
class EconomyDef:
    sell_rate: float = 0.7
    win_bonus: int = 500
    loss_bonus: int = 200


@dataclass(frozen=True, slots=True)
class RoundPoolDef:
    """Weapons eligible in a given round: categories capped by price."""

    round_number: int
    categories: tuple[WeaponCategory, ...]
    max_price: int
    label: str


@dataclass(frozen=True, slots=True)
class RulesDef:
    rounds: int
    starting_balance: int
    round_bonuses: tuple[int, ...]
    weights: ScoringWeights
    economy: EconomyDef
    round_pools: tuple[RoundPoolDef, ...] = ()

    def round_bonus(self, round_number: int) -> int:
        """Return the balance top-up granted at the start of ``round_number``."""
        index = round_number - 2
        if index < 0 or index >= len(self.round_bonuses):
            return 0
        return self.round_bonuses[index]

    def pool_for_round(self, round_number: int) -> RoundPoolDef | None:
        for pool in self.round_pools:
            if pool.round_number == round_number:
                return pool
        return None
