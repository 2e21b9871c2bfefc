"""Batch simulation of every weapon pairing in the catalog."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from armsrace.core.rng import RNG
from armsrace.data.config import GameConfig
from armsrace.domain.modifiers import apply_event, select_round_event
from armsrace.domain.weapon import WeaponInstance

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SimulationRow:
    weapon_name: str
    wins: int
    win_rate: float


@dataclass(slots=True)
class SimulationReport:
    iterations: int
    battles: int
    rows: List[SimulationRow] = field(default_factory=list)


class SimulationService:
    """Plays every ordered weapon pairing ``count`` times and tallies win rates.

    Each pairing works on fresh private WeaponInstance copies and shares a
    single sampled event between both sides, exactly like a played round.
    """

    def __init__(self, config: GameConfig, rng: RNG, *, events_enabled: bool = True) -> None:
        self._config = config
        self._rng = rng
        self._events_enabled = events_enabled

    def simulate(self, count: int) -> SimulationReport:
        if count <= 0:
            raise ValueError("Simulation count must be positive.")
        weapons = self._config.weapons
        if len(weapons) < 2:
            return SimulationReport(iterations=count, battles=0)

        weights = self._config.rules.weights
        wins: Dict[str, int] = {weapon.name: 0 for weapon in weapons}
        battles = 0
        for _ in range(count):
            for first in weapons:
                for second in weapons:
                    if first.id == second.id:
                        continue
                    attacker = WeaponInstance.from_def(first, weights)
                    defender = WeaponInstance.from_def(second, weights)
                    if self._events_enabled:
                        event = select_round_event(self._config.events, self._rng)
                        apply_event(attacker, event, weights)
                        apply_event(defender, event, weights)
                    if attacker.balanced_score > defender.balanced_score:
                        wins[attacker.name] += 1
                    battles += 1

        opponents = len(weapons) - 1
        rows = [
            SimulationRow(
                weapon_name=name,
                wins=win_count,
                win_rate=round(win_count / opponents / count * 100, 1),
            )
            for name, win_count in wins.items()
        ]
        rows.sort(key=lambda row: (-row.win_rate, row.weapon_name))
        logger.info("Simulated %d battles over %d iterations.", battles, count)
        return SimulationReport(iterations=count, battles=battles, rows=rows)
