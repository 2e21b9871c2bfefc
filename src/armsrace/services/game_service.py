"""Game flow: new games, round progression and the final tally."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from armsrace.core.rng import RNG
from armsrace.core.types import RoundOutcome
from armsrace.data.config import GameConfig
from armsrace.domain.profile import Profile, record_game
from armsrace.domain.state import GameState
from armsrace.services.errors import GameOverError
from armsrace.services.round_service import resolve_outcome

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GameEvent:
    """Base game flow event."""


@dataclass(slots=True)
class RoundStartedEvent(GameEvent):
    round_number: int
    bonus: int
    balance: int


@dataclass(slots=True)
class GameFinishedEvent(GameEvent):
    result: RoundOutcome
    player_score: int
    computer_score: int
    draws: int
    unlocked_achievements: List[str]


class GameService:
    """Creates game state and advances it round by round."""

    def __init__(self, config: GameConfig) -> None:
        self._config = config

    def new_game(
        self,
        *,
        seed: int | None,
        difficulty_id: str,
        perk_id: str | None,
        events_enabled: bool = True,
    ) -> GameState:
        # Fail before any round starts rather than mid-round.
        difficulty = self._config.difficulty(difficulty_id)
        perk = self._config.perk(perk_id)
        state = GameState(
            seed=seed,
            rng=RNG(seed),
            difficulty_id=difficulty.id,
            perk_id=perk.id if perk is not None else None,
            events_enabled=events_enabled,
            balance=self._config.rules.starting_balance,
        )
        logger.info(
            "Game started: difficulty=%s perk=%s seed=%s", difficulty.id, state.perk_id, seed
        )
        return state

    def is_finished(self, state: GameState) -> bool:
        return state.round_number >= self._config.rules.rounds and state.round_played

    def begin_round(self, state: GameState) -> List[GameEvent]:
        if state.round_number >= self._config.rules.rounds:
            raise GameOverError(f"All {self._config.rules.rounds} rounds have been played.")
        state.round_number += 1
        state.round_played = False
        bonus = self._config.rules.round_bonus(state.round_number)
        state.balance += bonus
        logger.debug("Round %d begins with balance %d.", state.round_number, state.balance)
        return [RoundStartedEvent(round_number=state.round_number, bonus=bonus, balance=state.balance)]

    @staticmethod
    def final_result(state: GameState) -> RoundOutcome:
        return resolve_outcome(state.player_score, state.computer_score)

    def finish_game(self, state: GameState, profile: Profile) -> GameFinishedEvent:
        """Fold the game into ``profile``; call once the last round is resolved."""
        unlocked = record_game(profile, state, total_rounds=self._config.rules.rounds)
        result = self.final_result(state)
        logger.info(
            "Game over: player %d - computer %d (%s)", state.player_score, state.computer_score, result
        )
        return GameFinishedEvent(
            result=result,
            player_score=state.player_score,
            computer_score=state.computer_score,
            draws=state.draws,
            unlocked_achievements=unlocked,
        )
