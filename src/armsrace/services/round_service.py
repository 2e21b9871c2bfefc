"""Round orchestration: purchase, modifiers, opponent pick and outcome."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from armsrace.core.types import RoundOutcome
from armsrace.data.config import GameConfig
from armsrace.domain.defs import WeaponDef
from armsrace.domain.modifiers import apply_attachments, apply_event, apply_perk, select_round_event
from armsrace.domain.opponent import select_opponent
from armsrace.domain.state import GameState
from armsrace.domain.weapon import WeaponInstance

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RoundEvent:
    """Base round event."""


@dataclass(slots=True)
class WeaponPurchasedEvent(RoundEvent):
    weapon_id: str
    weapon_name: str
    price: int
    balance: int


@dataclass(slots=True)
class RoundEventTriggeredEvent(RoundEvent):
    event_id: str
    event_name: str


@dataclass(slots=True)
class OpponentSelectedEvent(RoundEvent):
    weapon_id: str
    weapon_name: str


@dataclass(slots=True)
class RoundResolvedEvent(RoundEvent):
    round_number: int
    outcome: RoundOutcome
    player_weapon: WeaponInstance
    computer_weapon: WeaponInstance
    bonus: int
    balance: int


@dataclass(slots=True)
class RoundActionFailedEvent(RoundEvent):
    reason: str
    message: str


@dataclass(slots=True)
class WeaponSoldEvent(RoundEvent):
    weapon_name: str
    amount: int
    balance: int


def resolve_outcome(player_score: float, computer_score: float) -> RoundOutcome:
    """Strictly higher wins; equal scores are a draw."""
    if player_score > computer_score:
        return "win"
    if player_score < computer_score:
        return "loss"
    return "draw"


class RoundService:
    """Runs one round against the computer using an explicit GameConfig."""

    def __init__(self, config: GameConfig) -> None:
        self._config = config

    def eligible_weapons(self, state: GameState) -> List[WeaponDef]:
        """Return the weapons offered this round, cheapest first.

        Rounds with a pool offer its categories up to the pool's price cap.
        Rounds without one, or whose pool matches nothing, offer every
        weapon the player can currently afford.
        """
        pool = self._config.rules.pool_for_round(state.round_number)
        eligible: List[WeaponDef] = []
        if pool is not None:
            eligible = [
                weapon
                for weapon in self._config.weapons
                if weapon.category in pool.categories and weapon.price <= pool.max_price
            ]
        if not eligible:
            eligible = [weapon for weapon in self._config.weapons if weapon.price <= state.balance]
        return sorted(eligible, key=lambda weapon: (weapon.price, weapon.name))

    def round_label(self, state: GameState) -> str:
        pool = self._config.rules.pool_for_round(state.round_number)
        if pool is None or not self._pool_has_weapons(state):
            return "Mixed"
        return pool.label

    def play_round(self, state: GameState, weapon_id: str) -> List[RoundEvent]:
        if state.round_number <= 0:
            return [RoundActionFailedEvent(reason="round_not_started", message="Start a round first.")]
        if state.round_played:
            return [
                RoundActionFailedEvent(
                    reason="round_already_played", message="This round has already been played."
                )
            ]
        eligible = self.eligible_weapons(state)
        if not eligible:
            return [RoundActionFailedEvent(reason="no_weapons", message="No weapons are available.")]
        chosen = next((weapon for weapon in eligible if weapon.id == weapon_id), None)
        if chosen is None:
            return [
                RoundActionFailedEvent(
                    reason="not_eligible", message="That weapon is not available this round."
                )
            ]

        if chosen.price > state.balance:
            return [
                RoundActionFailedEvent(
                    reason="insufficient_balance",
                    message=f"Need ${chosen.price}, have ${state.balance}.",
                )
            ]
        # Catalog price is charged; the perk only alters the instance, e.g. its resale value.
        state.balance -= chosen.price
        events: List[RoundEvent] = [
            WeaponPurchasedEvent(
                weapon_id=chosen.id,
                weapon_name=chosen.name,
                price=chosen.price,
                balance=state.balance,
            )
        ]
        weights = self._config.rules.weights
        player_weapon = apply_perk(
            WeaponInstance.from_def(chosen, weights), self._config.perk(state.perk_id), weights
        )
        apply_attachments(player_weapon, self._config.resolve_attachments(state.attachments), weights)

        candidates = [WeaponInstance.from_def(weapon, weights) for weapon in eligible]
        difficulty = self._config.difficulty(state.difficulty_id)
        computer_weapon = select_opponent(candidates, difficulty, state.rng).copy()
        events.append(OpponentSelectedEvent(weapon_id=computer_weapon.id, weapon_name=computer_weapon.name))

        round_event = select_round_event(self._config.events, state.rng) if state.events_enabled else None
        if round_event is not None:
            apply_event(player_weapon, round_event, weights)
            apply_event(computer_weapon, round_event, weights)
            events.append(RoundEventTriggeredEvent(event_id=round_event.id, event_name=round_event.name))

        outcome = resolve_outcome(player_weapon.balanced_score, computer_weapon.balanced_score)
        bonus = self._bonus_for(outcome)
        state.balance += bonus
        state.record_round(player_weapon.name, outcome)
        logger.info(
            "Round %d: %s (%.2f) vs %s (%.2f) -> %s",
            state.round_number,
            player_weapon.name,
            player_weapon.balanced_score,
            computer_weapon.name,
            computer_weapon.balanced_score,
            outcome,
        )
        events.append(
            RoundResolvedEvent(
                round_number=state.round_number,
                outcome=outcome,
                player_weapon=player_weapon,
                computer_weapon=computer_weapon,
                bonus=bonus,
                balance=state.balance,
            )
        )
        return events

    def sell_price(self, weapon: WeaponInstance) -> int:
        return int(weapon.price * self._config.rules.economy.sell_rate)

    def sell_weapon(self, state: GameState, weapon: WeaponInstance) -> WeaponSoldEvent:
        amount = self.sell_price(weapon)
        state.balance += amount
        return WeaponSoldEvent(weapon_name=weapon.name, amount=amount, balance=state.balance)

    def _pool_has_weapons(self, state: GameState) -> bool:
        pool = self._config.rules.pool_for_round(state.round_number)
        if pool is None:
            return False
        return any(
            weapon.category in pool.categories and weapon.price <= pool.max_price
            for weapon in self._config.weapons
        )

    def _bonus_for(self, outcome: RoundOutcome) -> int:
        economy = self._config.rules.economy
        if outcome == "win":
            return economy.win_bonus
        if outcome == "loss":
            return economy.loss_bonus
        return 0
