"""Attachment shop for deterministic buy flows."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from armsrace.data.config import GameConfig
from armsrace.domain.state import GameState


@dataclass(slots=True)
class ShopEvent:
    """Base class for shop-related events."""


@dataclass(slots=True)
class ShopPurchaseEvent(ShopEvent):
    attachment_id: str
    attachment_name: str
    total_cost: int
    balance: int


@dataclass(slots=True)
class ShopActionFailedEvent(ShopEvent):
    reason: str
    message: str


@dataclass(slots=True)
class ShopEntryView:
    attachment_id: str
    name: str
    price: int
    owned: int
    affordable: bool


@dataclass(slots=True)
class ShopView:
    balance: int
    entries: List[ShopEntryView] = field(default_factory=list)


@dataclass(slots=True)
class ShopBatchResult:
    events: List[ShopEvent]
    success_count: int
    failure_count: int


class ShopService:
    """Sells attachments; bought attachments stay active for the rest of the game."""

    def __init__(self, config: GameConfig) -> None:
        self._config = config

    def build_shop_view(self, state: GameState) -> ShopView:
        entries = [
            ShopEntryView(
                attachment_id=attachment.id,
                name=attachment.name,
                price=attachment.price,
                owned=state.attachments.count(attachment.id),
                affordable=attachment.price <= state.balance,
            )
            for attachment in sorted(self._config.attachments.values(), key=lambda entry: entry.id)
        ]
        return ShopView(balance=state.balance, entries=entries)

    def buy_attachment(self, state: GameState, attachment_id: str) -> List[ShopEvent]:
        attachment = self._config.attachments.get(attachment_id)
        if attachment is None:
            return [ShopActionFailedEvent(reason="not_in_stock", message="Attachment is not sold here.")]
        if state.balance < attachment.price:
            return [ShopActionFailedEvent(reason="insufficient_balance", message="Not enough money.")]
        state.balance -= attachment.price
        state.attachments.append(attachment.id)
        return [
            ShopPurchaseEvent(
                attachment_id=attachment.id,
                attachment_name=attachment.name,
                total_cost=attachment.price,
                balance=state.balance,
            )
        ]

    def buy_many(self, state: GameState, attachment_ids: Sequence[str]) -> ShopBatchResult:
        events: List[ShopEvent] = []
        success = 0
        failure = 0
        for attachment_id in attachment_ids:
            result = self.buy_attachment(state, attachment_id)
            events.extend(result)
            if result and isinstance(result[0], ShopPurchaseEvent):
                success += 1
            else:
                failure += 1
        return ShopBatchResult(events=events, success_count=success, failure_count=failure)
