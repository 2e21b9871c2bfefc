from __future__ import annotations

from armsrace.data.config import GameConfig
from armsrace.domain.state import GameState
from armsrace.services import GameService, ShopService
from armsrace.services.shop_service import ShopActionFailedEvent, ShopPurchaseEvent


def _state(config: GameConfig, balance: int) -> GameState:
    state = GameService(config).new_game(seed=5, difficulty_id="normal", perk_id=None)
    state.balance = balance
    return state


def test_shop_view_lists_attachments_sorted(game_config: GameConfig) -> None:
    state = _state(game_config, 250)

    view = ShopService(game_config).build_shop_view(state)

    assert view.balance == 250
    assert [entry.attachment_id for entry in view.entries] == ["extended_mag", "grip"]
    assert [entry.affordable for entry in view.entries] == [False, True]
    assert all(entry.owned == 0 for entry in view.entries)


def test_buy_attachment_deducts_price(game_config: GameConfig) -> None:
    state = _state(game_config, 900)

    events = ShopService(game_config).buy_attachment(state, "extended_mag")

    assert events == [
        ShopPurchaseEvent(
            attachment_id="extended_mag",
            attachment_name="Extended Magazine",
            total_cost=300,
            balance=600,
        )
    ]
    assert state.balance == 600
    assert state.attachments == ["extended_mag"]


def test_buy_attachment_insufficient_balance(game_config: GameConfig) -> None:
    state = _state(game_config, 100)

    events = ShopService(game_config).buy_attachment(state, "grip")

    assert isinstance(events[0], ShopActionFailedEvent)
    assert events[0].reason == "insufficient_balance"
    assert state.balance == 100
    assert state.attachments == []


def test_buy_attachment_unknown_id(game_config: GameConfig) -> None:
    state = _state(game_config, 900)

    events = ShopService(game_config).buy_attachment(state, "laser_sight")

    assert isinstance(events[0], ShopActionFailedEvent)
    assert events[0].reason == "not_in_stock"


def test_buy_many_counts_success_and_failure(game_config: GameConfig) -> None:
    state = _state(game_config, 600)
    service = ShopService(game_config)

    result = service.buy_many(state, ["grip", "grip", "extended_mag", "laser_sight"])

    assert result.success_count == 2
    assert result.failure_count == 2
    assert state.balance == 200
    assert state.attachments == ["grip", "grip"]
    view = service.build_shop_view(state)
    assert {entry.attachment_id: entry.owned for entry in view.entries} == {"extended_mag": 0, "grip": 2}
