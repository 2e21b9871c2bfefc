"""Service layer exports."""

from .errors import GameOverError, SaveLoadError
from .game_service import GameFinishedEvent, GameService, RoundStartedEvent
from .profile_service import ProfileService, ProfileStatistics
from .round_service import (
    OpponentSelectedEvent,
    RoundActionFailedEvent,
    RoundEventTriggeredEvent,
    RoundResolvedEvent,
    RoundService,
    WeaponPurchasedEvent,
    WeaponSoldEvent,
    resolve_outcome,
)
from .settings_service import Settings, SettingsService
from .shop_service import ShopService
from .simulation_service import SimulationReport, SimulationService

__all__ = [
    "GameFinishedEvent",
    "GameOverError",
    "GameService",
    "OpponentSelectedEvent",
    "ProfileService",
    "ProfileStatistics",
    "RoundActionFailedEvent",
    "RoundEventTriggeredEvent",
    "RoundResolvedEvent",
    "RoundService",
    "RoundStartedEvent",
    "SaveLoadError",
    "Settings",
    "SettingsService",
    "ShopService",
    "SimulationReport",
    "SimulationService",
    "WeaponPurchasedEvent",
    "WeaponSoldEvent",
    "resolve_outcome",
]
