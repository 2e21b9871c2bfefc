"""Repository exports."""

from .difficulties_repo import DifficultiesRepository
from .modifiers_repo import AttachmentsRepository, EventsRepository, PerksRepository
from .rules_repo import RulesRepository
from .weapons_repo import WeaponsRepository

__all__ = [
    "AttachmentsRepository",
    "DifficultiesRepository",
    "EventsRepository",
    "PerksRepository",
    "RulesRepository",
    "WeaponsRepository",
]
