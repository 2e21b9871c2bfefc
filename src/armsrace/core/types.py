"""Shared type aliases for the core and domain layers."""
from typing import Literal

DifficultyId = Literal["easy", "normal", "hard"]
Tier = Literal["low", "medium", "high"]
RoundOutcome = Literal["win", "loss", "draw"]
ModifierTarget = Literal["price", "damage", "magazine", "range_", "recoil"]
ModifierKind = Literal["multiplicative", "additive"]
WeaponCategory = Literal["pistols", "smgs", "shotguns", "rifles", "snipers", "lmgs", "other"]

DIFFICULTY_IDS: tuple[DifficultyId, ...] = ("easy", "normal", "hard")
WEAPON_CATEGORIES: tuple[WeaponCategory, ...] = (
    "pistols",
    "smgs",
    "shotguns",
    "rifles",
    "snipers",
    "lmgs",
    "other",
)
MODIFIER_TARGETS: tuple[ModifierTarget, ...] = ("price", "damage", "magazine", "range_", "recoil")

__all__ = [
    "DIFFICULTY_IDS",
    "DifficultyId",
    "MODIFIER_TARGETS",
    "ModifierKind",
    "ModifierTarget",
    "RoundOutcome",
    "Tier",
    "WEAPON_CATEGORIES",
    "WeaponCategory",
]
