"""Modifier definitions: perks, attachments and random events."""
from __future__ import annotations

from dataclasses import dataclass

from armsrace.core.types import ModifierKind, ModifierTarget


@dataclass(frozen=True, slots=True)
class ModifierEffect:
    """A single attribute change.

    Multiplicative effects scale the attribute by ``1 + amount``; additive
    effects add ``amount`` to it.
    """

    target: ModifierTarget
    amount: float
    kind: ModifierKind = "multiplicative"


@dataclass(frozen=True, slots=True)
class PerkDef:
    """Player perk, chosen once and active for the whole game."""

    id: str
    name: str
    effects: tuple[ModifierEffect, ...]


@dataclass(frozen=True, slots=True)
class AttachmentDef:
    """Shop attachment; owned attachments stack for the rest of the game."""

    id: str
    name: str
    price: int
    effects: tuple[ModifierEffect, ...]


@dataclass(frozen=True, slots=True)
class EventDef:
    """Environmental event rolled once per round and applied to both sides."""

    id: str
    name: str
    probability: float
    effects: tuple[ModifierEffect, ...]


Modifier = PerkDef | AttachmentDef | EventDef
