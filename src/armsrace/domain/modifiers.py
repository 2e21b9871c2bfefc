"""Modifier pipeline: perks, attachments and random events.

Every function mutates the given instance in place, recomputes its scores
and returns it. Effects whose target the modifier type does not support are
skipped with a warning instead of failing the round.
"""
from __future__ import annotations

import logging
from typing import Iterable, Sequence

from armsrace.core.rng import RNG
from armsrace.core.types import ModifierTarget
from armsrace.domain.defs import AttachmentDef, EventDef, ModifierEffect, PerkDef, ScoringWeights
from armsrace.domain.scoring import UNIT_WEIGHTS, recompute_scores
from armsrace.domain.weapon import WeaponInstance

logger = logging.getLogger(__name__)

PERK_TARGETS: frozenset[ModifierTarget] = frozenset({"price", "recoil", "range_"})
ATTACHMENT_TARGETS: frozenset[ModifierTarget] = frozenset({"damage", "recoil", "magazine"})
EVENT_TARGETS: frozenset[ModifierTarget] = frozenset({"damage", "range_", "recoil"})

# Attributes stored as whole numbers; scaled values are truncated toward zero.
_INTEGER_TARGETS: frozenset[ModifierTarget] = frozenset({"price", "damage", "magazine"})


def apply_perk(
    weapon: WeaponInstance,
    perk: PerkDef | None,
    weights: ScoringWeights = UNIT_WEIGHTS,
) -> WeaponInstance:
    if perk is not None:
        _apply_effects(weapon, perk.effects, PERK_TARGETS, source=perk.id)
    return recompute_scores(weapon, weights)


def apply_attachments(
    weapon: WeaponInstance,
    attachments: Iterable[AttachmentDef],
    weights: ScoringWeights = UNIT_WEIGHTS,
) -> WeaponInstance:
    for attachment in attachments:
        _apply_effects(weapon, attachment.effects, ATTACHMENT_TARGETS, source=attachment.id)
    return recompute_scores(weapon, weights)


def apply_event(
    weapon: WeaponInstance,
    event: EventDef | None,
    weights: ScoringWeights = UNIT_WEIGHTS,
) -> WeaponInstance:
    if event is not None:
        _apply_effects(weapon, event.effects, EVENT_TARGETS, source=event.id)
    return recompute_scores(weapon, weights)


def select_round_event(events: Sequence[EventDef], rng: RNG) -> EventDef | None:
    """Return the first event whose trial succeeds, testing in catalog order.

    Events after the first success are not rolled, so at most one event
    fires per round.
    """
    for event in events:
        if rng.random() < event.probability:
            logger.debug("Round event triggered: %s", event.id)
            return event
    return None


def _apply_effects(
    weapon: WeaponInstance,
    effects: Iterable[ModifierEffect],
    allowed_targets: frozenset[ModifierTarget],
    *,
    source: str,
) -> None:
    for effect in effects:
        if effect.target not in allowed_targets:
            logger.warning("Ignoring unsupported target '%s' on modifier '%s'.", effect.target, source)
            continue
        current = getattr(weapon, effect.target)
        if effect.kind == "additive":
            updated = current + effect.amount
        else:
            updated = current * (1 + effect.amount)
        if effect.target in _INTEGER_TARGETS:
            updated = int(updated)
        setattr(weapon, effect.target, updated)
