"""Balanced-score and DPS formulas.

The engine is pure: it reads a weapon's current attributes and never
updates anything on its own. Callers that mutate a weapon must call
``recompute_scores`` before the scores are compared.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from armsrace.domain.defs import ScoringWeights

if TYPE_CHECKING:
    from armsrace.domain.weapon import WeaponInstance

UNIT_WEIGHTS = ScoringWeights()
SECONDS_PER_MINUTE = 60.0


def compute_balanced_score(weapon: WeaponInstance, weights: ScoringWeights = UNIT_WEIGHTS) -> float:
    """Return ((dmg*rate) + (mag*range)) / (falloff + recoil) under the given weights."""
    numerator = (weapon.damage * weights.damage * weapon.fire_rate * weights.firerate) + (
        weapon.magazine * weights.magazine * weapon.range_ * weights.range
    )
    denominator = (weapon.falloff + weapon.recoil) * weights.denominator
    if denominator == 0:
        return 0.0
    return float(numerator) / denominator


def compute_dps(weapon: WeaponInstance) -> float:
    """Return damage per second; fire rate is expressed in rounds per minute."""
    return (weapon.damage * weapon.fire_rate) / SECONDS_PER_MINUTE


def recompute_scores(weapon: WeaponInstance, weights: ScoringWeights = UNIT_WEIGHTS) -> WeaponInstance:
    weapon.balanced_score = compute_balanced_score(weapon, weights)
    weapon.dps = compute_dps(weapon)
    return weapon
