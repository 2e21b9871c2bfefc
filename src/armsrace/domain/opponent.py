"""Difficulty-weighted opponent weapon selection.

Candidates are ranked by balanced score and cut into three contiguous
tiers. The difficulty decides how likely each tier is to be drawn from,
so harder settings lean toward stronger weapons without always picking
the best one.

Partition rule: ``tier_size = max(1, n // 3)``; low takes the first
``tier_size`` weapons, high takes the last ``tier_size`` and medium keeps
whatever sits between them. Tiers never overlap.
"""
from __future__ import annotations

import logging
from typing import Sequence

from armsrace.core.errors import DegenerateInputError
from armsrace.core.rng import RNG
from armsrace.core.types import Tier
from armsrace.domain.defs import DifficultyDef
from armsrace.domain.weapon import WeaponInstance

logger = logging.getLogger(__name__)

MIN_TIERED_CANDIDATES = 3


def partition_tiers(
    ranked: Sequence[WeaponInstance],
) -> dict[Tier, list[WeaponInstance]]:
    """Split score-ascending candidates into low/medium/high tiers."""
    size = len(ranked)
    tier_size = max(1, size // 3)
    return {
        "low": list(ranked[:tier_size]),
        "medium": list(ranked[tier_size : size - tier_size]),
        "high": list(ranked[size - tier_size :]),
    }


def choose_tier(draw: float, difficulty: DifficultyDef) -> Tier:
    if draw < difficulty.low:
        return "low"
    if draw < difficulty.low + difficulty.medium:
        return "medium"
    return "high"


def select_opponent(
    candidates: Sequence[WeaponInstance],
    difficulty: DifficultyDef,
    rng: RNG,
) -> WeaponInstance:
    if not candidates:
        raise DegenerateInputError("Opponent selection requires at least one candidate weapon.")

    ranked = sorted(candidates, key=lambda weapon: weapon.balanced_score)
    if len(ranked) < MIN_TIERED_CANDIDATES:
        return rng.choice(ranked)

    tiers = partition_tiers(ranked)
    tier = choose_tier(rng.random(), difficulty)
    pool = tiers[tier]
    if not pool:
        pool = ranked
    logger.debug("Opponent drawing from %s tier (%d weapons).", tier, len(pool))
    return rng.choice(pool)
