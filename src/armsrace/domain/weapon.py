"""Per-round mutable weapon instances."""
from __future__ import annotations

from dataclasses import dataclass

from armsrace.core.types import WeaponCategory
from armsrace.domain.defs import ScoringWeights, WeaponDef
from armsrace.domain.scoring import UNIT_WEIGHTS, recompute_scores


@dataclass(slots=True)
class WeaponInstance:
    """Value copy of a WeaponDef that modifiers may mutate during a round."""

    id: str
    name: str
    category: WeaponCategory
    price: int
    damage: int
    fire_rate: float
    magazine: int
    falloff: int
    range_: float
    recoil: float
    balanced_score: float = 0.0
    dps: float = 0.0

    @classmethod
    def from_def(cls, weapon_def: WeaponDef, weights: ScoringWeights = UNIT_WEIGHTS) -> WeaponInstance:
        instance = cls(
            id=weapon_def.id,
            name=weapon_def.name,
            category=weapon_def.category,
            price=weapon_def.price,
            damage=weapon_def.damage,
            fire_rate=weapon_def.fire_rate,
            magazine=weapon_def.magazine,
            falloff=weapon_def.falloff,
            range_=weapon_def.range_,
            recoil=weapon_def.recoil,
        )
        return recompute_scores(instance, weights)

    def copy(self) -> WeaponInstance:
        """Return an independent instance with identical attributes and scores."""
        return WeaponInstance(
            id=self.id,
            name=self.name,
            category=self.category,
            price=self.price,
            damage=self.damage,
            fire_rate=self.fire_rate,
            magazine=self.magazine,
            falloff=self.falloff,
            range_=self.range_,
            recoil=self.recoil,
            balanced_score=self.balanced_score,
            dps=self.dps,
        )
