"""Weapon definition structures."""
from __future__ import annotations

from dataclasses import dataclass

from armsrace.core.types import WeaponCategory


@dataclass(frozen=True, slots=True)
class WeaponDef:
    """Immutable catalog weapon, shared safely across rounds and simulations."""

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

    def invariant_violations(self) -> list[str]:
        """Return the names of attributes that break the playable-weapon rules."""
        problems: list[str] = []
        if not self.name:
            problems.append("name")
        if self.price <= 0:
            problems.append("price")
        if self.damage <= 0:
            problems.append("damage")
        if self.fire_rate <= 0:
            problems.append("fire_rate")
        if self.magazine <= 0:
            problems.append("magazine")
        if self.falloff < 0:
            problems.append("falloff")
        if self.range_ <= 0:
            problems.append("range")
        if self.recoil < 0:
            problems.append("recoil")
        return problems
