"""Weapons repository."""
from __future__ import annotations

import logging
from typing import Dict

from armsrace.core.types import WEAPON_CATEGORIES
from armsrace.data.errors import DataValidationError
from armsrace.data.repositories.base import RepositoryBase
from armsrace.domain.defs import WeaponDef

logger = logging.getLogger(__name__)


class WeaponsRepository(RepositoryBase[WeaponDef]):
    """Loads weapon definitions and drops records that are not playable.

    Schema problems raise DataValidationError. Records that are well formed
    but break a value rule (for example a zero price) are skipped with a
    warning so the rest of the catalog stays usable.
    """

    def __init__(self, base_path=None) -> None:
        super().__init__("weapons.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, WeaponDef]:
        weapons: Dict[str, WeaponDef] = {}
        seen_names: set[str] = set()
        for raw_id, payload in raw.items():
            if not isinstance(raw_id, str):
                raise DataValidationError("Weapon IDs must be strings.")
            context = f"weapon '{raw_id}'"
            weapon_data = self._require_mapping(payload, context)
            self._assert_exact_fields(
                weapon_data,
                {"name", "category", "price", "damage", "fire_rate", "magazine", "falloff", "range", "recoil"},
                context,
            )

            category = self._require_str(weapon_data["category"], f"{context} category")
            if category not in WEAPON_CATEGORIES:
                raise DataValidationError(f"{context} category '{category}' is invalid.")

            weapon = WeaponDef(
                id=raw_id,
                name=self._require_str(weapon_data["name"], f"{context} name"),
                category=category,
                price=self._require_int(weapon_data["price"], f"{context} price"),
                damage=self._require_int(weapon_data["damage"], f"{context} damage"),
                fire_rate=self._require_number(weapon_data["fire_rate"], f"{context} fire_rate"),
                magazine=self._require_int(weapon_data["magazine"], f"{context} magazine"),
                falloff=self._require_int(weapon_data["falloff"], f"{context} falloff"),
                range_=self._require_number(weapon_data["range"], f"{context} range"),
                recoil=self._require_number(weapon_data["recoil"], f"{context} recoil"),
            )
            problems = weapon.invariant_violations()
            if problems:
                logger.warning("Skipping invalid weapon '%s': bad %s.", raw_id, ", ".join(problems))
                continue
            if weapon.name in seen_names:
                raise DataValidationError(f"{context} reuses weapon name '{weapon.name}'.")
            seen_names.add(weapon.name)
            weapons[raw_id] = weapon
        return weapons
