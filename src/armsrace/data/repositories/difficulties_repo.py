"""Difficulty repository."""
from __future__ import annotations

import math
from typing import Dict

from armsrace.core.types import DIFFICULTY_IDS
from armsrace.data.errors import DataValidationError
from armsrace.data.repositories.base import RepositoryBase
from armsrace.domain.defs import DifficultyDef

WEIGHT_SUM_TOLERANCE = 1e-6


class DifficultiesRepository(RepositoryBase[DifficultyDef]):
    """Loads tier weights per difficulty and checks they form a distribution."""

    def __init__(self, base_path=None) -> None:
        super().__init__("difficulties.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, DifficultyDef]:
        difficulties: Dict[str, DifficultyDef] = {}
        for difficulty_id, payload in raw.items():
            context = f"difficulty '{difficulty_id}'"
            if difficulty_id not in DIFFICULTY_IDS:
                raise DataValidationError(f"{context} is not one of {list(DIFFICULTY_IDS)}.")
            weights = self._require_mapping(payload, context)
            self._assert_exact_fields(weights, {"low", "medium", "high"}, context)
            low = self._require_weight(weights["low"], f"{context} low")
            medium = self._require_weight(weights["medium"], f"{context} medium")
            high = self._require_weight(weights["high"], f"{context} high")
            total = low + medium + high
            if not math.isclose(total, 1.0, abs_tol=WEIGHT_SUM_TOLERANCE):
                raise DataValidationError(f"{context} weights must sum to 1.0 (found {total:g}).")
            difficulties[difficulty_id] = DifficultyDef(
                id=difficulty_id, low=low, medium=medium, high=high
            )
        return difficulties

    def _require_weight(self, value: object, context: str) -> float:
        weight = self._require_number(value, context)
        if weight < 0:
            raise DataValidationError(f"{context} must be non-negative.")
        return weight
