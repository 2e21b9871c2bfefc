"""Difficulty definition structures."""
from __future__ import annotations

from dataclasses import dataclass

from armsrace.core.types import DifficultyId, Tier


@dataclass(frozen=True, slots=True)
class DifficultyDef:
    """Probability of the computer drawing from each score tier."""

    id: DifficultyId
    low: float
    medium: float
    high: float

    def weight(self, tier: Tier) -> float:
        return {"low": self.low, "medium": self.medium, "high": self.high}[tier]
