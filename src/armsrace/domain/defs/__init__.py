"""Domain definition exports."""

from .difficulty_def import DifficultyDef
from .modifier_def import AttachmentDef, EventDef, Modifier, ModifierEffect, PerkDef
from .rules_def import EconomyDef, RoundPoolDef, RulesDef, ScoringWeights
from .weapon_def import WeaponDef

__all__ = [
    "AttachmentDef",
    "DifficultyDef",
    "EconomyDef",
    "EventDef",
    "Modifier",
    "ModifierEffect",
    "PerkDef",
    "RoundPoolDef",
    "RulesDef",
    "ScoringWeights",
    "WeaponDef",
]
