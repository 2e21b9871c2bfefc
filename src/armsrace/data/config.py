"""Explicit game configuration assembled from the definition repositories."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping

from armsrace.data.errors import ConfigError
from armsrace.data.repositories import (
    AttachmentsRepository,
    DifficultiesRepository,
    EventsRepository,
    PerksRepository,
    RulesRepository,
    WeaponsRepository,
)
from armsrace.domain.defs import (
    AttachmentDef,
    DifficultyDef,
    EventDef,
    PerkDef,
    RulesDef,
    WeaponDef,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Everything the engine needs, handed to services instead of read from globals."""

    rules: RulesDef
    weapons: tuple[WeaponDef, ...]
    perks: Mapping[str, PerkDef]
    attachments: Mapping[str, AttachmentDef]
    events: tuple[EventDef, ...]
    difficulties: Mapping[str, DifficultyDef]

    def difficulty(self, difficulty_id: str) -> DifficultyDef:
        try:
            return self.difficulties[difficulty_id]
        except KeyError as exc:
            raise ConfigError(f"Difficulty '{difficulty_id}' is not defined.") from exc

    def perk(self, perk_id: str | None) -> PerkDef | None:
        """Return the perk, or None (a no-op) for a missing or unknown id."""
        if perk_id is None:
            return None
        perk = self.perks.get(perk_id)
        if perk is None:
            logger.warning("Unknown perk '%s' ignored.", perk_id)
        return perk

    def resolve_attachments(self, attachment_ids: Iterable[str]) -> list[AttachmentDef]:
        """Return the attachments for the known ids; unknown ids are skipped."""
        resolved: list[AttachmentDef] = []
        for attachment_id in attachment_ids:
            attachment = self.attachments.get(attachment_id)
            if attachment is None:
                logger.warning("Unknown attachment '%s' ignored.", attachment_id)
                continue
            resolved.append(attachment)
        return resolved


def load_game_config(base_path: Path | str | None = None) -> GameConfig:
    """Load and validate every definition file under ``base_path``."""
    perks_repo = PerksRepository(base_path)
    attachments_repo = AttachmentsRepository(base_path)
    difficulties_repo = DifficultiesRepository(base_path)
    config = GameConfig(
        rules=RulesRepository(base_path).get_rules(),
        weapons=tuple(WeaponsRepository(base_path).all()),
        perks={perk.id: perk for perk in perks_repo.all()},
        attachments={attachment.id: attachment for attachment in attachments_repo.all()},
        events=tuple(EventsRepository(base_path).in_file_order()),
        difficulties={difficulty.id: difficulty for difficulty in difficulties_repo.all()},
    )
    logger.debug(
        "Loaded config: %d weapons, %d perks, %d attachments, %d events.",
        len(config.weapons),
        len(config.perks),
        len(config.attachments),
        len(config.events),
    )
    return config
