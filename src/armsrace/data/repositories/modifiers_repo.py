"""Perk, attachment and event repositories.

A modifier entry declares its effect either inline (``target``/``amount``
with an optional ``kind``) or as an ``effects`` list of such objects. The
JSON target ``range`` maps to the ``range_`` weapon attribute. Magazine
effects are additive and everything else is multiplicative; an explicit
``kind`` must agree with that rule.
"""
from __future__ import annotations

from typing import Dict, List

from armsrace.core.types import MODIFIER_TARGETS, ModifierTarget
from armsrace.data.errors import DataValidationError
from armsrace.data.repositories.base import RepositoryBase, T
from armsrace.domain.defs import AttachmentDef, EventDef, ModifierEffect, PerkDef

_TARGET_ALIASES: dict[str, ModifierTarget] = {"range": "range_"}
_EFFECT_FIELDS = {"target", "amount"}


class _ModifierRepositoryBase(RepositoryBase[T]):
    def _parse_effects(self, payload: dict[str, object], context: str) -> tuple[ModifierEffect, ...]:
        has_inline = "target" in payload or "amount" in payload
        has_list = "effects" in payload
        if has_inline == has_list:
            raise DataValidationError(
                f"{context} must declare either target/amount or an effects list."
            )
        if has_inline:
            return (self._parse_effect(payload, context),)
        raw_effects = self._require_list(payload["effects"], f"{context} effects")
        if not raw_effects:
            raise DataValidationError(f"{context} effects must not be empty.")
        effects: List[ModifierEffect] = []
        for index, entry in enumerate(raw_effects):
            entry_context = f"{context} effects[{index}]"
            entry_map = self._require_mapping(entry, entry_context)
            self._assert_exact_fields(entry_map, _EFFECT_FIELDS, entry_context, optional_fields={"kind"})
            effects.append(self._parse_effect(entry_map, entry_context))
        return tuple(effects)

    def _parse_effect(self, payload: dict[str, object], context: str) -> ModifierEffect:
        raw_target = self._require_str(payload.get("target"), f"{context} target")
        target = _TARGET_ALIASES.get(raw_target, raw_target)
        if target not in MODIFIER_TARGETS:
            raise DataValidationError(f"{context} target '{raw_target}' is invalid.")
        amount = self._require_number(payload.get("amount"), f"{context} amount")
        expected_kind = "additive" if target == "magazine" else "multiplicative"
        kind = self._require_str(payload.get("kind", expected_kind), f"{context} kind")
        if kind != expected_kind:
            raise DataValidationError(
                f"{context} kind '{kind}' is invalid; {raw_target} effects are {expected_kind}."
            )
        return ModifierEffect(target=target, amount=amount, kind=kind)


class PerksRepository(_ModifierRepositoryBase[PerkDef]):
    """Loads perk definitions."""

    def __init__(self, base_path=None) -> None:
        super().__init__("perks.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, PerkDef]:
        perks: Dict[str, PerkDef] = {}
        for perk_id, payload in raw.items():
            context = f"perk '{perk_id}'"
            perk_data = self._require_mapping(payload, context)
            self._assert_exact_fields(
                perk_data, {"name"}, context, optional_fields={"target", "amount", "kind", "effects"}
            )
            perks[perk_id] = PerkDef(
                id=perk_id,
                name=self._require_str(perk_data["name"], f"{context} name"),
                effects=self._parse_effects(perk_data, context),
            )
        return perks


class AttachmentsRepository(_ModifierRepositoryBase[AttachmentDef]):
    """Loads attachment definitions and their shop prices."""

    def __init__(self, base_path=None) -> None:
        super().__init__("attachments.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, AttachmentDef]:
        attachments: Dict[str, AttachmentDef] = {}
        for attachment_id, payload in raw.items():
            context = f"attachment '{attachment_id}'"
            attachment_data = self._require_mapping(payload, context)
            self._assert_exact_fields(
                attachment_data,
                {"name", "price"},
                context,
                optional_fields={"target", "amount", "kind", "effects"},
            )
            price = self._require_int(attachment_data["price"], f"{context} price")
            if price < 0:
                raise DataValidationError(f"{context} price must be zero or higher.")
            attachments[attachment_id] = AttachmentDef(
                id=attachment_id,
                name=self._require_str(attachment_data["name"], f"{context} name"),
                price=price,
                effects=self._parse_effects(attachment_data, context),
            )
        return attachments


class EventsRepository(_ModifierRepositoryBase[EventDef]):
    """Loads random events; ``in_file_order`` gives the roll order."""

    def __init__(self, base_path=None) -> None:
        super().__init__("events.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, EventDef]:
        events: Dict[str, EventDef] = {}
        for event_id, payload in raw.items():
            context = f"event '{event_id}'"
            event_data = self._require_mapping(payload, context)
            self._assert_exact_fields(
                event_data,
                {"name", "probability"},
                context,
                optional_fields={"target", "amount", "kind", "effects"},
            )
            probability = self._require_number(event_data["probability"], f"{context} probability")
            if not 0.0 <= probability <= 1.0:
                raise DataValidationError(f"{context} probability must be between 0 and 1.")
            events[event_id] = EventDef(
                id=event_id,
                name=self._require_str(event_data["name"], f"{context} name"),
                probability=probability,
                effects=self._parse_effects(event_data, context),
            )
        return events
