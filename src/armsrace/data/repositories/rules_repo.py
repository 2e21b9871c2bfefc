"""Repository for global game rules: weights, economy and round pools."""
from __future__ import annotations

from typing import Dict, List

from armsrace.core.types import WEAPON_CATEGORIES
from armsrace.data.errors import DataReferenceError, DataValidationError
from armsrace.data.repositories.base import RepositoryBase
from armsrace.domain.defs import EconomyDef, RoundPoolDef, RulesDef, ScoringWeights


class RulesRepository(RepositoryBase[RulesDef]):
    """Loads the single rules object from rules.json."""

    def __init__(self, base_path=None) -> None:
        super().__init__("rules.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, RulesDef]:
        self._assert_exact_fields(
            raw, {"game", "economy"}, "rules.json", optional_fields={"weights", "round_pools"}
        )
        game = self._require_mapping(raw["game"], "rules.game")
        self._assert_exact_fields(game, {"rounds", "starting_balance", "round_bonuses"}, "rules.game")
        rounds = self._require_positive_int(game["rounds"], "rules.game.rounds")
        starting_balance = self._require_int(game["starting_balance"], "rules.game.starting_balance")
        if starting_balance < 0:
            raise DataValidationError("rules.game.starting_balance must be zero or higher.")
        bonuses_raw = self._require_list(game["round_bonuses"], "rules.game.round_bonuses")
        round_bonuses = tuple(
            self._require_int(bonus, f"rules.game.round_bonuses[{index}]")
            for index, bonus in enumerate(bonuses_raw)
        )

        return {
            "rules": RulesDef(
                rounds=rounds,
                starting_balance=starting_balance,
                round_bonuses=round_bonuses,
                weights=self._parse_weights(raw.get("weights", {})),
                economy=self._parse_economy(raw["economy"]),
                round_pools=self._parse_round_pools(raw.get("round_pools", [])),
            )
        }

    def get_rules(self) -> RulesDef:
        self._ensure_loaded()
        assert self._definitions is not None
        return self._definitions["rules"]

    def _parse_weights(self, value: object) -> ScoringWeights:
        weights = self._require_mapping(value, "rules.weights")
        fields = {"damage", "firerate", "magazine", "range", "denominator"}
        self._assert_exact_fields(weights, set(), "rules.weights", optional_fields=fields)
        parsed = {
            key: self._require_number(weights[key], f"rules.weights.{key}") for key in weights
        }
        return ScoringWeights(**parsed)

    def _parse_economy(self, value: object) -> EconomyDef:
        economy = self._require_mapping(value, "rules.economy")
        self._assert_exact_fields(economy, {"sell_rate", "win_bonus", "loss_bonus"}, "rules.economy")
        sell_rate = self._require_number(economy["sell_rate"], "rules.economy.sell_rate")
        if not 0.0 <= sell_rate <= 1.0:
            raise DataValidationError("rules.economy.sell_rate must be between 0 and 1.")
        return EconomyDef(
            sell_rate=sell_rate,
            win_bonus=self._require_int(economy["win_bonus"], "rules.economy.win_bonus"),
            loss_bonus=self._require_int(economy["loss_bonus"], "rules.economy.loss_bonus"),
        )

    def _parse_round_pools(self, value: object) -> tuple[RoundPoolDef, ...]:
        pools_raw = self._require_list(value, "rules.round_pools")
        pools: List[RoundPoolDef] = []
        seen_rounds: set[int] = set()
        for index, entry in enumerate(pools_raw):
            context = f"rules.round_pools[{index}]"
            pool = self._require_mapping(entry, context)
            self._assert_exact_fields(pool, {"round", "label", "categories", "max_price"}, context)
            round_number = self._require_positive_int(pool["round"], f"{context}.round")
            if round_number in seen_rounds:
                raise DataValidationError(f"{context} duplicates round {round_number}.")
            seen_rounds.add(round_number)
            categories = self._require_list(pool["categories"], f"{context}.categories")
            for category in categories:
                if category not in WEAPON_CATEGORIES:
                    raise DataReferenceError(f"{context} references unknown category '{category}'.")
            pools.append(
                RoundPoolDef(
                    round_number=round_number,
                    categories=tuple(categories),
                    max_price=self._require_positive_int(pool["max_price"], f"{context}.max_price"),
                    label=self._require_str(pool["label"], f"{context}.label"),
                )
            )
        return tuple(pools)

    def _require_positive_int(self, value: object, context: str) -> int:
        number = self._require_int(value, context)
        if number <= 0:
            raise DataValidationError(f"{context} must be positive.")
        return number
