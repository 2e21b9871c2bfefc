from __future__ import annotations

import pytest

from armsrace.core.errors import DegenerateInputError
from armsrace.core.rng import RNG
from armsrace.domain.defs import DifficultyDef, WeaponDef
from armsrace.domain.opponent import choose_tier, partition_tiers, select_opponent
from armsrace.domain.weapon import WeaponInstance

EASY = DifficultyDef(id="easy", low=0.6, medium=0.3, high=0.1)
NORMAL = DifficultyDef(id="normal", low=0.33, medium=0.34, high=0.33)
HARD = DifficultyDef(id="hard", low=0.1, medium=0.3, high=0.6)


def _weapons(count: int) -> list[WeaponInstance]:
    """Build ``count`` weapons whose balanced score grows with their index."""
    return [
        WeaponInstance.from_def(
            WeaponDef(
                id=f"w{index}",
                name=f"Weapon {index}",
                category="rifles",
                price=100 * (index + 1),
                damage=10 + index,
                fire_rate=600.0,
                magazine=30,
                falloff=2,
                range_=20.0,
                recoil=3.0,
            )
        )
        for index in range(count)
    ]


def test_partition_nine_into_even_thirds() -> None:
    tiers = partition_tiers(_weapons(9))

    assert [w.id for w in tiers["low"]] == ["w0", "w1", "w2"]
    assert [w.id for w in tiers["medium"]] == ["w3", "w4", "w5"]
    assert [w.id for w in tiers["high"]] == ["w6", "w7", "w8"]


@pytest.mark.parametrize(
    ("count", "sizes"),
    [(3, (1, 1, 1)), (4, (1, 2, 1)), (5, (1, 3, 1)), (10, (3, 4, 3)), (11, (3, 5, 3))],
)
def test_partition_gives_remainder_to_medium_without_overlap(count: int, sizes: tuple[int, int, int]) -> None:
    ranked = _weapons(count)

    tiers = partition_tiers(ranked)

    assert (len(tiers["low"]), len(tiers["medium"]), len(tiers["high"])) == sizes
    combined = [w.id for tier in ("low", "medium", "high") for w in tiers[tier]]
    assert combined == [w.id for w in ranked]


@pytest.mark.parametrize(
    ("draw", "expected"),
    [(0.0, "low"), (0.05, "low"), (0.1, "medium"), (0.2, "medium"), (0.5, "high"), (0.99, "high")],
)
def test_choose_tier_uses_cumulative_weights(draw: float, expected: str) -> None:
    assert choose_tier(draw, HARD) == expected


def test_select_opponent_rejects_empty_candidates() -> None:
    with pytest.raises(DegenerateInputError):
        select_opponent([], NORMAL, RNG(1))


def test_select_opponent_single_candidate() -> None:
    only = _weapons(1)[0]

    assert select_opponent([only], HARD, RNG(1)) is only


def test_select_opponent_two_candidates_split_evenly() -> None:
    candidates = _weapons(2)
    rng = RNG(2024)
    trials = 4000

    picks = [select_opponent(candidates, HARD, rng).id for _ in range(trials)]

    share = picks.count("w0") / trials
    assert set(picks) == {"w0", "w1"}
    assert 0.45 <= share <= 0.55


def test_hard_difficulty_favours_top_tier() -> None:
    candidates = _weapons(9)
    rng = RNG(1337)
    trials = 10_000
    top_tier = {"w6", "w7", "w8"}

    hits = sum(select_opponent(candidates, HARD, rng).id in top_tier for _ in range(trials))

    assert hits / trials == pytest.approx(0.6, abs=0.03)


def test_easy_difficulty_favours_bottom_tier() -> None:
    candidates = _weapons(9)
    rng = RNG(99)
    trials = 10_000
    bottom_tier = {"w0", "w1", "w2"}

    hits = sum(select_opponent(candidates, EASY, rng).id in bottom_tier for _ in range(trials))

    assert hits / trials == pytest.approx(0.6, abs=0.03)


def test_select_opponent_ignores_input_order() -> None:
    candidates = _weapons(9)
    shuffled = list(reversed(candidates))

    assert select_opponent(candidates, NORMAL, RNG(5)).id == select_opponent(shuffled, NORMAL, RNG(5)).id


def test_select_opponent_is_reproducible_with_seed() -> None:
    candidates = _weapons(9)
    rng_a = RNG(77)
    rng_b = RNG(77)

    picks_a = [select_opponent(candidates, NORMAL, rng_a).id for _ in range(50)]
    picks_b = [select_opponent(candidates, NORMAL, rng_b).id for _ in range(50)]

    assert picks_a == picks_b
