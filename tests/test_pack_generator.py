"""
Tests for the pack generation orchestrator.

These tests verify:
- Mixed runs deal packs until the pool can no longer fill one
- By-set runs keep sets apart and number packs across the whole run
- No card is fabricated or dealt twice
- Pack ids are 1-based and strictly increasing
"""

from collections import Counter

import numpy as np
import pytest

from packforge.config import MIXED_PACK_LABEL
from packforge.models.pack import GenerationSettings, PartitionMode, RarityMode
from packforge.models.pool import RarityPool, SetPool
from packforge.services.pack_generator import generate_packs, shuffle_pool
from packforge.services.sampling import make_rng

MIXED_PEASANT = GenerationSettings(mode=PartitionMode.MIXED, rarity_mode=RarityMode.PEASANT)
MIXED_STANDARD = GenerationSettings(mode=PartitionMode.MIXED, rarity_mode=RarityMode.STANDARD)
BY_SET_PEASANT = GenerationSettings(mode=PartitionMode.BY_SET, rarity_mode=RarityMode.PEASANT)
BY_SET_STANDARD = GenerationSettings(mode=PartitionMode.BY_SET, rarity_mode=RarityMode.STANDARD)


def _can_fill_another_pack(pool: RarityPool, used_ids: set[str], rarity_mode: RarityMode) -> bool:
    """Whether the cards not yet dealt could still make one full pack."""

    def names(bucket: tuple) -> set[str]:
        return {card.name for card in bucket if card.id not in used_ids}

    top = names(pool.rares) | names(pool.mythics)
    if rarity_mode is RarityMode.STANDARD and not top:
        return False
    return len(names(pool.uncommons)) >= 3 and len(names(pool.commons)) >= 10


class TestMixedMode:
    def test_stops_when_uncommons_run_out(self, pool_factory, rng: np.random.Generator) -> None:
        """20 commons and 8 uncommons make exactly two peasant packs."""
        pool = pool_factory(commons=20, uncommons=8)

        packs = generate_packs(pool, {}, MIXED_PEASANT, rng)

        assert len(packs) == 2
        for pack in packs:
            assert Counter(card.rarity for card in pack.cards) == {"common": 10, "uncommon": 3}

    def test_ids_and_label(self, pool_factory, rng: np.random.Generator) -> None:
        pool = pool_factory(commons=50, uncommons=15, rares=5)

        packs = generate_packs(pool, {}, MIXED_STANDARD, rng)

        assert [pack.id for pack in packs] == [1, 2, 3, 4, 5]
        assert {pack.set_name for pack in packs} == {MIXED_PACK_LABEL}

    def test_conservation(self, card_factory, rng: np.random.Generator) -> None:
        """Every dealt card comes from the pool and is dealt at most once."""
        commons = tuple(card_factory(f"Common {i % 25}") for i in range(70))
        uncommons = tuple(card_factory(f"Uncommon {i % 9}", "uncommon") for i in range(24))
        rares = tuple(card_factory(f"Rare {i % 4}", "rare") for i in range(6))
        mythics = tuple(card_factory(f"Mythic {i}", "mythic") for i in range(2))
        pool = RarityPool(commons=commons, uncommons=uncommons, rares=rares, mythics=mythics)

        packs = generate_packs(pool, {}, MIXED_STANDARD, rng)

        dealt = [card.id for pack in packs for card in pack.cards]
        pool_ids = {card.id for card in (*commons, *uncommons, *rares, *mythics)}
        assert packs
        assert len(dealt) == len(set(dealt))
        assert set(dealt) <= pool_ids

    def test_halts_exactly_when_pool_is_spent(self, card_factory) -> None:
        commons = tuple(card_factory(f"Common {i % 13}") for i in range(47))
        uncommons = tuple(card_factory(f"Uncommon {i % 5}", "uncommon") for i in range(17))
        rares = tuple(card_factory(f"Rare {i}", "rare") for i in range(9))
        pool = RarityPool(commons=commons, uncommons=uncommons, rares=rares)

        for seed in range(10):
            packs = generate_packs(pool, {}, MIXED_STANDARD, make_rng(seed))
            used = {card.id for pack in packs for card in pack.cards}
            assert not _can_fill_another_pack(pool, used, RarityMode.STANDARD)

    def test_every_pack_valid(self, card_factory, rng: np.random.Generator) -> None:
        commons = tuple(card_factory(f"Common {i % 20}") for i in range(80))
        uncommons = tuple(card_factory(f"Uncommon {i % 8}", "uncommon") for i in range(24))
        rares = tuple(card_factory(f"Rare {i}", "rare") for i in range(8))
        pool = RarityPool(commons=commons, uncommons=uncommons, rares=rares)

        packs = generate_packs(pool, {}, MIXED_STANDARD, rng)

        assert 1 <= len(packs) <= 8
        for pack in packs:
            assert len(pack.cards) == 14
            assert len(set(pack.names())) == 14

    def test_empty_pool(self, rng: np.random.Generator) -> None:
        assert generate_packs(RarityPool(), {}, MIXED_STANDARD, rng) == []

    def test_input_pool_not_mutated(self, pool_factory, rng: np.random.Generator) -> None:
        pool = pool_factory(commons=30, uncommons=9, rares=3)
        snapshot = (pool.commons, pool.uncommons, pool.rares, pool.mythics)

        generate_packs(pool, {}, MIXED_STANDARD, rng)

        assert (pool.commons, pool.uncommons, pool.rares, pool.mythics) == snapshot

    def test_runs_are_independent(self, pool_factory) -> None:
        pool = pool_factory(commons=30, uncommons=9, rares=3)

        first = generate_packs(pool, {}, MIXED_STANDARD, make_rng(1))
        second = generate_packs(pool, {}, MIXED_STANDARD, make_rng(2))

        assert len(first) == len(second) == 3

    def test_same_seed_same_packs(self, pool_factory) -> None:
        pool = pool_factory(commons=40, uncommons=12, rares=4, mythics=4)

        first = generate_packs(pool, {}, MIXED_STANDARD, make_rng(42))
        second = generate_packs(pool, {}, MIXED_STANDARD, make_rng(42))

        assert [p.names() for p in first] == [p.names() for p in second]

    def test_default_rng(self, pool_factory) -> None:
        pool = pool_factory(commons=10, uncommons=3)

        assert len(generate_packs(pool, {}, MIXED_PEASANT)) == 1


class TestBySetMode:
    def test_sets_are_dealt_in_turn(self, pool_factory, rng: np.random.Generator) -> None:
        """One set good for 1 pack and one for 3 packs give ids 1..4."""
        sets = {
            "bbb": SetPool("bbb", "Beta", pool_factory(commons=30, uncommons=9, set_code="bbb")),
            "aaa": SetPool("aaa", "Alpha", pool_factory(commons=10, uncommons=5, set_code="aaa")),
        }

        packs = generate_packs(RarityPool(), sets, BY_SET_PEASANT, rng)

        assert [pack.id for pack in packs] == [1, 2, 3, 4]
        assert [pack.set_name for pack in packs] == ["Alpha", "Beta", "Beta", "Beta"]

    def test_cards_stay_in_their_set(self, pool_factory, rng: np.random.Generator) -> None:
        sets = {
            code: SetPool(code, name, pool_factory(40, 12, 4, 2, set_code=code, set_name=name))
            for code, name in [("dmu", "Dominaria United"), ("bro", "The Brothers' War")]
        }

        packs = generate_packs(RarityPool(), sets, BY_SET_STANDARD, rng)

        assert len(packs) == 8
        for pack in packs:
            assert {card.set_name for card in pack.cards} == {pack.set_name}

    def test_ids_strictly_increasing(self, pool_factory, rng: np.random.Generator) -> None:
        sets = {
            code: SetPool(code, code.upper(), pool_factory(25, 7, 2, set_code=code))
            for code in ["m21", "znr", "khm"]
        }

        packs = generate_packs(RarityPool(), sets, BY_SET_STANDARD, rng)

        ids = [pack.id for pack in packs]
        assert ids == list(range(1, len(ids) + 1))
        assert [pack.set_name for pack in packs] == ["KHM"] * 2 + ["M21"] * 2 + ["ZNR"] * 2

    def test_exhausted_set_does_not_stop_later_sets(
        self, pool_factory, rng: np.random.Generator
    ) -> None:
        sets = {
            "aaa": SetPool("aaa", "Empty", pool_factory(commons=3, set_code="aaa")),
            "bbb": SetPool("bbb", "Full", pool_factory(commons=10, uncommons=3, set_code="bbb")),
        }

        packs = generate_packs(RarityPool(), sets, BY_SET_PEASANT, rng)

        assert [(pack.id, pack.set_name) for pack in packs] == [(1, "Full")]

    def test_ignores_global_pool(self, pool_factory, rng: np.random.Generator) -> None:
        packs = generate_packs(pool_factory(commons=50, uncommons=20), {}, BY_SET_PEASANT, rng)

        assert packs == []


class TestShufflePool:
    def test_keeps_every_card(self, pool_factory, rng: np.random.Generator) -> None:
        pool = pool_factory(commons=20, uncommons=6, rares=3, mythics=2)

        shuffled = shuffle_pool(pool, rng)

        assert sorted(c.id for c in shuffled.commons) == sorted(c.id for c in pool.commons)
        assert sorted(c.id for c in shuffled.mythics) == sorted(c.id for c in pool.mythics)
        assert shuffled.total_cards() == pool.total_cards()

    def test_changes_order(self, pool_factory) -> None:
        pool = pool_factory(commons=40)

        orders = {shuffle_pool(pool, make_rng(seed)).commons for seed in range(5)}

        assert len(orders) > 1


@pytest.mark.parametrize("rarity_mode", list(RarityMode))
def test_packs_have_exact_size(pool_factory, rng: np.random.Generator, rarity_mode) -> None:
    pool = pool_factory(commons=45, uncommons=14, rares=3, mythics=2)

    packs = generate_packs(pool, {}, GenerationSettings(rarity_mode=rarity_mode), rng)

    assert packs
    assert all(len(pack.cards) == rarity_mode.pack_size for pack in packs)
