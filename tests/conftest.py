import itertools
from collections.abc import Callable
from typing import Any

import numpy as np
import pytest

from packforge.models.card import DraftCard
from packforge.models.pool import RarityPool

_ids = itertools.count(1)


def make_card(
    name: str,
    rarity: str = "common",
    set_code: str = "tst",
    set_name: str = "Test Set",
    type_line: str = "Creature — Human",
) -> DraftCard:
    """Build a DraftCard with a unique id."""
    n = next(_ids)
    return DraftCard(
        id=f"copy-{n}",
        scryfall_id=f"print-{name}",
        name=name,
        rarity=rarity,
        set_code=set_code,
        set_name=set_name,
        type_line=type_line,
    )


def make_pool(
    commons: int = 0,
    uncommons: int = 0,
    rares: int = 0,
    mythics: int = 0,
    set_code: str = "tst",
    set_name: str = "Test Set",
) -> RarityPool:
    """Build a pool of uniquely named cards per rarity."""

    def bucket(count: int, rarity: str) -> tuple[DraftCard, ...]:
        return tuple(
            make_card(f"{set_code} {rarity} {i}", rarity, set_code, set_name) for i in range(count)
        )

    return RarityPool(
        commons=bucket(commons, "common"),
        uncommons=bucket(uncommons, "uncommon"),
        rares=bucket(rares, "rare"),
        mythics=bucket(mythics, "mythic"),
    )


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random source for reproducible tests."""
    return np.random.default_rng(20240601)


@pytest.fixture
def make_record() -> Callable[..., dict[str, Any]]:
    """Factory for raw Scryfall-style card records."""
    counter = itertools.count(1)

    def _make(name: str, rarity: str = "common", **overrides: Any) -> dict[str, Any]:
        n = next(counter)
        record: dict[str, Any] = {
            "id": f"scryfall-{n}",
            "name": name,
            "rarity": rarity,
            "type_line": "Creature — Goblin",
            "layout": "normal",
            "set": "dmu",
            "set_name": "Dominaria United",
            "set_type": "expansion",
            "color_identity": ["R"],
            "collector_number": str(n),
            "image_uris": {
                "normal": f"https://cards.scryfall.io/normal/{n}.jpg",
                "art_crop": f"https://cards.scryfall.io/art_crop/{n}.jpg",
            },
        }
        record.update(overrides)
        return record

    return _make


@pytest.fixture
def card_factory() -> Callable[..., DraftCard]:
    """Factory for DraftCards with unique ids."""
    return make_card


@pytest.fixture
def pool_factory() -> Callable[..., RarityPool]:
    """Factory for pools of uniquely named cards."""
    return make_pool
