"""
Pack Builder for exhaustive generation.

Assembles one pack from a pool and hands back the pool with the drawn
cards removed. The orchestrator feeds that residual pool into the next
call until an attempt fails.

INVARIANTS:
- A returned pack has exactly rarity_mode.pack_size cards
- No two cards in a pack share a name
- A failed attempt returns None and leaves the caller's pool untouched
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from packforge.config import COMMONS_PER_PACK, MYTHIC_UPGRADE_CHANCE, UNCOMMONS_PER_PACK
from packforge.models.card import DraftCard
from packforge.models.pack import Pack, RarityMode
from packforge.models.pool import Rarity, RarityPool, rarity_weight
from packforge.services.sampling import draw_unique_cards

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PackResult:
    """A completed pack and the pool left after building it."""

    pack: Pack
    remaining_pools: RarityPool


def sort_by_rarity(cards: Iterable[DraftCard]) -> tuple[DraftCard, ...]:
    """Order cards mythic first, common last; ties keep draw order."""
    return tuple(sorted(cards, key=lambda card: rarity_weight(card.rarity), reverse=True))


def rare_slot_order(rng: np.random.Generator) -> list[Rarity]:
    """
    Buckets to try for the rare-or-mythic slot, in order.

    One pack in eight tries the mythic bucket first. Either way the other
    bucket is the fallback when the first is empty.
    """
    if rng.random() < MYTHIC_UPGRADE_CHANCE:
        return [Rarity.MYTHIC, Rarity.RARE]
    return [Rarity.RARE, Rarity.MYTHIC]


def _draw_rare_slot(
    pools: RarityPool,
    names_used: set[str],
    rng: np.random.Generator,
) -> tuple[DraftCard, RarityPool] | None:
    for rarity in rare_slot_order(rng):
        bucket = pools.bucket(rarity)
        if not bucket:
            continue
        result = draw_unique_cards(bucket, 1, names_used)
        if result.success:
            return result.selected[0], pools.with_bucket(rarity, result.remaining_pool)
    return None


def build_single_pack(
    pools: RarityPool,
    pack_id: int,
    set_name: str,
    rarity_mode: RarityMode,
    rng: np.random.Generator,
) -> PackResult | None:
    """
    Build one pack by drawing from the front of shuffled buckets.

    Draw order: rare-or-mythic slot (standard only), 3 uncommons, 10 commons.
    Any slot that cannot be filled fails the whole pack.

    Args:
        pools: Current (shuffled) buckets
        pack_id: Identifier for the pack
        set_name: Display label for the pack
        rarity_mode: Pack composition
        rng: Random source for the mythic roll

    Returns:
        PackResult with the pack and residual buckets, or None if the pool
        cannot supply a full pack
    """
    current = pools
    names_used: set[str] = set()
    top_slot: list[DraftCard] = []

    if rarity_mode is RarityMode.STANDARD:
        drawn = _draw_rare_slot(current, names_used, rng)
        if drawn is None:
            logger.debug("pack_failed", extra={"pack_id": pack_id, "slot": "rare"})
            return None
        card, current = drawn
        top_slot.append(card)
        names_used.add(card.name)

    uncommons = draw_unique_cards(current.uncommons, UNCOMMONS_PER_PACK, names_used)
    if not uncommons.success:
        logger.debug("pack_failed", extra={"pack_id": pack_id, "slot": "uncommon"})
        return None
    current = current.with_bucket(Rarity.UNCOMMON, uncommons.remaining_pool)
    names_used.update(card.name for card in uncommons.selected)

    commons = draw_unique_cards(current.commons, COMMONS_PER_PACK, names_used)
    if not commons.success:
        logger.debug("pack_failed", extra={"pack_id": pack_id, "slot": "common"})
        return None
    current = current.with_bucket(Rarity.COMMON, commons.remaining_pool)

    cards = sort_by_rarity([*top_slot, *uncommons.selected, *commons.selected])
    return PackResult(
        pack=Pack(id=pack_id, set_name=set_name, cards=cards),
        remaining_pools=current,
    )
