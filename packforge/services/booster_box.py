"""
Booster-Box Builder for fixed-quantity generation.

Every pack samples from the same unchanged pool, like boosters pulled from
one case of a printed set: a card can show up in several packs of a box,
but never twice in one pack.
"""

import logging

import numpy as np

from packforge.config import COMMONS_PER_PACK, MYTHIC_UPGRADE_CHANCE, UNCOMMONS_PER_PACK
from packforge.models.card import DraftCard
from packforge.models.pack import Pack, RarityMode
from packforge.models.pool import RarityPool
from packforge.services.pack_builder import sort_by_rarity
from packforge.services.sampling import sample_unique

logger = logging.getLogger(__name__)


def _rare_slot_bucket(pools: RarityPool, rng: np.random.Generator) -> tuple[DraftCard, ...]:
    bucket = pools.mythics if rng.random() < MYTHIC_UPGRADE_CHANCE else pools.rares
    if not bucket:
        bucket = pools.rares
    if not bucket:
        bucket = pools.mythics
    return bucket


def build_tokenized_pack(
    pools: RarityPool,
    pack_id: int,
    set_name: str,
    rarity_mode: RarityMode,
    rng: np.random.Generator,
) -> Pack | None:
    """
    Build one pack by sampling the pool without consuming it.

    Args:
        pools: Buckets to sample from (read only)
        pack_id: Identifier for the pack
        set_name: Display label for the pack
        rarity_mode: Pack composition
        rng: Random source

    Returns:
        The pack, or None if it would come out short
    """
    cards: list[DraftCard] = []
    names: set[str] = set()

    if rarity_mode is RarityMode.STANDARD:
        bucket = _rare_slot_bucket(pools, rng)
        picked = sample_unique(bucket, 1, names, rng)
        cards.extend(picked)
        names.update(card.name for card in picked)

    uncommons = sample_unique(pools.uncommons, UNCOMMONS_PER_PACK, names, rng)
    cards.extend(uncommons)
    names.update(card.name for card in uncommons)

    commons = sample_unique(pools.commons, COMMONS_PER_PACK, names, rng)
    cards.extend(commons)

    if len(cards) < rarity_mode.pack_size:
        logger.debug(
            "box_pack_dropped",
            extra={"pack_id": pack_id, "cards": len(cards), "required": rarity_mode.pack_size},
        )
        return None

    return Pack(id=pack_id, set_name=set_name, cards=sort_by_rarity(cards))
