"""
Pack generation orchestrator.

Two strategies:
- Exhaustive (generate_packs): deal packs from a depleting pool until the
  next pack cannot be completed. Mixed mode uses the global pool; by-set
  mode deals each set out in turn.
- Fixed-quantity (generate_booster_box): deal exactly N pack attempts from
  a static pool; cards may repeat across packs.

An empty or short result is the "not enough cards" signal. Nothing here
raises for lack of supply.
"""

import logging
from collections.abc import Mapping

import numpy as np

from packforge.config import BOOSTER_PACK_LABEL, MIXED_PACK_LABEL
from packforge.models.pack import GenerationSettings, Pack, PartitionMode, RarityMode
from packforge.models.pool import RarityPool, SetPool
from packforge.services.booster_box import build_tokenized_pack
from packforge.services.pack_builder import build_single_pack
from packforge.services.sampling import make_rng, shuffle

logger = logging.getLogger(__name__)


def shuffle_pool(pools: RarityPool, rng: np.random.Generator) -> RarityPool:
    """Return a copy of the pool with every bucket shuffled."""
    return RarityPool(
        commons=tuple(shuffle(pools.commons, rng)),
        uncommons=tuple(shuffle(pools.uncommons, rng)),
        rares=tuple(shuffle(pools.rares, rng)),
        mythics=tuple(shuffle(pools.mythics, rng)),
    )


def _exhaust_pool(
    pools: RarityPool,
    first_id: int,
    set_name: str,
    rarity_mode: RarityMode,
    rng: np.random.Generator,
) -> list[Pack]:
    """Build packs from one pool scope until an attempt fails."""
    packs: list[Pack] = []
    current = shuffle_pool(pools, rng)
    pack_id = first_id

    while True:
        result = build_single_pack(current, pack_id, set_name, rarity_mode, rng)
        if result is None:
            break
        packs.append(result.pack)
        current = result.remaining_pools
        pack_id += 1

    logger.debug(
        "pool_exhausted",
        extra={
            "set_name": set_name,
            "packs": len(packs),
            "leftover": current.total_cards(),
        },
    )
    return packs


def generate_packs(
    pools: RarityPool,
    sets: Mapping[str, SetPool],
    settings: GenerationSettings,
    rng: np.random.Generator | None = None,
) -> list[Pack]:
    """
    Deal packs until the pool (or each set's pool) runs out.

    Args:
        pools: Global buckets (used in mixed mode)
        sets: Per-set buckets keyed by set code (used in by-set mode)
        settings: Partition and rarity mode
        rng: Random source; a fresh unseeded one if None

    Returns:
        Packs with ids 1..n in generation order
    """
    rng = rng if rng is not None else make_rng()
    packs: list[Pack] = []

    if settings.mode is PartitionMode.MIXED:
        packs = _exhaust_pool(pools, 1, MIXED_PACK_LABEL, settings.rarity_mode, rng)
    else:
        for code in sorted(sets):
            set_pool = sets[code]
            packs.extend(
                _exhaust_pool(
                    set_pool.pool,
                    len(packs) + 1,
                    set_pool.name,
                    settings.rarity_mode,
                    rng,
                )
            )

    logger.info(
        "packs_generated",
        extra={
            "mode": settings.mode.value,
            "rarity_mode": settings.rarity_mode.value,
            "packs": len(packs),
        },
    )
    return packs


def generate_booster_box(
    pools: RarityPool,
    total_packs: int,
    settings: GenerationSettings,
    rng: np.random.Generator | None = None,
    set_name: str = BOOSTER_PACK_LABEL,
) -> list[Pack]:
    """
    Attempt exactly `total_packs` packs from a static pool.

    Args:
        pools: Buckets to sample from (never consumed)
        total_packs: Number of pack attempts
        settings: Rarity mode (partition mode is not used)
        rng: Random source; a fresh unseeded one if None
        set_name: Display label for every pack

    Returns:
        Completed packs only, so possibly fewer than `total_packs`.
        Pack ids follow attempt numbers, so a dropped attempt leaves a gap.
    """
    if total_packs < 0:
        raise ValueError(f"total_packs must be non-negative, got {total_packs}")

    rng = rng if rng is not None else make_rng()
    packs: list[Pack] = []

    for pack_id in range(1, total_packs + 1):
        pack = build_tokenized_pack(pools, pack_id, set_name, settings.rarity_mode, rng)
        if pack is not None:
            packs.append(pack)

    if len(packs) < total_packs:
        logger.warning(
            "booster_box_short",
            extra={"requested": total_packs, "generated": len(packs)},
        )

    logger.info(
        "booster_box_generated",
        extra={
            "rarity_mode": settings.rarity_mode.value,
            "requested": total_packs,
            "packs": len(packs),
        },
    )
    return packs
