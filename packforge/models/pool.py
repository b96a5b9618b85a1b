"""
Rarity buckets for pack generation.

INVARIANT: Buckets are tuples. Consuming cards produces a new RarityPool,
so a pool handed to one generation run can never be mutated by another.
"""

from dataclasses import dataclass, field, replace
from enum import Enum

from packforge.models.card import DraftCard


class Rarity(str, Enum):
    """Card rarity tiers that have a bucket."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    MYTHIC = "mythic"


RARITY_WEIGHTS: dict[str, int] = {
    "mythic": 4,
    "rare": 3,
    "uncommon": 2,
    "common": 1,
}


def rarity_weight(rarity: str) -> int:
    """Weight for a rarity string; unknown rarities sort last."""
    return RARITY_WEIGHTS.get(rarity, 0)


@dataclass(frozen=True, slots=True)
class RarityPool:
    """The four rarity buckets of one pool scope."""

    commons: tuple[DraftCard, ...] = ()
    uncommons: tuple[DraftCard, ...] = ()
    rares: tuple[DraftCard, ...] = ()
    mythics: tuple[DraftCard, ...] = ()

    def bucket(self, rarity: Rarity) -> tuple[DraftCard, ...]:
        """Get the bucket holding cards of `rarity`."""
        cards: tuple[DraftCard, ...] = getattr(self, _BUCKET_FIELDS[rarity])
        return cards

    def with_bucket(self, rarity: Rarity, cards: tuple[DraftCard, ...]) -> "RarityPool":
        """Return a copy of this pool with one bucket replaced."""
        return replace(self, **{_BUCKET_FIELDS[rarity]: tuple(cards)})

    def total_cards(self) -> int:
        """Number of cards across all buckets."""
        return len(self.commons) + len(self.uncommons) + len(self.rares) + len(self.mythics)


_BUCKET_FIELDS: dict[Rarity, str] = {
    Rarity.COMMON: "commons",
    Rarity.UNCOMMON: "uncommons",
    Rarity.RARE: "rares",
    Rarity.MYTHIC: "mythics",
}


@dataclass(frozen=True, slots=True)
class SetPool:
    """Rarity buckets for a single source set."""

    code: str
    name: str
    pool: RarityPool = field(default_factory=RarityPool)


@dataclass(frozen=True, slots=True)
class ProcessedPools:
    """
    Output of the card pool processor.

    Attributes:
        pools: Global buckets with every qualifying card
        sets: Per-set buckets keyed by set code
        unrecognized_rarity: Records dropped because their rarity has no bucket
        malformed: Records dropped because they are not card objects or
            their name is not a string
    """

    pools: RarityPool
    sets: dict[str, SetPool]
    unrecognized_rarity: int = 0
    malformed: int = 0
