from dataclasses import dataclass
from enum import Enum

from packforge.config import COMMONS_PER_PACK, UNCOMMONS_PER_PACK
from packforge.models.card import DraftCard


class PartitionMode(str, Enum):
    """Which pool scope packs are drawn from."""

    MIXED = "mixed"
    BY_SET = "by_set"


class RarityMode(str, Enum):
    """Pack composition."""

    PEASANT = "peasant"  # 10 commons + 3 uncommons
    STANDARD = "standard"  # 10 commons + 3 uncommons + 1 rare or mythic

    @property
    def pack_size(self) -> int:
        """Exact number of cards in a complete pack."""
        size = COMMONS_PER_PACK + UNCOMMONS_PER_PACK
        if self is RarityMode.STANDARD:
            size += 1
        return size


@dataclass(frozen=True, slots=True)
class GenerationSettings:
    """Parameters for a generation run."""

    mode: PartitionMode = PartitionMode.MIXED
    rarity_mode: RarityMode = RarityMode.STANDARD


@dataclass(frozen=True, slots=True)
class FilterConfig:
    """Record filters applied by the card pool processor."""

    exclude_basic_lands: bool = False
    exclude_commander_sets: bool = False
    exclude_tokens: bool = False


@dataclass(frozen=True, slots=True)
class Pack:
    """
    One generated booster pack.

    Attributes:
        id: 1-based, strictly increasing across a generation run
        set_name: Display label (source set name or a synthetic label)
        cards: Cards ordered by descending rarity
    """

    id: int
    set_name: str
    cards: tuple[DraftCard, ...]

    def names(self) -> list[str]:
        """Display names of the cards, in pack order."""
        return [card.name for card in self.cards]
