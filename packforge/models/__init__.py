from packforge.models.card import DraftCard
from packforge.models.pack import (
    FilterConfig,
    GenerationSettings,
    Pack,
    PartitionMode,
    RarityMode,
)
from packforge.models.pool import (
    RARITY_WEIGHTS,
    ProcessedPools,
    Rarity,
    RarityPool,
    SetPool,
    rarity_weight,
)

__all__ = [
    "DraftCard",
    "FilterConfig",
    "GenerationSettings",
    "Pack",
    "PartitionMode",
    "ProcessedPools",
    "RARITY_WEIGHTS",
    "Rarity",
    "RarityMode",
    "RarityPool",
    "SetPool",
    "rarity_weight",
]
