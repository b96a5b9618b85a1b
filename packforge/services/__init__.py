"""
PackForge services.

Booster pack generation from arbitrary card pools.
"""

from packforge.services.booster_box import build_tokenized_pack
from packforge.services.card_pool import (
    is_filtered_out,
    is_well_formed,
    process_cards,
    to_draft_card,
)
from packforge.services.csv_export import CSV_HEADER, generate_csv
from packforge.services.pack_builder import PackResult, build_single_pack, sort_by_rarity
from packforge.services.pack_generator import (
    generate_booster_box,
    generate_packs,
    shuffle_pool,
)
from packforge.services.sampling import (
    DrawResult,
    draw_unique_cards,
    make_rng,
    sample_unique,
    shuffle,
)
from packforge.services.scryfall_client import FetchError, fetch_set_cards

__all__ = [
    # Card pool processing
    "is_filtered_out",
    "is_well_formed",
    "process_cards",
    "to_draft_card",
    # Random primitives
    "DrawResult",
    "draw_unique_cards",
    "make_rng",
    "sample_unique",
    "shuffle",
    # Builders
    "PackResult",
    "build_single_pack",
    "build_tokenized_pack",
    "sort_by_rarity",
    # Orchestration
    "generate_booster_box",
    "generate_packs",
    "shuffle_pool",
    # Export
    "CSV_HEADER",
    "generate_csv",
    # Scryfall
    "FetchError",
    "fetch_set_cards",
]
