"""
Card Pool Processor.

Turns raw Scryfall records into rarity buckets, once for the whole input
(mixed packs) and once per source set (set-by-set packs).

INVARIANTS:
- Every qualifying record becomes exactly one DraftCard with a new id
- That card sits in one bucket of the global pool and the same bucket
  of its set's pool
- Filtered records and records with an unknown rarity never raise
"""

import logging
import uuid
from collections.abc import Iterable
from typing import Any

from packforge.config import COMMANDER_SET_TYPES, TOKEN_LAYOUTS
from packforge.models.card import DraftCard
from packforge.models.pack import FilterConfig
from packforge.models.pool import ProcessedPools, Rarity, RarityPool, SetPool
from packforge.parsers.scryfall import color_identity, resolve_image

logger = logging.getLogger(__name__)

_KNOWN_RARITIES = {rarity.value: rarity for rarity in Rarity}


def _text(record: dict[str, Any], key: str, default: str = "") -> str:
    """String value of a record field; missing, empty or non-string values give `default`."""
    value = record.get(key)
    return value if isinstance(value, str) and value else default


def is_well_formed(record: Any) -> bool:
    """A record can become a card only if it is a dict with a string name."""
    return isinstance(record, dict) and isinstance(record.get("name", ""), str)


def is_filtered_out(record: dict[str, Any], filters: FilterConfig) -> bool:
    """
    Check whether a record is excluded by the active filters.

    Args:
        record: Raw card record
        filters: Active filter switches

    Returns:
        True if the record must be skipped
    """
    if filters.exclude_basic_lands and "Basic" in _text(record, "type_line"):
        return True
    if filters.exclude_commander_sets and _text(record, "set_type") in COMMANDER_SET_TYPES:
        return True
    return bool(filters.exclude_tokens and _text(record, "layout") in TOKEN_LAYOUTS)


def to_draft_card(record: dict[str, Any]) -> DraftCard:
    """Build a DraftCard with a freshly minted id from a raw record."""
    collector_number = record.get("collector_number")
    return DraftCard(
        id=str(uuid.uuid4()),
        scryfall_id=_text(record, "id"),
        name=_text(record, "name"),
        rarity=_text(record, "rarity"),
        color_identity=color_identity(record),
        image=resolve_image(record, "normal"),
        set_code=_text(record, "set"),
        set_name=_text(record, "set_name"),
        set_type=_text(record, "set_type"),
        type_line=_text(record, "type_line"),
        layout=_text(record, "layout", "normal"),
        collector_number=collector_number if isinstance(collector_number, str) else None,
        image_art_crop=resolve_image(record, "art_crop"),
        finish=_text(record, "finish", "normal"),
    )


class _Buckets:
    """Mutable bucket lists used while processing."""

    def __init__(self) -> None:
        self.cards: dict[Rarity, list[DraftCard]] = {rarity: [] for rarity in Rarity}

    def freeze(self) -> RarityPool:
        return RarityPool(
            commons=tuple(self.cards[Rarity.COMMON]),
            uncommons=tuple(self.cards[Rarity.UNCOMMON]),
            rares=tuple(self.cards[Rarity.RARE]),
            mythics=tuple(self.cards[Rarity.MYTHIC]),
        )


def process_cards(
    records: Iterable[Any],
    filters: FilterConfig | None = None,
) -> ProcessedPools:
    """
    Classify raw records into global and per-set rarity buckets.

    Args:
        records: Raw Scryfall card records
        filters: Filter switches; all off if None

    Returns:
        ProcessedPools with the global pool, per-set pools and the number
        of records dropped as malformed or for an unrecognized rarity. Bad
        input never raises.
    """
    filters = filters or FilterConfig()

    global_buckets = _Buckets()
    set_buckets: dict[str, _Buckets] = {}
    set_names: dict[str, str] = {}

    total = 0
    filtered = 0
    unrecognized = 0
    malformed = 0

    for record in records:
        total += 1

        if not is_well_formed(record):
            malformed += 1
            continue

        if is_filtered_out(record, filters):
            filtered += 1
            continue

        rarity = _KNOWN_RARITIES.get(_text(record, "rarity"))
        if rarity is None:
            unrecognized += 1
            continue

        card = to_draft_card(record)
        global_buckets.cards[rarity].append(card)

        if card.set_code not in set_buckets:
            set_buckets[card.set_code] = _Buckets()
            set_names[card.set_code] = card.set_name
        set_buckets[card.set_code].cards[rarity].append(card)

    sets = {
        code: SetPool(code=code, name=set_names[code], pool=buckets.freeze())
        for code, buckets in set_buckets.items()
    }
    pools = global_buckets.freeze()

    if malformed:
        logger.debug("malformed_records_dropped", extra={"count": malformed})
    if unrecognized:
        logger.debug("unrecognized_rarity_dropped", extra={"count": unrecognized})

    logger.info(
        "card_pool_processed",
        extra={
            "total": total,
            "filtered": filtered,
            "malformed": malformed,
            "unrecognized_rarity": unrecognized,
            "commons": len(pools.commons),
            "uncommons": len(pools.uncommons),
            "rares": len(pools.rares),
            "mythics": len(pools.mythics),
            "sets": len(sets),
        },
    )

    return ProcessedPools(
        pools=pools,
        sets=sets,
        unrecognized_rarity=unrecognized,
        malformed=malformed,
    )
