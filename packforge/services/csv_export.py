"""
CSV export of generated packs.

One row per card, in pack order, for import into collection trackers
and printing tools.
"""

import csv
import io
from collections.abc import Iterable

from packforge.models.pack import Pack

CSV_HEADER = ("Pack ID", "Name", "Set Code", "Rarity", "Finish", "Scryfall ID")


def generate_csv(packs: Iterable[Pack]) -> str:
    """
    Flatten packs into CSV text.

    Args:
        packs: Generated packs

    Returns:
        CSV with a header row; names containing commas or quotes are quoted
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)

    for pack in packs:
        for card in pack.cards:
            writer.writerow(
                (
                    pack.id,
                    card.name,
                    card.set_code,
                    card.rarity,
                    card.finish or "normal",
                    card.scryfall_id,
                )
            )

    return buffer.getvalue()
