from packforge.parsers.scryfall import (
    ScryfallRecord,
    color_identity,
    load_card_records,
    resolve_image,
)

__all__ = [
    "ScryfallRecord",
    "color_identity",
    "load_card_records",
    "resolve_image",
]
