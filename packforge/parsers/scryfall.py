"""
Scryfall card record loader.

Reads card objects from a Scryfall bulk data dump or a saved search
response. Records are passed to the pack generator as plain dicts.

Bulk data: https://scryfall.com/docs/api/bulk-data
"""

import json
from pathlib import Path
from typing import Any, TypedDict


class ScryfallRecord(TypedDict, total=False):
    """Keys of a Scryfall card object read by the pack generator."""

    id: str
    name: str
    rarity: str  # common, uncommon, rare, mythic (others are dropped)
    type_line: str
    layout: str
    set: str
    set_name: str
    set_type: str
    colors: list[str]
    color_identity: list[str]
    collector_number: str
    finish: str
    image_uris: dict[str, str]
    card_faces: list[dict[str, Any]]


def load_card_records(path: Path) -> list[dict[str, Any]]:
    """
    Load raw card records from a JSON file.

    Args:
        path: Scryfall bulk JSON (a list of cards) or a search
            response object with a "data" list

    Returns:
        List of card records in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the JSON holds neither shape
    """
    with open(path, encoding="utf-8") as f:
        payload = json.load(f)

    if isinstance(payload, dict):
        payload = payload.get("data")

    if not isinstance(payload, list):
        raise ValueError(f"Expected a list of card objects in {path}")

    return [card for card in payload if isinstance(card, dict)]


def resolve_image(record: dict[str, Any], version: str = "normal") -> str:
    """
    Get an image URL for a card record.

    Double-faced cards have no top-level image_uris, so the front
    face is used instead.

    Args:
        record: Scryfall card object
        version: Image version (normal, large, art_crop, ...)

    Returns:
        Image URL, or empty string if the record has none
    """
    url = _image_url(record.get("image_uris"), version)
    if url:
        return url

    faces = record.get("card_faces")
    if isinstance(faces, list) and faces and isinstance(faces[0], dict):
        return _image_url(faces[0].get("image_uris"), version)

    return ""


def _image_url(image_uris: Any, version: str) -> str:
    if not isinstance(image_uris, dict):
        return ""
    url = image_uris.get(version)
    return url if isinstance(url, str) else ""


def color_identity(record: dict[str, Any]) -> tuple[str, ...]:
    """Color identity of a record, falling back to its colors."""
    identity_data = record.get("color_identity") or record.get("colors") or []
    if not isinstance(identity_data, list | tuple):
        return ()
    return tuple(symbol for symbol in identity_data if isinstance(symbol, str))
