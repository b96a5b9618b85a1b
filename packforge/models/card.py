from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DraftCard:
    """
    One physical copy of a card inside a generated pool.

    Two copies of the same printing are two distinct DraftCards: they share
    scryfall_id and name but each carries its own freshly minted id.

    Attributes:
        id: Per-copy identity (UUID4 string)
        scryfall_id: Identifier of the underlying printing
        name: Display name, used for the no-duplicate-per-pack rule
        rarity: One of common, uncommon, rare, mythic
        color_identity: Color symbols (W, U, B, R, G); empty for colorless
        image: Image URL for the card front
        set_code: Source set code (e.g., "dmu")
        set_name: Source set display name
        set_type: Scryfall set classification (e.g., "expansion")
        type_line: Full type line (e.g., "Basic Land — Forest")
        layout: Scryfall layout (e.g., "normal", "transform", "token")
        collector_number: Collector number within the set, if known
        image_art_crop: Art-crop image URL for the card front
        finish: Print finish (e.g., "normal", "foil")
    """

    id: str
    scryfall_id: str
    name: str
    rarity: str
    color_identity: tuple[str, ...] = ()
    image: str = ""
    set_code: str = ""
    set_name: str = ""
    set_type: str = ""
    type_line: str = ""
    layout: str = "normal"
    collector_number: str | None = None
    image_art_crop: str = ""
    finish: str = "normal"
