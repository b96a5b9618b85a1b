"""
Pack generation API endpoints.

Generates booster packs from a posted card list and/or whole sets fetched
from Scryfall. Without pack_count, packs are dealt until the pool runs out;
with pack_count, exactly that many packs are sampled from the pool.
"""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from packforge.config import settings
from packforge.models.card import DraftCard
from packforge.models.pack import (
    FilterConfig,
    GenerationSettings,
    Pack,
    PartitionMode,
    RarityMode,
)
from packforge.models.pool import ProcessedPools
from packforge.services.card_pool import process_cards
from packforge.services.csv_export import generate_csv
from packforge.services.pack_generator import generate_booster_box, generate_packs
from packforge.services.sampling import make_rng
from packforge.services.scryfall_client import FetchError, fetch_set_cards

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/packs", tags=["packs"])


class GenerationSettingsModel(BaseModel):
    """Partition and rarity mode for a request."""

    mode: PartitionMode = PartitionMode.MIXED
    rarity_mode: RarityMode = RarityMode.STANDARD


class FiltersModel(BaseModel):
    """Record filters for a request."""

    exclude_basic_lands: bool = False
    exclude_commander_sets: bool = False
    exclude_tokens: bool = False


class GeneratePacksRequest(BaseModel):
    """Request body for pack generation."""

    cards: list[dict[str, Any]] = Field(default_factory=list)
    set_codes: list[str] = Field(default_factory=list)
    settings: GenerationSettingsModel = Field(default_factory=GenerationSettingsModel)
    filters: FiltersModel = Field(default_factory=FiltersModel)
    pack_count: int | None = Field(default=None, ge=1)
    seed: int | None = None


class CardResponse(BaseModel):
    """A card inside a generated pack."""

    id: str
    scryfall_id: str
    name: str
    rarity: str
    color_identity: list[str] = Field(default_factory=list)
    type_line: str = ""
    image: str = ""
    set_code: str = ""
    set_name: str = ""
    finish: str = "normal"


class PackResponse(BaseModel):
    """A generated pack."""

    id: int
    set_name: str
    cards: list[CardResponse]


class GeneratePacksResponse(BaseModel):
    """Response model for pack generation."""

    packs: list[PackResponse]
    count: int
    requested: int | None = None
    basic_lands: list[CardResponse] = Field(default_factory=list)


def _card_to_response(card: DraftCard) -> CardResponse:
    return CardResponse(
        id=card.id,
        scryfall_id=card.scryfall_id,
        name=card.name,
        rarity=card.rarity,
        color_identity=list(card.color_identity),
        type_line=card.type_line,
        image=card.image,
        set_code=card.set_code,
        set_name=card.set_name,
        finish=card.finish,
    )


def _pack_to_response(pack: Pack) -> PackResponse:
    return PackResponse(
        id=pack.id,
        set_name=pack.set_name,
        cards=[_card_to_response(card) for card in pack.cards],
    )


def _unique_basic_lands(processed: ProcessedPools) -> list[DraftCard]:
    """One card per distinct basic land printing in the pool."""
    seen: set[str] = set()
    lands: list[DraftCard] = []
    for card in processed.pools.commons:
        if "Basic" in card.type_line and card.scryfall_id not in seen:
            seen.add(card.scryfall_id)
            lands.append(card)
    return lands


async def _run_generation(request: GeneratePacksRequest) -> tuple[list[Pack], ProcessedPools]:
    if request.pack_count is not None and request.pack_count > settings.max_box_packs:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"pack_count may not exceed {settings.max_box_packs}",
        )

    records = list(request.cards)
    for set_code in request.set_codes:
        try:
            records.extend(await fetch_set_cards(set_code))
        except FetchError as e:
            logger.error("Set fetch failed: %s", e)
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)) from e

    filters = FilterConfig(
        exclude_basic_lands=request.filters.exclude_basic_lands,
        exclude_commander_sets=request.filters.exclude_commander_sets,
        exclude_tokens=request.filters.exclude_tokens,
    )
    generation = GenerationSettings(
        mode=request.settings.mode,
        rarity_mode=request.settings.rarity_mode,
    )
    seed = request.seed if request.seed is not None else settings.default_seed
    rng = make_rng(seed)

    processed = process_cards(records, filters)

    if request.pack_count is not None:
        if generation.mode is PartitionMode.BY_SET:
            logger.debug(
                "by_set_ignored_for_booster_box",
                extra={"pack_count": request.pack_count, "sets": len(processed.sets)},
            )
        packs = generate_booster_box(processed.pools, request.pack_count, generation, rng)
    else:
        packs = generate_packs(processed.pools, processed.sets, generation, rng)

    if not packs:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Not enough cards for this configuration",
        )

    return packs, processed


@router.post("/generate", response_model=GeneratePacksResponse)
async def generate(request: GeneratePacksRequest) -> GeneratePacksResponse:
    """
    Generate booster packs.

    With pack_count set, every pack samples the combined pool and is
    labelled "Booster"; settings.mode only applies to exhaustive generation.

    Returns 422 if the pool cannot fill a single pack.
    """
    packs, processed = await _run_generation(request)

    return GeneratePacksResponse(
        packs=[_pack_to_response(pack) for pack in packs],
        count=len(packs),
        requested=request.pack_count,
        basic_lands=[_card_to_response(card) for card in _unique_basic_lands(processed)],
    )


@router.post("/export", response_class=PlainTextResponse)
async def export_csv(request: GeneratePacksRequest) -> PlainTextResponse:
    """Generate booster packs and return them as CSV."""
    packs, _ = await _run_generation(request)

    return PlainTextResponse(
        generate_csv(packs),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="packs.csv"'},
    )
