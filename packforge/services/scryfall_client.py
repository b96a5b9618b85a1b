"""Fetch every printing of a set from Scryfall.

Used when packs are generated from whole printed sets rather than a
user-supplied card list. Respects Scryfall rate limits (10 requests/second).
"""

import asyncio
import logging
from typing import Any

import httpx

from packforge.config import settings

logger = logging.getLogger(__name__)

# Rate limit: max 10 requests per second, so delay 100ms between requests
_RATE_LIMIT_DELAY = 0.1

_HEADERS = {"User-Agent": "PackForge/1.0", "Accept": "application/json"}


class FetchError(Exception):
    """Raised when fetching set cards fails."""

    pass


async def _fetch_pages(client: httpx.AsyncClient, set_code: str) -> list[dict[str, Any]]:
    cards: list[dict[str, Any]] = []
    url = f"{settings.scryfall_api_url}/cards/search"
    params: dict[str, str] = {"q": f"set:{set_code.lower()} unique:prints"}

    has_more = True
    while has_more:
        response = await client.get(url, params=params)
        if response.status_code == 404:
            # Scryfall answers 404 when a search matches nothing
            return cards
        response.raise_for_status()
        data = response.json()

        cards.extend(data.get("data", []))

        has_more = data.get("has_more", False)
        if has_more:
            url = data.get("next_page", "")
            params = {}  # Next page URL includes params
            await asyncio.sleep(_RATE_LIMIT_DELAY)

    return cards


async def fetch_set_cards(
    set_code: str,
    client: httpx.AsyncClient | None = None,
) -> list[dict[str, Any]]:
    """Fetch all printings in a set.

    Args:
        set_code: MTG set code (e.g., "BLB")
        client: Optional client for connection reuse

    Returns:
        Raw Scryfall card records; empty if the set has no cards

    Raises:
        FetchError: If the API request fails
    """
    try:
        if client is not None:
            cards = await _fetch_pages(client, set_code)
        else:
            async with httpx.AsyncClient(timeout=30.0, headers=_HEADERS) as own_client:
                cards = await _fetch_pages(own_client, set_code)
    except httpx.HTTPStatusError as e:
        raise FetchError(
            f"Failed to fetch cards for {set_code}: HTTP {e.response.status_code}"
        ) from e
    except httpx.RequestError as e:
        raise FetchError(f"Failed to fetch cards for {set_code}: {e}") from e

    logger.info("set_cards_fetched", extra={"set_code": set_code, "cards": len(cards)})
    return cards
