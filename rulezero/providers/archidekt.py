"""
Archidekt deck provider.

Fetches a public deck from the Archidekt API. Cards tagged with the
"Commander" category are the deck's commanders.
"""

import logging
from typing import Any

import httpx

from rulezero.config import settings
from rulezero.models.deck import Deck
from rulezero.providers.common import (
    DeckFetchError,
    UnsupportedDeckUrlError,
    entry_quantity,
    get_json,
)

logger = logging.getLogger(__name__)

SOURCE_NAME = "Archidekt"

COMMANDER_CATEGORY = "Commander"


def can_handle(url: str) -> bool:
    """True if the URL points at Archidekt."""
    return "archidekt.com" in url


def extract_deck_id(url: str) -> str:
    """
    Extract the deck id from an Archidekt URL.

    Example: https://archidekt.com/decks/123456/my_deck -> "123456"

    Raises:
        UnsupportedDeckUrlError: If the URL has no deck id
    """
    _, _, tail = url.partition("/decks/")
    deck_id = tail.split("/")[0].split("?")[0].split("#")[0] if tail else ""
    if not deck_id:
        raise UnsupportedDeckUrlError("Invalid Archidekt URL", url)
    return deck_id


def map_to_deck(data: dict[str, Any]) -> Deck:
    """
    Map an Archidekt API response to a Deck.

    Entries without an oracle card name are skipped.
    """
    commanders: list[str] = []
    cards: list[str] = []

    for entry in data.get("cards") or []:
        if not isinstance(entry, dict):
            continue
        name = ((entry.get("card") or {}).get("oracleCard") or {}).get("name")
        if not name:
            continue

        copies = [name] * entry_quantity(entry)
        if COMMANDER_CATEGORY in (entry.get("categories") or []):
            commanders.extend(copies)
        else:
            cards.extend(copies)

    return Deck(
        name=str(data.get("name") or ""),
        commanders=tuple(commanders),
        cards=tuple(cards),
        source=SOURCE_NAME,
        source_bracket=None,
    )


async def fetch_deck(url: str, client: httpx.AsyncClient | None = None) -> Deck:
    """
    Fetch an Archidekt deck by its public URL.

    Raises:
        UnsupportedDeckUrlError: If the URL has no deck id
        DeckFetchError: If the API request fails or returns unusable data
    """
    deck_id = extract_deck_id(url)
    api_url = f"{settings.archidekt_api_url}/{deck_id}/"

    try:
        data = await get_json(api_url, client)
    except httpx.HTTPStatusError as e:
        raise DeckFetchError(SOURCE_NAME, f"HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise DeckFetchError(SOURCE_NAME, str(e)) from e
    except ValueError as e:
        raise DeckFetchError(SOURCE_NAME, "Response was not JSON") from e

    if not isinstance(data, dict):
        raise DeckFetchError(SOURCE_NAME, "Unexpected response shape")

    deck = map_to_deck(data)
    logger.info(
        "Fetched Archidekt deck %s: %d commanders, %d cards",
        deck_id,
        deck.commander_count(),
        deck.card_count(),
    )
    return deck
