"""
Moxfield deck provider.

Fetches a public deck from the Moxfield API and maps it to a Deck.
Both the v3 layout (``boards.<board>.cards``) and the older v2 layout
(``commanders`` / ``mainboard`` at the top level) are understood.
"""

import logging
import re
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

SOURCE_NAME = "Moxfield"


def can_handle(url: str) -> bool:
    """True if the URL points at Moxfield."""
    return "moxfield.com" in url


def extract_deck_id(url: str) -> str:
    """
    Extract the deck id from a Moxfield URL.

    Example: https://www.moxfield.com/decks/AbC123?tab=stats -> "AbC123"

    Raises:
        UnsupportedDeckUrlError: If the URL has no deck id
    """
    _, _, tail = url.partition("/decks/")
    deck_id = re.split(r"[?#/]", tail, maxsplit=1)[0] if tail else ""
    if not deck_id:
        raise UnsupportedDeckUrlError("Invalid Moxfield URL", url)
    return deck_id


def _board_entries(data: dict[str, Any], board: str) -> list[dict[str, Any]]:
    boards = data.get("boards")
    if isinstance(boards, dict) and isinstance(boards.get(board), dict):
        cards = boards[board].get("cards") or {}
    else:
        cards = data.get(board) or {}

    if isinstance(cards, dict):
        return [entry for entry in cards.values() if isinstance(entry, dict)]
    return []


def _entry_names(entries: list[dict[str, Any]]) -> list[str]:
    names: list[str] = []
    for entry in entries:
        name = (entry.get("card") or {}).get("name")
        if not name:
            continue
        names.extend([name] * entry_quantity(entry))
    return names


def map_to_deck(data: dict[str, Any]) -> Deck:
    """
    Map a Moxfield API response to a Deck.

    Commanders come from the commanders board; if it is empty, the deck's
    ``main`` card is used. ``bracket`` becomes the source bracket hint.
    """
    commanders = _entry_names(_board_entries(data, "commanders"))
    if not commanders:
        main_name = (data.get("main") or {}).get("name")
        if main_name:
            commanders = [main_name]

    cards = _entry_names(_board_entries(data, "mainboard"))

    bracket = data.get("bracket")
    source_bracket = bracket if isinstance(bracket, int) and not isinstance(bracket, bool) else None

    return Deck(
        name=str(data.get("name") or ""),
        commanders=tuple(commanders),
        cards=tuple(cards),
        source=SOURCE_NAME,
        source_bracket=source_bracket,
    )


async def fetch_deck(url: str, client: httpx.AsyncClient | None = None) -> Deck:
    """
    Fetch a Moxfield deck by its public URL.

    Raises:
        UnsupportedDeckUrlError: If the URL has no deck id
        DeckFetchError: If the API request fails or returns unusable data
    """
    deck_id = extract_deck_id(url)
    api_url = f"{settings.moxfield_api_url}/{deck_id}"

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
        "Fetched Moxfield deck %s: %d commanders, %d cards",
        deck_id,
        deck.commander_count(),
        deck.card_count(),
    )
    return deck
