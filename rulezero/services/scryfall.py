"""
Scryfall card lookup.

Resolves card names to identified card references (name + Scryfall ID) so
category lists can match cards by id as well as by name. Lookups never feed
the classification logic directly; they only improve identity quality.
"""

import logging
from typing import Any

import httpx

from rulezero.config import MAX_SEARCH_RESULTS, MIN_AUTOCOMPLETE_LENGTH, settings
from rulezero.models.card import CardRef
from rulezero.models.failure import FailureKind, KnownError
from rulezero.providers.common import get_json

logger = logging.getLogger(__name__)


class CardLookupError(KnownError):
    """Raised when Scryfall cannot be queried."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message=message,
            detail=detail,
            suggestion="Try again in a moment.",
            status_code=502,
        )


class CardNotFoundError(KnownError):
    """Raised when an exact-name or id lookup finds nothing."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f'Failed to find card "{identifier}"',
            suggestion="Check the spelling or use search to find the exact name.",
            status_code=404,
        )


def _to_card_ref(card_data: Any) -> CardRef | None:
    """Card reference from a Scryfall card object, None if it has no name."""
    if not isinstance(card_data, dict) or not card_data.get("name"):
        return None
    external_id = card_data.get("id")
    return CardRef(
        name=str(card_data["name"]),
        external_id=str(external_id) if external_id else None,
    )


async def _lookup(url: str, identifier: str, client: httpx.AsyncClient | None) -> CardRef:
    try:
        data = await get_json(url, client)
    except httpx.HTTPStatusError as e:
        if e.response.status_code == 404:
            raise CardNotFoundError(identifier) from e
        raise CardLookupError(
            f'Failed to find card "{identifier}"',
            detail=f"HTTP {e.response.status_code}",
        ) from e
    except httpx.HTTPError as e:
        raise CardLookupError(f'Failed to find card "{identifier}"', detail=str(e)) from e
    except ValueError as e:
        raise CardLookupError(
            f'Failed to find card "{identifier}"', detail="Response was not JSON"
        ) from e

    card = _to_card_ref(data)
    if card is None:
        raise CardLookupError(
            f'Failed to find card "{identifier}"', detail="Response had no card name"
        )
    return card


async def search_cards(query: str, client: httpx.AsyncClient | None = None) -> list[CardRef]:
    """
    Search Scryfall by card name.

    Returns at most MAX_SEARCH_RESULTS cards. An empty query, or a search
    with no matches, returns an empty list.

    Raises:
        CardLookupError: If Scryfall cannot be queried
    """
    if not query or not query.strip():
        return []

    url = str(httpx.URL(f"{settings.scryfall_api_url}/cards/search", params={"q": query}))
    try:
        data = await get_json(url, client)
    except httpx.HTTPStatusError as e:
        if e.response.status_code == 404:
            # Scryfall answers 404 when nothing matches
            return []
        raise CardLookupError(
            "Failed to search Scryfall", detail=f"HTTP {e.response.status_code}"
        ) from e
    except httpx.HTTPError as e:
        raise CardLookupError("Failed to search Scryfall", detail=str(e)) from e
    except ValueError as e:
        raise CardLookupError("Failed to search Scryfall", detail="Response was not JSON") from e

    if not isinstance(data, dict):
        raise CardLookupError("Failed to search Scryfall", detail="Unexpected response shape")

    cards = [_to_card_ref(card) for card in data.get("data") or []]
    return [card for card in cards if card is not None][:MAX_SEARCH_RESULTS]


async def get_card_by_name(name: str, client: httpx.AsyncClient | None = None) -> CardRef:
    """
    Resolve an exact card name.

    Raises:
        CardNotFoundError: If no card has this exact name
        CardLookupError: If Scryfall cannot be queried
    """
    url = str(httpx.URL(f"{settings.scryfall_api_url}/cards/named", params={"exact": name}))
    return await _lookup(url, name, client)


async def get_card_by_id(card_id: str, client: httpx.AsyncClient | None = None) -> CardRef:
    """
    Resolve a Scryfall ID.

    Raises:
        CardNotFoundError: If the id is unknown
        CardLookupError: If Scryfall cannot be queried
    """
    url = f"{settings.scryfall_api_url}/cards/{card_id}"
    return await _lookup(url, card_id, client)


async def autocomplete(query: str, client: httpx.AsyncClient | None = None) -> list[str]:
    """
    Card name suggestions for a partial name.

    Best effort: queries shorter than MIN_AUTOCOMPLETE_LENGTH and any
    upstream failure return an empty list.
    """
    if not query or len(query.strip()) < MIN_AUTOCOMPLETE_LENGTH:
        return []

    url = str(httpx.URL(f"{settings.scryfall_api_url}/cards/autocomplete", params={"q": query}))
    try:
        data = await get_json(url, client)
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Autocomplete failed for %r: %s", query, e)
        return []

    if not isinstance(data, dict):
        return []
    return [str(name) for name in data.get("data") or []]


async def enrich_cards(
    names: list[str],
    client: httpx.AsyncClient | None = None,
) -> list[CardRef]:
    """
    Resolve card names to identified references.

    Names that cannot be resolved are kept as name-only references.
    """
    refs: list[CardRef] = []
    for name in names:
        try:
            refs.append(await get_card_by_name(name, client))
        except KnownError as e:
            logger.warning("Could not find Scryfall ID for card %r: %s", name, e.message)
            refs.append(CardRef.from_name(name))
    return refs
