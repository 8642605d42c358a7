"""
Deck providers.

Turn a public deck URL into a Deck. Supported sites: Moxfield, Archidekt.
"""

import httpx

from rulezero.models.deck import Deck
from rulezero.providers import archidekt, moxfield
from rulezero.providers.common import DeckFetchError, UnsupportedDeckUrlError

async def fetch_deck(url: str, client: httpx.AsyncClient | None = None) -> Deck:
    """
    Fetch a deck from whichever provider handles the URL.

    Raises:
        UnsupportedDeckUrlError: If no provider handles the URL
        DeckFetchError: If the provider request fails
    """
    if not url or not url.strip():
        raise UnsupportedDeckUrlError("Invalid URL provided", url or "")

    if moxfield.can_handle(url):
        return await moxfield.fetch_deck(url, client)
    if archidekt.can_handle(url):
        return await archidekt.fetch_deck(url, client)

    raise UnsupportedDeckUrlError(
        "Unsupported deck URL. Only Moxfield and Archidekt are supported.",
        url,
    )


__all__ = [
    "DeckFetchError",
    "UnsupportedDeckUrlError",
    "fetch_deck",
]
