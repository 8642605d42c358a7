"""Shared HTTP helpers and errors for deck providers."""

from typing import Any

import httpx

from rulezero.config import settings
from rulezero.models.failure import FailureKind, KnownError


class DeckFetchError(KnownError):
    """Raised when a deck site cannot be reached or returns unusable data."""

    def __init__(self, source: str, detail: str | None = None):
        self.source = source
        super().__init__(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message=f"Failed to fetch {source} deck",
            detail=detail,
            suggestion="Check that the deck is public and try again.",
            status_code=502,
        )


class UnsupportedDeckUrlError(KnownError):
    """Raised for URLs no provider can handle, or without a deck id."""

    def __init__(self, message: str, url: str):
        self.url = url
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=message,
            detail=f"URL: {url}",
            suggestion="Paste a Moxfield or Archidekt deck URL.",
            status_code=400,
        )


def create_client() -> httpx.AsyncClient:
    """HTTP client configured for deck and card APIs."""
    return httpx.AsyncClient(
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
        timeout=settings.http_timeout,
    )


async def get_json(url: str, client: httpx.AsyncClient | None = None) -> Any:
    """
    GET a URL and decode its JSON body.

    Args:
        url: Full URL to fetch
        client: Optional httpx client for connection reuse

    Raises:
        httpx.HTTPError: If the request fails or returns an error status
        ValueError: If the body is not JSON
    """
    if client:
        response = await client.get(url)
    else:
        async with create_client() as owned_client:
            response = await owned_client.get(url)

    response.raise_for_status()
    return response.json()


def entry_quantity(entry: dict[str, Any]) -> int:
    """Copies of a deck entry, at least one."""
    quantity = entry.get("quantity", 1)
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        return 1
    return quantity
