"""
Card lookup endpoints backed by Scryfall.
"""

from typing import Annotated

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from rulezero.api.categories import CardRefModel
from rulezero.services.scryfall import autocomplete, search_cards

router = APIRouter(prefix="/cards", tags=["cards"])


class CardSearchResponse(BaseModel):
    """Response model for card search."""

    query: str
    cards: list[CardRefModel] = Field(default_factory=list)
    count: int = 0


class AutocompleteResponse(BaseModel):
    """Response model for card name suggestions."""

    query: str
    suggestions: list[str] = Field(default_factory=list)


@router.get("/search", response_model=CardSearchResponse)
async def search(q: Annotated[str, Query(max_length=200)] = "") -> CardSearchResponse:
    """Search cards by name. Returns at most 20 cards."""
    refs = await search_cards(q)
    cards = [CardRefModel.from_ref(ref) for ref in refs]
    return CardSearchResponse(query=q, cards=cards, count=len(cards))


@router.get("/autocomplete", response_model=AutocompleteResponse)
async def suggest(q: Annotated[str, Query(max_length=200)] = "") -> AutocompleteResponse:
    """Card name suggestions for a partial name."""
    return AutocompleteResponse(query=q, suggestions=await autocomplete(q))
