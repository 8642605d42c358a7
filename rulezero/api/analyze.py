"""
Deck analysis endpoint.

Fetches a deck by URL (or takes it inline) and classifies it against the
stored rule configuration.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from rulezero.analysis import analyze
from rulezero.db import load_rule_model
from rulezero.db.database import get_session
from rulezero.models.deck import Deck
from rulezero.providers import fetch_deck
from rulezero.services.verdict_formatter import format_verdict

router = APIRouter(tags=["analyze"])


class AnalyzeRequest(BaseModel):
    """Request model for deck analysis. Exactly one of url or deck is required."""

    url: str | None = Field(
        default=None,
        description="Public Moxfield or Archidekt deck URL",
        examples=["https://www.moxfield.com/decks/abc123"],
    )
    deck: dict[str, Any] | None = Field(
        default=None,
        description="Inline deck: {name, commanders, cards, source, sourceBracket}",
    )


class AnalyzeResponse(BaseModel):
    """Response model for deck analysis."""

    deck: dict[str, Any]
    verdict: dict[str, Any]
    message: str = Field(..., description="Plain-text rendering of the verdict")


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_deck(
    request: AnalyzeRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> AnalyzeResponse:
    """
    Classify a deck into a bracket.

    A deck that fits no bracket is still a 200 response; the verdict's tier
    is null and its reason says why. Fetch failures are 4xx/5xx errors.
    """
    if (request.url is None) == (request.deck is None):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Provide either a deck URL or an inline deck",
        )

    if request.url is not None:
        deck = await fetch_deck(request.url)
    else:
        deck = Deck.from_document(request.deck)

    rules = await load_rule_model(session)
    verdict = analyze(deck, rules)

    return AnalyzeResponse(
        deck=deck.to_document(),
        verdict=verdict.to_dict(),
        message=format_verdict(deck, verdict),
    )
