"""
Global ban list endpoints.

A globally banned card disqualifies a deck from every bracket.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from rulezero.config import MESSAGE_CHUNK_SIZE
from rulezero.db import load_rule_model, save_rule_model
from rulezero.db.database import get_session
from rulezero.services.rule_editing import add_global_ban, remove_global_ban
from rulezero.services.verdict_formatter import chunk_lines

router = APIRouter(prefix="/bans", tags=["bans"])


class BanListResponse(BaseModel):
    """Response model for the global ban list."""

    cards: list[str] = Field(default_factory=list)
    count: int = 0
    messages: list[str] = Field(
        default_factory=list,
        description=f"The list rendered as messages under {MESSAGE_CHUNK_SIZE} characters",
    )


class BanRequest(BaseModel):
    """Request model for banning a card."""

    name: str = Field(..., min_length=1, examples=["Black Lotus"])


class BanChangeResponse(BaseModel):
    """Response model for ban list changes."""

    name: str
    changed: bool
    count: int


@router.get("", response_model=BanListResponse)
async def list_bans(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> BanListResponse:
    """Get the global ban list."""
    model = await load_rule_model(session)
    cards = list(model.global_bans)
    return BanListResponse(
        cards=cards,
        count=len(cards),
        messages=chunk_lines(f"**Globally Banned Cards ({len(cards)}):**", cards),
    )


@router.post("", response_model=BanChangeResponse, status_code=status.HTTP_201_CREATED)
async def ban_card(
    request: BanRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> BanChangeResponse:
    """
    Ban a card in every bracket.

    Already-banned cards (case-insensitive) are left alone; ``changed`` is
    false in that case.
    """
    current = await load_rule_model(session)
    model = add_global_ban(current, request.name)
    changed = model is not current
    if changed:
        await save_rule_model(session, model)
    return BanChangeResponse(name=request.name, changed=changed, count=len(model.global_bans))


@router.delete("/{card_name:path}", response_model=BanChangeResponse)
async def unban_card(
    card_name: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> BanChangeResponse:
    """
    Lift a global ban. ``changed`` is false if the card was not banned.

    The name may contain slashes (split cards such as "Fire // Ice").
    """
    current = await load_rule_model(session)
    model = remove_global_ban(current, card_name)
    changed = model is not current
    if changed:
        await save_rule_model(session, model)
    return BanChangeResponse(name=card_name, changed=changed, count=len(model.global_bans))
