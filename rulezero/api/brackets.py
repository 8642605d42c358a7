"""
Bracket API endpoints.

CRUD for the brackets of the stored rule configuration.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from rulezero.db import load_rule_model, save_rule_model
from rulezero.db.database import get_session
from rulezero.models.rules import Tier
from rulezero.services.rule_editing import (
    RuleEditError,
    add_tier,
    parse_limits,
    remove_tier,
    update_tier,
)
from rulezero.services.verdict_formatter import format_tier, format_tier_list

router = APIRouter(prefix="/brackets", tags=["brackets"])

# Raw limit as sent by clients: a count, "unlimited", null or -1
RawLimit = int | str | None


class BracketResponse(BaseModel):
    """Response model for a single bracket."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    description: str = ""
    limits: dict[str, int | str] = Field(default_factory=dict)
    banned_cards: list[str] = Field(default_factory=list, alias="bannedCards")
    message: str = ""


class BracketListResponse(BaseModel):
    """Response model for all brackets."""

    brackets: list[BracketResponse]
    count: int
    message: str = ""


class BracketCreateRequest(BaseModel):
    """Request model for adding a bracket."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., description="Bracket id; higher means more powerful")
    name: str = Field(..., min_length=1)
    description: str = ""
    limits: dict[str, RawLimit] = Field(
        default_factory=dict,
        description="Category -> limit. Use -1 or \"unlimited\" for no limit.",
        examples=[{"tutors": 2, "gameChangers": "unlimited"}],
    )
    banned_cards: list[str] = Field(default_factory=list, alias="bannedCards")


class BracketUpdateRequest(BaseModel):
    """Request model for updating a bracket. Omitted fields are unchanged."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    description: str | None = None
    limits: dict[str, RawLimit] | None = Field(
        default=None,
        description="Limits to change; other categories keep their limit",
    )
    banned_cards: list[str] | None = Field(default=None, alias="bannedCards")


class BracketDeleteResponse(BaseModel):
    """Response model for bracket removal."""

    id: int
    deleted: bool


def _to_response(tier: Tier) -> BracketResponse:
    document = tier.to_document()
    return BracketResponse(
        id=tier.id,
        name=tier.name,
        description=tier.description,
        limits=document["limits"],
        banned_cards=document["bannedCards"],
        message=format_tier(tier),
    )


@router.get("", response_model=BracketListResponse)
async def list_brackets(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> BracketListResponse:
    """List all brackets, lowest id first."""
    model = await load_rule_model(session)
    brackets = [_to_response(tier) for tier in model.sorted_tiers()]
    return BracketListResponse(
        brackets=brackets,
        count=len(brackets),
        message=format_tier_list(model),
    )


@router.get("/{tier_id}", response_model=BracketResponse)
async def get_bracket(
    tier_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> BracketResponse:
    """
    Get one bracket.

    Returns 404 if the bracket does not exist.
    """
    model = await load_rule_model(session)
    tier = model.get_tier(tier_id)
    if tier is None:
        raise RuleEditError.tier_not_found(tier_id)
    return _to_response(tier)


@router.post("", response_model=BracketResponse, status_code=status.HTTP_201_CREATED)
async def create_bracket(
    request: BracketCreateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> BracketResponse:
    """
    Add a bracket.

    Returns 409 if a bracket with the same id exists.
    """
    tier = Tier(
        id=request.id,
        name=request.name,
        description=request.description,
        limits=parse_limits(request.limits),
        banned_cards=tuple(request.banned_cards),
    )
    model = add_tier(await load_rule_model(session), tier)
    await save_rule_model(session, model)
    return _to_response(tier)


@router.patch("/{tier_id}", response_model=BracketResponse)
async def patch_bracket(
    tier_id: int,
    request: BracketUpdateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> BracketResponse:
    """
    Update a bracket's name, description, limits or bracket-specific bans.

    Returns 404 if the bracket does not exist.
    """
    model = update_tier(
        await load_rule_model(session),
        tier_id,
        name=request.name,
        description=request.description,
        limits=parse_limits(request.limits) if request.limits is not None else None,
        banned_cards=request.banned_cards,
    )
    await save_rule_model(session, model)

    return _to_response(model.tiers[tier_id])


@router.delete("/{tier_id}", response_model=BracketDeleteResponse)
async def delete_bracket(
    tier_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> BracketDeleteResponse:
    """
    Remove a bracket.

    Returns 404 if the bracket does not exist.
    """
    model = remove_tier(await load_rule_model(session), tier_id)
    await save_rule_model(session, model)
    return BracketDeleteResponse(id=tier_id, deleted=True)
