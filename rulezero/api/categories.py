"""
Card category endpoints.

Built-in categories (tutors, two-card combos, game changers, land denial)
always exist. Custom categories can be added and removed; every bracket
starts with no limit on a new category.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from rulezero.db import load_rule_model, save_rule_model
from rulezero.db.database import get_session
from rulezero.models.card import CardRef
from rulezero.models.category import format_category_name, is_builtin
from rulezero.models.rules import RuleModel
from rulezero.services.rule_editing import (
    RuleEditError,
    add_card_to_category,
    add_category,
    remove_card_from_category,
    remove_category,
)
from rulezero.services.scryfall import enrich_cards

router = APIRouter(prefix="/categories", tags=["categories"])


class CardRefModel(BaseModel):
    """A card reference: name, optionally with its Scryfall ID."""

    name: str = Field(..., min_length=1)
    id: str | None = None

    @classmethod
    def from_ref(cls, ref: CardRef) -> "CardRefModel":
        return cls(name=ref.name, id=ref.external_id)


class CategoryResponse(BaseModel):
    """Response model for a single category."""

    key: str
    display_name: str
    builtin: bool
    cards: list[CardRefModel] = Field(default_factory=list)
    count: int = 0


class CategoryListResponse(BaseModel):
    """Response model for all categories."""

    categories: list[CategoryResponse]
    count: int


class CategoryCreateRequest(BaseModel):
    """Request model for creating a custom category."""

    name: str = Field(
        ...,
        min_length=1,
        description="Display name; the key is its camelCase form",
        examples=["Fast Mana"],
    )


class CategoryCardRequest(BaseModel):
    """Request model for adding a card to a category."""

    name: str = Field(..., min_length=1, examples=["Demonic Tutor"])
    id: str | None = Field(default=None, description="Scryfall ID, if known")
    resolve: bool = Field(
        default=False,
        description="Look up the Scryfall ID when none is given",
    )


class DeleteResponse(BaseModel):
    """Response model for delete operations."""

    key: str
    deleted: bool


def _to_response(model: RuleModel, key: str) -> CategoryResponse:
    refs = model.categories[key]
    return CategoryResponse(
        key=key,
        display_name=format_category_name(key),
        builtin=is_builtin(key),
        cards=[CardRefModel.from_ref(ref) for ref in refs],
        count=len(refs),
    )


@router.get("", response_model=CategoryListResponse)
async def list_categories(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CategoryListResponse:
    """List every category with its cards."""
    model = await load_rule_model(session)
    categories = [_to_response(model, key) for key in model.category_names()]
    return CategoryListResponse(categories=categories, count=len(categories))


@router.get("/{category}", response_model=CategoryResponse)
async def get_category(
    category: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CategoryResponse:
    """
    Get one category.

    Returns 404 if the category does not exist.
    """
    model = await load_rule_model(session)
    if category not in model.categories:
        raise RuleEditError.category_not_found(category)
    return _to_response(model, category)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    request: CategoryCreateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CategoryResponse:
    """
    Create a custom category.

    Returns 409 if it already exists, 400 if it collides with a built-in.
    """
    model, key = add_category(await load_rule_model(session), request.name)
    await save_rule_model(session, model)
    return _to_response(model, key)


@router.delete("/{category}", response_model=DeleteResponse)
async def delete_category(
    category: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeleteResponse:
    """
    Remove a custom category and its limits.

    Built-in categories cannot be removed.
    """
    model = remove_category(await load_rule_model(session), category)
    await save_rule_model(session, model)
    return DeleteResponse(key=category, deleted=True)


@router.post(
    "/{category}/cards",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_category_card(
    category: str,
    request: CategoryCardRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CategoryResponse:
    """
    Add a card to a category, creating the category if needed.

    Cards already listed (same id or name) are not added twice.
    """
    if request.id is None and request.resolve:
        (card,) = await enrich_cards([request.name])
    else:
        card = CardRef(name=request.name, external_id=request.id)

    model = add_card_to_category(await load_rule_model(session), category, card)
    await save_rule_model(session, model)
    return _to_response(model, category)


@router.delete("/{category}/cards/{card:path}", response_model=CategoryResponse)
async def remove_category_card(
    category: str,
    card: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CategoryResponse:
    """
    Remove a card from a category by name (case-insensitive) or Scryfall ID.

    The name may contain slashes (split cards such as "Fire // Ice").
    """
    model = remove_card_from_category(await load_rule_model(session), category, card)
    await save_rule_model(session, model)
    return _to_response(model, category)
