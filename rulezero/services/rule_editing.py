"""
Rule configuration editing.

Every operation takes a RuleModel and returns a new RuleModel. The input
snapshot is never modified; persisting the result is the caller's job
(see db/operations.py).
"""

import dataclasses
from collections.abc import Mapping
from typing import Any

from rulezero.models.card import CardRef, normalize_name
from rulezero.models.category import is_builtin, to_camel_case
from rulezero.models.failure import FailureKind, InvalidInputError, KnownError
from rulezero.models.rules import UNLIMITED, Limit, RuleModel, Tier


class RuleEditError(KnownError):
    """Raised when a configuration change is refused."""

    @classmethod
    def tier_not_found(cls, tier_id: int) -> "RuleEditError":
        return cls(
            kind=FailureKind.NOT_FOUND,
            message=f"Bracket {tier_id} does not exist",
            suggestion="List brackets to see the configured ids.",
            status_code=404,
        )

    @classmethod
    def category_not_found(cls, category: str) -> "RuleEditError":
        return cls(
            kind=FailureKind.NOT_FOUND,
            message=f'Category "{category}" does not exist',
            status_code=404,
        )


def _replace(model: RuleModel, **changes: Any) -> RuleModel:
    fields = {
        "tiers": dict(model.tiers),
        "global_bans": tuple(model.global_bans),
        "categories": dict(model.categories),
    }
    fields.update(changes)
    return RuleModel(**fields)


def parse_limits(raw_limits: Mapping[str, Any]) -> dict[str, Limit]:
    """Parse a mapping of category -> raw limit value."""
    return {category: Limit.parse(raw) for category, raw in raw_limits.items()}


# --- Brackets ---


def add_tier(model: RuleModel, tier: Tier) -> RuleModel:
    """
    Add a bracket.

    Raises:
        RuleEditError: If a bracket with the same id exists
    """
    if tier.id in model.tiers:
        raise RuleEditError(
            kind=FailureKind.CONFLICT,
            message=f"Bracket {tier.id} already exists",
            suggestion="Update the existing bracket or choose another id.",
            status_code=409,
        )
    tiers = dict(model.tiers)
    tiers[tier.id] = tier
    return _replace(model, tiers=tiers)


def update_tier(
    model: RuleModel,
    tier_id: int,
    *,
    name: str | None = None,
    description: str | None = None,
    limits: Mapping[str, Limit] | None = None,
    banned_cards: list[str] | None = None,
) -> RuleModel:
    """
    Update fields of an existing bracket.

    ``limits`` is merged into the bracket's current limits; categories not
    mentioned keep their limit.

    Raises:
        RuleEditError: If the bracket does not exist
    """
    current = model.get_tier(tier_id)
    if current is None:
        raise RuleEditError.tier_not_found(tier_id)

    merged_limits = dict(current.limits)
    if limits:
        merged_limits.update(limits)

    updated = dataclasses.replace(
        current,
        name=current.name if name is None else name,
        description=current.description if description is None else description,
        limits=merged_limits,
        banned_cards=current.banned_cards if banned_cards is None else tuple(banned_cards),
    )
    tiers = dict(model.tiers)
    tiers[tier_id] = updated
    return _replace(model, tiers=tiers)


def remove_tier(model: RuleModel, tier_id: int) -> RuleModel:
    """
    Remove a bracket.

    Raises:
        RuleEditError: If the bracket does not exist
    """
    if tier_id not in model.tiers:
        raise RuleEditError.tier_not_found(tier_id)
    tiers = {key: tier for key, tier in model.tiers.items() if key != tier_id}
    return _replace(model, tiers=tiers)


# --- Global bans ---


def add_global_ban(model: RuleModel, card_name: str) -> RuleModel:
    """Ban a card in every bracket. No change if already banned."""
    if not card_name or not card_name.strip():
        raise InvalidInputError("Card name cannot be empty")
    key = normalize_name(card_name)
    if any(normalize_name(banned) == key for banned in model.global_bans):
        return model
    return _replace(model, global_bans=(*model.global_bans, card_name))


def remove_global_ban(model: RuleModel, card_name: str) -> RuleModel:
    """Lift a global ban. No change if the card is not banned."""
    key = normalize_name(card_name)
    remaining = tuple(banned for banned in model.global_bans if normalize_name(banned) != key)
    if len(remaining) == len(model.global_bans):
        return model
    return _replace(model, global_bans=remaining)


# --- Categories ---


def add_category(model: RuleModel, display_name: str) -> tuple[RuleModel, str]:
    """
    Create a custom category.

    The key is the camelCase form of ``display_name``. Every bracket gets an
    unlimited limit for the new category.

    Returns:
        Tuple of (new model, category key)

    Raises:
        RuleEditError: If the category already exists
        InvalidInputError: If the name is empty or collides with a built-in
    """
    key = to_camel_case(display_name)
    if not key:
        raise InvalidInputError("Category name cannot be empty")
    if key in model.categories:
        raise RuleEditError(
            kind=FailureKind.CONFLICT,
            message=f'Category "{key}" already exists',
            status_code=409,
        )

    categories = dict(model.categories)
    categories[key] = ()
    tiers = {
        tier_id: dataclasses.replace(tier, limits={**tier.limits, key: UNLIMITED})
        for tier_id, tier in model.tiers.items()
    }
    return _replace(model, tiers=tiers, categories=categories), key


def remove_category(model: RuleModel, category: str) -> RuleModel:
    """
    Remove a custom category and drop its limit from every bracket.

    Raises:
        RuleEditError: If the category is built-in or does not exist
    """
    if is_builtin(category):
        raise RuleEditError(
            kind=FailureKind.VALIDATION_FAILED,
            message=f'Cannot remove built-in category "{category}"',
            status_code=400,
        )
    if category not in model.categories:
        raise RuleEditError.category_not_found(category)

    categories = {key: refs for key, refs in model.categories.items() if key != category}
    tiers = {
        tier_id: dataclasses.replace(
            tier,
            limits={key: limit for key, limit in tier.limits.items() if key != category},
        )
        for tier_id, tier in model.tiers.items()
    }
    return _replace(model, tiers=tiers, categories=categories)


def _same_entry(existing: CardRef, candidate: CardRef) -> bool:
    if existing.matches(candidate):
        return True
    return normalize_name(existing.name) == normalize_name(candidate.name)


def add_card_to_category(model: RuleModel, category: str, card: CardRef) -> RuleModel:
    """
    Add a card to a category, creating the category if needed.

    No change if an entry with the same id or name is already listed.
    """
    if not card.name or not card.name.strip():
        raise InvalidInputError("Card name cannot be empty")

    existing = model.categories.get(category, ())
    if any(_same_entry(entry, card) for entry in existing):
        return model

    categories = dict(model.categories)
    categories[category] = (*existing, card)
    return _replace(model, categories=categories)


def remove_card_from_category(model: RuleModel, category: str, identifier: str) -> RuleModel:
    """
    Remove the first entry whose name (case-insensitive) or id matches.

    Raises:
        RuleEditError: If the category does not exist
    """
    if category not in model.categories:
        raise RuleEditError.category_not_found(category)

    entries = list(model.categories[category])
    key = normalize_name(identifier)
    for index, entry in enumerate(entries):
        if entry.external_id == identifier or normalize_name(entry.name) == key:
            del entries[index]
            categories = dict(model.categories)
            categories[category] = tuple(entries)
            return _replace(model, categories=categories)

    return model
