"""
Rule model: brackets, limits, ban lists and card categories.

A RuleModel is an immutable snapshot. The analysis engine only reads it;
configuration changes produce a new snapshot (see services/rule_editing.py).

The JSON document shape:

    {
        "tiers": {"1": {"name": ..., "description": ...,
                        "limits": {"tutors": 0, "gameChangers": "unlimited"},
                        "bannedCards": [...]}},
        "globalBans": ["Black Lotus", ...],
        "categories": {"tutors": ["Demonic Tutor", {"name": ..., "id": ...}]}
    }

"brackets" and "cardCategories" are accepted as aliases of "tiers" and
"categories".
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from rulezero.models.card import CardRef
from rulezero.models.category import BUILTIN_CATEGORIES, collides_with_builtin
from rulezero.models.failure import InvalidInputError

UNLIMITED_LABEL = "unlimited"

# Command surfaces use -1 to mean "no limit"
_UNLIMITED_SENTINEL_INT = -1


@dataclass(frozen=True, slots=True)
class Limit:
    """
    A per-category ceiling: a non-negative count or unlimited.

    ``value`` is None for unlimited. Use ``Limit.finite(n)`` or ``UNLIMITED``.
    """

    value: int | None = None

    @classmethod
    def finite(cls, value: int) -> "Limit":
        if value < 0:
            raise InvalidInputError(f"Limit must be non-negative, got {value}")
        return cls(value=value)

    @property
    def is_unlimited(self) -> bool:
        return self.value is None

    def exceeded_by(self, count: int) -> bool:
        """True if ``count`` is over this limit. Never true when unlimited."""
        if self.value is None:
            return False
        return count > self.value

    def to_storage(self) -> int | str:
        return UNLIMITED_LABEL if self.value is None else self.value

    def __str__(self) -> str:
        return UNLIMITED_LABEL if self.value is None else str(self.value)

    @classmethod
    def parse(cls, raw: Any) -> "Limit":
        """
        Parse a limit from a document value.

        Accepts a non-negative integer, "unlimited", None, positive infinity
        or -1 (unlimited).

        Raises:
            InvalidInputError: For any other value
        """
        if raw is None:
            return UNLIMITED
        if isinstance(raw, bool):
            raise InvalidInputError(f"Invalid limit value: {raw!r}")
        if isinstance(raw, str):
            if raw.strip().lower() in (UNLIMITED_LABEL, "infinity", "inf"):
                return UNLIMITED
            if raw.strip().lstrip("-").isdigit():
                return cls.parse(int(raw.strip()))
            raise InvalidInputError(f"Invalid limit value: {raw!r}")
        if isinstance(raw, float):
            if math.isinf(raw) and raw > 0:
                return UNLIMITED
            if math.isnan(raw) or not raw.is_integer():
                raise InvalidInputError(f"Invalid limit value: {raw!r}")
            return cls.parse(int(raw))
        if isinstance(raw, int):
            if raw == _UNLIMITED_SENTINEL_INT:
                return UNLIMITED
            return cls.finite(raw)
        raise InvalidInputError(f"Invalid limit value: {raw!r}")


UNLIMITED = Limit(value=None)


@dataclass(frozen=True)
class Tier:
    """
    A bracket: a named power level with category limits and extra bans.

    Attributes:
        id: Ordering key, lower is less powerful
        name: Display name
        description: Free-text description
        limits: Category -> Limit. Categories not listed are unlimited.
        banned_cards: Cards banned in this bracket on top of global bans
    """

    id: int
    name: str
    description: str = ""
    limits: Mapping[str, Limit] = field(default_factory=dict)
    banned_cards: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "limits", MappingProxyType(dict(self.limits)))
        object.__setattr__(self, "banned_cards", tuple(self.banned_cards))

    def limit_for(self, category: str) -> Limit:
        """Limit for a category, unlimited when the tier does not cover it."""
        return self.limits.get(category, UNLIMITED)

    def to_document(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "limits": {category: limit.to_storage() for category, limit in self.limits.items()},
            "bannedCards": list(self.banned_cards),
        }


@dataclass(frozen=True)
class RuleModel:
    """
    Immutable rule configuration consumed by the analysis engine.

    Built-in categories missing from ``categories`` are added as empty
    lists. Custom category keys that are spelling variants of a built-in
    key are rejected.
    """

    tiers: Mapping[int, Tier]
    global_bans: tuple[str, ...]
    categories: Mapping[str, tuple[CardRef, ...]]

    def __post_init__(self) -> None:
        for tier_id, tier in self.tiers.items():
            if tier_id != tier.id:
                raise InvalidInputError(
                    f"Bracket key {tier_id} does not match bracket id {tier.id}",
                )

        categories: dict[str, tuple[CardRef, ...]] = {}
        for builtin in BUILTIN_CATEGORIES:
            categories[builtin] = tuple(self.categories.get(builtin, ()))
        for name, refs in self.categories.items():
            if collides_with_builtin(name):
                raise InvalidInputError(
                    f"Category '{name}' collides with a built-in category",
                )
            categories[name] = tuple(refs)

        object.__setattr__(self, "tiers", MappingProxyType(dict(self.tiers)))
        object.__setattr__(self, "global_bans", tuple(self.global_bans))
        object.__setattr__(self, "categories", MappingProxyType(categories))

    def get_tier(self, tier_id: int) -> Tier | None:
        return self.tiers.get(tier_id)

    def sorted_tiers(self) -> list[Tier]:
        """All tiers, lowest id first."""
        return [self.tiers[tier_id] for tier_id in sorted(self.tiers)]

    def category_names(self) -> list[str]:
        return list(self.categories)

    def to_document(self) -> dict[str, Any]:
        """Serialize to the JSON rule document."""
        return {
            "tiers": {str(tier.id): tier.to_document() for tier in self.sorted_tiers()},
            "globalBans": list(self.global_bans),
            "categories": {
                name: [ref.to_storage() for ref in refs] for name, refs in self.categories.items()
            },
        }

    @classmethod
    def from_document(cls, document: Any) -> "RuleModel":
        """
        Build a RuleModel from a JSON rule document.

        Raises:
            InvalidInputError: If the document is missing a section or malformed
        """
        if document is None:
            raise InvalidInputError("Rule configuration is missing")
        if not isinstance(document, Mapping):
            raise InvalidInputError(
                "Rule configuration must be an object",
                detail=f"Got {type(document).__name__}",
            )

        try:
            parsed = RuleDocument.model_validate(dict(document))
        except ValidationError as e:
            raise InvalidInputError(
                "Invalid configuration provided. Must include tiers, globalBans, and categories",
                detail=_summarize_validation_error(e),
            ) from e

        tiers = {
            tier_id: Tier(
                id=tier_id,
                name=tier_doc.name,
                description=tier_doc.description,
                limits={
                    category: _parse_tier_limit(tier_id, category, raw)
                    for category, raw in tier_doc.limits.items()
                },
                banned_cards=tuple(tier_doc.banned_cards),
            )
            for tier_id, tier_doc in parsed.tiers.items()
        }
        categories = {
            name: tuple(CardRef.from_storage(entry) for entry in entries)
            for name, entries in parsed.categories.items()
        }

        return cls(tiers=tiers, global_bans=tuple(parsed.global_bans), categories=categories)


# --- Document schema ---


class TierDocument(BaseModel):
    """One bracket entry of the rule document."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str = ""
    limits: dict[str, Any] = Field(default_factory=dict)
    banned_cards: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("bannedCards", "banned_cards"),
    )


class RuleDocument(BaseModel):
    """The rule document. All three sections are required."""

    tiers: dict[int, TierDocument] = Field(
        ...,
        validation_alias=AliasChoices("tiers", "brackets"),
    )
    global_bans: list[str] = Field(
        ...,
        validation_alias=AliasChoices("globalBans", "global_bans"),
    )
    categories: dict[str, list[str | dict[str, Any]]] = Field(
        ...,
        validation_alias=AliasChoices("categories", "cardCategories"),
    )


def _parse_tier_limit(tier_id: int, category: str, raw: Any) -> Limit:
    try:
        return Limit.parse(raw)
    except InvalidInputError as e:
        raise InvalidInputError(
            f"Invalid limit for '{category}' in bracket {tier_id}",
            detail=e.message,
        ) from e


def _summarize_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors()[:5]:
        location = ".".join(str(part) for part in item["loc"])
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)
