from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

REASON_GLOBALLY_BANNED = "Contains globally banned cards"
REASON_EXCEEDS_ALL = "Exceeds all bracket limits"
REASON_FITS = "Fits bracket requirements"


@dataclass(frozen=True)
class Verdict:
    """
    The outcome of analyzing a deck against a rule model.

    A verdict with ``tier`` None is a normal result, not an error: the deck
    either contains a globally banned card or exceeds every bracket.

    Attributes:
        tier: Id of the highest fitting bracket, None if none fits
        tier_name: Name of that bracket, None iff tier is None
        reason: Human-readable cause
        banned_cards_found: Globally banned cards (only on global-ban rejection)
        violations: Limit or bracket-ban violations from the last failing bracket
        category_counts: Category -> number of matching deck cards
        found_cards: Category -> matching deck card names, in deck order
    """

    tier: int | None
    reason: str
    tier_name: str | None = None
    banned_cards_found: tuple[str, ...] = ()
    violations: tuple[str, ...] = ()
    category_counts: Mapping[str, int] = field(default_factory=dict)
    found_cards: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "banned_cards_found", tuple(self.banned_cards_found))
        object.__setattr__(self, "violations", tuple(self.violations))
        object.__setattr__(self, "category_counts", MappingProxyType(dict(self.category_counts)))
        object.__setattr__(
            self,
            "found_cards",
            MappingProxyType({k: tuple(v) for k, v in self.found_cards.items()}),
        )

    @property
    def is_valid(self) -> bool:
        """True if the deck fits some bracket."""
        return self.tier is not None

    @property
    def has_banned_cards(self) -> bool:
        return len(self.banned_cards_found) > 0

    @property
    def has_violations(self) -> bool:
        return len(self.violations) > 0

    def total_flagged_cards(self) -> int:
        """Sum of all category counts."""
        return sum(self.category_counts.values())

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON verdict shape."""
        return {
            "tier": self.tier,
            "tierName": self.tier_name,
            "reason": self.reason,
            "bannedCardsFound": list(self.banned_cards_found),
            "violations": list(self.violations),
            "categoryCounts": dict(self.category_counts),
            "foundCards": {k: list(v) for k, v in self.found_cards.items()},
        }
