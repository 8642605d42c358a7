"""
Bracket classification engine.

Maps a deck and a rule model to a Verdict. Pure: no I/O, no shared state,
inputs are never mutated.

Order of evaluation:
1. Global bans (short-circuits)
2. Category counts over commanders + cards
3. Bracket search in ascending id order. The fitting bracket is the highest
   id that fit; the violations reported are those of the last bracket that
   failed.
4. Verdict
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from rulezero.models.card import CardRef, find_matching_names
from rulezero.models.deck import Deck
from rulezero.models.failure import InvalidInputError
from rulezero.models.rules import RuleModel, Tier
from rulezero.models.verdict import (
    REASON_EXCEEDS_ALL,
    REASON_FITS,
    REASON_GLOBALLY_BANNED,
    Verdict,
)

logger = logging.getLogger(__name__)


@dataclass
class CategoryTally:
    """Per-category counts and matched card names."""

    counts: dict[str, int]
    found_cards: dict[str, list[str]]


@dataclass
class TierSearchResult:
    """Outcome of walking the brackets."""

    fitting_tier: Tier | None
    violations: list[str]


def analyze(
    deck: Deck | Mapping[str, Any] | None,
    rules: RuleModel | Mapping[str, Any] | None,
) -> Verdict:
    """
    Classify a deck into a bracket.

    Args:
        deck: The deck, or its JSON shape
        rules: The rule model, or its JSON document

    Returns:
        A Verdict. A None tier is a valid outcome.

    Raises:
        InvalidInputError: If the deck or rule model is missing or malformed
    """
    deck, rules = _validate_inputs(deck, rules)
    all_cards = deck.all_cards()

    banned_found = find_matching_names(all_cards, rules.global_bans)
    if banned_found:
        logger.debug("Deck %r rejected: %d globally banned cards", deck.name, len(banned_found))
        return Verdict(
            tier=None,
            reason=REASON_GLOBALLY_BANNED,
            banned_cards_found=tuple(banned_found),
        )

    tally = categorize_cards(all_cards, rules.categories)
    search = find_fitting_tier(all_cards, tally.counts, rules)

    if search.fitting_tier is None:
        logger.debug("Deck %r exceeds all brackets", deck.name)
        return Verdict(
            tier=None,
            reason=REASON_EXCEEDS_ALL,
            violations=tuple(search.violations),
            category_counts=tally.counts,
            found_cards=tally.found_cards,
        )

    logger.debug("Deck %r fits bracket %d", deck.name, search.fitting_tier.id)
    return Verdict(
        tier=search.fitting_tier.id,
        tier_name=search.fitting_tier.name,
        reason=REASON_FITS,
        category_counts=tally.counts,
        found_cards=tally.found_cards,
    )


def categorize_cards(
    all_cards: list[str],
    categories: Mapping[str, tuple[CardRef, ...]],
) -> CategoryTally:
    """
    Count deck cards per category.

    Every category starts at zero. A card counts once per category it is
    listed in, and once per copy in the deck.
    """
    counts = {category: 0 for category in categories}
    found_cards: dict[str, list[str]] = {category: [] for category in categories}

    for card in all_cards:
        candidate = CardRef(card)
        for category, refs in categories.items():
            if any(ref.matches(candidate) for ref in refs):
                counts[category] += 1
                found_cards[category].append(card)

    return CategoryTally(counts=counts, found_cards=found_cards)


def evaluate_tier(all_cards: list[str], counts: Mapping[str, int], tier: Tier) -> list[str]:
    """
    Violations for a single bracket. Empty means the deck fits.

    A bracket-specific ban rejects the bracket without checking its limits.
    Otherwise every exceeded limit is reported.
    """
    if tier.banned_cards:
        banned = find_matching_names(all_cards, tier.banned_cards)
        if banned:
            return [f"Banned in bracket {tier.id}: {', '.join(banned)}"]

    violations: list[str] = []
    for category, limit in tier.limits.items():
        count = counts.get(category, 0)
        if limit.exceeded_by(count):
            violations.append(f"{category}: {count} (limit: {limit})")
    return violations


def find_fitting_tier(
    all_cards: list[str],
    counts: Mapping[str, int],
    rules: RuleModel,
) -> TierSearchResult:
    """
    Walk brackets from lowest to highest id.

    Every bracket is examined. A fitting bracket replaces any earlier fit; a
    failing bracket's violations replace any earlier violations.
    """
    fitting_tier: Tier | None = None
    violations: list[str] = []

    for tier in rules.sorted_tiers():
        current = evaluate_tier(all_cards, counts, tier)
        if current:
            violations = current
        else:
            fitting_tier = tier

    return TierSearchResult(fitting_tier=fitting_tier, violations=violations)


def _validate_inputs(
    deck: Deck | Mapping[str, Any] | None,
    rules: RuleModel | Mapping[str, Any] | None,
) -> tuple[Deck, RuleModel]:
    if deck is None:
        raise InvalidInputError("Deck is missing")
    if rules is None:
        raise InvalidInputError("Rule configuration is missing")

    if not isinstance(deck, Deck):
        deck = Deck.from_document(deck)
    if not isinstance(rules, RuleModel):
        rules = RuleModel.from_document(rules)

    return deck, rules
