"""
Plain-text rendering of verdicts and bracket configuration.

This module handles output rendering only. It never decides anything about
a deck; it prints what the analysis engine already concluded.
"""

from rulezero.config import MESSAGE_CHUNK_SIZE
from rulezero.models.category import format_category_name
from rulezero.models.deck import Deck
from rulezero.models.rules import Limit, RuleModel, Tier
from rulezero.models.verdict import Verdict

UNLIMITED_SYMBOL = "∞"


def _format_limit(limit: Limit) -> str:
    return UNLIMITED_SYMBOL if limit.is_unlimited else str(limit)


def _bullets(items: list[str] | tuple[str, ...]) -> list[str]:
    return [f"• {item}" for item in items]


def _format_counts(verdict: Verdict) -> list[str]:
    lines = ["**Card Counts:**"]
    for category, count in verdict.category_counts.items():
        lines.append(f"• {format_category_name(category)}: {count}")
    return lines


def format_verdict(deck: Deck, verdict: Verdict) -> str:
    """
    Render an analysis result as a message.

    Fitting decks list their counts and every flagged card. Rejected decks
    list the reason, banned cards, violations and counts.
    """
    lines = [
        f"**Deck: {deck.name}**",
        f"**Commander(s):** {', '.join(deck.commanders)}",
        f"**Source:** {deck.source}",
        "",
    ]

    if verdict.tier is not None:
        lines.append(f"✅ **Bracket {verdict.tier}: {verdict.tier_name}**")
        lines.append("")
        lines.extend(_format_counts(verdict))
        for category, cards in verdict.found_cards.items():
            if cards:
                lines.append("")
                lines.append(f"**{format_category_name(category)} found:**")
                lines.extend(_bullets(cards))
        return "\n".join(lines)

    lines.append("❌ **No Valid Bracket**")
    lines.append(f"**Reason:** {verdict.reason}")

    if verdict.has_banned_cards:
        lines.append("")
        lines.append("**Banned Cards:**")
        lines.extend(_bullets(verdict.banned_cards_found))

    if verdict.has_violations:
        lines.append("")
        lines.append("**Violations:**")
        lines.extend(_bullets(verdict.violations))

    if verdict.category_counts:
        lines.append("")
        lines.extend(_format_counts(verdict))

    return "\n".join(lines)


def format_tier(tier: Tier) -> str:
    """Render one bracket with its limits and bracket-specific bans."""
    lines = [f"**Bracket {tier.id}: {tier.name}**", tier.description, "", "**Limits:**"]
    for category, limit in tier.limits.items():
        lines.append(f"• {format_category_name(category)}: {_format_limit(limit)}")

    if tier.banned_cards:
        lines.append("")
        lines.append("**Bracket-Specific Bans:**")
        lines.extend(_bullets(tier.banned_cards))

    return "\n".join(lines)


def format_tier_list(model: RuleModel) -> str:
    """Render every bracket, lowest id first."""
    sections = ["**Commander Brackets**"]
    for tier in model.sorted_tiers():
        lines = [f"**Bracket {tier.id}: {tier.name}**", tier.description]
        for category, limit in tier.limits.items():
            lines.append(f"• {format_category_name(category)}: {_format_limit(limit)}")
        sections.append("\n".join(lines))
    return "\n\n".join(sections)


def chunk_lines(header: str, items: list[str], limit: int = MESSAGE_CHUNK_SIZE) -> list[str]:
    """
    Split a bulleted list into messages shorter than ``limit`` characters.

    The header starts the first message only.
    """
    chunks: list[str] = []
    current = f"{header}\n\n"

    for item in items:
        line = f"• {item}\n"
        if len(current) + len(line) > limit:
            chunks.append(current)
            current = line
        else:
            current += line

    if current:
        chunks.append(current)

    return chunks
