"""
RuleZero services.

Rule configuration editing, default rule data, card lookup and verdict
rendering.
"""

from rulezero.services.default_rules import (
    DEFAULT_RULE_DOCUMENT,
    default_rule_model,
    get_default_rule_document,
)
from rulezero.services.rule_editing import (
    RuleEditError,
    add_card_to_category,
    add_category,
    add_global_ban,
    add_tier,
    parse_limits,
    remove_card_from_category,
    remove_category,
    remove_global_ban,
    remove_tier,
    update_tier,
)
from rulezero.services.scryfall import (
    CardLookupError,
    CardNotFoundError,
    autocomplete,
    enrich_cards,
    get_card_by_id,
    get_card_by_name,
    search_cards,
)
from rulezero.services.verdict_formatter import (
    chunk_lines,
    format_tier,
    format_tier_list,
    format_verdict,
)

__all__ = [
    "CardLookupError",
    "CardNotFoundError",
    "DEFAULT_RULE_DOCUMENT",
    "RuleEditError",
    "add_card_to_category",
    "add_category",
    "add_global_ban",
    "add_tier",
    "autocomplete",
    "chunk_lines",
    "default_rule_model",
    "enrich_cards",
    "format_tier",
    "format_tier_list",
    "format_verdict",
    "get_card_by_id",
    "get_card_by_name",
    "get_default_rule_document",
    "parse_limits",
    "remove_card_from_category",
    "remove_category",
    "remove_global_ban",
    "remove_tier",
    "search_cards",
    "update_tier",
]
