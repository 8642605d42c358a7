from rulezero.models.card import CardRef, contains_card, find_matching_names, normalize_name
from rulezero.models.category import (
    BUILTIN_CATEGORIES,
    BuiltinCategory,
    format_category_name,
    is_builtin,
    to_camel_case,
)
from rulezero.models.deck import Deck
from rulezero.models.failure import (
    ApiResponse,
    FailureDetail,
    FailureKind,
    InvalidInputError,
    KnownError,
    OutcomeType,
    create_known_failure,
    create_unknown_failure,
    finalize_response,
)
from rulezero.models.rules import UNLIMITED, Limit, RuleModel, Tier
from rulezero.models.verdict import Verdict

__all__ = [
    "ApiResponse",
    "BUILTIN_CATEGORIES",
    "BuiltinCategory",
    "CardRef",
    "Deck",
    "FailureDetail",
    "FailureKind",
    "InvalidInputError",
    "KnownError",
    "Limit",
    "OutcomeType",
    "RuleModel",
    "Tier",
    "UNLIMITED",
    "Verdict",
    "contains_card",
    "create_known_failure",
    "create_unknown_failure",
    "finalize_response",
    "find_matching_names",
    "format_category_name",
    "is_builtin",
    "normalize_name",
    "to_camel_case",
]
