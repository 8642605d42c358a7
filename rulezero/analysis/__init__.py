from rulezero.analysis.classifier import (
    analyze,
    categorize_cards,
    evaluate_tier,
    find_fitting_tier,
)

__all__ = [
    "analyze",
    "categorize_cards",
    "evaluate_tier",
    "find_fitting_tier",
]
