from rulezero.api.analyze import router as analyze_router
from rulezero.api.bans import router as bans_router
from rulezero.api.brackets import router as brackets_router
from rulezero.api.cards import router as cards_router
from rulezero.api.categories import router as categories_router
from rulezero.api.health import router as health_router
from rulezero.api.rules import router as rules_router

__all__ = [
    "analyze_router",
    "bans_router",
    "brackets_router",
    "cards_router",
    "categories_router",
    "health_router",
    "rules_router",
]
