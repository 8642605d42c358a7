"""
Job to refresh default rule data from Commander Spellbook.

Fetches the Commander ban list and the built-in category lists (tutors,
two-card combo pieces, game changers, mass land denial) and merges them into
the stored rule configuration. Brackets and custom categories are kept.

Can be run as a standalone script or triggered through the API.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from rulezero.config import SPELLBOOK_PAGE_SIZE, settings
from rulezero.db.database import async_session_factory, init_db
from rulezero.db.operations import load_rule_model, save_rule_model
from rulezero.models.card import CardRef
from rulezero.models.category import BuiltinCategory
from rulezero.models.failure import FailureKind, KnownError
from rulezero.models.rules import RuleModel
from rulezero.providers.common import create_client, get_json

logger = logging.getLogger(__name__)

# Card filters per source, passed to the /cards endpoint
GLOBAL_BANS_FILTER = {"legalities__commander": "false"}
CATEGORY_FILTERS: dict[BuiltinCategory, dict[str, str]] = {
    BuiltinCategory.TUTORS: {"tutor": "true", "legalities__commander": "true"},
    BuiltinCategory.GAME_CHANGERS: {"gameChanger": "true", "legalities__commander": "true"},
    BuiltinCategory.LAND_DENIAL: {"massLandDenial": "true", "legalities__commander": "true"},
}

# Two-card combos from the Ruthless (4) and Spicy (5) brackets
COMBO_VARIANT_FILTER = {"card_count": "2", "commander_bracket": "4,5"}


class RuleDataFetchError(KnownError):
    """Raised when Commander Spellbook cannot be queried."""

    def __init__(self, what: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message=f"Failed to fetch {what}",
            detail=detail,
            suggestion="Commander Spellbook may be unavailable. Try again later.",
            status_code=502,
        )


@dataclass
class DefaultRuleData:
    """Ban list and built-in category lists fetched from Commander Spellbook."""

    global_bans: list[str] = field(default_factory=list)
    categories: dict[str, list[str]] = field(default_factory=dict)


async def fetch_all_pages(
    client: httpx.AsyncClient,
    path: str,
    filters: dict[str, str],
    what: str,
) -> list[dict[str, Any]]:
    """
    Fetch every page of a paginated Commander Spellbook endpoint.

    Follows offsets until the response's ``next`` link is null.

    Raises:
        RuleDataFetchError: If any page fails
    """
    results: list[dict[str, Any]] = []
    offset = 0

    while True:
        params = {**filters, "limit": str(SPELLBOOK_PAGE_SIZE), "offset": str(offset)}
        url = str(httpx.URL(f"{settings.spellbook_api_url}/{path}", params=params))
        try:
            data = await get_json(url, client)
        except httpx.HTTPStatusError as e:
            raise RuleDataFetchError(what, f"HTTP {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            raise RuleDataFetchError(what, str(e)) from e

        results.extend(data.get("results") or [])
        if data.get("next") is None:
            break
        offset += SPELLBOOK_PAGE_SIZE

    return results


async def fetch_card_names(
    client: httpx.AsyncClient,
    filters: dict[str, str],
    what: str,
) -> list[str]:
    """Names of all cards matching a /cards filter, in response order."""
    cards = await fetch_all_pages(client, "cards", filters, what)
    return [card["name"] for card in cards if card.get("name")]


async def fetch_combo_piece_names(client: httpx.AsyncClient) -> list[str]:
    """Unique names of cards used by high-power two-card combos, first seen first."""
    variants = await fetch_all_pages(client, "variants", COMBO_VARIANT_FILTER, "two-card combos")

    names: dict[str, None] = {}
    for variant in variants:
        for use in variant.get("uses") or []:
            name = (use.get("card") or {}).get("name")
            if name:
                names.setdefault(name, None)
    return list(names)


async def fetch_default_rule_data(client: httpx.AsyncClient | None = None) -> DefaultRuleData:
    """
    Fetch all default rule data concurrently.

    Raises:
        RuleDataFetchError: If any source fails
    """
    if client is None:
        async with create_client() as owned_client:
            return await fetch_default_rule_data(owned_client)

    filters = CATEGORY_FILTERS
    global_bans, tutors, combos, game_changers, land_denial = await asyncio.gather(
        fetch_card_names(client, GLOBAL_BANS_FILTER, "global bans"),
        fetch_card_names(client, filters[BuiltinCategory.TUTORS], "tutors"),
        fetch_combo_piece_names(client),
        fetch_card_names(client, filters[BuiltinCategory.GAME_CHANGERS], "game changers"),
        fetch_card_names(client, filters[BuiltinCategory.LAND_DENIAL], "land denial cards"),
    )

    logger.info(
        "Fetched %d bans, %d tutors, %d combo pieces, %d game changers, %d land denial cards",
        len(global_bans),
        len(tutors),
        len(combos),
        len(game_changers),
        len(land_denial),
    )

    return DefaultRuleData(
        global_bans=global_bans,
        categories={
            BuiltinCategory.TUTORS.value: tutors,
            BuiltinCategory.TWO_CARD_COMBOS.value: combos,
            BuiltinCategory.GAME_CHANGERS.value: game_changers,
            BuiltinCategory.LAND_DENIAL.value: land_denial,
        },
    )


def apply_default_rule_data(model: RuleModel, data: DefaultRuleData) -> RuleModel:
    """
    Merge fetched default data into a rule model.

    Replaces the global ban list and the built-in category lists. Brackets
    and custom categories are untouched.
    """
    categories = dict(model.categories)
    for category, names in data.categories.items():
        categories[category] = tuple(CardRef.from_name(name) for name in names)

    return RuleModel(
        tiers=dict(model.tiers),
        global_bans=tuple(data.global_bans),
        categories=categories,
    )


async def run_default_sync(client: httpx.AsyncClient | None = None) -> RuleModel:
    """
    Fetch defaults and store them in the active rule configuration.

    Returns the stored RuleModel.
    """
    data = await fetch_default_rule_data(client)

    async with async_session_factory() as session:
        current = await load_rule_model(session)
        updated = apply_default_rule_data(current, data)
        await save_rule_model(session, updated)
        await session.commit()

    logger.info("Default rule data sync complete")
    return updated


async def _run_from_cli() -> None:
    await init_db()
    await run_default_sync()


def main() -> None:
    """CLI entry point for refreshing default rule data."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(_run_from_cli())


if __name__ == "__main__":
    main()
