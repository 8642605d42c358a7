"""Tests for the default rule data job."""

from typing import Any

import httpx
import pytest
import respx

from rulezero.jobs.fetch_defaults import (
    DefaultRuleData,
    RuleDataFetchError,
    apply_default_rule_data,
    fetch_all_pages,
    fetch_combo_piece_names,
    fetch_default_rule_data,
)
from rulezero.models.card import CardRef
from rulezero.models.rules import RuleModel
from rulezero.services.rule_editing import add_category

SPELLBOOK = "https://backend.commanderspellbook.com"


def _page(results: list[dict[str, Any]], has_next: bool = False) -> dict[str, Any]:
    return {"results": results, "next": "https://next-page" if has_next else None}


def _cards(*names: str) -> list[dict[str, Any]]:
    return [{"name": name} for name in names]


class TestFetchAllPages:
    @respx.mock
    async def test_follows_next(self) -> None:
        """Pages are fetched until next is null."""
        route = respx.get(f"{SPELLBOOK}/cards")
        route.side_effect = [
            httpx.Response(200, json=_page(_cards("A", "B"), has_next=True)),
            httpx.Response(200, json=_page(_cards("C"))),
        ]

        async with httpx.AsyncClient() as client:
            results = await fetch_all_pages(client, "cards", {"tutor": "true"}, "tutors")

        assert [card["name"] for card in results] == ["A", "B", "C"]
        assert route.call_count == 2
        assert route.calls[0].request.url.params["offset"] == "0"
        assert route.calls[1].request.url.params["offset"] == "100"
        assert route.calls[1].request.url.params["tutor"] == "true"

    @respx.mock
    async def test_error_wrapped(self) -> None:
        """HTTP errors become RuleDataFetchError."""
        respx.get(f"{SPELLBOOK}/cards").mock(return_value=httpx.Response(500))

        async with httpx.AsyncClient() as client:
            with pytest.raises(RuleDataFetchError, match="Failed to fetch tutors"):
                await fetch_all_pages(client, "cards", {}, "tutors")


class TestComboPieces:
    @respx.mock
    async def test_unique_first_seen(self) -> None:
        """Combo piece names are unique and keep first-seen order."""
        respx.get(f"{SPELLBOOK}/variants").mock(
            return_value=httpx.Response(
                200,
                json=_page(
                    [
                        {"uses": [{"card": {"name": "Thassa's Oracle"}}, {"card": {"name": "X"}}]},
                        {"uses": [{"card": {"name": "X"}}, {"card": {"name": "Y"}}]},
                        {"uses": [{"card": {}}]},
                    ]
                ),
            )
        )

        async with httpx.AsyncClient() as client:
            names = await fetch_combo_piece_names(client)

        assert names == ["Thassa's Oracle", "X", "Y"]


class TestFetchDefaultRuleData:
    @respx.mock
    async def test_fetches_every_source(self) -> None:
        """Bans and every built-in category are fetched."""

        def cards_handler(request: httpx.Request) -> httpx.Response:
            params = request.url.params
            if params.get("legalities__commander") == "false":
                return httpx.Response(200, json=_page(_cards("Black Lotus")))
            if params.get("tutor") == "true":
                return httpx.Response(200, json=_page(_cards("Demonic Tutor")))
            if params.get("gameChanger") == "true":
                return httpx.Response(200, json=_page(_cards("Rhystic Study")))
            if params.get("massLandDenial") == "true":
                return httpx.Response(200, json=_page(_cards("Armageddon")))
            return httpx.Response(400)

        respx.get(f"{SPELLBOOK}/cards").mock(side_effect=cards_handler)
        respx.get(f"{SPELLBOOK}/variants").mock(
            return_value=httpx.Response(
                200,
                json=_page([{"uses": [{"card": {"name": "Thassa's Oracle"}}]}]),
            )
        )

        data = await fetch_default_rule_data()

        assert data.global_bans == ["Black Lotus"]
        assert data.categories == {
            "tutors": ["Demonic Tutor"],
            "twoCardCombos": ["Thassa's Oracle"],
            "gameChangers": ["Rhystic Study"],
            "landDenial": ["Armageddon"],
        }


class TestApplyDefaultRuleData:
    def test_replaces_bans_and_builtins(self, rule_model: RuleModel) -> None:
        """Bans and built-in lists are replaced; tiers and custom categories kept."""
        with_custom, key = add_category(rule_model, "Stax")
        data = DefaultRuleData(
            global_bans=["Chaos Orb"],
            categories={"tutors": ["Worldly Tutor"]},
        )

        updated = apply_default_rule_data(with_custom, data)

        assert updated.global_bans == ("Chaos Orb",)
        assert updated.categories["tutors"] == (CardRef("Worldly Tutor"),)
        assert updated.categories["gameChangers"] == rule_model.categories["gameChangers"]
        assert key in updated.categories
        assert updated.tiers == with_custom.tiers
