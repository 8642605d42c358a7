"""Tests for Scryfall card lookup."""

import logging

import httpx
import pytest
import respx

from rulezero.models.card import CardRef
from rulezero.services.scryfall import (
    CardLookupError,
    CardNotFoundError,
    autocomplete,
    enrich_cards,
    get_card_by_id,
    get_card_by_name,
    search_cards,
)

SCRYFALL = "https://api.scryfall.com"


class TestSearchCards:
    @respx.mock
    async def test_returns_card_refs(self) -> None:
        """Search results become identified card references."""
        respx.get(f"{SCRYFALL}/cards/search").mock(
            return_value=httpx.Response(
                200,
                json={
                    "data": [
                        {"name": "Demonic Tutor", "id": "dt-1"},
                        {"name": "Diabolic Tutor", "id": "dt-2"},
                    ]
                },
            )
        )

        cards = await search_cards("tutor")

        assert cards == [CardRef("Demonic Tutor", "dt-1"), CardRef("Diabolic Tutor", "dt-2")]

    @respx.mock
    async def test_caps_results(self) -> None:
        """At most twenty results are returned."""
        data = [{"name": f"Card {i}", "id": str(i)} for i in range(30)]
        respx.get(f"{SCRYFALL}/cards/search").mock(
            return_value=httpx.Response(200, json={"data": data})
        )

        cards = await search_cards("card")

        assert len(cards) == 20

    @respx.mock
    async def test_no_matches(self) -> None:
        """Scryfall's 404 for no matches is an empty list."""
        respx.get(f"{SCRYFALL}/cards/search").mock(return_value=httpx.Response(404))

        assert await search_cards("zzzz") == []

    async def test_empty_query(self) -> None:
        """Empty queries return nothing without a request."""
        assert await search_cards("  ") == []

    @respx.mock
    async def test_server_error(self) -> None:
        """Other HTTP errors are lookup failures."""
        respx.get(f"{SCRYFALL}/cards/search").mock(return_value=httpx.Response(500))

        with pytest.raises(CardLookupError) as exc_info:
            await search_cards("tutor")

        assert exc_info.value.status_code == 502

    @respx.mock
    async def test_non_json_body(self) -> None:
        """A non-JSON 200 body is a lookup failure."""
        respx.get(f"{SCRYFALL}/cards/search").mock(
            return_value=httpx.Response(200, text="<html>maintenance</html>")
        )

        with pytest.raises(CardLookupError) as exc_info:
            await search_cards("tutor")

        assert exc_info.value.detail == "Response was not JSON"

    @respx.mock
    async def test_skips_cards_without_name(self) -> None:
        """Entries with no name are left out of the results."""
        respx.get(f"{SCRYFALL}/cards/search").mock(
            return_value=httpx.Response(
                200,
                json={"data": [{"id": "nameless"}, {"name": "Vampiric Tutor", "id": "vt"}]},
            )
        )

        assert await search_cards("tutor") == [CardRef("Vampiric Tutor", "vt")]


class TestGetCard:
    @respx.mock
    async def test_by_name(self) -> None:
        """Exact-name lookup returns the card's id."""
        respx.get(f"{SCRYFALL}/cards/named").mock(
            return_value=httpx.Response(200, json={"name": "Sol Ring", "id": "sr"})
        )

        assert await get_card_by_name("sol ring") == CardRef("Sol Ring", "sr")

    @respx.mock
    async def test_by_name_not_found(self) -> None:
        """Unknown names raise CardNotFoundError."""
        respx.get(f"{SCRYFALL}/cards/named").mock(return_value=httpx.Response(404))

        with pytest.raises(CardNotFoundError) as exc_info:
            await get_card_by_name("Not A Card")

        assert exc_info.value.status_code == 404
        assert exc_info.value.identifier == "Not A Card"

    @respx.mock
    async def test_by_id(self) -> None:
        """Id lookup hits the card endpoint."""
        respx.get(f"{SCRYFALL}/cards/abc").mock(
            return_value=httpx.Response(200, json={"name": "Sol Ring", "id": "abc"})
        )

        assert await get_card_by_id("abc") == CardRef("Sol Ring", "abc")

    @respx.mock
    async def test_network_error(self) -> None:
        """Connection failures are lookup failures."""
        respx.get(f"{SCRYFALL}/cards/abc").mock(side_effect=httpx.ConnectError("down"))

        with pytest.raises(CardLookupError):
            await get_card_by_id("abc")

    @respx.mock
    async def test_non_json_body(self) -> None:
        """A non-JSON card body is a lookup failure, not a crash."""
        respx.get(f"{SCRYFALL}/cards/named").mock(
            return_value=httpx.Response(200, text="not json")
        )

        with pytest.raises(CardLookupError) as exc_info:
            await get_card_by_name("Sol Ring")

        assert exc_info.value.status_code == 502

    @respx.mock
    async def test_card_without_name(self) -> None:
        """A card object with no name is a lookup failure."""
        respx.get(f"{SCRYFALL}/cards/abc").mock(
            return_value=httpx.Response(200, json={"id": "abc"})
        )

        with pytest.raises(CardLookupError) as exc_info:
            await get_card_by_id("abc")

        assert exc_info.value.detail == "Response had no card name"


class TestAutocomplete:
    @respx.mock
    async def test_suggestions(self) -> None:
        """Returns Scryfall's suggestions."""
        respx.get(f"{SCRYFALL}/cards/autocomplete").mock(
            return_value=httpx.Response(200, json={"data": ["Sol Ring", "Sol Talisman"]})
        )

        assert await autocomplete("sol") == ["Sol Ring", "Sol Talisman"]

    async def test_short_query(self) -> None:
        """Queries under two characters return nothing."""
        assert await autocomplete("s") == []

    @respx.mock
    async def test_errors_return_empty(self, caplog: pytest.LogCaptureFixture) -> None:
        """Failures are logged and swallowed into an empty list."""
        respx.get(f"{SCRYFALL}/cards/autocomplete").mock(return_value=httpx.Response(503))

        with caplog.at_level(logging.WARNING):
            assert await autocomplete("sol") == []

        assert "Autocomplete failed" in caplog.text


class TestEnrichCards:
    @respx.mock
    async def test_unresolved_names_kept(self, caplog: pytest.LogCaptureFixture) -> None:
        """Resolved names gain ids; unresolved names stay name-only."""
        respx.get(f"{SCRYFALL}/cards/named", params={"exact": "Sol Ring"}).mock(
            return_value=httpx.Response(200, json={"name": "Sol Ring", "id": "sr"})
        )
        respx.get(f"{SCRYFALL}/cards/named", params={"exact": "Homebrew"}).mock(
            return_value=httpx.Response(404)
        )

        with caplog.at_level(logging.WARNING):
            refs = await enrich_cards(["Sol Ring", "Homebrew"])

        assert refs == [CardRef("Sol Ring", "sr"), CardRef("Homebrew")]
        assert "Homebrew" in caplog.text

    @respx.mock
    async def test_bad_body_keeps_name(self) -> None:
        """A malformed response for one card does not abort the rest."""
        respx.get(f"{SCRYFALL}/cards/named", params={"exact": "Sol Ring"}).mock(
            return_value=httpx.Response(200, text="<html></html>")
        )
        respx.get(f"{SCRYFALL}/cards/named", params={"exact": "Mana Crypt"}).mock(
            return_value=httpx.Response(200, json={"name": "Mana Crypt", "id": "mc"})
        )

        refs = await enrich_cards(["Sol Ring", "Mana Crypt"])

        assert refs == [CardRef("Sol Ring"), CardRef("Mana Crypt", "mc")]
