from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from rulezero.models.card import normalize_name
from rulezero.models.failure import InvalidInputError


@dataclass(frozen=True)
class Deck:
    """
    A Commander deck as supplied by a deck site or a caller.

    Attributes:
        name: Deck name
        commanders: Commander card names, in order (usually 1-2)
        cards: Non-commander card names, in order, duplicates kept
        source: Where the deck came from (e.g., "Moxfield")
        source_bracket: Bracket claimed by the source, informational only
    """

    name: str
    commanders: tuple[str, ...] = ()
    cards: tuple[str, ...] = ()
    source: str = ""
    source_bracket: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "commanders", tuple(self.commanders))
        object.__setattr__(self, "cards", tuple(self.cards))

    def all_cards(self) -> list[str]:
        """Commanders followed by the rest of the deck."""
        return [*self.commanders, *self.cards]

    def has_card(self, card_name: str) -> bool:
        """Case-insensitive membership test across commanders and cards."""
        key = normalize_name(card_name)
        return any(normalize_name(card) == key for card in self.all_cards())

    def card_count(self) -> int:
        """Number of cards excluding commanders."""
        return len(self.cards)

    def commander_count(self) -> int:
        return len(self.commanders)

    def to_document(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "commanders": list(self.commanders),
            "cards": list(self.cards),
            "source": self.source,
            "sourceBracket": self.source_bracket,
        }

    @classmethod
    def from_document(cls, document: Any) -> "Deck":
        """
        Build a Deck from its JSON shape.

        Raises:
            InvalidInputError: If the document is absent or malformed
        """
        if document is None:
            raise InvalidInputError("Deck is missing")
        if not isinstance(document, Mapping):
            raise InvalidInputError(
                "Deck must be an object",
                detail=f"Got {type(document).__name__}",
            )

        commanders = document.get("commanders") or []
        cards = document.get("cards") or []
        if not _is_name_list(commanders) or not _is_name_list(cards):
            raise InvalidInputError("Deck commanders and cards must be lists of card names")

        source_bracket = document.get("sourceBracket", document.get("source_bracket"))
        if source_bracket is not None and (
            isinstance(source_bracket, bool) or not isinstance(source_bracket, int)
        ):
            source_bracket = None

        return cls(
            name=str(document.get("name") or ""),
            commanders=tuple(commanders),
            cards=tuple(cards),
            source=str(document.get("source") or ""),
            source_bracket=source_bracket,
        )


def _is_name_list(value: Any) -> bool:
    return isinstance(value, list | tuple) and all(isinstance(item, str) for item in value)
