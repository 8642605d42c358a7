"""
Card identity.

A card reference is a name, optionally paired with a stable external
identifier (a Scryfall ID). Category lists may mix both forms, so matching
must work between name-only and identified references.
"""

from dataclasses import dataclass
from typing import Any

from rulezero.models.failure import InvalidInputError


def normalize_name(name: str) -> str:
    """Case-insensitive comparison key for a card name."""
    return name.lower()


@dataclass(frozen=True, slots=True)
class CardRef:
    """
    A reference to a card.

    Attributes:
        name: Card name as entered or returned by the card database
        external_id: Stable identifier (Scryfall ID), None for name-only refs
    """

    name: str
    external_id: str | None = None

    def matches(self, other: "CardRef") -> bool:
        """
        Check whether two references denote the same card.

        Precedence:
        1. Both identified: identifiers decide.
        2. One identified: its identifier may equal the other's name
           (legacy data stored identifiers as bare strings).
        3. Names compared case-insensitively.
        """
        if self.external_id is not None and other.external_id is not None:
            return self.external_id == other.external_id

        if self.external_id is not None and other.name == self.external_id:
            return True
        if other.external_id is not None and self.name == other.external_id:
            return True

        return normalize_name(self.name) == normalize_name(other.name)

    def matches_name(self, card_name: str) -> bool:
        """Check whether this reference matches a bare deck card name."""
        return self.matches(CardRef(card_name))

    def to_storage(self) -> str | dict[str, str]:
        """Serialize for the rule document (bare string for name-only refs)."""
        if self.external_id is None:
            return self.name
        return {"name": self.name, "id": self.external_id}

    @classmethod
    def from_name(cls, name: str) -> "CardRef":
        return cls(name=name)

    @classmethod
    def from_storage(cls, data: Any) -> "CardRef":
        """
        Build a reference from a rule-document entry.

        Accepts a bare name or an object with ``name`` and ``id``
        (``scryfallId`` is accepted as an alias of ``id``).

        Raises:
            InvalidInputError: If the entry has no usable name
        """
        if isinstance(data, str):
            if not data.strip():
                raise InvalidInputError("Card entry cannot be empty")
            return cls(name=data)

        if isinstance(data, dict):
            name = data.get("name")
            if not isinstance(name, str) or not name.strip():
                raise InvalidInputError(
                    "Card entry is missing a name",
                    detail=f"Entry: {data!r}",
                )
            external_id = data.get("id") or data.get("scryfallId")
            return cls(name=name, external_id=str(external_id) if external_id else None)

        raise InvalidInputError(
            "Card entry must be a name or an object with a name",
            detail=f"Got {type(data).__name__}",
        )


def contains_card(refs: tuple[CardRef, ...] | list[CardRef], card_name: str) -> bool:
    """True if any reference in ``refs`` matches ``card_name``."""
    candidate = CardRef(card_name)
    return any(ref.matches(candidate) for ref in refs)


def find_matching_names(card_names: list[str], banned: list[str] | tuple[str, ...]) -> list[str]:
    """
    Return the deck cards present in a ban list, in deck order.

    Comparison is case-insensitive by name. Duplicates in the deck are kept.
    """
    banned_keys = {normalize_name(name) for name in banned}
    return [name for name in card_names if normalize_name(name) in banned_keys]
