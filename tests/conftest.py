from typing import Any

import pytest

from rulezero.models.deck import Deck
from rulezero.models.rules import RuleModel


@pytest.fixture
def rule_document() -> dict[str, Any]:
    """Small three-bracket rule document."""
    return {
        "tiers": {
            "1": {
                "name": "Exhibition",
                "description": "Ultra-casual",
                "limits": {"tutors": 0, "twoCardCombos": 0, "gameChangers": 0},
                "bannedCards": [],
            },
            "2": {
                "name": "Core",
                "description": "Precon level",
                "limits": {"tutors": 2, "twoCardCombos": 0, "gameChangers": 1},
                "bannedCards": [],
            },
            "3": {
                "name": "Upgraded",
                "description": "Stronger than a precon",
                "limits": {"tutors": 5, "twoCardCombos": 1, "gameChangers": 3},
                "bannedCards": [],
            },
        },
        "globalBans": ["Black Lotus", "Emrakul, the Aeons Torn"],
        "categories": {
            "tutors": ["Demonic Tutor", "Vampiric Tutor", "Enlightened Tutor"],
            "twoCardCombos": ["Thassa's Oracle", "Demonic Consultation"],
            "gameChangers": ["Rhystic Study", {"name": "Cyclonic Rift", "id": "rift-id"}],
            "landDenial": ["Armageddon"],
        },
    }


@pytest.fixture
def rule_model(rule_document: dict[str, Any]) -> RuleModel:
    """RuleModel built from the sample rule document."""
    return RuleModel.from_document(rule_document)


@pytest.fixture
def casual_deck() -> Deck:
    """Deck with no flagged cards."""
    return Deck(
        name="Goblin Party",
        commanders=("Krenko, Mob Boss",),
        cards=("Mountain", "Goblin Instigator", "Lightning Bolt"),
        source="Moxfield",
    )
