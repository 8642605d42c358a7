"""Tests for rule configuration editing."""

import pytest

from rulezero.models.card import CardRef
from rulezero.models.failure import FailureKind, InvalidInputError
from rulezero.models.rules import UNLIMITED, Limit, RuleModel, Tier
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


class TestTierEditing:
    def test_add_tier_returns_new_model(self, rule_model: RuleModel) -> None:
        """Adding a tier leaves the original snapshot unchanged."""
        updated = add_tier(rule_model, Tier(id=4, name="Optimized"))

        assert updated.get_tier(4).name == "Optimized"
        assert rule_model.get_tier(4) is None

    def test_add_existing_tier_conflicts(self, rule_model: RuleModel) -> None:
        """Duplicate ids are refused with 409."""
        with pytest.raises(RuleEditError) as exc_info:
            add_tier(rule_model, Tier(id=2, name="Again"))

        assert exc_info.value.kind == FailureKind.CONFLICT
        assert exc_info.value.status_code == 409

    def test_update_merges_limits(self, rule_model: RuleModel) -> None:
        """Only the given limits change."""
        updated = update_tier(rule_model, 2, limits={"tutors": UNLIMITED}, name="Core+")

        tier = updated.get_tier(2)
        assert tier.name == "Core+"
        assert tier.description == "Precon level"
        assert tier.limit_for("tutors") == UNLIMITED
        assert tier.limit_for("gameChangers") == Limit.finite(1)
        assert rule_model.get_tier(2).limit_for("tutors") == Limit.finite(2)

    def test_update_banned_cards(self, rule_model: RuleModel) -> None:
        """Bracket bans are replaced as a whole."""
        updated = update_tier(rule_model, 1, banned_cards=["Sol Ring"])

        assert updated.get_tier(1).banned_cards == ("Sol Ring",)

    def test_update_missing_tier(self, rule_model: RuleModel) -> None:
        """Unknown ids are 404."""
        with pytest.raises(RuleEditError) as exc_info:
            update_tier(rule_model, 9, name="Nine")

        assert exc_info.value.status_code == 404

    def test_remove_tier(self, rule_model: RuleModel) -> None:
        """Removing a tier drops it from the new model only."""
        updated = remove_tier(rule_model, 1)

        assert sorted(updated.tiers) == [2, 3]
        assert sorted(rule_model.tiers) == [1, 2, 3]

    def test_remove_missing_tier(self, rule_model: RuleModel) -> None:
        """Unknown ids are 404."""
        with pytest.raises(RuleEditError, match="Bracket 7 does not exist"):
            remove_tier(rule_model, 7)

    def test_parse_limits(self) -> None:
        """Raw limits parse with the command-surface conventions."""
        assert parse_limits({"tutors": 2, "gameChangers": -1}) == {
            "tutors": Limit.finite(2),
            "gameChangers": UNLIMITED,
        }


class TestGlobalBanEditing:
    def test_add_ban(self, rule_model: RuleModel) -> None:
        """New bans are appended."""
        updated = add_global_ban(rule_model, "Sol Ring")

        assert updated.global_bans[-1] == "Sol Ring"
        assert "Sol Ring" not in rule_model.global_bans

    def test_add_existing_ban_is_noop(self, rule_model: RuleModel) -> None:
        """Case-insensitive duplicates are ignored."""
        assert add_global_ban(rule_model, "black lotus") is rule_model

    def test_add_empty_ban(self, rule_model: RuleModel) -> None:
        """Empty names are invalid."""
        with pytest.raises(InvalidInputError):
            add_global_ban(rule_model, "  ")

    def test_remove_ban(self, rule_model: RuleModel) -> None:
        """Bans are removed case-insensitively."""
        updated = remove_global_ban(rule_model, "BLACK LOTUS")

        assert updated.global_bans == ("Emrakul, the Aeons Torn",)

    def test_remove_unknown_ban_is_noop(self, rule_model: RuleModel) -> None:
        """Removing a card that is not banned changes nothing."""
        assert remove_global_ban(rule_model, "Island") is rule_model


class TestCategoryEditing:
    def test_add_category(self, rule_model: RuleModel) -> None:
        """New categories get an unlimited limit in every tier."""
        updated, key = add_category(rule_model, "Fast Mana")

        assert key == "fastMana"
        assert updated.categories["fastMana"] == ()
        for tier in updated.tiers.values():
            assert tier.limits["fastMana"] == UNLIMITED
        assert "fastMana" not in rule_model.categories

    def test_add_existing_category(self, rule_model: RuleModel) -> None:
        """Existing keys conflict, including built-ins."""
        with pytest.raises(RuleEditError) as exc_info:
            add_category(rule_model, "Game Changers")

        assert exc_info.value.status_code == 409

    def test_add_colliding_category(self, rule_model: RuleModel) -> None:
        """Spelling variants of built-ins are rejected."""
        with pytest.raises(InvalidInputError):
            add_category(rule_model, "GAMECHANGERS")

    def test_add_empty_category(self, rule_model: RuleModel) -> None:
        """Empty names are invalid."""
        with pytest.raises(InvalidInputError):
            add_category(rule_model, "   ")

    def test_remove_category(self, rule_model: RuleModel) -> None:
        """Removing a custom category drops its limits."""
        with_custom, key = add_category(rule_model, "Stax")

        updated = remove_category(with_custom, key)

        assert key not in updated.categories
        assert all(key not in tier.limits for tier in updated.tiers.values())

    def test_remove_builtin_refused(self, rule_model: RuleModel) -> None:
        """Built-ins cannot be removed."""
        with pytest.raises(RuleEditError) as exc_info:
            remove_category(rule_model, "tutors")

        assert exc_info.value.kind == FailureKind.VALIDATION_FAILED
        assert exc_info.value.status_code == 400

    def test_remove_missing_category(self, rule_model: RuleModel) -> None:
        """Unknown categories are 404."""
        with pytest.raises(RuleEditError) as exc_info:
            remove_category(rule_model, "stax")

        assert exc_info.value.status_code == 404

    def test_add_card(self, rule_model: RuleModel) -> None:
        """Cards are appended to the category."""
        updated = add_card_to_category(rule_model, "tutors", CardRef("Mystical Tutor", "mt"))

        assert updated.categories["tutors"][-1] == CardRef("Mystical Tutor", "mt")

    def test_add_card_deduplicates(self, rule_model: RuleModel) -> None:
        """A card already listed by name or id is not added again."""
        assert add_card_to_category(rule_model, "tutors", CardRef("demonic tutor")) is rule_model
        assert (
            add_card_to_category(rule_model, "gameChangers", CardRef("Rift", "rift-id"))
            is rule_model
        )

    def test_add_card_creates_category(self, rule_model: RuleModel) -> None:
        """Adding to an unknown category creates it."""
        updated = add_card_to_category(rule_model, "stax", CardRef("Winter Orb"))

        assert updated.categories["stax"] == (CardRef("Winter Orb"),)

    def test_remove_card_by_name_or_id(self, rule_model: RuleModel) -> None:
        """Cards are removed by case-insensitive name or by id."""
        by_name = remove_card_from_category(rule_model, "tutors", "VAMPIRIC TUTOR")
        by_id = remove_card_from_category(rule_model, "gameChangers", "rift-id")

        assert CardRef("Vampiric Tutor") not in by_name.categories["tutors"]
        assert by_id.categories["gameChangers"] == (CardRef("Rhystic Study"),)

    def test_remove_card_missing_category(self, rule_model: RuleModel) -> None:
        """Unknown categories are 404."""
        with pytest.raises(RuleEditError):
            remove_card_from_category(rule_model, "stax", "Winter Orb")
