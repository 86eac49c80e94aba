"""Tests for the character aggregate."""

from __future__ import annotations

import pytest

from trait_sheet.core.config import RulesSettings
from trait_sheet.core.exceptions import ConfigurationError, ConstraintViolationError, ValidationError
from trait_sheet.models import Asset, Character, Talent, TermSchema, Trait, TraitRequirement


class TestCharacterCreation:
    """Tests for creating characters."""

    def test_defaults(self, character: Character) -> None:
        """Test every skill and drive starts at its default."""
        assert character.skills == {
            "battle": 4,
            "communicate": 4,
            "discipline": 4,
            "move": 4,
            "understand": 4,
        }
        assert set(character.attributes.values()) == {4}
        assert character.drive_statements == {}

    @pytest.mark.parametrize("name", ["", " Paul", "Paul "])
    def test_invalid_name(self, name: str) -> None:
        """Test malformed names are rejected."""
        with pytest.raises(ValidationError, match="Invalid name"):
            Character(name)

    def test_negative_guild(self) -> None:
        """Test a negative guild identifier is rejected."""
        with pytest.raises(ValidationError, match="Invalid guild identifier"):
            Character("Paul", guild_id=-1)

    def test_zero_identifiers(self) -> None:
        """Test zero is a legal identifier."""
        character = Character("Paul", guild_id=0, owner_id=0)

        assert character.guild_id == 0
        assert character.owner_id == 0

    def test_custom_rules(self) -> None:
        """Test rule settings shape the default schemas."""
        character = Character("Paul", rules=RulesSettings(skill_default=5, skill_pool=30))

        assert character.get_skill_value("move") == 5
        assert character.get_skill_total() == 25

    def test_custom_schema(self) -> None:
        """Test a character built from a custom skill schema."""
        schema = TermSchema(name="skills", term_names=("sneak", "shoot"), minimum=1, maximum=3, default=1, pool=4)
        character = Character("Paul", skill_schema=schema)

        assert list(character.skills) == ["sneak", "shoot"]
        assert character.get_skill_value("battle") is None


class TestTermSchema:
    """Tests for term schemas."""

    def test_defaults_exceed_pool(self) -> None:
        """Test a schema whose defaults break the pool is rejected."""
        with pytest.raises(ConfigurationError):
            TermSchema(name="skills", term_names=("a", "b"), default=5, pool=8)

    def test_duplicate_terms(self) -> None:
        """Test repeated term names are rejected."""
        with pytest.raises(ConfigurationError):
            TermSchema(name="skills", term_names=("a", "a"), default=1)

    def test_attribute_pool(self) -> None:
        """Test the default drive pool."""
        assert TermSchema.attributes().pool == 30


class TestSkills:
    """Tests for skill values."""

    def test_set_and_total(self, character: Character) -> None:
        """Test setting a skill updates the total."""
        character.set_skill_value("battle", 8)

        assert character.get_skill_value("battle") == 8
        assert character.get_skill_total() == 24

    def test_pool_exceeded(self, character: Character) -> None:
        """Test the skill pool cannot be exceeded."""
        character.set_skill_value("battle", 8)
        character.set_skill_value("move", 8)

        with pytest.raises(ConstraintViolationError, match="Invalid skill value"):
            character.set_skill_value("understand", 5)

        assert character.get_skill_value("understand") == 4
        assert character.get_skill_total() == 28

    def test_all_maximum_fails(self, character: Character) -> None:
        """Test raising every skill to eight fails before the last one."""
        with pytest.raises(ConstraintViolationError):
            for skill in character.skill_schema.term_names:
                character.set_skill_value(skill, 8)

        assert character.get_skill_total() <= 28

    def test_pool_reached_then_blocked(self, character: Character) -> None:
        """Test increments succeed up to the pool and fail beyond it."""
        character.set_skill_value("battle", 8)
        assert character.get_skill_total() == 24

        character.set_skill_value("move", 8)
        assert character.get_skill_total() == 28

        with pytest.raises(ConstraintViolationError):
            character.set_skill_value("discipline", 5)

    @pytest.mark.parametrize(("skill", "value"), [("battle", 3), ("battle", 9), ("sing", 5)])
    def test_invalid_values(self, character: Character, skill: str, value: int) -> None:
        """Test out-of-bounds values and unknown skills are rejected."""
        with pytest.raises(ConstraintViolationError, match="Invalid skill value"):
            character.set_skill_value(skill, value)

    def test_unknown_skill_reads_none(self, character: Character) -> None:
        """Test reading an unknown skill gives None."""
        assert character.get_skill_value("sing") is None

    def test_unhashable_term_reads_none(self, character: Character) -> None:
        """Test reading with an unhashable term gives None."""
        assert character.get_skill_value(["battle"]) is None  # type: ignore[arg-type]
        assert character.get_attribute_value(["duty"]) is None  # type: ignore[arg-type]
        assert character.get_drive_statement(["duty"]) is None  # type: ignore[arg-type]


class TestDrives:
    """Tests for drive values and statements."""

    def test_pool(self, character: Character) -> None:
        """Test the drive pool of 30."""
        for drive, value in {"duty": 8, "faith": 7, "justice": 6, "power": 5}.items():
            character.set_attribute_value(drive, value)

        assert character.get_attribute_total() == 30
        with pytest.raises(ConstraintViolationError, match="Invalid attribute value"):
            character.set_attribute_value("truth", 5)

    def test_statement(self, character: Character) -> None:
        """Test a drive of six or more takes a statement."""
        character.set_attribute_value("duty", 6)
        character.set_drive_statement("duty", "I will protect my family.")

        assert character.get_drive_statement("duty") == "I will protect my family."

    def test_statement_drive_too_low(self, character: Character) -> None:
        """Test a low drive cannot carry a statement."""
        with pytest.raises(ConstraintViolationError, match="The drive too low for statement"):
            character.set_drive_statement("duty", "I will protect my family.")

        assert character.get_drive_statement("duty") is None

    def test_statement_unknown_drive(self, character: Character) -> None:
        """Test statements need an existing drive."""
        with pytest.raises(ConstraintViolationError, match="The drive does not exist"):
            character.set_drive_statement("greed", "Mine.")

    def test_statement_not_a_sentence(self, character: Character) -> None:
        """Test a malformed statement is rejected."""
        character.set_attribute_value("faith", 7)

        with pytest.raises(ConstraintViolationError, match="Invalid drive statement"):
            character.set_drive_statement("faith", "  ")

    def test_drive_with_statement_stays_high(self, character: Character) -> None:
        """Test a drive carrying a statement cannot drop below six."""
        character.set_attribute_value("duty", 6)
        character.set_drive_statement("duty", "Duty first.")

        with pytest.raises(ConstraintViolationError):
            character.set_attribute_value("duty", 5)

        character.remove_drive_statement("duty")
        character.set_attribute_value("duty", 5)
        assert character.get_attribute_value("duty") == 5


class TestTraitsAndAssets:
    """Tests for the trait and asset collections."""

    def test_add_and_remove_trait(self, character: Character, mentat: Trait) -> None:
        """Test adding and removing a trait."""
        character.add_trait(mentat)

        assert character.traits == frozenset({mentat})
        assert character.remove_trait("Mentat") == mentat
        assert character.traits == frozenset()

    def test_asset_is_not_a_trait(self, character: Character, lasgun: Asset) -> None:
        """Test assets go through add_asset."""
        with pytest.raises(ValidationError):
            character.add_trait(lasgun)

    def test_stack_trait(self, character: Character, mentat: Trait) -> None:
        """Test stacking replaces the held trait."""
        character.add_trait(mentat)

        stacked = character.stack_trait("Mentat", 1)

        assert stacked is not None
        assert character.get_trait("Mentat") == stacked
        assert stacked.level == 3

    def test_stack_trait_voided(self, character: Character, mentat: Trait) -> None:
        """Test a voided trait is removed."""
        character.add_trait(mentat)

        assert character.stack_trait("Mentat", -5) is None
        assert character.get_trait("Mentat") is None

    def test_stack_unknown(self, character: Character) -> None:
        """Test stacking a missing trait fails."""
        with pytest.raises(ValidationError):
            character.stack_trait("Mentat", 1)

    def test_stack_asset(self, character: Character, lasgun: Asset) -> None:
        """Test stacking an asset."""
        character.add_asset(lasgun)

        stacked = character.stack_asset("Lasgun", quality_modifier=5)

        assert stacked.quality == 4
        assert character.assets == frozenset({stacked})


class TestTalents:
    """Tests for the talent collection."""

    def test_requisites_checked(self, character: Character) -> None:
        """Test a talent needs its requirements."""
        talent = Talent("Voice", requirements=frozenset({TraitRequirement("Bene Gesserit")}))

        with pytest.raises(ConstraintViolationError):
            character.add_talent(talent)

        character.add_trait(Trait(name="Bene Gesserit"))
        character.add_talent(talent)
        assert character.talents == frozenset({talent})

    def test_skip_requisites(self, character: Character) -> None:
        """Test requirements can be bypassed explicitly."""
        talent = Talent("Voice", requirements=frozenset({TraitRequirement("Bene Gesserit")}))

        character.add_talent(talent, check_requisites=False)

        assert character.remove_talent("Voice") == talent
