"""Character aggregate.

A character owns its skills, drives (attributes) and drive statements as
constrained maps, plus its traits, assets and talents. Every mutation goes
through a validated method; a rejected mutation leaves the character as it
was and raises.

Example:
    >>> paul = Character("Paul", guild_id=42, owner_id=7)
    >>> paul.set_attribute_value("duty", 6)
    >>> paul.set_drive_statement("duty", "I will protect my family.")
    >>> paul.get_attribute_total()
    22
"""

from __future__ import annotations

from collections.abc import Mapping

from trait_sheet.core.config import RulesSettings, get_settings
from trait_sheet.core.exceptions import ConstraintViolationError, ValidationError
from trait_sheet.core.logging import get_logger
from trait_sheet.models.constrained_map import ConstrainedMap
from trait_sheet.models.talents import Talent
from trait_sheet.models.terms import TermSchema
from trait_sheet.models.traits import Asset, Trait
from trait_sheet.models.validity import (
    valid_character_name,
    valid_identifier,
    valid_statement,
)


logger = get_logger(__name__)


class Character:
    """A player character of the tabletop game.

    Attributes:
        name: The character name.
        guild_id: The guild the character lives in, or None.
        owner_id: The user owning the character, or None.
        skill_schema: The skill family, fixed for life.
        attribute_schema: The drive family, fixed for life.
    """

    def __init__(
        self,
        name: str,
        guild_id: int | None = None,
        owner_id: int | None = None,
        *,
        skill_schema: TermSchema | None = None,
        attribute_schema: TermSchema | None = None,
        rules: RulesSettings | None = None,
    ) -> None:
        """Create a character with every skill and drive at its default.

        Args:
            name: The character name.
            guild_id: The guild identifier, or None.
            owner_id: The owner identifier, or None.
            skill_schema: The skill family; the configured one when omitted.
            attribute_schema: The drive family; the configured one when
                omitted.
            rules: Rule settings; the application settings when omitted.

        Raises:
            ValidationError: If the name or an identifier is invalid.
        """
        if not valid_character_name(name):
            raise ValidationError("Invalid name", field_name="name", invalid_value=name)
        if not valid_identifier(guild_id):
            raise ValidationError("Invalid guild identifier", field_name="guild_id", invalid_value=guild_id)
        if not valid_identifier(owner_id):
            raise ValidationError("Invalid owner identifier", field_name="owner_id", invalid_value=owner_id)

        rules = rules or get_settings().rules
        self.name = name
        self.guild_id = guild_id
        self.owner_id = owner_id
        self.skill_schema = skill_schema or TermSchema.skills(rules)
        self.attribute_schema = attribute_schema or TermSchema.attributes(rules)
        self.drive_statement_minimum = rules.drive_statement_minimum

        self._drive_statements: ConstrainedMap[str, str] = ConstrainedMap(
            term="drive statements",
            order=self.attribute_schema.order,
            key_predicate=self.attribute_schema.has_term,
            value_predicate=valid_statement,
            entry_predicate=lambda _, drive, __: self._drive_carries_statement(drive),
        )
        self._skills = self._term_map(self.skill_schema)
        self._attributes = self._term_map(self.attribute_schema, guard_statements=True)
        self._traits: dict[str, Trait] = {}
        self._assets: dict[str, Asset] = {}
        self._talents: dict[str, Talent] = {}

    def _term_map(self, schema: TermSchema, *, guard_statements: bool = False) -> ConstrainedMap[str, int]:
        def accepts(values: Mapping[str, int], term: str, value: int) -> bool:
            if not schema.accepts(values, term, value):
                return False
            # A drive carrying a statement may not drop below the statement minimum
            if guard_statements and term in self._drive_statements:
                return value >= self.drive_statement_minimum
            return True

        return ConstrainedMap(
            schema.defaults(),
            term=schema.name,
            order=schema.order,
            key_predicate=schema.has_term,
            value_predicate=schema.valid_value,
            entry_predicate=accepts,
        )

    def _drive_carries_statement(self, drive: str) -> bool:
        value = self._attributes.get(drive)
        return value is not None and value >= self.drive_statement_minimum

    # =========================================================================
    # Skills
    # =========================================================================

    @property
    def skills(self) -> dict[str, int]:
        """Snapshot of the skill values in display order."""
        return self._skills.to_dict()

    def get_skill_value(self, skill: str) -> int | None:
        return self._skills.get(skill)

    def set_skill_value(self, skill: str, value: int) -> None:
        """Set a skill value.

        Raises:
            ConstraintViolationError: If the skill is unknown, the value is
                outside the bounds, or the skill pool would be exceeded.
        """
        self._set_term(self._skills, "Invalid skill value", skill, value)

    def get_skill_total(self) -> int:
        return self.skill_schema.total(self._skills)

    # =========================================================================
    # Drives
    # =========================================================================

    @property
    def attributes(self) -> dict[str, int]:
        """Snapshot of the drive values in display order."""
        return self._attributes.to_dict()

    def get_attribute_value(self, attribute: str) -> int | None:
        return self._attributes.get(attribute)

    def set_attribute_value(self, attribute: str, value: int) -> None:
        """Set a drive value.

        Raises:
            ConstraintViolationError: If the drive is unknown, the value is
                outside the bounds, the drive pool would be exceeded, or the
                drive carries a statement and would drop below the statement
                minimum.
        """
        self._set_term(self._attributes, "Invalid attribute value", attribute, value)

    def get_attribute_total(self) -> int:
        return self.attribute_schema.total(self._attributes)

    def _set_term(self, terms: ConstrainedMap[str, int], message: str, term: str, value: int) -> None:
        try:
            terms[term] = value
        except ConstraintViolationError as exc:
            logger.warning(message, character=self.name, term=term, value=value)
            raise ConstraintViolationError(
                message, term=terms.term, field_name=term, invalid_value=value
            ) from exc
        logger.info("Term value set", character=self.name, family=terms.term, term=term, value=value)

    # =========================================================================
    # Drive Statements
    # =========================================================================

    @property
    def drive_statements(self) -> dict[str, str]:
        """Snapshot of the drive statements in display order."""
        return self._drive_statements.to_dict()

    def get_drive_statement(self, drive: str) -> str | None:
        return self._drive_statements.get(drive)

    def set_drive_statement(self, drive: str, statement: str) -> None:
        """Attach a statement to a drive.

        Raises:
            ConstraintViolationError: If the drive does not exist, its value
                is below the statement minimum, or the statement is not a
                sentence.
        """
        if self._attributes.get(drive) is None:
            message = "The drive does not exist"
        elif not self._drive_carries_statement(drive):
            message = "The drive too low for statement"
        elif not valid_statement(statement):
            message = "Invalid drive statement"
        else:
            self._drive_statements[drive] = statement
            logger.info("Drive statement set", character=self.name, drive=drive)
            return
        logger.warning(message, character=self.name, drive=drive)
        raise ConstraintViolationError(
            message, term="drive statements", field_name=drive, invalid_value=statement
        )

    def remove_drive_statement(self, drive: str) -> str | None:
        return self._drive_statements.pop(drive, None)

    # =========================================================================
    # Traits and Assets
    # =========================================================================

    @property
    def traits(self) -> frozenset[Trait]:
        return frozenset(self._traits.values())

    @property
    def assets(self) -> frozenset[Asset]:
        return frozenset(self._assets.values())

    def get_trait(self, name: str) -> Trait | None:
        return self._traits.get(name)

    def get_asset(self, name: str) -> Asset | None:
        return self._assets.get(name)

    def add_trait(self, trait: Trait) -> None:
        """Add a trait, replacing any trait of the same name.

        Raises:
            ValidationError: If the value is an asset or not a trait.
        """
        if not isinstance(trait, Trait) or isinstance(trait, Asset):
            raise ValidationError("Not a trait", field_name="trait", invalid_value=trait)
        self._traits[trait.name] = trait
        logger.info("Trait added", character=self.name, trait=str(trait))

    def remove_trait(self, name: str) -> Trait | None:
        return self._traits.pop(name, None)

    def add_asset(self, asset: Asset) -> None:
        """Add an asset, replacing any asset of the same name.

        Raises:
            ValidationError: If the value is not an asset.
        """
        if not isinstance(asset, Asset):
            raise ValidationError("Not an asset", field_name="asset", invalid_value=asset)
        self._assets[asset.name] = asset
        logger.info("Asset added", character=self.name, asset=str(asset))

    def remove_asset(self, name: str) -> Asset | None:
        return self._assets.pop(name, None)

    def stack_trait(self, name: str, level_modifier: int) -> Trait | None:
        """Replace a trait with its stacked version.

        Returns:
            The stacked trait, or None if it was voided and removed.

        Raises:
            ValidationError: If the character has no such trait.
        """
        trait = self._traits.get(name)
        if trait is None:
            raise ValidationError("Unknown trait", field_name="trait", invalid_value=name)
        stacked = trait.get_stacked(level_modifier)
        if stacked is None:
            del self._traits[name]
            logger.info("Trait voided", character=self.name, trait=name)
        else:
            self._traits[name] = stacked
            logger.info("Trait stacked", character=self.name, trait=str(stacked))
        return stacked

    def stack_asset(self, name: str, value_modifier: int = 0, quality_modifier: int = 0) -> Asset:
        """Replace an asset with its stacked version.

        Raises:
            ValidationError: If the character has no such asset.
        """
        asset = self._assets.get(name)
        if asset is None:
            raise ValidationError("Unknown asset", field_name="asset", invalid_value=name)
        stacked = asset.get_stacked(value_modifier, quality_modifier)
        self._assets[name] = stacked
        logger.info("Asset stacked", character=self.name, asset=str(stacked))
        return stacked

    # =========================================================================
    # Talents
    # =========================================================================

    @property
    def talents(self) -> frozenset[Talent]:
        return frozenset(self._talents.values())

    def add_talent(self, talent: Talent, *, check_requisites: bool = True) -> None:
        """Add a talent.

        Args:
            talent: The talent to add.
            check_requisites: Whether the requirements must be met.

        Raises:
            ConstraintViolationError: If the requirements are not met.
        """
        if check_requisites and not talent.test_requisites(self):
            logger.warning("Talent requisites not met", character=self.name, talent=talent.name)
            raise ConstraintViolationError(
                "Talent requisites not met", term="talents", field_name=talent.name
            )
        self._talents[talent.name] = talent
        logger.info("Talent added", character=self.name, talent=talent.name)

    def remove_talent(self, name: str) -> Talent | None:
        return self._talents.pop(name, None)

    def __repr__(self) -> str:
        return f"Character(name={self.name!r}, guild_id={self.guild_id!r}, owner_id={self.owner_id!r})"


__all__ = ["Character"]
