"""Trait and asset value types.

Traits and assets are immutable. Stacking a modifier produces a new value,
or None when the modifier voids a trait. Each class carries its flavor
(grammar and bounds) as class variables; subclasses adjust the flavor
without touching the parsing and rendering logic.

Example:
    >>> lasgun = Asset.of("Lasgun(Q2)(3): military-grade")
    >>> lasgun.effectiveness
    4
    >>> str(lasgun.get_stacked(1, 1))
    'Lasgun(Q3)(4): military-grade'
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from trait_sheet.core import constants
from trait_sheet.core.config import get_settings
from trait_sheet.core.exceptions import ConstraintViolationError, NotationError
from trait_sheet.models.validity import clamp, valid_bounded, valid_description, valid_name
from trait_sheet.notation.grammar import AssetGrammar, TraitGrammar, parse_integer


class TraitKind(StrEnum):
    """Kind of a trait value, used in messages."""

    TRAIT = "trait"
    ASSET = "asset"


def check_length(text: str) -> None:
    """Reject notation strings longer than the configured limit.

    Raises:
        NotationError: If the text is too long.
    """
    limit = get_settings().notation.max_notation_length
    if len(text) > limit:
        raise NotationError(
            "Notation too long",
            details={"length": len(text), "limit": limit},
        )


class Trait(BaseModel):
    """A named character trait with an optional level and description.

    Attributes:
        name: The trait name.
        level: The trait level, or None.
        description: Free text, or None.
    """

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")

    kind: ClassVar[TraitKind] = TraitKind.TRAIT
    grammar: ClassVar[TraitGrammar] = TraitGrammar()
    minimum_level: ClassVar[int | None] = constants.DEFAULT_MINIMUM_LEVEL
    maximum_level: ClassVar[int | None] = None

    name: str
    level: int | None = None
    description: str | None = None

    @field_validator("description", mode="before")
    @classmethod
    def normalize_description(cls, value: Any) -> Any:
        """Strip the description; a blank one counts as absent."""
        if isinstance(value, str):
            return value.strip() or None
        return value

    @model_validator(mode="after")
    def validate_trait(self) -> Self:
        """Check the name, level and description against the flavor.

        Raises:
            NotationError: If the name or description is malformed.
            ConstraintViolationError: If the level is outside the bounds.
        """
        if not valid_name(self.name):
            raise NotationError(
                f"Invalid {self.kind} name", field_name="name", invalid_value=self.name
            )
        if not self.valid_level(self.level):
            raise ConstraintViolationError(
                f"Invalid {self.kind} level", field_name="level", invalid_value=self.level
            )
        if not valid_description(self.description):
            raise NotationError(
                f"Invalid {self.kind} description",
                field_name="description",
                invalid_value=self.description,
            )
        return self

    @classmethod
    def valid_level(cls, level: object) -> bool:
        return valid_bounded(
            level,
            minimum=cls.minimum_level,
            maximum=cls.maximum_level,
            mandatory=cls.grammar.mandatory_level,
        )

    @classmethod
    def of(cls, text: str) -> Self:
        """Build a value from its notation.

        Args:
            text: The notation line, e.g. ``Mentat(2): trained to compute``.

        Returns:
            The parsed value.

        Raises:
            NotationError: If the text is not a complete notation line.
            ConstraintViolationError: If a number is outside the bounds.
        """
        if not isinstance(text, str):
            raise NotationError("Invalid string representation", invalid_value=text)
        check_length(text)
        groups = cls.grammar.match(text)
        if groups is None:
            raise NotationError("Invalid string representation", source=text)
        return cls(**cls._values_from_groups(groups))

    @classmethod
    def create_another_from_string(cls, text: str | None) -> Self | None:
        """Like ``of``, but an absent text gives an absent value."""
        if text is None:
            return None
        return cls.of(text)

    @classmethod
    def _values_from_groups(cls, groups: dict[str, str | None]) -> dict[str, Any]:
        return {
            "name": groups["name"],
            "level": parse_integer(groups["level"]),
            "description": groups["description"],
        }

    @staticmethod
    def to_string(value: Trait | None) -> str | None:
        """Render a value in its short notation; None for an absent value."""
        if value is None:
            return None
        return value.render()

    def render(self) -> str:
        return "".join(self._render_parts())

    def _render_parts(self) -> list[str]:
        parts = [self.name]
        if self.level is not None:
            parts.append(f"({self.level})")
        if self.description:
            parts.append(f": {self.description}")
        return parts

    def get_stacked(self, level_modifier: int) -> Self | None:
        """Apply a level modifier.

        The new level is capped at the maximum. A level below the minimum
        voids the trait.

        Args:
            level_modifier: Added to the current level; an absent level
                counts as zero.

        Returns:
            The stacked trait, or None if the trait is voided.
        """
        level = (self.level or 0) + level_modifier
        if self.maximum_level is not None:
            level = min(level, self.maximum_level)
        if not self.valid_level(level):
            return None
        return type(self)(name=self.name, level=level, description=self.description)

    def __str__(self) -> str:
        return self.render()


class Asset(Trait):
    """A trait describing equipment, with a quality between 0 and 4.

    Attributes:
        quality: The asset quality; an omitted quality defaults to 0.
    """

    kind: ClassVar[TraitKind] = TraitKind.ASSET
    grammar: ClassVar[TraitGrammar] = AssetGrammar()
    minimum_quality: ClassVar[int | None] = constants.DEFAULT_MINIMUM_QUALITY
    maximum_quality: ClassVar[int | None] = constants.DEFAULT_MAXIMUM_QUALITY
    default_quality: ClassVar[int | None] = constants.DEFAULT_QUALITY

    quality: int | None = Field(default=None, validate_default=True)

    @field_validator("quality", mode="before")
    @classmethod
    def default_missing_quality(cls, value: Any) -> Any:
        """Substitute the default quality for an omitted one."""
        return cls.default_quality if value is None else value

    @model_validator(mode="after")
    def validate_quality(self) -> Self:
        """Check the quality against the flavor.

        Raises:
            ConstraintViolationError: If the quality is outside the bounds.
        """
        if not self.valid_quality(self.quality):
            raise ConstraintViolationError(
                f"Invalid {self.kind} quality", field_name="quality", invalid_value=self.quality
            )
        return self

    @classmethod
    def valid_quality(cls, quality: object) -> bool:
        mandatory = getattr(cls.grammar, "mandatory_quality", True)
        return valid_bounded(
            quality,
            minimum=cls.minimum_quality,
            maximum=cls.maximum_quality,
            mandatory=mandatory,
        )

    @classmethod
    def _values_from_groups(cls, groups: dict[str, str | None]) -> dict[str, Any]:
        values = super()._values_from_groups(groups)
        values["quality"] = parse_integer(groups["quality"])
        return values

    @computed_field  # type: ignore[prop-decorator]
    @property
    def effectiveness(self) -> int:
        """Quality plus the effectiveness bonus, or 0 without a quality."""
        if self.quality is None:
            return 0
        return self.quality + constants.EFFECTIVENESS_BONUS

    def _render_parts(self) -> list[str]:
        name, *rest = super()._render_parts()
        if self.quality is not None:
            return [name, f"(Q{self.quality})", *rest]
        return [name, *rest]

    def get_stacked(self, value_modifier: int = 0, quality_modifier: int = 0) -> Self:
        """Apply level and quality modifiers.

        Both values are clamped to their bounds, so an asset is never
        voided. An absent level stays absent under a zero modifier.

        Args:
            value_modifier: Added to the level.
            quality_modifier: Added to the quality.

        Returns:
            The stacked asset.
        """
        level = self.level
        if level is not None or value_modifier:
            level = clamp((level or 0) + value_modifier, self.minimum_level, self.maximum_level)
        base_quality = self.quality if self.quality is not None else (self.default_quality or 0)
        quality = clamp(base_quality + quality_modifier, self.minimum_quality, self.maximum_quality)
        return type(self)(
            name=self.name,
            quality=quality,
            level=level,
            description=self.description,
        )


__all__ = [
    "TraitKind",
    "check_length",
    "Trait",
    "Asset",
]
