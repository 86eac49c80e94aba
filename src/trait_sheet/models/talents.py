"""Talents and the requirements a character must meet to take them."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from trait_sheet.core.exceptions import ValidationError
from trait_sheet.models.traits import Trait
from trait_sheet.models.validity import valid_bounded, valid_name


if TYPE_CHECKING:
    from trait_sheet.models.character import Character


@dataclass(frozen=True)
class TraitRequirement:
    """Requires a trait with a level inside optional bounds.

    Example:
        >>> str(TraitRequirement("Mentat", lower=2))
        'Mentat 2+'
    """

    trait_name: str
    lower: int | None = None
    upper: int | None = None

    def __post_init__(self) -> None:
        if not valid_name(self.trait_name):
            raise ValidationError("Invalid trait name", field_name="trait_name", invalid_value=self.trait_name)
        if self.lower is not None and self.upper is not None and self.lower > self.upper:
            raise ValidationError(
                "Lower boundary exceeds upper boundary",
                field_name="lower",
                details={"lower": self.lower, "upper": self.upper},
            )

    def test(self, trait: Trait) -> bool:
        """Check a single trait against the requirement.

        A trait without a level never satisfies a lower bound.
        """
        if trait.name != self.trait_name:
            return False
        if trait.level is None:
            return self.lower is None
        return valid_bounded(trait.level, minimum=self.lower, maximum=self.upper, mandatory=True)

    def is_met_by(self, character: Character) -> bool:
        return any(self.test(trait) for trait in (*character.traits, *character.assets))

    def __str__(self) -> str:
        if self.lower is not None and self.upper is not None:
            return f"{self.trait_name} {self.lower}-{self.upper}"
        if self.lower is not None:
            return f"{self.trait_name} {self.lower}+"
        if self.upper is not None:
            return f"{self.trait_name} {self.upper}-"
        return self.trait_name


@dataclass(frozen=True)
class TalentRequirement:
    """Requires another talent, optionally tied to a drive and a skill."""

    talent_name: str
    drive_name: str | None = None
    skill_name: str | None = None

    def test(self, talent: Talent) -> bool:
        if talent.name != self.talent_name:
            return False
        if self.drive_name is not None and talent.drive_name != self.drive_name:
            return False
        return self.skill_name is None or talent.skill_name == self.skill_name

    def is_met_by(self, character: Character) -> bool:
        return any(self.test(talent) for talent in character.talents)

    def __str__(self) -> str:
        return self.talent_name


@dataclass(frozen=True)
class CharacterRequirement:
    """Requires an arbitrary condition on the whole character."""

    predicate: Callable[[Character], bool]
    description: str = "special"

    def is_met_by(self, character: Character) -> bool:
        return bool(self.predicate(character))

    def __str__(self) -> str:
        return self.description


Requirement = TraitRequirement | TalentRequirement | CharacterRequirement


@dataclass(frozen=True)
class Talent:
    """A special ability of a character.

    Attributes:
        name: The talent name.
        drive_name: The drive the talent draws on, or None.
        skill_name: The skill the talent enhances, or None.
        requirements: Every requirement must be met to take the talent.
    """

    name: str
    drive_name: str | None = None
    skill_name: str | None = None
    requirements: frozenset[Requirement] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not valid_name(self.name):
            raise ValidationError("Invalid talent name", field_name="name", invalid_value=self.name)
        # Accept any iterable of requirements
        object.__setattr__(self, "requirements", frozenset(self.requirements))

    def test_requisites(self, character: Character) -> bool:
        """Check whether the character meets every requirement."""
        return all(requirement.is_met_by(character) for requirement in self.requirements)

    def __str__(self) -> str:
        text = self.name
        if self.drive_name or self.skill_name:
            text += f" ({self.drive_name or '-'}/{self.skill_name or '-'})"
        if self.requirements:
            text += ": requires " + ", ".join(sorted(str(req) for req in self.requirements))
        return text


__all__ = [
    "TraitRequirement",
    "TalentRequirement",
    "CharacterRequirement",
    "Requirement",
    "Talent",
]
