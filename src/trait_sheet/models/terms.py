"""Term schemas describing the skill and drive families of a character."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from trait_sheet.core import constants
from trait_sheet.core.config import RulesSettings, get_settings
from trait_sheet.core.exceptions import ConfigurationError
from trait_sheet.models.validity import (
    is_integer,
    pool_total,
    valid_term_name,
    within_bounds,
    within_pool,
)


class TermSchema(BaseModel):
    """A named family of integer terms sharing bounds and a pool.

    Attributes:
        name: Family name, e.g. ``skills``.
        term_names: The terms in display order.
        minimum: Smallest term value, or None.
        maximum: Largest term value, or None.
        default: Initial value of every term.
        pool: Maximum total of all terms, or None.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    term_names: tuple[str, ...] = Field(min_length=1)
    minimum: int | None = None
    maximum: int | None = None
    default: int
    pool: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def validate_schema(self) -> Self:
        """Reject schemas no character could satisfy.

        Raises:
            ConfigurationError: If the term names are illegal or repeated,
                the default lies outside the bounds, or the defaults alone
                exceed the pool.
        """
        if not all(valid_term_name(term) for term in self.term_names):
            raise ConfigurationError("Invalid term name", config_key=self.name)
        if len(set(self.term_names)) != len(self.term_names):
            raise ConfigurationError("Duplicate term name", config_key=self.name)
        if not within_bounds(self.default, self.minimum, self.maximum):
            raise ConfigurationError("Default outside term bounds", config_key=self.name)
        if not within_pool(self.default * len(self.term_names), self.pool):
            raise ConfigurationError("Defaults exceed the term pool", config_key=self.name)
        return self

    def has_term(self, term: object) -> bool:
        return valid_term_name(term) and term in self.term_names

    def valid_value(self, value: object) -> bool:
        return is_integer(value) and within_bounds(value, self.minimum, self.maximum)  # type: ignore[arg-type]

    def total(self, values: Mapping[str, int], key: str | None = None, value: int | None = None) -> int:
        """Total of the family, counting missing terms at their default."""
        return pool_total(values, self.term_names, self.default, key=key, value=value)

    def accepts(self, values: Mapping[str, int], key: str, value: int) -> bool:
        """Check whether writing ``value`` at ``key`` keeps the pool."""
        return within_pool(self.total(values, key, value), self.pool)

    def order(self, term: str) -> int:
        """Display position of a term, used as the map sort key."""
        return self.term_names.index(term)

    def defaults(self) -> dict[str, int]:
        return {term: self.default for term in self.term_names}

    @classmethod
    def skills(cls, rules: RulesSettings | None = None) -> TermSchema:
        """The default skill family.

        Args:
            rules: Rule settings; the application settings when omitted.
        """
        rules = rules or get_settings().rules
        return cls(
            name=constants.SKILLS_TERM_NAME,
            term_names=constants.SKILL_TERM_NAMES,
            minimum=rules.skill_minimum,
            maximum=rules.skill_maximum,
            default=rules.skill_default,
            pool=rules.skill_pool,
        )

    @classmethod
    def attributes(cls, rules: RulesSettings | None = None) -> TermSchema:
        """The default drive family.

        Args:
            rules: Rule settings; the application settings when omitted.
        """
        rules = rules or get_settings().rules
        return cls(
            name=constants.ATTRIBUTES_TERM_NAME,
            term_names=constants.ATTRIBUTE_TERM_NAMES,
            minimum=rules.attribute_minimum,
            maximum=rules.attribute_maximum,
            default=rules.attribute_default,
            pool=rules.attribute_pool,
        )


__all__ = ["TermSchema"]
