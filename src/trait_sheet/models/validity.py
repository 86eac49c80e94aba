"""Validity predicates shared by the trait models and the character.

Every predicate is total: it returns False for values of the wrong type
instead of raising, so the predicates can be handed to constrained
containers as-is.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

from trait_sheet.core.constants import DESCRIPTION_TERMINATOR
from trait_sheet.notation.grammar import NAME_REGEX


STATEMENT_REGEX = re.compile(r"\w+(?:[,;:'\-]?\s\w+|['\-]\w+)*[.!?]?")
"""A drive statement: words joined by a space or a punctuation and a space."""


def is_integer(value: object) -> bool:
    """Check for a genuine integer; booleans do not count."""
    return isinstance(value, int) and not isinstance(value, bool)


def valid_name(name: object) -> bool:
    """Check whether a name may label a trait, asset or talent.

    Example:
        >>> valid_name("Lasgun")
        True
        >>> valid_name(" Lasgun")
        False
    """
    return isinstance(name, str) and NAME_REGEX.fullmatch(name) is not None


def within_bounds(value: int, minimum: int | None, maximum: int | None) -> bool:
    """Check a value against optional inclusive bounds."""
    if minimum is not None and value < minimum:
        return False
    return maximum is None or value <= maximum


def clamp(value: int, minimum: int | None, maximum: int | None) -> int:
    """Limit a value to optional inclusive bounds."""
    if maximum is not None and value > maximum:
        value = maximum
    if minimum is not None and value < minimum:
        value = minimum
    return value


def valid_bounded(
    value: object,
    *,
    minimum: int | None,
    maximum: int | None,
    mandatory: bool,
) -> bool:
    """Check an optional integer such as a level or a quality.

    Args:
        value: The value to check; None when omitted.
        minimum: Inclusive lower bound, or None.
        maximum: Inclusive upper bound, or None.
        mandatory: Whether None is rejected.

    Returns:
        True if the value is acceptable.
    """
    if value is None:
        return not mandatory
    return is_integer(value) and within_bounds(value, minimum, maximum)  # type: ignore[arg-type]


def valid_description(description: object) -> bool:
    """Check a description: single line and not ending in the terminator."""
    if description is None:
        return True
    return (
        isinstance(description, str)
        and "\n" not in description
        and "\r" not in description
        and not description.endswith(DESCRIPTION_TERMINATOR)
    )


def valid_identifier(identifier: object) -> bool:
    """Check an optional external identifier (guild or owner)."""
    return identifier is None or (is_integer(identifier) and identifier >= 0)  # type: ignore[operator]


def valid_character_name(name: object) -> bool:
    """Check a character name: non-empty and without surrounding blanks."""
    return isinstance(name, str) and bool(name) and name == name.strip()


def valid_term_name(name: object) -> bool:
    """Check a skill or drive name."""
    return isinstance(name, str) and name.isidentifier()


def valid_statement(statement: object) -> bool:
    """Check a drive statement.

    Example:
        >>> valid_statement("Power, at any cost!")
        True
        >>> valid_statement("  ")
        False
    """
    return isinstance(statement, str) and STATEMENT_REGEX.fullmatch(statement) is not None


def pool_total(
    values: Mapping[str, int],
    term_names: Iterable[str],
    default: int,
    *,
    key: str | None = None,
    value: int | None = None,
) -> int:
    """Total of a term family, optionally with one value replaced.

    Args:
        values: The current values.
        term_names: Every term of the family; missing ones count as default.
        default: Value assumed for a missing term.
        key: Term whose value is proposed.
        value: The proposed value.

    Returns:
        The total the family would have after the proposed write.
    """
    total = 0
    for name in term_names:
        if name == key and value is not None:
            total += value
        else:
            current = values.get(name)
            total += default if current is None else current
    return total


def within_pool(total: int, pool: int | None) -> bool:
    """Check a total against an optional pool."""
    return pool is None or total <= pool


__all__ = [
    "STATEMENT_REGEX",
    "is_integer",
    "valid_name",
    "within_bounds",
    "clamp",
    "valid_bounded",
    "valid_description",
    "valid_identifier",
    "valid_character_name",
    "valid_term_name",
    "valid_statement",
    "pool_total",
    "within_pool",
]
