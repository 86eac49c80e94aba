"""Trait and asset notation grammar.

A trait is written on a single line as its name, an optional level in
parentheses, and an optional description after a colon::

    Mentat(2): trained to compute

An asset adds a quality, prefixed with ``Q``, between the name and the
level::

    Lasgun(Q2)(3): military-grade

The grammar is assembled from segments. Every segment knows how to render
its pattern fragment with or without a named capture group, so the flat
pattern used by ``Trait.of`` and the slotted pattern used by the notation
fields share the same fragments.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from functools import cached_property

from trait_sheet.core.exceptions import InternalConsistencyError


NAME_GROUP = "name"
"""Capture group holding the trait name."""

LEVEL_GROUP = "level"
"""Capture group holding the trait level digits."""

QUALITY_GROUP = "quality"
"""Capture group holding the asset quality digit."""

DESCRIPTION_GROUP = "description"
"""Capture group holding the description text."""

NAME_BODY = r"(?![\s:])(?:[^(:\r\n]|:(?![ \t]))+(?<!\s)"
"""Name text: no '(' and no ': ', no line breaks, no surrounding blanks."""

NAME_REGEX = re.compile(NAME_BODY)


def capture(group: str | None, body: str) -> str:
    """Wrap a pattern body into a named capture group.

    Args:
        group: The capture group name, or None for a bare body.
        body: The pattern body.

    Returns:
        The pattern text.
    """
    if group is None:
        return f"(?:{body})"
    return f"(?P<{group}>{body})"


def optional(fragment: str, mandatory: bool) -> str:
    """Make a fragment optional unless it is mandatory."""
    return fragment if mandatory else f"(?:{fragment})?"


def name_fragment(group: str | None = NAME_GROUP) -> str:
    """Pattern of a trait name."""
    return capture(group, NAME_BODY)


def quality_fragment(group: str | None = QUALITY_GROUP) -> str:
    """Pattern of an asset quality, e.g. ``(Q2)``."""
    return r"\(Q" + capture(group, "[0-9]") + r"\)"


def level_fragment(group: str | None = LEVEL_GROUP) -> str:
    """Pattern of a level, e.g. ``(3)``."""
    return r"\(" + capture(group, "[0-9]+") + r"\)"


def description_fragment(group: str | None = DESCRIPTION_GROUP) -> str:
    """Pattern of a description, e.g. ``: military-grade;;``.

    The trailing ``;;`` written by the long asset format is consumed but
    not captured.
    """
    return r":[ \t]+" + capture(group, r"[^\r\n]*?") + r"(?:;;)?(?=\n|\Z)"


def parse_integer(digits: str | None) -> int | None:
    """Convert a matched digit group into an integer.

    Args:
        digits: The matched digits, or None when the group did not match.

    Returns:
        The integer value, or None for an absent group.

    Raises:
        InternalConsistencyError: The grammar matched something that is not
            a decimal number.
    """
    if digits is None:
        return None
    try:
        return int(digits, 10)
    except ValueError as exc:
        raise InternalConsistencyError(
            "Grammar matched a non-numeric value",
            details={"digits": digits},
        ) from exc


@dataclass(frozen=True)
class Segment:
    """One part of a notation line.

    Attributes:
        group: The capture group name of the segment.
        build: Renders the segment pattern with the given capture group.
        mandatory: Whether the segment may be omitted.
    """

    group: str
    build: Callable[[str | None], str]
    mandatory: bool

    def flat(self) -> str:
        """Pattern capturing the segment value into ``group``."""
        return optional(self.build(self.group), self.mandatory)

    def slotted(self) -> str:
        """Pattern capturing the whole segment text into ``group``."""
        return optional(capture(self.group, self.build(None)), self.mandatory)


@dataclass(frozen=True)
class TraitGrammar:
    """Grammar of the trait notation.

    Attributes:
        mandatory_level: Whether the level may be omitted.
        mandatory_description: Whether the description may be omitted.

    Example:
        >>> TraitGrammar().match("Mentat(2)")
        {'name': 'Mentat', 'level': '2', 'description': None}
    """

    mandatory_level: bool = False
    mandatory_description: bool = False

    def segments(self) -> tuple[Segment, ...]:
        """The segments of the notation in written order."""
        return (
            Segment(NAME_GROUP, name_fragment, True),
            Segment(LEVEL_GROUP, level_fragment, self.mandatory_level),
            Segment(DESCRIPTION_GROUP, description_fragment, self.mandatory_description),
        )

    @cached_property
    def pattern(self) -> re.Pattern[str]:
        """Pattern capturing the segment values by their group names."""
        return re.compile("".join(segment.flat() for segment in self.segments()))

    @cached_property
    def slotted_pattern(self) -> re.Pattern[str]:
        """Pattern capturing each segment's full text by its group name."""
        return re.compile("".join(segment.slotted() for segment in self.segments()))

    def match(self, text: str) -> dict[str, str | None] | None:
        """Match the whole text against the grammar.

        Args:
            text: The notation line.

        Returns:
            The captured groups, or None if the text is not a complete
            notation line.
        """
        found = self.pattern.fullmatch(text)
        return found.groupdict() if found else None


@dataclass(frozen=True)
class AssetGrammar(TraitGrammar):
    """Grammar of the asset notation.

    Attributes:
        mandatory_quality: Whether the quality may be omitted.
    """

    mandatory_quality: bool = True

    def segments(self) -> tuple[Segment, ...]:
        """The trait segments with the quality inserted after the name."""
        name, *rest = super().segments()
        return (name, Segment(QUALITY_GROUP, quality_fragment, self.mandatory_quality), *rest)


__all__ = [
    "NAME_GROUP",
    "LEVEL_GROUP",
    "QUALITY_GROUP",
    "DESCRIPTION_GROUP",
    "NAME_REGEX",
    "capture",
    "optional",
    "name_fragment",
    "quality_fragment",
    "level_fragment",
    "description_fragment",
    "parse_integer",
    "Segment",
    "TraitGrammar",
    "AssetGrammar",
]
