"""Composable notation fields.

A ComplexField names one part of a notation line. Leaf fields carry a
pattern and declare the capture groups they harvest. Composite fields own
an ordered list of sub-fields, each addressed by a capture slot derived
from the sub-field name.

A composite with an explicit pattern matches once, then hands each slot's
captured text to the matching sub-field. A composite without a pattern
runs its sub-fields one after another over the source.

Example:
    >>> quality = ComplexField("quality", r"\\(Q(?P<quality>[0-9])\\)")
    >>> position = ParsePosition()
    >>> quality.parse("(Q2)", position)
    {'quality': '2'}
    >>> position.index
    4
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from trait_sheet.core.exceptions import FieldDefinitionError
from trait_sheet.core.logging import get_logger


logger = get_logger(__name__)

FIELD_NAME_REGEX = re.compile(r"[a-zA-Z][ a-zA-Z0-9]*")
CAPTURE_GROUP_NAME_REGEX = re.compile(r"[a-zA-Z][a-zA-Z0-9_]*")


# =============================================================================
# Name Helpers
# =============================================================================


def valid_field_name(name: object) -> bool:
    """Check whether a name may label a field."""
    return isinstance(name, str) and FIELD_NAME_REGEX.fullmatch(name) is not None


def valid_capture_group_name(name: object) -> bool:
    """Check whether a name may be used as a capture group."""
    return isinstance(name, str) and CAPTURE_GROUP_NAME_REGEX.fullmatch(name) is not None


def capture_group_name(field_name: str) -> str:
    """Derive the capture group name of a field name.

    Runs of whitespace become a single underscore.
    """
    return re.sub(r"\s+", "_", field_name.strip())


def slot_name(field_name: str, preceding: int) -> str:
    """Derive the capture slot of a sub-field.

    Args:
        field_name: The sub-field name.
        preceding: How many earlier siblings share the same name.

    Returns:
        The capture group name, suffixed with ``_<preceding>`` for repeats.
    """
    base = capture_group_name(field_name)
    return base if preceding == 0 else f"{base}_{preceding}"


def flatten(result: Mapping[str, Any], prefix: str = "") -> dict[str, str | None]:
    """Flatten a nested parse result into dotted slot paths.

    Example:
        >>> flatten({"quality": {"quality": "2"}, "level": None})
        {'quality.quality': '2', 'level': None}
    """
    flat: dict[str, str | None] = {}
    for key, value in result.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, Mapping):
            flat.update(flatten(value, path))
        else:
            flat[path] = value
    return flat


# =============================================================================
# Positions
# =============================================================================


@dataclass
class ParsePosition:
    """Mutable cursor of a parse.

    Attributes:
        index: Where the next parse starts; advanced past consumed text.
        error_index: Where the last parse failed, or -1.
    """

    index: int = 0
    error_index: int = -1

    @property
    def failed(self) -> bool:
        """Whether the last parse recorded an error."""
        return self.error_index >= 0

    def clear_error(self) -> None:
        """Forget a previously recorded error."""
        self.error_index = -1


@dataclass
class FieldPosition:
    """Identifies a field and receives where its text was written.

    Attributes:
        field: The field to format.
        begin_index: Start of the written text.
        end_index: End of the written text.
    """

    field: ComplexField
    begin_index: int = 0
    end_index: int = 0


# =============================================================================
# Fields
# =============================================================================


class ComplexField:
    """A named notation field, optionally composed of sub-fields.

    The capture slots of the sub-fields are derived once, at construction,
    and never change afterwards.

    Attributes:
        name: The field name.
        pattern: The compiled pattern, or None for a sequential composite.
        capture_group_names: Groups harvested from a pattern match.
        sub_fields: The ordered sub-fields.
        slot_names: The capture slot of each sub-field, in order.
    """

    def __init__(
        self,
        name: str,
        pattern: str | re.Pattern[str] | None = None,
        capture_group_names: Iterable[str] | None = None,
        sub_fields: Iterable[ComplexField | None] = (),
    ) -> None:
        """Define a field.

        Args:
            name: The field name.
            pattern: The field pattern. When omitted, the sub-fields are
                parsed one after another.
            capture_group_names: Groups to harvest; defaults to every named
                group of the pattern.
            sub_fields: The ordered sub-fields.

        Raises:
            FieldDefinitionError: If the name is illegal, a sub-field is
                missing, or the capture slots are not legal and unique.
        """
        if not valid_field_name(name):
            raise FieldDefinitionError("Invalid field name", field_name=str(name))
        self._name = name

        if isinstance(pattern, str):
            pattern = re.compile(pattern)
        self._pattern: re.Pattern[str] | None = pattern

        if pattern is None:
            if capture_group_names:
                raise FieldDefinitionError("Capture groups require a pattern", field_name=name)
            self._capture_group_names: tuple[str, ...] = ()
        elif capture_group_names is None:
            self._capture_group_names = tuple(pattern.groupindex)
        else:
            self._capture_group_names = tuple(capture_group_names)
        for group in self._capture_group_names:
            if not valid_capture_group_name(group) or group not in pattern.groupindex:
                raise FieldDefinitionError(
                    "Undefined capture group",
                    field_name=name,
                    details={"group": group},
                )

        subs = tuple(sub_fields)
        if any(sub is None for sub in subs):
            raise FieldDefinitionError("Undefined sub field", field_name=name)
        self._sub_fields: tuple[ComplexField, ...] = subs  # type: ignore[assignment]
        self._slot_names = self._derive_slot_names()
        self._slots = MappingProxyType(dict(zip(self._slot_names, self._sub_fields)))

    def _derive_slot_names(self) -> tuple[str, ...]:
        seen: dict[str, int] = {}
        slots: list[str] = []
        for sub in self._sub_fields:
            preceding = seen.get(sub.name, 0)
            seen[sub.name] = preceding + 1
            slot = slot_name(sub.name, preceding)
            if not valid_capture_group_name(slot) or slot in slots:
                raise FieldDefinitionError(
                    "Illegal capture slot",
                    field_name=self._name,
                    details={"slot": slot},
                )
            if self._pattern is not None and slot not in self._capture_group_names:
                raise FieldDefinitionError(
                    "Sub field has no capture group",
                    field_name=self._name,
                    details={"slot": slot},
                )
            slots.append(slot)
        return tuple(slots)

    @property
    def name(self) -> str:
        return self._name

    @property
    def pattern(self) -> re.Pattern[str] | None:
        return self._pattern

    @property
    def capture_group_names(self) -> tuple[str, ...]:
        return self._capture_group_names

    @property
    def sub_fields(self) -> tuple[ComplexField, ...]:
        return self._sub_fields

    @property
    def slot_names(self) -> tuple[str, ...]:
        return self._slot_names

    @property
    def is_composite(self) -> bool:
        return bool(self._sub_fields)

    def sub_field(self, slot: str) -> ComplexField | None:
        """Look up the sub-field bound to a capture slot."""
        return self._slots.get(slot)

    def parse(self, source: str, position: ParsePosition) -> dict[str, Any] | None:
        """Parse this field from the source at the cursor.

        On success the cursor advances past the consumed text. On failure
        the cursor stays put and ``error_index`` records where parsing
        stopped.

        Args:
            source: The text to parse.
            position: The cursor, updated in place.

        Returns:
            The captured values keyed by capture group or slot, with
            composite sub-fields nested as mappings; None on failure.
        """
        if self._pattern is None:
            return self._parse_sequence(source, position)

        found = self._pattern.match(source, position.index)
        if found is None:
            position.error_index = position.index
            logger.debug("Field did not match", field=self._name, index=position.index)
            return None

        result: dict[str, Any] = {group: found.group(group) for group in self._capture_group_names}
        for slot, sub in self._slots.items():
            captured = found.group(slot)
            if captured is None:
                result[slot] = None
                continue
            sub_position = ParsePosition()
            parsed = sub.parse(captured, sub_position)
            if parsed is None or sub_position.index != len(captured):
                position.error_index = found.start(slot)
                logger.debug("Sub field did not match", field=self._name, slot=slot)
                return None
            result[slot] = parsed

        position.index = found.end()
        return result

    def _parse_sequence(self, source: str, position: ParsePosition) -> dict[str, Any] | None:
        cursor = ParsePosition(position.index)
        result: dict[str, Any] = {}
        for slot, sub in self._slots.items():
            parsed = sub.parse(source, cursor)
            if parsed is None:
                position.error_index = cursor.error_index
                return None
            result[slot] = parsed
        position.index = cursor.index
        return result

    def __repr__(self) -> str:
        pattern = self._pattern.pattern if self._pattern is not None else None
        return f"ComplexField(name={self._name!r}, pattern={pattern!r}, slots={self._slot_names!r})"


__all__ = [
    "FIELD_NAME_REGEX",
    "CAPTURE_GROUP_NAME_REGEX",
    "valid_field_name",
    "valid_capture_group_name",
    "capture_group_name",
    "slot_name",
    "flatten",
    "ParsePosition",
    "FieldPosition",
    "ComplexField",
]
