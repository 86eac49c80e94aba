"""Asset notation format.

AssetFormat parses and formats the parts of the long asset notation::

    Lasgun(Q2)(3): military-grade;;

Parsing tries a quality, a level, a description and finally a full asset
at the cursor, in that order, and returns the first recognized value. A
line can therefore be read piece by piece as well as as a whole.

Formatting appends the text of a value to a buffer and reports where the
text went through a FieldPosition.

Example:
    >>> from trait_sheet.formats import format_asset, parse
    >>> asset = parse("Lasgun(Q2)(3): military-grade;;")
    >>> format_asset(asset)
    'Lasgun(Q2)(3): military-grade;;'
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Any

from trait_sheet.core.config import NotationSettings, get_settings
from trait_sheet.core.constants import DESCRIPTION_TERMINATOR
from trait_sheet.core.exceptions import NotationError, ValidationError
from trait_sheet.core.logging import get_logger
from trait_sheet.models.traits import Asset
from trait_sheet.models.validity import valid_description, valid_name
from trait_sheet.notation.fields import ComplexField, FieldPosition, ParsePosition
from trait_sheet.notation.grammar import (
    TraitGrammar,
    description_fragment,
    level_fragment,
    name_fragment,
    parse_integer,
    quality_fragment,
)


logger = get_logger(__name__)


# =============================================================================
# Fields
# =============================================================================

NAME_FIELD = ComplexField("name", name_fragment())
QUALITY_FIELD = ComplexField("quality", quality_fragment())
LEVEL_FIELD = ComplexField("level", level_fragment())
DESCRIPTION_FIELD = ComplexField("description", description_fragment())


def asset_field(grammar: TraitGrammar) -> ComplexField:
    """Build the composite asset field of an asset grammar.

    Raises:
        FieldDefinitionError: If the grammar has no quality slot.
    """
    return ComplexField(
        "asset",
        grammar.slotted_pattern,
        sub_fields=(NAME_FIELD, QUALITY_FIELD, LEVEL_FIELD, DESCRIPTION_FIELD),
    )


ASSET_FIELD = asset_field(Asset.grammar)

PARSE_ORDER: tuple[ComplexField, ...] = (QUALITY_FIELD, LEVEL_FIELD, DESCRIPTION_FIELD, ASSET_FIELD)
"""Fields tried by ``parse_object`` for plain assets, first match wins."""


# =============================================================================
# Values
# =============================================================================


@dataclass(frozen=True)
class NameValue:
    """A bare asset name."""

    text: str


@dataclass(frozen=True)
class QualityValue:
    """A bare quality, written ``(Q<value>)``."""

    value: int


@dataclass(frozen=True)
class LevelValue:
    """A bare level, written ``(<value>)``."""

    value: int


@dataclass(frozen=True)
class DescriptionValue:
    """A bare description, written ``: <text>``."""

    text: str


NotationValue = NameValue | QualityValue | LevelValue | DescriptionValue | Asset


# =============================================================================
# Format
# =============================================================================


class AssetFormat:
    """Parser and formatter of the asset notation.

    The asset field and the default quality follow the grammar and the
    bounds of ``asset_type``.

    Attributes:
        settings: Notation settings bounding the accepted input.
        asset_type: Asset class built from a parsed line.
        asset_field: Composite field of the whole asset line.
        parse_order: Fields tried by ``parse_object``, first match wins.
    """

    def __init__(
        self,
        settings: NotationSettings | None = None,
        asset_type: type[Asset] = Asset,
    ) -> None:
        self.settings = settings or get_settings().notation
        self.asset_type = asset_type
        if asset_type.grammar == Asset.grammar:
            self.asset_field = ASSET_FIELD
            self.parse_order = PARSE_ORDER
        else:
            self.asset_field = asset_field(asset_type.grammar)
            self.parse_order = (QUALITY_FIELD, LEVEL_FIELD, DESCRIPTION_FIELD, self.asset_field)

    # -------------------------------------------------------------------------
    # Formatting
    # -------------------------------------------------------------------------

    def format(self, value: Any, buffer: io.StringIO, position: FieldPosition) -> io.StringIO:
        """Append the text of a value to the buffer.

        Nothing is written when the value is rejected.

        Args:
            value: The value to format.
            buffer: Receives the text at its end.
            position: Selects the field; receives the written offsets.

        Returns:
            The buffer.

        Raises:
            NotationError: If the value does not fit the selected field, or
                its text could not be parsed back.
        """
        field = position.field
        if isinstance(value, Asset) and field in (self.asset_field, ASSET_FIELD):
            text = self._render_asset(value)
        else:
            text = self._render(value, field)
        begin = buffer.seek(0, io.SEEK_END)
        buffer.write(text)
        position.begin_index = begin
        position.end_index = buffer.tell()
        return buffer

    def _render(self, value: Any, field: ComplexField | None) -> str:
        if isinstance(value, QualityValue) and field is QUALITY_FIELD:
            accepted = value.value is not None and self.asset_type.valid_quality(value.value)
            text = f"(Q{value.value})"
        elif isinstance(value, LevelValue) and field is LEVEL_FIELD:
            accepted = value.value is not None and self.asset_type.valid_level(value.value)
            text = f"({value.value})"
        elif isinstance(value, DescriptionValue) and field is DESCRIPTION_FIELD:
            stripped = value.text.strip() if isinstance(value.text, str) else None
            accepted = stripped is not None and valid_description(stripped)
            text = f": {stripped}" if stripped else ""
        elif isinstance(value, NameValue) and field is NAME_FIELD:
            accepted = valid_name(value.text)
            text = value.text
        else:
            accepted = False
            text = ""
        # Only text its own field reads back is written.
        if not accepted or (text and field.pattern.fullmatch(text) is None):  # type: ignore[union-attr]
            raise NotationError(
                "Cannot format given field/value",
                field_name=getattr(field, "name", None),
                invalid_value=value,
            )
        return text

    def _render_asset(self, asset: Asset) -> str:
        parts = [self._render(NameValue(asset.name), NAME_FIELD)]
        if asset.quality is not None:
            parts.append(self._render(QualityValue(asset.quality), QUALITY_FIELD))
        if asset.level is not None:
            parts.append(self._render(LevelValue(asset.level), LEVEL_FIELD))
        if asset.description:
            parts.append(self._render(DescriptionValue(asset.description), DESCRIPTION_FIELD))
            parts.append(DESCRIPTION_TERMINATOR)
        return "".join(parts)

    def format_value(self, value: Any, field: ComplexField) -> str:
        """Format a single value into a new string."""
        return self.format(value, io.StringIO(), FieldPosition(field)).getvalue()

    def format_asset(self, asset: Asset) -> str:
        """Format an asset in the long notation."""
        return self.format_value(asset, self.asset_field)

    # -------------------------------------------------------------------------
    # Parsing
    # -------------------------------------------------------------------------

    def parse_object(self, source: str, position: ParsePosition) -> NotationValue | None:
        """Parse the next value at the cursor.

        Args:
            source: The text to parse.
            position: The cursor; advanced past the recognized text, or
                given an error index on failure.

        Returns:
            The recognized value, or None if nothing matched.

        Raises:
            NotationError: If the source exceeds the configured length.
            ConstraintViolationError: If a recognized asset is out of bounds.
        """
        if position.failed or position.index > len(source):
            return None
        self._check_length(source)

        start = position.index
        for field in self.parse_order:
            result = field.parse(source, position)
            if result is None:
                position.clear_error()
                continue
            try:
                return self._convert(field, result)
            except ValidationError:
                position.index = start
                position.error_index = start
                raise

        position.error_index = start
        logger.debug("Nothing recognized", index=start)
        return None

    def parse(self, text: str) -> Asset:
        """Parse a complete asset line.

        Raises:
            NotationError: If the text is not exactly one asset.
        """
        position = ParsePosition()
        value = self.parse_object(text, position)
        if not isinstance(value, Asset) or position.index != len(text):
            raise NotationError(
                "Invalid string representation",
                source=text,
                position=position.error_index if position.failed else position.index,
            )
        return value

    def _check_length(self, source: str) -> None:
        if len(source) > self.settings.max_notation_length:
            raise NotationError(
                "Notation too long",
                details={"length": len(source), "limit": self.settings.max_notation_length},
            )

    def _convert(self, field: ComplexField, result: dict[str, Any]) -> NotationValue:
        if field is QUALITY_FIELD:
            return QualityValue(self._quality(result))
        if field is LEVEL_FIELD:
            return LevelValue(parse_integer(result["level"]))  # type: ignore[arg-type]
        if field is DESCRIPTION_FIELD:
            return DescriptionValue(result["description"])
        return self.asset_type(
            name=result["name"]["name"],
            quality=self._quality(result["quality"]) if result["quality"] else self.asset_type.default_quality,
            level=parse_integer(result["level"]["level"]) if result["level"] else None,
            description=result["description"]["description"] if result["description"] else None,
        )

    def _quality(self, result: dict[str, Any]) -> int:
        quality = parse_integer(result["quality"])
        return self.asset_type.default_quality if quality is None else quality  # type: ignore[return-value]



# =============================================================================
# Convenience
# =============================================================================


def format_asset(asset: Asset) -> str:
    """Format an asset in the long notation with the default settings."""
    return AssetFormat().format_asset(asset)


def parse(text: str) -> Asset:
    """Parse a complete asset line with the default settings."""
    return AssetFormat().parse(text)


__all__ = [
    # Fields
    "NAME_FIELD",
    "QUALITY_FIELD",
    "LEVEL_FIELD",
    "DESCRIPTION_FIELD",
    "ASSET_FIELD",
    "PARSE_ORDER",
    "asset_field",
    # Values
    "NameValue",
    "QualityValue",
    "LevelValue",
    "DescriptionValue",
    "NotationValue",
    # Format
    "AssetFormat",
    "format_asset",
    "parse",
]
