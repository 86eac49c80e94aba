"""Asset notation parser and formatter.

Exports:
    AssetFormat: Parser and formatter of the long asset notation.
    format_asset: Format an asset with the default settings.
    parse: Parse a complete asset line with the default settings.
"""

from __future__ import annotations

from trait_sheet.formats.asset_format import (
    ASSET_FIELD,
    DESCRIPTION_FIELD,
    LEVEL_FIELD,
    NAME_FIELD,
    PARSE_ORDER,
    QUALITY_FIELD,
    AssetFormat,
    DescriptionValue,
    LevelValue,
    NameValue,
    NotationValue,
    QualityValue,
    asset_field,
    format_asset,
    parse,
)


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
