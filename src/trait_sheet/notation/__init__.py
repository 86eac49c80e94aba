"""Notation grammar and composable fields.

Exports:
    Grammar:
        TraitGrammar: Pattern of the trait notation.
        AssetGrammar: Pattern of the asset notation.
        parse_integer: Convert matched digits into an integer.

    Fields:
        ComplexField: Named, composable notation field.
        ParsePosition: Mutable parse cursor.
        FieldPosition: Field selector receiving formatted offsets.
        flatten: Flatten nested parse results into dotted slot paths.
"""

from __future__ import annotations

from trait_sheet.notation.fields import (
    ComplexField,
    FieldPosition,
    ParsePosition,
    capture_group_name,
    flatten,
    slot_name,
    valid_capture_group_name,
    valid_field_name,
)
from trait_sheet.notation.grammar import (
    NAME_REGEX,
    AssetGrammar,
    Segment,
    TraitGrammar,
    description_fragment,
    level_fragment,
    name_fragment,
    parse_integer,
    quality_fragment,
)


__all__ = [
    # Grammar
    "NAME_REGEX",
    "Segment",
    "TraitGrammar",
    "AssetGrammar",
    "name_fragment",
    "quality_fragment",
    "level_fragment",
    "description_fragment",
    "parse_integer",
    # Fields
    "ComplexField",
    "ParsePosition",
    "FieldPosition",
    "capture_group_name",
    "slot_name",
    "flatten",
    "valid_field_name",
    "valid_capture_group_name",
]
