"""Trait Sheet - character sheet core for a narrative tabletop RPG.

Parses and formats the one-line trait and asset notation, and keeps a
character's skills, drives, drive statements, traits, assets and talents
within the rules.

Example:
    >>> from trait_sheet import Asset, Character, format_asset
    >>>
    >>> paul = Character("Paul", guild_id=42)
    >>> paul.add_asset(Asset.of("Crysknife(Q3)(2): made from a sandworm tooth"))
    >>> paul.set_skill_value("battle", 6)
    >>> format_asset(paul.get_asset("Crysknife"))
    'Crysknife(Q3)(2): made from a sandworm tooth;;'

Modules:
    core: Configuration, logging, and base exceptions.
    notation: Notation grammar and composable fields.
    models: Traits, assets, talents, constrained maps and the character.
    formats: Asset notation parser and formatter.
"""

from __future__ import annotations

# Core
from trait_sheet.core.config import Settings, get_settings
from trait_sheet.core.exceptions import (
    ConstraintViolationError,
    NotationError,
    TraitSheetError,
)
from trait_sheet.core.logging import configure_logging, get_logger

# Models
from trait_sheet.models import (
    Asset,
    Character,
    ConstrainedMap,
    Talent,
    TermSchema,
    Trait,
    TraitRequirement,
)

# Notation
from trait_sheet.formats import AssetFormat, format_asset, parse
from trait_sheet.notation import ComplexField, ParsePosition


__version__ = "0.1.0"

__all__ = [
    # Core
    "Settings",
    "get_settings",
    "TraitSheetError",
    "NotationError",
    "ConstraintViolationError",
    "configure_logging",
    "get_logger",
    # Models
    "Trait",
    "Asset",
    "Talent",
    "TraitRequirement",
    "ConstrainedMap",
    "TermSchema",
    "Character",
    # Notation
    "ComplexField",
    "ParsePosition",
    "AssetFormat",
    "format_asset",
    "parse",
]
