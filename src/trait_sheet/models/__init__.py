"""Domain models of the trait sheet.

Exports:
    Values:
        Trait: Named trait with optional level and description.
        Asset: Trait with a quality.
        Talent: Special ability with requirements.

    Containers:
        ConstrainedMap: Ordered mapping with validated writes.
        TermSchema: Skill or drive family definition.
        Character: The character aggregate.
"""

from __future__ import annotations

from trait_sheet.models.character import Character
from trait_sheet.models.constrained_map import ConstrainedMap
from trait_sheet.models.talents import (
    CharacterRequirement,
    Requirement,
    Talent,
    TalentRequirement,
    TraitRequirement,
)
from trait_sheet.models.terms import TermSchema
from trait_sheet.models.traits import Asset, Trait, TraitKind


__all__ = [
    # Values
    "TraitKind",
    "Trait",
    "Asset",
    "Talent",
    "Requirement",
    "TraitRequirement",
    "TalentRequirement",
    "CharacterRequirement",
    # Containers
    "ConstrainedMap",
    "TermSchema",
    "Character",
]
