"""Rule constants for the trait sheet core.

This module defines the default bounds of traits and assets, and the
default skill and drive families of a character.
"""

from __future__ import annotations

# =============================================================================
# Trait Constants
# =============================================================================

DEFAULT_MINIMUM_LEVEL = 1
"""Smallest level a trait or asset may have."""

# =============================================================================
# Asset Constants
# =============================================================================

DEFAULT_QUALITY = 0
"""Quality assumed when an asset notation omits the quality."""

DEFAULT_MINIMUM_QUALITY = 0
"""Smallest quality of an asset."""

DEFAULT_MAXIMUM_QUALITY = 4
"""Largest quality of an asset."""

EFFECTIVENESS_BONUS = 2
"""Added to the quality of an asset to get its effectiveness."""

# =============================================================================
# Skill Constants
# =============================================================================

SKILLS_TERM_NAME = "skills"
"""Name of the term family holding the skills."""

SKILL_TERM_NAMES = ("battle", "communicate", "discipline", "move", "understand")
"""Skills of a character, in display order."""

SKILL_MINIMUM = 4
"""Smallest skill value."""

SKILL_MAXIMUM = 8
"""Largest skill value."""

SKILL_POOL = 28
"""Maximum total of all skill values."""

# =============================================================================
# Drive Constants
# =============================================================================

ATTRIBUTES_TERM_NAME = "attributes"
"""Name of the term family holding the drives."""

ATTRIBUTE_TERM_NAMES = ("duty", "faith", "justice", "power", "truth")
"""Drives of a character, in display order."""

ATTRIBUTE_MINIMUM = 4
"""Smallest drive value."""

ATTRIBUTE_MAXIMUM = 8
"""Largest drive value."""

ATTRIBUTE_POOL = 4 + 5 + 6 + 7 + 8
"""Maximum total of all drive values."""

DRIVE_STATEMENT_MINIMUM = 6
"""Smallest drive value that may carry a drive statement."""

# =============================================================================
# Notation Constants
# =============================================================================

MAX_NOTATION_LENGTH = 1024
"""Longest notation string accepted by the parser."""

DESCRIPTION_TERMINATOR = ";;"
"""Appended after a formatted asset description."""


__all__ = [
    # Traits
    "DEFAULT_MINIMUM_LEVEL",
    # Assets
    "DEFAULT_QUALITY",
    "DEFAULT_MINIMUM_QUALITY",
    "DEFAULT_MAXIMUM_QUALITY",
    "EFFECTIVENESS_BONUS",
    # Skills
    "SKILLS_TERM_NAME",
    "SKILL_TERM_NAMES",
    "SKILL_MINIMUM",
    "SKILL_MAXIMUM",
    "SKILL_POOL",
    # Drives
    "ATTRIBUTES_TERM_NAME",
    "ATTRIBUTE_TERM_NAMES",
    "ATTRIBUTE_MINIMUM",
    "ATTRIBUTE_MAXIMUM",
    "ATTRIBUTE_POOL",
    "DRIVE_STATEMENT_MINIMUM",
    # Notation
    "MAX_NOTATION_LENGTH",
    "DESCRIPTION_TERMINATOR",
]
