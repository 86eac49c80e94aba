"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Trait Sheet test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator

    from trait_sheet.models import Asset, Character, Trait


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from trait_sheet.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "TRAIT_SHEET_DEBUG": "true",
        "TRAIT_SHEET_LOG_LEVEL": "DEBUG",
        "TRAIT_SHEET_RULES_SKILL_POOL": "30",
        "TRAIT_SHEET_NOTATION_MAX_NOTATION_LENGTH": "64",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def lasgun() -> Asset:
    """Provide a fully specified asset.

    Returns:
        Lasgun(Q2)(3): military-grade
    """
    from trait_sheet.models import Asset

    return Asset(name="Lasgun", quality=2, level=3, description="military-grade")


@pytest.fixture
def mentat() -> Trait:
    """Provide a trait with a level.

    Returns:
        Mentat(2): trained to compute
    """
    from trait_sheet.models import Trait

    return Trait(name="Mentat", level=2, description="trained to compute")


@pytest.fixture
def character() -> Character:
    """Provide a fresh character with default skills and drives.

    Returns:
        A character named Paul.
    """
    from trait_sheet.models import Character

    return Character("Paul", guild_id=42, owner_id=7)
