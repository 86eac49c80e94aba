"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        TraitSheetError: Base exception for all application errors.
        ConfigurationError: Configuration-related errors.
        ValidationError: User input validation errors.
        NotationError: Unparseable or unformattable notation.
        ConstraintViolationError: Values outside the rule bounds.
        FieldDefinitionError: Inconsistent notation field definitions.
        InternalConsistencyError: Grammar and converters disagree.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        configure_from_settings: Set up logging from the settings.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from trait_sheet.core.config import (
    NotationSettings,
    RulesSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from trait_sheet.core.exceptions import (
    ConfigurationError,
    ConstraintViolationError,
    FieldDefinitionError,
    InternalConsistencyError,
    NotationError,
    TraitSheetError,
    ValidationError,
)
from trait_sheet.core.logging import (
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "TraitSheetError",
    "ConfigurationError",
    "ValidationError",
    "NotationError",
    "ConstraintViolationError",
    "FieldDefinitionError",
    "InternalConsistencyError",
    # Configuration
    "Settings",
    "NotationSettings",
    "RulesSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
]
