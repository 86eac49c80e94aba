"""Custom exception hierarchy for the trait sheet core.

This module defines the exception hierarchy shared by the notation parser,
the constrained containers and the character aggregate. All exceptions
inherit from TraitSheetError, enabling unified error handling at the
boundary of the caller while preserving domain-specific context.

Example:
    >>> from trait_sheet.core.exceptions import NotationError
    >>> raise NotationError("Invalid string representation", source="Shield(Q5)")
"""

from __future__ import annotations

from typing import Any


class TraitSheetError(Exception):
    """Base exception for all trait sheet errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(TraitSheetError):
    """Raised when application configuration is invalid.

    This includes invalid rule bounds, or a default value outside the
    configured range.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(TraitSheetError):
    """Raised when a user supplied value fails validation.

    Base class of the notation and constraint errors. Callers report
    the message back to the user verbatim.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


class NotationError(ValidationError):
    """Raised when a trait or asset notation cannot be parsed or formatted.

    The source string is only partially recognized, or a value does not fit
    the field it is formatted into.
    """

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        position: int | None = None,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize notation error with source context.

        Args:
            message: Human-readable error description.
            source: The notation string being parsed.
            position: Index of the source where parsing failed.
            field_name: Name of the notation field involved.
            invalid_value: The value that could not be formatted.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if source is not None:
            combined_details["source"] = source
        if position is not None:
            combined_details["position"] = position
        super().__init__(
            message,
            field_name=field_name,
            invalid_value=invalid_value,
            details=combined_details,
        )


class ConstraintViolationError(ValidationError):
    """Raised when a well-formed value falls outside the rule bounds.

    Covers level and quality ranges, skill and attribute pools, and drive
    statements on drives that are too low. The rejected write leaves the
    previous state untouched.
    """

    def __init__(
        self,
        message: str,
        *,
        term: str | None = None,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize constraint violation with term context.

        Args:
            message: Human-readable error description.
            term: The term family (skills, attributes, ...) involved.
            field_name: Name of the entry that failed validation.
            invalid_value: The rejected value.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if term:
            combined_details["term"] = term
        super().__init__(
            message,
            field_name=field_name,
            invalid_value=invalid_value,
            details=combined_details,
        )


# =============================================================================
# Definition & Consistency Exceptions
# =============================================================================


class FieldDefinitionError(TraitSheetError):
    """Raised when a notation field is defined inconsistently.

    This happens at construction time only: a sub-field is missing, or it
    cannot be given a legal and unique capture slot.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize field definition error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field being defined.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        super().__init__(message, details=combined_details)


class InternalConsistencyError(TraitSheetError):
    """Raised when the grammar recognized text its own converters reject.

    This indicates a programming error, not bad user input.
    """


__all__ = [
    # Base exception
    "TraitSheetError",
    # Configuration & validation exceptions
    "ConfigurationError",
    "ValidationError",
    "NotationError",
    "ConstraintViolationError",
    # Definition & consistency exceptions
    "FieldDefinitionError",
    "InternalConsistencyError",
]
