"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

from trait_sheet.core.exceptions import (
    ConfigurationError,
    ConstraintViolationError,
    FieldDefinitionError,
    InternalConsistencyError,
    NotationError,
    TraitSheetError,
    ValidationError,
)


class TestTraitSheetError:
    """Tests for the base TraitSheetError exception."""

    def test_basic_message(self) -> None:
        """Test exception with basic message."""
        exc = TraitSheetError("Test error message")
        assert exc.message == "Test error message"
        assert exc.details == {}
        assert str(exc) == "Test error message"

    def test_with_details(self) -> None:
        """Test exception with additional details."""
        exc = TraitSheetError(
            "Test error",
            details={"key": "value", "count": 42},
        )
        assert exc.details == {"key": "value", "count": 42}
        assert "key='value'" in str(exc)
        assert "count=42" in str(exc)

    def test_repr(self) -> None:
        """Test exception repr output."""
        exc = TraitSheetError("Test", details={"x": 1})
        repr_str = repr(exc)
        assert "TraitSheetError" in repr_str
        assert "Test" in repr_str
        assert "x" in repr_str


class TestValidationExceptions:
    """Tests for validation-related exceptions."""

    def test_validation_error_with_field(self) -> None:
        """Test ValidationError with field context."""
        exc = ValidationError("Invalid name", field_name="name", invalid_value=" Paul")
        assert exc.details["field_name"] == "name"
        assert exc.details["invalid_value"] == " Paul"

    def test_notation_error_with_source(self) -> None:
        """Test NotationError with source and position."""
        exc = NotationError("Invalid string representation", source="Shield(Q5)", position=0)
        assert exc.details["source"] == "Shield(Q5)"
        assert exc.details["position"] == 0

    def test_constraint_violation_with_term(self) -> None:
        """Test ConstraintViolationError with term context."""
        exc = ConstraintViolationError(
            "Invalid skill value", term="skills", field_name="battle", invalid_value=9
        )
        assert exc.details == {"term": "skills", "field_name": "battle", "invalid_value": 9}

    def test_configuration_error_with_key(self) -> None:
        """Test ConfigurationError with config key."""
        exc = ConfigurationError("Bad bounds", config_key="skill_minimum")
        assert exc.details["config_key"] == "skill_minimum"


class TestExceptionHierarchy:
    """Tests for exception inheritance."""

    @pytest.mark.parametrize(
        "exc_class",
        [NotationError, ConstraintViolationError],
    )
    def test_user_errors_are_validation_errors(self, exc_class: type[ValidationError]) -> None:
        """Test notation and constraint errors are validation errors."""
        assert issubclass(exc_class, ValidationError)

    @pytest.mark.parametrize(
        "exc_class",
        [
            ConfigurationError,
            ValidationError,
            FieldDefinitionError,
            InternalConsistencyError,
        ],
    )
    def test_all_inherit_from_base(self, exc_class: type[TraitSheetError]) -> None:
        """Test all exceptions inherit from TraitSheetError."""
        assert issubclass(exc_class, TraitSheetError)

    def test_catch_by_base(self) -> None:
        """Test catching specific exceptions by base class."""
        with pytest.raises(TraitSheetError):
            raise FieldDefinitionError("Undefined sub field", field_name="asset")
