"""Tests for the constrained ordered map."""

from __future__ import annotations

from collections.abc import Mapping

import pytest

from trait_sheet.core.exceptions import ConstraintViolationError
from trait_sheet.models.constrained_map import ConstrainedMap


ORDER = ("move", "battle", "understand")


def _pool_of(limit: int):
    def accepts(mapping: Mapping[str, int], key: str, value: int) -> bool:
        others = sum(v for k, v in mapping.items() if k != key)
        return others + value <= limit

    return accepts


@pytest.fixture
def terms() -> ConstrainedMap[str, int]:
    """Provide a map of three terms with bounds 4-8 and a pool of 16."""
    return ConstrainedMap(
        term="skills",
        order=ORDER.index,
        key_predicate=lambda key: key in ORDER,
        value_predicate=lambda value: 4 <= value <= 8,
        entry_predicate=_pool_of(16),
    )


class TestWrites:
    """Tests for validated writes."""

    def test_valid_write(self, terms: ConstrainedMap[str, int]) -> None:
        """Test an accepted write is stored."""
        terms["battle"] = 6

        assert terms["battle"] == 6
        assert len(terms) == 1

    def test_invalid_key(self, terms: ConstrainedMap[str, int]) -> None:
        """Test an unknown key is rejected."""
        with pytest.raises(ConstraintViolationError, match="Invalid key"):
            terms["sing"] = 5

        assert "sing" not in terms

    def test_invalid_value_leaves_previous(self, terms: ConstrainedMap[str, int]) -> None:
        """Test a rejected write keeps the previous value."""
        terms["battle"] = 6

        with pytest.raises(ConstraintViolationError, match="Invalid value") as exc_info:
            terms["battle"] = 9

        assert terms["battle"] == 6
        assert exc_info.value.details["term"] == "skills"

    def test_none_is_rejected(self, terms: ConstrainedMap[str, int]) -> None:
        """Test that absent values cannot be stored."""
        with pytest.raises(ConstraintViolationError):
            terms["battle"] = None  # type: ignore[assignment]

    def test_pool_checked_against_current_state(self, terms: ConstrainedMap[str, int]) -> None:
        """Test the entry predicate sees the other entries."""
        terms["battle"] = 6
        terms["move"] = 6

        with pytest.raises(ConstraintViolationError):
            terms["understand"] = 5

        terms["understand"] = 4
        assert sum(terms.values()) == 16

    def test_replacing_value_counts_once(self, terms: ConstrainedMap[str, int]) -> None:
        """Test overwriting an entry does not double count it."""
        terms.update({"battle": 8, "move": 8})

        terms["battle"] = 8

        assert terms["battle"] == 8


class TestReads:
    """Tests for reads and iteration."""

    def test_get_never_fails(self, terms: ConstrainedMap[str, int]) -> None:
        """Test reading an absent key gives None."""
        assert terms.get("battle") is None
        assert terms.get("sing") is None

    def test_iteration_follows_order(self, terms: ConstrainedMap[str, int]) -> None:
        """Test iteration uses the caller's order, not insertion order."""
        terms["understand"] = 4
        terms["battle"] = 4
        terms["move"] = 4

        assert list(terms) == ["move", "battle", "understand"]
        assert list(terms.to_dict()) == ["move", "battle", "understand"]

    def test_natural_order_by_default(self) -> None:
        """Test keys sort naturally without an explicit order."""
        plain: ConstrainedMap[str, int] = ConstrainedMap({"b": 2, "a": 1})

        assert list(plain) == ["a", "b"]

    def test_delete(self, terms: ConstrainedMap[str, int]) -> None:
        """Test deletion makes an entry absent again."""
        terms["battle"] = 6
        del terms["battle"]

        assert terms.get("battle") is None

    def test_unhashable_key_is_absent(self, terms: ConstrainedMap[str, int]) -> None:
        """Test an unhashable key reads as absent instead of failing."""
        terms["battle"] = 6

        assert terms.get(["battle"]) is None  # type: ignore[arg-type]
        assert ["battle"] not in terms
        with pytest.raises(KeyError):
            terms[["battle"]]  # type: ignore[index]


class TestBulkUpdate:
    """Tests for atomic bulk updates."""

    def test_update_is_all_or_nothing(self, terms: ConstrainedMap[str, int]) -> None:
        """Test a rejected entry rolls back the whole update."""
        terms["battle"] = 5

        with pytest.raises(ConstraintViolationError):
            terms.update({"move": 6, "understand": 9})

        assert terms.to_dict() == {"battle": 5}

    def test_initial_entries_validated(self) -> None:
        """Test construction rejects invalid initial entries."""
        with pytest.raises(ConstraintViolationError):
            ConstrainedMap({"battle": 3}, value_predicate=lambda value: value >= 4)

    def test_failing_predicate_rolls_back(self) -> None:
        """Test an error raised by a predicate also rolls back the update."""
        bounded: ConstrainedMap[str, int] = ConstrainedMap(value_predicate=lambda value: 0 <= value <= 8)

        with pytest.raises(TypeError):
            bounded.update([("a", 1), ("b", "x")])  # type: ignore[list-item]

        assert bounded.to_dict() == {}
