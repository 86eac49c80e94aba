"""Ordered mapping that validates every write.

A ConstrainedMap checks each proposed entry against a key predicate, a
value predicate and an entry predicate. The entry predicate sees the map
in its current state, so it can enforce aggregate rules such as a pool
limit on the sum of all values. A rejected write leaves the map unchanged.

Example:
    >>> skills = ConstrainedMap(
    ...     key_predicate=lambda key: key in {"battle", "move"},
    ...     value_predicate=lambda value: 4 <= value <= 8,
    ... )
    >>> skills["battle"] = 6
    >>> skills["battle"] = 9
    Traceback (most recent call last):
    ...
    trait_sheet.core.exceptions.ConstraintViolationError: Invalid value [...]
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping, MutableMapping
from typing import Any, Generic, TypeVar

from trait_sheet.core.exceptions import ConstraintViolationError


K = TypeVar("K")
V = TypeVar("V")

INVALID_KEY_MESSAGE = "Invalid key"
INVALID_VALUE_MESSAGE = "Invalid value"


class ConstrainedMap(MutableMapping[K, V], Generic[K, V]):
    """Mutable mapping with validated writes and a fixed key order.

    Attributes:
        term: Optional family name reported in violations.
    """

    def __init__(
        self,
        initial: Mapping[K, V] | Iterable[tuple[K, V]] = (),
        *,
        term: str | None = None,
        order: Callable[[K], Any] | None = None,
        key_predicate: Callable[[K], bool] | None = None,
        value_predicate: Callable[[V], bool] | None = None,
        entry_predicate: Callable[[ConstrainedMap[K, V], K, V], bool] | None = None,
    ) -> None:
        """Create the map.

        Args:
            initial: Entries written, all or nothing, at construction.
            term: Family name reported in violations.
            order: Sort key of the iteration order; natural key order
                when omitted.
            key_predicate: Accepts legal keys.
            value_predicate: Accepts legal values.
            entry_predicate: Accepts a (map, key, value) proposal.

        Raises:
            ConstraintViolationError: If an initial entry is rejected.
        """
        self.term = term
        self._data: dict[K, V] = {}
        self._order = order
        self._key_predicate = key_predicate
        self._value_predicate = value_predicate
        self._entry_predicate = entry_predicate
        self.update(initial)

    def valid_key(self, key: K) -> bool:
        return key is not None and (self._key_predicate is None or self._key_predicate(key))

    def valid_value(self, value: V) -> bool:
        return value is not None and (self._value_predicate is None or self._value_predicate(value))

    def valid_entry(self, key: K, value: V) -> bool:
        """Check whether writing ``value`` at ``key`` would be accepted."""
        if not (self.valid_key(key) and self.valid_value(value)):
            return False
        return self._entry_predicate is None or self._entry_predicate(self, key, value)

    def __getitem__(self, key: K) -> V:
        try:
            return self._data[key]
        except TypeError:
            # Unhashable keys are never stored.
            raise KeyError(key) from None

    def __setitem__(self, key: K, value: V) -> None:
        if not self.valid_key(key):
            raise ConstraintViolationError(
                INVALID_KEY_MESSAGE, term=self.term, field_name=str(key)
            )
        if not self.valid_entry(key, value):
            raise ConstraintViolationError(
                INVALID_VALUE_MESSAGE,
                term=self.term,
                field_name=str(key),
                invalid_value=value,
            )
        self._data[key] = value

    def __delitem__(self, key: K) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[K]:
        if self._order is None:
            return iter(sorted(self._data))  # type: ignore[type-var]
        return iter(sorted(self._data, key=self._order))

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        try:
            return key in self._data
        except TypeError:
            return False

    def update(self, other: Any = (), /, **kwargs: V) -> None:
        """Write several entries; if any write fails, none is kept.

        Raises:
            ConstraintViolationError: If an entry is rejected.
        """
        snapshot = dict(self._data)
        try:
            super().update(other, **kwargs)
        except BaseException:
            self._data = snapshot
            raise

    def to_dict(self) -> dict[K, V]:
        """Snapshot of the entries in iteration order."""
        return {key: self._data[key] for key in self}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_dict()!r})"


__all__ = [
    "INVALID_KEY_MESSAGE",
    "INVALID_VALUE_MESSAGE",
    "ConstrainedMap",
]
