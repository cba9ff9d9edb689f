"""Fixed-capacity backing stores for the circular buffer.

A store holds at most ``capacity`` values in physical slots ``0..capacity-1``
and tracks its own physical fill separately from the buffer's logical
occupancy. It goes through two phases exactly once between clears:

- growing: values are appended to the next free slot;
- full: every slot is initialized and values are written in place.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

import numpy as np

from circbuf.const import DEFAULT_DTYPE
from circbuf.exceptions import InvalidCapacityError, StoreFullError

T = TypeVar("T")


def check_capacity(capacity: int) -> int:
    """Return ``capacity`` if it is a positive int, else raise."""
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise InvalidCapacityError(
            f"capacity must be an int, got {type(capacity).__name__}"
        )
    if capacity <= 0:
        raise InvalidCapacityError(f"capacity must be positive, got {capacity}")
    return capacity


class Store(ABC, Generic[T]):
    """Abstract fixed-capacity store addressed by physical slot."""

    def __init__(self, capacity: int) -> None:
        """Initialize the store.

        Args:
            capacity: Maximum number of slots.

        Raises:
            InvalidCapacityError: If capacity is not a positive int.
        """
        self._capacity = check_capacity(capacity)

    @property
    def capacity(self) -> int:
        """Return the number of physical slots."""
        return self._capacity

    @abstractmethod
    def __len__(self) -> int:
        """Return the number of initialized slots (physical fill)."""

    def is_full(self) -> bool:
        """Return whether every slot has been initialized."""
        return len(self) == self._capacity

    def _check_slot(self, slot: int) -> None:
        if not 0 <= slot < len(self):
            raise IndexError(
                f"slot {slot} out of range for store filled to {len(self)}"
            )

    def append(self, value: T) -> None:
        """Initialize the next free slot with ``value``.

        Args:
            value: Value to store.

        Raises:
            StoreFullError: If the store is already physically full.
        """
        if self.is_full():
            raise StoreFullError(f"store is full ({self._capacity} slots)")
        self._append(value)

    def read_at(self, slot: int) -> T:
        """Return the value held in ``slot``.

        Raises:
            IndexError: If the slot has not been initialized.
        """
        self._check_slot(slot)
        return self._read(slot)

    def write_at(self, slot: int, value: T) -> None:
        """Overwrite the value held in ``slot``.

        Raises:
            IndexError: If the slot has not been initialized.
        """
        self._check_slot(slot)
        self._write(slot, value)

    @abstractmethod
    def _append(self, value: T) -> None: ...

    @abstractmethod
    def _read(self, slot: int) -> T: ...

    @abstractmethod
    def _write(self, slot: int, value: T) -> None: ...

    @abstractmethod
    def clear(self) -> None:
        """Drop every value and return to the growing phase."""


class ListStore(Store[T]):
    """List-backed store that grows by append up to its capacity."""

    def __init__(self, capacity: int) -> None:
        """Initialize an empty list store."""
        super().__init__(capacity)
        self._items: list[T] = []

    def __len__(self) -> int:
        """Return the number of initialized slots."""
        return len(self._items)

    def _append(self, value: T) -> None:
        self._items.append(value)

    def _read(self, slot: int) -> T:
        return self._items[slot]

    def _write(self, slot: int, value: T) -> None:
        self._items[slot] = value

    def clear(self) -> None:
        """Drop every value."""
        self._items.clear()

    def __repr__(self) -> str:
        return f"ListStore(capacity={self._capacity}, filled={len(self)})"


class NumpyStore(Store[Any]):
    """Store preallocated once as an uninitialized NumPy array.

    Slots past the fill counter hold whatever ``numpy.empty`` left there and
    are never read. With the default ``object`` dtype any Python value can be
    stored; a numeric dtype gives a compact buffer and values come back as
    NumPy scalars.

    Values are cast to the array dtype on write using NumPy's assignment
    rules, so a numeric dtype may truncate (``3.7`` stored in an ``int64``
    store reads back as ``3``). Values NumPy cannot convert at all raise
    ``ValueError`` or ``TypeError``.
    """

    def __init__(self, capacity: int, dtype: Any = DEFAULT_DTYPE) -> None:
        """Initialize the store.

        Args:
            capacity: Number of slots to preallocate.
            dtype: NumPy dtype (or dtype name) of the backing array.

        Raises:
            InvalidCapacityError: If capacity is not a positive int.
            TypeError: If dtype is not understood by NumPy.
        """
        super().__init__(capacity)
        self._array = np.empty(self._capacity, dtype=np.dtype(dtype))
        self._filled = 0

    @property
    def dtype(self) -> np.dtype:
        """Return the dtype of the backing array."""
        return self._array.dtype

    def __len__(self) -> int:
        """Return the number of initialized slots."""
        return self._filled

    def _append(self, value: Any) -> None:
        self._array[self._filled] = value
        self._filled += 1

    def _read(self, slot: int) -> Any:
        return self._array[slot]

    def _write(self, slot: int, value: Any) -> None:
        self._array[slot] = value

    def clear(self) -> None:
        """Forget every value; object references are released."""
        if self._array.dtype == object:
            self._array[: self._filled] = None
        self._filled = 0

    def __repr__(self) -> str:
        return (
            f"NumpyStore(capacity={self._capacity}, filled={self._filled}, "
            f"dtype={self._array.dtype})"
        )
