"""Fixed-capacity circular buffer with overwrite-on-full semantics.

Positions are tracked as two logical counters, ``r_idx`` (next element to
pull) and ``w_idx`` (next slot to write). Logical index ``i`` lives in
physical slot ``i % capacity`` of the backing store. The counters only ever
move forward; ``w_idx - r_idx`` is the number of queued elements.

- Single owner. No internal locking.
- Pushing onto a full buffer drops the oldest element; pushes never fail.
- Pulling from, peeking at, or indexing past the end of the buffer returns
  ``None`` instead of raising.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Generic, TypeVar

from circbuf.const import DEFAULT_OVERWRITE_LOG_INTERVAL
from circbuf.exceptions import BufferMutatedError, InvalidCapacityError
from circbuf.models import BufferStats
from circbuf.sampled_logger import make_sampled_logger
from circbuf.store import ListStore, Store, check_capacity

if TYPE_CHECKING:
    from circbuf.config_manager.buffer_config import BufferConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


def index_modulus(capacity: int, index_bits: int | None) -> int | None:
    """Return the wrap point of the logical counters.

    With ``index_bits`` set, the counters behave like unsigned integers of
    that width, except that they wrap at the largest multiple of ``capacity``
    that fits. Keeping the modulus a multiple of capacity makes the physical
    slot ``i % capacity`` continuous across the wrap.

    Args:
        capacity: Buffer capacity.
        index_bits: Counter width in bits, or None for unbounded counters.

    Returns:
        The modulus, or None when counters are unbounded.

    Raises:
        InvalidCapacityError: If the width cannot represent every occupancy
            from 0 to capacity.
    """
    if index_bits is None:
        return None
    if isinstance(index_bits, bool) or not isinstance(index_bits, int):
        raise InvalidCapacityError(
            f"index_bits must be an int, got {type(index_bits).__name__}"
        )
    if index_bits <= 0:
        raise InvalidCapacityError(f"index_bits must be positive, got {index_bits}")

    wraps = (1 << index_bits) // capacity
    if wraps < 2:
        raise InvalidCapacityError(
            f"index_bits={index_bits} is too narrow for capacity {capacity}; "
            f"need 2**index_bits >= {2 * capacity}"
        )
    return wraps * capacity


class CircBuffer(Generic[T]):
    """Bounded FIFO queue over a fixed number of slots.

    Iterating the buffer itself consumes it: ``next(buf)`` is ``buf.pull()``
    and ``list(buf)`` empties the buffer. Use :meth:`iter` to look at the
    contents without removing them, or :meth:`drain` for an explicit
    consuming view.

    ``None`` doubles as the "nothing available" result of :meth:`pull`,
    :meth:`get` and :meth:`peek`. Callers that store ``None`` should check
    :meth:`is_empty` or ``len()`` to tell the two apart.
    """

    def __init__(
        self,
        capacity: int,
        store: Store[T] | None = None,
        index_bits: int | None = None,
        overwrite_log_interval: int = DEFAULT_OVERWRITE_LOG_INTERVAL,
    ) -> None:
        """Initialize an empty buffer.

        Args:
            capacity: Number of elements the buffer can hold. Fixed for the
                lifetime of the instance.
            store: Empty backing store with the same capacity. A
                :class:`ListStore` is created when omitted.
            index_bits: Width of the logical counters in bits. None (the
                default) leaves them unbounded.
            overwrite_log_interval: Log the first eviction and every Nth one
                after it at DEBUG. 0 disables eviction logging.

        Raises:
            InvalidCapacityError: If capacity or index_bits is invalid, or the
                store does not match.
        """
        self._capacity = check_capacity(capacity)
        if store is None:
            store = ListStore(self._capacity)
        elif store.capacity != self._capacity:
            raise InvalidCapacityError(
                f"store capacity {store.capacity} does not match "
                f"buffer capacity {self._capacity}"
            )
        elif len(store) != 0:
            raise InvalidCapacityError("store must be empty")

        self._store: Store[T] = store
        self._modulus = index_modulus(self._capacity, index_bits)
        self._r_idx = 0
        self._w_idx = 0
        self._total_pushed = 0
        self._total_overwritten = 0
        # Bumped on every state change; borrowing iterators compare against it.
        self._mutations = 0
        self._log_overwrite = make_sampled_logger(
            "Buffer full, dropped oldest element (eviction #%d, capacity %d)",
            log_interval=overwrite_log_interval,
            target_logger=logger,
        )
        logger.debug(
            "Created CircBuffer with capacity %d on %r", self._capacity, store
        )

    @classmethod
    def from_config(cls, config: BufferConfig) -> CircBuffer:
        """Build a buffer from a resolved configuration.

        Args:
            config: The buffer configuration.

        Returns:
            A new, empty buffer.
        """
        from circbuf.config_manager.helpers import build_store

        return cls(
            config.capacity,
            store=build_store(config),
            index_bits=config.index_bits,
            overwrite_log_interval=config.overwrite_log_interval,
        )

    @property
    def capacity(self) -> int:
        """Return the capacity of the buffer."""
        return self._capacity

    def __len__(self) -> int:
        """Return the number of elements queued and ready to be read."""
        return self._distance(self._r_idx, self._w_idx)

    def is_empty(self) -> bool:
        """Return whether there is nothing to pull (``len() == 0``)."""
        return len(self) == 0

    def is_full(self) -> bool:
        """Return whether the buffer holds ``capacity`` elements."""
        return len(self) == self._capacity

    def push(self, value: T) -> None:
        """Push ``value`` onto the tail.

        If the buffer is full the oldest element is dropped to make room.
        If the store rejects ``value`` the buffer is left unchanged.

        Args:
            value: Value to enqueue.
        """
        was_full = self.is_full()
        # When full, the write slot is the head slot.
        self._write(value)
        if was_full:
            self._r_idx = self._advance(self._r_idx)
            self._total_overwritten += 1
            self._log_overwrite(self._capacity)

        self._w_idx = self._advance(self._w_idx)
        self._total_pushed += 1
        self._mutations += 1

    def extend(self, values: Iterable[T]) -> None:
        """Push every value from ``values`` in order."""
        for value in values:
            self.push(value)

    def pull(self) -> T | None:
        """Remove and return the head element, or None if the buffer is empty."""
        if self.is_empty():
            return None

        value = self._read_at(0)
        self._r_idx = self._advance(self._r_idx)
        self._mutations += 1
        return value

    def get(self, idx: int) -> T | None:
        """Return the element ``idx`` positions after the head.

        Args:
            idx: Offset from the head, ``0 <= idx < len()``.

        Returns:
            The element, or None if the offset is out of range.
        """
        if idx < 0 or idx >= len(self):
            return None
        return self._read_at(idx)

    def peek(self) -> T | None:
        """Return the head element without removing it (``get(0)``)."""
        return self.get(0)

    def iter(self) -> CircBufferIterator[T]:
        """Return an iterator over the queued elements that leaves them in place."""
        return CircBufferIterator(self)

    def drain(self) -> CircBufferDrain[T]:
        """Return an iterator that pulls each element as it yields it."""
        return CircBufferDrain(self)

    def clear(self) -> None:
        """Drop every element and reset both counters."""
        self._store.clear()
        self._r_idx = 0
        self._w_idx = 0
        self._total_pushed = 0
        self._total_overwritten = 0
        self._mutations += 1
        logger.debug("Cleared CircBuffer with capacity %d", self._capacity)

    def stats(self) -> BufferStats:
        """Return a snapshot of occupancy and counters."""
        return BufferStats(
            capacity=self._capacity,
            length=len(self),
            filled=len(self._store),
            total_pushed=self._total_pushed,
            total_overwritten=self._total_overwritten,
            read_index=self._r_idx,
            write_index=self._w_idx,
        )

    def __iter__(self) -> CircBuffer[T]:
        return self

    def __next__(self) -> T:
        if self.is_empty():
            raise StopIteration
        return self.pull()  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"CircBuffer(len={len(self)}/{self._capacity}, store={self._store!r})"

    def _advance(self, idx: int) -> int:
        idx += 1
        if self._modulus is not None and idx == self._modulus:
            return 0
        return idx

    def _distance(self, start: int, end: int) -> int:
        if self._modulus is None:
            return end - start
        return (end - start) % self._modulus

    def _read_at(self, offset: int) -> T:
        return self._store.read_at((self._r_idx + offset) % self._capacity)

    def _write(self, value: T) -> None:
        if self._store.is_full():
            self._store.write_at(self._w_idx % self._capacity, value)
            return

        self._store.append(value)
        if self._store.is_full():
            logger.debug(
                "Store reached %d slots, writes now overwrite in place",
                self._capacity,
            )


class CircBufferIterator(Generic[T]):
    """Non-consuming iterator over a buffer's queued elements.

    The length is fixed when the iterator is created and each element is
    read from the live buffer as it is requested. Pushing, pulling or
    clearing the buffer before the iterator is exhausted makes the next step
    raise :class:`BufferMutatedError`.
    """

    def __init__(self, buffer: CircBuffer[T]) -> None:
        """Initialize the iterator at the buffer's head."""
        self._buffer = buffer
        self._idx = 0
        self._len = len(buffer)
        self._mutations = buffer._mutations

    def __iter__(self) -> CircBufferIterator[T]:
        return self

    def __next__(self) -> T:
        if self._idx >= self._len:
            raise StopIteration
        if self._buffer._mutations != self._mutations:
            raise BufferMutatedError("CircBuffer mutated during iteration")

        value = self._buffer._read_at(self._idx)
        self._idx += 1
        return value

    def __len__(self) -> int:
        """Return the number of elements still to be yielded."""
        return self._len - self._idx


class CircBufferDrain(Generic[T]):
    """Consuming iterator that pulls each element off the buffer as it yields.

    Stopping early leaves the remaining elements in the buffer.
    """

    def __init__(self, buffer: CircBuffer[T]) -> None:
        """Initialize the drain over ``buffer``."""
        self._buffer = buffer

    def __iter__(self) -> CircBufferDrain[T]:
        return self

    def __next__(self) -> T:
        if self._buffer.is_empty():
            raise StopIteration
        return self._buffer.pull()  # type: ignore[return-value]

    def __length_hint__(self) -> int:
        return len(self._buffer)
