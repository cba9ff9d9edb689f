"""Level 2: Circular Buffer Iteration Tests.

Tests for the three ways of walking a buffer:
- Borrowing iteration (CircBufferIterator) leaves contents in place
- Draining iteration (CircBufferDrain) pulls as it yields
- By-value iteration over the buffer itself consumes it
"""

from __future__ import annotations

import operator
from itertools import islice

import pytest

from circbuf.circ_buffer import CircBuffer, CircBufferDrain, CircBufferIterator
from circbuf.exceptions import BufferMutatedError
from circbuf.store import ListStore


class CountingStore(ListStore):
    """ListStore that counts slot reads."""

    def __init__(self, capacity: int) -> None:
        super().__init__(capacity)
        self.reads = 0

    def _read(self, slot: int):
        self.reads += 1
        return super()._read(slot)


# =============================================================================
# Borrowing iteration
# =============================================================================


def test_iter_yields_head_to_tail_without_consuming() -> None:
    cb: CircBuffer[int] = CircBuffer(4)
    cb.extend([1, 2, 3])

    assert list(cb.iter()) == [1, 2, 3]
    assert len(cb) == 3
    assert cb.peek() == 1


def test_iter_on_empty_buffer_yields_nothing() -> None:
    cb: CircBuffer[int] = CircBuffer(4)

    assert list(cb.iter()) == []


def test_iter_after_overwrite_yields_latest_values() -> None:
    cb: CircBuffer[int] = CircBuffer(4)
    cb.extend(range(10))

    assert list(cb.iter()) == [6, 7, 8, 9]


def test_iter_returns_iterator_type() -> None:
    cb: CircBuffer[int] = CircBuffer(2)
    it = cb.iter()

    assert isinstance(it, CircBufferIterator)
    assert iter(it) is it


def test_iter_reports_remaining_length() -> None:
    cb: CircBuffer[int] = CircBuffer(4)
    cb.extend([1, 2, 3])
    it = cb.iter()

    assert len(it) == 3
    next(it)
    assert len(it) == 2
    list(it)
    assert len(it) == 0


def test_iter_reads_lazily() -> None:
    """Creating the iterator copies nothing; each step reads one slot."""
    store = CountingStore(4)
    cb: CircBuffer[int] = CircBuffer(4, store=store)
    cb.extend([1, 2, 3])

    it = cb.iter()
    assert store.reads == 0

    next(it)
    assert store.reads == 1
    next(it)
    assert store.reads == 2


def test_iter_is_not_restartable() -> None:
    cb: CircBuffer[int] = CircBuffer(3)
    cb.extend([1, 2])
    it = cb.iter()

    assert list(it) == [1, 2]
    assert list(it) == []


def test_multiple_borrowing_iterators_coexist() -> None:
    """Any number of read-only views can be walked side by side."""
    cb: CircBuffer[str] = CircBuffer(3)
    cb.extend("abc")

    assert list(zip(cb.iter(), cb.iter())) == [("a", "a"), ("b", "b"), ("c", "c")]


def test_reads_during_iteration_are_allowed() -> None:
    cb: CircBuffer[int] = CircBuffer(3)
    cb.extend([1, 2, 3])

    seen = []
    for value in cb.iter():
        seen.append((value, cb.peek(), cb.get(2), len(cb)))

    assert seen == [(1, 1, 3, 3), (2, 1, 3, 3), (3, 1, 3, 3)]


@pytest.mark.parametrize(
    "mutate",
    [
        lambda cb: cb.push(99),
        lambda cb: cb.pull(),
        lambda cb: cb.clear(),
        lambda cb: next(cb.drain()),
        lambda cb: next(cb),
    ],
    ids=["push", "pull", "clear", "drain", "by-value"],
)
def test_mutation_during_iteration_raises(mutate) -> None:
    cb: CircBuffer[int] = CircBuffer(4)
    cb.extend([1, 2, 3])
    it = cb.iter()
    next(it)

    mutate(cb)

    with pytest.raises(BufferMutatedError, match="mutated during iteration"):
        next(it)


def test_mutation_error_is_runtime_error() -> None:
    cb: CircBuffer[int] = CircBuffer(2)
    cb.extend([1, 2])
    it = cb.iter()
    cb.push(3)

    with pytest.raises(RuntimeError):
        next(it)


def test_mutation_after_exhaustion_is_ignored() -> None:
    cb: CircBuffer[int] = CircBuffer(2)
    cb.push(1)
    it = cb.iter()
    assert list(it) == [1]

    cb.push(2)

    with pytest.raises(StopIteration):
        next(it)


def test_pull_on_empty_does_not_invalidate_iterator() -> None:
    """An empty pull changes nothing, so an empty-buffer view stays valid."""
    cb: CircBuffer[int] = CircBuffer(2)
    it = cb.iter()

    assert cb.pull() is None
    assert list(it) == []


# =============================================================================
# Draining iteration
# =============================================================================


def test_drain_after_many_pushes_yields_last_capacity_values() -> None:
    cb: CircBuffer[int] = CircBuffer(20)
    for value in range(100):
        cb.push(value)

    assert list(cb.drain()) == list(range(80, 100))
    assert cb.is_empty()


def test_drain_returns_drain_type() -> None:
    cb: CircBuffer[int] = CircBuffer(2)
    drain = cb.drain()

    assert isinstance(drain, CircBufferDrain)
    assert iter(drain) is drain


def test_partial_drain_leaves_remainder() -> None:
    """Abandoning a drain keeps whatever it has not yet pulled."""
    cb: CircBuffer[int] = CircBuffer(5)
    cb.extend(range(5))

    taken = list(islice(cb.drain(), 2))

    assert taken == [0, 1]
    assert len(cb) == 3
    assert list(cb.iter()) == [2, 3, 4]


def test_drain_length_hint_tracks_buffer() -> None:
    cb: CircBuffer[int] = CircBuffer(4)
    cb.extend([1, 2, 3])
    drain = cb.drain()

    assert operator.length_hint(drain) == 3
    next(drain)
    assert operator.length_hint(drain) == 2


def test_drain_yields_stored_none_values() -> None:
    """Termination is decided by emptiness, not by a None element."""
    cb: CircBuffer[int | None] = CircBuffer(3)
    cb.extend([None, 1, None])

    assert list(cb.drain()) == [None, 1, None]
    assert cb.is_empty()


def test_drain_sees_pushes_made_while_draining() -> None:
    cb: CircBuffer[int] = CircBuffer(3)
    cb.extend([1, 2])
    drain = cb.drain()

    assert next(drain) == 1
    cb.push(3)

    assert list(drain) == [2, 3]


# =============================================================================
# By-value iteration
# =============================================================================


def test_buffer_is_its_own_iterator() -> None:
    cb: CircBuffer[int] = CircBuffer(2)

    assert iter(cb) is cb


def test_iterating_buffer_consumes_it() -> None:
    cb: CircBuffer[int] = CircBuffer(3)
    cb.extend(range(5))

    assert list(cb) == [2, 3, 4]
    assert cb.is_empty()
    assert list(cb) == []


def test_next_on_empty_buffer_stops() -> None:
    cb: CircBuffer[int] = CircBuffer(3)

    with pytest.raises(StopIteration):
        next(cb)


def test_for_loop_break_leaves_remainder() -> None:
    cb: CircBuffer[int] = CircBuffer(4)
    cb.extend([1, 2, 3, 4])

    for value in cb:
        if value == 2:
            break

    assert list(cb.iter()) == [3, 4]
