"""Models used by circbuf."""

from enum import Enum

from pydantic import BaseModel


class StorageBackend(str, Enum):
    """Backing stores a buffer can be built on."""

    LIST = "list"
    NUMPY = "numpy"


class BufferStats(BaseModel):
    """Point-in-time snapshot of a buffer's occupancy and counters.

    Attributes:
        capacity: fixed number of slots.
        length: elements currently queued (logical occupancy).
        filled: slots initialized in the backing store (physical fill).
        total_pushed: values pushed since construction or the last clear.
        total_overwritten: values evicted by overwrite-on-full.
        read_index: logical index of the next element to be pulled.
        write_index: logical index of the next slot to be written.
    """

    capacity: int
    length: int
    filled: int
    total_pushed: int
    total_overwritten: int
    read_index: int
    write_index: int

    @property
    def utilization(self) -> float:
        """Fraction of capacity currently queued (0.0 to 1.0)."""
        return self.length / self.capacity
