"""Pydantic model for circular buffer configuration."""

from __future__ import annotations

import numpy as np
from pydantic import BaseModel, Field, field_validator, model_validator

from circbuf.circ_buffer import index_modulus
from circbuf.const import (
    DEFAULT_CAPACITY,
    DEFAULT_DTYPE,
    DEFAULT_OVERWRITE_LOG_INTERVAL,
)
from circbuf.models import StorageBackend


class BufferConfig(BaseModel):
    """Configuration options for a circular buffer instance.

    Attributes:
        capacity: number of elements the buffer holds before overwriting.
        storage: backing store implementation.
        dtype: NumPy dtype of the backing array; only used by the numpy store.
        index_bits: width of the logical read/write counters, or None for
            unbounded counters.
        overwrite_log_interval: log the first eviction and every Nth one
            after it; 0 disables eviction logging.
    """

    capacity: int = Field(default=DEFAULT_CAPACITY, gt=0)
    storage: StorageBackend = StorageBackend.LIST
    dtype: str = DEFAULT_DTYPE
    index_bits: int | None = Field(default=None, gt=0)
    overwrite_log_interval: int = Field(default=DEFAULT_OVERWRITE_LOG_INTERVAL, ge=0)

    @field_validator("dtype")
    @classmethod
    def _check_dtype(cls, value: str) -> str:
        try:
            np.dtype(value)
        except TypeError as exc:
            raise ValueError(f"unknown dtype {value!r}") from exc
        return value

    @model_validator(mode="after")
    def _check_index_bits(self) -> BufferConfig:
        index_modulus(self.capacity, self.index_bits)
        return self
