"""Helpers for turning buffer configuration into objects."""

from __future__ import annotations

from typing import Any

from circbuf.config_manager.buffer_config import BufferConfig
from circbuf.models import StorageBackend
from circbuf.store import ListStore, NumpyStore, Store


def build_store(config: BufferConfig) -> Store[Any]:
    """Create an empty backing store for ``config``.

    Args:
        config: Resolved buffer configuration.

    Returns:
        A store whose capacity matches ``config.capacity``.
    """
    if config.storage == StorageBackend.NUMPY:
        return NumpyStore(config.capacity, dtype=config.dtype)
    return ListStore(config.capacity)


def parse_optional_int(value: str) -> int | None:
    """Parse an integer, treating ``none``/empty as None.

    Args:
        value: Raw string value.

    Returns:
        The parsed integer, or None.

    Raises:
        ValueError: If the value is neither empty, ``none`` nor an integer.
    """
    normalized_value = value.strip().lower()
    if normalized_value in {"", "none"}:
        return None
    return int(normalized_value)
