"""Fixed-capacity circular buffer with overwrite-on-full semantics."""

from .circ_buffer import CircBuffer, CircBufferDrain, CircBufferIterator
from .config_manager import BufferConfig, ConfigManager
from .exceptions import (
    BufferMutatedError,
    CircBufferError,
    ConfigLoadError,
    ConfigValidationError,
    InvalidCapacityError,
    StoreFullError,
)
from .models import BufferStats, StorageBackend
from .store import ListStore, NumpyStore, Store

__version__ = "0.1.0"

__all__ = [
    "CircBuffer",
    "CircBufferIterator",
    "CircBufferDrain",
    "BufferConfig",
    "ConfigManager",
    "BufferStats",
    "StorageBackend",
    "Store",
    "ListStore",
    "NumpyStore",
    "CircBufferError",
    "InvalidCapacityError",
    "StoreFullError",
    "BufferMutatedError",
    "ConfigLoadError",
    "ConfigValidationError",
]
