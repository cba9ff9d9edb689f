"""Configuration for building circular buffers."""

from circbuf.config_manager.buffer_config import BufferConfig
from circbuf.config_manager.config import ConfigManager
from circbuf.config_manager.helpers import build_store

__all__ = ["BufferConfig", "ConfigManager", "build_store"]
