"""Constants for circbuf."""

DEFAULT_CAPACITY = 1024
DEFAULT_DTYPE = "object"

# Overwrite evictions are logged for the first one and then every Nth.
DEFAULT_OVERWRITE_LOG_INTERVAL = 1000

# Environment variables read by the config manager.
ENV_PREFIX = "CIRCBUF_"
