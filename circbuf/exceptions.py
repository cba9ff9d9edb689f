"""Exception classes for circbuf."""


class CircBufferError(Exception):
    """Base error for circbuf."""


class InvalidCapacityError(CircBufferError, ValueError):
    """Raised when a capacity, index width or store size is unusable."""


class StoreFullError(CircBufferError):
    """Raised when appending to a store that is already physically full."""


class BufferMutatedError(CircBufferError, RuntimeError):
    """Raised when a buffer changes while a borrowing iterator walks it."""


class ConfigLoadError(CircBufferError):
    """Raised when a buffer config file cannot be loaded."""


class ConfigValidationError(CircBufferError):
    """Raised when buffer config fails validation."""

    def __init__(self, errors: list[str]):
        """Initialize ConfigValidationError with list of error messages.

        Args:
            errors: List of error messages from validation.
        """
        message = "\n".join(errors)
        super().__init__(message)
        self.errors = errors
