"""Sampled logger for high-frequency log messages.

Provides utilities to reduce log spam by only logging at configurable intervals.
"""

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


def make_sampled_logger(
    log_format: str,
    log_interval: int = 1000,
    target_logger: logging.Logger | None = None,
    level: int = logging.DEBUG,
) -> Callable[..., None]:
    """Create a sampled logger that logs the first event and every Nth after.

    Each call to the returned function counts one event. The message is emitted
    for the first event and for every event whose number is a multiple of
    ``log_interval``. An interval of 0 disables logging entirely.

    Args:
        log_format: Format string for the log message. First placeholder receives
                    the running event count, remaining placeholders receive
                    format_args.
        log_interval: Log every Nth event (default 1000)
        target_logger: Logger instance to use (default: module logger)
        level: Log level to use (default: DEBUG)

    Returns:
        A function: (*format_args) -> None
    """
    event_counter = 0
    _logger = target_logger or logger

    def log_sampled(*format_args: object) -> None:
        nonlocal event_counter

        event_counter += 1
        if log_interval <= 0:
            return

        should_log = event_counter == 1 or event_counter % log_interval == 0
        if should_log and _logger.isEnabledFor(level):
            _logger.log(level, log_format, event_counter, *format_args)

    return log_sampled
