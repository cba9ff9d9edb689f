"""Entry point for the circbuf-sim CLI."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from circbuf.circ_buffer import CircBuffer
from circbuf.config_manager.config import ConfigManager
from circbuf.exceptions import ConfigLoadError, ConfigValidationError
from circbuf.models import StorageBackend

logger = logging.getLogger(__name__)

VIEWS = ("drain", "iter", "consume")


def add_common_config_args(parser: argparse.ArgumentParser) -> None:
    """Register buffer configuration flags on an argparse parser.

    Args:
        parser: The argparse parser to attach configuration arguments to.

    Returns:
        None
    """
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML file with base buffer configuration.",
    )
    parser.add_argument(
        "--capacity",
        type=int,
        help="Number of elements the buffer holds.",
    )
    parser.add_argument(
        "--storage",
        choices=[backend.value for backend in StorageBackend],
        help="Backing store implementation.",
    )
    parser.add_argument(
        "--dtype",
        help="NumPy dtype of the backing array (numpy storage only).",
    )
    parser.add_argument(
        "--index-bits",
        "--index_bits",
        dest="index_bits",
        type=int,
        help="Width of the logical read/write counters in bits.",
    )
    parser.add_argument(
        "--overwrite-log-interval",
        "--overwrite_log_interval",
        dest="overwrite_log_interval",
        type=int,
        help="Log the first eviction and every Nth after it (0 disables).",
    )


def _cli_overrides(args: argparse.Namespace) -> dict[str, Any]:
    return {
        "capacity": args.capacity,
        "storage": args.storage,
        "dtype": args.dtype,
        "index_bits": args.index_bits,
        "overwrite_log_interval": args.overwrite_log_interval,
    }


def _select_view(buffer: CircBuffer[int], view: str) -> Iterator[int]:
    if view == "iter":
        return buffer.iter()
    if view == "drain":
        return buffer.drain()
    return iter(buffer)


def handle_sim(args: argparse.Namespace) -> int:
    """Push ``0..count-1`` into a configured buffer and print a view of it.

    Args:
        args: Parsed CLI arguments.

    Returns:
        Process exit code.
    """
    try:
        config = ConfigManager(args.config).resolve_effective_config(
            _cli_overrides(args)
        )
    except (ConfigLoadError, ConfigValidationError) as exc:
        print(f"Invalid buffer configuration:\n{exc}", file=sys.stderr)
        return 2

    buffer: CircBuffer[int] = CircBuffer.from_config(config)
    logger.info(
        "Pushing %d values into a %s buffer of capacity %d",
        args.count,
        config.storage.value,
        config.capacity,
    )
    buffer.extend(range(args.count))

    for value in _select_view(buffer, args.view):
        print(value)
    print(buffer.stats().model_dump_json())
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the circbuf-sim CLI."""
    parser = argparse.ArgumentParser(
        prog="circbuf-sim",
        description="Fill a circular buffer with 0..COUNT-1 and print a view of it.",
    )
    parser.add_argument("count", type=int, help="Number of values to push.")
    parser.add_argument(
        "--view",
        choices=VIEWS,
        default="drain",
        help="How to read the buffer back (default: drain).",
    )
    parser.add_argument(
        "--log-level",
        "--log_level",
        dest="log_level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level.",
    )
    add_common_config_args(parser)

    args = parser.parse_args(argv)
    if args.count < 0:
        parser.error("count must not be negative")

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    return handle_sim(args)


if __name__ == "__main__":
    sys.exit(main())
