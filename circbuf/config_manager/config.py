"""Resolve buffer configuration from a YAML file, environment, and overrides."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from circbuf.config_manager.buffer_config import BufferConfig
from circbuf.config_manager.helpers import parse_optional_int
from circbuf.const import ENV_PREFIX
from circbuf.exceptions import ConfigLoadError, ConfigValidationError

logger = logging.getLogger(__name__)

_ENV_MAP: dict[str, str] = {
    "capacity": f"{ENV_PREFIX}CAPACITY",
    "storage": f"{ENV_PREFIX}STORAGE",
    "dtype": f"{ENV_PREFIX}DTYPE",
    "index_bits": f"{ENV_PREFIX}INDEX_BITS",
    "overwrite_log_interval": f"{ENV_PREFIX}OVERWRITE_LOG_INTERVAL",
}


class ConfigManager:
    """Build effective buffer configuration from file, env, and CLI overrides."""

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialise ConfigManager.

        Args:
            config_path: Optional YAML file holding base configuration values.
        """
        self.config_path = config_path

    def _read_file(self) -> dict[str, Any]:
        """Read base configuration values from the YAML file.

        Returns:
            A dictionary of configuration field names to values; empty when no
            file is configured.

        Raises:
            ConfigLoadError: If the file cannot be read or parsed, or does not
                hold a mapping.
        """
        if self.config_path is None:
            return {}

        try:
            with Path(self.config_path).open("r", encoding="utf-8") as config_file:
                data = yaml.safe_load(config_file) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigLoadError(
                f"Could not load buffer config {str(self.config_path)!r}: {exc}"
            ) from exc

        if not isinstance(data, dict):
            raise ConfigLoadError(
                f"Buffer config {str(self.config_path)!r} must be a mapping, "
                f"got {type(data).__name__}"
            )
        return data

    def _read_env_overrides(self) -> dict[str, Any]:
        """Read configuration overrides from environment variables.

        Values that cannot be parsed are ignored.

        Returns:
            A dictionary of configuration field names to override values.
        """
        overrides: dict[str, Any] = {}

        for field_name, env_var_name in _ENV_MAP.items():
            env_value = os.getenv(env_var_name)
            if env_value is None:
                continue

            if field_name in {"capacity", "overwrite_log_interval"}:
                try:
                    overrides[field_name] = int(env_value)
                except ValueError:
                    logger.warning("Ignoring %s=%r: not an int", env_var_name, env_value)
                    continue
            elif field_name == "index_bits":
                try:
                    overrides[field_name] = parse_optional_int(env_value)
                except ValueError:
                    logger.warning("Ignoring %s=%r: not an int", env_var_name, env_value)
                    continue
            else:
                overrides[field_name] = env_value.strip().lower()

        return overrides

    def resolve_effective_config(
        self, cli_config: dict[str, Any] | None = None
    ) -> BufferConfig:
        """Resolve the effective buffer configuration.

        Later sources win: defaults, then the YAML file, then environment
        variables, then ``cli_config``. ``None`` values in ``cli_config`` are
        ignored.

        Args:
            cli_config: Optional CLI-provided configuration overrides.

        Returns:
            The resolved ``BufferConfig``.

        Raises:
            ConfigLoadError: If the YAML file cannot be loaded.
            ConfigValidationError: If the merged values are invalid.
        """
        merged: dict[str, Any] = {}
        merged.update(self._read_file())
        merged.update(self._read_env_overrides())
        if cli_config is not None:
            merged.update(
                {name: value for name, value in cli_config.items() if value is not None}
            )

        try:
            return BufferConfig.model_validate(merged)
        except ValidationError as exc:
            errors = [
                f"{'.'.join(str(part) for part in error['loc']) or 'config'}: "
                f"{error['msg']}"
                for error in exc.errors()
            ]
            raise ConfigValidationError(errors) from exc
