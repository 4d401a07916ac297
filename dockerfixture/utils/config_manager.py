"""Configuration management utilities."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from ..core.constants import CONFIG_FILE_NAME, ENV_PREFIX
from ..models.config import FixtureSettings
from ..services.exceptions import ConfigError

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages fixture settings stored as JSON under a data directory."""

    def __init__(self, data_dir: Path, environ: Optional[Mapping[str, str]] = None):
        """Initialize config manager."""
        self.data_dir = data_dir
        self.config_file = data_dir / CONFIG_FILE_NAME
        self.environ = os.environ if environ is None else environ

    def _env_overrides(self) -> Dict[str, str]:
        overrides = {}
        for name in FixtureSettings.model_fields:
            value = self.environ.get(f"{ENV_PREFIX}{name.upper()}")
            if value is not None:
                overrides[name] = value
        return overrides

    def _read_file(self) -> Dict[str, Any]:
        if not self.config_file.exists():
            return {}
        try:
            data = json.loads(self.config_file.read_text())
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {self.config_file}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a JSON object in {self.config_file}")
        return data

    def load_settings(self) -> FixtureSettings:
        """Load settings from the config file, then apply environment overrides.

        Raises:
            ConfigError: If the file or an override is invalid
        """
        data = self._read_file()
        overrides = self._env_overrides()
        if overrides:
            logger.debug(f"Applying environment overrides: {sorted(overrides)}")
        data.update(overrides)
        try:
            return FixtureSettings(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid fixture settings: {e}") from e

    def save_settings(self, settings: FixtureSettings):
        """Save settings to the config file."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(settings.model_dump_json(indent=2))

    def update_setting(self, key: str, value: str) -> FixtureSettings:
        """Update a single setting in the config file.

        Environment overrides are not written back.

        Raises:
            ConfigError: If the key is unknown or the value invalid
        """
        if key not in FixtureSettings.model_fields:
            raise ConfigError(f"Unknown setting: {key}")
        data = self._read_file()
        data[key] = value
        try:
            settings = FixtureSettings(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid value for {key}: {e}") from e
        self.save_settings(settings)
        return settings
