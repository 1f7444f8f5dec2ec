"""
Configuration loading for react-meta-data projects.

Reads react-meta.json from the project root when present, applies
environment variable overrides and validates the result into a ScanConfig.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging

from core.models.config import ScanConfig, GlobalSettings
from .defaults import CONFIG_FILENAME, ENV_VAR_MAPPING, get_default_scan_config

logger = logging.getLogger(__name__)


class ConfigurationLoader:
    """Load and cache per-project scan configuration"""

    def __init__(self, global_settings: Optional[GlobalSettings] = None):
        self.global_settings = global_settings or GlobalSettings()
        self.config_cache: Dict[str, ScanConfig] = {}

    def get_config_file(self, project_path: Union[str, Path]) -> Path:
        return Path(project_path).resolve() / CONFIG_FILENAME

    def load_scan_config(self, project_path: Union[str, Path]) -> ScanConfig:
        """Load the project's configuration, falling back to defaults"""
        project_path = Path(project_path).resolve()

        cache_key = str(project_path)
        if cache_key in self.config_cache:
            return self.config_cache[cache_key]

        config_file = project_path / CONFIG_FILENAME

        if config_file.exists():
            config = self._load_existing_config(config_file)
        else:
            config = self._create_default_config()

        self.config_cache[cache_key] = config
        return config

    def _load_existing_config(self, config_file: Path) -> ScanConfig:
        """Load a configuration file with validation"""
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)

            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object, got {type(data).__name__}")

            config_data = get_default_scan_config()
            config_data.update(data)
            config_data = self._apply_env_overrides(config_data)

            logger.debug(f"Loaded configuration from {config_file}")
            return ScanConfig(**config_data)

        except (json.JSONDecodeError, ValueError) as e:
            logger.error(f"Failed to load config from {config_file}: {e}")
            return self._create_default_config()

    def _create_default_config(self) -> ScanConfig:
        config_data = self._apply_env_overrides(get_default_scan_config())
        try:
            return ScanConfig(**config_data)
        except ValueError as e:
            logger.error(f"Invalid environment configuration, using defaults: {e}")
            return ScanConfig(**get_default_scan_config())

    def _apply_env_overrides(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration"""
        for env_var, config_path in ENV_VAR_MAPPING.items():
            env_value = os.getenv(env_var)
            if env_value is not None:
                self._set_nested_value(config_data, config_path, env_value)

        return config_data

    def _set_nested_value(self, data: Dict[str, Any], path: str, value: str) -> None:
        """Set nested dictionary value using dot notation path"""
        keys = path.split('.')
        current = data

        for key in keys[:-1]:
            if key not in current:
                current[key] = {}
            current = current[key]

        current[keys[-1]] = self._convert_env_value(value)

    def _convert_env_value(self, value: str) -> Any:
        """Convert environment variable string to appropriate type"""
        if value.lower() in ('true', 'yes', 'on'):
            return True
        elif value.lower() in ('false', 'no', 'off'):
            return False

        try:
            if '.' in value:
                return float(value)
            else:
                return int(value)
        except ValueError:
            pass

        return value

    def save_scan_config(self, config: ScanConfig, project_path: Union[str, Path]) -> bool:
        """Save configuration to the project's react-meta.json"""
        config_file = self.get_config_file(project_path)
        try:
            with open(config_file, 'w', encoding='utf-8') as f:
                json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)

            logger.info(f"Saved configuration to {config_file}")
            self.config_cache[str(config_file.parent)] = config
            return True

        except OSError as e:
            logger.error(f"Failed to save config to {config_file}: {e}")
            return False

    def clear_cache(self) -> None:
        """Clear configuration cache"""
        self.config_cache.clear()
        logger.info("Configuration cache cleared")
