"""
Configuration Manager

Handles hierarchical configuration loading and validation:
explicit overrides → environment variables → config files → defaults.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import ValidationError as PydanticValidationError

from clusterevents.config.models import EventFilterConfig
from clusterevents.exceptions import ConfigurationError, ErrorCode

logger = logging.getLogger(__name__)

ENV_PREFIX = "CLUSTEREVENTS_"

# environment variable suffix -> config field
ENV_FIELDS = {
    "WARNINGS": "warnings_only",
    "NAMESPACES": "namespaces",
    "NAMES": "names",
    "UIDS": "uids",
    "REASONS": "reasons",
    "COMPONENTS": "components",
    "KINDS": "kinds",
    "KIND_MATCH_MODE": "kind_match_mode",
    "AROUND": "around",
    "AROUND_DURATION": "around_duration",
}


class ConfigManager:
    """
    Loads the event filter configuration from all sources.

    Sources in order of precedence:
    1. Explicit overrides (highest priority)
    2. Environment variables
    3. Configuration file
    4. Default values (lowest priority)
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Optional path to configuration file
        """
        self.config_file = Path(config_file) if config_file else None
        self._config: Optional[EventFilterConfig] = None
        self._config_paths = self._get_default_config_paths()

    def _get_default_config_paths(self) -> List[Path]:
        """Get default configuration file search paths."""
        search_paths = [
            Path.cwd() / "clusterevents.yaml",
            Path.cwd() / "clusterevents.yml",
            Path.cwd() / ".clusterevents.yaml",
            Path.home() / ".config" / "clusterevents" / "config.yaml",
        ]

        xdg_config = os.environ.get('XDG_CONFIG_HOME')
        if xdg_config:
            search_paths.append(Path(xdg_config) / "clusterevents" / "config.yaml")

        return search_paths

    @property
    def config(self) -> EventFilterConfig:
        """The last loaded configuration, loading defaults on first use."""
        if self._config is None:
            return self.load_config()
        return self._config

    def load_config(
        self,
        overrides: Optional[Dict[str, Any]] = None,
        env_prefix: str = ENV_PREFIX
    ) -> EventFilterConfig:
        """
        Load and validate configuration from all sources.

        Args:
            overrides: Values that win over every other source; None values
                are ignored
            env_prefix: Prefix for environment variables

        Returns:
            Validated EventFilterConfig instance

        Raises:
            ConfigurationError: If configuration is invalid
        """
        config_data: Dict[str, Any] = {}

        file_config = self._load_config_file()
        if file_config:
            config_data.update(file_config)

        config_data.update(self._load_env_config(env_prefix))

        if overrides:
            config_data.update({key: value for key, value in overrides.items() if value is not None})

        try:
            self._config = EventFilterConfig(**config_data)
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"Configuration validation failed: {e}",
                error_code=ErrorCode.CONFIG_SCHEMA_VALIDATION,
                cause=e,
            )

        logger.debug(f"Loaded configuration: {self._config.model_dump(exclude_defaults=True)}")
        return self._config

    def _load_config_file(self) -> Optional[Dict[str, Any]]:
        """Load configuration from file."""
        config_file = self.config_file

        if config_file is not None and not config_file.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_file}",
                error_code=ErrorCode.CONFIG_FILE_NOT_FOUND,
                config_key="config_file",
                config_value=str(config_file),
            )

        if config_file is None:
            for path in self._config_paths:
                if path.exists() and path.is_file():
                    config_file = path
                    break

        if config_file is None:
            return None

        logger.debug(f"Reading configuration from {config_file}")
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                if config_file.suffix.lower() == '.json':
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f) or {}
        except (IOError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to load config file {config_file}: {e}", cause=e)

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file {config_file} must contain a mapping",
                error_code=ErrorCode.CONFIG_INVALID_FORMAT,
            )

        # allow the filter settings to live under a top-level "filters" key
        if isinstance(data.get('filters'), dict):
            data = data['filters']
        return data

    def _load_env_config(self, prefix: str) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        env_config: Dict[str, Any] = {}
        for suffix, field_name in ENV_FIELDS.items():
            value = os.environ.get(f"{prefix}{suffix}")
            if value is None:
                continue
            if field_name == "warnings_only":
                env_config[field_name] = self._parse_bool(value)
            else:
                env_config[field_name] = value
        return env_config

    @staticmethod
    def _parse_bool(value: str) -> bool:
        """Parse boolean value from string."""
        return value.strip().lower() in {'true', '1', 'yes', 'on'}
