"""Configuration loading service"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

import yaml

from ..api.exceptions import ConfigError
from ..constants import DEFAULT_CONFIG_PATH, DEFAULT_INSTALL_PATH
from ..models.config import AppConfig, FileEntry

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


class ConfigService:
    """Loads and validates the app config document"""

    def __init__(self, config_path: Union[str, Path, None] = None):
        """Initialize config service

        Args:
            config_path: Path to the config document (defaults to .qp/config.json)
        """
        self.config_path = Path(config_path or DEFAULT_CONFIG_PATH)
        self._config: Optional[AppConfig] = None

    @property
    def config(self) -> AppConfig:
        """Get current configuration (lazy load)"""
        if self._config is None:
            self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from file

        The document is JSON. Files ending in .yaml or .yml are read
        as YAML.

        Returns:
            Validated configuration

        Raises:
            ConfigError: If the file is missing, malformed or invalid
        """
        if not self.config_path.exists():
            raise ConfigError(f"Configuration file not found: {self.config_path}")

        try:
            content = self.config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Failed to read config file {self.config_path}: {e}")

        try:
            if self.config_path.suffix in YAML_SUFFIXES:
                data = yaml.safe_load(content)
            else:
                data = json.loads(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to parse config {self.config_path}: {e}")

        if not isinstance(data, dict):
            raise ConfigError(f"Config {self.config_path} must contain a mapping")

        config = AppConfig.from_dict(data)

        validation = config.validate()
        for warning in validation.warnings:
            logger.warning("%s: %s", self.config_path, warning)
        if not validation.is_valid:
            raise ConfigError(
                f"Invalid config {self.config_path}: " + "; ".join(validation.errors),
                errors=validation.errors,
            )

        logger.info("Loaded config for %s from %s", config.app_name, self.config_path)
        self._config = config
        return config

    def save_config(self, config: AppConfig, overwrite: bool = False) -> Path:
        """Write a config document as JSON

        Args:
            config: Configuration to save
            overwrite: Replace an existing file

        Returns:
            Path written

        Raises:
            ConfigError: If the file exists and overwrite is False
        """
        if self.config_path.exists() and not overwrite:
            raise ConfigError(f"Configuration file already exists: {self.config_path}")

        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(json.dumps(config.to_dict(), indent=2) + "\n", encoding="utf-8")
        self._config = config
        return self.config_path


def load_config(config_path: Union[str, Path, None] = None) -> AppConfig:
    """Load and validate a config document"""
    return ConfigService(config_path).load_config()


def default_config(app_name: str) -> AppConfig:
    """Starter config for a new project"""
    return AppConfig(
        app_name=app_name,
        build_files=("src/**",),
        install_files=(FileEntry(file=f"bin/{app_name}"),),
        exec_start=f"{DEFAULT_INSTALL_PATH}/{app_name}/bin/{app_name}",
        description=f"{app_name} application packaged by QuickPackage",
    )
