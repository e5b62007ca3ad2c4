"""Configuration management for the task tracker."""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TASK_TRACKER_CONFIG"
DEFAULT_DATA_DIR = "~/.task-tracker"
PATH_FIELDS = ("data_dir", "data_file")


@dataclass
class ConfigModel:
    """Global configuration model for the task tracker."""

    # File paths
    data_dir: str = DEFAULT_DATA_DIR
    data_file: str = "tasks.md"

    # Behavior settings
    autosave: bool = True

    # UI
    show_banner: bool = True
    no_color: bool = False
    prompt: str = "> "

    # Diagnostics
    log_level: str = "WARNING"

    def __post_init__(self):
        """Post-initialization setup.

        Empty values fall back to their defaults; values of the wrong type
        raise ValueError.
        """
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None or (f.name in PATH_FIELDS and value == ""):
                logger.warning("No value for %r, using the default", f.name)
                setattr(self, f.name, f.default)
            elif not isinstance(value, type(f.default)):
                raise ValueError(
                    f"{f.name} must be {type(f.default).__name__}, got {value!r}"
                )
        self.data_dir = os.path.expanduser(self.data_dir)
        self.log_level = str(self.log_level).upper()

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        return yaml.dump(data, default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConfigModel":
        """Deserialize config from YAML, ignoring unknown keys."""
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ValueError("Configuration must be a mapping")

        known = {f.name for f in fields(cls)}
        for key in sorted(set(data) - known):
            logger.warning("Ignoring unknown configuration key %r", key)
        return cls(**{key: value for key, value in data.items() if key in known})

    def get_data_path(self) -> Path:
        """Get the task data file path."""
        return Path(self.data_dir) / self.data_file

    def get_config_path(self) -> Path:
        """Get the config file path."""
        return Path(self.data_dir) / "config.yaml"


def default_config_path() -> Path:
    """Config path from the environment, or the default location."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path(os.path.expanduser(DEFAULT_DATA_DIR)) / "config.yaml"


class Config:
    """Configuration manager for the task tracker."""

    _instance: Optional[ConfigModel] = None

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> ConfigModel:
        """Load configuration from file or fall back to defaults."""
        if cls._instance is not None and config_path is None:
            return cls._instance

        config = ConfigModel()

        if config_path is None:
            config_path = default_config_path()

        if config_path.exists():
            try:
                with open(config_path, "r") as f:
                    yaml_content = f.read()
                config = ConfigModel.from_yaml(yaml_content)
                logger.info("Loaded configuration from %s", config_path)
            except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
                logger.warning("Failed to load config from %s: %s", config_path, e)
                logger.warning("Using default configuration.")
        else:
            logger.info("No configuration at %s, using defaults", config_path)

        cls._instance = config
        return config

    @classmethod
    def save(cls, config: ConfigModel, config_path: Optional[Path] = None) -> bool:
        """Save configuration to file."""
        if config_path is None:
            config_path = config.get_config_path()

        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(config_path, "w") as f:
                f.write(config.to_yaml())
        except OSError as e:
            logger.error("Failed to save config to %s: %s", config_path, e)
            return False

        logger.info("Configuration saved to %s", config_path)
        return True

    @classmethod
    def get(cls) -> ConfigModel:
        """Get the current configuration instance."""
        if cls._instance is None:
            cls._instance = cls.load()
        return cls._instance


def get_config() -> ConfigModel:
    """Get the current configuration."""
    return Config.get()


def load_config(config_path: Optional[Path] = None) -> ConfigModel:
    """Load configuration from file."""
    return Config.load(config_path)


def save_config(config: ConfigModel, config_path: Optional[Path] = None) -> bool:
    """Save configuration to file."""
    return Config.save(config, config_path)
