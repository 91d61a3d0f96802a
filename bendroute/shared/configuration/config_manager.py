"""Configuration manager for loading, saving, and managing routing settings."""
import json
import logging
import shutil
import datetime
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Optional, Dict, Any, Union

from .settings import ApplicationSettings
from ..utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)


class ConfigManager:
    """Centralized configuration manager for BendRoute."""

    DEFAULT_CONFIG_PATHS = [
        "bendroute.json",
        "config/bendroute.json",
        "~/.bendroute/config.json",
        "~/.config/bendroute/config.json"
    ]

    def __init__(self, config_path: Optional[Union[str, Path]] = None,
                 create_default: bool = True):
        """Initialize configuration manager.

        Args:
            config_path: Optional path to configuration file.
                        If None, will search default locations.
            create_default: Write a default file when none exists yet.
        """
        self.config_path: Optional[Path] = None
        self.settings: ApplicationSettings = ApplicationSettings()

        if config_path:
            self.config_path = Path(config_path).expanduser().resolve()
        else:
            self.config_path = self._find_config_file()

        if self.config_path and self.config_path.exists():
            self.load()
        elif create_default:
            self._create_default_config()

    def _find_config_file(self) -> Optional[Path]:
        """Find existing configuration file in default locations."""
        for path_str in self.DEFAULT_CONFIG_PATHS:
            path = Path(path_str).expanduser().resolve()
            if path.exists():
                logger.info(f"Found existing config file: {path}")
                return path

        default_path = Path(self.DEFAULT_CONFIG_PATHS[0]).expanduser().resolve()
        logger.info(f"No existing config found, will create: {default_path}")
        return default_path

    def _create_default_config(self):
        """Create default configuration file."""
        if self.config_path and self.save():
            logger.info(f"Created default configuration file: {self.config_path}")

    def load(self, config_path: Optional[Union[str, Path]] = None) -> bool:
        """Load configuration from file.

        Args:
            config_path: Optional path to load from. Uses instance path if None.

        Returns:
            True if loaded successfully, False otherwise.
        """
        path = Path(config_path).expanduser().resolve() if config_path else self.config_path

        if not path or not path.exists():
            logger.warning(f"Configuration file not found: {path}")
            return False

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config_data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load configuration from {path}: {e}")
            return False

        self._update_settings_from_dict(config_data)

        errors = self.validate()
        if any(error_list for error_list in errors.values()):
            logger.warning("Configuration validation errors found:")
            for category, error_list in errors.items():
                for error in error_list:
                    logger.warning(f"  {category}: {error}")

        logger.info(f"Configuration loaded from: {path}")
        return True

    def save(self, config_path: Optional[Union[str, Path]] = None) -> bool:
        """Save configuration to file.

        Args:
            config_path: Optional path to save to. Uses instance path if None.

        Returns:
            True if saved successfully, False otherwise.
        """
        path = Path(config_path).expanduser().resolve() if config_path else self.config_path

        if not path:
            logger.error("No configuration path specified")
            return False

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(asdict(self.settings), f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error(f"Failed to save configuration to {path}: {e}")
            return False

        logger.info(f"Configuration saved to: {path}")
        return True

    def _update_settings_from_dict(self, config_data: Dict[str, Any]):
        """Update settings from dictionary data."""
        def update_dataclass(obj, data):
            if not isinstance(data, dict):
                return

            for key, value in data.items():
                if not hasattr(obj, key):
                    logger.warning(f"Ignoring unknown setting: {key}")
                    continue
                attr = getattr(obj, key)
                if is_dataclass(attr):
                    update_dataclass(attr, value)
                else:
                    setattr(obj, key, value)

        update_dataclass(self.settings, config_data)

    def get_settings(self) -> ApplicationSettings:
        """Get current application settings."""
        return self.settings

    def update_routing_settings(self, **kwargs):
        """Update routing settings."""
        self._update_category(self.settings.routing, "routing", kwargs)

    def update_tolerance_settings(self, **kwargs):
        """Update tolerance settings."""
        self._update_category(self.settings.tolerance, "tolerance", kwargs)

    def update_logging_settings(self, **kwargs):
        """Update logging settings."""
        self._update_category(self.settings.logging, "logging", kwargs)

    def apply_logging_settings(self) -> bool:
        """Configure the package loggers from the current logging settings.

        Returns:
            False when the logging settings are invalid and were not applied
        """
        errors = self.settings.logging.validate()
        if errors:
            logger.error(f"Invalid logging settings: {errors}")
            return False
        setup_logging(self.settings.logging)
        return True

    @staticmethod
    def _update_category(target, category: str, values: Dict[str, Any]):
        for key, value in values.items():
            if hasattr(target, key):
                setattr(target, key, value)
            else:
                logger.warning(f"Unknown {category} setting: {key}")

    def validate(self) -> Dict[str, Any]:
        """Validate current settings."""
        return self.settings.validate()

    def reset_to_defaults(self):
        """Reset all settings to defaults."""
        self.settings = ApplicationSettings()
        logger.info("Settings reset to defaults")

    def reset_category_to_defaults(self, category: str):
        """Reset a specific category to defaults."""
        defaults = ApplicationSettings()
        if not hasattr(defaults, category) or not is_dataclass(getattr(defaults, category)):
            logger.warning(f"Unknown settings category: {category}")
            return

        setattr(self.settings, category, getattr(defaults, category))
        logger.info(f"Reset {category} settings to defaults")

    def backup_config(self, suffix: str = None) -> Optional[Path]:
        """Create a backup of current configuration.

        Args:
            suffix: Optional suffix for backup filename

        Returns:
            Path to backup file if successful, None otherwise
        """
        if not self.config_path or not self.config_path.exists():
            logger.error("No configuration file to backup")
            return None

        timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
        suffix_str = f"_{suffix}" if suffix else ""
        backup_name = f"{self.config_path.stem}_backup_{timestamp}{suffix_str}.json"
        backup_path = self.config_path.parent / backup_name

        try:
            shutil.copy2(self.config_path, backup_path)
        except OSError as e:
            logger.error(f"Failed to backup configuration: {e}")
            return None

        logger.info(f"Configuration backed up to: {backup_path}")
        return backup_path

    def get_config_info(self) -> Dict[str, Any]:
        """Get information about current configuration."""
        return {
            "config_path": str(self.config_path) if self.config_path else None,
            "config_exists": self.config_path.exists() if self.config_path else False,
            "version": self.settings.version,
            "config_version": self.settings.config_version,
            "validation_errors": self.validate()
        }


# Global configuration manager instance
_config_manager: Optional[ConfigManager] = None


def get_config() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def initialize_config(config_path: Optional[Union[str, Path]] = None,
                      configure_logging: bool = False) -> ConfigManager:
    """Initialize the global configuration manager with optional custom path."""
    global _config_manager
    _config_manager = ConfigManager(config_path)
    if configure_logging:
        _config_manager.apply_logging_settings()
    return _config_manager
