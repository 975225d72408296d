"""
Configuration management for the Redfish inventory collector.
Reads an optional YAML configuration file, applies environment overrides and
freezes the result into the settings object handed to the orchestrator.
"""

import copy
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

from src.i18n import _

SYSTEM_CONFIG_PATH = "/etc/redfish-inventory.yaml"
LOCAL_CONFIG_PATH = "./redfish-inventory.yaml"

DEFAULT_LOG_FORMAT = "[%(asctime)s UTC] %(levelname)s: %(message)s"
DEFAULT_LOG_LEVELS = "INFO|WARNING|ERROR|CRITICAL"

# Development defaults. Production deployments override these through the
# configuration file or the environment.
DEFAULTS: Dict[str, Any] = {
    "redfish": {
        "username": "root",
        "password": "password",
        "api_root": "redfish/v1",
        "systems_path": "Systems",
        "verify_ssl": False,
    },
    "inventory": {
        "host": "http://localhost:8080",
        "labels": {},
        "verify_ssl": True,
    },
    "logging": {
        "level": DEFAULT_LOG_LEVELS,
        "format": DEFAULT_LOG_FORMAT,
    },
    "i18n": {
        "language": "en",
    },
}

# Environment variable -> dot-notation key.
ENV_OVERRIDES = {
    "REDFISH_USERNAME": "redfish.username",
    "REDFISH_PASSWORD": "redfish.password",
    "REDFISH_API_ROOT": "redfish.api_root",
    "REDFISH_VERIFY_SSL": "redfish.verify_ssl",
    "INVENTORY_API_HOST": "inventory.host",
    "REDFISH_INVENTORY_LOG_LEVEL": "logging.level",
}

_BOOLEAN_KEYS = {"redfish.verify_ssl", "inventory.verify_ssl"}


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@dataclass(frozen=True)
class InventorySettings:
    """Immutable run configuration passed to the orchestrator."""

    redfish_username: str = "root"
    redfish_password: str = "password"
    redfish_api_root: str = "redfish/v1"
    systems_path: str = "Systems"
    redfish_verify_ssl: bool = False
    inventory_host: str = "http://localhost:8080"
    inventory_verify_ssl: bool = True
    inventory_labels: Dict[str, str] = field(default_factory=dict)
    log_levels: str = DEFAULT_LOG_LEVELS


class ConfigManager:
    """Manages configuration for the Redfish inventory collector."""

    def __init__(
        self,
        config_file: Optional[str] = None,
        environ: Optional[Dict[str, str]] = None,
    ):
        self.logger = logging.getLogger(__name__)
        self.environ = os.environ if environ is None else environ
        self.config_file = self._determine_config_path(config_file)
        self.config_data: Dict[str, Any] = {}
        self.load_config()

    def _determine_config_path(self, config_file: Optional[str]) -> Optional[str]:
        """
        Determine which configuration file to read.

        Priority order:
        1. Explicitly provided path
        2. REDFISH_INVENTORY_CONFIG environment variable
        3. /etc/redfish-inventory.yaml
        4. ./redfish-inventory.yaml

        Returns None when no file exists, in which case defaults apply.
        """
        if config_file:
            return config_file

        env_config = self.environ.get("REDFISH_INVENTORY_CONFIG")
        if env_config:
            return env_config

        for candidate in (SYSTEM_CONFIG_PATH, LOCAL_CONFIG_PATH):
            if os.path.exists(candidate):
                return candidate
        return None

    def load_config(self) -> None:
        """Load defaults, the YAML file if any, then environment overrides."""
        file_data: Dict[str, Any] = {}
        if self.config_file:
            if not os.path.exists(self.config_file):
                raise FileNotFoundError(
                    _("Configuration file '%s' not found") % self.config_file
                )
            try:
                with open(self.config_file, "r", encoding="utf-8") as file:
                    file_data = yaml.safe_load(file) or {}
            except yaml.YAMLError as e:
                raise ValueError(
                    _("Invalid YAML in configuration file: %s") % e
                ) from e
            except OSError as e:
                raise RuntimeError(
                    _("Failed to load configuration file: %s") % e
                ) from e
            if not isinstance(file_data, dict):
                raise ValueError(
                    _("Configuration file '%s' must contain a mapping")
                    % self.config_file
                )
            self.logger.debug("Loaded configuration from %s", self.config_file)

        self.config_data = _merge(copy.deepcopy(DEFAULTS), file_data)
        self._apply_env_overrides()

    def _apply_env_overrides(self) -> None:
        for env_name, key_path in ENV_OVERRIDES.items():
            value = self.environ.get(env_name)
            if value is None or value == "":
                continue
            self.set(key_path, value)
            self.logger.debug("Configuration %s overridden from %s", key_path, env_name)

    def set(self, key_path: str, value: Any) -> None:
        """Set a configuration value using dot notation."""
        keys = key_path.split(".")
        target = self.config_data
        for key in keys[:-1]:
            target = target.setdefault(key, {})
        target[keys[-1]] = value

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration key (e.g., 'redfish.username')
            default: Default value if key is not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split(".")
        value = self.config_data

        try:
            for key in keys:
                value = value[key]
        except (KeyError, TypeError):
            return default
        if key_path in _BOOLEAN_KEYS:
            return _parse_bool(value)
        return value

    def get_credentials(self):
        """Get the Redfish basic authentication pair."""
        return self.get("redfish.username"), self.get("redfish.password")

    def get_inventory_host(self) -> str:
        """Get the inventory API base address without a trailing slash."""
        return str(self.get("inventory.host")).rstrip("/")

    def get_inventory_labels(self) -> Dict[str, str]:
        """Get labels attached to every envelope."""
        labels = self.get("inventory.labels") or {}
        if not isinstance(labels, dict):
            raise ValueError(_("inventory.labels must be a mapping"))
        return {str(key): str(value) for key, value in labels.items()}

    def should_verify_redfish_ssl(self) -> bool:
        """Check if management controller certificates should be verified."""
        return self.get("redfish.verify_ssl", False)

    def should_verify_inventory_ssl(self) -> bool:
        """Check if inventory API certificates should be verified."""
        return self.get("inventory.verify_ssl", True)

    def get_log_levels(self) -> str:
        """Get pipe-separated logging levels configuration."""
        return self.get("logging.level", DEFAULT_LOG_LEVELS)

    def get_log_level(self) -> str:
        """Get the handler threshold, the first entry of the level list."""
        return self.get_log_levels().split("|")[0].strip().upper()

    def get_log_file(self) -> Optional[str]:
        """Get log file path if specified."""
        return self.get("logging.file")

    def get_log_format(self) -> str:
        """Get log format string."""
        return self.get("logging.format", DEFAULT_LOG_FORMAT)

    def get_language(self) -> str:
        """Get configured language/locale."""
        return self.get("i18n.language", "en")

    def to_settings(self) -> InventorySettings:
        """Freeze the current configuration into InventorySettings."""
        username, password = self.get_credentials()
        return InventorySettings(
            redfish_username=str(username),
            redfish_password=str(password),
            redfish_api_root=str(self.get("redfish.api_root")).strip("/"),
            systems_path=str(self.get("redfish.systems_path")),
            redfish_verify_ssl=self.should_verify_redfish_ssl(),
            inventory_host=self.get_inventory_host(),
            inventory_verify_ssl=self.should_verify_inventory_ssl(),
            inventory_labels=self.get_inventory_labels(),
            log_levels=self.get_log_levels(),
        )
