"""Centralized host-side configuration for dirstack."""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from dirstack.models.host_config import HostConfigModel
from dirstack.paths import HostPaths

logger = logging.getLogger(__name__)


class HostConfig:
    """Manages host-side configuration from ~/.config/dirstack/config.yml."""

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or HostPaths.config_file()
        self._model: Optional[HostConfigModel] = None
        self._config = self._load()

    def _load(self) -> dict:
        """Load configuration from file."""
        if not self.config_path.exists():
            self._model = HostConfigModel()
            return self._model.model_dump()

        try:
            with open(self.config_path) as f:
                raw_config = yaml.safe_load(f) or {}

            if not isinstance(raw_config, dict):
                raise ValueError("top level of config must be a mapping")

            try:
                self._model = HostConfigModel.model_validate(raw_config)
                return self._model.model_dump()
            except ValidationError as e:
                logger.warning(f"Config validation errors: {e}")
                # Fall back to defaults merged with raw config
                self._model = None
                defaults = HostConfigModel().model_dump()
                return self._deep_merge(defaults, raw_config)

        except (OSError, yaml.YAMLError, ValueError) as e:
            logger.warning(f"Failed to load config from {self.config_path}: {e}")
            self._model = HostConfigModel()
            return self._model.model_dump()

    def _deep_merge(self, base: dict, override: dict) -> dict:
        """Deep merge override into base."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    @property
    def socket_path(self) -> Path:
        """Daemon socket path.

        Priority:
        1. DIRSTACK_SOCKET environment variable
        2. daemon.socket_path in config.yml
        3. /tmp/dirs.sock
        """
        env_socket = os.getenv("DIRSTACK_SOCKET")
        if env_socket:
            return Path(env_socket)
        configured = self.get("daemon", "socket_path")
        if configured:
            return Path(configured).expanduser()
        return HostPaths.default_socket()

    @property
    def read_timeout(self) -> Optional[float]:
        value = self.get("daemon", "read_timeout")
        if isinstance(value, (int, float)) and value > 0:
            return float(value)
        return None

    @property
    def accept_poll_interval(self) -> float:
        value = self.get("daemon", "accept_poll_interval", default=0.5)
        if isinstance(value, (int, float)) and value > 0:
            return float(value)
        return 0.5

    @property
    def listen_backlog(self) -> int:
        value = self.get("daemon", "listen_backlog", default=16)
        if isinstance(value, int) and value > 0:
            return value
        return 16

    @property
    def log_level(self) -> str:
        return str(self.get("logging", "level", default="INFO")).upper()

    def get(self, *keys, default=None) -> Any:
        """Get nested config value.

        Example: config.get("daemon", "read_timeout")
        """
        if self._model:
            value = self._model
            for key in keys:
                if hasattr(value, key):
                    value = getattr(value, key)
                elif isinstance(value, dict) and key in value:
                    value = value[key]
                else:
                    return default
            if hasattr(value, "model_dump"):
                return value.model_dump()
            return value

        value = self._config
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value


# Singleton instance
_config: Optional[HostConfig] = None


def get_config() -> HostConfig:
    """Get the global host configuration."""
    global _config
    if _config is None:
        _config = HostConfig()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() rereads it."""
    global _config
    _config = None
