"""Pydantic models for dirstack configuration."""

from dirstack.models.host_config import (
    DaemonConfig,
    HostConfigModel,
    LoggingConfig,
)

__all__ = [
    "DaemonConfig",
    "HostConfigModel",
    "LoggingConfig",
]
