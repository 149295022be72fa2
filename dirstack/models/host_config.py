# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT

"""Pydantic models for host configuration (~/.config/dirstack/config.yml)."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DaemonConfig(BaseModel):
    """Settings for the dirstackd accept loop.

    read_timeout: Seconds to wait for a client to half-close its side.
                  None blocks forever, so a silent client stalls the daemon.
    accept_poll_interval: How often a blocked accept wakes up to look at
                          the shutdown flag.
    """

    socket_path: str = "/tmp/dirs.sock"
    read_timeout: Optional[float] = None
    accept_poll_interval: float = Field(default=0.5, gt=0)
    listen_backlog: int = Field(default=16, ge=1)

    @field_validator("read_timeout")
    @classmethod
    def validate_read_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("read_timeout must be positive or null")
        return v


class LoggingConfig(BaseModel):
    """Log verbosity for CLI and daemon."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v


class HostConfigModel(BaseModel):
    """Root of config.yml."""

    model_config = ConfigDict(extra="ignore")

    daemon: DaemonConfig = Field(default_factory=DaemonConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
