# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Centralized path definitions for dirstack.

Single source of truth for every path the CLI and the daemon touch.

Usage:
    from dirstack.paths import HostPaths

    config_file = HostPaths.config_file()
    socket = HostPaths.default_socket()
"""

import os
from pathlib import Path


class HostPaths:
    """Paths on the host machine where the dirstack CLI and daemon run."""

    # Well-known socket shared by every shell on the host
    DEFAULT_SOCKET = "/tmp/dirs.sock"

    @staticmethod
    def config_dir() -> Path:
        """~/.config/dirstack/ (honours XDG_CONFIG_HOME)"""
        xdg = os.getenv("XDG_CONFIG_HOME")
        base = Path(xdg) if xdg else Path.home() / ".config"
        return base / "dirstack"

    @staticmethod
    def config_file() -> Path:
        """~/.config/dirstack/config.yml, or $DIRSTACK_CONFIG"""
        env_file = os.getenv("DIRSTACK_CONFIG")
        if env_file:
            return Path(env_file).expanduser()
        return HostPaths.config_dir() / "config.yml"

    @staticmethod
    def state_dir() -> Path:
        """~/.local/state/dirstack/ (honours XDG_STATE_HOME)"""
        xdg = os.getenv("XDG_STATE_HOME")
        base = Path(xdg) if xdg else Path.home() / ".local" / "state"
        return base / "dirstack"

    @staticmethod
    def log_dir() -> Path:
        """~/.local/state/dirstack/logs/"""
        return HostPaths.state_dir() / "logs"

    @staticmethod
    def default_socket() -> Path:
        """Daemon socket: $DIRSTACK_SOCKET or /tmp/dirs.sock."""
        env_socket = os.getenv("DIRSTACK_SOCKET")
        if env_socket:
            return Path(env_socket)
        return Path(HostPaths.DEFAULT_SOCKET)
