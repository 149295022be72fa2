# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Shared helpers for the dirstack CLI."""

from dirstack.cli.helpers.utils import (
    EXIT_FAILURE,
    console,
    handle_errors,
    resolve_push_path,
    show_error_panel,
)

__all__ = [
    "EXIT_FAILURE",
    "console",
    "handle_errors",
    "resolve_push_path",
    "show_error_panel",
]
