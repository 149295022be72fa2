# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Utility functions for CLI helpers."""

import functools
import os
import sys
from typing import Callable

import click
from rich.console import Console
from rich.panel import Panel

from dirstack.client import DaemonError, DaemonNotRunningError

# Stdout carries command results for the shell; diagnostics go to stderr
console = Console(stderr=True)

EXIT_FAILURE = 2


def show_error_panel(title: str, message: str, hint: str = None) -> None:
    """Display a formatted error panel.

    Args:
        title: Panel title (shown in red)
        message: Main error message
        hint: Optional hint text (shown with blue "Hint:" prefix)
    """
    content = message
    if hint:
        content += f"\n\n[blue]Hint:[/blue] {hint}"
    console.print(Panel(content, title=f"[red]{title}[/red]", border_style="red"))


def handle_errors(func: Callable) -> Callable:
    """Decorator that wraps CLI commands with standard error handling.

    Prints a panel and exits with EXIT_FAILURE for:
    - DaemonNotRunningError: with a hint on starting the daemon
    - DaemonError: any other failed exchange
    - Other exceptions: generic error panel
    ClickException and SystemExit pass through untouched.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (SystemExit, click.ClickException):
            raise
        except DaemonNotRunningError as exc:
            show_error_panel(
                "Daemon Not Running",
                str(exc),
                hint="start it with: dirstack service serve",
            )
            sys.exit(EXIT_FAILURE)
        except DaemonError as exc:
            show_error_panel("Daemon Error", str(exc))
            sys.exit(EXIT_FAILURE)
        except Exception as exc:
            show_error_panel("Error", str(exc))
            sys.exit(EXIT_FAILURE)

    return wrapper


def resolve_push_path(path: str) -> str:
    """Make a pushd argument absolute without resolving symlinks.

    Raises:
        click.BadParameter: The path contains whitespace, which the
            socket protocol cannot carry
    """
    absolute = os.path.abspath(os.path.expanduser(path))
    if any(ch.isspace() for ch in absolute):
        raise click.BadParameter(f"paths with whitespace are not supported: {absolute!r}")
    return absolute
