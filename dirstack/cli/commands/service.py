# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Service commands for dirstackd."""

import sys
from pathlib import Path

import click

from dirstack.cli import cli
from dirstack.cli.helpers import EXIT_FAILURE, console
from dirstack.client import is_daemon_running
from dirstack.host_config import get_config


def _socket_path(ctx: click.Context, socket_path: str = None) -> Path:
    chosen = socket_path or ctx.obj.get("socket_path")
    return Path(chosen) if chosen else get_config().socket_path


@cli.group()
def service():
    """Run and inspect the dirstackd daemon."""
    pass


@service.command("serve")
@click.argument("socket_path", required=False, type=click.Path(dir_okay=False))
@click.option("--debug", is_flag=True, help="Verbose logging to stderr")
@click.pass_context
def service_serve(ctx, socket_path, debug):
    """Run dirstackd in the foreground.

    Exits immediately with status 0 if another instance already answers
    on the socket. Stop it with Ctrl-C or SIGTERM.
    """
    from dirstack.dirstackd import run_dirstackd

    sys.exit(run_dirstackd(str(_socket_path(ctx, socket_path)), debug=debug))


@service.command("status")
@click.pass_context
def service_status(ctx):
    """Report whether dirstackd answers on its socket."""
    path = _socket_path(ctx)
    if is_daemon_running(path):
        console.print(f"[green]dirstackd is running[/green] on {path}")
        return
    if path.exists():
        console.print(f"[yellow]Stale socket at {path}, no daemon answering[/yellow]")
    else:
        console.print(f"[red]dirstackd is not running[/red] (no socket at {path})")
    sys.exit(EXIT_FAILURE)
