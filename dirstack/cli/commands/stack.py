# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Directory stack commands: pushd, popd, peekd, dirs."""

import click

from dirstack.cli import cli
from dirstack.cli.helpers import handle_errors, resolve_push_path
from dirstack.client import send_request
from dirstack.commands import Command


def _session_argument(func):
    return click.argument("session", envvar="DIRSTACK_SESSION")(func)


def _run(ctx: click.Context, command: Command, session: str, path: str = None) -> str:
    try:
        return send_request(command, session, path, socket_path=ctx.obj.get("socket_path"))
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


@cli.command("pushd")
@click.argument("path", type=click.Path(exists=True))
@_session_argument
@click.pass_context
@handle_errors
def pushd(ctx, path, session):
    """Push PATH onto the SESSION stack and print it."""
    click.echo(_run(ctx, Command.PUSH, session, resolve_push_path(path)))


@cli.command("popd")
@_session_argument
@click.pass_context
@handle_errors
def popd(ctx, session):
    """Remove and print the top of the SESSION stack."""
    click.echo(_run(ctx, Command.POP, session))


@cli.command("peekd")
@_session_argument
@click.pass_context
@handle_errors
def peekd(ctx, session):
    """Print the top of the SESSION stack without removing it."""
    click.echo(_run(ctx, Command.PEEK, session))


@cli.command("dirs")
@click.option("-v", "verbose", is_flag=True, help="One entry per line with its index")
@_session_argument
@click.pass_context
@handle_errors
def dirs(ctx, verbose, session):
    """Print the SESSION stack, most recent entry first."""
    result = _run(ctx, Command.LIST, session)
    if not verbose:
        click.echo(result)
        return
    for index, entry in enumerate(result.split()):
        click.echo(f"{index:2d}  {entry}")
