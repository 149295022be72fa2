# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""dirstack CLI package."""

import click

from dirstack import __version__


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="dirstack")
@click.option(
    "--socket",
    "socket_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Daemon socket (default: $DIRSTACK_SOCKET, config, /tmp/dirs.sock)",
)
@click.pass_context
def cli(ctx, socket_path):
    """dirstack - pushd/popd/peekd/dirs shared across shells.

    Every stack belongs to a SESSION id chosen by the caller, so separate
    shell processes can work on the same stack through dirstackd.

    Examples:
        dirstack pushd ./src work    # push $PWD/src on stack "work"
        dirstack peekd work          # show the top entry
        dirstack popd work           # remove and print the top entry
        dirstack dirs -v work        # list the stack, newest first
    """
    ctx.ensure_object(dict)
    ctx.obj["socket_path"] = socket_path
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


def main():
    """Main entry point."""
    cli()


from dirstack.cli.commands import service  # noqa: E402,F401
from dirstack.cli.commands import stack  # noqa: E402,F401
