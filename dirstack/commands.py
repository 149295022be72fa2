# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""The four directory stack commands and their spellings.

Each command has a fixed one-byte wire code and a CLI name. The wire codes
are part of the socket protocol and must never be renumbered.
"""

from enum import Enum


class Command(Enum):
    """Directory stack operations understood by dirstackd."""

    PUSH = "\x01"
    POP = "\x02"
    PEEK = "\x03"
    LIST = "\x04"

    @property
    def wire_code(self) -> str:
        """Single character sent as the first request token."""
        return self.value

    @property
    def cli_name(self) -> str:
        return _CLI_NAMES[self]

    @property
    def takes_path(self) -> bool:
        return self is Command.PUSH

    @classmethod
    def from_wire(cls, char: str) -> "Command":
        """Map a wire character to a command.

        Raises:
            ValueError: If the character is not one of the four codes
        """
        try:
            return cls(char)
        except ValueError:
            raise ValueError(f"unknown command code: {char!r}") from None

    @classmethod
    def from_cli_name(cls, name: str) -> "Command":
        """Map a CLI spelling (pushd/popd/peekd/dirs) to a command.

        Raises:
            ValueError: If the name is not a known command
        """
        for command, cli_name in _CLI_NAMES.items():
            if cli_name == name:
                return command
        raise ValueError(f"unknown command: {name!r}")

    def __str__(self) -> str:
        return self.cli_name


_CLI_NAMES = {
    Command.PUSH: "pushd",
    Command.POP: "popd",
    Command.PEEK: "peekd",
    Command.LIST: "dirs",
}

CLI_NAMES = tuple(_CLI_NAMES.values())
