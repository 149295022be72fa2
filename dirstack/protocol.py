# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Wire format shared by dirstackd and its clients.

A request is one line of whitespace separated tokens:

    <code> <session>[ <path>]

where <code> is a single character (see dirstack.commands). There is no
terminator or length prefix: the client half-closes its write side once
the request is sent, and the daemon does the same after the response.
"""

from dataclasses import dataclass
from typing import Optional

from dirstack.commands import Command

PATH_SEPARATOR = "/"

# Upper bound on what the daemon will buffer for one request
MAX_REQUEST_SIZE = 64 * 1024


class ProtocolError(Exception):
    """Raised when a request is structurally invalid.

    The daemon closes the connection without writing a response.
    """


class UnknownCommandError(ProtocolError):
    """Raised when the command token is not one of the known codes."""


class EmptyRequestError(ProtocolError):
    """Raised when the peer closed without sending anything.

    Liveness probes (see dirstack.client.is_daemon_running) look like this.
    """


@dataclass(frozen=True)
class Request:
    """One decoded request. path is set only for Command.PUSH."""

    command: Command
    session_id: str
    path: Optional[str] = None


def _decode_tokens(raw: bytes) -> list[str]:
    try:
        return [token.decode("utf-8") for token in raw.split()]
    except UnicodeDecodeError as e:
        raise ProtocolError(f"request is not valid UTF-8: {e}") from e


def decode_request(raw: bytes) -> Request:
    """Parse a complete request buffer.

    Args:
        raw: Every byte received before the peer closed its write side

    Returns:
        The decoded Request

    Raises:
        ProtocolError: Wrong token count, multi-character command token,
            path token without a separator, or Push without a path
        UnknownCommandError: Command token is not a known code
    """
    if len(raw) > MAX_REQUEST_SIZE:
        raise ProtocolError(f"request too large: {len(raw)} bytes")

    tokens = _decode_tokens(raw)
    if not tokens:
        raise EmptyRequestError("empty request")
    if len(tokens) not in (2, 3):
        raise ProtocolError(f"expected 2 or 3 tokens, got {len(tokens)}")

    code, session_id = tokens[0], tokens[1]
    path = tokens[2] if len(tokens) == 3 else None

    if len(code) != 1:
        raise ProtocolError(f"command token must be one character, got {len(code)}")
    if path is not None and PATH_SEPARATOR not in path:
        raise ProtocolError(f"path token has no {PATH_SEPARATOR!r}: {path!r}")

    try:
        command = Command.from_wire(code)
    except ValueError as e:
        raise UnknownCommandError(str(e)) from None

    if command.takes_path:
        if path is None:
            raise ProtocolError(f"{command.cli_name} requires a path")
        return Request(command, session_id, path)

    # Pop/Peek/List ignore a trailing path token
    return Request(command, session_id)


def _has_whitespace(value: str) -> bool:
    return any(ch.isspace() for ch in value)


def encode_request(command: Command, session_id: str, path: Optional[str] = None) -> bytes:
    """Build the request line a client sends for one command.

    Raises:
        ValueError: If the session id or path cannot be carried by the
            whitespace separated format, or the path does not match the command
    """
    if not session_id or _has_whitespace(session_id):
        raise ValueError(f"session id must be non-empty without whitespace: {session_id!r}")

    if command.takes_path:
        if not path:
            raise ValueError(f"{command.cli_name} requires a path")
        if _has_whitespace(path):
            raise ValueError(f"path cannot contain whitespace: {path!r}")
        if PATH_SEPARATOR not in path:
            raise ValueError(f"path must contain {PATH_SEPARATOR!r}: {path!r}")
        return f"{command.wire_code} {session_id} {path}".encode("utf-8")

    if path:
        raise ValueError(f"{command.cli_name} does not accept a path")
    return f"{command.wire_code} {session_id}".encode("utf-8")
