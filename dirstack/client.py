# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Client for talking to dirstackd over its Unix socket.

One connection carries exactly one request: the request line is written,
the write side is shut down to mark the end of the request, and the
response is read until the daemon shuts down its own write side.
"""

import socket
from pathlib import Path
from typing import Optional, Union

from dirstack.commands import Command
from dirstack.host_config import get_config
from dirstack.protocol import encode_request

# Seconds to wait for connect and for each recv
DEFAULT_TIMEOUT = 5.0
PROBE_TIMEOUT = 1.0

PathLike = Union[str, Path]


class DaemonError(Exception):
    """Error from daemon communication."""


class DaemonNotRunningError(DaemonError):
    """Daemon is not running."""


def _resolve_socket(socket_path: Optional[PathLike]) -> Path:
    return Path(socket_path) if socket_path else get_config().socket_path


def is_daemon_running(socket_path: Optional[PathLike] = None, timeout: float = PROBE_TIMEOUT) -> bool:
    """Check whether a daemon accepts connections on the socket.

    A busy daemon with a full backlog reads as not running here; dirstackd
    uses is_socket_stale before replacing a socket file.
    """
    path = _resolve_socket(socket_path)
    try:
        with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
            sock.settimeout(timeout)
            sock.connect(str(path))
        return True
    except OSError:
        return False


def is_socket_stale(socket_path: Optional[PathLike] = None, timeout: float = PROBE_TIMEOUT) -> bool:
    """Check whether the socket file is safe to replace.

    Only a refused connection or a missing file proves nobody is serving.
    A full accept backlog (EAGAIN) or a timeout means a live daemon is
    busy, so those count as not stale.
    """
    path = _resolve_socket(socket_path)
    try:
        with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
            sock.settimeout(timeout)
            sock.connect(str(path))
    except (ConnectionRefusedError, FileNotFoundError):
        return True
    except OSError:
        return False
    return False


def exchange(
    payload: bytes,
    socket_path: Optional[PathLike] = None,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
) -> bytes:
    """Send one raw request and return the raw response.

    Raises:
        DaemonNotRunningError: Socket missing or nobody listening
        DaemonError: Any other I/O failure during the exchange
    """
    path = _resolve_socket(socket_path)

    with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
        sock.settimeout(timeout)
        try:
            sock.connect(str(path))
        except (FileNotFoundError, ConnectionRefusedError) as e:
            raise DaemonNotRunningError(f"connect {path} failed: {e}") from e
        except OSError as e:
            raise DaemonError(f"connect {path} failed: {e}") from e

        try:
            sock.sendall(payload)
        except OSError as e:
            raise DaemonError(f"write request failed: {e}") from e
        try:
            sock.shutdown(socket.SHUT_WR)
        except OSError as e:
            raise DaemonError(f"shutdown(SHUT_WR) failed: {e}") from e

        chunks = []
        try:
            while True:
                chunk = sock.recv(4096)
                if not chunk:
                    break
                chunks.append(chunk)
        except OSError as e:
            raise DaemonError(f"read response failed: {e}") from e

    return b"".join(chunks)


def send_request(
    command: Command,
    session_id: str,
    path: Optional[str] = None,
    socket_path: Optional[PathLike] = None,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
) -> str:
    """Run one stack command against the daemon.

    Args:
        command: Command to run
        session_id: Session whose stack is used (no whitespace)
        path: Absolute path, required for Command.PUSH only
        socket_path: Override the configured socket
        timeout: Per-operation socket timeout in seconds

    Returns:
        The response text. An empty string means an empty or unknown stack,
        or that the daemon rejected the request.

    Raises:
        ValueError: session_id or path cannot be encoded
        DaemonNotRunningError: Daemon is not running
        DaemonError: Communication failed
    """
    payload = encode_request(command, session_id, path)
    raw = exchange(payload, socket_path=socket_path, timeout=timeout)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DaemonError(f"response is not valid UTF-8: {e}") from e


def pushd(session_id: str, path: str, **kwargs) -> str:
    return send_request(Command.PUSH, session_id, path, **kwargs)


def popd(session_id: str, **kwargs) -> str:
    return send_request(Command.POP, session_id, **kwargs)


def peekd(session_id: str, **kwargs) -> str:
    return send_request(Command.PEEK, session_id, **kwargs)


def dirs(session_id: str, **kwargs) -> list[str]:
    """Return the session's stack, most recent first."""
    return send_request(Command.LIST, session_id, **kwargs).split()
