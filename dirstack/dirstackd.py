# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""dirstack host daemon (dirstackd).

Keeps one directory stack per session in memory and serves pushd, popd,
peekd and dirs requests over a well-known Unix socket.

- One request per connection, framed by half-close in both directions
- Connections are handled one at a time, start to finish
- At most one live instance per socket path
- SIGINT, SIGTERM and SIGQUIT request a graceful shutdown that removes
  the socket file
"""

from __future__ import annotations

import errno
import os
import signal
import socket
import sys
import threading
from pathlib import Path
from typing import Optional

from dirstack.client import is_socket_stale
from dirstack.host_config import get_config
from dirstack.dispatch import dispatch
from dirstack.protocol import (
    MAX_REQUEST_SIZE,
    EmptyRequestError,
    ProtocolError,
    Request,
    decode_request,
)
from dirstack.store import SessionStore
from dirstack.utils.logging import configure_logging, get_daemon_logger, log_startup_info

logger = get_daemon_logger("dirstackd")

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM, signal.SIGQUIT)
RECV_CHUNK_SIZE = 4096


class ConnectionIOError(Exception):
    """Read, write or half-close on a client connection failed."""


class StartupError(Exception):
    """The daemon could not bind its socket or install signal handlers."""


class SingletonConflict(Exception):
    """Another live daemon already owns the socket path. Not an error."""


def _read_request(conn: socket.socket) -> bytes:
    """Read until the peer shuts down its write side."""
    chunks = []
    total = 0
    while True:
        chunk = conn.recv(RECV_CHUNK_SIZE)
        if not chunk:
            break
        total += len(chunk)
        if total > MAX_REQUEST_SIZE:
            raise ProtocolError(f"request exceeds {MAX_REQUEST_SIZE} bytes")
        chunks.append(chunk)
    return b"".join(chunks)


def handle_connection(
    store: SessionStore,
    conn: socket.socket,
    read_timeout: Optional[float] = None,
) -> Request:
    """Serve exactly one request on an accepted connection.

    The connection is always closed on return. If decoding fails nothing is
    written back, so the client reads an empty response.

    Args:
        store: Session stacks to operate on
        conn: Accepted connection
        read_timeout: Seconds to wait for the client's half-close, None to block

    Returns:
        The request that was served

    Raises:
        ProtocolError: The request was malformed (including UnknownCommandError)
        ConnectionIOError: The socket failed or timed out
    """
    try:
        conn.settimeout(read_timeout)
        try:
            raw = _read_request(conn)
        except socket.timeout as e:
            raise ConnectionIOError(f"read timed out after {read_timeout}s") from e
        except OSError as e:
            raise ConnectionIOError(f"read request failed: {e}") from e

        request = decode_request(raw)
        response = dispatch(store, request)

        try:
            conn.sendall(response.encode("utf-8"))
        except OSError as e:
            raise ConnectionIOError(f"write response failed: {e}") from e
        try:
            conn.shutdown(socket.SHUT_WR)
        except OSError as e:
            raise ConnectionIOError(f"shutdown(SHUT_WR) failed: {e}") from e

        return request
    finally:
        conn.close()


class dirstackd:
    """Single-threaded directory stack server.

    Lifecycle: start() performs the singleton check and binds the socket,
    serve_forever() runs the accept loop until request_shutdown() is called
    (directly or from a signal handler), then removes the socket file.
    """

    def __init__(
        self,
        socket_path: Path,
        read_timeout: Optional[float] = None,
        accept_poll_interval: float = 0.5,
        listen_backlog: int = 16,
        store: Optional[SessionStore] = None,
    ) -> None:
        self.socket_path = Path(socket_path)
        self.read_timeout = read_timeout
        self.accept_poll_interval = accept_poll_interval
        self.listen_backlog = listen_backlog
        self.store = store if store is not None else SessionStore()
        self.requests_served = 0
        self.requests_rejected = 0
        self._shutdown = threading.Event()
        self._server: Optional[socket.socket] = None
        # Inode of the socket file we created; cleanup leaves other files alone
        self._socket_inode: Optional[int] = None

    @property
    def shutdown_requested(self) -> bool:
        return self._shutdown.is_set()

    def request_shutdown(self) -> None:
        """Ask the accept loop to stop. Takes effect within one poll interval."""
        self._shutdown.set()

    def _on_signal(self, signum, frame) -> None:
        # Only flip the flag; teardown happens in the accept loop
        self._shutdown.set()

    def install_signal_handlers(self) -> None:
        """Route shutdown signals to the flag. Must run in the main thread.

        Raises:
            StartupError: A handler could not be registered
        """
        for sig in SHUTDOWN_SIGNALS:
            try:
                signal.signal(sig, self._on_signal)
            except (OSError, ValueError) as e:
                raise StartupError(f"register {sig.name} failed: {e}") from e
        # Broken client connections surface as OSError instead of killing us
        signal.signal(signal.SIGPIPE, signal.SIG_IGN)

    def check_singleton(self) -> None:
        """Yield to a live instance or clear a stale socket file.

        Raises:
            SingletonConflict: Another daemon owns the socket, possibly busy
            StartupError: The stale socket file could not be removed
        """
        if not os.path.lexists(self.socket_path):
            return

        if not is_socket_stale(self.socket_path):
            raise SingletonConflict(f"another instance is already running on {self.socket_path}")

        logger.info(f"Removing stale socket {self.socket_path}")
        try:
            self.socket_path.unlink(missing_ok=True)
        except OSError as e:
            raise StartupError(f"remove stale socket {self.socket_path} failed: {e}") from e

    def _bind(self) -> None:
        server = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            server.bind(str(self.socket_path))
        except OSError as e:
            server.close()
            if e.errno == errno.EADDRINUSE and not is_socket_stale(self.socket_path):
                raise SingletonConflict(
                    f"another instance bound {self.socket_path} first"
                ) from e
            raise StartupError(f"bind({self.socket_path}) failed: {e}") from e

        try:
            self._socket_inode = os.stat(self.socket_path).st_ino
            server.listen(self.listen_backlog)
        except OSError as e:
            server.close()
            self._remove_socket_file()
            raise StartupError(f"listen({self.socket_path}) failed: {e}") from e

        # Bounded accept so the loop notices the shutdown flag while idle
        server.settimeout(self.accept_poll_interval)
        self._server = server

    def start(self) -> None:
        """Run the singleton check and bind the listening socket.

        Raises:
            SingletonConflict: Another daemon owns the socket
            StartupError: Binding failed
        """
        if self._server is not None:
            return
        self.socket_path.parent.mkdir(parents=True, exist_ok=True)
        self.check_singleton()
        self._bind()
        logger.success(f"Listening on {self.socket_path}")

    def serve_forever(self) -> None:
        """Accept and serve connections until shutdown is requested.

        Raises:
            SingletonConflict: accept reported the address taken over
        """
        self.start()
        server = self._server
        if server is None:
            raise StartupError(f"{self.socket_path} is not bound")

        try:
            while not self._shutdown.is_set():
                try:
                    conn, _ = server.accept()
                except socket.timeout:
                    continue
                except OSError as e:
                    if e.errno == errno.EADDRINUSE:
                        # The socket path is no longer ours to clean up
                        self._socket_inode = None
                        raise SingletonConflict(
                            f"another instance took over {self.socket_path}"
                        ) from e
                    if self._shutdown.is_set():
                        break
                    logger.exception(f"accept failed: {e}")
                    break

                self._serve_connection(conn)
        finally:
            self.close()

    def _serve_connection(self, conn: socket.socket) -> None:
        try:
            request = handle_connection(self.store, conn, self.read_timeout)
        except EmptyRequestError:
            logger.debug("Empty request (liveness probe)")
        except ProtocolError as e:
            self.requests_rejected += 1
            logger.warning(f"Rejected request: {e}")
        except ConnectionIOError as e:
            self.requests_rejected += 1
            logger.warning(f"Connection error: {e}")
        else:
            self.requests_served += 1
            logger.debug(f"{request.command.cli_name} session={request.session_id}")

    def _remove_socket_file(self) -> None:
        if self._socket_inode is None:
            return
        try:
            if os.stat(self.socket_path).st_ino == self._socket_inode:
                self.socket_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"cleanup remove({self.socket_path}) failed: {e}")
        self._socket_inode = None

    def close(self) -> None:
        """Stop listening and remove the socket file if it is still ours."""
        if self._server is not None:
            self._server.close()
            self._server = None
        self._remove_socket_file()


def run_dirstackd(socket_path: Optional[str] = None, debug: bool = False) -> int:
    """Run the daemon in the foreground.

    Returns:
        Process exit status: 0 after a clean shutdown or when another
        instance is already running, 1 if startup failed
    """
    config = get_config()
    configure_logging(debug=debug, daemon=True, log_level=config.log_level, force=True)
    log_startup_info()

    path = Path(socket_path) if socket_path else config.socket_path
    daemon = dirstackd(
        path,
        read_timeout=config.read_timeout,
        accept_poll_interval=config.accept_poll_interval,
        listen_backlog=config.listen_backlog,
    )

    try:
        # Registered before bind so any shutdown signal ends in close()
        daemon.install_signal_handlers()
        daemon.start()
        daemon.serve_forever()
    except SingletonConflict as e:
        logger.info(f"{e}, shutting down")
        return 0
    except StartupError as e:
        daemon.close()
        logger.error(f"Startup failed: {e}")
        return 1

    logger.info(
        f"Shutting down: served={daemon.requests_served} "
        f"rejected={daemon.requests_rejected} sessions={len(daemon.store)}"
    )
    return 0


def main() -> None:
    socket_path = sys.argv[1] if len(sys.argv) > 1 else None
    sys.exit(run_dirstackd(socket_path))


if __name__ == "__main__":
    main()
