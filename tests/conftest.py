# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Pytest fixtures for dirstack tests.

Daemon tests run a real dirstackd on a temporary Unix socket in a
background thread. Socket paths are kept short because AF_UNIX paths are
limited to about 100 bytes.
"""

import os
import shutil
import tempfile
import threading
from pathlib import Path

import pytest

# Keep log output out of the user's state directory; must be set before
# dirstack.dirstackd configures logging at import time
os.environ.setdefault(
    "DIRSTACK_LOG_FILE", os.path.join(tempfile.gettempdir(), "dirstack-tests.log")
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config lookup at an empty temp dir and drop cached config."""
    from dirstack import host_config

    monkeypatch.setenv("DIRSTACK_CONFIG", str(tmp_path / "config.yml"))
    monkeypatch.delenv("DIRSTACK_SOCKET", raising=False)
    monkeypatch.delenv("DIRSTACK_SESSION", raising=False)
    host_config.reset_config()
    yield tmp_path / "config.yml"
    host_config.reset_config()


@pytest.fixture
def socket_path():
    """A fresh, short socket path that does not exist yet."""
    directory = tempfile.mkdtemp(prefix="ds-", dir="/tmp")
    yield Path(directory) / "dirs.sock"
    shutil.rmtree(directory, ignore_errors=True)


class DaemonThread:
    """A started dirstackd serving from a background thread."""

    def __init__(self, daemon):
        self.daemon = daemon
        self.error = None
        self.thread = threading.Thread(target=self._run, daemon=True, name="dirstackd-test")

    def _run(self):
        try:
            self.daemon.serve_forever()
        except BaseException as exc:  # surfaced by stop()
            self.error = exc

    def start(self):
        # Bind in the calling thread so the socket exists before clients connect
        self.daemon.start()
        self.thread.start()
        return self

    def stop(self, timeout=5.0):
        self.daemon.request_shutdown()
        self.thread.join(timeout)
        assert not self.thread.is_alive(), "daemon did not stop"
        if self.error is not None:
            raise self.error


@pytest.fixture
def make_daemon(socket_path):
    """Factory for dirstackd instances bound to socket_path, stopped on teardown."""
    from dirstack.dirstackd import dirstackd

    running = []

    def factory(**kwargs):
        kwargs.setdefault("accept_poll_interval", 0.05)
        daemon = dirstackd(kwargs.pop("path", socket_path), **kwargs)
        handle = DaemonThread(daemon).start()
        running.append(handle)
        return handle

    yield factory

    for handle in running:
        if handle.thread.is_alive():
            handle.stop()


@pytest.fixture
def running_daemon(make_daemon):
    """A dirstackd serving on socket_path."""
    return make_daemon()
