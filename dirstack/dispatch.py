# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Route decoded requests to the session store."""

from typing import Callable, Dict

from dirstack.commands import Command
from dirstack.protocol import Request
from dirstack.store import SessionStore


def _push(store: SessionStore, request: Request) -> str:
    store.push(request.session_id, request.path)
    return request.path


def _pop(store: SessionStore, request: Request) -> str:
    return store.pop(request.session_id)


def _peek(store: SessionStore, request: Request) -> str:
    return store.peek(request.session_id)


def _list(store: SessionStore, request: Request) -> str:
    return " ".join(store.list(request.session_id))


HANDLERS: Dict[Command, Callable[[SessionStore, Request], str]] = {
    Command.PUSH: _push,
    Command.POP: _pop,
    Command.PEEK: _peek,
    Command.LIST: _list,
}


def dispatch(store: SessionStore, request: Request) -> str:
    """Execute a request and return the response text.

    Push echoes the pushed path, Pop and Peek return the top entry, and
    List returns the stack top-first joined by single spaces.
    """
    return HANDLERS[request.command](store, request)
