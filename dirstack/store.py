# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""In-memory directory stacks keyed by session id."""

from typing import Dict, List


class SessionStore:
    """Per-session LIFO stacks of path strings.

    Sessions are created by the first push and live as long as the store.
    No operation raises: an absent or empty session reads as "" (or []),
    which cannot be told apart from a stack whose top entry is "".
    Not thread-safe; dirstackd serves one connection at a time.
    """

    def __init__(self) -> None:
        self._stacks: Dict[str, List[str]] = {}

    def push(self, session: str, path: str) -> None:
        self._stacks.setdefault(session, []).append(path)

    def pop(self, session: str) -> str:
        stack = self._stacks.get(session)
        if not stack:
            return ""
        return stack.pop()

    def peek(self, session: str) -> str:
        stack = self._stacks.get(session)
        if not stack:
            return ""
        return stack[-1]

    def list(self, session: str) -> List[str]:
        """Return a copy of the stack, most recent push first."""
        return list(reversed(self._stacks.get(session, [])))

    def sessions(self) -> List[str]:
        return sorted(self._stacks)

    def __contains__(self, session: object) -> bool:
        return session in self._stacks

    def __len__(self) -> int:
        return len(self._stacks)
