"""Tests for dirstack/protocol.py"""

import pytest

from dirstack.commands import Command
from dirstack.protocol import (
    MAX_REQUEST_SIZE,
    EmptyRequestError,
    ProtocolError,
    Request,
    UnknownCommandError,
    decode_request,
    encode_request,
)


class TestDecodeValid:
    """Requests that pass structural validation"""

    def test_push_with_path(self):
        assert decode_request(b"\x01 work /home/me/src") == Request(
            Command.PUSH, "work", "/home/me/src"
        )

    @pytest.mark.parametrize(
        "raw,command",
        [
            (b"\x02 work", Command.POP),
            (b"\x03 work", Command.PEEK),
            (b"\x04 work", Command.LIST),
        ],
    )
    def test_path_free_commands(self, raw, command):
        request = decode_request(raw)
        assert request.command is command
        assert request.session_id == "work"
        assert request.path is None

    def test_trailing_space_from_client(self):
        """Clients that always append a path field send an empty third token"""
        assert decode_request(b"\x02 work ") == Request(Command.POP, "work")

    def test_path_on_pop_is_dropped(self):
        assert decode_request(b"\x02 work /tmp") == Request(Command.POP, "work")

    def test_extra_whitespace_is_ignored(self):
        assert decode_request(b"  \x01\t work\n /a/b \n") == Request(Command.PUSH, "work", "/a/b")

    def test_session_and_path_are_opaque(self):
        request = decode_request("\x01 sessão-1 /tmp/ünï".encode("utf-8"))
        assert request.session_id == "sessão-1"
        assert request.path == "/tmp/ünï"


class TestDecodeInvalid:
    """Requests rejected before dispatch"""

    def test_empty(self):
        with pytest.raises(EmptyRequestError):
            decode_request(b"")
        with pytest.raises(EmptyRequestError):
            decode_request(b"   \n")

    def test_empty_is_a_protocol_error(self):
        with pytest.raises(ProtocolError):
            decode_request(b"")

    @pytest.mark.parametrize("raw", [b"\x02", b"\x01 s /a /b", b"\x01 s /a /b /c"])
    def test_wrong_token_count(self, raw):
        with pytest.raises(ProtocolError, match="tokens"):
            decode_request(raw)

    def test_multi_character_command(self):
        with pytest.raises(ProtocolError, match="one character"):
            decode_request(b"pushd work /tmp")

    def test_path_without_separator(self):
        with pytest.raises(ProtocolError, match="path token"):
            decode_request(b"\x01 work tmp")

    def test_push_without_path(self):
        with pytest.raises(ProtocolError, match="requires a path"):
            decode_request(b"\x01 work")

    def test_unknown_command(self):
        with pytest.raises(UnknownCommandError):
            decode_request(b"\x07 work")

    def test_unknown_command_is_protocol_error(self):
        assert issubclass(UnknownCommandError, ProtocolError)

    def test_invalid_utf8(self):
        with pytest.raises(ProtocolError, match="UTF-8"):
            decode_request(b"\x01 work /\xff\xfe")

    def test_too_large(self):
        raw = b"\x01 work /" + b"a" * MAX_REQUEST_SIZE
        with pytest.raises(ProtocolError, match="too large"):
            decode_request(raw)


class TestEncode:
    """Test client-side request building"""

    def test_push(self):
        assert encode_request(Command.PUSH, "work", "/tmp") == b"\x01 work /tmp"

    def test_list(self):
        assert encode_request(Command.LIST, "work") == b"\x04 work"

    def test_encoded_request_decodes(self):
        raw = encode_request(Command.PEEK, "s1")
        assert decode_request(raw) == Request(Command.PEEK, "s1")

    @pytest.mark.parametrize("session", ["", "two words", "tab\there"])
    def test_bad_session(self, session):
        with pytest.raises(ValueError, match="session id"):
            encode_request(Command.POP, session)

    def test_push_requires_path(self):
        with pytest.raises(ValueError, match="requires a path"):
            encode_request(Command.PUSH, "work")

    def test_push_path_with_space(self):
        with pytest.raises(ValueError, match="whitespace"):
            encode_request(Command.PUSH, "work", "/my dir")

    def test_push_relative_path(self):
        with pytest.raises(ValueError, match="must contain"):
            encode_request(Command.PUSH, "work", "src")

    def test_path_on_path_free_command(self):
        with pytest.raises(ValueError, match="does not accept a path"):
            encode_request(Command.POP, "work", "/tmp")
