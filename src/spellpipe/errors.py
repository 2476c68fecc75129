"""Exception types for spellpipe."""

from __future__ import annotations


class SpellPipeError(Exception):
    """Base exception for spellpipe."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ProcessError(SpellPipeError):
    """Raised when the subordinate process cannot be spawned, written to, or does not answer in time."""


class EncodingError(SpellPipeError):
    """Raised when the subordinate process emits bytes that are not valid UTF-8."""


class ProtocolError(SpellPipeError):
    """Raised when a response does not match the pipe protocol grammar."""


class InvalidWordError(SpellPipeError):
    """Raised when a word handed to an add-word operation is not purely alphabetic."""
