"""Spell checker session facade."""

from __future__ import annotations

import subprocess
from dataclasses import replace

from loguru import logger

from .config import OffsetUnit
from .errors import InvalidWordError, SpellPipeError
from .protocol import byte_to_char_offset, collect_outcomes
from .transport import ProcessHandle, SessionTransport
from .types import Outcome, SpellIssue, is_issue


class SpellChecker:
    """Check lines of text against a running ispell-compatible speller.

    A checker owns its process: closing the checker, leaving its ``with``
    block or garbage collecting it kills the process.

    Example:
        with SpellLauncher().aspell().launch() as checker:
            for issue in checker.check("Testing iff if it works"):
                print(issue.word, issue.offset, issue.suggestions[:3])
    """

    def __init__(self, transport: SessionTransport, *, offset_unit: OffsetUnit = "chars") -> None:
        self._transport = transport
        self._offset_unit = offset_unit

    @classmethod
    def from_process(
        cls,
        process: ProcessHandle,
        timeout: float,
        *,
        offset_unit: OffsetUnit = "chars",
    ) -> SpellChecker:
        """Open a session on an already spawned process.

        The process is killed if the session cannot be established.
        """
        try:
            transport = SessionTransport.open(process, timeout)
        except SpellPipeError:
            _kill_quietly(process)
            raise
        return cls(transport, offset_unit=offset_unit)

    @property
    def banner(self) -> str:
        """Version banner printed by the speller at startup."""
        return self._transport.banner

    @property
    def transport(self) -> SessionTransport:
        return self._transport

    @property
    def closed(self) -> bool:
        return self._transport.closed

    def check(self, text: str) -> list[SpellIssue]:
        """Return the misspelled words of one line, in order."""
        return [outcome.issue for outcome in self.check_detailed(text) if is_issue(outcome)]

    def check_detailed(self, text: str) -> list[Outcome]:
        """Return one outcome per word of one line, in order."""
        if "\n" in text or "\r" in text:
            raise ValueError("text must be a single line")
        self._transport.send(text)
        outcomes = collect_outcomes(text, self._transport.receive_frame)
        if self._offset_unit == "bytes":
            outcomes = [_to_char_offsets(text, outcome) for outcome in outcomes]
        return outcomes

    def add_word_session(self, word: str) -> None:
        """Accept ``word`` until the session ends."""
        _validate_word(word)
        self._transport.send_command(f"@{word}")
        logger.info("checker.add_word scope=session word={}", word)

    def add_word_persist(self, word: str) -> None:
        """Add ``word`` to the personal dictionary and save it."""
        _validate_word(word)
        self._transport.send_command(f"*{word}")
        self._transport.send_command("#")
        logger.info("checker.add_word scope=personal word={}", word)

    def close(self) -> None:
        if not self._transport.closed:
            logger.debug("checker.close")
        self._transport.close()

    def __enter__(self) -> SpellChecker:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __del__(self) -> None:
        # __init__ may not have run to completion.
        transport = self.__dict__.get("_transport")
        if transport is not None:
            transport.close()


def _validate_word(word: str) -> None:
    if not word or not word.isalpha():
        raise InvalidWordError(f"can only add alphabetic words, got {word!r}")


def _to_char_offsets(text: str, outcome: Outcome) -> Outcome:
    if not is_issue(outcome):
        return outcome
    issue = replace(outcome.issue, offset=byte_to_char_offset(text, outcome.issue.offset))
    return replace(outcome, issue=issue)


def _kill_quietly(process: ProcessHandle) -> None:
    try:
        process.kill()
        process.wait(timeout=1.0)
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("checker.kill failed: {}", exc)
