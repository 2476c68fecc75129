from __future__ import annotations

import os
import re
import threading
import time
from collections.abc import Callable, Iterator
from contextlib import suppress

import pytest

from spellpipe.checker import SpellChecker

BANNER = "@(#) International Ispell Version 3.1.20 (but really Aspell 0.60.8)\n"


class FakeSpeller:
    """In-process stand-in for ``aspell -a`` talking over real OS pipes."""

    def __init__(
        self,
        *,
        known: set[str] | None = None,
        suggestions: dict[str, list[str]] | None = None,
        banner: str | None = BANNER,
        silent: bool = False,
        byte_offsets: bool = False,
        respond: Callable[[str], str | list[str]] | None = None,
    ) -> None:
        self.known = set(known or ())
        self.suggestions = dict(suggestions or {})
        self.session_words: set[str] = set()
        self.personal_words: list[str] = []
        self.saved_words: list[str] = []
        self.received: list[str] = []
        self.killed = False
        self._banner = banner
        self._silent = silent
        self._byte_offsets = byte_offsets
        self._respond = respond

        stdin_r, stdin_w = os.pipe()
        stdout_r, stdout_w = os.pipe()
        self.stdin = os.fdopen(stdin_w, "wb")
        self.stdout = os.fdopen(stdout_r, "rb")
        self._requests = os.fdopen(stdin_r, "rb")
        self._replies = os.fdopen(stdout_w, "wb")
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    def kill(self) -> None:
        self.killed = True
        with suppress(OSError, ValueError):
            self.stdin.close()

    def wait(self, timeout: float | None = None) -> int:
        self._thread.join(timeout)
        return -9

    def _serve(self) -> None:
        try:
            if self._banner is not None:
                self._write(self._banner)
            for raw in self._requests:
                line = raw.decode("utf-8").rstrip("\n")
                self.received.append(line)
                self._handle(line)
        except (OSError, ValueError):
            pass
        finally:
            with suppress(OSError, ValueError):
                self._replies.close()
            with suppress(OSError, ValueError):
                self._requests.close()

    def _handle(self, line: str) -> None:
        if line.startswith("@"):
            self.session_words.add(line[1:])
        elif line.startswith("*"):
            self.personal_words.append(line[1:])
        elif line == "#":
            self.saved_words.extend(self.personal_words)
        elif line.startswith("^") and not self._silent:
            if self._respond is not None:
                self._write_chunks(self._respond(line))
            else:
                self._write(self._answer(line))

    def _answer(self, line: str) -> str:
        replies = []
        for match in re.finditer(r"\S+", line[1:]):
            word = match.group()
            offset = match.start() + 1
            if self._byte_offsets:
                offset = len(line[:offset].encode("utf-8"))
            if word in self.known or word in self.session_words or word in self.personal_words:
                replies.append("*")
            elif word in self.suggestions:
                options = self.suggestions[word]
                replies.append(f"& {word} {len(options)} {offset}: {', '.join(options)}")
            else:
                replies.append(f"# {word} {offset}")
        if not replies:
            return "\n"
        return "\n".join(replies) + "\n\n"

    def _write_chunks(self, reply: str | list[str]) -> None:
        if isinstance(reply, str):
            reply = [reply]
        for index, chunk in enumerate(reply):
            if index:
                time.sleep(0.05)
            self._write(chunk)

    def close_output(self) -> None:
        with suppress(OSError, ValueError):
            self._replies.close()

    def _write(self, text: str) -> None:
        self._replies.write(text.encode("utf-8"))
        self._replies.flush()


@pytest.fixture
def make_speller() -> Iterator[Callable[..., FakeSpeller]]:
    spellers: list[FakeSpeller] = []

    def _make(**kwargs) -> FakeSpeller:
        speller = FakeSpeller(**kwargs)
        spellers.append(speller)
        return speller

    yield _make
    for speller in spellers:
        speller.kill()


@pytest.fixture
def make_checker(make_speller) -> Iterator[Callable[..., tuple[SpellChecker, FakeSpeller]]]:
    checkers: list[SpellChecker] = []

    def _make(*, timeout: float = 2.0, offset_unit: str = "chars", **kwargs) -> tuple[SpellChecker, FakeSpeller]:
        speller = make_speller(**kwargs)
        checker = SpellChecker.from_process(speller, timeout, offset_unit=offset_unit)
        checkers.append(checker)
        return checker, speller

    yield _make
    for checker in checkers:
        checker.close()
