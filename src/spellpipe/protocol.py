"""Decoder for the ispell pipe protocol responses.

Every input word gets one response line from the speller. The first
character of the line selects its meaning:

    *                           word found
    -                           compound of known words
    + <root>                    found through its root
    # <word> <offset>           unknown, no suggestions
    & <word> <count> <offset>: <suggestion>, ...   unknown, near misses
    ? <word> <count> <offset>: <guess>, ...        unknown, guessed affixes

Offsets count from the start of the line as the speller saw it, which
includes the ``^`` escape marker the transport prepends, so they are moved
back by one.
"""

from __future__ import annotations

from collections.abc import Callable

from .errors import ProtocolError
from .types import (
    Compound,
    Correct,
    GuessedAffix,
    NearMiss,
    NoMatch,
    Outcome,
    RootMatch,
    SpellIssue,
)

ESCAPE_MARKER = "^"


def count_words(text: str) -> int:
    return len(text.split())


def parse_line(line: str) -> Outcome:
    """Decode one response line into an outcome.

    Raises:
        ProtocolError: the line does not match any response shape.
    """
    line = line.strip()
    if not line:
        raise ProtocolError("empty response line")

    prefix = line[0]
    if prefix == "*":
        return Correct()
    if prefix == "-":
        return Compound()
    if prefix == "+":
        return _parse_root(line)
    if prefix == "#":
        return NoMatch(_parse_no_match(line))
    if prefix == "&":
        return NearMiss(_parse_with_suggestions(line))
    if prefix == "?":
        return GuessedAffix(_parse_with_suggestions(line))
    raise ProtocolError(f"unexpected response line: {line!r}")


def parse_frame(frame: str) -> list[Outcome]:
    return [parse_line(line) for line in frame.splitlines() if line.strip()]


def collect_outcomes(text: str, receive_frame: Callable[[], str]) -> list[Outcome]:
    """Read frames until there is exactly one outcome per word of ``text``.

    A response may be split over several frames, and a frame may carry
    several response lines. More responses than words is a protocol error.
    """
    expected = count_words(text)
    outcomes: list[Outcome] = []
    while len(outcomes) < expected:
        outcomes.extend(parse_frame(receive_frame()))
    if len(outcomes) > expected:
        raise ProtocolError(f"expected {expected} responses for {text!r}, got {len(outcomes)}")
    return outcomes


def byte_to_char_offset(text: str, offset: int) -> int:
    """Convert a UTF-8 byte offset into ``text`` to a character offset."""
    prefix = text.encode("utf-8")[:offset]
    return len(prefix.decode("utf-8", errors="ignore"))


def _parse_root(line: str) -> RootMatch:
    tokens = line.split()
    if len(tokens) != 2:
        raise ProtocolError(f"malformed root line: {line!r}")
    return RootMatch(tokens[1])


def _parse_no_match(line: str) -> SpellIssue:
    tokens = line.split()
    if len(tokens) != 3:
        raise ProtocolError(f"malformed no-match line: {line!r}")
    return SpellIssue(tokens[1], _parse_offset(tokens[2], line))


def _parse_with_suggestions(line: str) -> SpellIssue:
    header, sep, rest = line.partition(":")
    if not sep:
        raise ProtocolError(f"missing suggestion list: {line!r}")
    tokens = header.split()
    if len(tokens) != 4:
        raise ProtocolError(f"malformed near-miss line: {line!r}")
    suggestions = tuple(item.strip() for item in rest.split(",") if item.strip())
    return SpellIssue(tokens[1], _parse_offset(tokens[3], line), suggestions)


def _parse_offset(token: str, line: str) -> int:
    try:
        offset = int(token)
    except ValueError as exc:
        raise ProtocolError(f"invalid offset {token!r} in line: {line!r}") from exc
    # Offsets include the escape marker.
    offset -= len(ESCAPE_MARKER)
    if offset < 0:
        raise ProtocolError(f"offset out of range in line: {line!r}")
    return offset
