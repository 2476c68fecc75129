"""Typed results of the pipe protocol."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeAlias, TypeGuard


@dataclass(frozen=True)
class SpellIssue:
    """One flagged word.

    ``offset`` is the 0-based character position of ``word`` in the line
    that was submitted for checking.
    """

    word: str
    offset: int
    suggestions: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Correct:
    """The word was found in the dictionary (``*``)."""


@dataclass(frozen=True)
class Compound:
    """The word was accepted as a compound of known words (``-``)."""


@dataclass(frozen=True)
class RootMatch:
    """The word was accepted through its root (``+ <root>``)."""

    root: str


@dataclass(frozen=True)
class NearMiss:
    """The word is unknown but close dictionary words exist (``&``)."""

    issue: SpellIssue


@dataclass(frozen=True)
class GuessedAffix:
    """The word could be formed from a known root with illegal affixes (``?``)."""

    issue: SpellIssue


@dataclass(frozen=True)
class NoMatch:
    """The word is unknown and there is nothing to suggest (``#``)."""

    issue: SpellIssue


Outcome: TypeAlias = Correct | Compound | RootMatch | NearMiss | GuessedAffix | NoMatch
IssueOutcome: TypeAlias = NearMiss | GuessedAffix | NoMatch


def is_issue(outcome: Outcome) -> TypeGuard[IssueOutcome]:
    return isinstance(outcome, (NearMiss, GuessedAffix, NoMatch))
