"""spellpipe - drive ispell, aspell and hunspell through their pipe protocol."""

from .checker import SpellChecker
from .errors import EncodingError, InvalidWordError, ProcessError, ProtocolError, SpellPipeError
from .launcher import SpellLauncher
from .types import Compound, Correct, GuessedAffix, NearMiss, NoMatch, Outcome, RootMatch, SpellIssue

__version__ = "0.1.0"

__all__ = [
    "Compound",
    "Correct",
    "EncodingError",
    "GuessedAffix",
    "InvalidWordError",
    "NearMiss",
    "NoMatch",
    "Outcome",
    "ProcessError",
    "ProtocolError",
    "RootMatch",
    "SpellChecker",
    "SpellIssue",
    "SpellLauncher",
    "SpellPipeError",
]
