"""Spawn an ispell-compatible speller and open a checker on it."""

from __future__ import annotations

import subprocess
from collections.abc import Sequence

from loguru import logger

from .checker import SpellChecker
from .config import OffsetUnit, Program, Settings
from .errors import ProcessError

DEFAULT_TIMEOUT_SECONDS = 5.0


class SpellLauncher:
    """Builder for the speller command line.

    Runs ``ispell`` by default; ``aspell()`` and ``hunspell()`` switch the
    program. Every setter returns the launcher so calls can be chained::

        checker = SpellLauncher().aspell().language("en_GB").timeout(2).launch()
    """

    def __init__(self) -> None:
        self._program: Program = "ispell"
        self._command: str | None = None
        self._dictionary: str | None = None
        self._language: str | None = None
        self._raw_args: list[str] | None = None
        self._timeout = DEFAULT_TIMEOUT_SECONDS
        self._offset_unit: OffsetUnit = "chars"

    @classmethod
    def from_settings(cls, settings: Settings) -> SpellLauncher:
        launcher = cls().program(settings.program).timeout(settings.timeout_seconds)
        launcher.offset_unit(settings.offset_unit)
        if settings.command:
            launcher.command(settings.command)
        if settings.dictionary:
            launcher.dictionary(settings.dictionary)
        if settings.language:
            launcher.language(settings.language)
        return launcher

    def program(self, program: Program) -> SpellLauncher:
        self._program = program
        return self

    def ispell(self) -> SpellLauncher:
        return self.program("ispell")

    def aspell(self) -> SpellLauncher:
        return self.program("aspell")

    def hunspell(self) -> SpellLauncher:
        return self.program("hunspell")

    def command(self, command: str) -> SpellLauncher:
        """Binary name or path to run instead of the program's default."""
        self._command = command
        return self

    def dictionary(self, dictionary: str) -> SpellLauncher:
        self._dictionary = dictionary
        return self

    def language(self, language: str) -> SpellLauncher:
        """Language for aspell; ispell and hunspell select it with ``dictionary``."""
        self._language = language
        return self

    def timeout(self, seconds: float) -> SpellLauncher:
        if seconds <= 0:
            raise ValueError("timeout must be positive")
        self._timeout = seconds
        return self

    def offset_unit(self, unit: OffsetUnit) -> SpellLauncher:
        self._offset_unit = unit
        return self

    def raw_args(self, argv: Sequence[str]) -> SpellLauncher:
        """Run exactly ``argv``, ignoring every other launch option."""
        if not argv:
            raise ValueError("argv must not be empty")
        self._raw_args = list(argv)
        return self

    def build_args(self) -> list[str]:
        if self._raw_args is not None:
            return list(self._raw_args)

        args = [self._command or self._program, "-a"]
        if self._program == "aspell" and self._language:
            args.extend(["-l", self._language])
        if self._dictionary:
            args.extend(["-d", self._dictionary])
        return args

    def launch(self) -> SpellChecker:
        args = self.build_args()
        logger.debug("launcher.spawn args={}", args)
        try:
            process = subprocess.Popen(  # noqa: S603
                args,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
            )
        except OSError as exc:
            raise ProcessError(f"could not spawn process '{args[0]}': {exc}") from exc
        return SpellChecker.from_process(process, self._timeout, offset_unit=self._offset_unit)
