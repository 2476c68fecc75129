"""Teach the speller a new word for this session only.

Mirrors what a ``hunspell -a`` session does with ``@word`` lines.
"""

from __future__ import annotations

from spellpipe import SpellLauncher

with SpellLauncher().hunspell().timeout(1).launch() as checker:
    print("before:", checker.check("rustacean"))
    checker.add_word_session("rustacean")
    print("after:", checker.check("rustacean"))
