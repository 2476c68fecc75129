"""Spell check a text file line by line.

Usage:
    python examples/check-a-document.py README.md
    SPELLPIPE_PROGRAM=hunspell python examples/check-a-document.py notes.txt
"""

from __future__ import annotations

import sys
from pathlib import Path

from spellpipe import SpellLauncher, SpellPipeError
from spellpipe.config import get_settings


def main(path: Path) -> int:
    settings = get_settings()
    try:
        with SpellLauncher.from_settings(settings).launch() as checker:
            print(f"using {checker.banner}")
            found = 0
            for line_no, line in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
                for issue in checker.check(line):
                    found += 1
                    hint = f" (maybe '{issue.suggestions[0]}'?)" if issue.suggestions else ""
                    print(f"{path}:{line_no}:{issue.offset + 1}: '{issue.word}' is misspelled{hint}")
    except SpellPipeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    return 1 if found else 0


if __name__ == "__main__":
    sys.exit(main(Path(sys.argv[1])))
