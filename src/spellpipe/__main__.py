"""spellpipe CLI entry point."""

from spellpipe.cli import app

if __name__ == "__main__":
    app()
