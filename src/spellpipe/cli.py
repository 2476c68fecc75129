"""Command line interface for spellpipe."""

from __future__ import annotations

import sys
from collections.abc import Iterable

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from spellpipe.checker import SpellChecker
from spellpipe.config import Settings, get_settings
from spellpipe.errors import SpellPipeError
from spellpipe.launcher import SpellLauncher
from spellpipe.types import Compound, Correct, Outcome, RootMatch, SpellIssue, is_issue

app = typer.Typer(name="spellpipe", help="Spell check text through ispell, aspell or hunspell.", add_completion=False)
console = Console(highlight=False, soft_wrap=True)

EXIT_ISSUES = 1
EXIT_ERROR = 2


def _load_settings(
    program: str | None,
    dictionary: str | None,
    language: str | None,
    timeout: float | None,
) -> Settings:
    try:
        return get_settings(program=program, dictionary=dictionary, language=language, timeout_seconds=timeout)
    except ValidationError as exc:
        console.print(f"[bold red]Invalid settings:[/bold red] {escape(str(exc))}")
        raise typer.Exit(EXIT_ERROR) from exc


def _open_checker(settings: Settings) -> SpellChecker:
    return SpellLauncher.from_settings(settings).launch()


def _input_lines(text: list[str] | None) -> Iterable[str]:
    if text:
        # One argument may hold several lines.
        return [line for argument in text for line in argument.splitlines() or [""]]
    return (line.rstrip("\r\n") for line in sys.stdin)


def _render_issue(line_no: int, issue: SpellIssue) -> str:
    suggestions = ", ".join(issue.suggestions) if issue.suggestions else "(no suggestions)"
    return f"{line_no}:{issue.offset} [bold red]{escape(issue.word)}[/bold red] -> {escape(suggestions)}"


def _render_outcome(line_no: int, outcome: Outcome) -> str:
    if isinstance(outcome, Correct):
        return f"{line_no} [green]correct[/green]"
    if isinstance(outcome, Compound):
        return f"{line_no} [green]compound[/green]"
    if isinstance(outcome, RootMatch):
        return f"{line_no} [green]root[/green] {escape(outcome.root)}"
    return f"{_render_issue(line_no, outcome.issue)} [dim]({type(outcome).__name__})[/dim]"


def _fail(exc: SpellPipeError) -> typer.Exit:
    console.print(f"[bold red]Error:[/bold red] {escape(exc.message)}")
    return typer.Exit(EXIT_ERROR)


@app.command()
def check(
    text: list[str] | None = typer.Argument(None, help="Lines to check; read from stdin when omitted"),  # noqa: B008
    program: str | None = typer.Option(None, "--program", "-p", help="ispell, aspell or hunspell"),
    dictionary: str | None = typer.Option(None, "--dictionary", "-d", help="Dictionary name"),
    language: str | None = typer.Option(None, "--language", "-l", help="Language (aspell only)"),
    timeout: float | None = typer.Option(None, "--timeout", "-t", help="Response timeout in seconds"),
    detailed: bool = typer.Option(False, "--detailed", help="Show every word, not only the misspelled ones"),
) -> None:
    """Check lines of text and print misspelled words."""

    settings = _load_settings(program, dictionary, language, timeout)
    found = False
    try:
        with _open_checker(settings) as checker:
            for line_no, line in enumerate(_input_lines(text), start=1):
                if detailed:
                    outcomes = checker.check_detailed(line)
                    for outcome in outcomes:
                        console.print(_render_outcome(line_no, outcome))
                    found = found or any(is_issue(outcome) for outcome in outcomes)
                else:
                    issues = checker.check(line)
                    for issue in issues:
                        console.print(_render_issue(line_no, issue))
                    found = found or bool(issues)
    except SpellPipeError as exc:
        raise _fail(exc) from exc

    if found:
        raise typer.Exit(EXIT_ISSUES)


@app.command()
def add(
    words: list[str] = typer.Argument(..., help="Words to accept"),  # noqa: B008
    persist: bool = typer.Option(False, "--persist", help="Save to the personal dictionary"),
    program: str | None = typer.Option(None, "--program", "-p", help="ispell, aspell or hunspell"),
    dictionary: str | None = typer.Option(None, "--dictionary", "-d", help="Dictionary name"),
    language: str | None = typer.Option(None, "--language", "-l", help="Language (aspell only)"),
) -> None:
    """Add words to the session or the personal dictionary."""

    settings = _load_settings(program, dictionary, language, None)
    try:
        with _open_checker(settings) as checker:
            for word in words:
                if persist:
                    checker.add_word_persist(word)
                else:
                    checker.add_word_session(word)
                console.print(f"added {escape(word)}")
    except SpellPipeError as exc:
        raise _fail(exc) from exc


@app.command()
def version(
    program: str | None = typer.Option(None, "--program", "-p", help="ispell, aspell or hunspell"),
) -> None:
    """Print the speller's version banner."""

    settings = _load_settings(program, None, None, None)
    try:
        with _open_checker(settings) as checker:
            console.print(escape(checker.banner))
    except SpellPipeError as exc:
        raise _fail(exc) from exc
