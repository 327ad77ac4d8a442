"""CLI for the stackcalc RPN calculator.

Usage:
    python -m stackcalc ops                      # Show supported operators
    python -m stackcalc run 3 4 +                # Apply tokens, print the stack
    python -m stackcalc run -4 sqrt              # Negative numbers need no "--"
    python -m stackcalc repl                     # Interactive keypad session
"""

from __future__ import annotations

import dataclasses
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from stackcalc.config import Settings, parse_log_level, parse_precision
from stackcalc.display import describe_error, format_stack, render_operators, render_stack
from stackcalc.engine import StackCalculator
from stackcalc.logging_config import setup_logging
from stackcalc.models import CalculatorError
from stackcalc.session import ENTRY_CHARS, Session

app = typer.Typer(
    name="stackcalc",
    help="Stack-based (RPN) calculator with scientific functions",
    no_args_is_help=True,
)
console = Console(stderr=True)
out = Console()

_QUIT = {"q", "quit", "exit"}
_CLEAR_ENTRY = {"c", "ce"}
_CLEAR_ALL = {"ac", "clear"}
_SHOW = {"s", "stack"}
_HELP = {"?", "h", "help"}


def _settings(precision: Optional[int], log_level: Optional[str]) -> Settings:
    """Load env settings, apply CLI overrides, and configure logging."""
    settings = Settings.from_env()
    if precision is not None:
        settings = dataclasses.replace(settings, precision=parse_precision(str(precision)))
    if log_level is not None:
        settings = dataclasses.replace(settings, log_level=parse_log_level(log_level))
    setup_logging(settings.log_level, settings.log_file)
    return settings


@app.command("ops")
def cmd_ops() -> None:
    """Show supported operators."""
    render_operators(console)


@app.command(
    "run",
    context_settings={"ignore_unknown_options": True},
)
def cmd_run(
    tokens: list[str] = typer.Argument(help="Numbers and operators, e.g. 3 4 + 2 /"),
    precision: Optional[int] = typer.Option(None, "--precision", "-p", help="Significant digits to display"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="debug, info, warning, error"),
    table: bool = typer.Option(False, "--table", "-t", help="Show the final stack as a table"),
) -> None:
    """Apply tokens left to right to a fresh stack and print the result."""
    settings = _settings(precision, log_level)
    calc = StackCalculator()

    for token in tokens:
        try:
            calc.apply(token)
        except CalculatorError as e:
            console.print(f"[red]Error:[/red] {escape(describe_error(e))} (at {escape(token)!r})")
            console.print(f"  {format_stack(calc.snapshot(), settings.precision)}")
            raise typer.Exit(1)

    if table:
        render_stack(calc.snapshot(), out, settings.precision)
    else:
        out.print(format_stack(calc.snapshot(), settings.precision), highlight=False)


def _handle_line(session: Session, line: str) -> tuple[bool, Optional[CalculatorError]]:
    """Process one REPL line.

    Returns (keep_going, error) where error is the first failure on the line.
    Tokens after a failure are skipped.
    """
    words = line.split()
    if not words:
        # Bare Enter behaves like the "=" key with whatever is pending
        return True, session.submit()

    for word in words:
        w = word.lower()
        err = None
        if w in _QUIT:
            return False, None
        if w in _CLEAR_ENTRY:
            session.clear_entry()
        elif w in _CLEAR_ALL:
            session.clear_all()
        elif w in _SHOW:
            render_stack(session.calculator.snapshot(), console, session.precision)
        elif w in _HELP:
            render_operators(console)
        elif all(c in ENTRY_CHARS for c in word):
            # Each typed number is a whole entry; drop any text left by a failed one
            session.clear_entry()
            session.append(word)
            err = session.submit()
        else:
            err = session.press(word)
        if err is not None:
            return True, err
    return True, None


@app.command("repl")
def cmd_repl(
    precision: Optional[int] = typer.Option(None, "--precision", "-p", help="Significant digits to display"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="debug, info, warning, error"),
) -> None:
    """Interactive session: numbers, operators, c, ac, s, ?, q."""
    settings = _settings(precision, log_level)
    session = Session(precision=settings.precision)
    console.print("[dim]stackcalc: numbers push, operators apply. ? for help, q to quit.[/dim]")

    while True:
        try:
            line = console.input("[bold]> [/bold]")
        except (EOFError, KeyboardInterrupt):
            console.print()
            break
        keep_going, err = _handle_line(session, line)
        if not keep_going:
            break
        if err is not None:
            console.print(f"[red]{escape(describe_error(err))}[/red]")
        else:
            console.print(escape(session.status), highlight=False)


if __name__ == "__main__":
    app()
