"""Presentation helpers — error text, stack lines, and Rich tables.

The engine raises structured errors and returns floats; everything the user
actually reads is produced here.
"""

from __future__ import annotations

from typing import Sequence

from rich.console import Console
from rich.table import Table

from stackcalc.models import BinaryOp, CalculatorError, ErrorKind, UnaryOp

_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.EMPTY_INPUT: "Enter a number first",
    ErrorKind.INVALID_NUMBER: "Invalid number",
    ErrorKind.DIVISION_BY_ZERO: "Divide by zero",
    ErrorKind.INVALID_DOMAIN: "Invalid input for sqrt",
}

_OPERATOR_HELP: list[tuple[str, str, str]] = [
    (BinaryOp.ADD.value, "add", "a + b"),
    (BinaryOp.SUBTRACT.value, "sub", "a - b"),
    (BinaryOp.MULTIPLY.value, "mul", "a * b"),
    (BinaryOp.DIVIDE.value, "div", "a / b (b must not be 0)"),
    (UnaryOp.SIN.value, "", "sine of a, in degrees"),
    (UnaryOp.COS.value, "", "cosine of a, in degrees"),
    (UnaryOp.TAN.value, "", "tangent of a, in degrees"),
    (UnaryOp.SQRT.value, "", "square root of a (a >= 0)"),
]


def describe_error(err: CalculatorError) -> str:
    """Short user-facing text for an engine error."""
    if err.kind is ErrorKind.INSUFFICIENT_OPERANDS:
        return "Need a number" if err.unary else "Need 2 numbers"
    if err.kind is ErrorKind.UNKNOWN_OPERATOR:
        return "Unknown operation" if err.unary else "Unknown op"
    return _MESSAGES.get(err.kind, err.message)


def format_value(x: float, precision: int = 10) -> str:
    """Format a float compactly: 3.0 -> '3', 0.1+0.2 -> '0.3'."""
    return f"{x:.{precision}g}"


def format_stack(values: Sequence[float], precision: int = 10) -> str:
    """One-line stack summary, bottom first. An empty stack reads '0'."""
    if not values:
        return "0"
    return "Stack: " + ", ".join(format_value(v, precision) for v in values)


def render_stack(values: Sequence[float], console: Console, precision: int = 10) -> None:
    """Render the stack as a Rich table, top of stack first."""
    if not values:
        console.print("[dim]Stack is empty.[/dim]")
        return

    table = Table(title="Stack", show_header=True, header_style="bold")
    table.add_column("Level", style="dim", justify="right")
    table.add_column("Value", justify="right", min_width=12)

    depth = len(values)
    for i, value in enumerate(reversed(values)):
        level = "top" if i == 0 else str(depth - i)
        style = "green" if i == 0 else None
        table.add_row(level, format_value(value, precision), style=style)

    console.print(table)


def render_operators(console: Console) -> None:
    """Render the operator reference table."""
    table = Table(title="Operators", show_header=True, header_style="bold")
    table.add_column("Token", style="green")
    table.add_column("Alias")
    table.add_column("Operands", justify="right")
    table.add_column("Result", min_width=24)

    for token, alias, result in _OPERATOR_HELP:
        operands = "1" if token in {op.value for op in UnaryOp} else "2"
        table.add_row(token, alias, operands, result)

    console.print()
    console.print(table)
    console.print()
