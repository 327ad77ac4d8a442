"""Keypad-style session on top of the engine.

Holds what a calculator front end needs besides the stack: the pending
entry text and the status line. Number keys append to the entry, "=" pushes
it, operator keys apply to the stack, and the status line always shows the
stack or the last error.
"""

from __future__ import annotations

from typing import Optional

from stackcalc.display import describe_error, format_stack
from stackcalc.engine import StackCalculator
from stackcalc.models import CalculatorError

ENTRY_CHARS = frozenset("0123456789.")


class Session:
    """Entry buffer + status line driving a StackCalculator."""

    def __init__(self, calculator: Optional[StackCalculator] = None, precision: int = 10) -> None:
        self.calculator = calculator if calculator is not None else StackCalculator()
        self.precision = precision
        self.entry = ""
        self.status = "0"
        self.last_error: Optional[CalculatorError] = None

    def append(self, chars: str) -> str:
        """Append keypad characters to the entry. Other characters are ignored."""
        self.entry += "".join(c for c in chars if c in ENTRY_CHARS)
        return self.entry

    def submit(self) -> Optional[CalculatorError]:
        """Push the pending entry. The entry is kept if it fails to parse."""
        try:
            self.calculator.push_value(self.entry)
        except CalculatorError as e:
            return self._fail(e)
        self.entry = ""
        return self._ok()

    def press(self, token: str) -> Optional[CalculatorError]:
        """Apply an operator (or push a literal number) and refresh the status."""
        try:
            self.calculator.apply(token)
        except CalculatorError as e:
            return self._fail(e)
        return self._ok()

    def clear_entry(self) -> None:
        self.entry = ""
        self.calculator.clear_entry()

    def clear_all(self) -> None:
        self.calculator.clear_all()
        self.entry = ""
        self.status = "0"
        self.last_error = None

    def _ok(self) -> None:
        self.last_error = None
        self.status = format_stack(self.calculator.snapshot(), self.precision)
        return None

    def _fail(self, err: CalculatorError) -> CalculatorError:
        self.last_error = err
        self.status = describe_error(err)
        return err
