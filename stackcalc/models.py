"""Data models for the stackcalc engine.

Operator enums, ErrorKind, the CalculatorError hierarchy — all the typed
structures that flow through engine → session → CLI.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union


class BinaryOp(str, Enum):
    """Two-operand arithmetic operators."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"


class UnaryOp(str, Enum):
    """One-operand scientific functions. Trig inputs are degrees."""

    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    SQRT = "sqrt"


# Word spellings accepted alongside the symbols
_BINARY_ALIASES: dict[str, BinaryOp] = {
    "add": BinaryOp.ADD,
    "sub": BinaryOp.SUBTRACT,
    "mul": BinaryOp.MULTIPLY,
    "div": BinaryOp.DIVIDE,
    "x": BinaryOp.MULTIPLY,
    "×": BinaryOp.MULTIPLY,
    "÷": BinaryOp.DIVIDE,
}


def lookup_binary(tag: Union[str, BinaryOp]) -> Optional[BinaryOp]:
    """Resolve a binary operator tag, or None if it isn't one."""
    if isinstance(tag, BinaryOp):
        return tag
    if not isinstance(tag, str):
        return None
    t = tag.strip().lower()
    try:
        return BinaryOp(t)
    except ValueError:
        return _BINARY_ALIASES.get(t)


def lookup_unary(tag: Union[str, UnaryOp]) -> Optional[UnaryOp]:
    """Resolve a scientific operator tag (case-insensitive), or None."""
    if isinstance(tag, UnaryOp):
        return tag
    if not isinstance(tag, str):
        return None
    try:
        return UnaryOp(tag.strip().lower())
    except ValueError:
        return None


class ErrorKind(str, Enum):
    """Identity of a calculator failure, independent of how it is shown."""

    EMPTY_INPUT = "empty-input"
    INVALID_NUMBER = "invalid-number"
    INSUFFICIENT_OPERANDS = "insufficient-operands"
    DIVISION_BY_ZERO = "division-by-zero"
    INVALID_DOMAIN = "invalid-domain"
    UNKNOWN_OPERATOR = "unknown-operator"


class CalculatorError(Exception):
    """Base class for every recoverable engine failure.

    The stack is always back in its pre-operation state by the time one of
    these reaches the caller.
    """

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        *,
        operator: object = None,
        text: Optional[str] = None,
        required: int = 0,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.operator = operator
        self.text = text
        self.required = required

    @property
    def unary(self) -> bool:
        """True when the failed call was a scientific (one-operand) operation."""
        return self.required == 1


class ParseError(CalculatorError):
    """Entry text could not become an operand."""


class OperationError(CalculatorError):
    """An operator could not be applied to the stack."""


class EmptyInput(ParseError):
    kind = ErrorKind.EMPTY_INPUT


class InvalidNumber(ParseError):
    kind = ErrorKind.INVALID_NUMBER


class InsufficientOperands(OperationError):
    kind = ErrorKind.INSUFFICIENT_OPERANDS


class DivisionByZero(OperationError):
    kind = ErrorKind.DIVISION_BY_ZERO


class InvalidDomain(OperationError):
    kind = ErrorKind.INVALID_DOMAIN


class UnknownOperator(OperationError):
    kind = ErrorKind.UNKNOWN_OPERATOR
