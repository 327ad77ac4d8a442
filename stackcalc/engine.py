"""Stack evaluation engine — the operand stack and the operations on it.

Each public operation is all-or-nothing: it runs inside ``_transaction()``,
which restores the stack if anything raises, so a failed call leaves the
stack exactly as it found it (popped operands go back in their original
order).

Usage:
    calc = StackCalculator()
    calc.push_value("6")
    calc.push_value("3")
    calc.binary_operation("/")      # -> 2.0, stack (2.0,)
    calc.unary_scientific_operation("sqrt")
"""

from __future__ import annotations

import logging
import math
from contextlib import contextmanager
from typing import Iterator, Optional, Union

from stackcalc.models import (
    BinaryOp,
    CalculatorError,
    DivisionByZero,
    EmptyInput,
    InsufficientOperands,
    InvalidDomain,
    InvalidNumber,
    UnaryOp,
    UnknownOperator,
    lookup_binary,
    lookup_unary,
)

logger = logging.getLogger(__name__)


def parse_operand(text: str) -> float:
    """Parse entry text into a float.

    Raises:
        EmptyInput: text is blank after trimming.
        InvalidNumber: text is not a floating-point literal.
    """
    s = text.strip()
    if not s:
        raise EmptyInput("Enter a number first", text=text)
    # float() accepts "1_000" and non-ASCII digits; a calculator entry should not
    if "_" in s or not s.isascii():
        raise InvalidNumber(f"Invalid number: {s!r}", text=text)
    try:
        return float(s)
    except ValueError:
        raise InvalidNumber(f"Invalid number: {s!r}", text=text) from None


def _degrees_trig(fn, a: float) -> float:
    # math.sin(inf) raises; the calculator reports NaN instead
    if math.isinf(a):
        return math.nan
    return fn(math.radians(a))


_UNARY_FUNCS = {
    UnaryOp.SIN: lambda a: _degrees_trig(math.sin, a),
    UnaryOp.COS: lambda a: _degrees_trig(math.cos, a),
    UnaryOp.TAN: lambda a: _degrees_trig(math.tan, a),
    UnaryOp.SQRT: math.sqrt,
}


class StackCalculator:
    """Reverse-Polish calculator engine owning a single operand stack.

    Not thread-safe: callers sharing an instance must serialize access.
    """

    def __init__(self) -> None:
        self._stack: list[float] = []

    def __len__(self) -> int:
        return len(self._stack)

    def __repr__(self) -> str:
        return f"StackCalculator(stack={self._stack!r})"

    @contextmanager
    def _transaction(self) -> Iterator[list[float]]:
        """Yield the live stack; restore its prior contents if the body raises."""
        saved = list(self._stack)
        try:
            yield self._stack
        except Exception as e:
            self._stack[:] = saved
            if isinstance(e, CalculatorError):
                logger.info("Rolled back (%s): %s", e.kind.value, e.message)
            raise

    # ------------------------------------------------------------------
    # Entry
    # ------------------------------------------------------------------

    def push_value(self, text: str) -> float:
        """Parse ``text`` and push it. Returns the pushed value."""
        value = parse_operand(text)
        with self._transaction() as stack:
            stack.append(value)
        logger.debug("push %r -> depth %d", value, len(self._stack))
        return value

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def binary_operation(self, op: Union[str, BinaryOp]) -> float:
        """Pop b (top) and a (below it), push ``a op b`` and return it.

        Raises:
            InsufficientOperands: fewer than two values on the stack.
            DivisionByZero: dividing by exactly zero.
            UnknownOperator: ``op`` is not one of + - * /.
        """
        if len(self._stack) < 2:
            raise InsufficientOperands("Need 2 numbers", operator=op, required=2)

        with self._transaction() as stack:
            b = stack.pop()
            a = stack.pop()
            kind = lookup_binary(op)
            if kind is BinaryOp.ADD:
                result = a + b
            elif kind is BinaryOp.SUBTRACT:
                result = a - b
            elif kind is BinaryOp.MULTIPLY:
                result = a * b
            elif kind is BinaryOp.DIVIDE:
                if b == 0:
                    raise DivisionByZero("Divide by zero", operator=kind, required=2)
                result = a / b
            else:
                raise UnknownOperator(f"Unknown op: {op!r}", operator=op, required=2)
            stack.append(result)

        logger.debug("%r %s %r = %r", a, kind.value, b, result)
        return result

    def unary_scientific_operation(self, op: Union[str, UnaryOp]) -> float:
        """Pop a, push ``op(a)`` and return it. Trig functions take degrees.

        Raises:
            InsufficientOperands: the stack is empty.
            InvalidDomain: square root of a negative number.
            UnknownOperator: ``op`` is not one of sin cos tan sqrt.
        """
        if not self._stack:
            raise InsufficientOperands("Need a number", operator=op, required=1)

        with self._transaction() as stack:
            a = stack.pop()
            kind = lookup_unary(op)
            if kind is None:
                raise UnknownOperator(f"Unknown operation: {op!r}", operator=op, required=1)
            if kind is UnaryOp.SQRT and a < 0:
                raise InvalidDomain("Invalid input for sqrt", operator=kind, required=1)
            result = _UNARY_FUNCS[kind](a)
            stack.append(result)

        logger.debug("%s(%r) = %r", kind.value, a, result)
        return result

    def apply(self, token: Union[str, BinaryOp, UnaryOp]) -> float:
        """Dispatch one token: an operator is applied, anything else is pushed."""
        if isinstance(token, BinaryOp) or lookup_binary(token) is not None:
            return self.binary_operation(token)
        if isinstance(token, UnaryOp) or lookup_unary(token) is not None:
            return self.unary_scientific_operation(token)
        return self.push_value(token)

    # ------------------------------------------------------------------
    # Clearing and inspection
    # ------------------------------------------------------------------

    def clear_entry(self) -> None:
        """No-op. Pending entry text is owned by the caller (see Session)."""

    def clear_all(self) -> None:
        """Empty the stack."""
        self._stack.clear()
        logger.debug("stack cleared")

    def peek(self) -> Optional[float]:
        """Top of the stack, or None when empty."""
        return self._stack[-1] if self._stack else None

    def snapshot(self) -> tuple[float, ...]:
        """Stack contents bottom-to-top (push order). Top is the last element."""
        return tuple(self._stack)
