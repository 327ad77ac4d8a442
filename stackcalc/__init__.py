"""stackcalc — stack-based (RPN) calculator engine.

Push numbers onto an operand stack, then apply binary arithmetic (+ - * /)
or scientific functions (sin cos tan sqrt, degrees) to the top of it. Failed
operations roll the stack back and raise a typed CalculatorError.

Usage:
    python -m stackcalc run 3 4 +        # -> Stack: 7
    python -m stackcalc run 90 sin       # -> Stack: 1
    python -m stackcalc repl             # Interactive session
    python -m stackcalc ops              # Operator reference
"""
