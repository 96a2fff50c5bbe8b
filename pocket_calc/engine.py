"""Calculation engine for Pocket Calc.

Pure state transitions for a sequential two-operand calculator:
- Digit and decimal point entry
- Operator chaining (left to right, no precedence)
- Division by zero recovery into an error display
- Result formatting (integers as-is, otherwise up to 8 fractional digits)

Every operation takes a CalculatorState and returns a new state (operator
presses wrap it in a StepResult). Nothing here touches storage or the
terminal.
"""

import logging
import math
import re
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from .history import HistoryEntry


logger = logging.getLogger(__name__)

OPERATORS = ("+", "-", "*", "/", "%")
ERROR_DISPLAY = "Error"
FRACTION_DIGITS = 8

# parseFloat-style prefix: optional sign, then Infinity or a decimal literal
_NUMERAL_PREFIX = re.compile(
    r"^\s*[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)
_TRAILING_ZEROS = re.compile(r"\.?0+$")


class CalculationError(ArithmeticError):
    """Base class for failed calculator operations."""


class DivisionByZero(CalculationError):
    """Raised when an operator completion attempts x / 0."""

    def __init__(self):
        super().__init__("Division by zero")


@dataclass(frozen=True)
class CalculatorState:
    """Snapshot of the calculator."""

    display: str = "0"
    expression: str = ""
    previous_value: Optional[float] = None
    pending_operator: Optional[str] = None
    awaiting_new_operand: bool = False
    has_error: bool = False


INITIAL_STATE = CalculatorState()


@dataclass(frozen=True)
class StepResult:
    """Outcome of an operator press.

    Attributes:
        state: The state after the transition.
        entry: History entry for a completed operation, if any.
        error: Human-readable failure message, if the operation failed.
    """

    state: CalculatorState
    entry: Optional[HistoryEntry] = None
    error: Optional[str] = None


# --- Number helpers ---


def parse_display(text: str) -> float:
    """Parse display text the way a browser's parseFloat does.

    Reads the longest numeric prefix and ignores the rest. Returns NaN when
    no prefix parses (e.g. the error display).
    """
    match = _NUMERAL_PREFIX.match(text)
    if not match:
        return math.nan
    return float(match.group(0).strip())


def number_to_string(value: float) -> str:
    """Render a number like JavaScript's Number.prototype.toString.

    Positional notation between 1e-6 and 1e21, exponent notation outside,
    and no ".0" on integral values.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    magnitude = abs(value)
    if 1e-6 <= magnitude < 1e21:
        text = format(Decimal(repr(value)), "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text

    mantissa, exponent = repr(value).split("e")
    if mantissa.endswith(".0"):
        mantissa = mantissa[:-2]
    exp = int(exponent)
    return f"{mantissa}e{'+' if exp > 0 else '-'}{abs(exp)}"


def format_result(value: float) -> str:
    """Format a computed result for display and history.

    Integral values render as integer strings. Anything else is fixed to
    8 fractional digits, then trailing zeros (and a dangling decimal point)
    are stripped: 10/4 -> "2.5", 1/3 -> "0.33333333".
    """
    value = float(value)
    if not math.isfinite(value) or value.is_integer():
        return number_to_string(value)

    # Exact binary value, ties away from zero
    fixed = Decimal(value).quantize(
        Decimal(1).scaleb(-FRACTION_DIGITS), rounding=ROUND_HALF_UP
    )
    return _TRAILING_ZEROS.sub("", format(fixed, "f"), count=1)


def _is_numeral_prefix(text: str) -> bool:
    return bool(_NUMERAL_PREFIX.match(text))


def _compute(operator: str, left: float, right: float) -> float:
    """Combine two operands under an operator.

    Raises:
        DivisionByZero: If operator is "/" and right is zero.
    """
    if operator == "+":
        return left + right
    if operator == "-":
        return left - right
    if operator == "*":
        return left * right
    if operator == "/":
        if right == 0:
            raise DivisionByZero()
        return left / right
    if operator == "%":
        return (left * right) / 100
    raise ValueError(f"Unknown operator: {operator!r}")


def _make_entry(expression: str, result: str, now: Optional[datetime]) -> HistoryEntry:
    timestamp = now or datetime.now(timezone.utc)
    entry_id = str(int(timestamp.timestamp() * 1_000_000))
    return HistoryEntry(
        id=entry_id, expression=expression, result=result, timestamp=timestamp
    )


# --- Operations ---


def input_digit(state: CalculatorState, digit: str) -> CalculatorState:
    """Enter a single digit."""
    if len(digit) != 1 or digit not in "0123456789":
        raise ValueError(f"Not a digit: {digit!r}")

    if state.has_error or state.awaiting_new_operand:
        return replace(state, display=digit, awaiting_new_operand=False, has_error=False)

    display = digit if state.display == "0" else state.display + digit
    return replace(state, display=display)


def input_decimal_point(state: CalculatorState) -> CalculatorState:
    """Enter a decimal point; no-op if the display already has one."""
    if state.has_error or state.awaiting_new_operand:
        return replace(state, display="0.", awaiting_new_operand=False, has_error=False)

    if "." in state.display:
        return state
    return replace(state, display=state.display + ".")


def clear_all(state: CalculatorState) -> CalculatorState:
    """Reset everything (AC)."""
    return INITIAL_STATE


def clear_entry(state: CalculatorState) -> CalculatorState:
    """Reset only the display (CE)."""
    return replace(state, display="0", has_error=False)


def apply_operator(
    state: CalculatorState, operator: str, now: Optional[datetime] = None
) -> StepResult:
    """Press an operator, resolving any pending one first.

    Args:
        state: Current state.
        operator: One of + - * / %, or "" for equals.
        now: Timestamp for an emitted history entry (defaults to utcnow).

    Returns:
        StepResult with the new state and, on completion, a history entry.
        Division by zero is reported through StepResult.error, never raised.
    """
    if operator and operator not in OPERATORS:
        raise ValueError(f"Unknown operator: {operator!r}")

    if state.has_error:
        # Nothing to operate on until a new numeral is entered
        return StepResult(state=state)

    input_value = parse_display(state.display)

    if state.previous_value is None or state.pending_operator is None:
        new_state = replace(
            state,
            previous_value=input_value,
            expression=f"{number_to_string(input_value)} {operator}".rstrip(),
            pending_operator=operator or None,
            awaiting_new_operand=True,
        )
        return StepResult(state=new_state)

    try:
        result = _compute(state.pending_operator, state.previous_value, input_value)
    except DivisionByZero as e:
        logger.debug("Operation failed: %s %s %s", state.previous_value,
                     state.pending_operator, input_value)
        error_state = replace(
            state,
            display=ERROR_DISPLAY,
            expression="",
            previous_value=None,
            pending_operator=None,
            has_error=True,
        )
        return StepResult(state=error_state, error=str(e))

    result_str = format_result(result)
    full_expression = f"{state.expression} {number_to_string(input_value)}"
    entry = _make_entry(full_expression, result_str, now)
    logger.debug("Completed %s = %s", full_expression, result_str)

    new_state = replace(
        state,
        display=result_str,
        previous_value=result,
        expression=f"{result_str} {operator}" if operator else "",
        pending_operator=operator or None,
        awaiting_new_operand=True,
    )
    return StepResult(state=new_state, entry=entry)


def calculate(state: CalculatorState, now: Optional[datetime] = None) -> StepResult:
    """Press equals: resolve the pending operator and end the chain."""
    step = apply_operator(state, "", now=now)
    final = replace(
        step.state,
        pending_operator=None,
        previous_value=None,
        awaiting_new_operand=True,
    )
    return StepResult(state=final, entry=step.entry, error=step.error)


def percentage(state: CalculatorState) -> CalculatorState:
    """Divide the displayed value by 100 in place."""
    if state.has_error:
        return state
    value = parse_display(state.display) / 100
    return replace(state, display=number_to_string(value))


def backspace(state: CalculatorState) -> CalculatorState:
    """Remove the last character of the display.

    In the error state this acts as clear entry: the display becomes "0" and
    has_error is cleared, so the display is never left as a partial "Error".
    """
    if state.has_error:
        return clear_entry(state)

    remaining = state.display[:-1]
    if not remaining or not _is_numeral_prefix(remaining):
        remaining = "0"
    return replace(state, display=remaining)


def select_entry(state: CalculatorState, entry: HistoryEntry) -> CalculatorState:
    """Recall a history entry as the start of a fresh calculation."""
    return replace(
        INITIAL_STATE,
        display=entry.result,
        awaiting_new_operand=True,
    )
