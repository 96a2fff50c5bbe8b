"""Pocket Calc - Keyboard-driven Calculator.

A two-operand calculator with:
- Pure state-machine engine (digits, operators, equals, clear, backspace)
- Division by zero recovery with error notifications
- Bounded, persisted calculation history (newest first)
- Rich terminal rendering and a click CLI
"""

__version__ = "1.0.0"

from .engine import (
    CalculatorState,
    INITIAL_STATE,
    StepResult,
    CalculationError,
    DivisionByZero,
    format_result,
)
from .history import (
    HistoryEntry,
    HistoryStore,
    get_history_store,
)
from .keymap import (
    EventKind,
    InputEvent,
    event_for_key,
)
from .session import (
    CalculatorSession,
    Notification,
)

__all__ = [
    # Engine
    "CalculatorState",
    "INITIAL_STATE",
    "StepResult",
    "CalculationError",
    "DivisionByZero",
    "format_result",
    # History
    "HistoryEntry",
    "HistoryStore",
    "get_history_store",
    # Input
    "EventKind",
    "InputEvent",
    "event_for_key",
    # Session
    "CalculatorSession",
    "Notification",
]
