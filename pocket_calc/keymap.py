"""Keyboard mapping for Pocket Calc.

Translates key names (as a browser or terminal reports them) into input
events. Unknown keys map to None.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class EventKind(Enum):
    """Kinds of input the calculator accepts."""

    DIGIT = "digit"
    DECIMAL_POINT = "decimal_point"
    OPERATOR = "operator"
    EQUALS = "equals"
    CLEAR_ALL = "clear_all"
    CLEAR_ENTRY = "clear_entry"
    BACKSPACE = "backspace"
    PERCENTAGE = "percentage"
    SELECT_HISTORY_ENTRY = "select_history_entry"


@dataclass(frozen=True)
class InputEvent:
    """A single discrete input event."""

    kind: EventKind
    value: Optional[str] = None

    @classmethod
    def digit(cls, d: str) -> "InputEvent":
        return cls(EventKind.DIGIT, d)

    @classmethod
    def operator(cls, op: str) -> "InputEvent":
        return cls(EventKind.OPERATOR, op)

    @classmethod
    def select_history_entry(cls, entry_id: str) -> "InputEvent":
        return cls(EventKind.SELECT_HISTORY_ENTRY, entry_id)


NAMED_KEYS = {
    "Enter": InputEvent(EventKind.EQUALS),
    "=": InputEvent(EventKind.EQUALS),
    "Escape": InputEvent(EventKind.CLEAR_ALL),
    "Backspace": InputEvent(EventKind.BACKSPACE),
    "Delete": InputEvent(EventKind.CLEAR_ENTRY),
    ".": InputEvent(EventKind.DECIMAL_POINT),
    "%": InputEvent(EventKind.PERCENTAGE),
}


def event_for_key(key: str) -> Optional[InputEvent]:
    """Map a key name to an input event.

    Args:
        key: Key name, e.g. "7", "+", "Enter", "Escape".

    Returns:
        The matching InputEvent, or None for unmapped keys.
    """
    if len(key) == 1 and key in "0123456789":
        return InputEvent.digit(key)
    if key in ("+", "-", "*", "/"):
        return InputEvent.operator(key)
    return NAMED_KEYS.get(key)


def tokenize_keys(text: str) -> List[str]:
    """Split typed text into key names.

    Every character is its own key, except names in braces such as
    {Enter} or {Backspace}. Whitespace separates nothing and is dropped.

    Raises:
        ValueError: On an unterminated brace.
    """
    keys = []
    i = 0
    while i < len(text):
        char = text[i]
        if char == "{":
            end = text.find("}", i)
            if end == -1:
                raise ValueError(f"Unterminated key name in: {text!r}")
            keys.append(text[i + 1 : end])
            i = end + 1
            continue
        if not char.isspace():
            keys.append(char)
        i += 1
    return keys
