"""Calculator session for Pocket Calc.

Owns the (CalculatorState, history) pair for one user:
- Dispatches input events to the engine
- Appends completed calculations to the history store
- Notifies listeners when an operation fails
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from . import engine
from .engine import CalculatorState, INITIAL_STATE, StepResult
from .history import HistoryEntry, HistoryStore
from .keymap import EventKind, InputEvent, event_for_key


logger = logging.getLogger(__name__)

ERROR_TITLE = "Calculation Error"


@dataclass(frozen=True)
class Notification:
    """One-shot message for the renderer to surface."""

    title: str
    message: str


Listener = Callable[[Notification], None]


class CalculatorSession:
    """Runs input events against the engine and keeps history in sync."""

    def __init__(
        self,
        store: HistoryStore,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize a session and load persisted history.

        Args:
            store: History store backing this session.
            clock: Returns the timestamp for new history entries.
        """
        self.store = store
        self.state: CalculatorState = INITIAL_STATE
        self._clock = clock
        self._listeners: List[Listener] = []
        self.store.load()

    @property
    def history(self) -> List[HistoryEntry]:
        """Current history log, newest first."""
        return self.store.entries

    def subscribe(self, listener: Listener):
        """Register a callback for error notifications."""
        self._listeners.append(listener)

    def _now(self) -> Optional[datetime]:
        return self._clock() if self._clock else None

    def _finish(self, step: StepResult) -> CalculatorState:
        self.state = step.state
        if step.entry is not None:
            self.store.append(step.entry)
        if step.error:
            notification = Notification(title=ERROR_TITLE, message=step.error)
            logger.warning("%s: %s", notification.title, notification.message)
            for listener in self._listeners:
                listener(notification)
        return self.state

    def dispatch(self, event: InputEvent) -> CalculatorState:
        """Apply one input event.

        Raises:
            ValueError: On a malformed event (bad digit or operator).
            KeyError: If a selected history entry does not exist.
        """
        logger.debug("Event %s %r", event.kind.value, event.value)
        kind = event.kind

        if kind is EventKind.DIGIT:
            self.state = engine.input_digit(self.state, event.value or "")
        elif kind is EventKind.DECIMAL_POINT:
            self.state = engine.input_decimal_point(self.state)
        elif kind is EventKind.OPERATOR:
            return self._finish(
                engine.apply_operator(self.state, event.value or "", now=self._now())
            )
        elif kind is EventKind.EQUALS:
            return self._finish(engine.calculate(self.state, now=self._now()))
        elif kind is EventKind.CLEAR_ALL:
            self.state = engine.clear_all(self.state)
        elif kind is EventKind.CLEAR_ENTRY:
            self.state = engine.clear_entry(self.state)
        elif kind is EventKind.BACKSPACE:
            self.state = engine.backspace(self.state)
        elif kind is EventKind.PERCENTAGE:
            self.state = engine.percentage(self.state)
        elif kind is EventKind.SELECT_HISTORY_ENTRY:
            self.select_history_entry(event.value or "")

        return self.state

    def press(self, key: str) -> CalculatorState:
        """Apply a key by name; unmapped keys are ignored."""
        event = event_for_key(key)
        if event is None:
            logger.debug("Ignoring unmapped key %r", key)
            return self.state
        return self.dispatch(event)

    def press_all(self, keys: Iterable[str]) -> CalculatorState:
        """Apply a sequence of keys in order."""
        for key in keys:
            self.press(key)
        return self.state

    def select_history_entry(self, entry_id: str) -> CalculatorState:
        """Recall a history entry by ID."""
        entry = self.store.get(entry_id)
        if entry is None:
            raise KeyError(entry_id)
        self.state = engine.select_entry(self.state, entry)
        return self.state

    def clear_history(self):
        """Empty the history log."""
        self.store.clear()
