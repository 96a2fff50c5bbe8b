"""Calculation history for Pocket Calc.

Manages the persisted history file (newest first, bounded):
- Append completed calculations
- Clear on request
- Load at startup, dropping entries that no longer parse
"""

import json
import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional


logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 50
DEFAULT_STORAGE_KEY = "calculator-history"


def parse_timestamp(value) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing "Z".

    Naive timestamps are taken to be UTC.

    Raises:
        ValueError: If value is not a parseable timestamp string.
    """
    if not isinstance(value, str):
        raise ValueError(f"Timestamp is not a string: {value!r}")

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    timestamp = datetime.fromisoformat(text)
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp


@dataclass(frozen=True)
class HistoryEntry:
    """One completed calculation."""

    id: str
    expression: str
    result: str
    timestamp: datetime

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "expression": self.expression,
            "result": self.result,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HistoryEntry":
        """Create from dictionary.

        Raises:
            KeyError: If a required field is missing.
            ValueError: If the timestamp does not parse.
        """
        return cls(
            id=str(data["id"]),
            expression=str(data["expression"]),
            result=str(data["result"]),
            timestamp=parse_timestamp(data["timestamp"]),
        )


def prepend_bounded(
    log: List[HistoryEntry], entry: HistoryEntry, limit: int = DEFAULT_MAX_ENTRIES
) -> List[HistoryEntry]:
    """Return a new log with entry first and at most limit entries."""
    return [entry] + list(log[: max(limit - 1, 0)])


class HistoryStore:
    """Manages calculation history in <storage_key>.json."""

    def __init__(
        self,
        project_path: str,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        storage_key: str = DEFAULT_STORAGE_KEY,
    ):
        """Initialize with project path.

        Args:
            project_path: Directory holding the .pocket-calc data folder.
            max_entries: Maximum number of entries kept.
            storage_key: Name the history is stored under.
        """
        self.project_path = Path(project_path).resolve()
        self.max_entries = max_entries
        self.storage_key = storage_key
        self.history_file = self.project_path / ".pocket-calc" / f"{storage_key}.json"
        self._entries: Optional[List[HistoryEntry]] = None

    def load(self) -> List[HistoryEntry]:
        """Read the history file.

        Entries that fail to parse are dropped. A missing or unreadable file
        yields an empty log.
        """
        self._entries = []

        if not self.history_file.exists():
            return list(self._entries)

        try:
            with open(self.history_file) as f:
                raw = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable history file %s: %s", self.history_file, e)
            return list(self._entries)

        if not isinstance(raw, list):
            logger.warning("Ignoring history file %s: expected a list", self.history_file)
            return list(self._entries)

        for item in raw:
            try:
                self._entries.append(HistoryEntry.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Dropping history entry %r: %s", item, e)

        self._entries = self._entries[: self.max_entries]
        return list(self._entries)

    def _save(self):
        """Write the history file."""
        if self._entries is None:
            return

        try:
            self.history_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.history_file, "w") as f:
                json.dump([e.to_dict() for e in self._entries], f, indent=2)
        except OSError as e:
            logger.error("Failed to save history to %s: %s", self.history_file, e)

    @property
    def entries(self) -> List[HistoryEntry]:
        """Current log, newest first."""
        if self._entries is None:
            self.load()
        return list(self._entries)

    def _unique_id(self, entry_id: str) -> str:
        """Suffix entry_id with -1, -2, ... until no logged entry uses it."""
        taken = {e.id for e in self.entries}
        if entry_id not in taken:
            return entry_id

        n = 1
        while f"{entry_id}-{n}" in taken:
            n += 1
        return f"{entry_id}-{n}"

    def append(self, entry: HistoryEntry) -> List[HistoryEntry]:
        """Add an entry at the front, evicting the oldest past the limit.

        An entry whose id is already logged is stored under a suffixed id.
        """
        unique_id = self._unique_id(entry.id)
        if unique_id != entry.id:
            entry = replace(entry, id=unique_id)
        self._entries = prepend_bounded(self.entries, entry, self.max_entries)
        self._save()
        return list(self._entries)

    def clear(self) -> List[HistoryEntry]:
        """Remove all entries."""
        self._entries = []
        self._save()
        return []

    def get(self, entry_id: str) -> Optional[HistoryEntry]:
        """Get a specific entry by ID."""
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None


def get_history_store(
    project_path: str = ".", max_entries: int = DEFAULT_MAX_ENTRIES
) -> HistoryStore:
    """Get a history store instance."""
    return HistoryStore(project_path, max_entries=max_entries)
