"""Configuration for Pocket Calc.

Reads .pocket-calc/config.json under the project path:
- history.max_entries: size of the history log
- history.storage_key: name the history is persisted under
- logging.level: log level for the pocket_calc logger
"""

import json
from dataclasses import dataclass
from pathlib import Path

from .history import DEFAULT_MAX_ENTRIES, DEFAULT_STORAGE_KEY


DATA_DIR = ".pocket-calc"


@dataclass
class CalcConfig:
    """Calculator configuration options."""

    max_entries: int = DEFAULT_MAX_ENTRIES
    storage_key: str = DEFAULT_STORAGE_KEY
    log_level: str = "WARNING"


def load_config(project_path: str) -> CalcConfig:
    """Load configuration from project config.

    Args:
        project_path: Path to project root.

    Returns:
        CalcConfig with settings from config.json or defaults.
    """
    config_file = Path(project_path) / DATA_DIR / "config.json"

    if config_file.exists():
        try:
            with open(config_file) as f:
                data = json.load(f)
            history_config = data.get("history", {})
            logging_config = data.get("logging", {})

            max_entries = history_config.get("max_entries", DEFAULT_MAX_ENTRIES)
            if not isinstance(max_entries, int) or max_entries < 1:
                max_entries = DEFAULT_MAX_ENTRIES

            return CalcConfig(
                max_entries=max_entries,
                storage_key=history_config.get("storage_key", DEFAULT_STORAGE_KEY),
                log_level=str(logging_config.get("level", "WARNING")).upper(),
            )
        except (json.JSONDecodeError, IOError, AttributeError):
            pass

    return CalcConfig()
