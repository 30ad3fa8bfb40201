from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Optional


_DEFAULT_PROMPT = "user> "
_DEFAULT_HISTORY_FILE = Path.home() / ".mallet_history"
_DEFAULT_LOG_LEVEL = "WARNING"


def get_prompt() -> str:
    return os.environ.get("MALLET_PROMPT", _DEFAULT_PROMPT)


def get_history_file() -> Optional[Path]:
    # set but empty disables history
    raw = os.environ.get("MALLET_HISTORY_FILE")
    if raw is None:
        return _DEFAULT_HISTORY_FILE
    raw = raw.strip()
    return Path(raw).expanduser() if raw else None


def get_log_level() -> int:
    name = os.environ.get("MALLET_LOG_LEVEL", _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING
