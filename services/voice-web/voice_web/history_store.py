"""
Persistence for generation history.

The controller only sees HistoryStore (load/save of the full list). The file
backend mimics browser local storage: one JSON object of key -> value, with
the history snapshot stored under a fixed key.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from voice_web.contracts import validate_history_snapshot
from voice_web.models import HistoryRecord

HISTORY_KEY = "alipayVoiceHistory"
MAX_HISTORY = 10

logger = logging.getLogger(__name__)


class HistoryStore(Protocol):
    def load(self) -> list[HistoryRecord]:
        ...

    def save(self, records: list[HistoryRecord]) -> None:
        ...


def to_snapshot(records: list[HistoryRecord]) -> list[dict]:
    snapshot = [r.to_snapshot() for r in records]
    validate_history_snapshot(snapshot)
    return snapshot


def from_snapshot(snapshot: list[dict]) -> list[HistoryRecord]:
    return [HistoryRecord.model_validate(item) for item in snapshot]


class InMemoryHistoryStore:
    """Keeps the JSON snapshot in memory (tests, ephemeral sessions)."""

    def __init__(self, snapshot: list[dict] | None = None) -> None:
        self.snapshot: list[dict] | None = snapshot

    def load(self) -> list[HistoryRecord]:
        if not self.snapshot:
            return []
        return from_snapshot(self.snapshot)

    def save(self, records: list[HistoryRecord]) -> None:
        self.snapshot = to_snapshot(records)


class JsonFileHistoryStore:
    """Local key-value JSON file; other keys in the file are left untouched."""

    def __init__(self, path: Path, key: str = HISTORY_KEY) -> None:
        self.path = Path(path)
        self.key = key

    def _read_all(self) -> dict:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        return data if isinstance(data, dict) else {}

    def load(self) -> list[HistoryRecord]:
        try:
            snapshot = self._read_all().get(self.key)
            if not snapshot:
                return []
            return from_snapshot(snapshot)
        except (OSError, ValueError, TypeError, ValidationError) as e:
            logger.error("Error loading history from %s: %s", self.path, e)
            return []

    def save(self, records: list[HistoryRecord]) -> None:
        try:
            data = self._read_all()
        except (OSError, ValueError):
            data = {}
        data[self.key] = to_snapshot(records)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(self.path)
