"""JSON Schema contracts under the repo-level contracts/ directory."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path

import jsonschema

CONTRACTS_DIR = Path(__file__).resolve().parents[3] / "contracts"
HISTORY_SCHEMA = "voice_history.schema.json"


@lru_cache(maxsize=None)
def load_schema(name: str) -> dict:
    return json.loads((CONTRACTS_DIR / name).read_text(encoding="utf-8"))


def validate_history_snapshot(snapshot: list[dict]) -> None:
    """Raise jsonschema.ValidationError if the persisted history is malformed."""
    jsonschema.validate(snapshot, load_schema(HISTORY_SCHEMA))
