"""Client-side models: return format and persisted history records."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ReturnFormat = Literal["audio", "json"]
RETURN_FORMATS: tuple[str, ...] = ("audio", "json")


def _new_id() -> str:
    return uuid.uuid4().hex


def _now() -> datetime:
    return datetime.now(tz=timezone.utc)


class HistoryRecord(BaseModel):
    """One successful audio generation. Serialized with camelCase audioUrl."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(default_factory=_new_id, min_length=1)
    amount: str = Field(min_length=1, description="Amount with grouping separators removed")
    timestamp: datetime = Field(default_factory=_now)
    audio_url: str = Field(alias="audioUrl", min_length=1, description="file:// URI of the local audio copy")

    def to_snapshot(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
