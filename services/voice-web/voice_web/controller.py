"""
Form controller for the voice generator.

Holds the form state (raw amount, display formatting, chosen format, loading
flag, error message, current result) and the capped history list. Every history
mutation is written through to the HistoryStore as a full snapshot.
"""

from __future__ import annotations

import logging
from datetime import timezone
from pathlib import Path
from typing import Any

import httpx

from voice_web.audio_cache import AudioCache
from voice_web.config import WebConfig
from voice_web.formatting import (
    AmountError,
    format_amount_display,
    parse_amount,
    strip_grouping,
)
from voice_web.history_store import MAX_HISTORY, HistoryStore
from voice_web.models import RETURN_FORMATS, HistoryRecord, ReturnFormat
from voice_web.proxy_client import request_voice

logger = logging.getLogger(__name__)

GENERIC_ERROR = "an error occurred"
JSON_REQUEST_FAILED = "request failed"
AUDIO_GENERATION_FAILED = "audio generation failed"


def _error_message(response: httpx.Response, fallback: str) -> str:
    """msg field of a JSON error body, else fallback."""
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict) and body.get("msg"):
        return str(body["msg"])
    return fallback


def _is_audio(response: httpx.Response) -> bool:
    return response.headers.get("content-type", "").startswith("audio/")


class FormController:
    def __init__(
        self,
        store: HistoryStore,
        audio_cache: AudioCache,
        config: WebConfig | None = None,
    ) -> None:
        self.store = store
        self.audio_cache = audio_cache
        self.config = config or WebConfig()

        self.amount = ""
        self.formatted_amount = ""
        self.return_format: ReturnFormat = "audio"
        self.result: dict[str, Any] | None = None
        self.loading = False
        self.error = ""
        self.history: list[HistoryRecord] = store.load()

    def update_amount(self, raw: str) -> None:
        """Store raw input; formatted_amount is display-only."""
        self.amount = raw
        self.formatted_amount = format_amount_display(raw)

    def set_return_format(self, fmt: str) -> None:
        if fmt not in RETURN_FORMATS:
            raise ValueError(f"Unknown return format: {fmt!r}")
        self.return_format = fmt  # type: ignore[assignment]

    @property
    def can_submit(self) -> bool:
        return not self.loading and bool(self.amount)

    async def submit(self, amount: str | None = None, fmt: ReturnFormat | None = None) -> None:
        """Validate locally, call the proxy once, and store the result or an error message."""
        if self.loading:
            return
        if amount is not None:
            self.update_amount(amount)
        if fmt is not None:
            self.set_return_format(fmt)

        self.loading = True
        self.error = ""
        self.result = None
        try:
            numeric_amount = strip_grouping(self.amount)
            parse_amount(numeric_amount)

            async with httpx.AsyncClient(timeout=self.config.timeout_s) as client:
                response = await request_voice(
                    client,
                    self.config.proxy_base_url,
                    numeric_amount,
                    self.return_format,
                    self.config.api_key,
                )
                if self.return_format == "json":
                    self._handle_json(response)
                else:
                    self._handle_audio(response, numeric_amount)
        except AmountError as e:
            self.error = str(e)
        except Exception as e:
            logger.info("Voice request failed: %s", e)
            self.error = str(e) or GENERIC_ERROR
        finally:
            self.loading = False

    def _handle_json(self, response: httpx.Response) -> None:
        if not response.is_success:
            raise RuntimeError(_error_message(response, JSON_REQUEST_FAILED))
        self.result = response.json()

    def _handle_audio(self, response: httpx.Response, numeric_amount: str) -> None:
        if not (response.is_success and _is_audio(response)):
            raise RuntimeError(_error_message(response, AUDIO_GENERATION_FAILED))
        audio_url = self.audio_cache.materialize(
            response.content, response.headers.get("content-type")
        )
        self._push_history(HistoryRecord(amount=numeric_amount, audio_url=audio_url))
        self.result = {"audiourl": audio_url, "number": numeric_amount}

    def _push_history(self, record: HistoryRecord) -> None:
        """Persist first; in-memory history only changes once the save succeeded."""
        updated = [record, *self.history][:MAX_HISTORY]
        self.store.save(updated)
        self.history = updated

    def replay(self, record: HistoryRecord) -> None:
        """Show a past record as the current result; no network call."""
        self.result = {"audiourl": record.audio_url, "number": record.amount}

    def download_current_result(self, dest_dir: Path) -> Path | None:
        if not self.result or not self.result.get("audiourl"):
            return None
        filename = f"alipay_voice_{self.result['number']}.mp3"
        return self.audio_cache.copy_to(self.result["audiourl"], Path(dest_dir) / filename)

    def download_history_record(self, record: HistoryRecord, dest_dir: Path) -> Path:
        ts = record.timestamp
        if ts.tzinfo is not None:
            ts = ts.astimezone(timezone.utc)
        filename = f"alipay_voice_{record.amount}_{ts.date().isoformat()}.mp3"
        return self.audio_cache.copy_to(record.audio_url, Path(dest_dir) / filename)

    def find_record(self, record_id: str) -> HistoryRecord | None:
        return next((r for r in self.history if r.id == record_id), None)
