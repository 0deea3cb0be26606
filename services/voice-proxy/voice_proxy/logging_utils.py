"""Structured request logging (one JSON line per request)."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any


SERVICE_NAME = "voice-proxy"


def client_ip(headers: Any) -> str:
    """Best-effort caller address from edge headers."""
    return headers.get("cf-connecting-ip") or headers.get("x-forwarded-for") or "unknown"


def log_request(
    route: str,
    status: int,
    latency_ms: float,
    client_ip: str = "unknown",
    outcome: str = "ok",
    error: bool = False,
    detail: str | None = None,
) -> None:
    """Emit one JSON line with required fields."""
    payload: dict[str, Any] = {
        "ts": datetime.now(tz=timezone.utc).isoformat(),
        "service": SERVICE_NAME,
        "route": route,
        "status": status,
        "latency_ms": round(latency_ms, 2),
        "client_ip": client_ip,
        "outcome": outcome,
        "error": error,
    }
    if detail:
        payload["detail"] = detail
    print(json.dumps(payload, ensure_ascii=False))
