"""CORS header resolution against the configured origin allow-list."""

from __future__ import annotations


def parse_allow_list(allowed_origins: str) -> list[str]:
    """Split a comma-separated allow-list; blank entries are dropped."""
    return [o.strip() for o in (allowed_origins or "").split(",") if o.strip()]


def is_origin_allowed(allowed_origins: str, origin: str) -> bool:
    allow_list = parse_allow_list(allowed_origins)
    return "*" in allow_list or (bool(origin) and origin in allow_list)


def resolve_cors_headers(allowed_origins: str, origin: str | None) -> dict[str, str]:
    """
    Pure function of (allow-list, request Origin) -> CORS headers.

    The allow-origin value echoes the request origin when allowed, else is empty.
    """
    origin = origin or ""
    return {
        "Access-Control-Allow-Origin": origin if is_origin_allowed(allowed_origins, origin) else "",
        "Access-Control-Allow-Methods": "GET",
        "Access-Control-Allow-Headers": "Content-Type, Authorization",
    }
