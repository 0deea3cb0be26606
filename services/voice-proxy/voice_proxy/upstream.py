"""Deadline-bounded calls to the voice API and its audio host. Single attempt, no retries."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx

from voice_proxy.errors import UpstreamTimeout


async def fetch(
    client: httpx.AsyncClient,
    url: str,
    params: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
    deadline_s: float = 5.0,
) -> httpx.Response:
    """
    GET url with a total deadline covering connect, headers and body.

    The in-flight request is cancelled when the deadline passes and
    UpstreamTimeout is raised instead.
    """
    try:
        return await asyncio.wait_for(
            client.get(url, params=params, headers=headers, timeout=deadline_s),
            timeout=deadline_s,
        )
    except (asyncio.TimeoutError, httpx.TimeoutException) as e:
        raise UpstreamTimeout() from e


async def fetch_voice_metadata(
    client: httpx.AsyncClient,
    base_url: str,
    number: str,
    want_json: bool,
    deadline_s: float = 5.0,
) -> httpx.Response:
    """Call the voice API with the raw amount string (and type=json when asked)."""
    params: dict[str, Any] = {"number": number}
    if want_json:
        params["type"] = "json"
    return await fetch(
        client,
        base_url,
        params=params,
        headers={"Content-Type": "application/json"},
        deadline_s=deadline_s,
    )


async def fetch_audio(
    client: httpx.AsyncClient,
    audio_url: str,
    deadline_s: float = 10.0,
) -> httpx.Response:
    """Download the audio file the voice API pointed at."""
    return await fetch(client, audio_url, deadline_s=deadline_s)
