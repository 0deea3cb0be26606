"""HTTP client for the voice proxy."""

from __future__ import annotations

import httpx

from voice_web.models import ReturnFormat

API_PATH = "/api/alipay-voice"


async def request_voice(
    client: httpx.AsyncClient,
    base_url: str,
    amount: str,
    fmt: ReturnFormat,
    api_key: str,
) -> httpx.Response:
    """One GET to the proxy; status is not checked here, the caller inspects it."""
    params = {"number": amount}
    if fmt == "json":
        params["type"] = "json"
    headers = {"Authorization": f"Bearer {api_key}"} if api_key else {}
    return await client.get(f"{base_url.rstrip('/')}{API_PATH}", params=params, headers=headers)
