"""Deadline-bounded upstream calls over httpx.MockTransport. No network."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from voice_proxy.errors import UpstreamTimeout
from voice_proxy.upstream import fetch, fetch_audio, fetch_voice_metadata

BASE_URL = "https://upstream.example/api/alipay/"


@pytest.mark.asyncio
async def test_metadata_call_forwards_number_and_json_type() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"code": 200})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        r = await fetch_voice_metadata(client, BASE_URL, "12.50", want_json=True)

    assert r.status_code == 200
    assert len(seen) == 1
    assert seen[0].url.params["number"] == "12.50"
    assert seen[0].url.params["type"] == "json"


@pytest.mark.asyncio
async def test_metadata_call_omits_type_for_audio() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"code": 200})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        await fetch_voice_metadata(client, BASE_URL, "8", want_json=False)

    assert "type" not in seen[0].url.params


@pytest.mark.asyncio
async def test_httpx_timeout_becomes_upstream_timeout() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow upstream", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(UpstreamTimeout) as exc:
            await fetch_audio(client, "https://cdn.example/a.mp3")
    assert exc.value.to_body() == {"code": 504, "msg": "request timed out"}


@pytest.mark.asyncio
async def test_total_deadline_cancels_slow_call() -> None:
    cancelled = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        try:
            await asyncio.sleep(5)
        except asyncio.CancelledError:
            cancelled.set()
            raise
        return httpx.Response(200)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(UpstreamTimeout):
            await fetch(client, "https://cdn.example/a.mp3", deadline_s=0.05)
    assert cancelled.is_set()


@pytest.mark.asyncio
async def test_non_success_status_is_returned_not_raised() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        r = await fetch_audio(client, "https://cdn.example/missing.mp3")
    assert r.status_code == 404
