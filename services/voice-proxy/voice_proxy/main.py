"""Voice proxy: authenticated, validated pass-through to the payment voice API."""

from __future__ import annotations

import time
from typing import Any

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from voice_proxy import logging_utils as logging_utils_module
from voice_proxy.config import API_PATH, ProxyConfig, get_config
from voice_proxy.cors import resolve_cors_headers
from voice_proxy.errors import InternalError, ProxyError, UpstreamError
from voice_proxy.upstream import fetch_audio, fetch_voice_metadata
from voice_proxy.validation import check_authorization, validate_amount


# Docs routes disabled; non-API paths are bare 404s.
app = FastAPI(title="voice-proxy", version="0.1.0", docs_url=None, redoc_url=None, openapi_url=None)

UPSTREAM_SUCCESS_CODE = 200

# Headers that describe the upstream connection or encoding, not the relayed bytes.
_DROPPED_AUDIO_HEADERS = frozenset({
    "connection",
    "keep-alive",
    "transfer-encoding",
    "content-encoding",
    "content-length",
    "upgrade",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailer",
})


def _upstream_json_or_none(response: httpx.Response) -> dict[str, Any] | None:
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


def _relay_headers(upstream: httpx.Headers, cors: dict[str, str]) -> dict[str, str]:
    headers = {k: v for k, v in upstream.items() if k.lower() not in _DROPPED_AUDIO_HEADERS}
    headers.update({k.lower(): v for k, v in cors.items()})
    return headers


async def handle_voice_request(
    request: Request,
    config: ProxyConfig,
    cors: dict[str, str],
) -> tuple[Response, str]:
    """Authenticate, validate, call the voice API and shape the reply. Returns (response, outcome)."""
    check_authorization(request.headers.get("authorization"), config.api_key)

    number = request.query_params.get("number")
    validate_amount(number)
    want_json = request.query_params.get("type") == "json"

    async with httpx.AsyncClient(follow_redirects=True) as client:
        meta = await fetch_voice_metadata(
            client,
            config.voice_api_url,
            number,
            want_json,
            deadline_s=config.voice_api_timeout_s,
        )
        if not meta.is_success:
            raise UpstreamError(status=meta.status_code, body=_upstream_json_or_none(meta))

        data = meta.json()
        if want_json or data.get("code") != UPSTREAM_SUCCESS_CODE:
            outcome = "ok" if want_json else "upstream_rejected"
            return (
                Response(
                    content=meta.content,
                    status_code=meta.status_code,
                    headers=cors,
                    media_type="application/json",
                ),
                outcome,
            )

        audio_url = data.get("audiourl")
        if not audio_url:
            raise UpstreamError("audio file not found", status=500, outcome="audio_missing")

        audio = await fetch_audio(client, audio_url, deadline_s=config.audio_fetch_timeout_s)
        if not audio.is_success:
            raise UpstreamError(
                "audio file fetch failed",
                status=audio.status_code,
                outcome="audio_fetch_failed",
            )
        return (
            Response(
                content=audio.content,
                status_code=audio.status_code,
                headers=_relay_headers(audio.headers, cors),
            ),
            "ok",
        )


@app.api_route(
    "/{path:path}",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
)
async def voice_endpoint(request: Request, path: str) -> Response:
    """Single entry point; only paths under API_PATH are served."""
    route = request.url.path
    if not route.startswith(API_PATH):
        return Response(status_code=404)

    ip = logging_utils_module.client_ip(request.headers)
    t0 = time.perf_counter()
    cors: dict[str, str] = {}

    try:
        config = get_config()
        cors = resolve_cors_headers(config.allowed_origins, request.headers.get("origin"))

        if request.method == "OPTIONS":
            response, outcome = Response(status_code=200, headers=cors), "preflight"
        else:
            response, outcome = await handle_voice_request(request, config, cors)
        logging_utils_module.log_request(
            route=route,
            status=response.status_code,
            latency_ms=(time.perf_counter() - t0) * 1000,
            client_ip=ip,
            outcome=outcome,
            error=response.status_code >= 400,
        )
        return response
    except ProxyError as e:
        logging_utils_module.log_request(
            route=route,
            status=e.status,
            latency_ms=(time.perf_counter() - t0) * 1000,
            client_ip=ip,
            outcome=e.outcome,
            error=True,
            detail=e.msg,
        )
        return JSONResponse(e.to_body(), status_code=e.status, headers=cors)
    except Exception as e:
        err = InternalError(str(e))
        logging_utils_module.log_request(
            route=route,
            status=err.status,
            latency_ms=(time.perf_counter() - t0) * 1000,
            client_ip=ip,
            outcome=err.outcome,
            error=True,
            detail=f"{type(e).__name__}: {e}",
        )
        return JSONResponse(err.to_body(), status_code=err.status, headers=cors)


def main() -> None:
    import uvicorn

    uvicorn.run("voice_proxy.main:app", host="0.0.0.0", port=8787, reload=True)


if __name__ == "__main__":
    main()
