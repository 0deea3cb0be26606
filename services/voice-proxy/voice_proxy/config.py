"""Proxy configuration from environment (allow-list, shared key, upstream)."""

from __future__ import annotations

import os
from dataclasses import dataclass

API_PATH = "/api/alipay-voice"
MAX_AMOUNT = 100_000_000_000


@dataclass(frozen=True)
class ProxyConfig:
    allowed_origins: str = ""
    api_key: str = ""
    voice_api_url: str = "https://api.pearktrue.cn/api/alipay/"
    voice_api_timeout_s: float = 5.0
    audio_fetch_timeout_s: float = 10.0

    @classmethod
    def from_env(cls) -> "ProxyConfig":
        return cls(
            allowed_origins=os.environ.get("ALLOWED_ORIGINS", cls.allowed_origins),
            api_key=os.environ.get("API_KEY", cls.api_key),
            voice_api_url=os.environ.get("VOICE_API_URL", cls.voice_api_url),
            voice_api_timeout_s=float(
                os.environ.get("VOICE_API_TIMEOUT_S", str(cls.voice_api_timeout_s))
            ),
            audio_fetch_timeout_s=float(
                os.environ.get("AUDIO_FETCH_TIMEOUT_S", str(cls.audio_fetch_timeout_s))
            ),
        )


def get_config() -> ProxyConfig:
    """Read configuration per request; nothing is cached between invocations."""
    return ProxyConfig.from_env()
