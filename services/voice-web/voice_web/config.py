from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

_DATA_DIR = Path.home() / ".alipay-voice"


@dataclass(frozen=True)
class WebConfig:
    proxy_base_url: str = "http://127.0.0.1:8787"
    api_key: str = ""
    history_path: Path = _DATA_DIR / "storage.json"
    audio_dir: Path = _DATA_DIR / "audio"
    timeout_s: float = 30.0

    @classmethod
    def from_env(cls) -> "WebConfig":
        return cls(
            proxy_base_url=os.environ.get("VOICE_PROXY_URL", cls.proxy_base_url),
            api_key=os.environ.get("VOICE_PROXY_API_KEY", cls.api_key),
            history_path=Path(os.environ.get("VOICE_HISTORY_PATH", str(cls.history_path))).expanduser(),
            audio_dir=Path(os.environ.get("VOICE_AUDIO_DIR", str(cls.audio_dir))).expanduser(),
            timeout_s=float(os.environ.get("VOICE_TIMEOUT_S", str(cls.timeout_s))),
        )
