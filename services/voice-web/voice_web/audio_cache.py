"""Local copies of generated audio, addressed by file:// URI."""

from __future__ import annotations

import shutil
import uuid
from pathlib import Path
from urllib.parse import unquote, urlparse

_EXTENSIONS = {
    "audio/mpeg": ".mp3",
    "audio/mp3": ".mp3",
    "audio/wav": ".wav",
    "audio/x-wav": ".wav",
    "audio/ogg": ".ogg",
    "audio/aac": ".aac",
}


def extension_for(content_type: str | None) -> str:
    mime = (content_type or "").split(";")[0].strip().lower()
    return _EXTENSIONS.get(mime, ".mp3")


def uri_to_path(uri: str) -> Path:
    parsed = urlparse(uri)
    if parsed.scheme != "file":
        raise ValueError(f"Not a local audio URI: {uri}")
    return Path(unquote(parsed.path))


class AudioCache:
    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def materialize(self, data: bytes, content_type: str | None = None) -> str:
        """Write audio bytes to a new file and return its file:// URI."""
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / f"{uuid.uuid4().hex}{extension_for(content_type)}"
        path.write_bytes(data)
        return path.resolve().as_uri()

    def copy_to(self, uri: str, dest: Path) -> Path:
        """Save the audio behind uri as dest (parent dirs created)."""
        dest = Path(dest)
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(uri_to_path(uri), dest)
        return dest
