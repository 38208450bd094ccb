from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path


DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class SelectedImage:
    """Image chosen by the user, held in memory until the next selection."""

    name: str
    content: bytes
    mime_type: str = DEFAULT_MIME_TYPE

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def suffix(self) -> str:
        return Path(self.name).suffix.lower()

    @classmethod
    def from_path(cls, path: Path) -> "SelectedImage":
        """Read ``path`` and guess its MIME type from the file extension."""

        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(name=path.name, content=path.read_bytes(), mime_type=mime_type or DEFAULT_MIME_TYPE)

    def __repr__(self) -> str:
        return f"SelectedImage(name={self.name!r}, mime_type={self.mime_type!r}, size={self.size})"
