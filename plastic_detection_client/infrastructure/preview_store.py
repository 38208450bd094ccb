"""Preview stores backing the on-screen image preview."""

from __future__ import annotations

import tempfile
import threading
import uuid
from pathlib import Path

from ..crosscutting.logging_setup import get_logger
from ..domain.image import SelectedImage
from ..domain.preview import PreviewHandle


class TempFilePreviewStore:
    """Writes each preview to its own temporary file and deletes it on release."""

    def __init__(self, directory: Path | None = None, *, logger=None) -> None:
        self._directory = Path(directory) if directory is not None else None
        self._live: set[str] = set()
        self._lock = threading.RLock()
        self._logger = logger or get_logger(__name__)

    def acquire(self, image: SelectedImage) -> PreviewHandle:
        if self._directory is not None:
            self._directory.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            prefix="preview-",
            suffix=image.suffix,
            dir=self._directory,
            delete=False,
        ) as handle_file:
            handle_file.write(image.content)
            path = handle_file.name
        with self._lock:
            self._live.add(path)
        self._logger.debug("preview.acquired", path=path, size=image.size)
        return PreviewHandle(reference=path, mime_type=image.mime_type)

    def release(self, handle: PreviewHandle) -> None:
        with self._lock:
            if handle.reference not in self._live:
                return
            self._live.discard(handle.reference)
        Path(handle.reference).unlink(missing_ok=True)
        self._logger.debug("preview.released", path=handle.reference)

    def live_handles(self) -> int:
        with self._lock:
            return len(self._live)

    def close(self) -> None:
        """Release every preview still held by this store."""

        with self._lock:
            paths = tuple(self._live)
        for path in paths:
            self.release(PreviewHandle(reference=path, mime_type=""))


class InMemoryPreviewStore:
    """Keeps preview bytes in a dictionary; used for tests and the console command."""

    def __init__(self) -> None:
        self._previews: dict[str, bytes] = {}
        self.released: list[PreviewHandle] = []

    def acquire(self, image: SelectedImage) -> PreviewHandle:
        key = f"memory://{uuid.uuid4().hex}/{image.name}"
        self._previews[key] = image.content
        return PreviewHandle(reference=key, mime_type=image.mime_type)

    def release(self, handle: PreviewHandle) -> None:
        if self._previews.pop(handle.reference, None) is not None:
            self.released.append(handle)

    def read(self, handle: PreviewHandle) -> bytes:
        return self._previews[handle.reference]

    def live_handles(self) -> int:
        return len(self._previews)

    def close(self) -> None:
        for key in list(self._previews):
            self.release(PreviewHandle(reference=key, mime_type=""))


__all__ = ["InMemoryPreviewStore", "TempFilePreviewStore"]
