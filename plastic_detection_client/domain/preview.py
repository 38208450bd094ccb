from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from .image import SelectedImage


@dataclass(frozen=True)
class PreviewHandle:
    """Locally resolvable reference used to display the selected image."""

    reference: str
    mime_type: str


class PreviewStore(Protocol):
    """Acquires and releases preview handles for selected images."""

    def acquire(self, image: SelectedImage) -> PreviewHandle:
        """Create a preview for ``image``."""

    def release(self, handle: PreviewHandle) -> None:
        """Free the resources behind ``handle``; releasing twice is harmless."""
