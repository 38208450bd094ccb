from __future__ import annotations

from typing import Protocol

from .detection import DetectionResponse
from .image import SelectedImage


class DetectionGateway(Protocol):
    """Boundary to the remote detection service."""

    def detect(self, image: SelectedImage) -> DetectionResponse:
        """Submit ``image`` and return the parsed detections.

        Implementations raise :class:`DetectionServiceError` for every transport,
        status or payload failure.
        """
