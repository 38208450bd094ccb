"""Test doubles and payload builders shared by the unit and integration tests."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx

from plastic_detection_client.domain.detection import DetectionResponse
from plastic_detection_client.domain.image import SelectedImage

SERVICE_URL = "http://detector.test:5000"


class FakeGateway:
    """Returns queued responses (or raises queued errors) and records every image."""

    def __init__(self, *results: DetectionResponse | Exception) -> None:
        self._results = list(results)
        self.calls: list[SelectedImage] = []
        self.on_detect: Callable[[], None] | None = None

    def detect(self, image: SelectedImage) -> DetectionResponse:
        self.calls.append(image)
        if self.on_detect is not None:
            self.on_detect()
        result = self._results.pop(0) if self._results else DetectionResponse()
        if isinstance(result, Exception):
            raise result
        return result


def detection(label: str, confidence: float = 0.9, bbox: tuple = (1, 2, 3, 4)) -> dict[str, Any]:
    return {"class": label, "confidence": confidence, "bbox": list(bbox)}


def response(*detections: dict[str, Any]) -> DetectionResponse:
    return DetectionResponse.model_validate({"detections": list(detections)})


def json_handler(payload: Any, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            status_code,
            content=json.dumps(payload).encode(),
            headers={"Content-Type": "application/json"},
        )

    return handler
