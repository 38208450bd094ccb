"""httpx adapter for the remote detection service."""

from __future__ import annotations

import json
from typing import Any

import httpx
from pydantic import ValidationError

from ..crosscutting.config import ClientSettings
from ..crosscutting.logging_setup import get_logger
from ..domain.detection import DetectionResponse
from ..domain.image import SelectedImage
from ..shared.errors import DetectionServiceError


class HttpDetectionService:
    """Posts images as multipart form data to ``POST {service_url}/detect``.

    A single best-effort request is made per call; there are no retries. Every
    failure mode surfaces as :class:`DetectionServiceError` with the original
    exception chained.
    """

    def __init__(
        self,
        settings: ClientSettings,
        *,
        transport: httpx.BaseTransport | None = None,
        logger=None,
    ) -> None:
        self._url = settings.detect_url
        self._field = settings.upload_field
        self._timeout = settings.request_timeout
        self._transport = transport
        self._logger = logger or get_logger(__name__, url=self._url)

    @property
    def url(self) -> str:
        return self._url

    def detect(self, image: SelectedImage) -> DetectionResponse:
        files = {self._field: (image.name, image.content, image.mime_type)}
        self._logger.debug("detection_service.request", image=image.name, size=image.size)
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                response = client.post(self._url, files=files, headers={"Accept": "application/json"})
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._logger.warning("detection_service.error", status_code=exc.response.status_code)
            raise DetectionServiceError(f"Detection service returned HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            self._logger.warning("detection_service.error", error=str(exc))
            raise DetectionServiceError(f"HTTP request failed: {exc}") from exc

        return self._parse(response)

    def _parse(self, response: httpx.Response) -> DetectionResponse:
        try:
            payload: Any = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            self._logger.warning("detection_service.error", error="invalid json")
            raise DetectionServiceError("Detection service returned a body that is not JSON") from exc

        if not isinstance(payload, dict):
            self._logger.warning("detection_service.error", error="unexpected payload", kind=type(payload).__name__)
            raise DetectionServiceError("Detection service returned JSON that is not an object")

        try:
            return DetectionResponse.model_validate(payload)
        except ValidationError as exc:
            self._logger.warning("detection_service.error", error="schema mismatch", issues=exc.error_count())
            raise DetectionServiceError("Detection service returned malformed detections") from exc


__all__ = ["HttpDetectionService"]
