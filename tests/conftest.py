from __future__ import annotations

from typing import Callable

import httpx
import pytest

from plastic_detection_client.application.detection_client import DetectionClient
from plastic_detection_client.crosscutting.config import ClientSettings
from plastic_detection_client.crosscutting.logging_setup import get_logger
from plastic_detection_client.domain.image import SelectedImage
from plastic_detection_client.domain.state import ClientState
from plastic_detection_client.infrastructure.detection_service import HttpDetectionService
from plastic_detection_client.infrastructure.preview_store import InMemoryPreviewStore
from plastic_detection_client.shared.bus import EventBus

from fakes import SERVICE_URL

ENV_NAMES = ("SERVICE_URL", "DETECT_PATH", "UPLOAD_FIELD", "REQUEST_TIMEOUT", "LOG_LEVEL", "LOG_JSON", "PREVIEW_DIR")


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    for name in ENV_NAMES:
        monkeypatch.delenv(f"PDC_{name}", raising=False)
    # Keeps a developer's local .env out of the settings under test.
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> ClientSettings:
    return ClientSettings(service_url=SERVICE_URL)


@pytest.fixture
def image() -> SelectedImage:
    return SelectedImage(name="bottle.png", content=b"\x89PNG fake image", mime_type="image/png")


@pytest.fixture
def preview_store() -> InMemoryPreviewStore:
    return InMemoryPreviewStore()


@pytest.fixture
def bus() -> EventBus[ClientState]:
    return EventBus()


@pytest.fixture
def make_client(preview_store, bus) -> Callable[..., DetectionClient]:
    def factory(gateway) -> DetectionClient:
        return DetectionClient(gateway, preview_store, bus, get_logger("test.client"))

    return factory


@pytest.fixture
def http_service(settings) -> Callable[..., HttpDetectionService]:
    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> HttpDetectionService:
        return HttpDetectionService(settings, transport=httpx.MockTransport(handler), logger=get_logger("test.http"))

    return factory
