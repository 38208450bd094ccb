"""Composition root wiring settings, logging, gateway and preview store."""

from __future__ import annotations

from typing import Callable

from .application.detection_client import DetectionClient
from .crosscutting.config import ClientSettings, load_settings
from .crosscutting.logging_setup import get_logger, setup_logging
from .domain.gateway import DetectionGateway
from .domain.preview import PreviewStore
from .domain.state import ClientState
from .infrastructure.detection_service import HttpDetectionService
from .infrastructure.preview_store import TempFilePreviewStore
from .shared.bus import EventBus


class ApplicationContainer:
    """Lazily builds singletons and hands out one :class:`DetectionClient` per session."""

    def __init__(self, settings: ClientSettings | None = None) -> None:
        self._settings = settings
        self._logger = None
        self._preview_store: PreviewStore | None = None
        self._logging_configured = False
        self._gateway_factory: Callable[[ClientSettings], DetectionGateway] = HttpDetectionService
        self._preview_store_factory: Callable[[ClientSettings], PreviewStore] = (
            lambda settings: TempFilePreviewStore(settings.preview_dir)
        )

    # ------------------------------------------------------------------
    # Singleton providers
    @property
    def settings(self) -> ClientSettings:
        if self._settings is None:
            self._settings = load_settings()
        return self._settings

    @property
    def logger(self):
        if self._logger is None:
            self._logger = get_logger("plastic_detection_client")
        return self._logger

    @property
    def preview_store(self) -> PreviewStore:
        if self._preview_store is None:
            self._preview_store = self._preview_store_factory(self.settings)
        return self._preview_store

    def close(self) -> None:
        """Release every preview the shared store still holds."""

        store = self._preview_store
        self._preview_store = None
        close = getattr(store, "close", None)
        if close is not None:
            close()

    def ensure_configured(self) -> None:
        """Configure logging exactly once."""

        if not self._logging_configured:
            setup_logging(self.settings.log_level, json_output=self.settings.log_json)
            self._logging_configured = True

    # ------------------------------------------------------------------
    # Per-session providers
    def detection_client(self, event_bus: EventBus[ClientState] | None = None) -> DetectionClient:
        settings = self.settings
        return DetectionClient(
            gateway=self._gateway_factory(settings),
            preview_store=self.preview_store,
            event_bus=event_bus if event_bus is not None else EventBus(),
            logger=self.logger.bind(service_url=settings.service_url),
        )

    # ------------------------------------------------------------------
    # Provider overrides
    def set_gateway_factory(self, factory: Callable[[ClientSettings], DetectionGateway]) -> None:
        self._gateway_factory = factory

    def set_preview_store_factory(self, factory: Callable[[ClientSettings], PreviewStore]) -> None:
        self._preview_store_factory = factory


__all__ = ["ApplicationContainer"]
