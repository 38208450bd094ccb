"""Upload lifecycle of the detection client: select, submit, resolve."""

from __future__ import annotations

import threading
import weakref
from typing import Callable

from ..domain.gateway import DetectionGateway
from ..domain.image import SelectedImage
from ..domain.preview import PreviewHandle, PreviewStore
from ..domain.state import NO_IMAGE_SELECTED, ClientState
from ..shared.bus import EventBus, Unsubscribe
from ..shared.errors import ApplicationError, DetectionServiceError, LocalValidationError, SubmissionInProgressError


STATE_TOPIC = "client.state"

StateListener = Callable[[ClientState], None]


class DetectionClient:
    """Owns the client state machine and the preview resource.

    Each operation replaces the current :class:`ClientState` with a new
    snapshot and publishes it on ``STATE_TOPIC``. Only one submission may be in
    flight at a time.
    """

    def __init__(
        self,
        gateway: DetectionGateway,
        preview_store: PreviewStore,
        event_bus: EventBus[ClientState],
        logger,
    ) -> None:
        self._gateway = gateway
        self._preview_store = preview_store
        self._bus = event_bus
        self._logger = logger
        self._state = ClientState()
        self._state_lock = threading.RLock()
        self._submission_lock = threading.Lock()
        self._closed = False
        self._leased: list[PreviewHandle] = []
        # Runs on close() or when the client is garbage collected, e.g. at the end of a browser session.
        self._release_preview = weakref.finalize(self, _release_leased, preview_store, self._leased)

    @property
    def state(self) -> ClientState:
        with self._state_lock:
            return self._state

    def subscribe(self, listener: StateListener) -> Unsubscribe:
        return self._bus.subscribe(STATE_TOPIC, listener)

    def select_image(self, image: SelectedImage | None) -> ClientState:
        """Replace the selected image and reset results; ``None`` is a no-op."""

        if image is None:
            return self.state
        if self._closed:
            raise ApplicationError("Detection client is closed")
        if self._submission_lock.locked():
            raise SubmissionInProgressError("Cannot change the image while a submission is running")

        preview = self._preview_store.acquire(image)
        with self._state_lock:
            previous = self._state.preview
            state = self._state.with_image(image, preview)
            self._state = state
            self._leased[:] = [preview]
        if previous is not None:
            self._preview_store.release(previous)
        self._logger.info("image.selected", image=image.name, mime_type=image.mime_type, size=image.size)
        self._bus.publish(STATE_TOPIC, state)
        return state

    def submit(self) -> ClientState:
        """Send the selected image to the detection service and resolve the state.

        Returns the resolved snapshot. Missing images and service failures are
        reported through the status message; only overlapping submissions raise.
        """

        if not self._submission_lock.acquire(blocking=False):
            raise SubmissionInProgressError("A submission is already in flight")
        try:
            try:
                image = self._require_image()
            except LocalValidationError as exc:
                self._logger.warning("submission.rejected", reason=str(exc))
                return self._transition(lambda state: state.with_status(NO_IMAGE_SELECTED))

            self._transition(ClientState.pending)
            self._logger.info("submission.started", image=image.name)
            try:
                response = self._gateway.detect(image)
            except DetectionServiceError as exc:
                self._logger.error("submission.failed", image=image.name, error=str(exc), cause=repr(exc.__cause__))
                return self._transition(ClientState.failed)
            except Exception:
                self._logger.exception("submission.crashed", image=image.name)
                self._transition(ClientState.failed)
                raise

            state = self._transition(lambda current: current.resolved_with(response.detections))
            self._logger.info(
                "submission.completed",
                image=image.name,
                outcome=state.outcome.value if state.outcome else None,
                detections=len(state.detections),
                counts=state.counts.as_dict(),
            )
            return state
        finally:
            self._submission_lock.release()

    def close(self) -> None:
        """Release the current preview handle. Safe to call more than once."""

        with self._state_lock:
            if self._closed:
                return
            self._closed = True
        self._release_preview()

    def __enter__(self) -> "DetectionClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _require_image(self) -> SelectedImage:
        image = self.state.image
        if image is None:
            raise LocalValidationError("No image selected")
        return image

    def _transition(self, step: Callable[[ClientState], ClientState]) -> ClientState:
        with self._state_lock:
            state = step(self._state)
            self._state = state
        self._bus.publish(STATE_TOPIC, state)
        return state


def _release_leased(preview_store: PreviewStore, leased: list[PreviewHandle]) -> None:
    while leased:
        preview_store.release(leased.pop())


__all__ = ["DetectionClient", "STATE_TOPIC", "StateListener"]
