"""Immutable snapshots of the detection client's state machine."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Sequence

from .categories import CategoryCounts
from .detection import Detection
from .image import SelectedImage
from .preview import PreviewHandle


class Phase(str, Enum):
    IDLE = "idle"
    READY = "ready"
    PENDING = "pending"
    RESOLVED = "resolved"


class Outcome(str, Enum):
    EMPTY = "empty"
    DETECTED = "detected"
    FAILED = "failed"


class Tone(str, Enum):
    NONE = "none"
    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class StatusMessage:
    text: str = ""
    tone: Tone = Tone.NONE

    def __bool__(self) -> bool:
        return bool(self.text)


NO_STATUS = StatusMessage()
NO_IMAGE_SELECTED = StatusMessage("⚠️ Please select an image before uploading.", Tone.WARNING)
PROCESSING = StatusMessage("⏳ Processing image...", Tone.INFO)
NOT_RECYCLABLE = StatusMessage("❌ This item cannot be recycled.", Tone.ERROR)
DETECTION_COMPLETE = StatusMessage("✅ Detection complete!", Tone.SUCCESS)
PROCESSING_FAILED = StatusMessage("❌ Error processing image. Please try again.", Tone.ERROR)


@dataclass(frozen=True)
class ClientState:
    """Everything the interactive surface renders, replaced atomically per transition.

    ``counts`` is always derived from ``detections``; use the transition
    helpers below instead of building snapshots by hand.
    """

    phase: Phase = Phase.IDLE
    outcome: Outcome | None = None
    image: SelectedImage | None = None
    preview: PreviewHandle | None = None
    detections: tuple[Detection, ...] = ()
    counts: CategoryCounts = field(default_factory=CategoryCounts.zero)
    status: StatusMessage = NO_STATUS

    @property
    def loading(self) -> bool:
        return self.phase is Phase.PENDING

    @property
    def has_image(self) -> bool:
        return self.image is not None

    @property
    def has_results(self) -> bool:
        return bool(self.detections)

    def with_image(self, image: SelectedImage, preview: PreviewHandle | None) -> "ClientState":
        return ClientState(phase=Phase.READY, image=image, preview=preview)

    def with_status(self, status: StatusMessage) -> "ClientState":
        return replace(self, status=status)

    def pending(self) -> "ClientState":
        return replace(self, phase=Phase.PENDING, outcome=None, status=PROCESSING)

    def resolved_with(self, detections: Sequence[Detection]) -> "ClientState":
        detections = tuple(detections)
        if not detections:
            return replace(
                self,
                phase=Phase.RESOLVED,
                outcome=Outcome.EMPTY,
                detections=(),
                counts=CategoryCounts.zero(),
                status=NOT_RECYCLABLE,
            )
        return replace(
            self,
            phase=Phase.RESOLVED,
            outcome=Outcome.DETECTED,
            detections=detections,
            counts=CategoryCounts.from_detections(detections),
            status=DETECTION_COMPLETE,
        )

    def failed(self) -> "ClientState":
        # Prior detections stay on screen; only the outcome marks them stale.
        return replace(self, phase=Phase.RESOLVED, outcome=Outcome.FAILED, status=PROCESSING_FAILED)
