from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Sequence

from ..domain.categories import PlasticCategory, classify, is_recyclable
from ..domain.detection import Detection
from ..domain.state import ClientState, Outcome


RECYCLABLE_ACCENT = "#22c55e"
OTHER_ACCENT = "#f97316"
RECYCLABLE_NOTE = "♻️ This item is recyclable!"
SUBMIT_LABEL = "Upload & Detect"
PENDING_LABEL = "Processing..."


@dataclass(frozen=True)
class DetectionRowViewModel:
    label: str
    confidence_text: str
    bbox_text: str
    category: PlasticCategory | None
    recyclable: bool
    accent_color: str

    @classmethod
    def from_detection(cls, detection: Detection) -> "DetectionRowViewModel":
        recyclable = is_recyclable(detection)
        return cls(
            label=detection.label,
            confidence_text=str(detection.confidence),
            bbox_text=_format_bbox(detection.bbox),
            category=classify(detection.label),
            recyclable=recyclable,
            accent_color=RECYCLABLE_ACCENT if recyclable else OTHER_ACCENT,
        )


@dataclass(frozen=True)
class ResultsViewModel:
    rows: Sequence[DetectionRowViewModel]
    counts: dict[str, int]
    total: int
    stale: bool

    @property
    def visible(self) -> bool:
        return bool(self.rows)

    @classmethod
    def from_state(cls, state: ClientState) -> "ResultsViewModel":
        return cls(
            rows=tuple(DetectionRowViewModel.from_detection(detection) for detection in state.detections),
            counts=state.counts.as_dict(),
            total=state.counts.total,
            stale=state.outcome is Outcome.FAILED,
        )


def button_label(state: ClientState) -> str:
    return PENDING_LABEL if state.loading else SUBMIT_LABEL


def _format_bbox(bbox: Sequence[Any]) -> str:
    # Integral coordinates render without a trailing ".0", like the service sent them.
    return json.dumps([_compact_number(value) for value in bbox], separators=(",", ":"), default=str)


def _compact_number(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value
