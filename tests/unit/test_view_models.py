from __future__ import annotations

from plastic_detection_client.domain.categories import PlasticCategory
from plastic_detection_client.domain.detection import Detection
from plastic_detection_client.domain.image import SelectedImage
from plastic_detection_client.domain.state import ClientState
from plastic_detection_client.presentation.view_models import (
    OTHER_ACCENT,
    PENDING_LABEL,
    RECYCLABLE_ACCENT,
    SUBMIT_LABEL,
    DetectionRowViewModel,
    ResultsViewModel,
    button_label,
)

from fakes import detection


def test_recognized_row_is_marked_recyclable() -> None:
    row = DetectionRowViewModel.from_detection(Detection.model_validate(detection("PET Bottle", 0.92, (1, 2, 3, 4))))

    assert row.recyclable
    assert row.category is PlasticCategory.PET
    assert row.accent_color == RECYCLABLE_ACCENT
    assert row.confidence_text == "0.92"
    assert row.bbox_text == "[1,2,3,4]"


def test_unrecognized_row_has_no_recyclable_marker() -> None:
    row = DetectionRowViewModel.from_detection(Detection.model_validate(detection("Cardboard", 0.5, (1.5, 2, 3, 4))))

    assert not row.recyclable
    assert row.accent_color == OTHER_ACCENT
    assert row.bbox_text == "[1.5,2,3,4]"


def test_results_hidden_without_detections() -> None:
    results = ResultsViewModel.from_state(ClientState())

    assert not results.visible
    assert results.total == 0
    assert results.counts == {"PET": 0, "HDPE": 0}


def test_results_list_every_detection_but_count_only_recognized() -> None:
    state = ClientState().pending().resolved_with(
        [Detection.model_validate(detection("HDPE Bottle")), Detection.model_validate(detection("Cardboard"))]
    )

    results = ResultsViewModel.from_state(state)

    assert [row.label for row in results.rows] == ["HDPE Bottle", "Cardboard"]
    assert results.counts == {"PET": 0, "HDPE": 1}
    assert results.total == 1
    assert not results.stale


def test_failed_results_are_flagged_stale() -> None:
    state = ClientState().pending().resolved_with([Detection.model_validate(detection("PET Bottle"))]).pending().failed()

    assert ResultsViewModel.from_state(state).stale


def test_button_label_follows_loading() -> None:
    ready = ClientState().with_image(SelectedImage(name="a.png", content=b"a"), None)

    assert button_label(ready) == SUBMIT_LABEL
    assert button_label(ready.pending()) == PENDING_LABEL


def test_confidence_is_rendered_without_rounding() -> None:
    row = DetectionRowViewModel.from_detection(Detection.model_validate(detection("PET Bottle", 0.123456789)))

    assert row.confidence_text == "0.123456789"


def test_bbox_with_non_numeric_entries_is_shown_as_sent() -> None:
    payload = {"class": "HDPE jug", "confidence": 0.4, "bbox": [[1, 2], {"w": 3.0}, None, "4"]}

    row = DetectionRowViewModel.from_detection(Detection.model_validate(payload))

    assert row.bbox_text == '[[1,2],{"w":3.0},null,"4"]'


def test_null_bbox_renders_as_empty_list() -> None:
    row = DetectionRowViewModel.from_detection(
        Detection.model_validate({"class": "Cap", "confidence": 0.3, "bbox": None})
    )

    assert row.bbox_text == "[]"


def test_row_marker_follows_every_category_match() -> None:
    row = DetectionRowViewModel.from_detection(Detection.model_validate(detection("PET/HDPE mix")))

    assert row.recyclable
    assert row.category is PlasticCategory.PET
    assert row.accent_color == RECYCLABLE_ACCENT
