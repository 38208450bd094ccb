"""Domain models for detections, plastic categories and client state."""

from .categories import CategoryCounts, PlasticCategory, classify, is_recyclable, matching_categories
from .detection import Detection, DetectionResponse
from .gateway import DetectionGateway
from .image import SelectedImage
from .preview import PreviewHandle, PreviewStore
from .state import ClientState, Outcome, Phase, StatusMessage, Tone

__all__ = [
    "CategoryCounts",
    "ClientState",
    "Detection",
    "DetectionResponse",
    "DetectionGateway",
    "Outcome",
    "Phase",
    "PlasticCategory",
    "PreviewHandle",
    "PreviewStore",
    "SelectedImage",
    "StatusMessage",
    "Tone",
    "classify",
    "is_recyclable",
    "matching_categories",
]
