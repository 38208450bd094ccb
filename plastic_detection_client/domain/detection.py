from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Detection(BaseModel):
    """Represents a single object detection reported by the detection service."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    label: str = Field(..., alias="class", description="Category label predicted for the detected object.")
    confidence: float = Field(..., description="Confidence score returned by the service.")
    bbox: tuple[Any, ...] = Field(
        default_factory=tuple,
        description="Bounding box as returned by the service; length, element types and meaning are not interpreted.",
    )

    @field_validator("bbox", mode="before")
    @classmethod
    def _null_bbox_means_empty(cls, value: Any) -> Any:
        return () if value is None else value


class DetectionResponse(BaseModel):
    """Response payload returned by the detection service for a single image."""

    model_config = ConfigDict(frozen=True)

    detections: tuple[Detection, ...] = Field(
        default_factory=tuple,
        description="Detections found in the submitted image, in service order.",
    )

    @field_validator("detections", mode="before")
    @classmethod
    def _missing_means_empty(cls, value: Any) -> Any:
        return () if value is None else value

    @property
    def is_empty(self) -> bool:
        return not self.detections
