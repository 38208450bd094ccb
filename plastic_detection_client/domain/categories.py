"""Plastic categories recognized in detection labels and their counts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

from .detection import Detection


class PlasticCategory(str, Enum):
    """Recyclable plastic resins, each identified by a label token."""

    PET = "pet"
    HDPE = "hdpe"

    @property
    def token(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return self.name


def matching_categories(label: str) -> tuple[PlasticCategory, ...]:
    """Every category whose token occurs in ``label``, case-insensitively.

    Categories are not mutually exclusive: "PET/HDPE mix" matches both.
    """

    folded = label.casefold()
    return tuple(category for category in PlasticCategory if category.token in folded)


def classify(label: str) -> PlasticCategory | None:
    """Primary category of ``label`` (first match in declaration order), or ``None``."""

    matches = matching_categories(label)
    return matches[0] if matches else None


def is_recyclable(detection: Detection) -> bool:
    return bool(matching_categories(detection.label))


def _zero_counts() -> Mapping[PlasticCategory, int]:
    return MappingProxyType({category: 0 for category in PlasticCategory})


@dataclass(frozen=True)
class CategoryCounts:
    """Per-category detection counts derived from a detection set."""

    counts: Mapping[PlasticCategory, int] = field(default_factory=_zero_counts)

    @classmethod
    def zero(cls) -> "CategoryCounts":
        return cls()

    @classmethod
    def from_detections(cls, detections: Iterable[Detection]) -> "CategoryCounts":
        counts = {category: 0 for category in PlasticCategory}
        for detection in detections:
            for category in matching_categories(detection.label):
                counts[category] += 1
        return cls(MappingProxyType(counts))

    def of(self, category: PlasticCategory) -> int:
        return self.counts.get(category, 0)

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def as_dict(self) -> dict[str, int]:
        return {category.display_name: self.of(category) for category in PlasticCategory}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CategoryCounts):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.as_dict().items())))
