"""
Receipt Processing Data Structures.

This module defines the data structures shared by field normalization and
timestamp resolution.
"""
from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional
from enum import Enum

from .errors import InvalidInputError


class TimestampSource(Enum):
    """Where the master timestamp came from."""
    EXIF_ORIGINAL = "exif_original"
    EXIF_CREATE = "exif_create"
    RECEIPT = "receipt"


@dataclass(frozen=True)
class RawField:
    """One extracted entity (name, value, optional confidence)."""
    name: str
    value: Any
    confidence: Optional[float] = None

    def __post_init__(self):
        if not isinstance(self.name, str):
            raise InvalidInputError(f"Field name must be a string, got {type(self.name).__name__}")

    @classmethod
    def from_dict(cls, field_dict: Mapping[str, Any]) -> "RawField":
        """Create RawField from a {name, value, confidence?} mapping."""
        return cls(
            name=field_dict.get("name"),
            value=field_dict.get("value"),
            confidence=field_dict.get("confidence"),
        )


@dataclass(frozen=True)
class NormalizedRecord:
    """camelCase-keyed, confidence-annotated form of a raw field list."""
    data: Mapping[str, Any] = field(default_factory=dict)
    confidence: Mapping[str, float] = field(default_factory=dict)
    has_timestamp: bool = False
    has_reference: bool = False

    def __post_init__(self):
        # Read-only views over private copies
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))
        object.__setattr__(self, "confidence", MappingProxyType(dict(self.confidence)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": dict(self.data),
            "confidence": dict(self.confidence),
            "hasTimestamp": self.has_timestamp,
            "hasReference": self.has_reference,
        }


# Python attribute -> EXIF tag name, in output order
EXIF_KEYS = {
    "date_time_original": "DateTimeOriginal",
    "create_date": "CreateDate",
    "modify_date": "ModifyDate",
    "software": "Software",
    "image_width": "ImageWidth",
    "image_height": "ImageHeight",
    "make": "Make",
    "model": "Model",
}


@dataclass(frozen=True)
class ImageMetadata:
    """
    Embedded image attributes relevant to a receipt photo.

    Timestamps are epoch seconds. Any attribute the reader could not supply
    is None.
    """
    date_time_original: Optional[Any] = None
    create_date: Optional[Any] = None
    modify_date: Optional[Any] = None
    software: Optional[str] = None
    image_width: Optional[int] = None
    image_height: Optional[int] = None
    make: Optional[str] = None
    model: Optional[str] = None

    @classmethod
    def empty(cls) -> "ImageMetadata":
        """All-null metadata, used when the image could not be read."""
        return cls()

    @classmethod
    def from_dict(cls, metadata_dict: Mapping[str, Any]) -> "ImageMetadata":
        """Create ImageMetadata from a mapping keyed by EXIF tag names."""
        return cls(**{attr: metadata_dict.get(tag) for attr, tag in EXIF_KEYS.items()})

    def to_dict(self) -> Dict[str, Any]:
        return {EXIF_KEYS[f.name]: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class MasterTimestamp:
    """The single resolved timestamp and the source that won."""
    value: Optional[str]
    source: TimestampSource

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "source": self.source.value}
