"""
Processors Core: Field normalization and timestamp resolution.

Pure functions with no I/O, shared by the receipt pipeline and the API.
"""
from .errors import InvalidInputError
from .structures import (
    RawField, NormalizedRecord, ImageMetadata,
    MasterTimestamp, TimestampSource,
)
from .field_normalizer import to_camel_key, normalize_fields
from .timestamp_resolver import (
    MASTER_TIMESTAMP_FORMAT, format_epoch, format_receipt_date,
    resolve_master_timestamp,
)

__all__ = [
    "InvalidInputError",
    "RawField", "NormalizedRecord", "ImageMetadata",
    "MasterTimestamp", "TimestampSource",
    "to_camel_key", "normalize_fields",
    "MASTER_TIMESTAMP_FORMAT", "format_epoch", "format_receipt_date",
    "resolve_master_timestamp",
]
