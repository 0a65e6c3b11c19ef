"""
Timestamp Resolver: pick one authoritative timestamp for a receipt.

Priority:
1. EXIF DateTimeOriginal
2. EXIF CreateDate
3. The date printed on the receipt (``data["date"]``)

The first source that is present wins, even if its value cannot be
formatted; in that case the winning source is reported with a None value.
"""
import math
from datetime import datetime, timezone, tzinfo
from typing import Any, Mapping, Optional, Union

from dateutil import parser as date_parser

from .errors import InvalidInputError
from .structures import ImageMetadata, MasterTimestamp, NormalizedRecord, TimestampSource

# e.g. 30 Apr 2025 10:01 PM
MASTER_TIMESTAMP_FORMAT = "%d %b %Y %I:%M %p"

RECEIPT_DATE_KEY = "date"


# Two distinct defaults; a date missing any of year/month/day parses
# differently under each and is rejected.
_PARSE_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def _render(dt: datetime) -> Optional[str]:
    # %Y is not zero-padded below year 1000 on every platform
    if dt.year < 1000:
        return None
    return dt.strftime(MASTER_TIMESTAMP_FORMAT)


def format_epoch(value: Any, tz: Optional[tzinfo] = None) -> Optional[str]:
    """Format epoch seconds, or return None if value is not a usable finite number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        if not math.isfinite(value):
            return None
        dt = datetime.fromtimestamp(value, tz or timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
    return _render(dt)


def format_receipt_date(text: Any, tz: Optional[tzinfo] = None) -> Optional[str]:
    """
    Parse a free-text receipt date and reformat it, or return None.

    The text must name a full calendar date; time-only strings and dates
    without a year are rejected rather than completed from today's date.
    """
    if not isinstance(text, str):
        return None
    try:
        first, second = (date_parser.parse(text, default=d) for d in _PARSE_DEFAULTS)
        if first != second:
            return None
        dt = first
        if dt.tzinfo is not None:
            dt = dt.astimezone(tz or timezone.utc)
    except (ValueError, OverflowError):
        return None
    return _render(dt)


def _coerce_metadata(metadata: Union[ImageMetadata, Mapping]) -> ImageMetadata:
    if isinstance(metadata, ImageMetadata):
        return metadata
    if isinstance(metadata, Mapping):
        return ImageMetadata.from_dict(metadata)
    raise InvalidInputError(f"Expected image metadata, got {type(metadata).__name__}")


def _receipt_data(receipt: Union[NormalizedRecord, Mapping]) -> Mapping[str, Any]:
    if isinstance(receipt, NormalizedRecord):
        return receipt.data
    if isinstance(receipt, Mapping) and isinstance(receipt.get("data"), Mapping):
        return receipt["data"]
    raise InvalidInputError(f"Expected a normalized receipt record, got {type(receipt).__name__}")


def resolve_master_timestamp(
    metadata: Union[ImageMetadata, Mapping],
    receipt: Union[NormalizedRecord, Mapping],
    tz: Optional[tzinfo] = None,
) -> Optional[MasterTimestamp]:
    """
    Resolve the master timestamp from image metadata and the normalized receipt.

    Args:
        metadata: ImageMetadata, or a mapping keyed by EXIF tag names
        receipt: NormalizedRecord, or a mapping with a ``data`` mapping
        tz: Timezone for rendering epoch timestamps (default UTC)

    Returns:
        MasterTimestamp, or None if no source has any timestamp
    """
    metadata = _coerce_metadata(metadata)
    data = _receipt_data(receipt)

    if metadata.date_time_original is not None:
        return MasterTimestamp(
            value=format_epoch(metadata.date_time_original, tz),
            source=TimestampSource.EXIF_ORIGINAL,
        )
    if metadata.create_date is not None:
        return MasterTimestamp(
            value=format_epoch(metadata.create_date, tz),
            source=TimestampSource.EXIF_CREATE,
        )
    receipt_date = data.get(RECEIPT_DATE_KEY)
    if receipt_date is not None:
        return MasterTimestamp(
            value=format_receipt_date(receipt_date, tz),
            source=TimestampSource.RECEIPT,
        )

    return None
