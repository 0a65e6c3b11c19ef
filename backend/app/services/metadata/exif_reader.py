"""
EXIF metadata reader for receipt photos.

Reads the capture timestamps and device attributes embedded in the image.
Timestamps are returned as epoch seconds, reading the EXIF wall-clock time
as UTC. Failure to read the image never raises: it yields all-null metadata.
"""
import io
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from PIL import Image, ExifTags

from ...processors.core.structures import ImageMetadata

logger = logging.getLogger(__name__)

EXIF_DATETIME_FORMAT = "%Y:%m:%d %H:%M:%S"


def _clean_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    text = str(value).strip("\x00 ").strip()
    return text or None


def _to_int(value: Any) -> Optional[int]:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def exif_datetime_to_epoch(value: Any) -> Optional[int]:
    """Convert an EXIF "YYYY:MM:DD HH:MM:SS" string to epoch seconds."""
    text = _clean_text(value)
    if not text:
        return None
    try:
        dt = datetime.strptime(text[:19], EXIF_DATETIME_FORMAT)
    except ValueError:
        return None
    return int(dt.replace(tzinfo=timezone.utc).timestamp())


def read_image_metadata(image_bytes: bytes) -> ImageMetadata:
    """
    Read EXIF metadata from image bytes.

    Args:
        image_bytes: Encoded image (JPEG, TIFF, ...)

    Returns:
        ImageMetadata; ImageMetadata.empty() if the image has no readable EXIF
    """
    try:
        with Image.open(io.BytesIO(image_bytes)) as image:
            exif = image.getexif()
            exif_ifd = exif.get_ifd(ExifTags.IFD.Exif)

            width = exif.get(ExifTags.Base.ImageWidth, exif_ifd.get(ExifTags.Base.ExifImageWidth))
            height = exif.get(ExifTags.Base.ImageLength, exif_ifd.get(ExifTags.Base.ExifImageHeight))

            return ImageMetadata(
                date_time_original=exif_datetime_to_epoch(exif_ifd.get(ExifTags.Base.DateTimeOriginal)),
                create_date=exif_datetime_to_epoch(exif_ifd.get(ExifTags.Base.DateTimeDigitized)),
                modify_date=exif_datetime_to_epoch(exif.get(ExifTags.Base.DateTime)),
                software=_clean_text(exif.get(ExifTags.Base.Software)),
                image_width=_to_int(width),
                image_height=_to_int(height),
                make=_clean_text(exif.get(ExifTags.Base.Make)),
                model=_clean_text(exif.get(ExifTags.Base.Model)),
            )
    except Exception as e:
        logger.warning(f"Failed to parse EXIF data: {e}")
        return ImageMetadata.empty()
