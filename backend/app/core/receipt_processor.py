"""
Receipt Processor: complete processing of one receipt image.

Workflow:
1. Decode the base64 image
2. Read EXIF metadata (all-null if unreadable)
3. Google Document AI field extraction
4. Normalize the extracted fields
5. Resolve the master timestamp
"""
import base64
import binascii
import logging
from dataclasses import dataclass
from datetime import tzinfo
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

from ..config import settings
from ..processors.core.errors import InvalidInputError
from ..processors.core.field_normalizer import normalize_fields
from ..processors.core.structures import ImageMetadata, MasterTimestamp, NormalizedRecord
from ..processors.core.timestamp_resolver import resolve_master_timestamp
from ..services.metadata.exif_reader import read_image_metadata
from ..services.ocr import documentai_client

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReceiptProcessingResult:
    """Outcome of processing one receipt image."""
    receipt: NormalizedRecord
    master_timestamp: Optional[MasterTimestamp]
    metadata: ImageMetadata

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "receipt": self.receipt.to_dict(),
            "masterTimestamp": self.master_timestamp.to_dict() if self.master_timestamp else None,
            "metadata": self.metadata.to_dict(),
        }


def decode_image(base64_image: str) -> bytes:
    """Decode a base64 image payload."""
    if not isinstance(base64_image, str) or not base64_image:
        raise InvalidInputError("base64Image must be a non-empty string")
    try:
        return base64.b64decode(base64_image)
    except (binascii.Error, ValueError) as e:
        raise InvalidInputError(f"base64Image is not valid base64: {e}") from e


def get_timezone() -> tzinfo:
    """Timezone used to render EXIF epoch timestamps."""
    return ZoneInfo(settings.timestamp_timezone)


def process_receipt(base64_image: str) -> ReceiptProcessingResult:
    """
    Process a receipt image end to end.

    Args:
        base64_image: Base64-encoded receipt image

    Returns:
        ReceiptProcessingResult

    Raises:
        InvalidInputError: If the payload is not a base64 image
    """
    image_bytes = decode_image(base64_image)

    metadata = read_image_metadata(image_bytes)

    fields = documentai_client.extract_fields(image_bytes)
    receipt = normalize_fields(fields)
    logger.info(
        f"Normalized {len(receipt.data)} fields "
        f"(timestamp={receipt.has_timestamp}, reference={receipt.has_reference})"
    )

    master_timestamp = resolve_master_timestamp(metadata, receipt, get_timezone())
    if master_timestamp is None:
        logger.info("No timestamp found in EXIF metadata or receipt fields")
    else:
        logger.info(f"Master timestamp from {master_timestamp.source.value}: {master_timestamp.value}")

    return ReceiptProcessingResult(
        receipt=receipt,
        master_timestamp=master_timestamp,
        metadata=metadata,
    )
