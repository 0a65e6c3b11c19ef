"""
Google Cloud Document AI client for extracting receipt fields.

Sends the receipt image to a Document AI processor and returns its entity
list as RawField records (entity type -> name, mention text -> value).
"""
from google.oauth2 import service_account
from ...config import settings
from ...processors.core.structures import RawField
import logging
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from google.cloud import documentai

logger = logging.getLogger(__name__)

# Document AI client instance
_client = None
_processor_name: Optional[str] = None


def _get_client():
    """Get or create Document AI client (lazy import)."""
    global _client
    if _client is None:
        # Lazy import to avoid import errors at startup
        try:
            from google.cloud import documentai
            from google.api_core.client_options import ClientOptions
        except ImportError as e:
            raise ImportError(
                "google-cloud-documentai package is not installed. "
                "Please install it with: pip install google-cloud-documentai"
            ) from e

        client_options = ClientOptions(
            api_endpoint=f"{settings.documentai_location}-documentai.googleapis.com"
        )
        if settings.gcp_credentials_path:
            credentials = service_account.Credentials.from_service_account_file(
                settings.gcp_credentials_path,
                scopes=["https://www.googleapis.com/auth/cloud-platform"],
            )
            _client = documentai.DocumentProcessorServiceClient(
                credentials=credentials, client_options=client_options
            )
        else:
            # Application Default Credentials
            _client = documentai.DocumentProcessorServiceClient(client_options=client_options)
        logger.info("Google Cloud Document AI client initialized")

    return _client


def _get_processor_name() -> str:
    """Get processor name."""
    global _processor_name
    if _processor_name is None:
        if settings.documentai_processor_name:
            _processor_name = settings.documentai_processor_name
        elif settings.gcp_project_id and settings.documentai_processor_id:
            _processor_name = (
                f"projects/{settings.gcp_project_id}"
                f"/locations/{settings.documentai_location}"
                f"/processors/{settings.documentai_processor_id}"
            )
        else:
            raise ValueError(
                "Either DOCUMENTAI_PROCESSOR_NAME or PROJECT_ID and PROCESSOR_ID must be set"
            )

    return _processor_name


def entities_to_fields(entities) -> List[RawField]:
    """
    Map Document AI entities to RawField records.

    Proto3 floats carry no presence, so an unset confidence reads as 0.0 and
    is reported as None.
    """
    return [
        RawField(
            name=entity.type_,
            value=entity.mention_text,
            confidence=entity.confidence or None,
        )
        for entity in entities
    ]


def extract_fields(image_bytes: bytes, mime_type: Optional[str] = None) -> List[RawField]:
    """
    Extract receipt fields using Google Document AI.

    Args:
        image_bytes: Image file bytes
        mime_type: MIME type of the image (defaults to DOCUMENTAI_MIME_TYPE)

    Returns:
        Extracted fields in the order Document AI returned them
    """
    # Lazy import documentai
    from google.cloud import documentai

    client = _get_client()
    processor_name = _get_processor_name()

    raw_document = documentai.RawDocument(
        content=image_bytes,
        mime_type=mime_type or settings.documentai_mime_type,
    )

    request = documentai.ProcessRequest(
        name=processor_name,
        raw_document=raw_document,
    )

    logger.info(f"Processing document with Document AI processor: {processor_name}")
    result = client.process_document(request=request)

    fields = entities_to_fields(result.document.entities)
    logger.info(f"Document AI returned {len(fields)} entities")
    return fields
