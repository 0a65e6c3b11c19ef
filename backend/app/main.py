"""
FastAPI application for receipt field extraction.

Run instructions:
1. Install dependencies:
   pip install -e .

2. Configure environment (backend/.env):
   PROJECT_ID=...
   LOCATION=us
   PROCESSOR_ID=...
   GOOGLE_APPLICATION_CREDENTIALS=/path/to/key.json  # optional, ADC otherwise

3. Run server:
   uvicorn app.main:app --reload --port 8000

Example curl request:
curl -X POST "http://127.0.0.1:8000/api/receipt/process" \
  -H "Content-Type: application/json" \
  -d "{\"base64Image\": \"$(base64 -w0 receipt.jpg)\"}"
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing import Any, Optional
from .config import settings
from .core.receipt_processor import process_receipt
from .models import ProcessReceiptRequest, ProcessReceiptResponse, ErrorResponse
from .processors.core.errors import InvalidInputError
import logging

# Configure logging
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Receipt Processor",
    description="Extracts receipt fields with Google Document AI and resolves a master timestamp",
    version="1.0.0"
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", tags=["System"])
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


def _error_details(error: Exception) -> Optional[Any]:
    """Google API error details, if the error carries any."""
    details = getattr(error, "details", None)
    if not details:
        return None
    if isinstance(details, (list, tuple)):
        return [str(d) for d in details]
    return str(details)


@app.post(
    "/api/receipt/process",
    tags=["Receipt"],
    response_model=ProcessReceiptResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def process_receipt_endpoint(request: ProcessReceiptRequest):
    """
    Process a base64-encoded receipt image.

    Returns the normalized Document AI fields, the master timestamp
    (EXIF original > EXIF create > receipt date) and the raw EXIF metadata.
    """
    if not request.base64_image:
        return JSONResponse(
            status_code=400,
            content={"error": "Missing base64Image in request body."}
        )

    try:
        result = process_receipt(request.base64_image)
    except InvalidInputError as e:
        logger.warning(f"Invalid receipt request: {e}")
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error=str(e)).model_dump()
        )
    except Exception as e:
        logger.error(f"Receipt processing failed: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error=str(e), details=_error_details(e)).model_dump()
        )

    return ProcessReceiptResponse.model_validate(result.to_dict())
