"""
Pydantic models for API request/response schemas.
"""
from pydantic import BaseModel, Field
from typing import Optional, Dict, Any


class ProcessReceiptRequest(BaseModel):
    """Request model for receipt processing endpoint."""
    base64_image: Optional[str] = Field(
        default=None,
        alias="base64Image",
        description="Base64-encoded receipt image (JPEG)"
    )

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "base64Image": "/9j/4AAQSkZJRgABAQAAAQABAAD..."
            }
        },
    }


class ReceiptRecordResponse(BaseModel):
    """Normalized receipt fields."""
    data: Dict[str, Any] = Field(default_factory=dict)
    confidence: Dict[str, float] = Field(default_factory=dict)
    has_timestamp: bool = Field(default=False, alias="hasTimestamp")
    has_reference: bool = Field(default=False, alias="hasReference")

    model_config = {"populate_by_name": True}


class MasterTimestampResponse(BaseModel):
    """Resolved timestamp and the source it came from."""
    value: Optional[str] = None
    source: str


class ImageMetadataResponse(BaseModel):
    """EXIF metadata read from the image."""
    date_time_original: Optional[Any] = Field(default=None, alias="DateTimeOriginal")
    create_date: Optional[Any] = Field(default=None, alias="CreateDate")
    modify_date: Optional[Any] = Field(default=None, alias="ModifyDate")
    software: Optional[str] = Field(default=None, alias="Software")
    image_width: Optional[int] = Field(default=None, alias="ImageWidth")
    image_height: Optional[int] = Field(default=None, alias="ImageHeight")
    make: Optional[str] = Field(default=None, alias="Make")
    model: Optional[str] = Field(default=None, alias="Model")

    model_config = {"populate_by_name": True}


class ProcessReceiptResponse(BaseModel):
    """Response model for receipt processing endpoint."""
    success: bool = True
    receipt: ReceiptRecordResponse
    master_timestamp: Optional[MasterTimestampResponse] = Field(default=None, alias="masterTimestamp")
    metadata: ImageMetadataResponse

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "success": True,
                "receipt": {
                    "data": {"supplierName": "T&T Supermarket", "date": "April 30, 2025 10:01 PM"},
                    "confidence": {"supplierName": 0.98, "date": 0.91},
                    "hasTimestamp": False,
                    "hasReference": False
                },
                "masterTimestamp": {"value": "30 Apr 2025 10:01 PM", "source": "receipt"},
                "metadata": {
                    "DateTimeOriginal": None,
                    "CreateDate": None,
                    "ModifyDate": None,
                    "Software": None,
                    "ImageWidth": None,
                    "ImageHeight": None,
                    "Make": None,
                    "Model": None
                }
            }
        },
    }


class ErrorResponse(BaseModel):
    """Failure payload."""
    success: bool = False
    error: str
    details: Optional[Any] = None
