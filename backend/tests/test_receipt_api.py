"""Test the receipt processing API with Document AI stubbed out."""
import base64
import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image, ExifTags

from app.main import app
from app.processors.core import RawField
from app.services.ocr import documentai_client

client = TestClient(app)

FIELDS = [
    RawField(name="supplier_name", value="T&T Supermarket", confidence=0.98),
    RawField(name="date", value="April 30, 2025 10:01 PM", confidence=0.91),
    RawField(name="reference", value="INV-0042"),
]


def _encode(image_bytes: bytes) -> str:
    return base64.b64encode(image_bytes).decode("ascii")


def _jpeg(make=None) -> bytes:
    exif = Image.Exif()
    if make:
        exif[ExifTags.Base.Make] = make
    buf = io.BytesIO()
    Image.new("RGB", (8, 8)).save(buf, format="JPEG", exif=exif)
    return buf.getvalue()


@pytest.fixture
def extracted(monkeypatch):
    """Replace the Document AI call; records the bytes it was given."""
    calls = []

    def fake_extract_fields(image_bytes, mime_type=None):
        calls.append(image_bytes)
        return list(FIELDS)

    monkeypatch.setattr(documentai_client, "extract_fields", fake_extract_fields)
    return calls


def test_health():
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_process_receipt(extracted):
    image_bytes = _jpeg(make="Apple")

    response = client.post("/api/receipt/process", json={"base64Image": _encode(image_bytes)})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["receipt"] == {
        "data": {
            "supplierName": "T&T Supermarket",
            "date": "April 30, 2025 10:01 PM",
            "reference": "INV-0042",
        },
        "confidence": {"supplierName": 0.98, "date": 0.91},
        "hasTimestamp": False,
        "hasReference": True,
    }
    assert body["masterTimestamp"] == {"value": "30 Apr 2025 10:01 PM", "source": "receipt"}
    assert body["metadata"]["Make"] == "Apple"
    assert body["metadata"]["DateTimeOriginal"] is None
    assert extracted == [image_bytes]


def test_unreadable_image_still_processed(extracted):
    """EXIF failures do not fail the request."""
    response = client.post("/api/receipt/process", json={"base64Image": _encode(b"not a jpeg")})

    assert response.status_code == 200
    body = response.json()
    assert set(body["metadata"]) == {
        "DateTimeOriginal", "CreateDate", "ModifyDate", "Software",
        "ImageWidth", "ImageHeight", "Make", "Model",
    }
    assert all(value is None for value in body["metadata"].values())
    assert body["masterTimestamp"]["source"] == "receipt"


def test_no_timestamp_sources(monkeypatch):
    monkeypatch.setattr(
        documentai_client, "extract_fields",
        lambda image_bytes, mime_type=None: [RawField(name="total_amount", value="9.99")],
    )

    response = client.post("/api/receipt/process", json={"base64Image": _encode(_jpeg())})

    assert response.status_code == 200
    assert response.json()["masterTimestamp"] is None


@pytest.mark.parametrize("payload", [{}, {"base64Image": ""}, {"base64Image": None}])
def test_missing_image(payload, extracted):
    response = client.post("/api/receipt/process", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Missing base64Image in request body."}
    assert extracted == []


def test_invalid_base64(extracted):
    response = client.post("/api/receipt/process", json={"base64Image": "abc"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "base64" in body["error"]
    assert extracted == []


def test_extraction_failure(monkeypatch):
    def failing_extract_fields(image_bytes, mime_type=None):
        raise RuntimeError("Document AI unavailable")

    monkeypatch.setattr(documentai_client, "extract_fields", failing_extract_fields)

    response = client.post("/api/receipt/process", json={"base64Image": _encode(_jpeg())})

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "Document AI unavailable",
        "details": None,
    }
