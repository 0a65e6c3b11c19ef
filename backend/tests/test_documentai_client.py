"""Test mapping of Document AI entities and processor configuration."""
from types import SimpleNamespace

import pytest

from app.config import settings
from app.processors.core import RawField, normalize_fields
from app.services.ocr import documentai_client


def _entity(type_, mention_text, confidence=0.0):
    return SimpleNamespace(type_=type_, mention_text=mention_text, confidence=confidence)


def test_entities_to_fields():
    entities = [
        _entity("supplier_name", "Costco Wholesale", 0.97),
        _entity("receipt_date", "05/12/2024", 0.0),
    ]

    fields = documentai_client.entities_to_fields(entities)

    assert fields == [
        RawField(name="supplier_name", value="Costco Wholesale", confidence=0.97),
        RawField(name="receipt_date", value="05/12/2024", confidence=None),
    ]
    record = normalize_fields(fields)
    assert record.confidence == {"supplierName": 0.97}


@pytest.fixture
def processor_settings(monkeypatch):
    monkeypatch.setattr(documentai_client, "_processor_name", None)
    monkeypatch.setattr(settings, "documentai_processor_name", None)
    monkeypatch.setattr(settings, "gcp_project_id", "")
    monkeypatch.setattr(settings, "documentai_processor_id", "")
    monkeypatch.setattr(settings, "documentai_location", "us")
    return settings


def test_processor_name_from_parts(processor_settings):
    processor_settings.gcp_project_id = "891554344619"
    processor_settings.documentai_processor_id = "8f8a3fc3da6da7cc"
    processor_settings.documentai_location = "eu"

    assert documentai_client._get_processor_name() == (
        "projects/891554344619/locations/eu/processors/8f8a3fc3da6da7cc"
    )


def test_processor_name_override(processor_settings):
    processor_settings.documentai_processor_name = "projects/p/locations/us/processors/abc"
    processor_settings.gcp_project_id = "ignored"
    processor_settings.documentai_processor_id = "ignored"

    assert documentai_client._get_processor_name() == "projects/p/locations/us/processors/abc"


def test_processor_name_missing(processor_settings):
    with pytest.raises(ValueError):
        documentai_client._get_processor_name()
