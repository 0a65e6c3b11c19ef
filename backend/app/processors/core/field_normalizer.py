"""
Field Normalizer: turn the extraction service's entity list into a structured record.

Each raw field name is converted to a camelCase key (``supplier_name`` ->
``supplierName``, ``date-time`` -> ``dateTime``). Values are stored under that
key, confidence scores alongside them when the field carried one, and two
presence flags record whether a ``timestamp`` and a ``reference`` field were
extracted.
"""
from collections.abc import Iterable, Mapping
from typing import Any, Dict, Iterable as IterableT, Union

from .errors import InvalidInputError
from .structures import NormalizedRecord, RawField

SEPARATORS = ("-", "_")

TIMESTAMP_FIELD = "timestamp"
REFERENCE_FIELD = "reference"


def to_camel_key(name: str) -> str:
    """
    Convert a kebab/snake case field name to its camelCase key.

    A separator immediately followed by a lowercase ASCII letter is dropped and
    the letter uppercased. Every other character passes through, so names that
    are already camelCase come back unchanged.
    """
    out = []
    i = 0
    while i < len(name):
        ch = name[i]
        nxt = name[i + 1] if i + 1 < len(name) else ""
        if ch in SEPARATORS and "a" <= nxt <= "z":
            out.append(nxt.upper())
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _has_confidence(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _coerce_field(item: Union[RawField, Mapping]) -> RawField:
    if isinstance(item, RawField):
        return item
    if isinstance(item, Mapping):
        return RawField.from_dict(item)
    raise InvalidInputError(f"Expected a field record, got {type(item).__name__}")


def normalize_fields(raw_fields: IterableT[Union[RawField, Mapping]]) -> NormalizedRecord:
    """
    Normalize a raw field list into a NormalizedRecord.

    Args:
        raw_fields: Fields in extraction order, as RawField objects or
            ``{"name", "value", "confidence"}`` mappings

    Returns:
        NormalizedRecord. When two fields map to the same key the later one wins.

    Raises:
        InvalidInputError: If raw_fields is not a sequence of field records
    """
    if (
        isinstance(raw_fields, (str, bytes, Mapping))
        or not isinstance(raw_fields, Iterable)
    ):
        raise InvalidInputError(
            f"Expected a sequence of fields, got {type(raw_fields).__name__}"
        )

    data: Dict[str, Any] = {}
    confidence: Dict[str, float] = {}
    has_timestamp = False
    has_reference = False

    for item in raw_fields:
        raw = _coerce_field(item)
        key = to_camel_key(raw.name)

        data[key] = raw.value
        if _has_confidence(raw.confidence):
            confidence[key] = raw.confidence

        # Flags look at the raw name, not the derived key
        if raw.name == TIMESTAMP_FIELD:
            has_timestamp = True
        if raw.name == REFERENCE_FIELD:
            has_reference = True

    return NormalizedRecord(
        data=data,
        confidence=confidence,
        has_timestamp=has_timestamp,
        has_reference=has_reference,
    )
