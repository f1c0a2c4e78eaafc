"""User records and their JSON encoding.

The backing file holds one JSON array of user objects:

    [
        {"id": "1", "email": "a@x.com", "age": 30}
    ]

Decoding is lenient in the same ways the file format has always been:
unknown keys are ignored, missing or null fields keep their defaults, and
keys match field names case-insensitively. Wrong value types are errors.
Encoding is compact with fields in id, email, age order.
"""

import json
import re
from dataclasses import asdict, dataclass

from .errors import DecodeError, EncodeError

_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1

# Lone UTF-16 surrogates can be written as \u escapes but cannot be stored as UTF-8
_SURROGATE_RE = re.compile("[\ud800-\udfff]")


@dataclass
class Record:
    """One user entry. All-default values double as the "not found" result."""
    id: str = ""
    email: str = ""
    age: int = 0


_FIELD_TYPES = {"id": str, "email": str, "age": int}


def _field_for(key: str) -> str | None:
    if key in _FIELD_TYPES:
        return key
    folded = key.lower()
    for name in _FIELD_TYPES:
        if name == folded:
            return name
    return None


def _check_value(name: str, value):
    if _FIELD_TYPES[name] is str:
        if not isinstance(value, str):
            raise DecodeError(f"cannot decode {type(value).__name__} into Record.{name} of type string")
        return _SURROGATE_RE.sub("\ufffd", value)
    # bool is an int subclass; JSON true/false is not a number
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"cannot decode {type(value).__name__} into Record.{name} of type int")
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise DecodeError(f"number {value} overflows Record.{name}")
    return value


def record_from_obj(obj) -> Record:
    """Build a Record from an already-parsed JSON value (object or null)."""
    record = Record()
    if obj is None:
        return record
    if not isinstance(obj, dict):
        raise DecodeError(f"cannot decode {type(obj).__name__} into Record")
    for key, value in obj.items():
        name = _field_for(key)
        if name is None or value is None:
            continue
        setattr(record, name, _check_value(name, value))
    return record


def _loads(raw: bytes | str):
    if isinstance(raw, bytes):
        # Invalid UTF-8 becomes U+FFFD; a BOM is left in place and rejected by the parser
        raw = raw.decode("utf-8", "replace")
    try:
        return json.loads(raw)
    except (ValueError, RecursionError) as e:
        raise DecodeError(str(e)) from e


def decode_record(raw: bytes | str) -> Record:
    """Decode a single JSON object into a Record."""
    return record_from_obj(_loads(raw))


def decode_records(raw: bytes | str) -> list[Record]:
    """Decode a JSON array into a list of Records, preserving order.

    Raises DecodeError on empty input; callers that treat empty content as
    an empty set must check for that themselves.
    """
    data = _loads(raw)
    if data is None:
        return []
    if not isinstance(data, list):
        raise DecodeError(f"cannot decode {type(data).__name__} into list of Record")
    return [record_from_obj(obj) for obj in data]


def _dumps(value) -> bytes:
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise EncodeError(str(e)) from e


def encode_record(record: Record) -> bytes:
    return _dumps(asdict(record))


def encode_records(records: list[Record]) -> bytes:
    return _dumps([asdict(r) for r in records])
