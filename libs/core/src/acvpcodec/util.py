from __future__ import annotations

"""Hex and JSON field helpers used by every codec.

ACVP carries all binary values as hex strings. Input hex is accepted in
either case; output hex is always uppercase, which is what the validation
server compares against.
"""

import binascii
import json
import re
from typing import Any, List, Mapping, Optional, Union

from .algorithms import AlgorithmFamily, classify
from .errors import (
    InvalidHexString,
    MalformedDocument,
    MissingRequiredField,
    WrongFieldType,
)
from .settings import pretty_indent

JsonDocument = Union[str, bytes, bytearray, List[Any]]

HEX_RE = re.compile(r"(?:[0-9a-fA-F]{2})*")
U32_MAX = 0xFFFFFFFF


def hex2bin(text: str) -> bytes:
    if not isinstance(text, str) or not HEX_RE.fullmatch(text):
        raise InvalidHexString(f"Invalid hex string '{text}'")
    return binascii.unhexlify(text)


def bin2hex(data: bytes) -> str:
    return bytes(data).hex().upper()


def _lookup(key: str, obj: Mapping[str, Any]) -> Any:
    if not isinstance(obj, Mapping) or key not in obj:
        raise MissingRequiredField(key, f"Required key '{key}' is missing")
    return obj[key]


def get_acvp_str(key: str, obj: Mapping[str, Any]) -> str:
    value = _lookup(key, obj)
    if not isinstance(value, str):
        raise WrongFieldType(key, f"Failed to obtain str value associated with key '{key}'")
    return value


def get_acvp_u32(key: str, obj: Mapping[str, Any]) -> int:
    value = _lookup(key, obj)
    # bool is an int subclass; JSON true/false is never a number here
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= U32_MAX:
        raise WrongFieldType(key, f"Failed to obtain u32 value associated with key '{key}'")
    return value


def get_acvp_bool(key: str, obj: Mapping[str, Any]) -> bool:
    value = _lookup(key, obj)
    if not isinstance(value, bool):
        raise WrongFieldType(key, f"Failed to obtain boolean value associated with key '{key}'")
    return value


def get_acvp_hex(key: str, obj: Mapping[str, Any]) -> bytes:
    return hex2bin(get_acvp_str(key, obj))


def load_json(document: Any, what: str) -> Any:
    """Parse `document` if it is still text; parsed values pass through."""
    if isinstance(document, (bytes, bytearray)):
        try:
            document = document.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedDocument(f"Failed to parse {what} JSON: {exc}") from exc
    if isinstance(document, str):
        try:
            return json.loads(document)
        except ValueError as exc:
            raise MalformedDocument(f"Failed to parse {what} JSON: {exc}") from exc
    return document


def dump_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


def pretty_json(value: Any, indent: Optional[int] = None) -> str:
    return json.dumps(value, indent=pretty_indent() if indent is None else indent)


def get_algorithm_type(document: JsonDocument) -> AlgorithmFamily:
    """Classify a whole request document by its `algorithm` entry."""
    request = load_json(document, "request")
    if not isinstance(request, list):
        raise MalformedDocument("ACVP Request vector must be a JSON Array")
    family = None
    for entry in request:
        if isinstance(entry, Mapping) and "algorithm" in entry:
            family = classify(get_acvp_str("algorithm", entry))
    if family is None:
        raise MissingRequiredField("algorithm", "No 'algorithm' key present in input vector")
    return family


__all__ = [
    "JsonDocument",
    "hex2bin",
    "bin2hex",
    "get_acvp_str",
    "get_acvp_u32",
    "get_acvp_bool",
    "get_acvp_hex",
    "load_json",
    "dump_json",
    "pretty_json",
    "get_algorithm_type",
]
