"""
Wire codec: JSON request bodies and response envelopes.

Every JSON number in a response is decoded as float; the protocol carries
floating point only and callers narrow to int explicitly.
"""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass
from typing import Any

from .errors import CallerContractError, HttpStatusError, ProtocolDecodeError, remote_error
from .models import Point, Size

ELEMENT_KEY = "element-6066-11e4-a52e-4f735466cecf"
LEGACY_ELEMENT_KEY = "ELEMENT"


@dataclass(frozen=True, slots=True)
class Envelope:
    status: int
    value: Any
    session_id: str | None = None


def element_ref(element_id: str) -> dict[str, str]:
    """Wire representation of an element id (both key spellings)."""
    return {LEGACY_ELEMENT_KEY: element_id, ELEMENT_KEY: element_id}


def _json_default(obj: Any) -> Any:
    to_wire = getattr(obj, "to_wire", None)
    if callable(to_wire):
        return to_wire()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def encode_params(params: dict[str, Any] | None) -> bytes:
    """Encode named parameters; an absent parameter set is an empty object."""
    if not params:
        return b"{}"
    try:
        return json.dumps(params, default=_json_default, ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise CallerContractError(f"Parameters are not JSON-representable: {exc}") from exc


def _snippet(text: str, limit: int = 200) -> str:
    text = text.strip()
    return text if len(text) <= limit else text[:limit] + "…"


def _error_message(value: Any) -> str:
    if isinstance(value, dict):
        msg = value.get("message")
        if isinstance(msg, str):
            return msg
        return ""
    if isinstance(value, str):
        return value
    return ""


def decode_envelope(http_status: int, body: bytes, url: str = "") -> Envelope:
    """Decode a response envelope, raising on anything but success."""
    text = body.decode("utf-8", errors="replace")
    try:
        data = json.loads(text, parse_int=float)
    except ValueError as exc:
        if http_status >= 400:
            raise HttpStatusError(http_status, text, url) from exc
        raise ProtocolDecodeError(f"Response is not valid JSON (HTTP {http_status}): {_snippet(text)!r}") from exc

    if not isinstance(data, dict) or ("status" not in data and "value" not in data):
        if http_status >= 400:
            raise HttpStatusError(http_status, text, url)
        raise ProtocolDecodeError(f"Response envelope lacks status/value fields: {_snippet(text)!r}")

    value = data.get("value")
    status_raw = data.get("status")
    if status_raw is not None:
        if isinstance(status_raw, bool) or not isinstance(status_raw, (int, float)):
            raise ProtocolDecodeError(f"Response envelope has a non-numeric status: {status_raw!r}")
        status = int(status_raw)
        if status != 0:
            raise remote_error(status, _error_message(value), value=value)
    elif isinstance(value, dict) and isinstance(value.get("error"), str):
        raise remote_error(None, _error_message(value), name=value["error"], value=value)
    elif http_status >= 400:
        raise HttpStatusError(http_status, text, url)

    session_id = data.get("sessionId")
    return Envelope(status=0, value=value, session_id=session_id if isinstance(session_id, str) else None)


# Value narrowing


def as_str(value: Any, what: str = "value") -> str:
    if not isinstance(value, str):
        raise ProtocolDecodeError(f"{what}: expected string, got {type(value).__name__}")
    return value


def as_bool(value: Any, what: str = "value") -> bool:
    if not isinstance(value, bool):
        raise ProtocolDecodeError(f"{what}: expected boolean, got {type(value).__name__}")
    return value


def as_float(value: Any, what: str = "value") -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ProtocolDecodeError(f"{what}: expected number, got {type(value).__name__}")
    return float(value)


def as_dict(value: Any, what: str = "value") -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ProtocolDecodeError(f"{what}: expected object, got {type(value).__name__}")
    return value


def as_list(value: Any, what: str = "value") -> list[Any]:
    if not isinstance(value, list):
        raise ProtocolDecodeError(f"{what}: expected array, got {type(value).__name__}")
    return value


def as_point(value: Any, what: str = "value") -> Point:
    data = as_dict(value, what)
    try:
        return Point(x=as_float(data["x"], f"{what}.x"), y=as_float(data["y"], f"{what}.y"))
    except KeyError as exc:
        raise ProtocolDecodeError(f"{what}: malformed point {value!r}") from exc


def as_size(value: Any, what: str = "value") -> Size:
    data = as_dict(value, what)
    try:
        return Size(width=as_float(data["width"], f"{what}.width"), height=as_float(data["height"], f"{what}.height"))
    except KeyError as exc:
        raise ProtocolDecodeError(f"{what}: malformed size {value!r}") from exc


def decode_element_id(value: Any) -> str:
    if isinstance(value, dict):
        for key in (ELEMENT_KEY, LEGACY_ELEMENT_KEY):
            element_id = value.get(key)
            if isinstance(element_id, str) and element_id:
                return element_id
    raise ProtocolDecodeError(f"Not an element reference: {value!r}")


def decode_screenshot(value: Any) -> bytes:
    data = as_str(value, "screenshot")
    try:
        return base64.b64decode(data)
    except (binascii.Error, ValueError) as exc:
        raise ProtocolDecodeError(f"Screenshot payload is not valid base64: {exc}") from exc


__all__ = [
    "ELEMENT_KEY",
    "LEGACY_ELEMENT_KEY",
    "Envelope",
    "as_bool",
    "as_dict",
    "as_float",
    "as_list",
    "as_point",
    "as_size",
    "as_str",
    "decode_element_id",
    "decode_envelope",
    "decode_screenshot",
    "element_ref",
    "encode_params",
]
