"""Builders for the HTTP responses the API sends."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

_JSON_CONTENT_TYPE = {"Content-Type": "application/json"}
_HTML_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


@dataclass
class Response:
    """Status, headers and body of an HTTP response."""

    status: int = 200
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)


def _encode_json(data: Any) -> bytes:
    """Encode compact JSON with sorted keys, HTML-safe escapes and a trailing newline."""
    text = json.dumps(
        data, ensure_ascii=False, separators=(",", ":"), sort_keys=True, allow_nan=False
    )
    for char, escape in _HTML_ESCAPES:
        text = text.replace(char, escape)
    return (text + "\n").encode("utf-8")


def write_server_error(error: BaseException | str) -> Response:
    """A 500 response carrying the error message."""
    return Response(
        status=500,
        body=_encode_json({"message": str(error)}),
        headers=dict(_JSON_CONTENT_TYPE),
    )


def write_client_error(status: int, message: str) -> Response:
    """A client error response with the given status and message."""
    return Response(
        status=status,
        body=_encode_json({"message": message}),
        headers=dict(_JSON_CONTENT_TYPE),
    )


def write_json_string_ok(data: str) -> Response:
    """A 200 response whose body is an already serialised JSON string."""
    return Response(status=200, body=data.encode("utf-8"), headers=dict(_JSON_CONTENT_TYPE))


def write_json_ok(data: Any) -> Response:
    """A 200 response with ``data`` encoded as JSON, or a 500 if it cannot be encoded."""
    try:
        body = _encode_json(data)
    except (TypeError, ValueError) as exc:
        return write_server_error(exc)
    return Response(status=200, body=body, headers=dict(_JSON_CONTENT_TYPE))


def write_no_content() -> Response:
    """An empty 204 response."""
    return Response(status=204)


def write_panic_response(visitor_id: str | None) -> Response:
    """The response sent while panic mode is on: no campaigns for the visitor."""
    payload = {"visitorId": visitor_id, "campaigns": [], "panic": True}
    body = json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    return Response(status=200, body=body)