"""Parsing of decision request bodies."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

_SYNTAX_PREFIX = "syntax error in body json request. Must be a valid json"
_UNKNOWN_PREFIX = "json body is not valid."

# JSON key -> (attribute, kind); both snake_case and camelCase names are accepted.
_FIELDS: dict[str, tuple[str, str]] = {
    "visitor_id": ("visitor_id", "string"),
    "visitorId": ("visitor_id", "string"),
    "anonymous_id": ("anonymous_id", "string"),
    "anonymousId": ("anonymous_id", "string"),
    "decision_group": ("decision_group", "string"),
    "decisionGroup": ("decision_group", "string"),
    "context": ("context", "context"),
    "trigger_hit": ("trigger_hit", "bool"),
    "triggerHit": ("trigger_hit", "bool"),
    "activate": ("activate", "bool"),
    "visitor_consent": ("visitor_consent", "bool"),
    "visitorConsent": ("visitor_consent", "bool"),
}


class DecisionRequestError(ValueError):
    """Raised when a decision request cannot be read."""


@dataclass
class DecisionRequest:
    """A visitor's decision request. Unset optional fields are None."""

    visitor_id: str | None = None
    anonymous_id: str | None = None
    decision_group: str | None = None
    context: dict[str, Any] = field(default_factory=dict)
    trigger_hit: bool | None = None
    activate: bool | None = None
    visitor_consent: bool | None = None


def _reject_duplicates(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise ValueError(f'duplicate field "{key}"')
        result[key] = value
    return result


def _reject_constant(name: str) -> Any:
    raise ValueError(f"unexpected token {name}")


def _syntax_error(detail: str) -> DecisionRequestError:
    return DecisionRequestError(f"{_SYNTAX_PREFIX} : {detail}")


def _check_value(key: str, kind: str, value: Any) -> Any:
    if kind == "string":
        if not isinstance(value, str):
            raise _syntax_error(f"invalid value for string field {key}: {json.dumps(value)}")
    elif kind == "bool":
        if not isinstance(value, bool):
            raise _syntax_error(f"invalid value for bool field {key}: {json.dumps(value)}")
    elif not isinstance(value, dict):
        raise _syntax_error(f"invalid value for map field {key}: {json.dumps(value)}")
    return value


def parse_json_body(data: bytes | str) -> DecisionRequest:
    """Parse a JSON body into a DecisionRequest.

    Raises DecisionRequestError for invalid JSON, wrongly typed fields and unknown fields.
    """
    if isinstance(data, (bytes, bytearray)):
        try:
            text = bytes(data).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise _syntax_error(f"invalid UTF-8: {exc}") from exc
    else:
        text = data

    try:
        raw = json.loads(text, object_pairs_hook=_reject_duplicates, parse_constant=_reject_constant)
    except ValueError as exc:
        raise _syntax_error(str(exc)) from exc

    if not isinstance(raw, dict):
        raise _syntax_error(f"unexpected token {json.dumps(raw)}")

    values: dict[str, Any] = {}
    for key, value in raw.items():
        try:
            attribute, kind = _FIELDS[key]
        except KeyError:
            raise DecisionRequestError(f'{_UNKNOWN_PREFIX} unknown field "{key}"') from None
        if attribute in values:
            raise _syntax_error(f'duplicate field "{key}"')
        if value is None:
            continue
        values[attribute] = _check_value(key, kind, value)
    return DecisionRequest(**values)


def get_decision_request(method: str, body: bytes | str) -> DecisionRequest:
    """Read a decision request from an HTTP method and body; only POST is allowed."""
    if method != "POST":
        raise DecisionRequestError("only POST http method is allowed")
    return parse_json_body(body)