"""Validation of activation and event request bodies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

MANDATORY = "Field is mandatory."


@dataclass
class ActivateRequest:
    """Body of a campaign activation request."""

    cid: str = ""
    vid: str = ""
    vaid: str = ""
    caid: str = ""
    aid: str = ""


class EventType(Enum):
    """Kind of an event request."""

    NULL = "NULL"
    CONTEXT = "CONTEXT"


@dataclass
class EventRequest:
    """Body of an event request."""

    visitor_id: str = ""
    type: EventType = EventType.NULL
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class ErrorResponse:
    """Validation failure, keyed by field name."""

    status: str
    errors: dict[str, str]

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status, "errors": dict(self.errors)}


def build_error_response(body_error: dict[str, str]) -> ErrorResponse:
    """Wrap field errors in an error response."""
    return ErrorResponse(status="error", errors=body_error)


def check_error_body(env_id: str, body: ActivateRequest) -> ErrorResponse | None:
    """Return the errors of an activation body, or None when it is valid."""
    errors: dict[str, str] = {}
    if not body.cid:
        errors["cid"] = MANDATORY
    elif body.cid != env_id:
        errors["cid"] = "Invalid cid."
    if not body.vid:
        errors["vid"] = MANDATORY
    if not body.vaid:
        errors["vaid"] = MANDATORY
    if not body.caid:
        errors["caid"] = MANDATORY
    return build_error_response(errors) if errors else None


def build_event_error_response(body_error: dict[str, str]) -> ErrorResponse:
    """Wrap event field errors in an error response."""
    return ErrorResponse(status="error", errors=body_error)


def check_event_error_body(body: EventRequest) -> ErrorResponse | None:
    """Return the errors of an event body, or None when it is valid."""
    errors: dict[str, str] = {}
    if not body.visitor_id:
        errors["visitorId"] = MANDATORY
    if body.type is EventType.NULL:
        errors["type"] = MANDATORY
    return build_event_error_response(errors) if errors else None