"""Client for the user data connector, which holds visitors' partner segments."""

from __future__ import annotations

import json
import os
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any

UDC_TIMEOUT = 1000  # milliseconds


@dataclass
class _ConnectorSettings:
    """Where the user data connector is reached."""

    url: str = ""


_settings = _ConnectorSettings(url=os.environ.get("UDC_URL", ""))


@dataclass
class UDCVisitorRow:
    """One segment value of a visitor, as given by a partner."""

    segment: str = ""
    value: str = ""
    partner: str = ""


def set_udc_url(url: str) -> None:
    """Set the base URL of the user data connector."""
    _settings.url = url


def _decode_error(detail: str) -> ValueError:
    return ValueError("fetchVisitorData json decode error : " + detail)


def _decode_row(item: Any) -> UDCVisitorRow:
    row = UDCVisitorRow()
    if item is None:
        return row
    if not isinstance(item, dict):
        raise _decode_error(f"cannot decode {json.dumps(item)} into a visitor row")
    for key, value in item.items():
        name = key.lower()
        if name not in ("segment", "value", "partner") or value is None:
            continue
        if not isinstance(value, str):
            raise _decode_error(f"field {key} must be a string, got {json.dumps(value)}")
        setattr(row, name, value)
    return row


def _decode_rows(payload: bytes) -> list[UDCVisitorRow]:
    try:
        text = payload.decode("utf-8")
        data, _ = json.JSONDecoder().raw_decode(text.lstrip())
    except ValueError as exc:
        raise _decode_error(str(exc)) from exc
    if data is None:
        return []
    if not isinstance(data, list):
        raise _decode_error(f"cannot decode {type(data).__name__} into a list of visitor rows")
    return [_decode_row(item) for item in data]


def fetch_visitor_data(environment_id: str, visitor_id: str) -> list[UDCVisitorRow]:
    """Fetch the partner segments of a visitor.

    Raises RuntimeError when no URL is configured, ValueError when the reply is
    not a list of rows, and OSError on network failures.
    """
    base_url = _settings.url
    if not base_url:
        raise RuntimeError("missing UDC_URL env variable")

    url = f"{base_url}/accounts/{environment_id}/segments/{visitor_id}"
    try:
        with urllib.request.urlopen(url, timeout=UDC_TIMEOUT / 1000) as reply:
            payload = reply.read()
    except urllib.error.HTTPError as exc:
        try:
            payload = exc.read()
        finally:
            exc.close()
    return _decode_rows(payload)