"""Building decision requests from HTTP input and reporting visitor context."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qs, urlsplit

from decisionapi.handle import Request, TargetingContext, new_request_from_http
from decisionapi.request_parser import get_decision_request
from decisionapi.udc import UDCVisitorRow, fetch_visitor_data

_log = logging.getLogger(__name__)


@dataclass
class VisitorContext:
    """A visitor's context as reported to the hits processor."""

    env_id: str
    visitor_id: str
    customer_id: str
    timestamp: int
    context: dict[str, Any] = field(default_factory=dict)
    partner: str = ""


def _first(query: dict[str, list[str]], name: str) -> str:
    values = query.get(name)
    return values[0] if values else ""


def build_handle_request(method: str, url: str, body: bytes | str) -> Request:
    """Build a handled request from the HTTP method, URL and body.

    Raises DecisionRequestError when the body cannot be read.
    """
    parts = urlsplit(url)
    request = new_request_from_http(parts.path)
    decision_request = get_decision_request(method, body)
    query = parse_qs(parts.query, keep_blank_values=True)

    request.mode = _first(query, "mode") or "normal"

    if "/flags" in url:
        request.expose_all_keys = True
    expose_all_keys = _first(query, "exposeAllKeys")
    if expose_all_keys:
        request.expose_all_keys = expose_all_keys == "true"

    has_consented = decision_request.visitor_consent is not False
    request.send_context_event = _first(query, "sendContextEvent") != "false" and has_consented
    request.decision_request = decision_request
    request.full_visitor_context = TargetingContext(standard=decision_request.context)
    request.extras = list(query.get("extras", []))
    return request


def build_visitor_contexts(handle_request: Request, env_id: str) -> list[VisitorContext]:
    """The standard context followed by one context per integration partner."""
    decision = handle_request.decision_request
    customer_id = decision.visitor_id or ""
    visitor_id = decision.anonymous_id if decision.anonymous_id is not None else customer_id
    timestamp = handle_request.timestamp_ms

    contexts = [
        VisitorContext(
            env_id=env_id,
            visitor_id=visitor_id,
            customer_id=customer_id,
            timestamp=timestamp,
            context=dict(decision.context),
        )
    ]
    for partner, context in handle_request.full_visitor_context.integration_providers.items():
        contexts.append(
            VisitorContext(
                env_id=env_id,
                visitor_id=visitor_id,
                customer_id=customer_id,
                timestamp=timestamp,
                context=dict(context),
                partner=partner,
            )
        )
    return contexts


def send_visitor_context(
    handle_request: Request,
    env_id: str,
    hits_processor: Callable[[list[VisitorContext]], Any],
) -> bool:
    """Hand the visitor's contexts to the hits processor.

    Failures are logged, not raised; returns whether the contexts were queued.
    """
    try:
        hits_processor(build_visitor_contexts(handle_request, env_id))
    except Exception as exc:  # noqa: BLE001 - a tracking failure must not fail the request
        _log.error("Error on queuing visitor context : %s", exc)
        return False
    return True


def fill_visitor_context(
    handle_request: Request,
    env_id: str,
    fetch: Callable[[str, str], Iterable[UDCVisitorRow]] = fetch_visitor_data,
) -> None:
    """Add the visitor's partner segments to the request's targeting context."""
    visitor_id = handle_request.decision_request.visitor_id or ""
    rows = list(fetch(env_id, visitor_id))
    _log.info("got integration context for %d providers", len(rows))
    providers = handle_request.full_visitor_context.integration_providers
    for row in rows:
        providers.setdefault(row.partner, {})[row.segment] = row.value