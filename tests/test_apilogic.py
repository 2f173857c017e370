import logging

import pytest

from decisionapi.apilogic import (
    VisitorContext,
    build_handle_request,
    build_visitor_contexts,
    fill_visitor_context,
    send_visitor_context,
)
from decisionapi.handle import Request, TargetingContext
from decisionapi.request_parser import DecisionRequest, DecisionRequestError
from decisionapi.udc import UDCVisitorRow


def _body(extra=""):
    return '{"visitor_id": "123", ' + extra + ' "context": {}}'


@pytest.mark.parametrize(
    "body_consent, query, expected",
    [
        ("", "", True),
        ('"visitor_consent": false,', "", False),
        ('"visitor_consent": true,', "", True),
        ("", "sendContextEvent=false", False),
        ("", "sendContextEvent=true", True),
        ('"visitor_consent": true,', "sendContextEvent=true", True),
        ('"visitor_consent": false,', "sendContextEvent=false", False),
        ('"visitor_consent": true,', "sendContextEvent=false", False),
    ],
)
def test_build_handle_request_send_context_event(body_consent, query, expected):
    request = build_handle_request("POST", "?" + query, _body(body_consent))
    assert request.send_context_event is expected


@pytest.mark.parametrize(
    "path, query, expected",
    [
        ("/v2/flags", "", True),
        ("/v2/flags", "exposeAllKeys=true", True),
        ("/v2/flags", "exposeAllKeys=false", False),
        ("/v2/campaigns", "", False),
        ("/v2/campaigns", "exposeAllKeys=true", True),
    ],
)
def test_build_handle_request_expose_all_keys(path, query, expected):
    url = path + ("?" + query if query else "")
    request = build_handle_request("POST", url, _body())
    assert request.expose_all_keys is expected


def test_build_handle_request_fields():
    request = build_handle_request(
        "POST",
        "/v2/campaigns/camp1?mode=simple&extras=a&extras=b",
        '{"visitor_id": "v1", "context": {"age": 3}}',
    )
    assert request.campaign_id == "camp1"
    assert request.mode == "simple"
    assert request.extras == ["a", "b"]
    assert request.decision_request.visitor_id == "v1"
    assert request.full_visitor_context.standard == {"age": 3}
    assert request.full_visitor_context.integration_providers == {}


def test_build_handle_request_default_mode():
    request = build_handle_request("POST", "/v2/campaigns", _body())
    assert request.mode == "normal"


def test_build_handle_request_rejects_get():
    with pytest.raises(DecisionRequestError, match="only POST"):
        build_handle_request("GET", "/v2/campaigns", _body())


def test_build_handle_request_rejects_bad_json():
    with pytest.raises(DecisionRequestError, match="Must be a valid json"):
        build_handle_request("POST", "/v2/campaigns", "{")


def _handled_request(anonymous_id=None):
    return Request(
        decision_request=DecisionRequest(
            visitor_id="vis", anonymous_id=anonymous_id, context={"k": "v"}
        ),
        full_visitor_context=TargetingContext(
            standard={"k": "v"}, integration_providers={"mixpanel": {"age": "21"}}
        ),
        created_at=2.0,
    )


def test_build_visitor_contexts():
    contexts = build_visitor_contexts(_handled_request(), "env")
    assert contexts == [
        VisitorContext(env_id="env", visitor_id="vis", customer_id="vis", timestamp=2000, context={"k": "v"}),
        VisitorContext(
            env_id="env",
            visitor_id="vis",
            customer_id="vis",
            timestamp=2000,
            context={"age": "21"},
            partner="mixpanel",
        ),
    ]


def test_build_visitor_contexts_uses_anonymous_id():
    contexts = build_visitor_contexts(_handled_request(anonymous_id="anon"), "env")
    assert [c.visitor_id for c in contexts] == ["anon", "anon"]
    assert [c.customer_id for c in contexts] == ["vis", "vis"]


def test_send_visitor_context():
    received = []
    assert send_visitor_context(_handled_request(), "env", received.append) is True
    assert len(received) == 1
    assert [c.partner for c in received[0]] == ["", "mixpanel"]


def test_send_visitor_context_logs_failure(caplog):
    def failing(contexts):
        raise RuntimeError("queue full")

    with caplog.at_level(logging.ERROR):
        assert send_visitor_context(_handled_request(), "env", failing) is False
    assert "queue full" in caplog.text


def test_fill_visitor_context():
    calls = []

    def fetch(env_id, visitor_id):
        calls.append((env_id, visitor_id))
        return [
            UDCVisitorRow(segment="age", value="21", partner="mixpanel"),
            UDCVisitorRow(segment="city", value="Paris", partner="mixpanel"),
            UDCVisitorRow(segment="tier", value="gold", partner="segment"),
        ]

    request = Request(decision_request=DecisionRequest(visitor_id="vis"))
    fill_visitor_context(request, "env", fetch)
    assert calls == [("env", "vis")]
    assert request.full_visitor_context.integration_providers == {
        "mixpanel": {"age": "21", "city": "Paris"},
        "segment": {"tier": "gold"},
    }


def test_fill_visitor_context_propagates_errors():
    def fetch(env_id, visitor_id):
        raise RuntimeError("missing UDC_URL env variable")

    request = Request(decision_request=DecisionRequest(visitor_id="vis"))
    with pytest.raises(RuntimeError, match="missing UDC_URL"):
        fill_visitor_context(request, "env", fetch)
    assert request.full_visitor_context.integration_providers == {}