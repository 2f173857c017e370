import pytest

from decisionapi.request_parser import (
    DecisionRequest,
    DecisionRequestError,
    get_decision_request,
    parse_json_body,
)


def test_get_method_rejected():
    with pytest.raises(DecisionRequestError) as info:
        get_decision_request("GET", b"")
    assert str(info.value) == "only POST http method is allowed"


def test_empty_body_is_invalid_json():
    with pytest.raises(DecisionRequestError) as info:
        get_decision_request("POST", b"")
    assert "Must be a valid json" in str(info.value)


def test_unknown_field():
    with pytest.raises(DecisionRequestError) as info:
        get_decision_request("POST", b'{"wrong_key":true}')
    assert "json body is not valid" in str(info.value)
    assert "wrong_key" in str(info.value)


def test_empty_object():
    request = get_decision_request("POST", b"{}")
    assert request == DecisionRequest()
    assert request.visitor_id is None


def test_full_body_snake_case():
    request = parse_json_body(
        '{"visitor_id": "123", "anonymous_id": "anon", "context": {"age": 21, "vip": true},'
        ' "trigger_hit": false, "visitor_consent": true, "decision_group": "grp"}'
    )
    assert request.visitor_id == "123"
    assert request.anonymous_id == "anon"
    assert request.context == {"age": 21, "vip": True}
    assert request.trigger_hit is False
    assert request.visitor_consent is True
    assert request.decision_group == "grp"


def test_camel_case_names():
    request = parse_json_body(b'{"visitorId": "v", "triggerHit": true, "visitorConsent": false}')
    assert request.visitor_id == "v"
    assert request.trigger_hit is True
    assert request.visitor_consent is False


def test_null_leaves_field_unset():
    request = parse_json_body('{"visitor_id": null, "context": null}')
    assert request == DecisionRequest()


@pytest.mark.parametrize(
    "body",
    [
        '{"visitor_id": 123}',
        '{"trigger_hit": "yes"}',
        '{"context": []}',
        "[]",
        '{"visitor_id": "a", "visitor_id": "b"}',
        '{"visitor_id": "a", "visitorId": "b"}',
        '{"context": {"x": NaN}}',
    ],
)
def test_invalid_bodies_are_syntax_errors(body):
    with pytest.raises(DecisionRequestError) as info:
        parse_json_body(body)
    assert "Must be a valid json" in str(info.value)