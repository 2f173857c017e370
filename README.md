# decisionapi

Building blocks for a feature-flag decision API: reading decision requests,
validating activation and event bodies, encoding bucket ranges, shaping JSON
responses, turning an assigned variation into a campaign response and
reporting a visitor's context. It has no dependencies beyond the standard
library.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `decisionapi.bucket` — `encode_bucket_range_string(buckets_list, bucket_range_ids)`
  returns the percent ranges covered by the selected buckets, joined with `:`
  (`"0-100"` for an empty bucket list, `"0-0"` for an empty selection).
  `decode_bucket_range_string(bucket_string)` returns a list of `(start, end)`
  float tuples, skipping malformed ranges and falling back to `[(0.0, 100.0)]`.
- `decisionapi.validation` — `check_error_body(env_id, body)` checks an
  `ActivateRequest` (`cid`, `vid`, `vaid`, `caid`, and that `cid` matches
  `env_id`); `check_event_error_body(body)` checks an `EventRequest`
  (`visitor_id` and a `type` other than `EventType.NULL`). Both return an
  `ErrorResponse` with `status` `"error"` and an `errors` mapping, or `None`
  when the body is valid.
- `decisionapi.request_parser` — `get_decision_request(method, body)` accepts
  only `"POST"` and parses the JSON body with `parse_json_body` into a
  `DecisionRequest`. Field names are accepted in snake_case or camelCase.
  Invalid JSON, wrongly typed fields and unknown fields raise
  `DecisionRequestError`.
- `decisionapi.responses` — `write_server_error`, `write_client_error`,
  `write_json_string_ok`, `write_json_ok`, `write_no_content` and
  `write_panic_response` each return a `Response` with `status`, `body`
  (bytes) and `headers`.
- `decisionapi.udc` — `fetch_visitor_data(environment_id, visitor_id)` reads a
  visitor's partner segments as `UDCVisitorRow` objects from the user data
  connector. Its base URL comes from the `UDC_URL` environment variable or
  `set_udc_url(url)`; without one it raises `RuntimeError`. Replies that are
  not a list of rows raise `ValueError`. Requests time out after one second.
- `decisionapi.tracker` — `new_tracker()` returns a `Tracker`, enabled when
  `TRACK_PERFORMANCE=true`; `Tracker.time_track(message)` records and logs the
  time elapsed since the tracker was created.
- `decisionapi.handle` — the per-request `Request` state with `has_extra`,
  `new_request_from_http(path)` (a `/campaigns/<id>` path selects one
  campaign), `should_trigger_hit`, and `build_campaign_response`, which builds
  a `CampaignResponse` from a `VariationGroup` and its chosen `Variation`,
  optionally filling in every key the group's variations set (as `None`).
- `decisionapi.apilogic` — `build_handle_request(method, url, body)` builds a
  `Request` from HTTP input, honouring the `mode`, `exposeAllKeys`,
  `sendContextEvent` and `extras` query parameters and the body's
  `visitor_consent`. `build_visitor_contexts` and `send_visitor_context` turn
  the request's context into `VisitorContext` records and hand them to a
  callable; `fill_visitor_context` adds partner segments to the request's
  `TargetingContext`.

## Example

```python
from decisionapi.apilogic import build_handle_request
from decisionapi.bucket import decode_bucket_range_string, encode_bucket_range_string

encode_bucket_range_string(["a", "b", "c", "d", "e"], ["a", "c"])  # "0-20:40-60"
decode_bucket_range_string("10-20:50-60")  # [(10.0, 20.0), (50.0, 60.0)]

request = build_handle_request("POST", "/v2/flags", b'{"visitor_id": "123", "context": {}}')
request.decision_request.visitor_id  # "123"
request.expose_all_keys  # True
```

## What this package does not do

It provides no HTTP server and no command to start one. It does not choose
variations for visitors: there is no targeting or allocation engine, no
loading of environments and campaigns, no storage of visitor assignments and
no hits processor. `send_visitor_context` takes the hits processor as a
callable supplied by the caller.