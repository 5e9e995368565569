"""
Tests for response envelopes and request/response analysis.
"""

import httpx
import pytest
from hypothesis import given, strategies as st, settings

from api_playground.exceptions import ConnectionFailureError, RequestTimeoutError
from api_playground.services.analyzer import (
    analyze,
    performance_rating,
    security_score,
    status_category,
    summarize_structure,
)
from api_playground.services.envelope import (
    ResponseEnvelope,
    build_envelope,
    build_failure_envelope,
    decode_body,
    format_size,
    response_size,
)
from api_playground.services.json_values import MAX_JSON_DEPTH


def make_envelope(body=None, headers=None, status_code=200, response_time_ms=100) -> ResponseEnvelope:
    return ResponseEnvelope(
        response_body=body,
        response_headers=headers or {},
        status_code=status_code,
        status_text="OK",
        response_time_ms=response_time_ms,
    )


class TestEnvelope:

    def test_build_envelope_from_json_response(self):
        response = httpx.Response(201, json={"id": 7}, headers={"X-Rate": "10"})
        envelope = build_envelope(response, elapsed_ms=42)

        assert envelope.response_body == {"id": 7}
        assert envelope.status_code == 201
        assert envelope.status_text == "Created"
        assert envelope.response_time_ms == 42
        assert envelope.response_headers["x-rate"] == "10"
        assert not envelope.is_failure

    def test_json_decoded_without_json_content_type(self):
        response = httpx.Response(200, text='[1, 2]', headers={"content-type": "text/plain"})
        assert decode_body(response) == [1, 2]

    def test_non_utf8_payload_falls_back_to_text(self):
        response = httpx.Response(200, content=b"\xff\xfe not json", headers={"content-type": "text/plain"})
        assert isinstance(decode_body(response), str)

    def test_json_nested_past_the_limit_is_kept_as_text(self):
        text = "[" * 300 + "]" * 300
        response = httpx.Response(200, text=text, headers={"content-type": "application/json"})
        assert decode_body(response) == text

    def test_json_at_the_limit_is_decoded(self):
        text = "[" * MAX_JSON_DEPTH + "]" * MAX_JSON_DEPTH
        response = httpx.Response(200, text=text)
        assert isinstance(decode_body(response), list)

    def test_failure_envelopes(self):
        timeout = build_failure_envelope(RequestTimeoutError("took too long"), elapsed_ms=30000)
        refused = build_failure_envelope(ConnectionFailureError("refused"), elapsed_ms=3)

        assert (timeout.status_code, timeout.status_text) == (0, "Request timeout")
        assert (refused.status_code, refused.status_text) == (0, "Connection failed")
        assert timeout.response_body == {"error": "took too long"}
        assert timeout.response_headers == {}
        assert timeout.is_failure

    def test_response_size_is_utf8_bytes_of_compact_json(self):
        assert response_size({"a": 1}) == len(b'{"a":1}')
        assert response_size("é") == len('"é"'.encode("utf-8"))
        assert response_size(None) == 4

    @pytest.mark.parametrize("size, expected", [
        (0, "0 bytes"),
        (1024, "1024 bytes"),
        (1536, "1.5 KB"),
    ])
    def test_format_size(self, size: int, expected: str):
        assert format_size(size) == expected


class TestPerformanceRating:

    @pytest.mark.parametrize("ms, rating", [
        (0, "excellent"),
        (500, "excellent"),
        (501, "good"),
        (1000, "good"),
        (1001, "average"),
        (2000, "average"),
        (2001, "slow"),
    ])
    def test_thresholds(self, ms: int, rating: str):
        assert performance_rating(ms) == rating


class TestSecurityScore:

    def test_plain_http_without_headers(self):
        assert security_score("http://x.com", {}, {}) == 40

    def test_https_with_auth_and_user_agent(self):
        headers = {"Authorization": "Bearer t", "User-Agent": "playground/1.0"}
        assert security_score("https://x.com", headers, {}) == 100

    def test_cors_wildcard_in_response(self):
        headers = {"Authorization": "Bearer t", "User-Agent": "ua"}
        assert security_score("https://x.com", headers, {"access-control-allow-origin": "*"}) == 85

    def test_specific_cors_origin_is_not_penalized(self):
        headers = {"Authorization": "Bearer t", "User-Agent": "ua"}
        response_headers = {"Access-Control-Allow-Origin": "https://app.example.com"}
        assert security_score("https://x.com", headers, response_headers) == 100

    def test_header_names_are_case_insensitive(self):
        headers = {"authorization": "Bearer t", "user-agent": "ua"}
        assert security_score("https://x.com", headers, {}) == 100

    def test_worst_case(self):
        assert security_score("http://x.com", {}, {"Access-Control-Allow-Origin": "*"}) == 25

    @given(
        https=st.booleans(),
        auth=st.booleans(),
        agent=st.booleans(),
        cors=st.booleans(),
    )
    @settings(max_examples=50)
    def test_score_stays_in_range(self, https, auth, agent, cors):
        """
        Property: the score is always within 0..100.
        """
        headers = {}
        if auth:
            headers["Authorization"] = "x"
        if agent:
            headers["User-Agent"] = "x"
        url = "https://x.com" if https else "http://x.com"
        response_headers = {"Access-Control-Allow-Origin": "*"} if cors else {}

        assert 0 <= security_score(url, headers, response_headers) <= 100


class TestStructureSummary:

    def test_scalar_body(self):
        summary = summarize_structure("plain text")
        assert (summary.array_count, summary.object_count, summary.max_depth) == (0, 0, 0)
        assert summary.complexity == "simple"

    def test_flat_object(self):
        summary = summarize_structure({"a": 1, "b": "x"})
        assert (summary.array_count, summary.object_count, summary.max_depth) == (0, 1, 1)
        assert summary.complexity == "simple"

    def test_nested(self):
        summary = summarize_structure({"items": [{"id": 1}, {"id": 2}]})
        assert summary.array_count == 1
        assert summary.object_count == 3
        assert summary.max_depth == 3
        assert summary.complexity == "nested"

    def test_complex(self):
        summary = summarize_structure({"a": {"b": {"c": {"d": 1}}}})
        assert summary.max_depth == 4
        assert summary.complexity == "complex"

    def test_empty_containers_count(self):
        summary = summarize_structure([[], {}])
        assert (summary.array_count, summary.object_count, summary.max_depth) == (2, 1, 2)

    def test_deep_nesting_does_not_exhaust_the_stack(self):
        body = 0
        for _ in range(500):
            body = [body]
        summary = summarize_structure({"root": body})
        assert (summary.array_count, summary.object_count, summary.max_depth) == (500, 1, 501)
        assert summary.complexity == "complex"


class TestStatusCategory:

    @pytest.mark.parametrize("code, category", [
        (0, "network_error"),
        (200, "success"),
        (204, "success"),
        (301, "redirect"),
        (404, "client_error"),
        (503, "server_error"),
        (101, "unknown"),
    ])
    def test_categories(self, code: int, category: str):
        assert status_category(code) == category


class TestAnalyze:

    def test_insecure_slow_request_suggestions_in_order(self):
        envelope = make_envelope(body={"a": 1}, response_time_ms=2500)

        result = analyze(envelope, "http://x.com", {})

        assert result.security_score == 40
        assert result.security_rating == "needs_attention"
        assert result.performance_rating == "slow"
        assert result.performance_score == 50.0
        assert result.suggestions == [
            "Use HTTPS for secure communication",
            "Consider adding authentication headers",
            "Add a User-Agent header for better API compatibility",
            "Response time is high - consider caching or optimization",
            "Add Cache-Control headers for better performance",
        ]

    def test_well_behaved_request_has_no_suggestions(self):
        envelope = make_envelope(
            body={"a": 1},
            headers={"cache-control": "max-age=60"},
            response_time_ms=120,
        )
        headers = {"Authorization": "Bearer t", "User-Agent": "ua"}

        result = analyze(envelope, "https://x.com", headers)

        assert result.security_score == 100
        assert result.security_rating == "secure"
        assert result.performance_rating == "excellent"
        assert result.status_category == "success"
        assert result.suggestions == []

    def test_large_body_suggestion(self):
        envelope = make_envelope(
            body="x" * (200 * 1024),
            headers={"ETag": '"abc"'},
        )
        headers = {"Authorization": "Bearer t", "User-Agent": "ua"}

        result = analyze(envelope, "https://x.com", headers)

        assert len(result.suggestions) == 1
        assert result.suggestions[0].startswith("Response body is large")
        assert result.response_size > 200 * 1024
        assert result.response_size_display.endswith("KB")

    def test_failed_request_skips_cache_suggestion(self):
        envelope = make_envelope(body={"error": "timeout"}, status_code=0)

        result = analyze(envelope, "https://x.com", {"Authorization": "t", "User-Agent": "ua"})

        assert result.status_category == "network_error"
        assert result.suggestions == []

    def test_missing_request_headers_default_to_empty(self):
        result = analyze(make_envelope(), "https://x.com")
        assert result.security_score == 70
