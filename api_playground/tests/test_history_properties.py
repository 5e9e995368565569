"""
Property-based tests for history routes.

Records are created through the proxy endpoint, then read back through
the history endpoints.
"""

import time
from datetime import datetime

import httpx
from hypothesis import given, strategies as st, settings

from .conftest import OTHER_OWNER, get_test_client, owner_headers


http_method_strategy = st.sampled_from(["GET", "POST", "PUT", "DELETE", "PATCH"])

status_code_strategy = st.sampled_from([200, 201, 204, 400, 401, 403, 404, 500, 502, 503])


def parse_time(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def send(client, owner: str | None = None, **config):
    payload = {"method": "GET", "url": "https://example.com/api"}
    payload.update(config)
    headers = owner_headers(owner) if owner else owner_headers()
    return client.post("/api/proxy", json=payload, headers=headers)


class TestHistoryRecordSorting:
    """History listing is ordered newest first."""

    @given(record_count=st.integers(min_value=2, max_value=5))
    @settings(max_examples=10, deadline=None)
    def test_history_list_ordered_by_creation_time_descending(self, record_count: int):
        """
        Property: records come back in reverse creation order.
        """
        with get_test_client() as client:
            created_ids = []
            for i in range(record_count):
                response = send(client, url=f"https://example.com/test/{i}")
                assert response.status_code == 200
                created_ids.append(response.json()["id"])
                time.sleep(0.005)

            response = client.get("/api/history", headers=owner_headers())
            assert response.status_code == 200
            items = response.json()

            assert [item["id"] for item in items] == list(reversed(created_ids))
            for current, following in zip(items, items[1:]):
                assert parse_time(current["created_at"]) >= \
                    parse_time(following["created_at"])

    def test_limit(self):
        with get_test_client() as client:
            for i in range(4):
                send(client, url=f"https://example.com/{i}")
                time.sleep(0.005)

            items = client.get("/api/history?limit=2", headers=owner_headers()).json()

            assert [item["url"] for item in items] == ["https://example.com/3", "https://example.com/2"]


class TestHistoryRecordCompleteness:
    """A stored record holds the full request and response."""

    @given(method=http_method_strategy, status_code=status_code_strategy)
    @settings(max_examples=20, deadline=None)
    def test_history_record_contains_complete_details(self, method: str, status_code: int):
        """
        Property: the record returned by id mirrors the request sent and the
        response received.
        """
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                status_code,
                json={"result": "success"},
                headers={"X-Request-Method": request.method},
            )

        with get_test_client(handler) as client:
            body = '{"test": "data"}'
            response = send(
                client,
                method=method,
                url=f"https://example.com/api/{method.lower()}",
                headers={"Accept": "application/json"},
                queryParams={"page": "1"},
                body=body,
            )
            assert response.status_code == 200
            record_id = response.json()["id"]

            response = client.get(f"/api/history/{record_id}", headers=owner_headers())
            assert response.status_code == 200
            data = response.json()

            assert data["id"] == record_id
            assert data["owner_id"] == "alice"
            assert data["method"] == method
            assert data["url"] == f"https://example.com/api/{method.lower()}"
            assert data["headers"] == {"Accept": "application/json"}
            assert data["query_params"] == {"page": "1"}
            assert data["body"] == body

            assert data["status_code"] == status_code
            assert data["response_body"] == {"result": "success"}
            assert data["response_headers"]["x-request-method"] == method
            assert data["response_time_ms"] >= 0
            assert parse_time(data["created_at"]) is not None


class TestHistoryOwnership:
    """Owners only see their own records."""

    def test_listing_is_owner_scoped(self):
        with get_test_client() as client:
            mine = send(client).json()["id"]
            send(client, owner=OTHER_OWNER)

            items = client.get("/api/history", headers=owner_headers()).json()

            assert [item["id"] for item in items] == [mine]

    def test_other_owners_record_is_not_found(self):
        with get_test_client() as client:
            theirs = send(client, owner=OTHER_OWNER).json()["id"]

            response = client.get(f"/api/history/{theirs}", headers=owner_headers())

            assert response.status_code == 404
            assert response.json()["error_code"] == "RESOURCE_NOT_FOUND"

    def test_unknown_record(self, client):
        response = client.get("/api/history/does-not-exist", headers=owner_headers())
        assert response.status_code == 404
        assert "does-not-exist" in response.json()["detail"]

    def test_missing_owner_is_unauthorized(self, client):
        response = client.get("/api/history")
        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHORIZED"
