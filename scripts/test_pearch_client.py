"""Pearch client: retries, error classes and request shapes."""

import json

import pytest

from merraine.clients.pearch import (
    PearchAuthError,
    PearchError,
    PearchRateLimitError,
    PearchTimeoutError,
    calculate_enrich_cost,
    calculate_search_cost,
    create_pearch_client,
)


def test_server_error_then_success_retries_once(vendor):
    vendor.queue(500, {"error": "boom"})
    vendor.queue(200, {"search_results": []})

    result = vendor.client().search({"query": "python"})

    assert result == {"search_results": []}
    assert len(vendor.requests) == 2
    assert vendor.sleeps == [1.0]


def test_unauthorized_is_not_retried(vendor):
    vendor.queue(401, {"error": "bad key"})

    with pytest.raises(PearchAuthError) as exc_info:
        vendor.client().search({"query": "python"})

    assert exc_info.value.status_code == 401
    assert len(vendor.requests) == 1
    assert vendor.sleeps == []


def test_forbidden_is_auth_error(vendor):
    vendor.queue(403)

    with pytest.raises(PearchAuthError):
        vendor.client().list_jobs()
    assert len(vendor.requests) == 1


def test_other_client_errors_fail_immediately(vendor):
    vendor.queue(404, {"error": "not found"})

    with pytest.raises(PearchError) as exc_info:
        vendor.client().enrich_profile({"id": "missing"})

    assert not isinstance(exc_info.value, (PearchAuthError, PearchRateLimitError, PearchTimeoutError))
    assert exc_info.value.status_code == 404
    assert "404" in str(exc_info.value)
    assert len(vendor.requests) == 1


def test_rate_limit_exhausts_retries(vendor):
    for _ in range(3):
        vendor.queue(429, {"error": "slow down"})

    with pytest.raises(PearchRateLimitError):
        vendor.client().search({"query": "python"})

    assert len(vendor.requests) == 3
    assert vendor.sleeps == [1.0, 3.0]


def test_timeout_then_success(vendor):
    vendor.queue_timeout()
    vendor.queue(200, {"jobs": []})

    assert vendor.client().list_jobs() == {"jobs": []}
    assert vendor.sleeps == [1.0]


def test_timeouts_exhausted_raise_timeout_error(vendor):
    for _ in range(3):
        vendor.queue_timeout()

    with pytest.raises(PearchTimeoutError):
        vendor.client().search({"query": "python"})
    assert len(vendor.requests) == 3


def test_request_carries_bearer_key_and_json_body(vendor):
    vendor.queue(200, {"search_results": []})

    vendor.client().search({"query": "python", "limit": 5})

    request = vendor.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/v2/search"
    assert request.headers["Authorization"] == "Bearer test-key"
    assert json.loads(request.content) == {"query": "python", "limit": 5}


def test_enrich_sends_docid_and_only_enabled_flags(vendor):
    vendor.queue(200, {"docid": "abc"})

    vendor.client().enrich_profile({"id": "abc", "reveal_emails": True, "reveal_phones": False})

    request = vendor.requests[0]
    assert request.url.path == "/v1/profile"
    assert dict(request.url.params) == {"docid": "abc", "reveal_emails": "true"}


def test_job_endpoints(vendor):
    vendor.queue(200, {"success": True})
    vendor.queue(200, {"jobs": []})
    vendor.queue(200, {"success": True})
    client = vendor.client()

    client.upsert_jobs([{"job_id": "j1", "job_description": "Python role"}])
    client.list_jobs(limit=5)
    client.delete_jobs(["j1"])

    paths = [(r.method, r.url.path) for r in vendor.requests]
    assert paths == [("POST", "/v1/upsert_jobs"), ("GET", "/v1/list_jobs"), ("POST", "/v1/delete_jobs")]
    assert vendor.requests[1].url.params["limit"] == "5"
    assert json.loads(vendor.requests[2].content) == ["j1"]


def test_create_client_requires_key():
    with pytest.raises(ValueError):
        create_pearch_client("")


def test_search_cost_adds_flag_costs_per_profile():
    assert calculate_search_cost({}, 10) == 10
    assert calculate_search_cost({"type": "pro"}, 10) == 50
    params = {"type": "fast", "insights": True, "profile_scoring": True, "high_freshness": True}
    assert calculate_search_cost(params, 5) == (1 + 1 + 1 + 2) * 5
    assert calculate_search_cost({"reveal_emails": True, "reveal_phones": True}, 2) == (1 + 2 + 14) * 2


def test_enrich_cost():
    assert calculate_enrich_cost({}) == 1
    assert calculate_enrich_cost({"high_freshness": True, "reveal_emails": True, "reveal_phones": True}) == 19
