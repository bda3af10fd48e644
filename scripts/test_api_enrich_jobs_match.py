"""Enrich, job and match endpoints."""

import json

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from merraine.api.app import app
from merraine.db import CreditTransaction, get_optional_db
from merraine.db import queries
from merraine.models import Profile


def test_enrich_requires_id(client, vendor):
    response = client.get("/api/enrich")

    assert response.status_code == 400
    assert response.json()["detail"] == "Profile ID is required"
    assert vendor.requests == []


def test_enrich_forwards_only_set_flags(client, vendor):
    vendor.queue(json={"profile": {"docid": "abc", "email": "a@b.co"}})

    response = client.get("/api/enrich", params={"id": "abc", "reveal_emails": "true"})

    assert response.status_code == 200
    body = response.json()
    assert body["profile"]["email"] == "a@b.co"
    assert body["estimated_cost"] == 3
    assert dict(vendor.requests[0].url.params) == {"docid": "abc", "reveal_emails": "true"}


def test_enrich_updates_cached_candidate(client, vendor, db):
    queries.upsert_candidate(db, Profile(id="abc", name="Ada"))
    db.commit()
    vendor.queue(json={"profile": {"docid": "abc", "emails": ["ada@example.com"], "phones": ["+1 555"]}})

    response = client.get(
        "/api/enrich", params={"id": "abc", "reveal_emails": "true", "reveal_phones": "true"}
    )

    assert response.status_code == 200
    db.expire_all()
    candidate = queries.get_candidate_by_pearch_id(db, "abc")
    assert candidate.is_enriched is True
    assert candidate.email == "ada@example.com"
    assert candidate.phone == "+1 555"
    tx = db.query(CreditTransaction).one()
    assert tx.operation == "enrich"
    assert tx.credits == 17
    assert tx.candidate_id == candidate.id


def test_enrich_survives_database_failure(client, vendor):
    # Engine without tables: every query fails
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    broken = sessionmaker(bind=engine)

    def broken_db():
        session = broken()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_optional_db] = broken_db
    vendor.queue(json={"docid": "abc", "email": "a@b.co"})

    response = client.get("/api/enrich", params={"id": "abc", "reveal_emails": "true"})

    assert response.status_code == 200
    assert response.json()["email"] == "a@b.co"


def test_enrich_vendor_error(client, vendor):
    vendor.queue(404, {"error": "not found"})

    response = client.get("/api/enrich", params={"id": "missing"})

    assert response.status_code == 500


def test_enrich_rate_limited_after_thirty(client, vendor):
    for _ in range(30):
        vendor.queue(json={"docid": "abc"})
        assert client.get("/api/enrich", params={"id": "abc"}).status_code == 200

    response = client.get("/api/enrich", params={"id": "abc"})

    assert response.status_code == 429
    assert response.headers["X-RateLimit-Limit"] == "30"


def test_list_jobs(client, vendor):
    vendor.queue(json={"jobs": [{"job_id": "j1"}]})

    response = client.get("/api/jobs", params={"limit": 5})

    assert response.json() == {"jobs": [{"job_id": "j1"}]}
    assert vendor.requests[0].url.path == "/v1/list_jobs"
    assert vendor.requests[0].url.params["limit"] == "5"


def test_upsert_jobs(client, vendor):
    vendor.queue(json={"status": "ok"})
    jobs = [
        {"job_id": "j1", "job_description": "Python engineer"},
        {"job_id": "j2", "job_description": "Data engineer"},
    ]

    response = client.post("/api/jobs", json=jobs)

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "credits_used": 2}
    assert json.loads(vendor.requests[0].content) == jobs


def test_upsert_jobs_validation(client, vendor):
    empty = client.post("/api/jobs", json=[])
    incomplete = client.post("/api/jobs", json=[{"job_id": "j1"}])

    assert empty.status_code == 400
    assert empty.json()["detail"] == "Jobs array is required"
    assert incomplete.status_code == 400
    assert incomplete.json()["detail"] == "Each job must have job_id and job_description"
    assert vendor.requests == []


def test_delete_jobs(client, vendor):
    vendor.queue(json={"deleted": 2})

    response = client.request("DELETE", "/api/jobs", json=["j1", "j2"])

    assert response.json() == {"deleted": 2}
    assert vendor.requests[0].method == "POST"
    assert vendor.requests[0].url.path == "/v1/delete_jobs"
    assert json.loads(vendor.requests[0].content) == ["j1", "j2"]


def test_delete_jobs_requires_ids(client, vendor):
    response = client.request("DELETE", "/api/jobs", json=[])

    assert response.status_code == 400
    assert response.json()["detail"] == "Job IDs array is required"


def test_match_jobs(client, vendor):
    vendor.queue(json={"matches": [{"job_id": "j1", "score": 0.8}]})
    profile = {"docid": "abc", "skills": ["python"]}

    response = client.post("/api/match", json=profile)

    assert response.json() == {"matches": [{"job_id": "j1", "score": 0.8}]}
    assert json.loads(vendor.requests[0].content) == profile


def test_match_requires_profile(client, vendor):
    response = client.post("/api/match", json={})

    assert response.status_code == 400
    assert response.json()["detail"] == "Profile data is required"


def test_jobs_require_auth(anonymous_client):
    assert anonymous_client.get("/api/jobs").status_code == 401
    assert anonymous_client.post("/api/match", json={"a": 1}).status_code == 401
    assert anonymous_client.get("/api/enrich", params={"id": "x"}).status_code == 401
