"""Integration tests for the wardrobe import API endpoints.

Covers:
- Health check
- Synchronous extraction (success, validation errors, tier gating)
- Background job queueing and status lookup
"""

from types import SimpleNamespace

import pytest

from services import wardrobe_import_service


@pytest.fixture
def nike_payload(nike_document):
    return {"documents": [nike_document.to_dict()]}


# ============================================================================
# HEALTH
# ============================================================================


def test_health_endpoint(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    data = response.get_json()
    assert data["status"] == "ok"
    assert {"Amazon", "Nike", "Zara", "Lululemon", "Adidas"} <= set(data["retailers"])
    assert data["lexicon"]["brands"] > 0


# ============================================================================
# SYNCHRONOUS EXTRACTION
# ============================================================================


def test_extract_returns_review_items(client, nike_payload):
    response = client.post("/api/wardrobe/import/extract", json=nike_payload)

    assert response.status_code == 200
    data = response.get_json()
    assert data["count"] == 1
    assert data["items"][0] == {
        "name": "Men's Running Shorts",
        "image_url": "https://static.nike.com/a/images/t_default/mens-dri-fit-running-shorts.jpg",
        "brand": "Nike",
        "size": None,
        "color": None,
    }


def test_extract_skip_non_transactional(client, document_factory, marketing_newsletter_html):
    newsletter = document_factory(marketing_newsletter_html, subject="New arrivals are here")
    payload = {"documents": [newsletter.to_dict()], "skip_non_transactional": True}

    response = client.post("/api/wardrobe/import/extract", json=payload)

    assert response.status_code == 200
    assert response.get_json()["count"] == 0


@pytest.mark.parametrize("body", [
    ["not", "an", "object"],
    {"documents": "nike"},
    {"documents": [{"subject": "no sender"}]},
    {"documents": [], "skip_non_transactional": "yes"},
    {"documents": [], "time_range": "forever"},
    {"documents": [], "time_range": "two_years", "tier": "gold"},
])
def test_extract_rejects_invalid_payload(client, body):
    response = client.post("/api/wardrobe/import/extract", json=body)

    assert response.status_code == 400
    assert "error" in response.get_json()


def test_extract_requires_json(client):
    response = client.post("/api/wardrobe/import/extract", data="plain", content_type="text/plain")

    assert response.status_code == 400


def test_extract_long_range_requires_premium(client, nike_payload):
    response = client.post(
        "/api/wardrobe/import/extract",
        json={**nike_payload, "time_range": "two_years", "tier": "free"},
    )

    assert response.status_code == 403
    assert "Premium" in response.get_json()["error"]


def test_extract_long_range_allowed_for_premium(client, nike_payload):
    response = client.post(
        "/api/wardrobe/import/extract",
        json={**nike_payload, "time_range": "2023-01-01", "tier": "premium"},
    )

    assert response.status_code == 200
    assert response.get_json()["count"] == 1


# ============================================================================
# BACKGROUND JOBS
# ============================================================================


def test_start_job_queues_task(client, monkeypatch, nike_payload):
    queued = []

    def fake_delay(documents, skip_non_transactional):
        queued.append((documents, skip_non_transactional))
        return SimpleNamespace(id="job-123")

    monkeypatch.setattr(wardrobe_import_service.extract_documents_task, "delay", fake_delay)

    response = client.post("/api/wardrobe/import/jobs", json=nike_payload)

    assert response.status_code == 202
    assert response.get_json() == {"job_id": "job-123", "status": "queued", "total_documents": 1}
    assert queued[0][0][0]["sender"] == "Nike <orders@nike.com>"
    assert queued[0][1] is None


def test_start_job_validates_before_queueing(client, monkeypatch):
    monkeypatch.setattr(
        wardrobe_import_service.extract_documents_task,
        "delay",
        lambda *args: pytest.fail("task should not be queued"),
    )

    response = client.post("/api/wardrobe/import/jobs", json={"documents": [{}]})

    assert response.status_code == 400


def test_unknown_job_is_not_found(client):
    response = client.get("/api/wardrobe/import/jobs/does-not-exist")

    assert response.status_code == 404
    data = response.get_json()
    assert data["status"] == "pending"
    assert "_http_status" not in data


class FakeAsyncResult:
    """Stand-in for celery.result.AsyncResult with a fixed state."""

    state = "PENDING"
    info = None
    result = None

    def __init__(self, task_id, app=None):
        self.id = task_id


@pytest.mark.parametrize("state, info, expected_status", [
    ("PROGRESS", {"phase": "parsing", "processed_documents": 2}, "running"),
    ("SUCCESS", {"status": "completed", "count": 1, "items": []}, "completed"),
    ("FAILURE", RuntimeError("worker lost"), "failed"),
    ("RETRY", None, "retry"),
])
def test_job_status_by_state(client, monkeypatch, state, info, expected_status):
    fake = type("StatefulResult", (FakeAsyncResult,), {"state": state, "info": info, "result": info})
    monkeypatch.setattr("celery.result.AsyncResult", fake)

    response = client.get("/api/wardrobe/import/jobs/job-123")

    assert response.status_code == 200
    data = response.get_json()
    assert data["status"] == expected_status
    assert data["job_id"] == "job-123"
    if state == "PROGRESS":
        assert data["processed_documents"] == 2
    if state == "FAILURE":
        assert data["error"] == "worker lost"
