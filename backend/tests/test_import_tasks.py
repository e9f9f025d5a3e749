"""Tests for the Celery extraction task.

Tasks run eagerly through .apply(); conftest points Celery at in-memory
transports so no broker is needed.
"""

from types import SimpleNamespace

from config import ExtractionConfig
from tasks import import_tasks
from tasks.import_tasks import extract_documents_task, progress_meta
from wardrobe_import import orchestrator
from wardrobe_import.models import ImportPhase, ImportProgress


def test_progress_meta():
    progress = ImportProgress(
        phase=ImportPhase.PARSING,
        total_documents=4,
        processed_documents=1,
        current_retailer="Nike",
    )

    meta = progress_meta(progress, job_id="job-1")

    assert meta["status"] == "processing"
    assert meta["job_id"] == "job-1"
    assert meta["phase"] == "parsing"
    assert meta["percent_complete"] == 0.25
    assert meta["current_retailer"] == "Nike"


def test_extract_documents_task_completes(nike_document, boutique_document):
    result = extract_documents_task.apply(
        args=[[nike_document.to_dict(), boutique_document.to_dict()]]
    ).get()

    assert result["status"] == "completed"
    assert result["count"] == 3
    assert result["items"][0]["name"] == "Men's Running Shorts"
    assert result["items"][0]["brand"] == "Nike"
    assert result["errors"] == []
    assert "score" not in result["items"][0]


def test_extract_documents_task_rejects_bad_payload():
    result = extract_documents_task.apply(args=[[{"subject": "no sender"}]]).get()

    assert result["status"] == "failed"
    assert "sender" in result["error"]


def test_extract_documents_task_paces_between_documents(monkeypatch, nike_document, boutique_document):
    sleeps = []
    monkeypatch.setattr(import_tasks, "get_extraction_config", lambda: ExtractionConfig(pacing_delay=0.25))
    monkeypatch.setattr(orchestrator, "time", SimpleNamespace(sleep=sleeps.append))

    result = extract_documents_task.apply(
        args=[[nike_document.to_dict(), boutique_document.to_dict()]]
    ).get()

    assert result["status"] == "completed"
    assert sleeps == [0.25]


def test_extract_documents_task_without_pacing_never_sleeps(monkeypatch, nike_document, boutique_document):
    sleeps = []
    monkeypatch.setattr(import_tasks, "get_extraction_config", lambda: ExtractionConfig())
    monkeypatch.setattr(orchestrator, "time", SimpleNamespace(sleep=sleeps.append))

    extract_documents_task.apply(args=[[nike_document.to_dict(), boutique_document.to_dict()]]).get()

    assert sleeps == []
