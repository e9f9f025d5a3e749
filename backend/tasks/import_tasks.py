"""Celery tasks for wardrobe imports."""

from datetime import datetime

from celery_app import celery_app
from config import get_extraction_config
from wardrobe_import.exceptions import InvalidDocumentError
from wardrobe_import.logging_config import get_logger
from wardrobe_import.models import ImportProgress, RawDocument
from wardrobe_import.orchestrator import extract_batch

logger = get_logger(__name__)


def progress_meta(progress: ImportProgress, job_id: str = None) -> dict:
    """Task meta for a PROGRESS state update."""
    meta = progress.to_dict()
    meta["status"] = "processing"
    meta["job_id"] = job_id
    return meta


@celery_app.task(bind=True, time_limit=600, soft_time_limit=570)
def extract_documents_task(self, documents: list, skip_non_transactional: bool = None):
    """
    Celery task to extract wardrobe items from fetched order emails.

    Args:
        documents: List of document dicts (sender, subject, html_body,
            timestamp, message_id)
        skip_non_transactional: Override WARDROBE_SKIP_NON_TRANSACTIONAL

    Returns:
        dict: Review items and error summary
    """
    job_id = self.request.id

    try:
        parsed = [RawDocument.from_dict(document) for document in documents or []]
    except InvalidDocumentError as e:
        logger.warning(f"Rejected import payload: {e}", extra={"import_job_id": job_id})
        return {"status": "failed", "error": str(e), "job_id": job_id}

    try:
        config = get_extraction_config()
        if skip_non_transactional is None:
            skip_non_transactional = config.skip_non_transactional

        self.update_state(
            state="STARTED",
            meta={"status": "initializing", "job_id": job_id, "total_documents": len(parsed)},
        )

        errors = []

        def report(progress: ImportProgress):
            errors[:] = progress.errors
            self.update_state(state="PROGRESS", meta=progress_meta(progress, job_id))

        batch = extract_batch(
            parsed,
            observer=report,
            skip_non_transactional=skip_non_transactional,
            settings=config.to_settings(),
            pacing_delay=config.pacing_delay,
            import_job_id=job_id,
        )

        items = [item.to_dict() for item in batch.review_items()]
        return {
            "status": "completed",
            "job_id": job_id,
            "count": len(items),
            "items": items,
            "errors": [error.to_dict() for error in errors],
            "completed_at": datetime.now().isoformat(),
        }

    except Exception as e:
        logger.error(f"Import task failed: {e}", extra={"import_job_id": job_id}, exc_info=True)
        return {
            "status": "failed",
            "error": str(e),
            "job_id": job_id,
        }
