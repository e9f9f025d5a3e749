"""
Wardrobe Import Service - Business Logic

Validates API payloads, runs synchronous extraction and queues/inspects
background import jobs. Separates business logic from HTTP routing concerns.
"""

from typing import Optional

from config import get_extraction_config
from tasks.import_tasks import extract_documents_task
from wardrobe_import.exceptions import InvalidDocumentError, TierRestrictionError
from wardrobe_import.gmail_query import SubscriptionTier, TimeRange, can_access_time_range
from wardrobe_import.logging_config import get_logger
from wardrobe_import.models import RawDocument
from wardrobe_import.orchestrator import extract_batch

logger = get_logger(__name__)


def parse_documents(payload) -> list[RawDocument]:
    """
    Convert a `documents` payload to RawDocuments.

    Raises:
        InvalidDocumentError: If the payload is not a list or an entry is invalid
    """
    if not isinstance(payload, list):
        raise InvalidDocumentError("'documents' must be a list")

    documents = []
    for index, entry in enumerate(payload):
        try:
            documents.append(RawDocument.from_dict(entry))
        except InvalidDocumentError as e:
            raise InvalidDocumentError(f"Document {index}: {e}") from e
    return documents


def check_time_range_access(time_range: Optional[str], tier: Optional[str]) -> None:
    """
    Enforce subscription gating when the caller names a time range.

    Raises:
        InvalidDocumentError: If the time range or tier is not recognised
        TierRestrictionError: If the tier does not allow the time range
    """
    if not time_range:
        return

    try:
        parsed_range = TimeRange.from_value(time_range)
        parsed_tier = SubscriptionTier(tier or SubscriptionTier.FREE.value)
    except ValueError as e:
        raise InvalidDocumentError(str(e)) from e

    if not can_access_time_range(parsed_range, parsed_tier):
        raise TierRestrictionError(parsed_range, parsed_tier)


def extract_items(
    documents_payload,
    skip_non_transactional: Optional[bool] = None,
    time_range: Optional[str] = None,
    tier: Optional[str] = None,
) -> dict:
    """
    Extract review items from already-fetched order emails.

    Args:
        documents_payload: List of document dicts
        skip_non_transactional: Override the configured default
        time_range: Optional range the documents were searched with
        tier: Caller's subscription tier ('free' or 'premium')

    Returns:
        Dict with review items and count
    """
    check_time_range_access(time_range, tier)
    documents = parse_documents(documents_payload)

    config = get_extraction_config()
    if skip_non_transactional is None:
        skip_non_transactional = config.skip_non_transactional

    batch = extract_batch(
        documents,
        skip_non_transactional=skip_non_transactional,
        settings=config.to_settings(),
    )
    items = [item.to_dict() for item in batch.review_items()]

    return {
        "items": items,
        "count": len(items),
    }


def start_import_job(
    documents_payload,
    skip_non_transactional: Optional[bool] = None,
    time_range: Optional[str] = None,
    tier: Optional[str] = None,
) -> dict:
    """
    Queue a background extraction job.

    The payload is validated before queueing so bad requests fail fast.

    Returns:
        Job details dict with job_id and status
    """
    check_time_range_access(time_range, tier)
    documents = parse_documents(documents_payload)

    task = extract_documents_task.delay(
        [document.to_dict() for document in documents],
        skip_non_transactional,
    )
    logger.info(
        f"Wardrobe import queued: {len(documents)} documents",
        extra={"import_job_id": task.id},
    )

    return {
        "job_id": task.id,
        "status": "queued",
        "total_documents": len(documents),
    }


def get_job_status(job_id: str) -> dict:
    """
    Get import job status by Celery task ID.

    Args:
        job_id: Celery task ID

    Returns:
        Job status dict with progress or result
    """
    from celery.result import AsyncResult
    from celery_app import celery_app

    task = AsyncResult(job_id, app=celery_app)

    if task.state == 'PENDING':
        return {
            'job_id': job_id,
            'status': 'pending',
            'message': 'Job not found or not started',
            '_http_status': 404
        }

    elif task.state in ('STARTED', 'PROGRESS'):
        info = task.info if isinstance(task.info, dict) else {}
        return {
            **info,
            'job_id': job_id,
            'status': 'running',
        }

    elif task.state == 'SUCCESS':
        result = task.result
        if isinstance(result, dict):
            return {**result, 'job_id': job_id}
        return {'job_id': job_id, 'status': 'completed'}

    elif task.state == 'FAILURE':
        return {
            'job_id': job_id,
            'status': 'failed',
            'error': str(task.info)
        }

    else:
        return {
            'job_id': job_id,
            'status': task.state.lower()
        }
