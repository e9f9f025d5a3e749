"""
Import Orchestrator

Drives an import run: authenticate → search → parse each document →
(optionally hand results to catalog creation) → complete. Progress is
reported after every step as an ImportProgress snapshot.

Usage:
    # Offline: documents already fetched
    batch = extract_batch(documents)

    # Full run with collaborators; each snapshot goes to the observer
    items = run_import(
        search_documents=fetch_messages,
        time_range=TimeRange.six_months(),
        tier=SubscriptionTier.FREE,
        observer=print,
    )
"""

import time
from typing import Any, Callable, Generator, Iterable, Optional, Sequence

from wardrobe_import.aggregation import aggregate_candidates
from wardrobe_import.error_tracking import ErrorStage, ExtractionError
from wardrobe_import.exceptions import TierRestrictionError
from wardrobe_import.gmail_query import (
    SubscriptionTier,
    TimeRange,
    build_order_query,
    can_access_time_range,
)
from wardrobe_import.logging_config import get_logger
from wardrobe_import.models import (
    Candidate,
    ImportPhase,
    ImportProgress,
    RankedBatch,
    RawDocument,
    ReviewItem,
)
from wardrobe_import.parsing.filtering import is_transactional
from wardrobe_import.retailer_parsers import ExtractionSettings, detect_retailer, extract_products

logger = get_logger(__name__)

ProgressObserver = Callable[[ImportProgress], Any]


def _parse_documents(
    documents: Sequence[RawDocument],
    progress: ImportProgress,
    settings: Optional[ExtractionSettings],
    skip_non_transactional: bool,
    pacing_delay: float,
    import_job_id: Optional[str],
) -> Generator[ImportProgress, None, list[list[Candidate]]]:
    """Parse documents one at a time in search order, yielding after each."""
    per_document = []
    total = len(documents)

    for index, document in enumerate(documents):
        retailer = detect_retailer(document.sender)
        progress.processed_documents = index + 1
        progress.current_retailer = retailer
        progress.detail_message = f"Processing {retailer} order ({index + 1} of {total})..."

        if skip_non_transactional:
            transactional, reason = is_transactional(document)
            if not transactional:
                logger.debug(
                    f"Skipping non-transactional document: {reason}",
                    extra={"import_job_id": import_job_id, "message_id": document.message_id},
                )
                yield progress.snapshot()
                continue

        candidates = extract_products(
            document,
            settings,
            errors=progress.errors,
            import_job_id=import_job_id,
        )
        per_document.append(candidates)

        progress.found_items += len(candidates)
        if candidates:
            plural = "" if len(candidates) == 1 else "s"
            progress.detail_message = f"Found {len(candidates)} item{plural} from {retailer}"

        yield progress.snapshot()

        if pacing_delay > 0 and index + 1 < total:
            time.sleep(pacing_delay)

    return per_document


def extract_batch(
    documents: Iterable[RawDocument],
    observer: Optional[ProgressObserver] = None,
    skip_non_transactional: bool = False,
    settings: Optional[ExtractionSettings] = None,
    pacing_delay: float = 0.0,
    import_job_id: Optional[str] = None,
) -> RankedBatch:
    """
    Extract, rank and deduplicate product candidates from a batch of emails.

    Deterministic: the same documents with the same settings always give
    the same batch.

    Args:
        documents: Order emails in the order they should be processed
        observer: Called with an ImportProgress snapshot after each document
        skip_non_transactional: Drop documents that look like marketing
        settings: Lexicon, weights and window options
        pacing_delay: Seconds to wait between documents
        import_job_id: Import job ID for log context

    Returns:
        RankedBatch (score descending, unique by image URL)
    """
    documents = list(documents)
    progress = ImportProgress(phase=ImportPhase.PARSING, total_documents=len(documents))

    parsing = _parse_documents(
        documents, progress, settings, skip_non_transactional, pacing_delay, import_job_id
    )
    while True:
        try:
            snapshot = next(parsing)
        except StopIteration as stop:
            per_document = stop.value
            break
        if observer is not None:
            observer(snapshot)

    batch = aggregate_candidates(per_document)
    logger.info(
        f"Extracted {len(batch)} unique candidates from {len(documents)} documents",
        extra={"import_job_id": import_job_id},
    )
    return batch


def iter_import(
    search_documents: Callable[[str], Iterable[RawDocument]],
    time_range: TimeRange,
    tier: SubscriptionTier,
    authenticate: Optional[Callable[[], Any]] = None,
    revoke: Optional[Callable[[Any], Any]] = None,
    create_catalog: Optional[Callable[[list[ReviewItem]], Any]] = None,
    settings: Optional[ExtractionSettings] = None,
    skip_non_transactional: bool = False,
    pacing_delay: float = 0.0,
    import_job_id: Optional[str] = None,
) -> Generator[ImportProgress, None, RankedBatch]:
    """
    Full import run.

    Yields progress updates and returns the final RankedBatch.

    Args:
        search_documents: Called with the Gmail query; returns fetched documents
        time_range: How far back to search
        tier: Caller's subscription tier (gates the time range)
        authenticate: Optional token acquisition; its result is passed to revoke
        revoke: Optional token revocation, called once the run ends
        create_catalog: When given, receives the review items in the
            downloading phase instead of leaving them for review
        settings: Lexicon, weights and window options
        skip_non_transactional: Drop documents that look like marketing
        pacing_delay: Seconds to wait between documents
        import_job_id: Import job ID for log context

    Yields:
        ImportProgress snapshots, phases strictly forward

    Raises:
        TierRestrictionError: Before any phase when the tier does not allow
            the time range
    """
    if not can_access_time_range(time_range, tier):
        raise TierRestrictionError(time_range, tier)

    progress = ImportProgress(phase=ImportPhase.AUTHENTICATING)
    stage = ErrorStage.AUTHENTICATE
    token = None
    logger.info(
        f"Starting wardrobe import ({time_range.display_name})",
        extra={"import_job_id": import_job_id},
    )

    try:
        yield progress.snapshot()
        if authenticate is not None:
            token = authenticate()

        stage = ErrorStage.SEARCH
        progress.advance(ImportPhase.SEARCHING)
        yield progress.snapshot()

        query = build_order_query(time_range)
        logger.info(f"Search query: {query}", extra={"import_job_id": import_job_id})
        documents = list(search_documents(query))

        stage = ErrorStage.RETAILER_PARSE
        progress.advance(ImportPhase.PARSING)
        progress.total_documents = len(documents)
        yield progress.snapshot()

        per_document = yield from _parse_documents(
            documents, progress, settings, skip_non_transactional, pacing_delay, import_job_id
        )
        batch = aggregate_candidates(per_document)

        if create_catalog is not None:
            stage = ErrorStage.CATALOG
            progress.advance(ImportPhase.DOWNLOADING)
            progress.detail_message = f"Adding {len(batch)} items to your wardrobe"
            yield progress.snapshot()
            create_catalog(batch.review_items())

    except Exception as e:
        error = ExtractionError.from_exception(e, stage)
        error.log(import_job_id=import_job_id)
        raise

    finally:
        if revoke is not None and token is not None:
            revoke(token)

    progress.advance(ImportPhase.COMPLETE)
    progress.current_retailer = None
    progress.detail_message = f"Found {len(batch)} items"
    logger.info(
        f"Import completed: {len(batch)} items from {len(documents)} documents, "
        f"{len(progress.errors)} errors",
        extra={"import_job_id": import_job_id},
    )
    yield progress.snapshot()
    return batch


def run_import(
    search_documents: Callable[[str], Iterable[RawDocument]],
    time_range: TimeRange,
    tier: SubscriptionTier,
    observer: Optional[ProgressObserver] = None,
    **kwargs,
) -> list[ReviewItem]:
    """Drive iter_import to completion and return the items for review."""
    run = iter_import(search_documents, time_range, tier, **kwargs)
    while True:
        try:
            progress = next(run)
        except StopIteration as stop:
            return stop.value.review_items()
        if observer is not None:
            observer(progress)
