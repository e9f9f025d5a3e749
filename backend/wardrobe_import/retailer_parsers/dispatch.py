"""
Per-document extraction: retailer parser first, generic pipeline as fallback.

A known retailer whose parser finds nothing (or fails) must never produce
fewer candidates than an unknown sender would, so the generic pipeline is
re-run explicitly on the same document.
"""

from typing import Optional

from wardrobe_import.error_tracking import ErrorStage, ExtractionError
from wardrobe_import.logging_config import get_logger
from wardrobe_import.models import Candidate, RawDocument

from .base import ExtractionSettings, RetailerSpec, get_retailer_spec
from .generic import parse_generic

logger = get_logger(__name__)

DEFAULT_SETTINGS = ExtractionSettings()


def _run_parser(
    spec: RetailerSpec,
    document: RawDocument,
    settings: ExtractionSettings,
    errors: Optional[list],
    import_job_id: Optional[str],
) -> tuple[list[Candidate], bool]:
    """Run a retailer parser. Returns (candidates, failed)."""
    try:
        return spec.parser(document, settings), False
    except Exception as e:
        # Retailer parser crashes must not kill the batch; treat as "found nothing"
        error = ExtractionError.from_exception(
            e,
            ErrorStage.RETAILER_PARSE,
            context={
                "retailer": spec.name,
                "parse_method": "retailer",
                "message_id": document.message_id,
            },
        )
        error.log(import_job_id=import_job_id)
        if errors is not None:
            errors.append(error)
        return [], True


def _run_generic(
    document: RawDocument,
    settings: ExtractionSettings,
    errors: Optional[list],
    import_job_id: Optional[str],
) -> list[Candidate]:
    try:
        return parse_generic(document, settings)
    except Exception as e:
        error = ExtractionError.from_exception(
            e,
            ErrorStage.GENERIC_PARSE,
            context={"parse_method": "generic", "message_id": document.message_id},
        )
        error.log(import_job_id=import_job_id)
        if errors is not None:
            errors.append(error)
        return []


def extract_products(
    document: RawDocument,
    settings: Optional[ExtractionSettings] = None,
    errors: Optional[list] = None,
    import_job_id: Optional[str] = None,
) -> list[Candidate]:
    """
    Extract product candidates from one order email.

    Flow:
    1. No body -> no candidates
    2. Sender matches a registered retailer -> its parser
    3. Parser returned nothing (or raised) -> generic pipeline, results
       tagged with the retailer brand
    4. Unknown sender -> generic pipeline

    Args:
        document: The email to parse
        settings: Lexicon, weights and window options (defaults if None)
        errors: Optional list that collects ExtractionError records
        import_job_id: Import job ID for log context

    Returns:
        Candidates in the order the parser produced them
    """
    if not document.html_body:
        return []

    settings = settings or DEFAULT_SETTINGS
    spec = get_retailer_spec(document.sender)

    if spec is None:
        candidates = _run_generic(document, settings, errors, import_job_id)
        logger.debug(
            f"Generic parser found {len(candidates)} candidates",
            extra={
                "import_job_id": import_job_id,
                "parse_method": "generic",
                "message_id": document.message_id,
            },
        )
        return candidates

    candidates, failed = _run_parser(spec, document, settings, errors, import_job_id)
    if candidates:
        logger.debug(
            f"{spec.name} parser found {len(candidates)} candidates",
            extra={
                "import_job_id": import_job_id,
                "retailer": spec.name,
                "parse_method": "retailer",
                "message_id": document.message_id,
            },
        )
        return candidates

    # Delegating parsers already ran the generic pipeline unless they raised
    if not spec.tailored and not failed:
        return candidates

    fallback = [
        candidate.with_brand(spec.brand, tag=spec.tag)
        for candidate in _run_generic(document, settings, errors, import_job_id)
    ]
    logger.info(
        f"{spec.name} parser found nothing, generic fallback found {len(fallback)} candidates",
        extra={
            "import_job_id": import_job_id,
            "retailer": spec.name,
            "parse_method": "generic_fallback",
            "message_id": document.message_id,
        },
    )
    return fallback
