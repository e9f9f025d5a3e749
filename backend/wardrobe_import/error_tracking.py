"""Error records for the import workflow.

Extraction degrades gracefully: a failing retailer parser must never fail
the batch. Errors caught on those paths become ExtractionError records that
are written to the structured log and collected on ImportProgress.

Usage:
    from wardrobe_import.error_tracking import ErrorStage, ExtractionError

    try:
        candidates = spec.parser(document, settings)
    except Exception as e:
        error = ExtractionError.from_exception(
            e, ErrorStage.RETAILER_PARSE, context={'retailer': 'Nike'}
        )
        error.log(import_job_id=job_id)
"""

import traceback
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from wardrobe_import.logging_config import get_logger

logger = get_logger(__name__)


class ErrorStage(Enum):
    """Import step an error was raised in."""

    AUTHENTICATE = "authenticate"  # token acquisition collaborator
    SEARCH = "search"  # message search/fetch collaborator
    RETAILER_PARSE = "retailer_parse"
    GENERIC_PARSE = "generic_parse"
    CATALOG = "catalog"  # catalog creation hand-off
    VALIDATION = "validation"  # API/task payloads


class ErrorType(Enum):
    TIMEOUT = "timeout"
    RATE_LIMIT = "rate_limit"
    AUTH_ERROR = "auth_error"
    NETWORK = "network"
    VALIDATION = "validation"
    PARSE_ERROR = "parse_error"
    UNKNOWN = "unknown"


# (type, retryable, message fragments, exception class names), first match wins
CLASSIFICATION_RULES = [
    (ErrorType.TIMEOUT, True, ("timeout", "timed out"), ("TimeoutError", "ReadTimeout", "SoftTimeLimitExceeded")),
    (ErrorType.RATE_LIMIT, True, ("rate limit", "429", "quota"), ()),
    (ErrorType.AUTH_ERROR, False, ("auth", "401", "unauthorized", "invalid_grant"), ()),
    (ErrorType.NETWORK, True, ("connection", "network"), ("ConnectionError", "ConnectionResetError")),
    (ErrorType.VALIDATION, False, ("validation", "invalid"), ("ValueError", "InvalidDocumentError")),
]

PARSE_STAGES = (ErrorStage.RETAILER_PARSE, ErrorStage.GENERIC_PARSE)


def classify_exception(exception: Exception, stage: ErrorStage) -> tuple[ErrorType, bool]:
    """Return (error_type, is_retryable) from the exception's class and message."""
    text = str(exception).lower()
    name = type(exception).__name__

    for error_type, retryable, fragments, names in CLASSIFICATION_RULES:
        if name in names or any(fragment in text for fragment in fragments):
            return error_type, retryable

    # Re-parsing the same markup gives the same failure
    if stage in PARSE_STAGES:
        return ErrorType.PARSE_ERROR, False

    return ErrorType.UNKNOWN, False


@dataclass
class ExtractionError:
    """A classified failure with enough context to find it in the logs."""

    stage: ErrorStage
    error_type: ErrorType
    message: str
    exception: Optional[Exception] = None
    context: dict[str, Any] = field(default_factory=dict)
    is_retryable: bool = False
    stack_trace: Optional[str] = field(default=None, init=False)

    def __post_init__(self):
        if self.exception is not None:
            self.stack_trace = "".join(traceback.format_exception(
                type(self.exception), self.exception, self.exception.__traceback__
            ))

    @classmethod
    def from_exception(
        cls,
        exception: Exception,
        stage: ErrorStage,
        context: Optional[dict[str, Any]] = None,
    ) -> "ExtractionError":
        """
        Build a record from a caught exception.

        Args:
            exception: The caught exception
            stage: Import step that raised it
            context: Retailer, parse method, message ID and the like
        """
        error_type, retryable = classify_exception(exception, stage)
        return cls(
            stage=stage,
            error_type=error_type,
            message=str(exception),
            exception=exception,
            context=context or {},
            is_retryable=retryable,
        )

    def log(self, import_job_id: Optional[str] = None) -> None:
        logger.error(
            f"[{self.stage.value}/{self.error_type.value}] {self.message}",
            extra={
                "import_job_id": import_job_id,
                "retailer": self.context.get("retailer"),
                "parse_method": self.context.get("parse_method"),
                "message_id": self.context.get("message_id"),
            },
            exc_info=self.exception,
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe summary for task results and API responses."""
        return {
            "stage": self.stage.value,
            "error_type": self.error_type.value,
            "message": self.message,
            "is_retryable": self.is_retryable,
            "context": self.context,
        }
