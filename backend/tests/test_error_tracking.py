"""Tests for structured error classification."""

import pytest

from wardrobe_import.error_tracking import ErrorStage, ErrorType, ExtractionError


@pytest.mark.parametrize("exception, expected_type, retryable", [
    (TimeoutError("read timed out"), ErrorType.TIMEOUT, True),
    (RuntimeError("429 Too Many Requests"), ErrorType.RATE_LIMIT, True),
    (RuntimeError("401 unauthorized"), ErrorType.AUTH_ERROR, False),
    (ConnectionError("reset by peer"), ErrorType.NETWORK, True),
    (ValueError("bad attribute"), ErrorType.VALIDATION, False),
])
def test_from_exception_classification(exception, expected_type, retryable):
    error = ExtractionError.from_exception(exception, ErrorStage.SEARCH)

    assert error.error_type == expected_type
    assert error.is_retryable == retryable


def test_parser_failures_are_parse_errors():
    error = ExtractionError.from_exception(
        RuntimeError("markup changed"),
        ErrorStage.RETAILER_PARSE,
        context={"retailer": "Nike"},
    )

    assert error.error_type == ErrorType.PARSE_ERROR
    assert not error.is_retryable


def test_unclassified_error_outside_parsing():
    error = ExtractionError.from_exception(KeyError("id"), ErrorStage.CATALOG)

    assert error.error_type == ErrorType.UNKNOWN


def test_to_dict_and_log():
    try:
        raise RuntimeError("markup changed")
    except RuntimeError as e:
        error = ExtractionError.from_exception(
            e, ErrorStage.GENERIC_PARSE, context={"message_id": "m1"}
        )

    error.log(import_job_id="job-1")

    assert error.to_dict() == {
        "stage": "generic_parse",
        "error_type": "parse_error",
        "message": "markup changed",
        "is_retryable": False,
        "context": {"message_id": "m1"},
    }
    assert "RuntimeError: markup changed" in error.stack_trace
