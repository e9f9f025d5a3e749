"""
Wardrobe Import Routes - Flask Blueprint

Extraction endpoints for fetched order emails: synchronous extraction for
small batches, background jobs for larger ones.
Routes are thin controllers that delegate to wardrobe_import_service.
"""

from flask import Blueprint, jsonify, request

from services import wardrobe_import_service
from wardrobe_import.exceptions import InvalidDocumentError, TierRestrictionError
from wardrobe_import.logging_config import get_logger

logger = get_logger(__name__)

wardrobe_import_bp = Blueprint("wardrobe_import", __name__, url_prefix="/api/wardrobe/import")


def _read_payload() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidDocumentError("Request body must be a JSON object")

    skip = data.get("skip_non_transactional")
    if skip is not None and not isinstance(skip, bool):
        raise InvalidDocumentError("'skip_non_transactional' must be a boolean")

    return data


@wardrobe_import_bp.route("/extract", methods=["POST"])
def extract():
    """
    Extract clothing items from order emails.

    Request body:
        documents (list): Emails with sender, subject, html_body, timestamp
        skip_non_transactional (bool): Skip marketing emails (optional)
        time_range (str): six_months | two_years | YYYY-MM-DD (optional)
        tier (str): free | premium (optional, default free)

    Returns:
        Review items and count
    """
    try:
        data = _read_payload()
        result = wardrobe_import_service.extract_items(
            data.get("documents"),
            skip_non_transactional=data.get("skip_non_transactional"),
            time_range=data.get("time_range"),
            tier=data.get("tier"),
        )
        return jsonify(result)

    except InvalidDocumentError as e:
        return jsonify({"error": str(e)}), 400

    except TierRestrictionError as e:
        return jsonify({"error": str(e)}), 403

    except Exception as e:
        logger.error(f"Wardrobe extraction error: {e}", exc_info=True)
        return jsonify({"error": str(e)}), 500


@wardrobe_import_bp.route("/jobs", methods=["POST"])
def start_job():
    """
    Queue a background extraction job.

    Request body: same as /extract

    Returns:
        Job ID and status (202)
    """
    try:
        data = _read_payload()
        result = wardrobe_import_service.start_import_job(
            data.get("documents"),
            skip_non_transactional=data.get("skip_non_transactional"),
            time_range=data.get("time_range"),
            tier=data.get("tier"),
        )
        return jsonify(result), 202

    except InvalidDocumentError as e:
        return jsonify({"error": str(e)}), 400

    except TierRestrictionError as e:
        return jsonify({"error": str(e)}), 403

    except Exception as e:
        logger.error(f"Start wardrobe import job error: {e}", exc_info=True)
        return jsonify({"error": str(e)}), 500


@wardrobe_import_bp.route("/jobs/<task_id>", methods=["GET"])
def get_job_status(task_id):
    """
    Get import job status by Celery task ID.

    Path params:
        task_id (str): Celery task ID

    Returns:
        Job status with progress or result
    """
    try:
        status = wardrobe_import_service.get_job_status(task_id)

        # Check if service indicated a specific HTTP status
        http_status = status.pop("_http_status", 200)

        return jsonify(status), http_status

    except Exception as e:
        logger.error(f"Wardrobe import job status error: {e}", exc_info=True)
        return jsonify({"error": str(e)}), 500
