"""
Minimal health check endpoint

Reports liveness plus the size of the active lexicon; no internal state
beyond that is exposed.
"""

from datetime import datetime

from flask import Blueprint, jsonify

from wardrobe_import.lexicon import get_active_lexicon
from wardrobe_import.retailer_parsers import RETAILER_PARSERS

# Create health blueprint
health_bp = Blueprint("health", __name__, url_prefix="/api")


@health_bp.route("/health", methods=["GET"])
def health_check():
    """Minimal health check endpoint.

    Returns:
        200: Service is healthy
    """
    lexicon = get_active_lexicon()
    return jsonify({
        "status": "ok",
        "timestamp": datetime.now().isoformat(),
        "retailers": sorted({spec.name for spec in RETAILER_PARSERS.values()}),
        "lexicon": {
            "clothing_keywords": len(lexicon.clothing_keywords),
            "brands": len(lexicon.brands),
            "blacklist": len(lexicon.blacklist),
        },
    }), 200
