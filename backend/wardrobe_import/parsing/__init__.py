"""
Order Email Parsing Package

Generic extraction pipeline for order-confirmation emails.

Architecture:
- utilities: HTML to text, attribute extraction, price patterns, name cleaning
- markup_window: locate the itemized order region of an email body
- candidates: enumerate <img> elements and derive named candidates
- scoring: additive confidence score per candidate
- filtering: order vs marketing pre-filter
"""

from .candidates import (
    CONTEXT_RADIUS,
    ImageElement,
    extract_candidates,
    extract_name_from_context,
    iter_image_elements,
)
from .filtering import (
    is_transactional,
    is_transactional_document,
)
from .markup_window import (
    START_BUFFER_CHARS,
    crop_to_transactional_zone,
    locate_transactional_window,
    strip_forwarded_headers,
    truncate_recommendations,
)
from .scoring import (
    DEFAULT_WEIGHTS,
    MIN_SCORE,
    ScoringWeights,
    passes_threshold,
    score_breakdown,
    score_candidate,
)
from .utilities import (
    clean_product_name,
    extract_attribute,
    extract_price,
    has_price_pattern,
    html_to_text,
    parse_dimension,
)

__all__ = [
    # Window locator
    "START_BUFFER_CHARS",
    "crop_to_transactional_zone",
    "locate_transactional_window",
    "strip_forwarded_headers",
    "truncate_recommendations",
    # Candidate extraction
    "CONTEXT_RADIUS",
    "ImageElement",
    "extract_candidates",
    "extract_name_from_context",
    "iter_image_elements",
    # Scoring
    "DEFAULT_WEIGHTS",
    "MIN_SCORE",
    "ScoringWeights",
    "passes_threshold",
    "score_breakdown",
    "score_candidate",
    # Filtering
    "is_transactional",
    "is_transactional_document",
    # Utilities
    "clean_product_name",
    "extract_attribute",
    "extract_price",
    "has_price_pattern",
    "html_to_text",
    "parse_dimension",
]
