"""Wardrobe import: clothing products from order-confirmation emails.

This package contains:
- Lexicon classifier (clothing keywords, brands, blacklist, image plausibility)
- Generic extraction pipeline (window locator, candidate extractor, scorer)
- Retailer-specific parsers with generic fallback
- Aggregation into a ranked, deduplicated batch
- Import orchestration with phase/progress reporting
"""

from wardrobe_import.aggregation import aggregate_candidates
from wardrobe_import.exceptions import (
    InvalidDocumentError,
    LexiconConfigError,
    TierRestrictionError,
    WardrobeImportError,
)
from wardrobe_import.gmail_query import (
    SubscriptionTier,
    TimeRange,
    build_order_query,
    can_access_time_range,
    document_from_gmail_message,
)
from wardrobe_import.lexicon import Lexicon, configure_lexicon, load_lexicon
from wardrobe_import.models import (
    Candidate,
    ImportPhase,
    ImportProgress,
    RankedBatch,
    RawDocument,
    ReviewItem,
)
from wardrobe_import.orchestrator import extract_batch, iter_import, run_import
from wardrobe_import.retailer_parsers import ExtractionSettings, extract_products

__all__ = [
    "Candidate",
    "ExtractionSettings",
    "ImportPhase",
    "ImportProgress",
    "InvalidDocumentError",
    "Lexicon",
    "LexiconConfigError",
    "RankedBatch",
    "RawDocument",
    "ReviewItem",
    "SubscriptionTier",
    "TierRestrictionError",
    "TimeRange",
    "WardrobeImportError",
    "aggregate_candidates",
    "build_order_query",
    "can_access_time_range",
    "configure_lexicon",
    "document_from_gmail_message",
    "extract_batch",
    "extract_products",
    "iter_import",
    "load_lexicon",
    "run_import",
]
