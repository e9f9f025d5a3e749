"""
Generic Parser

Window locator + candidate extractor + scorer. Used for unknown senders and
as the fallback for every retailer parser that finds nothing.
"""

from wardrobe_import.models import Candidate, RawDocument
from wardrobe_import.parsing.candidates import extract_candidates
from wardrobe_import.parsing.markup_window import locate_transactional_window

from .base import ExtractionSettings


def parse_generic(document: RawDocument, settings: ExtractionSettings) -> list[Candidate]:
    """Extract scored candidates from any order email."""
    if not document.html_body:
        return []

    window = locate_transactional_window(
        document.html_body,
        strip_recommendations=settings.strip_recommendations,
    )
    return extract_candidates(window, settings.lexicon, settings.weights)
