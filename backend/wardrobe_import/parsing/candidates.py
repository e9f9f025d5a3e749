"""
Candidate Extraction

Pattern-based scan of an order window for product images. The markup in
order emails is frequently malformed, so elements are located with tolerant
regexes instead of a full parser.

For each <img>:
- read src / alt / width / height
- drop repeats and structurally implausible images
- derive a name from alt text, falling back to nearby link text
- score the name against the surrounding markup
"""

import re
from dataclasses import dataclass
from typing import Iterator, Optional

from wardrobe_import.lexicon import Lexicon, is_blacklisted, is_brand_name, is_likely_product_image
from wardrobe_import.logging_config import get_logger
from wardrobe_import.models import Candidate

from .scoring import ScoringWeights, passes_threshold, score_candidate
from .utilities import (
    clean_product_name,
    extract_attribute,
    extract_price,
    has_price_pattern,
    parse_dimension,
    text_window,
)

logger = get_logger(__name__)

IMG_TAG_PATTERN = re.compile(r"<img\b([^>]*)>", re.IGNORECASE)
LINK_TEXT_PATTERN = re.compile(r"<a\b[^>]*>([^<]+)</a>", re.IGNORECASE)

# Characters either side of an image scanned for price, quantity and link text
CONTEXT_RADIUS = 300

MAX_LINK_NAME_LENGTH = 100


@dataclass(frozen=True)
class ImageElement:
    """Attributes of one <img> tag and its position in the window."""

    src: Optional[str]
    alt: Optional[str]
    width: Optional[int]
    height: Optional[int]
    start: int
    end: int


def iter_image_elements(window: str) -> Iterator[ImageElement]:
    """Yield every <img> element in document order."""
    for match in IMG_TAG_PATTERN.finditer(window):
        attributes = match.group(1)
        yield ImageElement(
            src=extract_attribute("src", attributes),
            alt=extract_attribute("alt", attributes),
            width=parse_dimension(extract_attribute("width", attributes)),
            height=parse_dimension(extract_attribute("height", attributes)),
            start=match.start(),
            end=match.end(),
        )


def extract_name_from_context(context: str, lexicon: Optional[Lexicon] = None) -> Optional[str]:
    """
    Find a product name in link text near an image.

    Returns the first link text that is non-empty after cleaning, not
    blacklisted, not just a brand, free of prices and under 100 characters.
    """
    for match in LINK_TEXT_PATTERN.finditer(context):
        cleaned = clean_product_name(match.group(1))
        if (
            cleaned
            and not is_blacklisted(cleaned, lexicon)
            and not is_brand_name(cleaned, lexicon)
            and not has_price_pattern(cleaned)
            and len(cleaned) < MAX_LINK_NAME_LENGTH
        ):
            return cleaned
    return None


def extract_candidates(
    window: str,
    lexicon: Optional[Lexicon] = None,
    weights: Optional[ScoringWeights] = None,
) -> list[Candidate]:
    """
    Extract scored product candidates from an order window.

    Args:
        window: Markup already narrowed by the window locator
        lexicon: Classification vocabulary (defaults to the active lexicon)
        weights: Scoring weights (defaults to DEFAULT_WEIGHTS)

    Returns:
        Candidates with score > 0, highest score first (stable)
    """
    candidates = []
    seen_urls = set()

    for element in iter_image_elements(window):
        if not element.src or element.src in seen_urls:
            continue

        if not is_likely_product_image(
            element.src, element.alt, element.width, element.height, lexicon
        ):
            logger.debug(f"Rejected layout image: {element.src[:80]}")
            continue

        context = text_window(window, element.start, element.end, CONTEXT_RADIUS)

        name = clean_product_name(element.alt)
        if not name:
            name = extract_name_from_context(context, lexicon) or ''
        if not name:
            continue

        score = score_candidate(name, context, lexicon, weights)
        if not passes_threshold(score):
            logger.debug(f"Dropped '{name}' with score {score}")
            continue

        seen_urls.add(element.src)
        candidates.append(Candidate(
            name=name,
            image_url=element.src,
            score=score,
            price=extract_price(context),
        ))

    return sorted(candidates, key=lambda c: c.score, reverse=True)
