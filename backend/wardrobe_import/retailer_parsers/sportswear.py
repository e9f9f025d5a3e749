"""
Sportswear Parsers

Nike (own markup pattern), Lululemon and Adidas (generic pipeline with the
brand applied).
"""

import re

from wardrobe_import.models import Candidate, RawDocument
from wardrobe_import.parsing.candidates import CONTEXT_RADIUS, iter_image_elements
from wardrobe_import.parsing.utilities import clean_product_name, text_window

from .base import (
    BRAND_TAG_BONUS,
    ExtractionSettings,
    is_retailer_product,
    make_retailer_candidate,
    register_retailer,
)
from .generic import parse_generic

NIKE_IMAGE_SRC = re.compile(r"nike|product", re.IGNORECASE)
TABLE_CELL_TEXT = re.compile(r"<td\b[^>]*>([^<]+)</td>", re.IGNORECASE)

# Nike puts the product name in a table cell close to the photo
NIKE_NAME_RADIUS = 500


def _nearby_cell_text(html: str, start: int, end: int) -> str:
    """First non-empty cleaned <td> text around an element."""
    for match in TABLE_CELL_TEXT.finditer(text_window(html, start, end, NIKE_NAME_RADIUS)):
        text = clean_product_name(match.group(1))
        if text:
            return text
    return ''


@register_retailer(["nike"], name="Nike")
def parse_nike_order(document: RawDocument, settings: ExtractionSettings) -> list[Candidate]:
    """
    Parse Nike order confirmations.

    Product photos are served from Nike image hosts or product paths; the
    name is the alt text, else the nearest table cell text.
    """
    html = document.html_body or ""
    products = []
    seen_urls = set()

    for element in iter_image_elements(html):
        src = element.src
        if not src or src in seen_urls or not NIKE_IMAGE_SRC.search(src):
            continue

        name = clean_product_name(element.alt) or _nearby_cell_text(html, element.start, element.end)
        if not is_retailer_product(name, src, element.width, element.height, settings.lexicon):
            continue

        seen_urls.add(src)
        context = text_window(html, element.start, element.end, CONTEXT_RADIUS)
        products.append(make_retailer_candidate("Nike", name, src, context))

    return products


def _brand_tagged_generic(
    document: RawDocument, settings: ExtractionSettings, brand: str
) -> list[Candidate]:
    return [
        candidate.with_brand(brand, bonus=BRAND_TAG_BONUS, tag=brand.lower())
        for candidate in parse_generic(document, settings)
    ]


@register_retailer(["lululemon"], name="Lululemon", tailored=False)
def parse_lululemon_order(document: RawDocument, settings: ExtractionSettings) -> list[Candidate]:
    """Lululemon emails parse well generically; apply the brand and a bonus."""
    return _brand_tagged_generic(document, settings, "Lululemon")


@register_retailer(["adidas"], name="Adidas", tailored=False)
def parse_adidas_order(document: RawDocument, settings: ExtractionSettings) -> list[Candidate]:
    return _brand_tagged_generic(document, settings, "Adidas")
