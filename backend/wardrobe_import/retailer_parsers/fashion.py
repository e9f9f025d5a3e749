"""
Fashion Retailer Parsers

Zara.
"""

import re

from wardrobe_import.models import Candidate, RawDocument
from wardrobe_import.parsing.candidates import CONTEXT_RADIUS, iter_image_elements
from wardrobe_import.parsing.utilities import clean_product_name, text_window

from .base import ExtractionSettings, is_retailer_product, make_retailer_candidate, register_retailer

# Zara product photos: zara-hosted URLs ending in .jpg, .jpeg or .png
ZARA_IMAGE_SRC = re.compile(r"zara.*\.(?:jpe?g|png)$", re.IGNORECASE)


@register_retailer(["zara"], name="Zara")
def parse_zara_order(document: RawDocument, settings: ExtractionSettings) -> list[Candidate]:
    """Parse Zara order confirmations. Product names are the image alt text."""
    html = document.html_body or ""
    products = []
    seen_urls = set()

    for element in iter_image_elements(html):
        src = element.src
        if not src or not element.alt or src in seen_urls:
            continue
        if not ZARA_IMAGE_SRC.search(src):
            continue

        name = clean_product_name(element.alt)
        if not is_retailer_product(name, src, element.width, element.height, settings.lexicon):
            continue

        seen_urls.add(src)
        context = text_window(html, element.start, element.end, CONTEXT_RADIUS)
        products.append(make_retailer_candidate("Zara", name, src, context))

    return products
