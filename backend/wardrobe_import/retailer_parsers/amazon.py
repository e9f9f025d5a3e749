"""
Amazon Parser

Amazon order emails pair a `product-image` <img> with a nearby element whose
class contains "product" and "title".
"""

import re

from wardrobe_import.models import Candidate, RawDocument
from wardrobe_import.parsing.candidates import CONTEXT_RADIUS
from wardrobe_import.parsing.utilities import (
    clean_product_name,
    extract_attribute,
    parse_dimension,
    text_window,
)

from .base import ExtractionSettings, is_retailer_product, make_retailer_candidate, register_retailer

PRODUCT_IMAGE_PATTERN = re.compile(
    r"""<img\b([^>]*\bclass\s*=\s*["'][^"']*product-image[^"']*["'][^>]*)>""",
    re.IGNORECASE,
)

PRODUCT_TITLE_PATTERN = re.compile(
    r"""<[a-z][^>]*\bclass\s*=\s*["'][^"']*product[^"']*title[^"']*["'][^>]*>\s*([^<]+)<""",
    re.IGNORECASE,
)

# How far after an image its title may appear
TITLE_SEARCH_CHARS = 2000


@register_retailer(["amazon"], name="Amazon")
def parse_amazon_order(document: RawDocument, settings: ExtractionSettings) -> list[Candidate]:
    """
    Parse Amazon order confirmations.

    Each product-image is matched with the first product title that follows
    it, before the next product-image.
    """
    html = document.html_body or ""
    products = []
    seen_urls = set()

    images = list(PRODUCT_IMAGE_PATTERN.finditer(html))
    for index, match in enumerate(images):
        attributes = match.group(1)
        src = extract_attribute("src", attributes)
        if not src or src in seen_urls:
            continue

        search_end = match.end() + TITLE_SEARCH_CHARS
        if index + 1 < len(images):
            search_end = min(search_end, images[index + 1].start())

        title = PRODUCT_TITLE_PATTERN.search(html, match.end(), search_end)
        if not title:
            continue

        name = clean_product_name(title.group(1))
        width = parse_dimension(extract_attribute("width", attributes))
        height = parse_dimension(extract_attribute("height", attributes))
        if not is_retailer_product(name, src, width, height, settings.lexicon):
            continue

        seen_urls.add(src)
        context = text_window(html, match.start(), title.end(), CONTEXT_RADIUS)
        products.append(make_retailer_candidate("Amazon", name, src, context))

    return products
