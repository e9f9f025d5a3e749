"""
Markup Parsing Utilities

Common helpers shared by the window locator, the candidate extractor and the
retailer parsers:
- HTML to text conversion
- Tag attribute extraction
- Price pattern detection
- Product name cleaning
"""

import re
from typing import Optional

from bs4 import BeautifulSoup, FeatureNotFound

# Currency amount: $45, $45.00, $1,299.00, £12,50, €9.99, or 45.00 USD
PRICE_PATTERN = re.compile(
    r"[$£€]\s?(?:\d{1,3}(?:,\d{3})+(?:\.\d{2})?|\d+(?:[.,]\d{2})?)"
    r"|\d+(?:[.,]\d{2})?\s*USD\b",
    re.IGNORECASE,
)

# Alt/link texts that describe the image slot rather than the product
NOISE_WORDS = frozenset([
    "image", "product", "item", "cart image", "product image",
    "picture", "photo", "thumbnail", "clothing", "apparel",
])

MIN_NAME_LENGTH = 3

_DIMENSION_PATTERN = re.compile(r"^\s*(\d+)\s*(?:px)?\s*$", re.IGNORECASE)


def html_to_text(html: str) -> str:
    """
    Convert HTML to plain text.

    Args:
        html: HTML content

    Returns:
        Plain text content with collapsed whitespace
    """
    if not html:
        return ''

    try:
        soup = BeautifulSoup(html, 'lxml')
    except FeatureNotFound:
        soup = BeautifulSoup(html, 'html.parser')

    for element in soup(['script', 'style', 'head', 'meta', 'noscript']):
        element.decompose()

    text = soup.get_text(separator=' ')
    text = re.sub(r'\s+', ' ', text)

    return text.strip()


def extract_attribute(name: str, tag_content: str) -> Optional[str]:
    """
    Read a quoted attribute value from the inside of a tag.

    Matches `name="..."` or `name='...'` case-insensitively, without picking
    up prefixed attributes such as data-src when asking for src.
    """
    pattern = rf'(?<![\w-]){re.escape(name)}\s*=\s*(["\'])(.*?)\1'
    match = re.search(pattern, tag_content, re.IGNORECASE | re.DOTALL)
    if match:
        value = match.group(2).strip()
        return value or None
    return None


def parse_dimension(value: Optional[str]) -> Optional[int]:
    """Parse a width/height attribute. Unknown, non-numeric and 0 give None."""
    if not value:
        return None
    match = _DIMENSION_PATTERN.match(value)
    if not match:
        return None
    number = int(match.group(1))
    return number or None


def has_price_pattern(text: str) -> bool:
    return PRICE_PATTERN.search(text) is not None


def extract_price(text: str) -> Optional[str]:
    """Return the first currency amount in the text, e.g. '$45.00'."""
    match = PRICE_PATTERN.search(text)
    if match:
        return match.group(0).strip()
    return None


def clean_product_name(name: Optional[str]) -> str:
    """
    Clean alt or link text into a product name.

    Decodes HTML entities, collapses whitespace and returns '' for noise
    words ("image", "thumbnail", ...) and texts of two characters or fewer.
    """
    if not name:
        return ''

    cleaned = html_to_text(name) if ('&' in name or '<' in name) else name
    cleaned = re.sub(r'\s+', ' ', cleaned).strip()

    if cleaned.lower() in NOISE_WORDS:
        return ''

    if len(cleaned) < MIN_NAME_LENGTH:
        return ''

    return cleaned


def text_window(text: str, start: int, end: int, radius: int) -> str:
    """Slice `radius` characters either side of [start, end), clamped to the text."""
    return text[max(0, start - radius):min(len(text), end + radius)]
