"""
Markup Window Locator

Narrows an email body to the region that lists the ordered items:
1. Strip forwarded-message preambles
2. Crop to the transactional zone between order and totals markers
3. Optionally cut "you might also like" recommendation blocks

Every step fails open: when its markers are missing the text passes through
unchanged.
"""

import re

FORWARD_MARKERS = [
    "Begin forwarded message",
    "Forwarded message",
    "---------- Original Message ----------",
]

START_MARKERS = ["Order Summary", "Order #", "Order Number", "Your Order", "Item Details"]

END_MARKERS = ["Subtotal", "Order Total", "Total Payment", "Tax", "Shipping"]

RECOMMENDATION_MARKERS = [
    "you might also like",
    "recommended for you",
    "customers also bought",
    "complete the look",
    "related products",
    "top picks for you",
    "frequently bought together",
]

# Product images often sit above their caption; back up this far from the start marker
START_BUFFER_CHARS = 1500


def _compile(markers: list[str]) -> list[re.Pattern]:
    # Matched against the original text; lower() can change string length
    return [re.compile(re.escape(marker), re.IGNORECASE) for marker in markers]


FORWARD_PATTERNS = _compile(FORWARD_MARKERS)
START_PATTERNS = _compile(START_MARKERS)
END_PATTERNS = _compile(END_MARKERS)
RECOMMENDATION_PATTERNS = _compile(RECOMMENDATION_MARKERS)


def _earliest(text: str, patterns: list[re.Pattern]) -> tuple[int, int] | None:
    """(start, end) of the earliest marker occurrence, or None."""
    best = None
    for pattern in patterns:
        match = pattern.search(text)
        if match and (best is None or match.start() < best[0]):
            best = match.span()
    return best


def _latest(text: str, patterns: list[re.Pattern], after: int = 0) -> tuple[int, int] | None:
    """(start, end) of the marker occurrence that ends last past `after`, or None."""
    best = None
    for pattern in patterns:
        for match in pattern.finditer(text):
            if match.end() > after and (best is None or match.end() > best[1]):
                best = match.span()
    return best


def strip_forwarded_headers(html: str) -> str:
    """Drop everything up to and including a forwarded-message marker."""
    found = _earliest(html, FORWARD_PATTERNS)
    if found is None:
        return html
    return html[found[1]:]


def crop_to_transactional_zone(html: str, buffer_chars: int = START_BUFFER_CHARS) -> str:
    """
    Crop to [earliest start marker - buffer, end of latest end marker].

    End markers that finish before the start marker itself (a "Shipping
    confirmation" heading above "Order #") are ignored, even inside the buffer.

    Args:
        html: Markup (already stripped of forward headers)
        buffer_chars: How far before the start marker to keep

    Returns:
        The cropped window; missing markers leave that side uncropped
    """
    start = 0
    start_marker = _earliest(html, START_PATTERNS)
    if start_marker is not None:
        start = max(0, start_marker[0] - buffer_chars)

    end = len(html)
    end_marker = _latest(html, END_PATTERNS, after=start_marker[0] if start_marker else 0)
    if end_marker is not None:
        end = end_marker[1]

    return html[start:end]


def truncate_recommendations(html: str) -> str:
    """Cut the text at the first recommendation block heading."""
    found = _earliest(html, RECOMMENDATION_PATTERNS)
    if found is None:
        return html
    return html[:found[0]]


def locate_transactional_window(html: str, strip_recommendations: bool = False) -> str:
    """
    Isolate the itemized order contents of an email body.

    Args:
        html: Raw email HTML
        strip_recommendations: Also cut trailing recommendation blocks

    Returns:
        The window to scan for product images ('' for an empty body)
    """
    if not html:
        return ''

    window = strip_forwarded_headers(html)
    window = crop_to_transactional_zone(window)

    if strip_recommendations:
        window = truncate_recommendations(window)

    return window
