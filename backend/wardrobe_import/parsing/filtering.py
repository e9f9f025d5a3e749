"""
Order Email Filtering

Pre-filter that separates order confirmations from marketing mail before
extraction. The Gmail search casts a wide net (subject keywords only), so
newsletters and promotions arrive alongside real orders.
"""

from wardrobe_import.models import RawDocument

from .utilities import html_to_text

# Strong order indicators (weighted +2, any one = accept)
STRONG_ORDER_INDICATORS = [
    'order #', 'order number', 'order no', 'order confirmation', 'order confirmed',
    'tracking number', 'thank you for your order', 'thanks for your order',
    'thank you for your purchase', 'your order has been', 'order summary',
    'has shipped', 'has been delivered', 'e-receipt', 'your receipt',
]

# Weak order indicators (weighted +1)
WEAK_ORDER_INDICATORS = [
    'order', 'receipt', 'invoice', 'shipped', 'delivery', 'shipment',
    'qty', 'quantity', 'subtotal', 'size:',
]

# Strong marketing indicators (weighted -3)
STRONG_MARKETING_INDICATORS = [
    'shop now', 'sale ends', 'limited time', 'flash sale', 'black friday',
    'cyber monday', 'exclusive deal', 'new arrivals', 'just dropped',
    'save up to', 'last chance', 'view in browser',
]

# Weak marketing indicators (weighted -1)
WEAK_MARKETING_INDICATORS = [
    'unsubscribe', 'newsletter', 'promotional', 'discount', 'offer', 'promo',
]


def is_transactional_document(subject: str, body_html: str | None) -> tuple[bool, str]:
    """
    Decide whether an email looks like an order confirmation.

    Args:
        subject: Email subject line
        body_html: HTML body (may be None)

    Returns:
        Tuple of (is_transactional, reason)
    """
    if not body_html:
        return (False, 'Empty body')

    text = f"{subject}\n{html_to_text(body_html)}".lower()

    strong_hits = [p for p in STRONG_ORDER_INDICATORS if p in text]
    if strong_hits:
        return (True, f"Order indicator: {strong_hits[0]}")

    score = sum(1 for p in WEAK_ORDER_INDICATORS if p in text)
    marketing_hits = [p for p in STRONG_MARKETING_INDICATORS if p in text]
    score -= 3 * len(marketing_hits)
    score -= sum(1 for p in WEAK_MARKETING_INDICATORS if p in text)

    if marketing_hits and score <= 0:
        return (False, f"Marketing indicator: {marketing_hits[0]}")

    if score >= 2:
        return (True, f"Order keywords (score {score})")

    return (False, f"Insufficient order signals (score {score})")


def is_transactional(document: RawDocument) -> tuple[bool, str]:
    return is_transactional_document(document.subject, document.html_body)
