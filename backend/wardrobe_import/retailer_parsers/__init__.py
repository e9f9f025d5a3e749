"""
Retailer Parsers - Sender-Specific Product Extractors

This package contains retailer-specific parsers organized by segment:
- amazon.py: Amazon order confirmations (product-image / product-title pairs)
- sportswear.py: Nike (tailored), Lululemon and Adidas (generic + brand)
- fashion.py: Zara
- generic.py: window locator + candidate extractor, used for unknown senders
  and as the fallback when a retailer parser finds nothing

Usage:
    from wardrobe_import.retailer_parsers import extract_products

    candidates = extract_products(document)
"""

# Import registry and shared types from base
from .base import (
    BRAND_TAG_BONUS,
    RETAILER_CONFIDENCE,
    RETAILER_PARSERS,
    ExtractionSettings,
    RetailerSpec,
    detect_retailer,
    get_retailer_parser,
    get_retailer_spec,
)

# Import all retailer modules to trigger @register_retailer decorators
from . import amazon
from . import sportswear
from . import fashion

from .dispatch import extract_products
from .generic import parse_generic

__all__ = [
    'BRAND_TAG_BONUS',
    'RETAILER_CONFIDENCE',
    'RETAILER_PARSERS',
    'ExtractionSettings',
    'RetailerSpec',
    'detect_retailer',
    'extract_products',
    'get_retailer_parser',
    'get_retailer_spec',
    'parse_generic',
]
