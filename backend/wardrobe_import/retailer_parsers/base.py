"""
Retailer Parser Base - Shared Types and Registry

Contains:
- ExtractionSettings passed to every parser
- Parser registry and decorator for retailer-specific parsers
- Sender-based retailer lookup
"""

from dataclasses import dataclass
from typing import Callable, Optional

from wardrobe_import.lexicon import Lexicon, is_brand_name, is_clothing_item, is_likely_product_image
from wardrobe_import.models import Candidate, RawDocument
from wardrobe_import.parsing.scoring import DEFAULT_WEIGHTS, ScoringWeights
from wardrobe_import.parsing.utilities import extract_price

# Flat score for candidates found by a retailer's known markup pattern
RETAILER_CONFIDENCE = 90

# Bonus added by parsers that delegate to the generic pipeline
BRAND_TAG_BONUS = 10


@dataclass(frozen=True)
class ExtractionSettings:
    """Tunables shared by all parsers for one extraction call."""

    lexicon: Optional[Lexicon] = None
    weights: ScoringWeights = DEFAULT_WEIGHTS
    strip_recommendations: bool = False


# Type alias for parser functions
RetailerParser = Callable[[RawDocument, ExtractionSettings], list[Candidate]]


@dataclass(frozen=True)
class RetailerSpec:
    """A registered retailer: display name, brand tag and its parser."""

    name: str
    brand: str
    tag: str
    parser: RetailerParser
    # True when the parser runs its own markup patterns rather than the generic pipeline
    tailored: bool = True


# Registry of sender substring -> retailer spec, checked in registration order
RETAILER_PARSERS: dict[str, RetailerSpec] = {}

# Retailers recognised for progress messages but parsed generically
KNOWN_RETAILER_NAMES: dict[str, str] = {
    "nordstrom": "Nordstrom",
    "macys": "Macy's",
    "target": "Target",
}

UNKNOWN_RETAILER = "online store"


def register_retailer(senders: list[str], name: str, tailored: bool = True):
    """Decorator to register a parser for sender substrings (e.g. 'nike')."""
    def decorator(func: RetailerParser):
        spec = RetailerSpec(
            name=name,
            brand=name,
            tag=name.lower(),
            parser=func,
            tailored=tailored,
        )
        for sender in senders:
            RETAILER_PARSERS[sender.lower()] = spec
        return func
    return decorator


def get_retailer_spec(sender: str) -> Optional[RetailerSpec]:
    """
    Get the retailer registered for a sender.

    Args:
        sender: Sender identity, e.g. 'Nike <orders@nike.com>'

    Returns:
        RetailerSpec, or None when the generic parser should be used
    """
    if not sender:
        return None

    sender = sender.lower()
    for key, spec in RETAILER_PARSERS.items():
        if key in sender:
            return spec

    return None


def get_retailer_parser(sender: str) -> Optional[RetailerParser]:
    spec = get_retailer_spec(sender)
    return spec.parser if spec else None


def detect_retailer(sender: str) -> str:
    """Display name of the retailer behind a sender, for progress messages."""
    spec = get_retailer_spec(sender)
    if spec:
        return spec.name

    lower = (sender or "").lower()
    for key, name in KNOWN_RETAILER_NAMES.items():
        if key in lower:
            return name

    return UNKNOWN_RETAILER


def is_retailer_product(
    name: str,
    src: str,
    width: Optional[int] = None,
    height: Optional[int] = None,
    lexicon: Optional[Lexicon] = None,
) -> bool:
    """Gate for retailer-pattern matches: plausible photo and a clothing name."""
    return (
        bool(name)
        and is_likely_product_image(src, name, width, height, lexicon)
        and is_clothing_item(name, lexicon)
        and not is_brand_name(name, lexicon)
    )


def make_retailer_candidate(
    spec_name: str,
    name: str,
    src: str,
    context: str = "",
) -> Candidate:
    """Candidate at the flat retailer confidence, tagged with the retailer."""
    return Candidate(
        name=name,
        image_url=src,
        score=RETAILER_CONFIDENCE,
        price=extract_price(context) if context else None,
        brand=spec_name,
        tags=(spec_name.lower(),),
    )
