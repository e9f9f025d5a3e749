"""
Candidate Scoring

Additive confidence score from structural and lexical signals. Every rule is
applied; there is no short-circuit. Candidates are kept only when the final
score is strictly greater than MIN_SCORE.
"""

import re
from dataclasses import dataclass
from typing import Optional

from wardrobe_import.lexicon import Lexicon, is_blacklisted, is_brand_name, is_clothing_item

from .utilities import has_price_pattern

MIN_SCORE = 0

QUANTITY_PATTERN = re.compile(r"qty|quantity|size:", re.IGNORECASE)


@dataclass(frozen=True)
class ScoringWeights:
    """Rule weights. Empirical values, tunable through configuration."""

    price: int = 10
    clothing: int = 50
    blacklist_penalty: int = 100
    brand: int = 50
    quantity: int = 20


DEFAULT_WEIGHTS = ScoringWeights()


def score_breakdown(
    name: str,
    context: str,
    lexicon: Optional[Lexicon] = None,
    weights: Optional[ScoringWeights] = None,
) -> dict[str, int]:
    """
    Per-rule contributions for a candidate, in evaluation order.

    Args:
        name: Derived product name
        context: Markup surrounding the image element
    """
    weights = weights or DEFAULT_WEIGHTS

    return {
        "price": weights.price if has_price_pattern(context) else 0,
        "clothing": weights.clothing if is_clothing_item(name, lexicon) else 0,
        "blacklist": -weights.blacklist_penalty if is_blacklisted(name, lexicon) else 0,
        "brand": weights.brand if is_brand_name(name, lexicon) else 0,
        "quantity": weights.quantity if QUANTITY_PATTERN.search(context) else 0,
    }


def score_candidate(
    name: str,
    context: str,
    lexicon: Optional[Lexicon] = None,
    weights: Optional[ScoringWeights] = None,
) -> int:
    return sum(score_breakdown(name, context, lexicon, weights).values())


def passes_threshold(score: int) -> bool:
    return score > MIN_SCORE
