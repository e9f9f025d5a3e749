"""
Extraction Configuration Management
Handles environment variables, validation, and the startup lexicon override
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from wardrobe_import.lexicon import Lexicon, configure_lexicon, load_lexicon
from wardrobe_import.parsing.scoring import DEFAULT_WEIGHTS, ScoringWeights
from wardrobe_import.retailer_parsers import ExtractionSettings

# Load from .env in the backend directory
ENV_PATH = Path(__file__).parent.parent / ".env"
if ENV_PATH.exists():
    load_dotenv(ENV_PATH)


@dataclass
class ExtractionConfig:
    """Extraction configuration object"""
    weights: ScoringWeights = DEFAULT_WEIGHTS
    lexicon_path: Optional[str] = None
    lexicon: Optional[Lexicon] = None
    skip_non_transactional: bool = False
    strip_recommendations: bool = False
    pacing_delay: float = 0.0

    def __post_init__(self):
        """Validate configuration after initialization"""
        self.validate()

    def validate(self):
        """Validate extraction configuration"""
        for name in ("price", "clothing", "blacklist_penalty", "brand", "quantity"):
            if getattr(self.weights, name) < 0:
                raise ValueError(f"WARDROBE_SCORE_{name.upper()} must be non-negative")

        if self.pacing_delay < 0:
            raise ValueError("WARDROBE_PACING_DELAY must be non-negative")

        if self.lexicon_path and not Path(self.lexicon_path).is_file():
            raise ValueError(f"WARDROBE_LEXICON_PATH does not exist: {self.lexicon_path}")

    def to_settings(self) -> ExtractionSettings:
        """Settings handed to every extraction call."""
        return ExtractionSettings(
            lexicon=self.lexicon,
            weights=self.weights,
            strip_recommendations=self.strip_recommendations,
        )


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Invalid {name}: {value!r} (expected an integer)")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name, "").strip().lower()
    if not value:
        return default
    return value == "true"


def load_extraction_config() -> ExtractionConfig:
    """
    Load extraction configuration from environment variables.

    When a lexicon file is configured it is loaded and installed as the
    process-wide lexicon, so call this once at startup.

    Environment Variables:
    - WARDROBE_LEXICON_PATH: JSON lexicon override (optional)
    - WARDROBE_SCORE_PRICE: Bonus for a nearby price (default: 10)
    - WARDROBE_SCORE_CLOTHING: Bonus for a clothing keyword in the name (default: 50)
    - WARDROBE_SCORE_BLACKLIST_PENALTY: Penalty for a blacklisted name (default: 100)
    - WARDROBE_SCORE_BRAND: Bonus for a known brand nearby (default: 50)
    - WARDROBE_SCORE_QUANTITY: Bonus for qty/size labels nearby (default: 20)
    - WARDROBE_SKIP_NON_TRANSACTIONAL: Skip marketing emails (default: false)
    - WARDROBE_STRIP_RECOMMENDATIONS: Cut "You may also like" blocks (default: false)
    - WARDROBE_PACING_DELAY: Seconds between documents in an import (default: 0)

    Returns:
        ExtractionConfig object

    Raises:
        ValueError: On invalid values
        LexiconConfigError: If the lexicon file is malformed
    """
    weights = ScoringWeights(
        price=_env_int("WARDROBE_SCORE_PRICE", DEFAULT_WEIGHTS.price),
        clothing=_env_int("WARDROBE_SCORE_CLOTHING", DEFAULT_WEIGHTS.clothing),
        blacklist_penalty=_env_int("WARDROBE_SCORE_BLACKLIST_PENALTY", DEFAULT_WEIGHTS.blacklist_penalty),
        brand=_env_int("WARDROBE_SCORE_BRAND", DEFAULT_WEIGHTS.brand),
        quantity=_env_int("WARDROBE_SCORE_QUANTITY", DEFAULT_WEIGHTS.quantity),
    )

    pacing_env = os.getenv("WARDROBE_PACING_DELAY", "").strip()
    try:
        pacing_delay = float(pacing_env) if pacing_env else 0.0
    except ValueError:
        raise ValueError(f"Invalid WARDROBE_PACING_DELAY: {pacing_env!r} (expected seconds)")

    lexicon_path = os.getenv("WARDROBE_LEXICON_PATH", "").strip() or None

    config = ExtractionConfig(
        weights=weights,
        lexicon_path=lexicon_path,
        skip_non_transactional=_env_bool("WARDROBE_SKIP_NON_TRANSACTIONAL", False),
        strip_recommendations=_env_bool("WARDROBE_STRIP_RECOMMENDATIONS", False),
        pacing_delay=pacing_delay,
    )

    if config.lexicon_path:
        config.lexicon = load_lexicon(config.lexicon_path)
        configure_lexicon(config.lexicon)

    return config


_config: Optional[ExtractionConfig] = None


def get_extraction_config() -> ExtractionConfig:
    """Process-wide config, loaded (and its lexicon installed) on first use."""
    global _config
    if _config is None:
        _config = load_extraction_config()
    return _config
