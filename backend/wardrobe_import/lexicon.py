"""
Clothing Lexicon Classifier

Static keyword, brand and blacklist sets plus the pure classification
helpers built on them:
- is_blacklisted / has_clothing_keyword / is_clothing_item / is_brand_name
- is_likely_product_image: structural plausibility of an <img> element

All sets are lowercase. The process-wide lexicon is built once at import and
can be replaced at startup from a JSON file (see load_lexicon).
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from wardrobe_import.exceptions import LexiconConfigError

CLOTHING_KEYWORDS = frozenset([
    # Tops
    "shirt", "t-shirt", "tshirt", "tee", "polo", "blouse", "top", "tank", "camisole", "halter",
    "sweater", "pullover", "tunic", "henley", "jersey", "cardigan", "vest", "waistcoat",
    # Activewear tops
    "hoodie", "sweatshirt", "tracksuit", "windbreaker", "fleece", "athletic top",
    # Bottoms
    "pant", "pants", "bottoms", "jeans", "trousers", "slacks", "chinos", "khakis", "cargos",
    "joggers", "sweatpants", "shorts", "skirt", "leggings", "tights", "capris", "culottes",
    # Dresses & jumpsuits
    "dress", "gown", "sundress", "maxi", "midi", "mini dress", "cocktail dress",
    "jumpsuit", "romper", "playsuit", "overall", "dungaree",
    # Outerwear
    "jacket", "coat", "blazer", "parka", "puffer", "bomber", "trench",
    "raincoat", "peacoat", "overcoat", "anorak", "gilet", "poncho", "cape",
    # Suits & formal
    "suit", "tuxedo", "tux", "suit jacket", "suit pants", "dress pants",
    "dress shirt", "bow tie", "cummerbund",
    # Shoes
    "shoes", "sneakers", "trainers", "boots", "sandals", "heels", "pumps",
    "loafers", "oxfords", "brogues", "flats", "slides", "flip-flops",
    "slippers", "clogs", "mules", "espadrilles", "wedges", "platforms",
    "ankle boots", "knee boots", "chelsea boots", "combat boots",
    # Activewear & sports
    "athletic", "workout", "gym", "running", "yoga pants", "sports bra",
    "compression", "base layer", "performance", "moisture-wicking",
    # Intimates & loungewear
    "underwear", "boxers", "briefs", "bra", "lingerie", "sleepwear",
    "pajamas", "pyjamas", "nightgown", "robe", "bathrobe", "loungewear",
    # Accessories
    "hat", "cap", "beanie", "fedora", "baseball cap", "snapback",
    "scarf", "belt", "tie", "necktie", "gloves", "mittens",
    "socks", "stockings", "hosiery", "bag", "purse", "wallet",
    "watch", "sunglasses", "eyewear", "jewelry", "bracelet", "necklace",
    # Materials
    "denim", "leather", "suede", "cashmere", "wool", "cotton",
    "silk", "velvet", "linen", "chambray", "corduroy",
])

CLOTHING_BRANDS = frozenset([
    # Athletic
    "nike", "adidas", "puma", "under armour", "reebok", "new balance",
    "asics", "saucony", "brooks", "hoka", "on running",
    "lululemon", "alo", "alo yoga", "vuori", "gymshark", "fabletics", "athleta",
    "rhone", "publish", "outdoor voices",
    # Fast fashion
    "zara", "h&m", "hm", "uniqlo", "gap", "old navy", "forever 21",
    "asos", "shein", "fashion nova",
    # Department stores
    "nordstrom", "macy's", "macys", "bloomingdale's", "saks",
    "neiman marcus", "barneys",
    # Premium / designer
    "gucci", "prada", "versace", "burberry", "ralph lauren", "polo",
    "calvin klein", "tommy hilfiger", "lacoste", "hugo boss",
    "michael kors", "kate spade", "coach",
    # Denim
    "levi's", "levis", "wrangler", "lee", "diesel", "true religion",
    "7 for all mankind", "ag jeans",
    # Outdoor
    "patagonia", "north face", "columbia", "arc'teryx", "rei",
    # Streetwear
    "supreme", "off-white", "bape", "stussy", "palace",
    # Contemporary
    "allbirds", "everlane", "reformation", "madewell", "j.crew",
])

BLACKLIST_PATTERNS = frozenset([
    # Contain clothing keywords but aren't clothing
    "pillow case", "pillowcase", "phone case", "laptop case",
    "shirt hanger", "dress form", "shoe rack", "hat box",
    "belt buckle", "tie clip", "watch band", "bag charm",
    "clothing rack", "garment bag", "shoe cleaner", "fabric softener",
    # Order structure
    "shipping", "tax", "total", "subtotal", "discount", "receipt", "order",
    # Marketing / footer noise
    "shop now", "view online", "view in browser", "unsubscribe", "privacy",
    "terms", "returns", "exchange", "gift card", "store locator",
    "free delivery", "percent off", "% off", "sale", "clearance", "limited time",
    "barcode", "qr code", "apple wallet", "apple pay", "google pay", "add to wallet", "wallet",
    "download app", "get the app", "app store", "play store", "social", "follow us",
    # Games, food and streaming receipts
    "esrb", "rated teen", "rated mature", "rated everyone", "pegi", "rating",
    "chick-fil-a", "chicken", "sandwich", "meal", "food", "beverage", "drink", "fries",
    "series", "season", "episode", "watch now", "stream", "original series",
])

# URL path keywords that mark layout images rather than product photos
URL_BLOCKLIST = frozenset([
    "logo", "icon", "social", "footer", "header", "nav", "tracking",
    "pixel", "button", "arrow", "star", "rating", "spacer",
])

# Dimension heuristics for product photos
MIN_IMAGE_DIMENSION = 90
MAX_ASPECT_RATIO = 2.5
MIN_ASPECT_RATIO = 0.33
MAX_WIDTH_WITHOUT_HEIGHT = 600

LEXICON_KEYS = ("clothing_keywords", "brands", "blacklist", "url_blocklist")


@dataclass(frozen=True)
class Lexicon:
    """Read-only classification vocabulary shared by every extraction call."""

    clothing_keywords: frozenset = CLOTHING_KEYWORDS
    brands: frozenset = CLOTHING_BRANDS
    blacklist: frozenset = BLACKLIST_PATTERNS
    url_blocklist: frozenset = URL_BLOCKLIST

    @classmethod
    def from_dict(cls, data: dict, base: Optional["Lexicon"] = None) -> "Lexicon":
        """
        Build a lexicon from plain data.

        Args:
            data: Mapping with optional keys clothing_keywords, brands,
                blacklist, url_blocklist (lists of strings) and mode
                ('extend' merges into base, 'replace' swaps the set)
            base: Lexicon to extend (defaults to the built-in sets)

        Raises:
            LexiconConfigError: On unknown keys, non-string entries or a bad mode
        """
        if not isinstance(data, dict):
            raise LexiconConfigError("Lexicon data must be a JSON object")

        base = base or DEFAULT_LEXICON
        mode = data.get("mode", "extend")
        if mode not in ("extend", "replace"):
            raise LexiconConfigError(f"Invalid lexicon mode: {mode!r} (expected 'extend' or 'replace')")

        unknown = set(data) - set(LEXICON_KEYS) - {"mode"}
        if unknown:
            raise LexiconConfigError(f"Unknown lexicon keys: {', '.join(sorted(unknown))}")

        values = {}
        for key in LEXICON_KEYS:
            current = getattr(base, key)
            if key not in data:
                values[key] = current
                continue

            entries = data[key]
            if not isinstance(entries, list):
                raise LexiconConfigError(f"Lexicon key '{key}' must be a list of strings")

            cleaned = set()
            for entry in entries:
                if not isinstance(entry, str) or not entry.strip():
                    raise LexiconConfigError(f"Lexicon key '{key}' has an invalid entry: {entry!r}")
                cleaned.add(entry.strip().lower())

            values[key] = frozenset(current | cleaned) if mode == "extend" else frozenset(cleaned)

        return cls(**values)


DEFAULT_LEXICON = Lexicon()

_active_lexicon = DEFAULT_LEXICON


def load_lexicon(path: str | Path) -> Lexicon:
    """
    Load a lexicon override from a JSON file.

    Raises:
        LexiconConfigError: If the file is missing or malformed
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise LexiconConfigError(f"Lexicon file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise LexiconConfigError(f"Lexicon file is not valid JSON: {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise LexiconConfigError(f"Lexicon file is not UTF-8: {path}: {e}") from e
    except OSError as e:
        raise LexiconConfigError(f"Lexicon file could not be read: {path}: {e}") from e

    return Lexicon.from_dict(data)


def configure_lexicon(lexicon: Lexicon) -> None:
    """Install the process-wide lexicon. Call once at startup."""
    global _active_lexicon
    _active_lexicon = lexicon


def get_active_lexicon() -> Lexicon:
    return _active_lexicon


def is_blacklisted(text: str, lexicon: Optional[Lexicon] = None) -> bool:
    """True if any blacklist phrase appears in the text."""
    lexicon = lexicon or _active_lexicon
    lower = text.lower()
    return any(pattern in lower for pattern in lexicon.blacklist)


def has_clothing_keyword(text: str, lexicon: Optional[Lexicon] = None) -> bool:
    lexicon = lexicon or _active_lexicon
    lower = text.lower()
    return any(keyword in lower for keyword in lexicon.clothing_keywords)


def is_clothing_item(name: str, lexicon: Optional[Lexicon] = None) -> bool:
    """
    Decide whether a product name looks like clothing.

    Blacklist wins; then a clothing keyword or a brand substring is enough.
    Names with neither signal (style numbers, unknown brands) are treated as
    non-clothing.
    """
    lexicon = lexicon or _active_lexicon

    if is_blacklisted(name, lexicon):
        return False

    if has_clothing_keyword(name, lexicon):
        return True

    lower = name.lower()
    return any(brand in lower for brand in lexicon.brands)


def is_brand_name(name: str, lexicon: Optional[Lexicon] = None) -> bool:
    """Exact brand match, used to spot logo images labelled with the brand."""
    lexicon = lexicon or _active_lexicon
    return name.strip().lower() in lexicon.brands


def is_likely_product_image(
    url: str,
    alt: Optional[str] = None,
    width: Optional[int] = None,
    height: Optional[int] = None,
    lexicon: Optional[Lexicon] = None,
) -> bool:
    """
    Structural filter for <img> elements.

    Args:
        url: Image source URL
        alt: Alt text, if any
        width: Declared width in pixels (None when unknown)
        height: Declared height in pixels (None when unknown)

    Returns:
        False for layout images (logos, icons, tracking pixels, banners,
        spacers); True otherwise, including when dimensions are unknown
    """
    lexicon = lexicon or _active_lexicon
    lower_url = url.lower()

    if any(keyword in lower_url for keyword in lexicon.url_blocklist):
        return False

    # Alt text that is exactly a brand is the retailer logo
    if alt and is_brand_name(alt, lexicon):
        return False

    if width is not None:
        if width < MIN_IMAGE_DIMENSION:
            return False

        if height is not None and height > 0:
            if height < MIN_IMAGE_DIMENSION:
                return False
            ratio = width / height
            if ratio > MAX_ASPECT_RATIO or ratio < MIN_ASPECT_RATIO:
                return False
        elif width > MAX_WIDTH_WITHOUT_HEIGHT:
            # Full-width banner
            return False
    elif height is not None and 0 < height < MIN_IMAGE_DIMENSION:
        return False

    return True
