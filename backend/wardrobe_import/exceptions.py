"""Exceptions raised by the wardrobe import package.

Extraction itself never raises for bad documents; these cover the cases
that must reach the caller: configuration problems found at startup,
access gating and malformed API payloads.
"""


class WardrobeImportError(Exception):
    """Base class for wardrobe import errors."""


class LexiconConfigError(WardrobeImportError, ValueError):
    """Lexicon data or a static pattern is malformed. Fatal at startup."""


class TierRestrictionError(WardrobeImportError):
    """The requested time range requires a higher subscription tier."""

    def __init__(self, time_range, tier):
        self.time_range = time_range
        self.tier = tier
        super().__init__(
            f"Time range '{time_range.display_name}' requires Premium "
            f"(current tier: {tier.value})"
        )


class InvalidDocumentError(WardrobeImportError, ValueError):
    """A document payload could not be converted to a RawDocument."""
