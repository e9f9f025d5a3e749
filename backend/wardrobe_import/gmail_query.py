"""
Gmail Query Helpers

Search-query construction, time-range access gating and decoding of Gmail API
message resources into RawDocument. The OAuth flow and HTTP transport stay
with the caller; these helpers only shape what goes in and comes out.
"""

import base64
import binascii
from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional

from wardrobe_import.models import RawDocument

# Subject keywords used to find order-related emails
ORDER_SUBJECT_KEYWORDS = [
    "order",
    "shipped",
    "delivered",
    "delivery",
    "shipment",
    "confirmation",
    "receipt",
    "invoice",
    '"thank you for your purchase"',
]


class SubscriptionTier(Enum):
    FREE = "free"
    PREMIUM = "premium"


@dataclass(frozen=True)
class TimeRange:
    """How far back to search: six months, two years, or since a date."""

    kind: str
    since: Optional[date] = None

    SIX_MONTHS = "six_months"
    TWO_YEARS = "two_years"
    CUSTOM = "custom"

    @classmethod
    def six_months(cls) -> "TimeRange":
        return cls(cls.SIX_MONTHS)

    @classmethod
    def two_years(cls) -> "TimeRange":
        return cls(cls.TWO_YEARS)

    @classmethod
    def custom(cls, since: date) -> "TimeRange":
        return cls(cls.CUSTOM, since)

    @classmethod
    def from_value(cls, value: str) -> "TimeRange":
        """
        Parse 'six_months', 'two_years' or an ISO date ('2024-01-31').

        Raises:
            ValueError: If the value is none of these.
        """
        if value == cls.SIX_MONTHS:
            return cls.six_months()
        if value == cls.TWO_YEARS:
            return cls.two_years()
        try:
            return cls.custom(date.fromisoformat(value))
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid time range: {value!r}") from e

    def __post_init__(self):
        if self.kind not in (self.SIX_MONTHS, self.TWO_YEARS, self.CUSTOM):
            raise ValueError(f"Unknown time range kind: {self.kind}")
        if self.kind == self.CUSTOM and self.since is None:
            raise ValueError("Custom time range requires a start date")

    @property
    def gmail_time_filter(self) -> str:
        if self.kind == self.SIX_MONTHS:
            return "newer_than:6m"
        if self.kind == self.TWO_YEARS:
            return "newer_than:2y"
        return f"after:{self.since:%Y/%m/%d}"

    @property
    def display_name(self) -> str:
        if self.kind == self.SIX_MONTHS:
            return "Last 6 months"
        if self.kind == self.TWO_YEARS:
            return "Last 2 years"
        return f"Since {self.since:%b} {self.since.day}, {self.since.year}"

    @property
    def is_premium(self) -> bool:
        return self.kind != self.SIX_MONTHS


def can_access_time_range(time_range: TimeRange, tier: SubscriptionTier) -> bool:
    """Six months is free; longer and custom ranges require premium."""
    return not time_range.is_premium or tier == SubscriptionTier.PREMIUM


def build_order_query(time_range: TimeRange) -> str:
    """
    Build the Gmail search query for order emails.

    Example:
        subject:(order OR shipped OR ... OR "thank you for your purchase") newer_than:6m
    """
    subject_query = " OR ".join(ORDER_SUBJECT_KEYWORDS)
    return f"subject:({subject_query}) {time_range.gmail_time_filter}"


def _decode_base64url(data: str) -> Optional[str]:
    """Decode Gmail's URL-safe base64 (padding is often stripped)."""
    padded = data + "=" * (-len(data) % 4)
    try:
        return base64.urlsafe_b64decode(padded).decode("utf-8", errors="ignore")
    except (binascii.Error, ValueError):
        return None


def _find_html_body(payload: dict) -> Optional[str]:
    """First text/html body in a payload, searching nested parts depth-first."""
    body_data = payload.get("body", {}).get("data")
    if body_data and payload.get("mimeType", "text/html") == "text/html":
        return _decode_base64url(body_data)

    for part in payload.get("parts", []):
        part_data = part.get("body", {}).get("data")
        if part.get("mimeType") == "text/html" and part_data:
            return _decode_base64url(part_data)
        if part.get("parts"):
            html = _find_html_body({"parts": part["parts"]})
            if html:
                return html

    return None


def document_from_gmail_message(message: dict) -> RawDocument:
    """
    Convert a Gmail API message resource (format=full) into a RawDocument.

    Args:
        message: Message resource with id, internalDate and payload

    Returns:
        RawDocument; html_body is None when no HTML part exists
    """
    payload = message.get("payload", {})
    headers = {
        h["name"].lower(): h["value"]
        for h in payload.get("headers", [])
    }

    # internalDate is a Unix timestamp in milliseconds
    timestamp = None
    internal_date = message.get("internalDate")
    if internal_date:
        timestamp = datetime.fromtimestamp(int(internal_date) / 1000, tz=timezone.utc)

    return RawDocument(
        sender=headers.get("from", "unknown"),
        subject=headers.get("subject", "No Subject"),
        html_body=_find_html_body(payload),
        timestamp=timestamp,
        message_id=message.get("id"),
    )
