"""
Wardrobe Import Models

Immutable value types passed between the extraction stages:
- RawDocument: one fetched order email
- Candidate: a scored product extracted from one document
- RankedBatch: deduplicated, score-ordered candidates of an import run
- ReviewItem: the projection handed to the review step
- ImportPhase / ImportProgress: progress reporting for the import loop
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from wardrobe_import.exceptions import InvalidDocumentError


@dataclass(frozen=True)
class RawDocument:
    """An order email as returned by the search/fetch collaborator."""

    sender: str
    subject: str = ""
    html_body: Optional[str] = None
    timestamp: Optional[datetime] = None
    message_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "RawDocument":
        """
        Build a document from a JSON payload.

        Accepts `html_body` or `body` for the markup and an ISO-8601
        `timestamp`.

        Raises:
            InvalidDocumentError: If the payload is not a mapping, has no
                sender, or carries an unparseable timestamp.
        """
        if not isinstance(data, dict):
            raise InvalidDocumentError(f"Document must be an object, got {type(data).__name__}")

        sender = data.get("sender") or data.get("from")
        if not sender or not isinstance(sender, str):
            raise InvalidDocumentError("Document is missing 'sender'")

        html_body = data.get("html_body", data.get("body"))
        if html_body is not None and not isinstance(html_body, str):
            raise InvalidDocumentError("'html_body' must be a string")

        timestamp = data.get("timestamp")
        if isinstance(timestamp, str):
            try:
                timestamp = datetime.fromisoformat(timestamp)
            except ValueError as e:
                raise InvalidDocumentError(f"Invalid timestamp: {timestamp}") from e
        elif timestamp is not None and not isinstance(timestamp, datetime):
            raise InvalidDocumentError("'timestamp' must be an ISO-8601 string")

        return cls(
            sender=sender,
            subject=data.get("subject") or "",
            html_body=html_body,
            timestamp=timestamp,
            message_id=data.get("message_id") or data.get("id"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "sender": self.sender,
            "subject": self.subject,
            "html_body": self.html_body,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "message_id": self.message_id,
        }


@dataclass(frozen=True)
class Candidate:
    """A provisional product record with a confidence score."""

    name: str
    image_url: str
    score: int
    price: Optional[str] = None
    brand: Optional[str] = None
    size: Optional[str] = None
    color: Optional[str] = None
    category: Optional[str] = None
    tags: tuple[str, ...] = ()

    def with_brand(self, brand: str, bonus: int = 0, tag: Optional[str] = None) -> "Candidate":
        """Return a copy tagged with a retailer brand (existing brand wins)."""
        tags = self.tags
        if tag and tag not in tags:
            tags = tags + (tag,)
        return replace(
            self,
            brand=self.brand or brand,
            score=self.score + bonus,
            tags=tags,
        )

    def to_review_item(self) -> "ReviewItem":
        return ReviewItem(
            name=self.name,
            image_url=self.image_url,
            brand=self.brand,
            size=self.size,
            color=self.color,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "image_url": self.image_url,
            "score": self.score,
            "price": self.price,
            "brand": self.brand,
            "size": self.size,
            "color": self.color,
            "category": self.category,
            "tags": list(self.tags),
        }


@dataclass(frozen=True)
class ReviewItem:
    """What the caller receives for human review. Score and tags are dropped."""

    name: str
    image_url: str
    brand: Optional[str] = None
    size: Optional[str] = None
    color: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "image_url": self.image_url,
            "brand": self.brand,
            "size": self.size,
            "color": self.color,
        }


@dataclass(frozen=True)
class RankedBatch:
    """Score-descending candidates, unique by image URL across the batch."""

    candidates: tuple[Candidate, ...] = ()

    def __len__(self) -> int:
        return len(self.candidates)

    def __iter__(self):
        return iter(self.candidates)

    def __bool__(self) -> bool:
        return bool(self.candidates)

    def review_items(self) -> list[ReviewItem]:
        return [candidate.to_review_item() for candidate in self.candidates]

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": len(self.candidates),
            "candidates": [candidate.to_dict() for candidate in self.candidates],
        }


class ImportPhase(Enum):
    """Import run phases. Transitions only move forward."""

    AUTHENTICATING = "authenticating"
    SEARCHING = "searching"
    PARSING = "parsing"
    DOWNLOADING = "downloading"
    COMPLETE = "complete"

    @property
    def display_text(self) -> str:
        return _PHASE_DISPLAY_TEXT[self]

    @property
    def order(self) -> int:
        return _PHASE_ORDER.index(self)


_PHASE_ORDER = [
    ImportPhase.AUTHENTICATING,
    ImportPhase.SEARCHING,
    ImportPhase.PARSING,
    ImportPhase.DOWNLOADING,
    ImportPhase.COMPLETE,
]

_PHASE_DISPLAY_TEXT = {
    ImportPhase.AUTHENTICATING: "Connecting to Gmail...",
    ImportPhase.SEARCHING: "Searching for order emails...",
    ImportPhase.PARSING: "Extracting products...",
    ImportPhase.DOWNLOADING: "Downloading images...",
    ImportPhase.COMPLETE: "Complete!",
}


@dataclass
class ImportProgress:
    """Progress snapshot reported to observers after every step."""

    phase: ImportPhase
    total_documents: int = 0
    processed_documents: int = 0
    found_items: int = 0
    current_retailer: Optional[str] = None
    detail_message: Optional[str] = None
    errors: list = field(default_factory=list)

    @property
    def percent_complete(self) -> float:
        if self.total_documents <= 0:
            return 0.0
        return self.processed_documents / self.total_documents

    def advance(self, phase: ImportPhase) -> None:
        """Move to a later phase.

        Raises:
            ValueError: If the transition would move backwards.
        """
        if phase.order < self.phase.order:
            raise ValueError(
                f"Cannot move import phase back from {self.phase.value} to {phase.value}"
            )
        self.phase = phase

    def snapshot(self) -> "ImportProgress":
        """Copy handed to observers so later updates don't alter it."""
        return replace(self, errors=list(self.errors))

    def to_dict(self) -> dict[str, Any]:
        return {
            "phase": self.phase.value,
            "phase_text": self.phase.display_text,
            "total_documents": self.total_documents,
            "processed_documents": self.processed_documents,
            "found_items": self.found_items,
            "current_retailer": self.current_retailer,
            "detail_message": self.detail_message,
            "percent_complete": round(self.percent_complete, 4),
            "error_count": len(self.errors),
        }
