"""Tests for the import orchestrator."""

import pytest

from wardrobe_import.exceptions import TierRestrictionError
from wardrobe_import.gmail_query import SubscriptionTier, TimeRange
from wardrobe_import.models import ImportPhase, ReviewItem
from wardrobe_import.orchestrator import extract_batch, iter_import, run_import


def _drain(run):
    """Collect every snapshot of an import run and its final batch."""
    snapshots = []
    while True:
        try:
            snapshots.append(next(run))
        except StopIteration as stop:
            return snapshots, stop.value


# ============================================================================
# BATCH EXTRACTION
# ============================================================================


def test_extract_batch_reports_each_document(nike_document, boutique_document):
    snapshots = []

    batch = extract_batch([nike_document, boutique_document], observer=snapshots.append)

    assert [s.processed_documents for s in snapshots] == [1, 2]
    assert all(s.phase == ImportPhase.PARSING for s in snapshots)
    assert snapshots[0].current_retailer == "Nike"
    assert snapshots[0].detail_message == "Found 1 item from Nike"
    assert snapshots[1].current_retailer == "online store"
    assert snapshots[1].found_items == 3
    assert [c.name for c in batch] == ["Men's Running Shorts", "Wool Blend Scarf", "Linen Summer Dress"]


def test_extract_batch_empty_body(document_factory):
    batch = extract_batch([document_factory(None), document_factory("")])

    assert len(batch) == 0


def test_extract_batch_keeps_items_below_shipping_heading(document_factory):
    html = (
        "<h1>Shipping confirmation</h1><p>Order #123</p>"
        "<img src='https://cdn.shop.example/p/1.jpg' alt='Blue Denim Jacket' width='200' height='300'>"
        "<p>$45.00</p>"
    )

    batch = extract_batch([document_factory(html, sender="orders@shop.example")])

    assert [c.name for c in batch] == ["Blue Denim Jacket"]


def test_extract_batch_skips_marketing(document_factory, marketing_newsletter_html):
    newsletter = document_factory(marketing_newsletter_html, subject="New arrivals are here")

    assert len(extract_batch([newsletter])) == 1
    assert len(extract_batch([newsletter], skip_non_transactional=True)) == 0


# ============================================================================
# FULL IMPORT RUN
# ============================================================================


def test_iter_import_phases_move_forward(nike_document, boutique_document):
    queries = []

    def search(query):
        queries.append(query)
        return [nike_document, boutique_document]

    snapshots, batch = _drain(iter_import(search, TimeRange.six_months(), SubscriptionTier.FREE))

    phases = [s.phase for s in snapshots]
    assert phases == [
        ImportPhase.AUTHENTICATING,
        ImportPhase.SEARCHING,
        ImportPhase.PARSING,
        ImportPhase.PARSING,
        ImportPhase.PARSING,
        ImportPhase.COMPLETE,
    ]
    orders = [phase.order for phase in phases]
    assert orders == sorted(orders)

    assert queries[0].endswith("newer_than:6m")
    assert snapshots[2].total_documents == 2
    assert snapshots[-1].detail_message == f"Found {len(batch)} items"
    assert len(batch) == 3


def test_iter_import_hands_items_to_catalog(nike_document):
    received = []

    snapshots, _ = _drain(iter_import(
        lambda query: [nike_document],
        TimeRange.six_months(),
        SubscriptionTier.FREE,
        create_catalog=received.append,
    ))

    assert [s.phase for s in snapshots][-2:] == [ImportPhase.DOWNLOADING, ImportPhase.COMPLETE]
    assert received == [[ReviewItem(
        name="Men's Running Shorts",
        image_url="https://static.nike.com/a/images/t_default/mens-dri-fit-running-shorts.jpg",
        brand="Nike",
    )]]


def test_tier_restriction_raised_before_any_phase():
    calls = []

    run = iter_import(
        lambda query: calls.append(query) or [],
        TimeRange.two_years(),
        SubscriptionTier.FREE,
        authenticate=lambda: calls.append("auth"),
    )

    with pytest.raises(TierRestrictionError):
        next(run)
    assert calls == []


def test_premium_tier_allows_long_range():
    snapshots, batch = _drain(iter_import(
        lambda query: [], TimeRange.two_years(), SubscriptionTier.PREMIUM
    ))

    assert snapshots[-1].phase == ImportPhase.COMPLETE
    assert len(batch) == 0


def test_token_revoked_after_run(nike_document):
    revoked = []

    _drain(iter_import(
        lambda query: [nike_document],
        TimeRange.six_months(),
        SubscriptionTier.FREE,
        authenticate=lambda: "token-123",
        revoke=revoked.append,
    ))

    assert revoked == ["token-123"]


def test_search_failure_propagates_and_revokes():
    revoked = []

    def search(query):
        raise ConnectionError("Gmail unreachable")

    run = iter_import(
        search,
        TimeRange.six_months(),
        SubscriptionTier.FREE,
        authenticate=lambda: "token-123",
        revoke=revoked.append,
    )

    with pytest.raises(ConnectionError):
        _drain(run)
    assert revoked == ["token-123"]


def test_run_import_returns_review_items(nike_document):
    snapshots = []

    items = run_import(
        lambda query: [nike_document],
        TimeRange.six_months(),
        SubscriptionTier.FREE,
        observer=snapshots.append,
    )

    assert [item.name for item in items] == ["Men's Running Shorts"]
    assert items[0].brand == "Nike"
    assert snapshots[-1].phase == ImportPhase.COMPLETE
