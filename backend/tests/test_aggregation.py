"""Tests for batch aggregation."""

from wardrobe_import.aggregation import aggregate_candidates
from wardrobe_import.models import Candidate
from wardrobe_import.orchestrator import extract_batch


def _candidate(name, url, score):
    return Candidate(name=name, image_url=f"https://cdn.example.com/{url}", score=score)


def test_duplicate_url_keeps_highest_score():
    first = [_candidate("Cotton Tee", "tee.jpg", 40)]
    second = [_candidate("Organic Cotton Tee", "tee.jpg", 85)]

    batch = aggregate_candidates([first, second])

    assert len(batch) == 1
    assert batch.candidates[0].score == 85
    assert batch.candidates[0].name == "Organic Cotton Tee"


def test_ranked_by_score_descending():
    batch = aggregate_candidates([
        [_candidate("Crew Socks", "socks.jpg", 50)],
        [_candidate("Denim Jacket", "jacket.jpg", 90), _candidate("Wrap Dress", "dress.jpg", 70)],
    ])

    assert [c.score for c in batch] == [90, 70, 50]


def test_equal_scores_keep_document_order():
    batch = aggregate_candidates([
        [_candidate("Wool Scarf", "scarf.jpg", 60)],
        [_candidate("Linen Shirt", "shirt.jpg", 60)],
        [_candidate("Wool Scarf", "scarf.jpg", 60)],
    ])

    assert [c.name for c in batch] == ["Wool Scarf", "Linen Shirt"]


def test_urls_unique_across_batch():
    batch = aggregate_candidates([
        [_candidate("A Tee", "a.jpg", 10), _candidate("B Tee", "b.jpg", 20)],
        [_candidate("A Tee", "a.jpg", 30), _candidate("C Tee", "c.jpg", 5)],
        [_candidate("B Tee", "b.jpg", 15)],
    ])

    urls = [c.image_url for c in batch]
    assert len(urls) == len(set(urls))
    assert [c.score for c in batch] == [30, 20, 5]


def test_empty_input():
    assert len(aggregate_candidates([])) == 0
    assert len(aggregate_candidates([[], []])) == 0


def test_extraction_is_deterministic(nike_document, boutique_document):
    documents = [nike_document, boutique_document]

    assert extract_batch(documents).to_dict() == extract_batch(documents).to_dict()
