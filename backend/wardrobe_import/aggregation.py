"""Merge per-document candidate lists into one ranked, deduplicated batch."""

from typing import Iterable

from wardrobe_import.models import Candidate, RankedBatch


def aggregate_candidates(per_document: Iterable[Iterable[Candidate]]) -> RankedBatch:
    """
    Concatenate candidate lists, rank by score and keep one candidate per image.

    The sort is stable, so equal scores keep document order and the
    highest-scoring instance of a duplicated image URL always wins.
    """
    combined = [candidate for candidates in per_document for candidate in candidates]
    combined.sort(key=lambda candidate: candidate.score, reverse=True)

    seen_urls = set()
    unique = []
    for candidate in combined:
        if candidate.image_url in seen_urls:
            continue
        seen_urls.add(candidate.image_url)
        unique.append(candidate)

    return RankedBatch(tuple(unique))
