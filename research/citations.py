"""Citation deduplication across report sections."""

from typing import Iterable

from models.research import Citation


def merge(citation_lists: Iterable[Iterable[Citation]]) -> list[Citation]:
    """Merge citation lists, keeping the first citation seen per URL.

    Lists must be passed in catalog section order. The result then depends
    only on that order and on the order within each list, never on which
    answer arrived first.
    """
    seen: set[str] = set()
    merged: list[Citation] = []
    for citations in citation_lists:
        for citation in citations:
            if citation.key in seen:
                continue
            seen.add(citation.key)
            merged.append(citation)
    return merged
