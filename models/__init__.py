"""Pydantic models for the Dossier research tools.

This package contains the data models used by the research core and tools:

SectionId:
    Closed enum of report sections, declared in catalog order.

SectionQuery:
    One answer endpoint request built by the query catalog.

Answer, Citation:
    Parsed answer endpoint response and its cited sources.

Usable, Unusable, Failed:
    Per-section outcome of a dispatched query.

Report:
    Assembled markdown report with requested/included sections and sources.

Example:
    >>> from models import SectionId, Citation
    >>> Citation(url="https://example.com", title="Example").key
    'https://example.com'
"""

from models.section import SectionId
from models.research import (
    Answer,
    Citation,
    Failed,
    Report,
    SectionOutcome,
    SectionQuery,
    Unusable,
    Usable,
)

__all__ = [
    "SectionId",
    "SectionQuery",
    "Answer",
    "Citation",
    "Usable",
    "Unusable",
    "Failed",
    "SectionOutcome",
    "Report",
]
