"""Research models for answers, section outcomes and assembled reports.

This module defines the data flowing through the company research core.

Model Hierarchy:
    SectionQuery: One prompt to the answer endpoint, built from the catalog
    Answer: Parsed answer endpoint response (text + citations)
    Citation: A cited source, identified by its URL
    Usable / Unusable / Failed: Outcome of dispatching one SectionQuery
    Report: The assembled markdown document plus its provenance

Outcomes are three-way on purpose: "the call worked but said nothing useful"
(Unusable) is different from "the call errored" (Failed), and both differ
from real content (Usable). Only Usable sections reach the report.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

from models.section import SectionId


class Citation(BaseModel):
    """A source cited by the answer endpoint.

    Two citations with the same URL are the same citation, whichever
    section produced them.

    Attributes:
        url: Source locator, the identity key for deduplication
        title: Display title (may be empty)
        date: Publication date as reported upstream (optional)
    """

    model_config = ConfigDict(frozen=True)

    url: str = Field(description="Source URL (identity key)")
    title: str = Field(default="", description="Display title")
    date: str | None = Field(default=None, description="Publication date, if known")

    @property
    def key(self) -> str:
        """Identity key used for deduplication."""
        return self.url

    @classmethod
    def from_search_result(cls, item: dict[str, Any]) -> "Citation | None":
        """Build a citation from one `search_results` entry.

        Returns:
            Citation, or None if the entry has no URL to identify it by
        """
        url = item.get("url")
        if not url:
            return None
        date = item.get("date")
        return cls(
            url=str(url),
            title=str(item.get("title") or ""),
            date=str(date) if date else None,
        )


class SectionQuery(BaseModel):
    """A single answer endpoint request for one report section.

    Constructed fresh per report by the query catalog; never persisted.

    Attributes:
        section: Section this query feeds
        prompt: Natural-language question sent as `query`
        search_type: 'all' (open web + datasets) or 'proprietary'
        included_sources: Restrict answers to these datasets (optional)
        start_date: Only consider sources from this date on, YYYY-MM-DD (optional)
    """

    model_config = ConfigDict(frozen=True)

    section: SectionId
    prompt: str
    search_type: str = "all"
    included_sources: tuple[str, ...] = ()
    start_date: str | None = None

    def to_payload(self, data_max_price: float) -> dict[str, Any]:
        """Build the answer endpoint JSON body."""
        payload: dict[str, Any] = {
            "query": self.prompt,
            "data_max_price": data_max_price,
            "search_type": self.search_type,
        }
        if self.included_sources:
            payload["included_sources"] = list(self.included_sources)
        if self.start_date:
            payload["start_date"] = self.start_date
        return payload


class Answer(BaseModel):
    """Synthesized answer returned by the answer endpoint.

    Attributes:
        success: Upstream success flag
        text: Free-text synthesis (`contents`)
        citations: Sources cited by the synthesis, in upstream order
    """

    success: bool = True
    text: str = ""
    citations: list[Citation] = Field(default_factory=list)

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> "Answer":
        """Parse an answer endpoint response body.

        Entries of `search_results` without a URL are dropped.
        """
        contents = data.get("contents") or ""
        if not isinstance(contents, str):
            contents = str(contents)
        citations = []
        for item in data.get("search_results") or []:
            if isinstance(item, dict):
                citation = Citation.from_search_result(item)
                if citation is not None:
                    citations.append(citation)
        return cls(
            success=bool(data.get("success", False)),
            text=contents,
            citations=citations,
        )


@dataclass(frozen=True)
class Usable:
    """Section answered with real content."""

    section: SectionId
    text: str
    citations: list[Citation] = field(default_factory=list)


@dataclass(frozen=True)
class Unusable:
    """Section answered, but with nothing worth reporting."""

    section: SectionId
    reason: str


@dataclass(frozen=True)
class Failed:
    """Section call raised; the error is kept for logging and inspection."""

    section: SectionId
    error: BaseException


SectionOutcome = Union[Usable, Unusable, Failed]


class Report(BaseModel):
    """Company research report.

    The sole externally visible artifact of the research core. Produced once
    by the assembler and frozen afterwards.

    Attributes:
        subject: Company name, ticker or domain that was researched
        markdown: Rendered report document
        sections: Sections that were requested, in catalog order
        included: Sections that made it into the document
        sources: Flat citation list of included sections, before dedup
        citations: Deduplicated citations, as numbered in the document
        generated_at: UTC timestamp of assembly
    """

    model_config = ConfigDict(frozen=True)

    subject: str
    markdown: str
    sections: list[SectionId] = Field(default_factory=list)
    included: list[SectionId] = Field(default_factory=list)
    sources: list[Citation] = Field(default_factory=list)
    citations: list[Citation] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def omitted(self) -> list[SectionId]:
        """Requested sections left out of the document."""
        return [s for s in self.sections if s not in self.included]

    def to_tool_output(self) -> dict[str, Any]:
        """JSON-compatible dict returned across the tool boundary."""
        return {
            "subject": self.subject,
            "report": self.markdown,
            "sections": [s.value for s in self.sections],
            "sources": [c.model_dump(exclude_none=True) for c in self.sources],
        }

    def __str__(self) -> str:
        """Human-readable representation for logging."""
        return (
            f"Report('{self.subject}', sections={len(self.included)}/{len(self.sections)}, "
            f"citations={len(self.citations)})"
        )
