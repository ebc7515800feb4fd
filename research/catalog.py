"""Query catalog for company research sections.

Maps each SectionId to everything the dispatcher needs to build its answer
request: the section's display title, the prompt template, the search type,
an optional dataset restriction and an optional rolling recency window.

Adding a section is one SectionId member plus one SECTION_CATALOG entry;
the import-time check below fails if the two drift apart.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable

from models.research import SectionQuery
from models.section import SectionId

SEC_FILINGS_SOURCE = "valyu/valyu-sec-filings"
INSIDER_TRANSACTIONS_SOURCE = "valyu/valyu-insider-transactions-US"


class InvalidSectionError(ValueError):
    """Raised when a caller asks for a section outside the catalog."""

    def __init__(self, section: object):
        self.section = section
        valid = ", ".join(s.value for s in SectionId)
        super().__init__(f"Unknown section '{section}'. Valid sections: {valid}")


@dataclass(frozen=True)
class SectionSpec:
    """Catalog entry for one report section.

    Attributes:
        title: Heading used in the rendered report
        template: Prompt with a `{subject}` placeholder
        search_type: 'all' or 'proprietary'
        included_sources: Datasets the answer must come from (empty = any)
        recency_days: Only use sources from the last N days (None = no limit)
    """

    title: str
    template: str
    search_type: str = "all"
    included_sources: tuple[str, ...] = ()
    recency_days: int | None = None


SECTION_CATALOG: dict[SectionId, SectionSpec] = {
    SectionId.SUMMARY: SectionSpec(
        title="Business Overview",
        template=(
            "Provide a comprehensive business overview of {subject}. Include: company description, "
            "industry, headquarters location, founding year, key products/services, and market "
            "position. Be factual and cite sources."
        ),
    ),
    SectionId.LEADERSHIP: SectionSpec(
        title="Leadership & Key People",
        template=(
            "Who are the key leaders and executives at {subject}? Include CEO, founders, C-suite "
            "executives, and board members with their names, titles, and brief backgrounds."
        ),
    ),
    SectionId.PRODUCTS: SectionSpec(
        title="Products & Services",
        template=(
            "What are the main products and services offered by {subject}? Describe their key "
            "offerings, target markets, and product strategy."
        ),
    ),
    SectionId.NEWS: SectionSpec(
        title="Recent News & Developments",
        template=(
            "What are the most significant recent news and developments about {subject} in the "
            "last 30 days? Summarize key events, announcements, and market reactions with specific "
            "dates and sources."
        ),
        recency_days=30,
    ),
    SectionId.FUNDING: SectionSpec(
        title="Funding & Investment",
        template=(
            "What is the funding history and financial backing of {subject}? Include funding "
            "rounds, investors, total capital raised, and valuation if available."
        ),
    ),
    SectionId.COMPETITORS: SectionSpec(
        title="Competitive Landscape",
        template=(
            "Who are the main competitors of {subject}? List direct competitors and describe the "
            "competitive landscape in their industry."
        ),
    ),
    SectionId.FILINGS: SectionSpec(
        title="SEC Filings Summary",
        template=(
            "Summarize the key points from {subject}'s most recent SEC filings (10-K, 10-Q). Focus "
            "on business highlights, financial performance, and risk factors."
        ),
        search_type="proprietary",
        included_sources=(SEC_FILINGS_SOURCE,),
    ),
    SectionId.FINANCIALS: SectionSpec(
        title="Financial Metrics & Stock Performance",
        template=(
            "Provide current financial metrics for {subject}: stock price, market cap, revenue, "
            "earnings, P/E ratio, and recent financial performance."
        ),
    ),
    SectionId.INSIDERS: SectionSpec(
        title="Insider Trading Activity",
        template=(
            "Summarize recent insider trading activity for {subject}. Include notable buys/sells by "
            "executives and board members in the last 90 days."
        ),
        search_type="proprietary",
        included_sources=(INSIDER_TRANSACTIONS_SOURCE,),
    ),
}

_missing = set(SectionId) - set(SECTION_CATALOG)
if _missing:
    raise RuntimeError(f"Sections missing from catalog: {sorted(s.value for s in _missing)}")


def to_section_id(value: SectionId | str) -> SectionId:
    """Coerce a section identifier, rejecting anything outside the catalog.

    Raises:
        InvalidSectionError: If value is not a known section
    """
    if isinstance(value, SectionId):
        return value
    try:
        return SectionId(str(value).strip().lower())
    except ValueError:
        raise InvalidSectionError(value) from None


def spec_for(section_id: SectionId | str) -> SectionSpec:
    """Look up the catalog entry for a section.

    Raises:
        InvalidSectionError: If section_id is not a known section
    """
    return SECTION_CATALOG[to_section_id(section_id)]


def parse_sections(values: Iterable[SectionId | str] | None) -> list[SectionId]:
    """Validate requested sections and return them in catalog order.

    None means every section. Duplicates collapse; the caller's ordering
    is discarded.

    Raises:
        InvalidSectionError: On the first unknown identifier
    """
    if values is None:
        return SectionId.catalog_order()
    requested = {to_section_id(v) for v in values}
    return [s for s in SectionId.catalog_order() if s in requested]


def query_for(
    subject: str,
    section_id: SectionId | str,
    now: datetime | None = None,
) -> SectionQuery:
    """Build the answer request for one section of a report on `subject`.

    Recency windows are relative to `now` (default: current UTC time), so
    a news section always covers the 30 days before generation.

    Raises:
        InvalidSectionError: If section_id is not a known section
    """
    section = to_section_id(section_id)
    spec = SECTION_CATALOG[section]

    start_date = None
    if spec.recency_days is not None:
        now = now or datetime.now(timezone.utc)
        start_date = (now - timedelta(days=spec.recency_days)).strftime("%Y-%m-%d")

    return SectionQuery(
        section=section,
        prompt=spec.template.format(subject=subject),
        search_type=spec.search_type,
        included_sources=spec.included_sources,
        start_date=start_date,
    )
