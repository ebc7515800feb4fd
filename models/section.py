"""Report section identifiers.

Each section is one thematic slice of a company report. The set is closed:
adding a section means adding a member here and one entry to the query
catalog in research/catalog.py.

The declaration order below is the catalog order. Rendered reports and the
deduplicated citation list always follow it, regardless of which order the
caller asked for sections in or which answers came back first.
"""

from enum import Enum


class SectionId(str, Enum):
    """Sections of a company research report.

    Sections:
        SUMMARY: Business overview
        LEADERSHIP: Executives and board
        PRODUCTS: Products and services
        NEWS: Developments in the last 30 days
        FUNDING: Investment history
        COMPETITORS: Competitive landscape
        FILINGS: SEC filings summary (regulatory dataset only)
        FINANCIALS: Stock and financial metrics
        INSIDERS: Insider trading (regulatory dataset only)
    """

    SUMMARY = "summary"
    LEADERSHIP = "leadership"
    PRODUCTS = "products"
    NEWS = "news"
    FUNDING = "funding"
    COMPETITORS = "competitors"
    FILINGS = "filings"
    FINANCIALS = "financials"
    INSIDERS = "insiders"

    @classmethod
    def catalog_order(cls) -> list["SectionId"]:
        """All sections in fixed report order."""
        return list(cls)
