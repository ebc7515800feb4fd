"""Company research tool.

Agent-facing wrapper around research.research_company(): takes the tool
arguments, returns a JSON-compatible dict with the markdown report.
"""

from typing import Any

from config import Config
from models.section import SectionId
from research.company import research_company

DESCRIPTION = (
    "Comprehensive company intelligence report. Gathers and synthesizes information about a "
    "company including business overview, leadership team, financials (if public), recent news, "
    "SEC filings, funding, competitors, products, and insider activity. Returns a structured "
    "markdown report with citations. All sections are gathered in parallel. Best for in-depth "
    "company research and due diligence."
)


async def company_research(
    company: str,
    sections: list[SectionId | str] | None = None,
    config: Config | None = None,
) -> dict[str, Any]:
    """Research a company and return the report as tool output.

    Args:
        company: Company name, ticker symbol, or domain (e.g. 'Apple', 'AAPL', 'apple.com')
        sections: Sections to include (None or empty = all)
        config: Application configuration (default: loaded from environment)

    Returns:
        Dict with 'subject', 'report' (markdown), 'sections' and 'sources'
    """
    report = await research_company(company, sections or None, config=config)
    return report.to_tool_output()
