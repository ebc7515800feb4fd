"""Company research core.

This package turns one subject into a multi-section report:

catalog:
    SectionId -> prompt, title, dataset restriction, recency window.

dispatcher:
    Concurrent answer calls, one per section, each settled independently.

quality:
    Lexical filter rejecting hedging "not enough information" answers.

citations:
    URL-keyed dedup in catalog order.

report:
    Markdown assembly and saving.

company:
    research_company(), the entry point tying it all together.

Example:
    >>> from research import research_company
    >>> report = await research_company("Microsoft", ["summary", "news"])
    >>> print(report.markdown)
"""

from research.catalog import InvalidSectionError, parse_sections, query_for
from research.citations import merge
from research.company import research_company
from research.dispatcher import SectionDispatcher
from research.quality import ContentFilter
from research.report import assemble, save_report

__all__ = [
    "research_company",
    "SectionDispatcher",
    "ContentFilter",
    "InvalidSectionError",
    "parse_sections",
    "query_for",
    "merge",
    "assemble",
    "save_report",
]
