"""Report assembly and markdown output.

Turns per-section outcomes into the final company research report:

    # Company Research Report: {subject}

    ## {section title}          (one block per usable section, catalog order)

    {answer text}

    ## Sources & Citations      (only if any citations survive dedup)

    1. [title](url) - date

Unusable and failed sections are left out without comment. A partial report
is the normal case, and a report with no sections at all is still a report.
"""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Iterable, Mapping

from models.research import Citation, Report, SectionOutcome, Usable
from models.section import SectionId
from research.catalog import parse_sections, spec_for
from research.citations import merge

logger = logging.getLogger(__name__)

REPORT_TITLE = "Company Research Report"
CITATIONS_TITLE = "Sources & Citations"


def render_section(section: SectionId, text: str) -> str:
    """Render one report block."""
    return f"## {spec_for(section).title}\n\n{text}\n\n"


def render_citation(index: int, citation: Citation) -> str:
    """Render one numbered citation line."""
    line = f"{index}. [{citation.title or 'Source'}]({citation.url})"
    if citation.date:
        line += f" - {citation.date}"
    return line


def render_citations(citations: list[Citation]) -> str:
    """Render the citations block, or an empty string if there are none."""
    if not citations:
        return ""
    lines = [render_citation(i, c) for i, c in enumerate(citations, 1)]
    return f"## {CITATIONS_TITLE}\n\n" + "\n".join(lines) + "\n"


def assemble(
    subject: str,
    section_ids: Iterable[SectionId | str] | None,
    outcomes: Mapping[SectionId, SectionOutcome],
) -> Report:
    """Assemble the report from dispatched outcomes.

    Sections are walked in catalog order, so neither the caller's ordering
    nor the order answers arrived in affects the document or its citations.

    Args:
        subject: Company name, ticker or domain
        section_ids: Sections that were requested (None = all)
        outcomes: Outcome per section, as returned by the dispatcher

    Returns:
        Frozen Report
    """
    requested = parse_sections(section_ids)

    parts = [f"# {REPORT_TITLE}: {subject}\n\n"]
    included: list[SectionId] = []
    citation_lists: list[list[Citation]] = []
    for section in requested:
        outcome = outcomes.get(section)
        if not isinstance(outcome, Usable):
            continue
        parts.append(render_section(section, outcome.text))
        included.append(section)
        citation_lists.append(outcome.citations)

    citations = merge(citation_lists)
    parts.append(render_citations(citations))
    sources = [c for citation_list in citation_lists for c in citation_list]

    report = Report(
        subject=subject,
        markdown="".join(parts),
        sections=requested,
        included=included,
        sources=sources,
        citations=citations,
    )
    if len(included) < len(requested):
        logger.info(
            "Partial report | subject=%s included=%d/%d omitted=%s",
            subject[:50], len(included), len(requested),
            ",".join(s.value for s in report.omitted),
        )
    return report


def _sanitize_filename(subject: str, max_length: int = 50) -> str:
    """Sanitize a subject for use in a filename."""
    s = re.sub(r'[<>:"/\\|?*\n\r\t]', " ", subject)
    s = re.sub(r"\s+", "_", s).strip("_")
    return s[:max_length] or "report"


def save_report(report: Report, reports_dir: Path) -> Path | None:
    """Write the report markdown to `reports_dir`.

    Returns:
        Path of the written file, or None if writing failed (logged)
    """
    try:
        reports_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = reports_dir / f"{timestamp}_{_sanitize_filename(report.subject)}.md"
        filepath.write_text(report.markdown, encoding="utf-8")
        logger.info("Report saved | file=%s", filepath.name)
        return filepath
    except OSError as e:
        logger.error("Report save failed: %s", e, exc_info=True)
        return None
