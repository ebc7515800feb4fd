"""Company research report generation.

Flow:
    1. VALIDATE: Non-empty subject, known sections (fatal, before dispatch)
    2. CLIENT: Build the answer client; a missing API key fails here,
       before any request is sent
    3. DISPATCH: One concurrent answer call per section
    4. FILTER: Drop failed calls and hedging answers, per section
    5. ASSEMBLE: Render usable sections in catalog order + deduped citations

Only steps 1 and 2 can raise. Whatever happens to individual sections in
steps 3-4, the caller gets a Report.
"""

import logging
import uuid
from datetime import datetime
from typing import Iterable

from config import Config
from models.research import Report
from models.section import SectionId
from observability.logging import clear_report_context, set_report_context
from observability.tracing import trace_operation
from research.catalog import parse_sections
from research.dispatcher import SectionDispatcher
from research.quality import ContentFilter
from research.report import assemble
from tools.utils import create_session
from tools.valyu import AnswerClient

logger = logging.getLogger(__name__)


def validate_subject(subject: str) -> str:
    """Return the stripped subject.

    Raises:
        ValueError: If the subject is empty or whitespace
    """
    subject = (subject or "").strip()
    if not subject:
        raise ValueError("Company name, ticker or domain is required")
    return subject


async def research_company(
    subject: str,
    sections: Iterable[SectionId | str] | None = None,
    config: Config | None = None,
    client: AnswerClient | None = None,
    now: datetime | None = None,
) -> Report:
    """Generate a company research report.

    Args:
        subject: Company name, ticker symbol or domain (e.g. 'Apple', 'AAPL', 'apple.com')
        sections: Sections to include (None = all)
        config: Application configuration (default: loaded from environment)
        client: Answer client to use instead of one built from config
        now: Reference time for recency windows (default: current UTC time)

    Returns:
        Assembled Report, possibly with fewer sections than requested

    Raises:
        ValueError: If the subject is empty
        InvalidSectionError: If a requested section is unknown
        ConfigurationError: If no API key is configured
    """
    subject = validate_subject(subject)
    requested = parse_sections(sections)
    config = config or Config.load()
    content_filter = ContentFilter(config.hedge_phrases)

    if client is not None:
        return await _generate(subject, requested, client, content_filter, now)

    # Raises ConfigurationError before a session is opened
    client = AnswerClient.from_config(config)
    async with create_session() as session:
        client.use_session(session)
        return await _generate(subject, requested, client, content_filter, now)


async def _generate(
    subject: str,
    requested: list[SectionId],
    client: AnswerClient,
    content_filter: ContentFilter,
    now: datetime | None,
) -> Report:
    token = set_report_context(uuid.uuid4().hex[:8])
    try:
        with trace_operation(
            "company_research",
            {"subject": subject, "requested": len(requested)},
        ) as attrs:
            logger.info("Report started | subject=%s sections=%d", subject[:50], len(requested))
            dispatcher = SectionDispatcher(client, content_filter)
            outcomes = await dispatcher.run(subject, requested, now=now)
            report = assemble(subject, requested, outcomes)
            attrs["included"] = len(report.included)
            attrs["citations"] = len(report.citations)
            logger.info(
                "Report complete | subject=%s included=%d/%d citations=%d chars=%d",
                subject[:50], len(report.included), len(requested),
                len(report.citations), len(report.markdown),
            )
            return report
    finally:
        clear_report_context(token)
