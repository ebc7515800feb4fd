"""Concurrent fan-out of section queries.

The dispatcher builds one answer request per requested section and runs them
all at once on the event loop. Every call is settled on its own: an error,
an empty answer or a slow response in one section never touches another.
The only shared input is the answer client, which holds no mutable state.

Outcome Handling:
    - Call raised (HTTP error, transport error, anything else): Failed
    - Call returned but the content filter rejected it: Unusable
    - Call returned real content: Usable

The returned dict is keyed by section; completion order carries no meaning.
"""

import asyncio
import logging
from datetime import datetime
from typing import Iterable

from models.research import Failed, SectionOutcome, SectionQuery, Unusable, Usable
from models.section import SectionId
from research.catalog import parse_sections, query_for
from research.quality import ContentFilter
from tools.valyu import AnswerClient

logger = logging.getLogger(__name__)


class SectionDispatcher:
    """Runs section queries concurrently and collects per-section outcomes.

    Example:
        >>> dispatcher = SectionDispatcher(client, ContentFilter())
        >>> outcomes = await dispatcher.run("Acme", [SectionId.SUMMARY, SectionId.NEWS])
        >>> outcomes[SectionId.NEWS]
        Unusable(section=<SectionId.NEWS: 'news'>, reason="hedge phrase 'unable to find'")
    """

    def __init__(self, client: AnswerClient, content_filter: ContentFilter | None = None):
        self._client = client
        self._filter = content_filter or ContentFilter()

    async def run(
        self,
        subject: str,
        section_ids: Iterable[SectionId | str] | None = None,
        now: datetime | None = None,
    ) -> dict[SectionId, SectionOutcome]:
        """Dispatch every requested section and wait for all of them to settle.

        Args:
            subject: Company name, ticker or domain
            section_ids: Sections to research (None = all)
            now: Reference time for recency windows (default: current UTC time)

        Returns:
            Mapping of each requested section to its outcome

        Raises:
            InvalidSectionError: If any requested section is unknown (before dispatch)
        """
        sections = parse_sections(section_ids)
        queries = [query_for(subject, section, now=now) for section in sections]

        logger.info(
            "Dispatching sections | subject=%s sections=%s",
            subject[:50], ",".join(s.value for s in sections),
        )
        settled = await asyncio.gather(*(self._settle(q) for q in queries))
        outcomes = {outcome.section: outcome for outcome in settled}

        usable = sum(1 for o in settled if isinstance(o, Usable))
        unusable = sum(1 for o in settled if isinstance(o, Unusable))
        failed = sum(1 for o in settled if isinstance(o, Failed))
        logger.info(
            "Dispatch complete | subject=%s usable=%d unusable=%d failed=%d",
            subject[:50], usable, unusable, failed,
        )
        return outcomes

    async def _settle(self, query: SectionQuery) -> SectionOutcome:
        """Run one section call, turning any error into a Failed outcome."""
        try:
            answer = await self._client.ask(query)
        except Exception as e:
            logger.warning(
                "Section failed | section=%s type=%s error=%s",
                query.section.value, type(e).__name__, e,
                exc_info=True,
            )
            return Failed(query.section, e)

        outcome = self._filter.classify(query.section, answer)
        if isinstance(outcome, Unusable):
            logger.info("Section omitted | section=%s reason=%s", query.section.value, outcome.reason)
        return outcome
