"""Test doubles for the research core."""

import asyncio

from models.research import Answer, Citation, SectionQuery
from models.section import SectionId


def answer(text: str, *urls: str, success: bool = True) -> Answer:
    """Build an answer citing the given URLs (titles derived from the URL)."""
    return Answer(
        success=success,
        text=text,
        citations=[Citation(url=url, title=f"Title {url}") for url in urls],
    )


class FakeAnswerClient:
    """Answer client returning canned answers or raising canned errors.

    Sections without a canned result get a generic usable answer.
    Per-section delays let tests control completion order.
    """

    def __init__(
        self,
        answers: dict[SectionId, Answer | BaseException] | None = None,
        delays: dict[SectionId, float] | None = None,
    ):
        self.answers = answers or {}
        self.delays = delays or {}
        self.calls: list[SectionQuery] = []

    async def ask(self, query: SectionQuery) -> Answer:
        self.calls.append(query)
        await asyncio.sleep(self.delays.get(query.section, 0))
        result = self.answers.get(query.section)
        if result is None:
            return answer(f"Details about {query.section.value}.")
        if isinstance(result, BaseException):
            raise result
        return result
