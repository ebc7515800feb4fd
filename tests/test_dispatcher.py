"""Tests for concurrent section dispatch."""

import asyncio
import logging

import pytest

from models.research import Failed, Unusable, Usable
from models.section import SectionId
from research.catalog import InvalidSectionError
from research.dispatcher import SectionDispatcher
from tests.fakes import FakeAnswerClient, answer
from tools.valyu import UpstreamError


@pytest.mark.asyncio
async def test_run_returns_outcome_per_requested_section():
    client = FakeAnswerClient()
    dispatcher = SectionDispatcher(client)

    outcomes = await dispatcher.run("Acme", ["news", "summary"])

    assert set(outcomes) == {SectionId.SUMMARY, SectionId.NEWS}
    assert all(isinstance(o, Usable) for o in outcomes.values())
    assert sorted(q.section.value for q in client.calls) == ["news", "summary"]


@pytest.mark.asyncio
async def test_run_defaults_to_all_sections():
    outcomes = await SectionDispatcher(FakeAnswerClient()).run("Acme")

    assert set(outcomes) == set(SectionId)


@pytest.mark.asyncio
async def test_calls_run_concurrently():
    """Every call must be in flight before any of them can finish."""
    sections = [SectionId.SUMMARY, SectionId.NEWS, SectionId.FUNDING]
    started = 0
    all_started = asyncio.Event()

    class BarrierClient(FakeAnswerClient):
        async def ask(self, query):
            nonlocal started
            started += 1
            if started == len(sections):
                all_started.set()
            await all_started.wait()
            return await super().ask(query)

    outcomes = await asyncio.wait_for(
        SectionDispatcher(BarrierClient()).run("Acme", sections),
        timeout=2,
    )

    assert len(outcomes) == 3


@pytest.mark.asyncio
async def test_one_failure_does_not_affect_other_sections():
    sections = [SectionId.SUMMARY, SectionId.LEADERSHIP, SectionId.PRODUCTS, SectionId.NEWS]
    healthy = await SectionDispatcher(FakeAnswerClient()).run("Acme", sections)

    error = UpstreamError(500, "boom")
    failing = await SectionDispatcher(
        FakeAnswerClient(answers={SectionId.LEADERSHIP: error})
    ).run("Acme", sections)

    assert isinstance(failing[SectionId.LEADERSHIP], Failed)
    assert failing[SectionId.LEADERSHIP].error is error
    for section in sections:
        if section is not SectionId.LEADERSHIP:
            assert failing[section] == healthy[section]


@pytest.mark.asyncio
async def test_transport_errors_become_failed():
    client = FakeAnswerClient(answers={
        SectionId.NEWS: asyncio.TimeoutError(),
        SectionId.FUNDING: ConnectionError("reset"),
    })

    outcomes = await SectionDispatcher(client).run("Acme", ["news", "funding", "summary"])

    assert isinstance(outcomes[SectionId.NEWS], Failed)
    assert isinstance(outcomes[SectionId.FUNDING], Failed)
    assert isinstance(outcomes[SectionId.SUMMARY], Usable)


@pytest.mark.asyncio
async def test_waits_for_slow_sections_after_early_failure():
    client = FakeAnswerClient(
        answers={SectionId.SUMMARY: UpstreamError(503, "unavailable")},
        delays={SectionId.NEWS: 0.05},
    )

    outcomes = await SectionDispatcher(client).run("Acme", ["summary", "news"])

    assert isinstance(outcomes[SectionId.SUMMARY], Failed)
    assert isinstance(outcomes[SectionId.NEWS], Usable)


@pytest.mark.asyncio
async def test_hedging_answer_is_unusable():
    client = FakeAnswerClient(answers={
        SectionId.NEWS: answer("I don't have enough information about recent news."),
    })

    outcomes = await SectionDispatcher(client).run("Acme", ["summary", "news"])

    assert isinstance(outcomes[SectionId.NEWS], Unusable)
    assert isinstance(outcomes[SectionId.SUMMARY], Usable)


@pytest.mark.asyncio
async def test_invalid_section_aborts_before_dispatch():
    client = FakeAnswerClient()

    with pytest.raises(InvalidSectionError):
        await SectionDispatcher(client).run("Acme", ["summary", "horoscope"])

    assert client.calls == []


@pytest.mark.asyncio
async def test_failed_section_logged_with_traceback(caplog):
    client = FakeAnswerClient(answers={SectionId.NEWS: UpstreamError(502, "bad gateway")})

    with caplog.at_level(logging.WARNING, logger="research.dispatcher"):
        await SectionDispatcher(client).run("Acme", ["summary", "news"])

    [record] = [r for r in caplog.records if r.getMessage().startswith("Section failed")]
    assert "section=news" in record.getMessage()
    assert record.exc_info is not None
    assert isinstance(record.exc_info[1], UpstreamError)
