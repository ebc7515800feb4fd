"""Tests for the research assistant agent wiring."""

from types import SimpleNamespace

import pytest
from pydantic_ai import ModelRetry
from pydantic_ai.models.test import TestModel

from agents.assistant import ResearchAssistant, ToolDeps, build_agent, build_tools
from models.section import SectionId
from tools.search import BIOMEDICAL_SOURCES, SEARCH_TOOLS


def _tool(name: str):
    return {tool.name: tool for tool in build_tools()}[name]


def test_all_tools_registered():
    names = [tool.name for tool in build_tools()]

    assert names == ["company_research", *SEARCH_TOOLS]


def test_tool_descriptions_come_from_definitions():
    assert _tool("bio_search").description == SEARCH_TOOLS["bio_search"].description
    assert "company intelligence report" in _tool("company_research").description


@pytest.mark.asyncio
async def test_agent_runs_without_tool_calls(config):
    agent = build_agent(config, model=TestModel(call_tools=[]))

    result = await agent.run("Hello", deps=ToolDeps(config=config))

    assert isinstance(result.output, str)


@pytest.mark.asyncio
async def test_assistant_reports_token_usage(config):
    assistant = ResearchAssistant(config, model=TestModel(call_tools=[]))

    text, input_tokens, output_tokens = await assistant.ask("Research Microsoft briefly")

    assert isinstance(text, str)
    assert input_tokens >= 0
    assert output_tokens >= 0


@pytest.mark.asyncio
async def test_agent_calls_company_research(valyu_api, api_config):
    agent = build_agent(api_config, model=TestModel(call_tools=["company_research"]))

    result = await agent.run("Research Acme", deps=ToolDeps(config=api_config))

    assert "company_research" in result.output
    assert len(valyu_api.requests) == len(SectionId)
    assert {r["endpoint"] for r in valyu_api.requests} == {"answer"}


@pytest.mark.asyncio
async def test_agent_calls_bio_search(valyu_api, api_config):
    valyu_api.respond = lambda endpoint, body: (200, {"success": True, "results": []})
    agent = build_agent(api_config, model=TestModel(call_tools=["bio_search"]))

    result = await agent.run("GLP-1 outcomes", deps=ToolDeps(config=api_config))

    assert "bio_search" in result.output
    [request] = valyu_api.requests
    assert request["endpoint"] == "deepsearch"
    assert request["body"]["included_sources"] == list(BIOMEDICAL_SOURCES)


@pytest.mark.asyncio
async def test_blank_company_sent_back_to_model(valyu_api, api_config):
    ctx = SimpleNamespace(deps=ToolDeps(config=api_config))

    with pytest.raises(ModelRetry, match="required"):
        await _tool("company_research").function(ctx, "   ")

    assert valyu_api.requests == []


@pytest.mark.asyncio
async def test_unknown_section_sent_back_to_model(valyu_api, api_config):
    ctx = SimpleNamespace(deps=ToolDeps(config=api_config))

    with pytest.raises(ModelRetry):
        await _tool("company_research").function(ctx, "Acme", ["gossip"])

    assert valyu_api.requests == []


@pytest.mark.asyncio
async def test_invalid_search_query_sent_back_to_model(valyu_api, api_config):
    ctx = SimpleNamespace(deps=ToolDeps(config=api_config))

    with pytest.raises(ModelRetry, match="at most 500"):
        await _tool("paper_search").function(ctx, "x" * 501)

    assert valyu_api.requests == []
