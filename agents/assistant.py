"""Research assistant agent with the Valyu tools registered.

This module wires the company research tool and the seven search tools into
a PydanticAI agent, so a model can decide which data to pull for a question.

Tool Set:
    company_research: Multi-section company report (concurrent answer calls)
    web_search ... economics_search: One deepsearch call each, raw JSON back

Invalid tool arguments (empty query, unknown section) are sent back to the
model as ModelRetry so it can correct itself. API failures propagate and
end the run.
"""

import logging
from dataclasses import dataclass
from typing import Any

from pydantic_ai import Agent, ModelRetry, RunContext, Tool, UsageLimits
from pydantic_ai.models import Model

from config import Config
from models.section import SectionId
from observability.tracing import trace_operation
from tools.company import DESCRIPTION as COMPANY_RESEARCH_DESCRIPTION
from tools.company import company_research
from tools.search import SEARCH_TOOLS, SearchToolSpec, run_search

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a research assistant with access to specialized data tools.

## Tools
- company_research: full company intelligence report with citations. Prefer it for
  questions about one company; request 2-4 sections for focused questions.
- web_search, finance_search, paper_search, bio_search, patent_search, sec_search,
  economics_search: targeted searches returning raw results.

## Principles
- Pick the most specific tool for the question before falling back to web search
- Cite the URLs of the sources you rely on
- When the tools return nothing relevant, say so instead of guessing"""


@dataclass
class ToolDeps:
    """Runtime dependencies passed to every tool call.

    Attributes:
        config: Application configuration (API key, price ceilings, limits)
    """
    config: Config


async def _company_research(
    ctx: RunContext[ToolDeps],
    company: str,
    sections: list[SectionId] | None = None,
) -> dict[str, Any]:
    """Generate a company intelligence report.

    Args:
        company: Company name, ticker symbol, or domain (e.g. 'Apple', 'AAPL', 'apple.com')
        sections: Sections to include; omit or leave empty for a comprehensive report
    """
    try:
        return await company_research(company, sections, config=ctx.deps.config)
    except ValueError as e:
        raise ModelRetry(str(e)) from e


def _search_tool(spec: SearchToolSpec) -> Tool[ToolDeps]:
    """Build the agent tool for one search tool definition."""

    async def search(
        ctx: RunContext[ToolDeps],
        query: str,
        max_num_results: int = 5,
    ) -> dict[str, Any]:
        """Run the search.

        Args:
            query: Search query, specific and at most 500 characters
            max_num_results: Maximum number of results to return
        """
        try:
            return await run_search(spec.name, query, max_num_results, config=ctx.deps.config)
        except ValueError as e:
            raise ModelRetry(str(e)) from e

    return Tool(search, takes_ctx=True, name=spec.name, description=spec.description)


def build_tools() -> list[Tool[ToolDeps]]:
    """All tools exposed to the agent, company research first."""
    tools = [
        Tool(
            _company_research,
            takes_ctx=True,
            name="company_research",
            description=COMPANY_RESEARCH_DESCRIPTION,
        )
    ]
    tools.extend(_search_tool(spec) for spec in SEARCH_TOOLS.values())
    return tools


def build_agent(config: Config, model: Model | str | None = None) -> Agent[ToolDeps, str]:
    """Create the PydanticAI agent.

    Args:
        config: Application configuration
        model: Model instance or 'provider:model' string (default: config AGENT_MODEL)
    """
    return Agent(
        model or config.agent_model,
        deps_type=ToolDeps,
        tools=build_tools(),
        system_prompt=SYSTEM_PROMPT,
        retries=2,
    )


class ResearchAssistant:
    """Answers free-form research questions using the Valyu tools.

    Example:
        >>> assistant = ResearchAssistant(config)
        >>> text, input_tokens, output_tokens = await assistant.ask("Research Microsoft briefly")
    """

    def __init__(self, config: Config, model: Model | str | None = None, request_limit: int = 10):
        self.config = config
        self.request_limit = request_limit
        self._agent = build_agent(config, model)
        self._deps = ToolDeps(config=config)

    async def ask(self, prompt: str) -> tuple[str, int, int]:
        """Run the agent on one prompt.

        Returns:
            Tuple of (answer text, input_tokens, output_tokens)
        """
        with trace_operation("assistant_ask", {"prompt": prompt[:100]}):
            result = await self._agent.run(
                prompt,
                deps=self._deps,
                usage_limits=UsageLimits(request_limit=self.request_limit),
            )
        usage = result.usage()
        input_tokens = usage.input_tokens or 0
        output_tokens = usage.output_tokens or 0
        logger.info(
            "Assistant answer | chars=%d requests=%d input_tokens=%d output_tokens=%d",
            len(result.output), usage.requests, input_tokens, output_tokens,
        )
        return result.output, input_tokens, output_tokens
