"""Search tools backed by the Valyu deepsearch endpoint.

Seven single-purpose tools share one contract: a query, a result limit and
optional price/relevance/category filters go in, the raw deepsearch JSON
body comes out. Each call is exactly one request. There is no state, retry
or post-processing here; the agent reads the JSON itself.

Tools:
    web_search: General web
    finance_search: Market data, company financials, earnings
    paper_search: Academic papers and preprints
    bio_search: Biomedical literature, clinical trials, drug labels
    patent_search: Patents and patent applications
    sec_search: SEC filings
    economics_search: Economic indicators and statistics

Error Handling:
    - Invalid input (empty/long query, bad limit): ValueError
    - Missing API key: ConfigurationError
    - API failure: UpstreamError
"""

import logging
from dataclasses import dataclass
from typing import Any

from config import Config
from observability.tracing import trace_operation
from tools.valyu import DeepSearchClient

logger = logging.getLogger(__name__)

MAX_QUERY_CHARS = 500

BIOMEDICAL_SOURCES = (
    "valyu/valyu-pubmed",
    "valyu/valyu-biorxiv",
    "valyu/valyu-medrxiv",
    "valyu/valyu-clinical-trials",
    "valyu/valyu-drug-labels",
)


@dataclass(frozen=True)
class SearchToolSpec:
    """Definition of one search tool.

    Attributes:
        name: Tool name exposed to agents and the CLI
        description: Tool description shown to the model
        search_type: 'all', 'web' or 'proprietary'
        included_sources: Datasets to restrict results to (empty = any)
    """

    name: str
    description: str
    search_type: str = "proprietary"
    included_sources: tuple[str, ...] = ()


SEARCH_TOOLS: dict[str, SearchToolSpec] = {
    spec.name: spec
    for spec in (
        SearchToolSpec(
            name="web_search",
            description=(
                "Search the web for current information, news, articles and general "
                "knowledge. Use this for anything not covered by a specialized search."
            ),
            search_type="all",
        ),
        SearchToolSpec(
            name="finance_search",
            description=(
                "Search financial data: stock prices, market data, company financials, "
                "earnings reports and crypto. Use this for market or financial questions."
            ),
        ),
        SearchToolSpec(
            name="paper_search",
            description=(
                "Search academic research papers and preprints across scientific "
                "disciplines. Use this for scholarly or scientific questions."
            ),
        ),
        SearchToolSpec(
            name="bio_search",
            description=(
                "Search biomedical and medical literature including peer-reviewed research, "
                "clinical trials, drug information, and FDA labels. Use this for medical "
                "research, disease information, treatments, or drug data."
            ),
            included_sources=BIOMEDICAL_SOURCES,
        ),
        SearchToolSpec(
            name="patent_search",
            description=(
                "Search patents and patent applications. Use this for prior art, "
                "inventions and intellectual property questions."
            ),
        ),
        SearchToolSpec(
            name="sec_search",
            description=(
                "Search SEC filings such as 10-K, 10-Q and 8-K reports. Use this for "
                "regulatory disclosures of US public companies."
            ),
        ),
        SearchToolSpec(
            name="economics_search",
            description=(
                "Search economic indicators and statistics such as GDP, inflation, "
                "unemployment and interest rates."
            ),
        ),
    )
}


def build_payload(
    spec: SearchToolSpec,
    query: str,
    max_num_results: int,
    max_price: float | None = None,
    relevance_threshold: float | None = None,
    category: str | None = None,
) -> dict[str, Any]:
    """Validate tool input and build the deepsearch request body.

    Raises:
        ValueError: If the query or options are invalid
    """
    query = (query or "").strip()
    if not query:
        raise ValueError("Search query is required")
    if len(query) > MAX_QUERY_CHARS:
        raise ValueError(f"Search query must be at most {MAX_QUERY_CHARS} characters")
    if max_num_results < 1:
        raise ValueError("max_num_results must be at least 1")
    if relevance_threshold is not None and not 0.0 <= relevance_threshold <= 1.0:
        raise ValueError("relevance_threshold must be between 0 and 1")

    payload: dict[str, Any] = {
        "query": query,
        "search_type": spec.search_type,
        "max_num_results": max_num_results,
    }
    if spec.included_sources:
        payload["included_sources"] = list(spec.included_sources)
    if max_price is not None:
        payload["max_price"] = max_price
    if relevance_threshold is not None:
        payload["relevance_threshold"] = relevance_threshold
    if category:
        payload["category"] = category
    return payload


async def run_search(
    tool_name: str,
    query: str,
    max_num_results: int | None = None,
    max_price: float | None = None,
    relevance_threshold: float | None = None,
    category: str | None = None,
    config: Config | None = None,
    client: DeepSearchClient | None = None,
) -> dict[str, Any]:
    """Run one search tool and return the deepsearch body unmodified.

    Args:
        tool_name: One of SEARCH_TOOLS
        query: Search query (1-500 characters)
        max_num_results: Result limit (default: config SEARCH_MAX_RESULTS)
        max_price: Price ceiling for the search
        relevance_threshold: Minimum relevance score, 0-1
        category: Optional category hint
        config: Application configuration (default: loaded from environment)
        client: Deepsearch client to use instead of one built from config

    Raises:
        KeyError: If tool_name is unknown
        ValueError: If the input is invalid
        ConfigurationError: If no API key is configured
        UpstreamError: If the API call fails
    """
    spec = SEARCH_TOOLS[tool_name]
    config = config or Config.load()
    if max_num_results is None:
        max_num_results = config.search_max_results
    payload = build_payload(spec, query, max_num_results, max_price, relevance_threshold, category)
    client = client or DeepSearchClient.from_config(config)

    with trace_operation("search", {"tool": spec.name}):
        data = await client.search(payload)
    results = data.get("results")
    logger.info(
        "Search complete | tool=%s query=%s results=%d",
        spec.name, payload["query"][:50], len(results) if isinstance(results, list) else 0,
    )
    return data


async def web_search(query: str, max_num_results: int | None = None, **options: Any) -> dict[str, Any]:
    """Search the web."""
    return await run_search("web_search", query, max_num_results, **options)


async def finance_search(query: str, max_num_results: int | None = None, **options: Any) -> dict[str, Any]:
    """Search financial and market data."""
    return await run_search("finance_search", query, max_num_results, **options)


async def paper_search(query: str, max_num_results: int | None = None, **options: Any) -> dict[str, Any]:
    """Search academic papers."""
    return await run_search("paper_search", query, max_num_results, **options)


async def bio_search(query: str, max_num_results: int | None = None, **options: Any) -> dict[str, Any]:
    """Search biomedical literature, clinical trials and drug labels."""
    return await run_search("bio_search", query, max_num_results, **options)


async def patent_search(query: str, max_num_results: int | None = None, **options: Any) -> dict[str, Any]:
    """Search patents."""
    return await run_search("patent_search", query, max_num_results, **options)


async def sec_search(query: str, max_num_results: int | None = None, **options: Any) -> dict[str, Any]:
    """Search SEC filings."""
    return await run_search("sec_search", query, max_num_results, **options)


async def economics_search(query: str, max_num_results: int | None = None, **options: Any) -> dict[str, Any]:
    """Search economic indicators."""
    return await run_search("economics_search", query, max_num_results, **options)
