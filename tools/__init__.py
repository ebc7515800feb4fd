"""Valyu API clients and agent tools.

Clients (imported here):

AnswerClient:
    One query -> synthesized answer with citations. Used per report section.

DeepSearchClient:
    One query -> raw deepsearch JSON. Used by the search tools.

ConfigurationError, UpstreamError:
    Missing credential (fatal, before any call) and failed API call.

Tool modules (import directly; they depend on the research package):

tools.search:
    web_search, finance_search, paper_search, bio_search, patent_search,
    sec_search, economics_search, and the SEARCH_TOOLS table.

tools.company:
    company_research, the multi-section report tool.

Example:
    >>> from tools.search import bio_search
    >>> data = await bio_search("GLP-1 agonists cardiovascular outcomes", max_num_results=3)
"""

from tools.utils import create_session, create_ssl_context, USER_AGENT
from tools.valyu import (
    AnswerClient,
    ConfigurationError,
    DeepSearchClient,
    UpstreamError,
    ValyuError,
)

__all__ = [
    "AnswerClient",
    "DeepSearchClient",
    "ValyuError",
    "ConfigurationError",
    "UpstreamError",
    "create_session",
    "create_ssl_context",
    "USER_AGENT",
]
