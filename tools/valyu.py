"""HTTP clients for the Valyu answer and deepsearch endpoints.

AnswerClient:
    One query in, one synthesized answer (text + citations) out. Used by the
    company research core, one call per report section.

DeepSearchClient:
    One query in, the raw deepsearch JSON body out. Used by the search tools.

Both clients are stateless apart from their configuration. The API key is
checked once, when the client is built, so a missing credential fails before
any request is sent. Neither client retries: a failed call is a failed call.

Error Handling:
    - Missing API key: ConfigurationError at construction (fatal)
    - Non-2xx status: UpstreamError carrying status and raw body
    - Transport errors (connection, TLS, timeouts): UpstreamError, status None
"""

import asyncio
import logging
from typing import Any

import aiohttp

from config import Config
from models.research import Answer, SectionQuery
from tools.utils import api_headers, create_session

logger = logging.getLogger(__name__)


class ValyuError(Exception):
    """Base class for Valyu client errors."""


class ConfigurationError(ValyuError):
    """Raised when the client cannot be built from the given configuration.

    This is a hard error raised before any network call. Example:
    - VALYU_API_KEY not set
    """


class UpstreamError(ValyuError):
    """Raised when a Valyu call fails.

    Attributes:
        status: HTTP status code, or None for transport-level failures
        body: Raw response body or transport error message
    """

    def __init__(self, status: int | None, body: str):
        self.status = status
        self.body = body
        if status is None:
            super().__init__(f"Valyu API request failed: {body}")
        else:
            super().__init__(f"Valyu API error: {status} - {body}")


class _ValyuClient:
    """Shared request plumbing for the Valyu endpoints."""

    endpoint = ""

    def __init__(
        self,
        api_key: str | None,
        base_url: str,
        session: aiohttp.ClientSession | None = None,
    ):
        if not api_key:
            raise ConfigurationError(
                "VALYU_API_KEY is required. Set it in the environment or pass it in config."
            )
        self._api_key = api_key
        self._url = f"{base_url.rstrip('/')}/{self.endpoint}"
        self._session = session

    def use_session(self, session: aiohttp.ClientSession) -> None:
        """Send later calls through `session` (owned by the caller)."""
        self._session = session

    async def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        """POST a JSON payload and return the decoded JSON body.

        Uses the injected session when there is one, otherwise a
        short-lived session for this call.

        Raises:
            UpstreamError: On non-2xx status or transport failure
        """
        if self._session is not None:
            return await self._send(self._session, payload)
        async with create_session() as session:
            return await self._send(session, payload)

    async def _send(self, session: aiohttp.ClientSession, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            async with session.post(self._url, json=payload, headers=api_headers(self._api_key)) as resp:
                if resp.status < 200 or resp.status >= 300:
                    body = await resp.text()
                    raise UpstreamError(resp.status, body)
                data = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise UpstreamError(None, f"{type(e).__name__}: {e}") from e

        if not isinstance(data, dict):
            raise UpstreamError(None, f"Unexpected response type: {type(data).__name__}")
        return data


class AnswerClient(_ValyuClient):
    """Client for the Valyu answer endpoint.

    Example:
        >>> client = AnswerClient.from_config(config, session=session)
        >>> answer = await client.ask(query)
        >>> answer.text, answer.citations
    """

    endpoint = "answer"

    def __init__(
        self,
        api_key: str | None,
        base_url: str,
        data_max_price: float = 100.0,
        session: aiohttp.ClientSession | None = None,
    ):
        super().__init__(api_key, base_url, session)
        self.data_max_price = data_max_price

    @classmethod
    def from_config(cls, config: Config, session: aiohttp.ClientSession | None = None) -> "AnswerClient":
        """Build a client from application configuration.

        Raises:
            ConfigurationError: If VALYU_API_KEY is not configured
        """
        return cls(
            api_key=config.valyu_api_key,
            base_url=config.api_base_url,
            data_max_price=config.data_max_price,
            session=session,
        )

    async def ask(self, query: SectionQuery) -> Answer:
        """Send one query and parse the synthesized answer.

        Raises:
            UpstreamError: If the call fails
        """
        logger.debug("Answer request | section=%s search_type=%s", query.section.value, query.search_type)
        data = await self._post(query.to_payload(self.data_max_price))
        answer = Answer.from_response(data)
        logger.debug(
            "Answer received | section=%s success=%s chars=%d citations=%d",
            query.section.value, answer.success, len(answer.text), len(answer.citations),
        )
        return answer


class DeepSearchClient(_ValyuClient):
    """Client for the Valyu deepsearch endpoint."""

    endpoint = "deepsearch"

    @classmethod
    def from_config(cls, config: Config, session: aiohttp.ClientSession | None = None) -> "DeepSearchClient":
        """Build a client from application configuration.

        Raises:
            ConfigurationError: If VALYU_API_KEY is not configured
        """
        return cls(api_key=config.valyu_api_key, base_url=config.api_base_url, session=session)

    async def search(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Run one deepsearch request and return the body unmodified.

        Raises:
            UpstreamError: If the call fails
        """
        logger.debug("Deepsearch request | query=%s", str(payload.get("query", ""))[:50])
        return await self._post(payload)
