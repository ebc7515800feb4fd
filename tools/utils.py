"""Shared utilities for tools module.

This module contains shared constants and utility functions
used by the Valyu clients to avoid code duplication.
"""

import ssl

import aiohttp
import certifi

USER_AGENT = "dossier/0.1 (python-aiohttp)"


def create_ssl_context(verify: bool = True) -> ssl.SSLContext:
    """Create SSL context with optional certificate verification.

    Args:
        verify: If True, verify SSL certificates using certifi bundle.
                If False, disable verification (for local test servers).

    Returns:
        Configured SSL context
    """
    if verify:
        return ssl.create_default_context(cafile=certifi.where())
    ctx = ssl.create_default_context()
    ctx.check_hostname = False
    ctx.verify_mode = ssl.CERT_NONE
    return ctx


def api_headers(api_key: str) -> dict[str, str]:
    """Request headers for the Valyu API."""
    return {
        "Content-Type": "application/json",
        "User-Agent": USER_AGENT,
        "x-api-key": api_key,
    }


def create_session() -> aiohttp.ClientSession:
    """Create a client session using the certifi CA bundle.

    The caller owns the session and must close it (use `async with`).
    """
    connector = aiohttp.TCPConnector(ssl=create_ssl_context())
    return aiohttp.ClientSession(connector=connector)
