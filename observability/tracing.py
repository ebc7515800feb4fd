"""Optional Logfire tracing.

When ENABLE_LOGFIRE is set, report generation, search calls and agent runs
are wrapped in Logfire spans and PydanticAI is instrumented. Otherwise
`trace_operation` is a no-op that only logs the operation's duration.

Requirements:
    pip install logfire
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Generator

logger = logging.getLogger(__name__)


@dataclass
class TracingContext:
    """Process-wide tracing state."""
    enabled: bool = False
    service_name: str = "dossier"
    _logfire_configured: bool = field(default=False, init=False)


_context = TracingContext()


def setup_tracing(
    enabled: bool = False,
    service_name: str = "dossier",
    token: str = "",
) -> TracingContext:
    """Configure Logfire if enabled and installed.

    Args:
        enabled: Whether to enable tracing
        service_name: Service name reported to Logfire
        token: Logfire write token (optional for local use)

    Returns:
        TracingContext for the process
    """
    _context.enabled = enabled
    _context.service_name = service_name

    if not enabled:
        logger.debug("Tracing disabled")
        return _context

    try:
        import logfire
    except ImportError:
        logger.warning("Logfire not installed (pip install 'dossier[tracing]'). Tracing disabled.")
        _context.enabled = False
        return _context

    logfire.configure(service_name=service_name, token=token or None)
    logfire.instrument_pydantic_ai()
    _context._logfire_configured = True
    logger.info("Logfire tracing enabled | service=%s", service_name)
    return _context


@contextmanager
def trace_operation(
    name: str,
    attributes: dict[str, Any] | None = None,
) -> Generator[dict[str, Any], None, None]:
    """Trace an operation as a Logfire span.

    Yields a dict; anything put into it is attached to the span when the
    operation finishes.

    Example:
        >>> with trace_operation("company_research", {"subject": "Acme"}) as attrs:
        ...     attrs["included"] = 3
    """
    start = time.monotonic()
    result_attrs: dict[str, Any] = {}
    try:
        if _context.enabled and _context._logfire_configured:
            import logfire

            with logfire.span(name, **(attributes or {})) as span:
                yield result_attrs
                for key, value in result_attrs.items():
                    span.set_attribute(key, value)
        else:
            yield result_attrs
    finally:
        logger.debug("Operation '%s' completed in %.2fs", name, time.monotonic() - start)
