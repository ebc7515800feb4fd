"""Observability: logging setup and optional Logfire tracing.

setup_logging:
    Console + rotating file logging, text or JSON, with report context.

set_report_context / clear_report_context:
    Tag log records emitted while generating one report.

setup_tracing / trace_operation:
    Optional Logfire spans (ENABLE_LOGFIRE=true, pip install logfire).
"""

from observability.logging import clear_report_context, set_report_context, setup_logging
from observability.tracing import TracingContext, setup_tracing, trace_operation

__all__ = [
    "setup_logging",
    "set_report_context",
    "clear_report_context",
    "setup_tracing",
    "trace_operation",
    "TracingContext",
]
