#!/usr/bin/env python3
"""Dossier: company intelligence and search tools for LLM agents.

This CLI runs the Valyu-backed research tools directly, or through a
PydanticAI agent that decides which tools to call.

Commands:
    research    Generate a multi-section company research report
    search      Run one of the seven search tools and print the raw JSON
    ask         Answer a free-form question with the research agent
    sections    List report sections and their datasets
    status      Show configuration

Examples:
    python main.py research Microsoft                  # All sections
    python main.py research AAPL -s summary -s news    # Focused report
    python main.py research stripe.com --json --save   # Tool output + file
    python main.py search bio_search "GLP-1 cardiovascular outcomes"
    python main.py ask "Who are Anthropic's main competitors?"

Environment:
    VALYU_API_KEY: Required for research, search and ask
    See config.py for all configuration options
"""

import argparse
import asyncio
import json
import logging
import sys

from config import Config
from observability.logging import setup_logging
from observability.tracing import setup_tracing

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CONFIG = 2
EXIT_TIMEOUT = 124
EXIT_INTERRUPTED = 130

logger = logging.getLogger(__name__)


def cmd_research(args: argparse.Namespace, config: Config) -> int:
    """Generate a company research report.

    The whole run is bounded by --timeout; the research core has no timeout
    of its own.

    Args:
        args: Parsed command line arguments
        config: Application configuration

    Returns:
        Exit code
    """
    from research.company import research_company
    from research.report import save_report

    timeout = args.timeout or config.request_timeout_seconds

    async def run():
        return await asyncio.wait_for(
            research_company(args.subject, args.sections, config=config),
            timeout=timeout,
        )

    try:
        report = asyncio.run(run())
    except asyncio.TimeoutError:
        logger.error("Research timed out | subject=%s timeout=%.0fs", args.subject, timeout)
        print(f"Error: research timed out after {timeout:.0f}s", file=sys.stderr)
        return EXIT_TIMEOUT

    if args.json:
        print(json.dumps(report.to_tool_output(), indent=2, ensure_ascii=False))
    else:
        print(report.markdown)

    if args.save:
        path = save_report(report, config.reports_dir)
        if path is None:
            print("Warning: report could not be saved (see log)", file=sys.stderr)
            return EXIT_ERROR
        print(f"Saved: {path}", file=sys.stderr)
    return EXIT_OK


def cmd_search(args: argparse.Namespace, config: Config) -> int:
    """Run one search tool and print its JSON response.

    Args:
        args: Parsed command line arguments
        config: Application configuration

    Returns:
        Exit code
    """
    from tools.search import run_search

    data = asyncio.run(run_search(
        args.tool,
        args.query,
        max_num_results=args.max_results,
        max_price=args.max_price,
        relevance_threshold=args.relevance_threshold,
        category=args.category,
        config=config,
    ))
    print(json.dumps(data, indent=2, ensure_ascii=False))
    return EXIT_OK


def cmd_ask(args: argparse.Namespace, config: Config) -> int:
    """Answer a question with the research agent.

    Args:
        args: Parsed command line arguments
        config: Application configuration

    Returns:
        Exit code
    """
    from agents.assistant import ResearchAssistant

    assistant = ResearchAssistant(config, model=args.model)
    text, input_tokens, output_tokens = asyncio.run(assistant.ask(args.prompt))
    print(text)
    logger.info("Ask complete | input_tokens=%d output_tokens=%d", input_tokens, output_tokens)
    return EXIT_OK


def cmd_sections(args: argparse.Namespace, config: Config) -> int:
    """List report sections in catalog order."""
    from research.catalog import SECTION_CATALOG

    for section, spec in SECTION_CATALOG.items():
        line = f"{section.value:<12} {spec.title}"
        if spec.included_sources:
            line += f"  [{', '.join(spec.included_sources)}]"
        if spec.recency_days:
            line += f"  (last {spec.recency_days} days)"
        print(line)
    return EXIT_OK


def cmd_status(args: argparse.Namespace, config: Config) -> int:
    """Display configuration (the API key is never printed)."""
    status = {
        "api_key_configured": bool(config.valyu_api_key),
        "api_base_url": config.api_base_url,
        "data_max_price": config.data_max_price,
        "search_max_results": config.search_max_results,
        "hedge_phrases": len(config.hedge_phrases),
        "request_timeout_seconds": config.request_timeout_seconds,
        "agent_model": config.agent_model,
        "reports_dir": str(config.reports_dir),
        "enable_logfire": config.enable_logfire,
        "config_error": config.validate(),
    }
    print(json.dumps(status, indent=2))
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    from research.catalog import SECTION_CATALOG
    from tools.search import SEARCH_TOOLS

    parser = argparse.ArgumentParser(
        description="Dossier: company intelligence and search tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # research command
    research_parser = subparsers.add_parser("research", help="Generate a company research report")
    research_parser.add_argument(
        "subject",
        help="Company name, ticker symbol, or domain (e.g. 'Apple', 'AAPL', 'apple.com')",
    )
    research_parser.add_argument(
        "-s", "--section",
        dest="sections",
        action="append",
        choices=[s.value for s in SECTION_CATALOG],
        help="Section to include (repeatable; default: all)",
    )
    research_parser.add_argument(
        "--timeout",
        type=float,
        help="Overall timeout in seconds (default: config REQUEST_TIMEOUT_SECONDS)",
    )
    research_parser.add_argument(
        "--json",
        action="store_true",
        help="Print tool output JSON instead of markdown",
    )
    research_parser.add_argument(
        "--save",
        action="store_true",
        help="Also save the markdown report to REPORTS_DIR",
    )

    # search command
    search_parser = subparsers.add_parser("search", help="Run a search tool")
    search_parser.add_argument("tool", choices=list(SEARCH_TOOLS), help="Search tool")
    search_parser.add_argument("query", help="Search query")
    search_parser.add_argument(
        "--max-results",
        type=int,
        help="Maximum number of results (default: config SEARCH_MAX_RESULTS)",
    )
    search_parser.add_argument("--max-price", type=float, help="Price ceiling for the search")
    search_parser.add_argument("--relevance-threshold", type=float, help="Minimum relevance, 0-1")
    search_parser.add_argument("--category", help="Category hint")

    # ask command
    ask_parser = subparsers.add_parser("ask", help="Ask the research agent")
    ask_parser.add_argument("prompt", help="Question or research task")
    ask_parser.add_argument("--model", help="Override agent model (default: config AGENT_MODEL)")

    subparsers.add_parser("sections", help="List report sections")
    subparsers.add_parser("status", help="Show configuration")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = Config.load()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG

    setup_logging(config, verbose=args.verbose)
    setup_tracing(enabled=config.enable_logfire, token=config.logfire_token)

    # Validate configuration for commands that call the API
    if args.command in ("research", "search", "ask"):
        error = config.validate()
        if error:
            print(f"Configuration error: {error}", file=sys.stderr)
            return EXIT_CONFIG

    commands = {
        "research": cmd_research,
        "search": cmd_search,
        "ask": cmd_ask,
        "sections": cmd_sections,
        "status": cmd_status,
    }

    if args.command not in commands:
        parser.print_help()
        return EXIT_OK

    from tools.valyu import ConfigurationError

    try:
        return commands[args.command](args, config)
    except KeyboardInterrupt:
        logger.info("Stopped by user (Ctrl+C)")
        return EXIT_INTERRUPTED
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except Exception as e:
        logger.error("Command failed | cmd=%s error=%s", args.command, e, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
