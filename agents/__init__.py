"""PydanticAI agent for the Dossier research tools.

ResearchAssistant:
    Answers research questions by calling company_research and the
    seven Valyu search tools.

Example:
    >>> from agents import ResearchAssistant
    >>> assistant = ResearchAssistant(config)
    >>> text, _, _ = await assistant.ask("Who are Stripe's main competitors?")
"""

from agents.assistant import ResearchAssistant, ToolDeps, build_agent, build_tools

__all__ = [
    "ResearchAssistant",
    "ToolDeps",
    "build_agent",
    "build_tools",
]
