"""Settings for the Dossier research tools, read from the environment.

Every field of Config maps to one environment variable. Nothing is read
from files; export the variables (or use a .env loader in your shell).

Environment Variables:
    Credential:
        VALYU_API_KEY: API key for the Valyu answer and search endpoints

    API:
        VALYU_API_BASE: Base URL of the Valyu API
        DATA_MAX_PRICE: Price ceiling per answer call (CPM, USD)
        SEARCH_MAX_RESULTS: Default result limit for search tools

    Research:
        HEDGE_PHRASES: '|'-separated phrases marking an answer as unusable
        REQUEST_TIMEOUT_SECONDS: Overall timeout for one CLI invocation
        REPORTS_DIR: Directory for saved markdown reports

    Agent:
        AGENT_MODEL: PydanticAI model string for the `ask` command

    Logs and tracing:
        LOG_DIR: Directory for dossier.log
        LOG_LEVEL: Console verbosity (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        LOG_FORMAT: 'text' or 'json'
        LOG_BACKUP_COUNT: Rotated log files to keep
        LOG_MAX_BYTES: Rotate by size above this many bytes (0 = rotate daily)
        ENABLE_LOGFIRE / LOGFIRE_TOKEN: Optional Logfire tracing
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, TypeVar

T = TypeVar("T")

DEFAULT_API_BASE = "https://api.valyu.ai/v1"

# Phrases the answer service uses when it has nothing real to report.
# Tuned against Valyu's phrasing; other backends will need their own list.
DEFAULT_HEDGE_PHRASES = (
    "don't have enough information",
    "do not have enough information",
    "based on the sources found",
    "insufficient information",
    "no information available",
    "unable to find",
    "cannot provide",
    "not available",
)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("text", "json")


def _env(key: str, default: str = "") -> str:
    """Raw string value of `key`, or `default` when unset."""
    return os.environ.get(key, default)


def _env_parsed(key: str, default: T, parse: Callable[[str], T], kind: str) -> T:
    """Parse `key` with `parse`; unset or empty means `default`.

    Raises:
        ValueError: Naming the variable, if the value does not parse
    """
    raw = os.environ.get(key)
    if not raw:
        return default
    try:
        return parse(raw)
    except ValueError:
        raise ValueError(f"Invalid {kind} value for {key}: '{raw}'")


def _env_int(key: str, default: int) -> int:
    return _env_parsed(key, default, int, "integer")


def _env_float(key: str, default: float) -> float:
    return _env_parsed(key, default, float, "float")


def _env_bool(key: str, default: bool = False) -> bool:
    """On/off flag. Accepts 1/0, true/false, yes/no, on/off; anything else is `default`."""
    raw = os.environ.get(key, "").strip().lower()
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    return default


def _env_list(key: str, default: tuple[str, ...], sep: str = "|") -> list[str]:
    """Separator-delimited list. Blank items are dropped, so a trailing separator is harmless."""
    raw = os.environ.get(key)
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(sep) if item.strip()]


@dataclass
class Config:
    """Runtime settings for the research core, tools, agent and CLI.

    Construct directly in tests; use Config.load() everywhere else.

    Example:
        >>> config = Config.load()
        >>> if error := config.validate():
        ...     print(f"Config error: {error}")
    """

    # Credential
    valyu_api_key: str = ""  # VALYU_API_KEY

    # Valyu API
    api_base_url: str = DEFAULT_API_BASE  # VALYU_API_BASE
    data_max_price: float = 100.0  # DATA_MAX_PRICE - answer endpoint price ceiling
    search_max_results: int = 5  # SEARCH_MAX_RESULTS

    # Research
    hedge_phrases: list[str] = field(default_factory=lambda: list(DEFAULT_HEDGE_PHRASES))
    request_timeout_seconds: float = 120.0  # REQUEST_TIMEOUT_SECONDS - CLI-level timeout
    reports_dir: Path = field(default_factory=lambda: Path("reports"))  # REPORTS_DIR

    # Agent (PydanticAI 'provider:model')
    agent_model: str = "openai:gpt-4o"  # AGENT_MODEL

    # Logs
    log_dir: Path = field(default_factory=lambda: Path("log"))  # LOG_DIR
    log_level: str = "INFO"  # LOG_LEVEL
    log_format: str = "text"  # LOG_FORMAT
    log_backup_count: int = 30  # LOG_BACKUP_COUNT
    log_max_bytes: int = 0  # LOG_MAX_BYTES - 0 rotates at midnight instead

    # Tracing (pip install 'dossier[tracing]')
    enable_logfire: bool = False  # ENABLE_LOGFIRE
    logfire_token: str = ""  # LOGFIRE_TOKEN

    @classmethod
    def load(cls) -> "Config":
        """Build a Config from the current environment.

        Raises:
            ValueError: If a numeric variable does not parse
        """
        return cls(
            valyu_api_key=_env("VALYU_API_KEY").strip(),
            api_base_url=_env("VALYU_API_BASE", DEFAULT_API_BASE).rstrip("/"),
            data_max_price=_env_float("DATA_MAX_PRICE", 100.0),
            search_max_results=_env_int("SEARCH_MAX_RESULTS", 5),
            hedge_phrases=_env_list("HEDGE_PHRASES", DEFAULT_HEDGE_PHRASES),
            request_timeout_seconds=_env_float("REQUEST_TIMEOUT_SECONDS", 120.0),
            reports_dir=Path(_env("REPORTS_DIR", "reports")),
            agent_model=_env("AGENT_MODEL", "openai:gpt-4o"),
            log_dir=Path(_env("LOG_DIR", "log")),
            log_level=_env("LOG_LEVEL", "INFO").upper(),
            log_format=_env("LOG_FORMAT", "text").lower(),
            log_backup_count=_env_int("LOG_BACKUP_COUNT", 30),
            log_max_bytes=_env_int("LOG_MAX_BYTES", 0),
            enable_logfire=_env_bool("ENABLE_LOGFIRE"),
            logfire_token=_env("LOGFIRE_TOKEN"),
        )

    def validate(self) -> str | None:
        """First configuration problem found, or None if the config is usable.

        The credential is checked first so a fresh install gets the most
        useful message.
        """
        checks = (
            (not self.valyu_api_key, "VALYU_API_KEY environment variable is required"),
            (not self.api_base_url, "VALYU_API_BASE must not be empty"),
            (self.data_max_price <= 0, "DATA_MAX_PRICE must be positive"),
            (self.search_max_results <= 0, "SEARCH_MAX_RESULTS must be positive"),
            (self.request_timeout_seconds <= 0, "REQUEST_TIMEOUT_SECONDS must be positive"),
            (
                self.log_level not in LOG_LEVELS,
                f"Invalid LOG_LEVEL '{self.log_level}' - expected one of {', '.join(LOG_LEVELS)}",
            ),
            (
                self.log_format not in LOG_FORMATS,
                f"Invalid LOG_FORMAT '{self.log_format}' - expected 'text' or 'json'",
            ),
            (self.log_backup_count < 0, "LOG_BACKUP_COUNT must be non-negative"),
            (self.log_max_bytes < 0, "LOG_MAX_BYTES must be non-negative"),
        )
        for failed, message in checks:
            if failed:
                return message
        return None
