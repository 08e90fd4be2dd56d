"""
Centralised configuration for JobFit.

All environment variables are declared once in ``Settings`` (pydantic-settings).
The module-level ``settings`` singleton is the single source of truth; every
other module should import from here instead of calling ``os.getenv`` directly.

Usage:

    from jobfit.utils.config import settings

    print(settings.llm_max_retries)    # typed int, default 3
    print(settings.mock_llm)           # bool, MOCK_LLM=true enables offline mode
"""

from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jobfit.infra.logging_config import configure_logging

# Resolve .env relative to this file so it's always found regardless of cwd
_ENV_FILE = Path(__file__).parent.parent.parent.parent / ".env"


# ---------------------------------------------------------------------------
# Settings: every env var the application reads, with types and defaults
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file.

    pydantic-settings maps ``UPPER_CASE`` env vars to ``lower_case`` fields
    automatically, so ``OPENROUTER_API_KEY`` → ``settings.openrouter_api_key``.
    """

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",          # silently ignore unknown env vars
        case_sensitive=False,
    )

    # --- LLM: provider routing -----------------------------------------------
    #: "openrouter" or "local"
    llm_provider: str = "openrouter"
    #: Offline mode: every structured call returns its validated fallback value
    mock_llm: bool = False

    # --- LLM: OpenRouter -----------------------------------------------------
    openrouter_api_url: str = "https://openrouter.ai/api/v1"
    openrouter_api_key: str = ""
    openrouter_model: str = "anthropic/claude-sonnet-4.5"

    # --- LLM: Local inference (Ollama / llama.cpp / etc.) --------------------
    local_llm_api_url: str = "http://localhost:11434/v1"
    #: API key sent to the local server (most servers accept any non-empty value)
    local_llm_api_key: str = "local"
    local_llm_model: str = "qwen3:14b"

    # --- LLM: call behaviour -------------------------------------------------
    llm_max_retries: int = 3
    #: Seconds; doubles each retry, plus up to 1s of jitter
    llm_base_delay: float = 1.0
    llm_max_tokens: int = 4096
    llm_temperature: float = 0.2
    llm_timeout: float = 120.0

    # --- Cost estimation (USD per million tokens) ----------------------------
    input_cost_per_million: float = 3.0
    output_cost_per_million: float = 15.0

    # --- Storage -------------------------------------------------------------
    cache_dir: Path = Path(".cache")
    cache_ttl_hours: int = 24
    output_dir: Path = Path("output")
    logs_dir: str = "logs"
    #: When set, the content cache lives in Redis instead of ``cache_dir``
    redis_host: Optional[str] = None
    redis_port: int = 6379

    # --- Scraping ------------------------------------------------------------
    scrape_timeout: int = 15
    user_agent: Optional[str] = None

    @field_validator("llm_provider", mode="before")
    @classmethod
    def _normalise_provider(cls, v: str) -> str:
        return (v or "openrouter").strip().lower()


#: Singleton, import this in all consumer modules.
settings = Settings()


def setup_logging(verbose: bool = False) -> str:
    """Send JobFit logs to the console and a per-run file; returns the file path."""
    return configure_logging(
        log_file_prefix="jobfit",
        logs_dir=settings.logs_dir,
        console_level="DEBUG" if verbose else "INFO",
        third_party_levels={
            "openai": "WARNING",
            "httpx": "WARNING",
            "urllib3": "WARNING",
        },
    )
