"""Resilient async LLM client for structured (JSON) output.

Architecture:
    LLMClient  -- one OpenAI-compatible endpoint (OpenRouter or a local server),
                  structured() = call -> extract JSON -> validate -> retry

Factory:
    create_llm_client(provider, model) -> LLMClient

Every client owns its usage log. Two clients never see each other's token
counts, so concurrent runs stay isolated.
"""

import asyncio
import json
import random
import time
from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar

import openai
from loguru import logger
from openai import AsyncOpenAI
from pydantic import BaseModel, ValidationError

from jobfit.infra.json_repair import repair_json
from jobfit.utils.config import settings


T = TypeVar("T", bound=BaseModel)

# Schema failures stop being retried once this many attempts have been spent
_SCHEMA_FATAL_ATTEMPT = 2
_JITTER_MAX_SECONDS = 1.0

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful assistant that always responds with valid JSON matching "
    "the requested schema. Do not include any text outside the JSON object."
)


class LLMClientError(Exception):
    """Raised on LLM API errors (network, empty responses, bad configuration)."""
    pass


class LLMConfigurationError(LLMClientError):
    """Missing or invalid client configuration. Never retried."""
    pass


class LLMAuthenticationError(LLMClientError):
    """The endpoint rejected the API key (HTTP 401). Never retried."""
    pass


class SchemaValidationError(LLMClientError):
    """The model kept returning JSON that does not match the schema.

    ``violations`` holds one ``(field_path, message)`` pair per failing field.
    """

    def __init__(self, violations: List[Tuple[str, str]]) -> None:
        self.violations = violations
        details = ", ".join(f"{path}: {message}" for path, message in violations)
        super().__init__(f"Schema validation failed after retries: {details}")


# ---------------------------------------------------------------------------
# Result / usage records
# ---------------------------------------------------------------------------

@dataclass
class TokenUsage:
    input_tokens: int = 0
    output_tokens: int = 0


@dataclass
class TokenUsageSummary:
    total_input_tokens: int = 0
    total_output_tokens: int = 0
    total_calls: int = 0
    estimated_cost: float = 0.0

    def as_dict(self) -> Dict[str, Any]:
        return {
            "total_input_tokens": self.total_input_tokens,
            "total_output_tokens": self.total_output_tokens,
            "total_calls": self.total_calls,
            "estimated_cost": self.estimated_cost,
        }


@dataclass
class LLMCallResult(Generic[T]):
    data: T
    usage: TokenUsage
    model: str
    duration_ms: int


def schema_violations(error: ValidationError) -> List[Tuple[str, str]]:
    """Flatten a pydantic ValidationError into (dotted field path, message) pairs."""
    return [
        (".".join(str(part) for part in item["loc"]), item["msg"])
        for item in error.errors()
    ]


async def _sleep_with_jitter(base_delay: float, attempt: int) -> None:
    delay = base_delay * (2 ** attempt) + random.uniform(0, _JITTER_MAX_SECONDS)
    await asyncio.sleep(delay)


def _is_auth_error(e: Exception) -> bool:
    return isinstance(e, openai.AuthenticationError) or getattr(e, "status_code", None) == 401


def _response_text(response: Any) -> str:
    choices = getattr(response, "choices", None) or []
    content = choices[0].message.content if choices else None
    if not content:
        raise LLMClientError("No text content in LLM response")
    return content


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class LLMClient:
    """Calls an OpenAI-compatible chat endpoint and validates JSON replies.

    Defaults come from ``settings`` (see ``jobfit.utils.config``). In mock mode
    no HTTP client is created and ``structured()`` returns its fallback value.
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_retries: Optional[int] = None,
        base_delay: Optional[float] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        mock_mode: Optional[bool] = None,
        require_api_key: bool = True,
        timeout: Optional[float] = None,
    ) -> None:
        self.api_url = api_url or settings.openrouter_api_url
        self.api_key = api_key if api_key is not None else settings.openrouter_api_key
        self.model = model or settings.openrouter_model
        self.max_retries = max_retries if max_retries is not None else settings.llm_max_retries
        self.base_delay = base_delay if base_delay is not None else settings.llm_base_delay
        self.max_tokens = max_tokens or settings.llm_max_tokens
        self.temperature = temperature if temperature is not None else settings.llm_temperature
        self.mock_mode = mock_mode if mock_mode is not None else settings.mock_llm
        self._usage_log: List[TokenUsage] = []

        if self.mock_mode:
            logger.info("Running in MOCK mode (no API calls)")
            self._client: Optional[AsyncOpenAI] = None
            return

        if require_api_key and not self.api_key:
            raise LLMConfigurationError(
                "OPENROUTER_API_KEY is not set. Add it to your .env file or set MOCK_LLM=true."
            )

        self._client = AsyncOpenAI(
            base_url=self.api_url,
            api_key=self.api_key or "local",
            timeout=timeout or settings.llm_timeout,
            max_retries=0,  # retries are ours, see structured()
        )

    # -- usage ---------------------------------------------------------------

    def record_usage(self, input_tokens: int, output_tokens: int) -> TokenUsage:
        usage = TokenUsage(input_tokens=input_tokens, output_tokens=output_tokens)
        self._usage_log.append(usage)
        return usage

    def get_usage_summary(self) -> TokenUsageSummary:
        """Reduce this client's usage log into totals and an estimated USD cost."""
        summary = TokenUsageSummary(
            total_input_tokens=sum(u.input_tokens for u in self._usage_log),
            total_output_tokens=sum(u.output_tokens for u in self._usage_log),
            total_calls=len(self._usage_log),
        )
        summary.estimated_cost = (
            summary.total_input_tokens / 1_000_000 * settings.input_cost_per_million
            + summary.total_output_tokens / 1_000_000 * settings.output_cost_per_million
        )
        return summary

    def _record_response_usage(self, response: Any) -> TokenUsage:
        usage = getattr(response, "usage", None)
        if usage is None:
            return TokenUsage()
        return self.record_usage(usage.prompt_tokens or 0, usage.completion_tokens or 0)

    # -- error classification -------------------------------------------------

    def _handle_error(self, e: Exception, attempt: int, context_str: str) -> None:
        """Raise if ``e`` is fatal, otherwise log it so the caller retries."""
        if _is_auth_error(e):
            logger.error(f"LLM authentication failed{context_str}: {e}")
            raise LLMAuthenticationError(
                "Invalid API key. Check your OPENROUTER_API_KEY."
            ) from e

        if isinstance(e, ValidationError) and attempt >= _SCHEMA_FATAL_ATTEMPT:
            violations = schema_violations(e)
            logger.error(f"LLM schema validation failed{context_str}: {violations}")
            raise SchemaValidationError(violations) from e

        logger.warning(
            f"LLM attempt {attempt + 1}/{self.max_retries + 1} failed{context_str}: "
            f"{str(e)[:200]}"
        )

    # -- calls ---------------------------------------------------------------

    async def structured(
        self,
        prompt: str,
        schema: Type[T],
        system_prompt: Optional[str] = None,
        fallback: Any = None,
        context: Optional[str] = None,
    ) -> LLMCallResult[T]:
        """Send a prompt and parse the reply into a validated ``schema`` instance.

        Args:
            prompt: User message.
            schema: Pydantic model class the JSON reply must satisfy.
            system_prompt: System message; defaults to a JSON-only instruction.
            fallback: Value returned (after validation) in mock mode.
            context: Optional label for log messages.

        Returns:
            LLMCallResult with the validated model, this call's usage and timing.

        Raises:
            LLMAuthenticationError: The API key was rejected.
            SchemaValidationError: Replies kept violating the schema.
            Exception: The last transport/parse error once retries run out.
        """
        context_str = f" [{context}]" if context else ""
        started = time.monotonic()

        if self.mock_mode:
            if fallback is None:
                raise LLMClientError(f"Mock mode requires a fallback value{context_str}")
            data = schema.model_validate(fallback)
            return LLMCallResult(
                data=data,
                usage=TokenUsage(),
                model=f"{self.model} (mock)",
                duration_ms=int((time.monotonic() - started) * 1000),
            )

        messages = [
            {"role": "system", "content": system_prompt or DEFAULT_SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]
        logger.debug(f"LLM_STRUCTURED{context_str}:\n{'-'*60}\n{prompt[:500]}\n{'-'*60}")

        last_error: Optional[Exception] = None
        for attempt in range(self.max_retries + 1):
            if attempt > 0:
                logger.info(f"Retry attempt {attempt}/{self.max_retries}{context_str}")
                await _sleep_with_jitter(self.base_delay, attempt)

            attempt_started = time.monotonic()
            try:
                response = await self._client.chat.completions.create(
                    model=self.model,
                    messages=messages,
                    temperature=self.temperature,
                    max_tokens=self.max_tokens,
                )
                usage = self._record_response_usage(response)
                raw = json.loads(repair_json(_response_text(response)))
                data = schema.model_validate(raw)
                return LLMCallResult(
                    data=data,
                    usage=usage,
                    model=self.model,
                    duration_ms=int((time.monotonic() - attempt_started) * 1000),
                )
            except Exception as e:
                last_error = e
                self._handle_error(e, attempt, context_str)

        raise last_error


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

def create_llm_client(
    provider: Optional[str] = None,
    model: Optional[str] = None,
    **kwargs: Any,
) -> LLMClient:
    """Instantiate a client for a provider name.

    Args:
        provider: "openrouter" or "local". Defaults to ``settings.llm_provider``.
        model: Optional model override. Uses provider-specific defaults when None.
        **kwargs: Passed through to ``LLMClient`` (max_retries, mock_mode, ...).

    Returns:
        A configured LLMClient.
    """
    provider = (provider or settings.llm_provider).lower()

    if provider == "local":
        client = LLMClient(
            api_url=settings.local_llm_api_url,
            api_key=settings.local_llm_api_key,
            model=model or settings.local_llm_model,
            require_api_key=False,
            **kwargs,
        )
        logger.info(f"LLM client: local {client.api_url} | model={client.model}")
        return client
    if provider == "openrouter":
        return LLMClient(
            api_url=settings.openrouter_api_url,
            api_key=settings.openrouter_api_key,
            model=model or settings.openrouter_model,
            **kwargs,
        )

    raise LLMConfigurationError(
        f"Unknown LLM provider '{provider}'. Supported values: 'openrouter', 'local'."
    )
