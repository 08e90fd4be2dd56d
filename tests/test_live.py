"""Live prompt tests against OpenRouter.

Deselected by default (``-m 'not live'``); run with ``pytest -m live``.
Requires OPENROUTER_API_KEY.
"""

import pytest

from jobfit.agent.orchestrator import run_orchestrator
from jobfit.agent.prompts import JD_PARSER_SYSTEM, build_jd_parser_prompt
from jobfit.infra.llm_client import LLMClient
from jobfit.infra.models import ParsedJD

JD_TEXT = """
Senior Backend Engineer, Payments (Globex Corporation)

We're looking for a senior engineer with 5+ years of Python and PostgreSQL
experience to build our payment ledger. Kafka and Kubernetes experience is a
plus. You'll own services end to end and mentor two junior engineers.
Salary: $180k-$210k.
"""

RESUME_TEXT = """
Jane Doe, Backend Engineer

- 6 years building Python services (Django, FastAPI) on PostgreSQL
- Built an event-sourced billing system on Kafka processing 2M events/day
- Ran services on Kubernetes (EKS); on-call lead for the billing team
B.S. Computer Science, 2018
"""


@pytest.mark.live
class TestLiveParsing:
    @pytest.mark.asyncio
    async def test_parses_company_and_role(self, live_llm_client: LLMClient) -> None:
        result = await live_llm_client.structured(
            build_jd_parser_prompt(JD_TEXT), ParsedJD, system_prompt=JD_PARSER_SYSTEM
        )

        assert "globex" in result.data.company.lower()
        assert any("python" in s.name.lower() for s in result.data.required_skills), (
            f"Expected Python among required skills, got {result.data.required_skills}"
        )
        assert result.usage.input_tokens > 0


@pytest.mark.live
class TestLivePipeline:
    @pytest.mark.asyncio
    async def test_full_run_reaches_done(self, live_llm_client: LLMClient) -> None:
        result = await run_orchestrator(JD_TEXT, RESUME_TEXT, live_llm_client)

        assert result.success, f"Run failed: {result.context.errors}"
        assert result.context.outputs.cover_letter
        assert result.token_usage.total_calls >= 6
