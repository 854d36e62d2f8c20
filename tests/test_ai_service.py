"""Tests for the provider-agnostic AI service."""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from standup_summary.ai.client import GenerationError
from standup_summary.ai.service import AIService
from standup_summary.ai_models import ModelManager
from standup_summary.models import GenerationResult, ProviderUsage


class RecordingGenerator:
    """Generator that records each request and echoes the prompt back."""

    def __init__(self, usage: ProviderUsage | None = None, delays: dict[str, float] | None = None):
        self.calls: list[dict] = []
        self.usage = usage
        self.delays = delays or {}

    async def generate(self, *, model_id, prompt, temperature, max_output_tokens):
        self.calls.append(
            {
                "model_id": model_id,
                "prompt": prompt,
                "temperature": temperature,
                "max_output_tokens": max_output_tokens,
            }
        )
        await asyncio.sleep(self.delays.get(prompt, 0))
        return GenerationResult(text=f"echo: {prompt}", usage=self.usage)


class TestGenerateResponse:
    """Test AIService.generate_response."""

    def setup_method(self):
        """Set up a service around a recording generator."""
        self.generator = RecordingGenerator(
            usage=ProviderUsage(input_tokens=10, output_tokens=20, total_tokens=30)
        )
        self.service = AIService(self.generator, model="gpt-3.5-turbo", provider="openai")

    @pytest.mark.asyncio
    async def test_prompt_sent_unchanged_without_system_prompt(self):
        """Test the effective prompt equals the prompt when no system prompt is given."""
        await self.service.generate_response("What changed?")
        assert self.generator.calls[0]["prompt"] == "What changed?"

    @pytest.mark.asyncio
    async def test_system_prompt_prepended_with_blank_line(self):
        """Test the system prompt is placed before the prompt with a blank line."""
        await self.service.generate_response("What changed?", "Be brief.")
        assert self.generator.calls[0]["prompt"] == "Be brief.\n\nWhat changed?"

    @pytest.mark.asyncio
    async def test_empty_system_prompt_ignored(self):
        """Test an empty system prompt counts as absent."""
        await self.service.generate_response("What changed?", "")
        assert self.generator.calls[0]["prompt"] == "What changed?"

    @pytest.mark.asyncio
    async def test_default_sampling_parameters(self):
        """Test default temperature, token cap and model are sent upstream."""
        await self.service.generate_response("Hi")
        call = self.generator.calls[0]
        assert call["model_id"] == "gpt-3.5-turbo"
        assert call["temperature"] == 0.7
        assert call["max_output_tokens"] == 1000

    @pytest.mark.asyncio
    async def test_custom_sampling_parameters(self):
        """Test configured sampling parameters are sent upstream."""
        service = AIService(
            self.generator,
            model="gpt-4o",
            provider="openai",
            temperature=0.2,
            max_output_tokens=256,
        )
        await service.generate_response("Hi")
        assert self.generator.calls[0]["temperature"] == 0.2
        assert self.generator.calls[0]["max_output_tokens"] == 256

    @pytest.mark.asyncio
    async def test_usage_mapped(self):
        """Test provider usage maps onto prompt/completion/total."""
        response = await self.service.generate_response("Hi")
        assert response.content == "echo: Hi"
        assert response.usage.prompt_tokens == 10
        assert response.usage.completion_tokens == 20
        assert response.usage.total_tokens == 30

    @pytest.mark.asyncio
    async def test_missing_total_falls_back_to_sum(self):
        """Test total_tokens is prompt + completion when the provider omits it."""
        generator = RecordingGenerator(usage=ProviderUsage(input_tokens=7, output_tokens=8))
        service = AIService(generator, model="gemini-pro", provider="gemini")

        response = await service.generate_response("Hi")

        assert response.usage.total_tokens == 15

    @pytest.mark.asyncio
    async def test_missing_usage_reports_zeros(self):
        """Test a result with no usage at all yields zero counts."""
        service = AIService(RecordingGenerator(usage=None), model="m", provider="openai")

        response = await service.generate_response("Hi")

        assert response.usage.prompt_tokens == 0
        assert response.usage.completion_tokens == 0
        assert response.usage.total_tokens == 0

    @pytest.mark.asyncio
    async def test_upstream_failure_wrapped(self):
        """Test upstream failures surface as GenerationError with the cause kept."""
        generator = Mock()
        cause = TimeoutError("timeout")
        generator.generate = AsyncMock(side_effect=cause)
        service = AIService(generator, model="gpt-3.5-turbo", provider="openai", label="OpenAI")

        with pytest.raises(GenerationError) as exc_info:
            await service.generate_response("Hi")

        assert "Failed to generate response" in str(exc_info.value)
        assert "timeout" in str(exc_info.value)
        assert exc_info.value.__cause__ is cause

    @pytest.mark.asyncio
    async def test_upstream_failure_attempted_once(self):
        """Test a failed call is not retried."""
        generator = Mock()
        generator.generate = AsyncMock(side_effect=RuntimeError("quota exceeded"))
        service = AIService(generator, model="gpt-3.5-turbo", provider="openai")

        with pytest.raises(GenerationError, match="quota exceeded"):
            await service.generate_response("Hi")

        generator.generate.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_concurrent_calls_do_not_interfere(self):
        """Test concurrent calls on one instance each get their own content."""
        generator = RecordingGenerator(delays={"first": 0.05, "second": 0.0, "third": 0.02})
        service = AIService(generator, model="gpt-3.5-turbo", provider="openai")

        responses = await asyncio.gather(
            service.generate_response("first"),
            service.generate_response("second"),
            service.generate_response("third"),
        )

        assert [r.content for r in responses] == [
            "echo: first",
            "echo: second",
            "echo: third",
        ]


class TestSummarizeCommits:
    """Test AIService.summarize_commits."""

    @pytest.mark.asyncio
    async def test_summarize_returns_content_only(self):
        """Test the summary prompt embeds commits and only content is returned."""
        generator = RecordingGenerator(
            usage=ProviderUsage(input_tokens=1, output_tokens=1, total_tokens=2)
        )
        service = AIService(generator, model="gpt-3.5-turbo", provider="openai")

        summary = await service.summarize_commits(["fix: bug A", "feat: add B"])

        sent = generator.calls[0]["prompt"]
        assert sent.startswith("You are an expert at summarizing software development progress")
        assert "meetings. Create concise" in sent
        assert "fix: bug A\nfeat: add B" in sent
        assert isinstance(summary, str)
        assert summary == f"echo: {sent}"

    @pytest.mark.asyncio
    async def test_summarize_propagates_generation_error(self):
        """Test summary failures reach the caller."""
        generator = Mock()
        generator.generate = AsyncMock(side_effect=ConnectionError("network down"))
        service = AIService(generator, model="gemini-pro", provider="gemini")

        with pytest.raises(GenerationError, match="network down"):
            await service.summarize_commits(["fix: bug A"])


class TestEstimateCost:
    """Test cost estimation."""

    def test_known_model_priced_from_catalog(self):
        """Test a catalog model gets a computed price."""
        service = AIService(
            RecordingGenerator(),
            model="gpt-3.5-turbo",
            provider="openai",
            model_manager=ModelManager(),
        )

        cost_info = service.estimate_cost("x" * 400)

        assert cost_info["estimated_input_tokens"] == 100
        assert cost_info["estimated_output_tokens"] == 1000
        assert cost_info["estimated_cost_usd"] == pytest.approx(0.00155)
        assert cost_info["model"] == "gpt-3.5-turbo"
        assert cost_info["provider"] == "openai"

    def test_unknown_model_uses_default_cost(self):
        """Test an unknown model falls back to a small default cost."""
        service = AIService(
            RecordingGenerator(),
            model="my-fine-tune",
            provider="openai",
            model_manager=ModelManager(),
        )

        assert service.estimate_cost("hello")["estimated_cost_usd"] == 0.01

    def test_summary_cost_includes_commits(self):
        """Test the summary estimate grows with the commit list."""
        service = AIService(
            RecordingGenerator(), model="gemini-pro", provider="gemini", model_manager=ModelManager()
        )

        short = service.estimate_summary_cost(["fix: a"])
        long = service.estimate_summary_cost(["fix: a"] * 50)

        assert long["estimated_input_tokens"] > short["estimated_input_tokens"]
