"""Provider-agnostic AI service.

``AIService`` wraps any ``TextGenerator`` and exposes the two operations
callers use: free-form generation and commit-to-standup summaries.
"""

import logging
from collections.abc import Sequence
from typing import Any

from standup_summary.ai.client import GenerationError, TextGenerator
from standup_summary.ai.personas import BasePersona, StandupPersona
from standup_summary.ai_models import ModelManager, default_model_manager
from standup_summary.models import AIResponse, GenerationResult, TokenUsage

logger = logging.getLogger(__name__)


class AIService:
    """Text generation and commit summaries on top of one provider."""

    def __init__(
        self,
        generator: TextGenerator,
        model: str,
        provider: str,
        temperature: float = 0.7,
        max_output_tokens: int = 1000,
        label: str | None = None,
        persona: BasePersona | None = None,
        model_manager: ModelManager | None = None,
    ):
        """Initialize the service.

        Args:
            generator: Upstream text-generation capability
            model: Model identifier passed to the generator
            provider: Provider name this service talks to
            temperature: Sampling temperature for every request
            max_output_tokens: Cap on generated tokens for every request
            label: Name used in log messages (defaults to the provider)
            persona: Persona used by ``summarize_commits``
            model_manager: Model catalog used for cost estimates
        """
        self._generator = generator
        self._model = model
        self._provider = provider
        self._temperature = temperature
        self._max_output_tokens = max_output_tokens
        self._label = label or provider
        self._persona = persona or StandupPersona()
        self._model_manager = model_manager

        logger.info(f"Initialized {self._label} service with model: {model}")

    @property
    def provider(self) -> str:
        return self._provider

    @property
    def model(self) -> str:
        return self._model

    @property
    def temperature(self) -> float:
        return self._temperature

    @property
    def max_output_tokens(self) -> int:
        return self._max_output_tokens

    @staticmethod
    def build_prompt(prompt: str, system_prompt: str | None = None) -> str:
        """Merge an optional system prompt in front of the user prompt."""
        return f"{system_prompt}\n\n{prompt}" if system_prompt else prompt

    async def generate_response(
        self, prompt: str, system_prompt: str | None = None
    ) -> AIResponse:
        """Generate a response for a prompt.

        Args:
            prompt: User prompt
            system_prompt: Optional instruction placed before the prompt

        Returns:
            Generated content with token usage

        Raises:
            GenerationError: If the upstream call fails for any reason
        """
        merged_prompt = self.build_prompt(prompt, system_prompt)

        try:
            result = await self._generator.generate(
                model_id=self._model,
                prompt=merged_prompt,
                temperature=self._temperature,
                max_output_tokens=self._max_output_tokens,
            )
        except Exception as e:
            logger.error(f"{self._label} Service Error: {e}")
            raise GenerationError(f"Failed to generate response: {e}") from e

        logger.debug(
            f"{self._label} generated {len(result.text)} chars with {self._model}"
        )
        return AIResponse(content=result.text, usage=self._map_usage(result))

    async def summarize_commits(self, commits: Sequence[str]) -> str:
        """Summarize commit messages into a daily standup update.

        Args:
            commits: Commit messages, one per entry

        Returns:
            The generated summary text
        """
        prompt = self._persona.get_summary_instructions(commits)
        system_prompt = self._persona.get_system_prompt()

        logger.info(f"Summarizing {len(commits)} commits with {self._label}")
        response = await self.generate_response(prompt, system_prompt)
        return response.content

    def estimate_cost(
        self, prompt: str, system_prompt: str | None = None
    ) -> dict[str, Any]:
        """Estimate the cost of one ``generate_response`` call.

        Returns:
            Dict with token estimates and cost in USD
        """
        merged_prompt = self.build_prompt(prompt, system_prompt)
        estimated_input_tokens = len(merged_prompt) // 4  # ~4 chars per token
        estimated_output_tokens = self._max_output_tokens

        manager = self._model_manager or default_model_manager()
        try:
            cost_info = manager.estimate_cost(
                self._model, estimated_input_tokens, estimated_output_tokens
            )
            cost = cost_info["total_cost"]
        except ValueError:
            logger.debug(f"No pricing for {self._model}, using default estimate")
            cost = 0.01

        return {
            "estimated_input_tokens": estimated_input_tokens,
            "estimated_output_tokens": estimated_output_tokens,
            "estimated_cost_usd": cost,
            "model": self._model,
            "provider": self._provider,
            "currency": "USD",
        }

    def estimate_summary_cost(self, commits: Sequence[str]) -> dict[str, Any]:
        """Estimate the cost of ``summarize_commits`` for these commits."""
        return self.estimate_cost(
            self._persona.get_summary_instructions(commits),
            self._persona.get_system_prompt(),
        )

    @staticmethod
    def _map_usage(result: GenerationResult) -> TokenUsage:
        usage = result.usage
        if usage is None:
            return TokenUsage()
        return TokenUsage(
            prompt_tokens=usage.input_tokens or 0,
            completion_tokens=usage.output_tokens or 0,
            total_tokens=usage.total_tokens,
        )

    def __repr__(self) -> str:
        return f"<AIService(provider='{self._provider}', model='{self._model}')>"
