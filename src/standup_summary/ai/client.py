"""LiteLLM-backed provider clients for standup-summary.

Each provider client turns an API key into a text-generation capability
matching the ``TextGenerator`` protocol. The service layer only ever sees
that protocol, so adding a provider means adding one small adapter here.
"""

import logging
from typing import Any, Protocol

import litellm
from litellm import acompletion

from standup_summary.models import GenerationResult, ProviderUsage

logger = logging.getLogger(__name__)


class AIServiceError(Exception):
    """Base exception for AI service errors."""


class ConfigurationError(AIServiceError):
    """Raised when a service cannot be built from the given configuration."""


class UnsupportedProviderError(ConfigurationError):
    """Raised when the requested provider is not supported."""


class GenerationError(AIServiceError):
    """Raised when the upstream provider fails to generate a response."""


class LLMResponseError(AIServiceError):
    """Raised when the provider returns a response we cannot use."""


class TextGenerator(Protocol):
    """Upstream text-generation capability used by ``AIService``."""

    async def generate(
        self,
        *,
        model_id: str,
        prompt: str,
        temperature: float,
        max_output_tokens: int,
    ) -> GenerationResult:
        """Generate text for a single prompt."""
        ...


class LiteLLMGenerator:
    """Text generator that routes a prompt through ``litellm.acompletion``.

    Subclasses pick the provider by setting ``provider_prefix``; the model
    sent to LiteLLM is ``"<provider_prefix>/<model_id>"``.
    """

    provider_prefix: str = ""

    def __init__(self, api_key: str):
        """Initialize the generator.

        Args:
            api_key: Provider API key, passed through on every request
        """
        self.api_key = api_key

        litellm.drop_params = True  # Drop unsupported parameters gracefully

    def _litellm_model(self, model_id: str) -> str:
        if not self.provider_prefix or model_id.startswith(f"{self.provider_prefix}/"):
            return model_id
        return f"{self.provider_prefix}/{model_id}"

    async def generate(
        self,
        *,
        model_id: str,
        prompt: str,
        temperature: float,
        max_output_tokens: int,
    ) -> GenerationResult:
        """Send one prompt to the provider.

        Args:
            model_id: Provider model identifier (e.g. "gpt-3.5-turbo")
            prompt: Full prompt text, sent as a single user message
            temperature: Sampling temperature
            max_output_tokens: Cap on generated tokens

        Returns:
            Generated text and whatever usage the provider reported

        Raises:
            LLMResponseError: If the response has no choices or message
        """
        model = self._litellm_model(model_id)
        logger.debug(f"Requesting completion from {model} ({len(prompt)} chars)")

        response = await acompletion(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
            max_tokens=max_output_tokens,
            api_key=self.api_key,
        )

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError) as e:
            raise LLMResponseError(f"Malformed response from {model}: {e}") from e
        if not content:
            # Filtered or blocked replies come back without text
            logger.warning(f"Empty response from {model}")
            content = ""

        return GenerationResult(
            text=str(content), usage=self._extract_usage(response)
        )

    @staticmethod
    def _extract_usage(response: Any) -> ProviderUsage | None:
        usage = getattr(response, "usage", None)
        if usage is None:
            return None

        def _count(name: str) -> int | None:
            value = getattr(usage, name, None)
            return value if isinstance(value, int) else None

        return ProviderUsage(
            input_tokens=_count("prompt_tokens"),
            output_tokens=_count("completion_tokens"),
            total_tokens=_count("total_tokens"),
        )


class OpenAIGenerator(LiteLLMGenerator):
    """OpenAI chat completions via LiteLLM."""

    provider_prefix = "openai"


class GeminiGenerator(LiteLLMGenerator):
    """Google Gemini via LiteLLM's Google AI Studio route."""

    provider_prefix = "gemini"
