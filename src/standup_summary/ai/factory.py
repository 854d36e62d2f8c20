"""Factory for building an ``AIService`` from a provider tag."""

import logging
from enum import Enum

from standup_summary.ai.client import (
    ConfigurationError,
    GeminiGenerator,
    LiteLLMGenerator,
    OpenAIGenerator,
    UnsupportedProviderError,
)
from standup_summary.ai.service import AIService
from standup_summary.ai_models import ModelManager, default_model_manager
from standup_summary.models import AIServiceConfig

logger = logging.getLogger(__name__)


class AIProvider(Enum):
    """Supported AI providers."""

    OPENAI = "openai"
    GEMINI = "gemini"


# Used when the model catalog has no default for a provider
DEFAULT_MODELS = {
    AIProvider.OPENAI: "gpt-3.5-turbo",
    AIProvider.GEMINI: "gemini-pro",
}

_GENERATORS: dict[AIProvider, type[LiteLLMGenerator]] = {
    AIProvider.OPENAI: OpenAIGenerator,
    AIProvider.GEMINI: GeminiGenerator,
}

_LABELS = {
    AIProvider.OPENAI: "OpenAI",
    AIProvider.GEMINI: "Gemini",
}


def parse_provider(provider: AIProvider | str) -> AIProvider:
    """Resolve a provider tag to an ``AIProvider``.

    Raises:
        UnsupportedProviderError: If the tag is not a supported provider
    """
    if isinstance(provider, AIProvider):
        return provider
    try:
        return AIProvider(provider)
    except ValueError:
        raise UnsupportedProviderError(f"Unsupported AI provider: {provider}") from None


def create_ai_service(
    provider: AIProvider | str,
    config: AIServiceConfig,
    model_manager: ModelManager | None = None,
) -> AIService:
    """Build a fresh AI service for the given provider.

    Args:
        provider: "openai" or "gemini"
        config: API key, optional model and sampling settings
        model_manager: Model catalog for defaults and cost estimates

    Returns:
        A new ``AIService`` bound to the provider

    Raises:
        UnsupportedProviderError: If the provider is not supported
        ConfigurationError: If the API key is missing or empty
    """
    selected = parse_provider(provider)

    if not config.api_key:
        raise ConfigurationError(f"API key is required for {_LABELS[selected]}Service.")

    manager = model_manager or default_model_manager()
    model = (
        config.model
        or manager.get_default_model(selected.value)
        or DEFAULT_MODELS[selected]
    )

    logger.debug(f"Creating {selected.value} service with model {model}")
    return AIService(
        generator=_GENERATORS[selected](api_key=config.api_key),
        model=model,
        provider=selected.value,
        temperature=config.temperature,
        max_output_tokens=config.max_output_tokens,
        label=_LABELS[selected],
        model_manager=manager,
    )
