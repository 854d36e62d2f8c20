"""AI integration module for standup-summary.

This module provides a provider-agnostic AI service backed by LiteLLM,
a factory that picks the provider, and the standup persona used to turn
commit messages into a daily update.
"""

from .client import (
    AIServiceError,
    ConfigurationError,
    GeminiGenerator,
    GenerationError,
    LiteLLMGenerator,
    LLMResponseError,
    OpenAIGenerator,
    TextGenerator,
    UnsupportedProviderError,
)
from .factory import AIProvider, create_ai_service
from .personas import BasePersona, StandupPersona
from .service import AIService

__all__ = [
    "AIService",
    "AIProvider",
    "create_ai_service",
    "TextGenerator",
    "LiteLLMGenerator",
    "OpenAIGenerator",
    "GeminiGenerator",
    "BasePersona",
    "StandupPersona",
    "AIServiceError",
    "ConfigurationError",
    "UnsupportedProviderError",
    "GenerationError",
    "LLMResponseError",
]
