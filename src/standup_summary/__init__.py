"""Standup Summary - turn commit messages into a daily standup update with an LLM.

Library API for external projects:

    import asyncio

    from standup_summary import AIServiceConfig, create_ai_service

    service = create_ai_service("openai", AIServiceConfig(api_key="sk-..."))

    # Free-form generation
    response = asyncio.run(service.generate_response("Explain this diff", "Be brief"))
    print(response.content, response.usage)

    # Standup summary
    summary = asyncio.run(service.summarize_commits(["fix: bug A", "feat: add B"]))
"""

__version__ = "0.1.0"

from standup_summary.ai import (
    AIProvider,
    AIService,
    AIServiceError,
    ConfigurationError,
    GenerationError,
    UnsupportedProviderError,
    create_ai_service,
)
from standup_summary.config import Config
from standup_summary.models import AIResponse, AIServiceConfig, TokenUsage

__all__ = [
    # Core API
    "create_ai_service",
    "AIService",
    "AIProvider",
    "AIServiceConfig",
    "AIResponse",
    "TokenUsage",
    # Exceptions
    "AIServiceError",
    "ConfigurationError",
    "UnsupportedProviderError",
    "GenerationError",
    # Local key storage
    "Config",
    # Metadata
    "__version__",
]
