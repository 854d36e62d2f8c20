"""Pydantic models for AI service configuration and responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AIServiceConfig(BaseModel):
    """Configuration for an AI service.

    Immutable once built. ``model`` falls back to the provider's default
    model when left unset.
    """

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    api_key: str
    model: str | None = None
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_output_tokens: int = Field(default=1000, ge=1)


class TokenUsage(BaseModel):
    """Token accounting for a single generation."""

    prompt_tokens: int = Field(default=0, ge=0)
    completion_tokens: int = Field(default=0, ge=0)
    total_tokens: int = Field(default=0, ge=0)

    @model_validator(mode="before")
    @classmethod
    def default_total_tokens(cls, data: Any) -> Any:
        """Fill ``total_tokens`` from prompt + completion when it is missing."""
        if isinstance(data, dict) and data.get("total_tokens") is None:
            data = dict(data)
            data["total_tokens"] = (data.get("prompt_tokens") or 0) + (
                data.get("completion_tokens") or 0
            )
        return data


class AIResponse(BaseModel):
    """Generated text plus optional usage accounting."""

    content: str
    usage: TokenUsage | None = None


class ProviderUsage(BaseModel):
    """Usage figures as reported by the upstream provider, any of which may be absent."""

    input_tokens: int | None = None
    output_tokens: int | None = None
    total_tokens: int | None = None


class GenerationResult(BaseModel):
    """Raw result of one upstream text-generation call."""

    text: str
    usage: ProviderUsage | None = None
