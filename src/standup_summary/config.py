"""Configuration management for standup-summary."""

import json
import logging
import os
from pathlib import Path
from typing import Any

from rich import print

from standup_summary.ai_models import default_model_manager

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("openai", "gemini")


class Config:
    """Manage standup-summary configuration and API key storage."""

    def __init__(self) -> None:
        """Initialize config with default paths."""
        self.config_dir = Path.home() / ".standup-summary"
        self.config_file = self.config_dir / "config.json"
        self._ensure_config_dir()

    def _ensure_config_dir(self) -> None:
        """Create config directory if it doesn't exist."""
        self.config_dir.mkdir(exist_ok=True)
        # Set restrictive permissions on the config directory
        self.config_dir.chmod(0o700)

    def _load_config(self) -> dict[str, Any]:
        """Load existing config or return empty dict."""
        if not self.config_file.exists():
            return {}

        try:
            with self.config_file.open() as f:
                return json.load(f)  # type: ignore[no-any-return]
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Ignoring unreadable config file {self.config_file}: {e}")
            return {}

    def _save_config(self, config_data: dict[str, Any]) -> None:
        if not config_data:
            self.config_file.unlink(missing_ok=True)
            return

        with self.config_file.open("w") as f:
            json.dump(config_data, f, indent=2)

        # Set restrictive permissions on the config file
        self.config_file.chmod(0o600)

    def get_ai_api_key(self, provider: str) -> str | None:
        """Get the stored API key for a provider.

        Returns:
            API key if stored, None otherwise
        """
        keys: dict[str, str] = self._load_config().get("ai_api_keys", {})
        return keys.get(provider.lower())

    def set_ai_api_key(self, provider: str, api_key: str) -> None:
        """Store an API key for a provider.

        Args:
            provider: Provider name ("openai" or "gemini")
            api_key: API key to store
        """
        provider = provider.lower()
        if provider not in SUPPORTED_PROVIDERS:
            raise ValueError(f"Unsupported AI provider: {provider}")

        config_data = self._load_config()
        config_data.setdefault("ai_api_keys", {})[provider] = api_key
        self._save_config(config_data)
        print(f"[green]✓[/green] {provider.title()} API key stored securely in {self.config_file}")

    def remove_ai_api_key(self, provider: str) -> None:
        """Remove the stored API key for a provider."""
        provider = provider.lower()
        config_data = self._load_config()
        keys = config_data.get("ai_api_keys", {})

        if provider not in keys:
            print(f"[yellow]No {provider} API key is currently stored[/yellow]")
            return

        del keys[provider]
        if not keys:
            config_data.pop("ai_api_keys")
        self._save_config(config_data)
        print(f"[green]✓[/green] {provider.title()} API key removed from local storage")

    def list_ai_api_keys(self) -> dict[str, bool]:
        """Report which providers have a stored API key."""
        keys = self._load_config().get("ai_api_keys", {})
        return {provider: bool(keys.get(provider)) for provider in SUPPORTED_PROVIDERS}

    def resolve_ai_api_key(self, provider: str) -> str | None:
        """Find an API key for a provider, environment first, then local storage.

        Returns:
            API key if one is available, None otherwise
        """
        provider = provider.lower()
        # The catalog lists env vars in priority order
        for env_var in default_model_manager().get_api_key_envs(provider):
            value = os.getenv(env_var)
            if value:
                logger.debug(f"Using {provider} API key from {env_var}")
                return value

        return self.get_ai_api_key(provider)

    def get_config_info(self) -> dict[str, Any]:
        """Get information about current configuration.

        Returns:
            Dictionary with config status information
        """
        config_exists = self.config_file.exists()

        return {
            "config_file": str(self.config_file),
            "config_exists": config_exists,
            "ai_api_keys": self.list_ai_api_keys(),
            "config_dir_permissions": oct(self.config_dir.stat().st_mode)[-3:]
            if self.config_dir.exists()
            else None,
            "config_file_permissions": oct(self.config_file.stat().st_mode)[-3:]
            if config_exists
            else None,
        }
