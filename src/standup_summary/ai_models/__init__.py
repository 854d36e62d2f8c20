"""AI model catalog for standup-summary.

The ``ModelManager`` reads the built-in YAML files (one per provider) that
describe which models each provider offers, which one to use by default,
and what they cost.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

BUILT_IN_DIR = Path(__file__).parent / "built_in"

VALID_TIERS = ("free", "low", "medium", "high")


@dataclass
class AIModel:
    """AI model metadata."""

    name: str
    display_name: str
    provider: str
    description: str
    context_limit: int
    input_cost_per_1k: float
    output_cost_per_1k: float
    tier: str


@dataclass
class ProviderCatalog:
    """Models offered by one provider."""

    name: str
    api_key_envs: list[str]
    default_model: str | None
    models: list[AIModel]


class ModelManager:
    """Look up model metadata, provider defaults and pricing."""

    def __init__(self, models_dir: Path | None = None) -> None:
        """Initialize the manager.

        Args:
            models_dir: Directory of provider YAML files (defaults to the built-in set)
        """
        self._providers: dict[str, ProviderCatalog] = {}
        self._models: dict[str, AIModel] = {}
        self._load_directory(models_dir or BUILT_IN_DIR)

    def _load_directory(self, models_dir: Path) -> None:
        if not models_dir.exists():
            logger.warning(f"Model catalog directory not found: {models_dir}")
            return

        for yaml_file in sorted(models_dir.glob("*.yaml")):
            self._load_provider_file(yaml_file)

    def _load_provider_file(self, yaml_file: Path) -> None:
        try:
            with open(yaml_file, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Invalid YAML syntax in {yaml_file}: {e}")
            return
        except OSError as e:
            logger.error(f"Cannot read model file {yaml_file}: {e}")
            return

        if not isinstance(data, dict) or not self._validate_provider(data, yaml_file):
            return

        provider_name = str(data["provider"]).lower()
        models = []
        for index, entry in enumerate(data["models"]):
            if not self._validate_model(entry, yaml_file, index):
                continue
            model = AIModel(
                name=entry["name"],
                display_name=entry.get("display_name", entry["name"]),
                provider=provider_name,
                description=entry["description"],
                context_limit=int(entry["context_limit"]),
                input_cost_per_1k=float(entry["pricing"]["input_per_1k"]),
                output_cost_per_1k=float(entry["pricing"]["output_per_1k"]),
                tier=entry["tier"].lower(),
            )
            models.append(model)
            self._models[model.name] = model

        if not models:
            logger.warning(f"No valid models found in {yaml_file}")
            return

        self._providers[provider_name] = ProviderCatalog(
            name=provider_name,
            api_key_envs=self._env_var_list(data["api_key_env"]),
            default_model=data.get("default_model"),
            models=models,
        )
        logger.debug(f"Loaded {len(models)} models for {provider_name}")

    def _validate_provider(self, data: dict[str, Any], file_path: Path) -> bool:
        for required in ("provider", "api_key_env", "models"):
            if required not in data:
                logger.error(f"Provider file {file_path} missing required field '{required}'")
                return False

        if not isinstance(data["models"], list):
            logger.error(f"Provider file {file_path}: 'models' must be a list")
            return False

        env_vars = data["api_key_env"]
        if not isinstance(env_vars, (str, list)) or not self._env_var_list(env_vars):
            logger.error(f"Provider file {file_path}: 'api_key_env' must be a name or list of names")
            return False

        return True

    @staticmethod
    def _env_var_list(value: Any) -> list[str]:
        names = [value] if isinstance(value, str) else value
        return [str(name) for name in names if name]

    def _validate_model(self, entry: Any, file_path: Path, index: int) -> bool:
        if not isinstance(entry, dict):
            logger.error(f"Model {index} in {file_path} is not a mapping")
            return False

        for required in ("name", "description", "context_limit", "pricing", "tier"):
            if required not in entry:
                logger.error(f"Model {index} in {file_path} missing required field '{required}'")
                return False

        name = entry["name"]
        pricing = entry["pricing"]
        try:
            if int(entry["context_limit"]) <= 0:
                logger.error(f"Model {name} in {file_path} has invalid context_limit")
                return False
            if float(pricing["input_per_1k"]) < 0 or float(pricing["output_per_1k"]) < 0:
                logger.error(f"Model {name} in {file_path} has negative pricing")
                return False
        except (KeyError, TypeError, ValueError):
            logger.error(f"Model {name} in {file_path} has invalid numeric fields")
            return False

        if str(entry["tier"]).lower() not in VALID_TIERS:
            logger.error(
                f"Model {name} in {file_path} has invalid tier '{entry['tier']}'. "
                f"Must be one of: {list(VALID_TIERS)}"
            )
            return False

        return True

    def get_available_models(self, provider: str | None = None) -> list[AIModel]:
        """Get models, optionally restricted to one provider.

        Returns:
            Models sorted by provider, tier and name
        """
        models = list(self._models.values())
        if provider:
            models = [m for m in models if m.provider == provider.lower()]

        tier_order = {tier: i for i, tier in enumerate(VALID_TIERS)}
        models.sort(key=lambda m: (m.provider, tier_order.get(m.tier, 99), m.name))
        return models

    def get_model_info(self, model_name: str) -> AIModel | None:
        return self._models.get(model_name)

    def get_providers(self) -> list[str]:
        return list(self._providers.keys())

    def get_default_model(self, provider: str) -> str | None:
        """Get the catalog's default model for a provider, if it has one."""
        catalog = self._providers.get(provider.lower())
        return catalog.default_model if catalog else None

    def get_api_key_envs(self, provider: str) -> list[str]:
        """Get the environment variables checked for the provider's API key, in order."""
        catalog = self._providers.get(provider.lower())
        return list(catalog.api_key_envs) if catalog else []

    def estimate_cost(
        self, model_name: str, input_tokens: int, output_tokens: int
    ) -> dict[str, Any]:
        """Estimate cost for using a specific model.

        Args:
            model_name: Name of the model
            input_tokens: Number of input tokens
            output_tokens: Number of output tokens

        Returns:
            Dictionary with cost estimation details

        Raises:
            ValueError: If model is not found
        """
        model = self._models.get(model_name)
        if not model:
            raise ValueError(f"Model not found: {model_name}")

        input_cost = (input_tokens / 1000) * model.input_cost_per_1k
        output_cost = (output_tokens / 1000) * model.output_cost_per_1k

        return {
            "model": model_name,
            "provider": model.provider,
            "input_tokens": input_tokens,
            "output_tokens": output_tokens,
            "input_cost": round(input_cost, 6),
            "output_cost": round(output_cost, 6),
            "total_cost": round(input_cost + output_cost, 6),
            "currency": "USD",
        }


@lru_cache(maxsize=1)
def default_model_manager() -> ModelManager:
    """Get the built-in catalog, loaded once per process."""
    return ModelManager()
