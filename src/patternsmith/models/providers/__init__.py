"""Provider adapters for the pattern generation service.

Adapters are imported lazily so that only the SDK of the configured provider
has to be importable.
"""

import importlib

from .base import BaseProvider

_PROVIDERS: dict[str, tuple[str, str]] = {
    "openai": ("patternsmith.models.providers.openai", "OpenAIProviderAdapter"),
    "anthropic": ("patternsmith.models.providers.anthropic", "AnthropicProviderAdapter"),
    "ollama": ("patternsmith.models.providers.ollama", "OllamaProviderAdapter"),
}


def available_providers() -> list[str]:
    return list(_PROVIDERS)


def get_provider(name: str) -> type[BaseProvider] | None:
    """Return the adapter class registered under ``name``, or None."""
    entry = _PROVIDERS.get(name)
    if entry is None:
        return None
    module_path, class_name = entry
    return getattr(importlib.import_module(module_path), class_name)


__all__ = ["BaseProvider", "available_providers", "get_provider"]
