"""Provider factory and defaults."""

from __future__ import annotations

import os
from typing import Any, Dict

from resume_analyzer.errors import ProviderUnavailable

from .base import ChatProvider
from .gemini import GeminiProvider
from .openai_compat import OpenAICompatibleProvider
from .types import GenerationConfig, LLMResponse, Message

PROVIDER_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {
        "api_base": "",
        "env_keys": ["OPENAI_API_KEY"],
        "model": "gpt-3.5-turbo",
    },
    "deepseek": {
        "api_base": "https://api.deepseek.com",
        "env_keys": ["DEEPSEEK_API_KEY", "DEEPSEEK_REASONER_API"],
        "model": "deepseek-reasoner",
    },
    "gemini": {
        "api_base": "",
        "env_keys": ["GEMINI_API_KEY"],
        "model": "gemini-2.0-flash",
    },
}


def create_provider(
    provider: str,
    api_key: str = "",
    model: str = "",
    api_base: str = "",
    timeout_seconds: float = 60.0,
) -> ChatProvider:
    """Build a provider client.

    Raises:
        ProviderUnavailable: no API key could be resolved for ``provider``.
    """
    provider_name = (provider or "openai").lower()
    defaults = PROVIDER_DEFAULTS.get(provider_name, {})
    api_key = resolve_api_key(provider_name, api_key)
    model = model or defaults.get("model", "")

    if provider_name == "gemini":
        return GeminiProvider(
            api_key=api_key,
            model=model,
            api_base=api_base,
            timeout_seconds=timeout_seconds,
        )

    return OpenAICompatibleProvider(
        api_key=api_key,
        model=model,
        api_base=api_base or defaults.get("api_base", ""),
        timeout_seconds=timeout_seconds,
    )


def resolve_api_key(provider: str, api_key: str = "") -> str:
    """Resolve a key from env vars, then a literal value, then ``${VAR}``."""
    env_keys = PROVIDER_DEFAULTS.get(provider, {}).get("env_keys", [])

    for env_key in env_keys:
        env_value = os.environ.get(env_key, "")
        if env_value:
            return env_value

    api_key = api_key or ""
    if api_key and not api_key.startswith("${"):
        return api_key

    if api_key.startswith("${") and api_key.endswith("}"):
        resolved = os.environ.get(api_key[2:-1], "")
        if resolved:
            return resolved

    if env_keys:
        raise ProviderUnavailable(provider, f"{env_keys[0]} not set")
    raise ProviderUnavailable(provider, "API key not set")


__all__ = [
    "ChatProvider",
    "GeminiProvider",
    "GenerationConfig",
    "LLMResponse",
    "Message",
    "OpenAICompatibleProvider",
    "PROVIDER_DEFAULTS",
    "create_provider",
    "resolve_api_key",
]
