"""Configuration validator for analyzer startup checks."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

from resume_analyzer.providers import PROVIDER_DEFAULTS


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ConfigError:
    """A single configuration issue."""

    field: str
    message: str
    severity: Severity


def validate_config(raw_config: Dict[str, Any]) -> List[ConfigError]:
    """Validate raw configuration and return a list of issues.

    Args:
        raw_config: Raw config dict from YAML

    Returns:
        List of ConfigError (empty = valid)
    """
    errors: List[ConfigError] = []

    # --- Providers ---
    providers = raw_config.get("providers")
    if providers is None:
        providers = ["openai", "deepseek"]
    if not isinstance(providers, list):
        errors.append(
            ConfigError(
                field="providers",
                message="providers must be a list of provider names",
                severity=Severity.ERROR,
            )
        )
        providers = []
    elif not providers:
        errors.append(
            ConfigError(
                field="providers",
                message="No providers configured; only the local fallback analysis will run",
                severity=Severity.WARNING,
            )
        )

    options = raw_config.get("provider_options") or {}
    if not isinstance(options, dict):
        errors.append(
            ConfigError(
                field="provider_options",
                message="provider_options must be a mapping of provider name to settings",
                severity=Severity.ERROR,
            )
        )
        options = {}

    usable = 0
    for name in providers:
        if not isinstance(name, str) or not name:
            errors.append(
                ConfigError(
                    field="providers",
                    message=f"provider names must be non-empty strings, got {name!r}",
                    severity=Severity.ERROR,
                )
            )
            continue
        name = name.lower()
        if name not in PROVIDER_DEFAULTS:
            errors.append(
                ConfigError(
                    field="providers",
                    message=f"Unknown provider '{name}'. Expected one of: {', '.join(PROVIDER_DEFAULTS.keys())}",
                    severity=Severity.ERROR,
                )
            )
            continue

        settings = options.get(name) or {}
        errors.extend(_validate_provider_options(name, settings))

        env_keys = PROVIDER_DEFAULTS[name]["env_keys"]
        if _resolve_api_key_value(str(settings.get("api_key", "") or ""), env_keys):
            usable += 1
        else:
            errors.append(
                ConfigError(
                    field=f"provider_options.{name}.api_key",
                    message=f"{env_keys[0]} not set; {name} will be skipped",
                    severity=Severity.WARNING,
                )
            )

    if providers and usable == 0:
        errors.append(
            ConfigError(
                field="providers",
                message="No provider has an API key; only the local fallback analysis will run",
                severity=Severity.WARNING,
            )
        )

    # --- Analysis ---
    analysis = raw_config.get("analysis") or {}
    max_text_length = analysis.get("max_text_length", 4000)
    if not _is_positive_int(max_text_length):
        errors.append(
            ConfigError(
                field="analysis.max_text_length",
                message=f"max_text_length must be a positive integer, got {max_text_length}",
                severity=Severity.ERROR,
            )
        )

    # --- Web ---
    web = raw_config.get("web") or {}
    max_upload_bytes = web.get("max_upload_bytes", 5 * 1024 * 1024)
    if not _is_positive_int(max_upload_bytes):
        errors.append(
            ConfigError(
                field="web.max_upload_bytes",
                message=f"max_upload_bytes must be a positive integer, got {max_upload_bytes}",
                severity=Severity.ERROR,
            )
        )
    extensions = web.get("allowed_extensions", [])
    if not isinstance(extensions, list) or any(
        not isinstance(ext, str) or not ext.startswith(".") for ext in extensions
    ):
        errors.append(
            ConfigError(
                field="web.allowed_extensions",
                message="allowed_extensions must be a list of extensions like '.pdf'",
                severity=Severity.ERROR,
            )
        )

    return errors


def _validate_provider_options(name: str, settings: Any) -> List[ConfigError]:
    if not isinstance(settings, dict):
        return [
            ConfigError(
                field=f"provider_options.{name}",
                message=f"settings for {name} must be a mapping",
                severity=Severity.ERROR,
            )
        ]

    issues: List[ConfigError] = []
    temperature = settings.get("temperature", 0.7)
    if temperature is not None and (
        isinstance(temperature, bool) or not isinstance(temperature, (int, float)) or not 0 <= temperature <= 2
    ):
        issues.append(
            ConfigError(
                field=f"provider_options.{name}.temperature",
                message=f"temperature must be a number between 0 and 2, got {temperature}",
                severity=Severity.ERROR,
            )
        )

    for key in ("max_tokens", "max_chars"):
        value = settings.get(key, 4000)
        if not _is_positive_int(value):
            issues.append(
                ConfigError(
                    field=f"provider_options.{name}.{key}",
                    message=f"{key} must be a positive integer, got {value}",
                    severity=Severity.ERROR,
                )
            )

    timeout = settings.get("timeout_seconds", 60)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        issues.append(
            ConfigError(
                field=f"provider_options.{name}.timeout_seconds",
                message=f"timeout_seconds must be a positive number, got {timeout}",
                severity=Severity.ERROR,
            )
        )
    return issues


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _resolve_api_key_value(config_api_key: str, env_keys: List[str]) -> str:
    """Resolve API key from env or config value without side effects.

    Returns the resolved key string, or empty string if unresolvable.
    """
    # Env vars take priority
    for env_key in env_keys:
        env_value = os.environ.get(env_key, "")
        if env_value:
            return env_value

    if not config_api_key:
        return ""

    # Not a placeholder
    if not config_api_key.startswith("${"):
        return config_api_key

    # Resolve ${VAR_NAME} placeholder
    if config_api_key.endswith("}"):
        var_name = config_api_key[2:-1]
        return os.environ.get(var_name, "")

    return ""


def has_errors(issues: List[ConfigError]) -> bool:
    """Check if any issues are errors (not just warnings)."""
    return any(e.severity == Severity.ERROR for e in issues)
