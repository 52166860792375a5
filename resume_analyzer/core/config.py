"""Configuration loading for the analysis service."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/config.local.yaml"
DEFAULT_PROVIDER_ORDER = ["openai", "deepseek"]
DEFAULT_MAX_TEXT_LENGTH = 4000
DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024
DEFAULT_ALLOWED_EXTENSIONS = [".pdf", ".docx", ".txt", ".md"]

# Per-provider request profile. Values here are overridable from YAML.
PROVIDER_PROFILES: Dict[str, Dict[str, Any]] = {
    "openai": {
        "timeout_seconds": 120.0,
        "max_chars": 3000,
        "ellipsis": "...",
        "temperature": 0.7,
        "max_tokens": 4000,
    },
    "deepseek": {
        "timeout_seconds": 60.0,
        "max_chars": 4000,
        "ellipsis": "",
        "temperature": 0.2,
        "max_tokens": 4000,
    },
    "gemini": {
        "timeout_seconds": 60.0,
        "max_chars": 4000,
        "ellipsis": "",
        "temperature": 0.4,
        "max_tokens": 4000,
    },
}


@dataclass
class ProviderSettings:
    """Settings for one analysis provider."""

    name: str
    model: str = ""
    api_key: str = ""
    api_base: str = ""
    timeout_seconds: float = 60.0
    max_chars: int = 4000
    ellipsis: str = ""
    temperature: Optional[float] = 0.7
    max_tokens: int = 4000

    @classmethod
    def from_dict(cls, name: str, data: Optional[Dict[str, Any]] = None) -> "ProviderSettings":
        merged = {**PROVIDER_PROFILES.get(name, {}), **(data or {})}
        model = merged.get("model", "")
        if name == "openai" and not model and os.environ.get("USE_GPT4", "").lower() == "true":
            model = "gpt-4"
        return cls(
            name=name,
            model=model,
            api_key=merged.get("api_key", "") or "",
            api_base=merged.get("api_base", "") or "",
            timeout_seconds=float(merged.get("timeout_seconds", 60.0)),
            max_chars=int(merged.get("max_chars", DEFAULT_MAX_TEXT_LENGTH)),
            ellipsis=merged.get("ellipsis", "") or "",
            temperature=merged.get("temperature", 0.7),
            max_tokens=int(merged.get("max_tokens", 4000)),
        )


@dataclass
class AnalyzerConfig:
    """Resolved configuration for one analyzer instance.

    ``providers`` is ordered by priority: the first entry wins scalar fields
    and leads list fields when results are merged.
    """

    providers: List[ProviderSettings] = field(default_factory=list)
    max_text_length: int = DEFAULT_MAX_TEXT_LENGTH
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    allowed_extensions: List[str] = field(default_factory=lambda: list(DEFAULT_ALLOWED_EXTENSIONS))
    verbose: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalyzerConfig":
        provider_order = data.get("providers")
        if provider_order is None:
            provider_order = DEFAULT_PROVIDER_ORDER
        provider_options = data.get("provider_options") or {}
        analysis = data.get("analysis") or {}
        web = data.get("web") or {}
        return cls(
            providers=[
                ProviderSettings.from_dict(str(name).lower(), provider_options.get(str(name).lower()))
                for name in provider_order
            ],
            max_text_length=int(analysis.get("max_text_length", DEFAULT_MAX_TEXT_LENGTH)),
            max_upload_bytes=int(web.get("max_upload_bytes", DEFAULT_MAX_UPLOAD_BYTES)),
            allowed_extensions=[ext.lower() for ext in web.get("allowed_extensions", DEFAULT_ALLOWED_EXTENSIONS)],
            verbose=bool(data.get("verbose", False)),
        )


def load_raw_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict:
    """Load raw configuration dictionary from YAML file.

    Priority order:
    1. config.local.yaml (user's local config with secrets)
    2. config.yaml (template/defaults)
    """
    repo_root = Path(__file__).resolve().parents[2]

    def _resolve(candidate: str) -> Path:
        path = Path(candidate)
        if path.exists():
            return path
        alt = repo_root / candidate
        if alt.exists():
            return alt
        return path

    def _load_yaml(path: Path) -> dict:
        if not path.exists():
            return {}
        with open(path) as f:
            data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise ValueError(f"Config file must be a mapping: {path}")
            return data

    def _deep_merge(base: dict, override: dict) -> dict:
        merged = dict(base)
        for key, value in override.items():
            base_value = merged.get(key)
            if isinstance(base_value, dict) and isinstance(value, dict):
                merged[key] = _deep_merge(base_value, value)
            else:
                merged[key] = value
        return merged

    target = _resolve(config_path)
    is_local_default = Path(config_path).name == "config.local.yaml"

    # Default behavior: load config.yaml first, then overlay config.local.yaml.
    if is_local_default:
        base_path = _resolve(str(Path(config_path).with_name("config.yaml")))
        base = _load_yaml(base_path)
        local = _load_yaml(target)
        merged = _deep_merge(base, local)
        if not merged:
            raise FileNotFoundError(f"Config file not found: {config_path} (also missing fallback {base_path})")
        return merged

    # Explicit non-local config path: load as-is.
    data = _load_yaml(target)
    if not data:
        raise FileNotFoundError(f"Config file not found: {config_path}")
    return data


def load_config(config_path: Optional[str] = None) -> AnalyzerConfig:
    """Load :class:`AnalyzerConfig`, falling back to built-in defaults.

    ``RESUME_ANALYZER_CONFIG`` overrides the default path.
    """
    path = config_path or os.environ.get("RESUME_ANALYZER_CONFIG", DEFAULT_CONFIG_PATH)
    try:
        data = load_raw_config(path)
    except FileNotFoundError:
        logger.warning("Config file not found: %s; using built-in defaults", path)
        data = {}
    return AnalyzerConfig.from_dict(data)
