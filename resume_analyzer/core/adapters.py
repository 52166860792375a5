"""Provider adapters: prompt a provider and turn its reply into a payload dict."""

from __future__ import annotations

import asyncio
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from resume_analyzer.errors import ParseFailure, ProviderUnavailable, RequestFailure
from resume_analyzer.providers import ChatProvider, GenerationConfig, Message, create_provider

from .config import AnalyzerConfig, ProviderSettings
from .prompts import (
    DETAILED_ANALYSIS_PROMPT,
    DETAILED_ANALYSIS_USER_TEMPLATE,
    FLAT_ANALYSIS_PROMPT,
    FLAT_ANALYSIS_USER_TEMPLATE,
)

logger = logging.getLogger(__name__)

_FENCED_JSON = re.compile(r"```(?:json)?\s*\n(.*?)\n\s*```", re.DOTALL)


@dataclass(frozen=True)
class PromptTemplate:
    system: str
    user: str
    json_mode: bool


# DeepSeek's reasoner model rejects the JSON response format and answers in
# the flat schema; the others use the nested detailedAnalysis schema.
PROMPTS: Dict[str, PromptTemplate] = {
    "openai": PromptTemplate(DETAILED_ANALYSIS_PROMPT, DETAILED_ANALYSIS_USER_TEMPLATE, json_mode=True),
    "deepseek": PromptTemplate(FLAT_ANALYSIS_PROMPT, FLAT_ANALYSIS_USER_TEMPLATE, json_mode=False),
    "gemini": PromptTemplate(DETAILED_ANALYSIS_PROMPT, DETAILED_ANALYSIS_USER_TEMPLATE, json_mode=True),
}


@dataclass
class AdapterResult:
    """Raw payload plus call metadata from one successful attempt."""

    payload: Dict[str, Any]
    tokens: Optional[int] = None


class ProviderAdapter:
    """Wraps one provider with its prompt, truncation and parsing policy."""

    def __init__(
        self,
        name: str,
        provider: ChatProvider,
        prompt: PromptTemplate,
        max_chars: int = 4000,
        ellipsis: str = "",
        timeout_seconds: float = 60.0,
        temperature: Optional[float] = 0.7,
        max_tokens: int = 4000,
    ) -> None:
        self.name = name
        self.provider = provider
        self.prompt = prompt
        self.max_chars = max_chars
        self.ellipsis = ellipsis
        self.timeout_seconds = timeout_seconds
        self.generation = GenerationConfig(
            system_prompt=prompt.system,
            max_tokens=max_tokens,
            temperature=temperature,
            json_mode=prompt.json_mode,
        )

    @property
    def model(self) -> str:
        return getattr(self.provider, "model", "")

    def prepare_text(self, text: str) -> str:
        """Keep the first ``max_chars`` characters, marking the cut if configured."""
        if self.max_chars <= 0 or len(text) <= self.max_chars:
            return text
        return text[: self.max_chars] + self.ellipsis

    async def analyze(self, text: str) -> AdapterResult:
        """Send *text* to the provider and return its parsed payload.

        Raises:
            RequestFailure: the call failed, timed out or returned nothing.
            ParseFailure: the reply held no parseable JSON object.
        """
        prompt = self.prompt.user.format(resume=self.prepare_text(text))
        try:
            response = await asyncio.wait_for(
                self.provider.generate([Message.user(prompt)], self.generation),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise RequestFailure(self.name, f"timed out after {self.timeout_seconds:.0f}s") from exc
        except Exception as exc:
            raise RequestFailure(self.name, str(exc) or exc.__class__.__name__) from exc

        if "length" in response.finish_reasons:
            logger.warning("%s response was cut at max_tokens; JSON may be incomplete", self.name)
        if not response.text.strip():
            raise RequestFailure(self.name, "empty response")

        tokens = response.usage.get("total_tokens") if response.usage else None
        return AdapterResult(payload=parse_provider_json(self.name, response.text), tokens=tokens)


def parse_provider_json(provider: str, raw: Any) -> Dict[str, Any]:
    """Turn a provider reply into a dict.

    Structured replies are used as-is. Text is parsed directly, then from a
    fenced ``json`` block, then from the first balanced ``{...}`` span.
    """
    if isinstance(raw, Mapping):
        return dict(raw)
    if not isinstance(raw, str):
        raise ParseFailure(provider, f"unsupported response type {type(raw).__name__}")

    text = raw.strip()
    candidates: List[str] = [text]
    fenced = _FENCED_JSON.search(text)
    if fenced:
        candidates.append(fenced.group(1))
    span = find_json_object(text)
    if span is not None:
        candidates.append(span)

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except (ValueError, RecursionError):
            continue
        if isinstance(parsed, dict):
            return parsed

    if span is None and not fenced:
        raise ParseFailure(provider, "no JSON object found in response")
    raise ParseFailure(provider, "response JSON is invalid or not an object")


def find_json_object(text: str) -> Optional[str]:
    """Return the first balanced ``{...}`` span in *text*, ignoring braces in strings."""
    start = text.find("{")
    if start < 0:
        return None

    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start : index + 1]
    return None


def build_adapter(settings: ProviderSettings) -> ProviderAdapter:
    """Create the adapter for one configured provider.

    Raises:
        ProviderUnavailable: no credential is configured for the provider.
    """
    prompt = PROMPTS.get(settings.name)
    if prompt is None:
        raise ProviderUnavailable(settings.name, "unknown provider")
    provider = create_provider(
        settings.name,
        api_key=settings.api_key,
        model=settings.model,
        api_base=settings.api_base,
        timeout_seconds=settings.timeout_seconds,
    )
    return ProviderAdapter(
        name=settings.name,
        provider=provider,
        prompt=prompt,
        max_chars=settings.max_chars,
        ellipsis=settings.ellipsis,
        timeout_seconds=settings.timeout_seconds,
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
    )


def build_adapters(config: AnalyzerConfig) -> Tuple[List[ProviderAdapter], Dict[str, str]]:
    """Build adapters for every configured provider with a credential.

    Returns the adapters in priority order and a map of skipped provider
    names to the reason they were skipped.
    """
    adapters: List[ProviderAdapter] = []
    skipped: Dict[str, str] = {}
    for settings in config.providers:
        try:
            adapters.append(build_adapter(settings))
        except ProviderUnavailable as exc:
            skipped[settings.name] = exc.message
    return adapters, skipped
