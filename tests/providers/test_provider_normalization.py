"""Provider response normalization and factory tests."""

from types import SimpleNamespace

import pytest

from resume_analyzer.errors import ProviderUnavailable
from resume_analyzer.providers import (
    GeminiProvider,
    OpenAICompatibleProvider,
    create_provider,
    resolve_api_key,
)
from resume_analyzer.providers.types import GenerationConfig, Message


def _openai_provider(model: str = "gpt-3.5-turbo") -> OpenAICompatibleProvider:
    return OpenAICompatibleProvider(api_key="test-key", model=model)


def test_openai_completion_normalizes_list_content_and_usage():
    provider = _openai_provider()
    completion = SimpleNamespace(
        choices=[
            SimpleNamespace(
                message=SimpleNamespace(
                    content=[
                        {"type": "text", "text": '{"summary": '},
                        SimpleNamespace(text='"ok"}'),
                    ]
                ),
                finish_reason="stop",
            )
        ],
        usage=SimpleNamespace(prompt_tokens=10, completion_tokens=20, total_tokens=30),
    )

    response = provider._from_openai_completion(completion)

    assert response.text == '{"summary": "ok"}'
    assert response.usage == {"prompt_tokens": 10, "completion_tokens": 20, "total_tokens": 30}
    assert response.finish_reasons == ["stop"]


def test_openai_completion_without_choices_raises():
    with pytest.raises(RuntimeError):
        _openai_provider()._from_openai_completion(SimpleNamespace(choices=[], usage=None))


def test_openai_kwargs_include_json_mode_and_system_prompt():
    provider = _openai_provider()
    messages = provider._to_openai_messages([Message.user("resume")], "system text")
    kwargs = provider._build_chat_kwargs(
        messages,
        GenerationConfig(system_prompt="system text", max_tokens=4000, temperature=0.7, json_mode=True),
    )

    assert kwargs["model"] == "gpt-3.5-turbo"
    assert kwargs["messages"] == [
        {"role": "system", "content": "system text"},
        {"role": "user", "content": "resume"},
    ]
    assert kwargs["max_tokens"] == 4000
    assert kwargs["temperature"] == 0.7
    assert kwargs["response_format"] == {"type": "json_object"}


def test_openai_kwargs_without_json_mode_or_temperature():
    kwargs = _openai_provider("deepseek-reasoner")._build_chat_kwargs(
        [], GenerationConfig(temperature=None, json_mode=False)
    )
    assert "response_format" not in kwargs
    assert "temperature" not in kwargs


@pytest.mark.asyncio
async def test_openai_retries_once_with_allowed_temperature():
    provider = _openai_provider("o1-mini")
    calls = []

    async def fake_create(**kwargs):
        calls.append(kwargs)
        if len(calls) == 1:
            raise RuntimeError("Invalid temperature: only 1 is allowed for this model")
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content="{}"), finish_reason="stop")],
            usage=None,
        )

    provider.client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=fake_create)))

    response = await provider.generate([Message.user("hi")], GenerationConfig(temperature=0.7))

    assert response.text == "{}"
    assert [c["temperature"] for c in calls] == [0.7, 1.0]


@pytest.mark.asyncio
async def test_openai_other_errors_propagate():
    provider = _openai_provider()

    async def fake_create(**kwargs):
        raise RuntimeError("HTTP 503")

    provider.client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=fake_create)))

    with pytest.raises(RuntimeError, match="HTTP 503"):
        await provider.generate([Message.user("hi")], GenerationConfig())


def test_gemini_response_normalization():
    provider = GeminiProvider(api_key="test-key", model="gemini-2.0-flash")
    response = SimpleNamespace(
        candidates=[
            SimpleNamespace(
                content=SimpleNamespace(parts=[SimpleNamespace(text='{"resumeScore": '), SimpleNamespace(text="70}")]),
                finish_reason="STOP",
            )
        ],
        usage_metadata=SimpleNamespace(prompt_token_count=5, candidates_token_count=7, total_token_count=12),
    )

    normalized = provider._from_gemini_response(response)

    assert normalized.text == '{"resumeScore": 70}'
    assert normalized.usage == {"prompt_tokens": 5, "completion_tokens": 7, "total_tokens": 12}


def test_gemini_response_without_candidates_raises():
    provider = GeminiProvider(api_key="test-key", model="gemini-2.0-flash")
    with pytest.raises(RuntimeError):
        provider._from_gemini_response(SimpleNamespace(candidates=[], usage_metadata=None))


class TestResolveApiKey:
    def test_env_var_takes_priority(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("OPENAI_API_KEY", "env-key")
        assert resolve_api_key("openai", "literal-key") == "env-key"

    def test_legacy_deepseek_env_name(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("DEEPSEEK_REASONER_API", "legacy-key")
        assert resolve_api_key("deepseek") == "legacy-key"

    def test_literal_value(self):
        assert resolve_api_key("gemini", "literal-key") == "literal-key"

    def test_placeholder_resolves_from_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("MY_DEEPSEEK", "placeholder-key")
        assert resolve_api_key("deepseek", "${MY_DEEPSEEK}") == "placeholder-key"

    def test_unresolved_placeholder_is_unavailable(self):
        with pytest.raises(ProviderUnavailable) as exc_info:
            resolve_api_key("openai", "${OPENAI_API_KEY}")
        assert exc_info.value.provider == "openai"
        assert "OPENAI_API_KEY" in exc_info.value.message


def test_create_provider_defaults():
    deepseek = create_provider("deepseek", api_key="ds-key")
    assert isinstance(deepseek, OpenAICompatibleProvider)
    assert deepseek.model == "deepseek-reasoner"
    assert deepseek.api_base == "https://api.deepseek.com"

    gemini = create_provider("gemini", api_key="g-key")
    assert isinstance(gemini, GeminiProvider)
    assert gemini.model == "gemini-2.0-flash"


def test_create_provider_without_key_is_unavailable():
    with pytest.raises(ProviderUnavailable):
        create_provider("openai")
