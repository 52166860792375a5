"""Tests for the analysis orchestrator."""

from __future__ import annotations

import asyncio
import json

import pytest

from resume_analyzer.analysis import synthesize
from resume_analyzer.core import AnalysisOrchestrator, AnalysisState, AnalyzerConfig
from resume_analyzer.core.adapters import PROMPTS, ProviderAdapter
from resume_analyzer.core.config import ProviderSettings
from resume_analyzer.errors import PreconditionFailure, TotalAnalysisFailure
from resume_analyzer.providers import LLMResponse

PM_RESUME = "5 years experience as Project Manager using Agile and Scrum"


class _FakeProvider:
    def __init__(self, payload=None, text: str | None = None, error: Exception | None = None, delay: float = 0.0):
        self.model = "fake-model"
        self.text = text if text is not None else json.dumps(payload or {})
        self.error = error
        self.delay = delay
        self.prompts: list[str] = []
        self.completed = False

    async def generate(self, messages, config):  # noqa: ANN001
        self.prompts.append(messages[0].text)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        self.completed = True
        return LLMResponse(text=self.text, usage={"total_tokens": 10})


def _adapter(name: str, provider: _FakeProvider, timeout_seconds: float = 5.0) -> ProviderAdapter:
    return ProviderAdapter(name=name, provider=provider, prompt=PROMPTS[name], timeout_seconds=timeout_seconds)


@pytest.mark.asyncio
async def test_two_successes_are_merged_in_priority_order():
    openai = _FakeProvider({"summary": "from openai", "personalSkills": ["Python", "SQL"], "resumeScore": 80})
    deepseek = _FakeProvider(
        {"summary": "from deepseek", "keySkills": ["SQL", "Java"], "resumeScore": 60, "weaknesses": ["Brevity"]}
    )
    orchestrator = AnalysisOrchestrator([_adapter("openai", openai), _adapter("deepseek", deepseek)])

    outcome = await orchestrator.analyze("Experienced engineer")

    assert outcome.state is AnalysisState.MERGED
    assert outcome.providers == ["openai", "deepseek"]
    assert outcome.record.summary == "from openai"
    assert outcome.record.skills == ("Python", "SQL", "Java")
    assert outcome.record.resume_score == 80
    assert outcome.record.areas_to_improve == ("Brevity",)
    assert outcome.failures == {}


@pytest.mark.asyncio
async def test_one_failure_does_not_abort_the_other_provider():
    failing = _FakeProvider(error=RuntimeError("HTTP 500"))
    working = _FakeProvider({"summary": "only deepseek", "keySkills": ["Go"]})
    orchestrator = AnalysisOrchestrator([_adapter("openai", failing), _adapter("deepseek", working)])

    outcome = await orchestrator.analyze("resume text")

    assert outcome.state is AnalysisState.SINGLE_RESULT
    assert outcome.providers == ["deepseek"]
    assert outcome.record.summary == "only deepseek"
    assert outcome.record.skills == ("Go",)
    assert "HTTP 500" in outcome.failures["openai"]


@pytest.mark.asyncio
async def test_parse_failure_counts_as_provider_failure():
    garbled = _FakeProvider(text="I am unable to comply.")
    working = _FakeProvider({"summary": "ok"})
    orchestrator = AnalysisOrchestrator([_adapter("deepseek", garbled), _adapter("openai", working)])

    outcome = await orchestrator.analyze("resume text")

    assert outcome.state is AnalysisState.SINGLE_RESULT
    assert outcome.providers == ["openai"]
    assert "deepseek" in outcome.failures


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "text",
    [
        '{"resumeScore": 1' + "0" * 5000 + "}",
        '{"summary": ' + "[" * 100000 + "]" * 100000 + "}",
    ],
    ids=["oversized-integer", "deep-nesting"],
)
async def test_undecodable_reply_is_isolated_to_its_provider(text):
    broken = _FakeProvider(text=text)
    working = _FakeProvider({"summary": "ok"})
    orchestrator = AnalysisOrchestrator([_adapter("deepseek", broken), _adapter("openai", working)])

    outcome = await orchestrator.analyze("resume text")

    assert outcome.state is AnalysisState.SINGLE_RESULT
    assert outcome.providers == ["openai"]
    assert outcome.record.summary == "ok"
    assert "deepseek" in outcome.failures


class _ExplodingAdapter:
    name = "deepseek"
    model = "fake-model"

    async def analyze(self, text):  # noqa: ANN001
        raise KeyError("choices")


@pytest.mark.asyncio
async def test_unexpected_adapter_error_is_recorded_as_failure():
    working = _FakeProvider({"summary": "ok"})
    orchestrator = AnalysisOrchestrator([_ExplodingAdapter(), _adapter("openai", working)])

    outcome = await orchestrator.analyze("resume text")

    assert outcome.state is AnalysisState.SINGLE_RESULT
    assert outcome.providers == ["openai"]
    assert "choices" in outcome.failures["deepseek"]
    assert outcome.stats["provider_failures"] == 1


@pytest.mark.asyncio
async def test_cancelled_request_lets_provider_calls_finish():
    provider = _FakeProvider({"summary": "late"}, delay=0.2)
    orchestrator = AnalysisOrchestrator([_adapter("openai", provider)])

    task = asyncio.create_task(orchestrator.analyze("resume"))
    await asyncio.sleep(0.05)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert provider.prompts == ["resume"]
    assert not provider.completed
    await asyncio.sleep(0.3)
    assert provider.completed


@pytest.mark.asyncio
async def test_all_providers_fail_uses_fallback():
    orchestrator = AnalysisOrchestrator(
        [
            _adapter("openai", _FakeProvider(error=RuntimeError("quota exceeded"))),
            _adapter("deepseek", _FakeProvider(delay=1.0), timeout_seconds=0.01),
        ]
    )

    outcome = await orchestrator.analyze(PM_RESUME)

    assert outcome.state is AnalysisState.FALLBACK_USED
    assert outcome.providers == []
    assert set(outcome.failures) == {"openai", "deepseek"}
    record = outcome.record
    assert {"Agile", "Scrum"} <= set(record.skills)
    assert record.job_titles
    assert record.resume_score >= 50
    assert record == synthesize(PM_RESUME)


@pytest.mark.asyncio
async def test_no_adapters_uses_fallback():
    outcome = await AnalysisOrchestrator([]).analyze(PM_RESUME)
    assert outcome.state is AnalysisState.FALLBACK_USED
    assert outcome.stats["provider_calls"] == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "   \n\t", None])
async def test_empty_text_fails_before_any_provider_call(text):
    provider = _FakeProvider({"summary": "never"})
    orchestrator = AnalysisOrchestrator([_adapter("openai", provider)])

    with pytest.raises(PreconditionFailure):
        await orchestrator.analyze(text)

    assert provider.prompts == []


@pytest.mark.asyncio
async def test_text_is_truncated_before_reaching_providers():
    provider = _FakeProvider({"summary": "ok"})
    orchestrator = AnalysisOrchestrator([_adapter("deepseek", provider)], max_text_length=10)

    await orchestrator.analyze("x" * 50)

    assert provider.prompts == ["x" * 10]


@pytest.mark.asyncio
async def test_providers_run_concurrently():
    slow_a = _FakeProvider({"summary": "a"}, delay=0.2)
    slow_b = _FakeProvider({"summary": "b"}, delay=0.2)
    orchestrator = AnalysisOrchestrator([_adapter("openai", slow_a), _adapter("deepseek", slow_b)])

    loop = asyncio.get_running_loop()
    start = loop.time()
    outcome = await orchestrator.analyze("resume")
    elapsed = loop.time() - start

    assert outcome.state is AnalysisState.MERGED
    assert elapsed < 0.35


@pytest.mark.asyncio
async def test_fallback_error_becomes_total_failure(monkeypatch: pytest.MonkeyPatch):
    def _broken(text):
        raise RuntimeError("boom")

    monkeypatch.setattr("resume_analyzer.core.orchestrator.synthesize", _broken)

    with pytest.raises(TotalAnalysisFailure):
        await AnalysisOrchestrator([]).analyze("resume")


@pytest.mark.asyncio
async def test_stats_and_skipped_are_reported():
    orchestrator = AnalysisOrchestrator(
        [_adapter("openai", _FakeProvider({"summary": "ok"}))],
        skipped={"deepseek": "DEEPSEEK_API_KEY not set"},
    )

    outcome = await orchestrator.analyze("resume", request_id="req_test")

    assert outcome.skipped == {"deepseek": "DEEPSEEK_API_KEY not set"}
    assert outcome.stats["provider_calls"] == 1
    assert outcome.stats["provider_successes"] == 1
    assert outcome.stats["providers_skipped"] == 1
    assert outcome.stats["total_tokens"] == 10


def test_from_config_skips_providers_without_keys(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    config = AnalyzerConfig(
        providers=[ProviderSettings.from_dict("openai"), ProviderSettings.from_dict("deepseek")],
        max_text_length=1234,
    )

    orchestrator = AnalysisOrchestrator.from_config(config)

    assert orchestrator.provider_names == ["openai"]
    assert list(orchestrator.skipped) == ["deepseek"]
    assert orchestrator.max_text_length == 1234


@pytest.mark.asyncio
async def test_empty_provider_list_runs_fallback_only():
    orchestrator = AnalysisOrchestrator.from_config(AnalyzerConfig.from_dict({"providers": []}))

    outcome = await orchestrator.analyze(PM_RESUME)

    assert orchestrator.provider_names == []
    assert outcome.state is AnalysisState.FALLBACK_USED
