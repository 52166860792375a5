"""Tests for per-request analysis observability."""

import logging

import pytest

from resume_analyzer.core.observability import AnalysisObserver


def test_session_stats_aggregate_provider_calls():
    observer = AnalysisObserver(request_id="req_1")
    observer.log_provider_call("openai", "gpt-3.5-turbo", 120.0, success=True, tokens=900)
    observer.log_provider_call("deepseek", "deepseek-reasoner", 450.0, success=False, error="timed out")
    observer.log_provider_skipped("gemini", "GEMINI_API_KEY not set")
    observer.log_state("single_result", ["openai"], 460.0)

    stats = observer.get_session_stats()

    assert stats["event_count"] == 4
    assert stats["provider_calls"] == 2
    assert stats["provider_successes"] == 1
    assert stats["provider_failures"] == 1
    assert stats["providers_skipped"] == 1
    assert stats["total_tokens"] == 900
    assert stats["slowest_provider_ms"] == 450.0


def test_failures_are_logged_with_request_id(caplog: pytest.LogCaptureFixture):
    observer = AnalysisObserver(request_id="req_abc")
    with caplog.at_level(logging.WARNING, logger="resume_analyzer"):
        observer.log_provider_call("openai", "gpt-4", 10.0, success=False, error="HTTP 429")

    assert "[req_abc]" in caplog.text
    assert "HTTP 429" in caplog.text
