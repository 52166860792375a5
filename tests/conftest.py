"""Global pytest fixtures for deterministic test environment."""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _isolate_runtime_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear local runtime env that can leak into tests on developer machines."""
    for key in (
        "OPENAI_API_KEY",
        "DEEPSEEK_API_KEY",
        "DEEPSEEK_REASONER_API",
        "GEMINI_API_KEY",
        "USE_GPT4",
        "RESUME_ANALYZER_CONFIG",
        "RESUME_ANALYZER_MAX_UPLOAD_BYTES",
    ):
        monkeypatch.delenv(key, raising=False)
