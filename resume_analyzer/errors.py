"""Error taxonomy for resume analysis.

Only :class:`PreconditionFailure` and :class:`TotalAnalysisFailure` ever reach
a caller. Provider-level errors are recorded and absorbed by the orchestrator.
"""

from __future__ import annotations


class AnalysisError(Exception):
    """Base class for analysis pipeline errors."""


class PreconditionFailure(AnalysisError):
    """No usable resume text; raised before any provider is attempted."""


class ExtractionFailure(PreconditionFailure):
    """Text could not be extracted from the uploaded document."""


class ProviderError(AnalysisError):
    """Failure attributed to a single provider."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.message = message


class ProviderUnavailable(ProviderError):
    """No credential configured; the provider is skipped, not attempted."""


class RequestFailure(ProviderError):
    """Network error, timeout, non-2xx status or empty response."""


class ParseFailure(ProviderError):
    """A response arrived but contained no parseable JSON object."""


class TotalAnalysisFailure(AnalysisError):
    """Neither a provider nor the local fallback produced an analysis."""
