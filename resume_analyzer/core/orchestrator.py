"""Analysis orchestration: providers in parallel, then normalize/merge/fallback."""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from enum import Enum
from time import perf_counter
from typing import Any, Dict, List, Optional, Sequence, Tuple

from resume_analyzer.analysis import AnalysisRecord, merge_all, normalize, synthesize
from resume_analyzer.errors import PreconditionFailure, ProviderError, TotalAnalysisFailure

from .adapters import ProviderAdapter, build_adapters
from .config import DEFAULT_MAX_TEXT_LENGTH, AnalyzerConfig
from .observability import AnalysisObserver

logger = logging.getLogger(__name__)


class AnalysisState(str, Enum):
    """Terminal state reached by one analysis request."""

    MERGED = "merged"
    SINGLE_RESULT = "single_result"
    FALLBACK_USED = "fallback_used"


@dataclass
class AnalysisOutcome:
    """Final record plus how it was produced.

    ``failures`` is for logs and diagnostics only; it is not meant to be
    returned to end users.
    """

    record: AnalysisRecord
    state: AnalysisState
    providers: List[str] = field(default_factory=list)
    failures: Dict[str, str] = field(default_factory=dict)
    skipped: Dict[str, str] = field(default_factory=dict)
    stats: Dict[str, Any] = field(default_factory=dict)


class AnalysisOrchestrator:
    """Runs one analysis per call; holds configuration only, no request state."""

    def __init__(
        self,
        adapters: Sequence[ProviderAdapter],
        skipped: Optional[Dict[str, str]] = None,
        max_text_length: int = DEFAULT_MAX_TEXT_LENGTH,
        verbose: bool = False,
    ) -> None:
        self.adapters = list(adapters)
        self.skipped = dict(skipped or {})
        self.max_text_length = max_text_length
        self.verbose = verbose

    @classmethod
    def from_config(cls, config: AnalyzerConfig) -> "AnalysisOrchestrator":
        adapters, skipped = build_adapters(config)
        for name, reason in skipped.items():
            logger.info("Provider %s not configured (%s); it will be skipped", name, reason)
        return cls(adapters, skipped, max_text_length=config.max_text_length, verbose=config.verbose)

    @property
    def provider_names(self) -> List[str]:
        return [adapter.name for adapter in self.adapters]

    async def analyze(self, text: Optional[str], request_id: Optional[str] = None) -> AnalysisOutcome:
        """Analyze resume *text*.

        Provider failures never propagate: with no successful provider the
        local fallback produces the record.

        Raises:
            PreconditionFailure: *text* is empty; no provider is attempted.
            TotalAnalysisFailure: the fallback itself could not run.
        """
        if not text or not text.strip():
            raise PreconditionFailure("No resume text available for analysis")
        if self.max_text_length > 0:
            text = text[: self.max_text_length]

        observer = AnalysisObserver(request_id=request_id or f"req_{uuid.uuid4().hex[:8]}", verbose=self.verbose)
        for name, reason in self.skipped.items():
            observer.log_provider_skipped(name, reason)

        start = perf_counter()
        # Shielded so a caller disconnect does not abort provider calls mid-flight.
        attempts = await asyncio.shield(
            asyncio.gather(*(self._attempt(adapter, text, observer) for adapter in self.adapters))
        )

        successes: List[Tuple[str, AnalysisRecord]] = []
        failures: Dict[str, str] = {}
        for adapter, (record, error) in zip(self.adapters, attempts):
            if record is not None:
                successes.append((adapter.name, record))
            elif error is not None:
                failures[adapter.name] = error

        if len(successes) >= 2:
            state = AnalysisState.MERGED
            record = merge_all([record for _, record in successes])
        elif successes:
            state = AnalysisState.SINGLE_RESULT
            record = successes[0][1]
        else:
            state = AnalysisState.FALLBACK_USED
            try:
                record = synthesize(text)
            except Exception as exc:
                observer.log_error("fallback", str(exc))
                raise TotalAnalysisFailure("Failed to analyze resume with available providers") from exc

        providers = [name for name, _ in successes]
        observer.log_state(state.value, providers, (perf_counter() - start) * 1000)
        return AnalysisOutcome(
            record=record,
            state=state,
            providers=providers,
            failures=failures,
            skipped=dict(self.skipped),
            stats=observer.get_session_stats(),
        )

    async def _attempt(
        self,
        adapter: ProviderAdapter,
        text: str,
        observer: AnalysisObserver,
    ) -> Tuple[Optional[AnalysisRecord], Optional[str]]:
        """Run one adapter and normalize its payload; failures are returned, not raised."""
        start = perf_counter()
        try:
            result = await adapter.analyze(text)
        except ProviderError as exc:
            observer.log_provider_call(
                adapter.name, adapter.model, (perf_counter() - start) * 1000, success=False, error=exc.message
            )
            return None, exc.message
        except Exception as exc:
            message = str(exc) or exc.__class__.__name__
            logger.exception("Unexpected error from provider %s", adapter.name)
            observer.log_provider_call(
                adapter.name, adapter.model, (perf_counter() - start) * 1000, success=False, error=message
            )
            return None, message

        observer.log_provider_call(
            adapter.name, adapter.model, (perf_counter() - start) * 1000, success=True, tokens=result.tokens
        )
        return normalize(result.payload), None
