"""Observability for analysis requests - logging and per-request metrics."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class AnalysisEvent:
    """A single event in one analysis request."""

    timestamp: datetime
    event_type: str  # "provider_call", "provider_skipped", "state", "error"
    data: Dict[str, Any]
    duration_ms: Optional[float] = None
    tokens_used: Optional[int] = None


class AnalysisObserver:
    """
    Collects events for one analysis request and mirrors them to the log.

    An observer is owned by a single request; it is never shared between
    concurrent orchestrations.
    """

    def __init__(self, request_id: Optional[str] = None, verbose: bool = False):
        self.events: List[AnalysisEvent] = []
        self.logger = logging.getLogger("resume_analyzer")
        self.request_id = request_id
        self.verbose = verbose
        self._setup_logging()

    def _prefix(self) -> str:
        return f"[{self.request_id}] " if self.request_id else ""

    def _setup_logging(self):
        """Configure logging format and handlers."""
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
        if self.verbose:
            self.logger.setLevel(logging.INFO)
        elif self.logger.level == logging.NOTSET:
            self.logger.setLevel(logging.WARNING)

    def log_provider_call(
        self,
        provider: str,
        model: str,
        duration_ms: float,
        success: bool,
        tokens: Optional[int] = None,
        error: Optional[str] = None,
    ):
        """
        Log one provider attempt.

        Args:
            provider: Provider name (e.g., "openai")
            model: Model name used for the call
            duration_ms: Wall time of the attempt in milliseconds
            success: Whether a parseable analysis came back
            tokens: Total tokens reported by the provider, if any
            error: Failure message when ``success`` is False
        """
        self.events.append(
            AnalysisEvent(
                timestamp=datetime.now(),
                event_type="provider_call",
                data={"provider": provider, "model": model, "success": success, "error": error},
                duration_ms=duration_ms,
                tokens_used=tokens,
            )
        )
        if success:
            self.logger.info(
                "%sProvider %s (%s) succeeded in %.2fms, %s tokens",
                self._prefix(),
                provider,
                model,
                duration_ms,
                tokens if tokens is not None else "?",
            )
        else:
            self.logger.warning(
                "%sProvider %s (%s) failed after %.2fms: %s", self._prefix(), provider, model, duration_ms, error
            )

    def log_provider_skipped(self, provider: str, reason: str):
        self.events.append(
            AnalysisEvent(
                timestamp=datetime.now(),
                event_type="provider_skipped",
                data={"provider": provider, "reason": reason},
            )
        )
        self.logger.info("%sProvider %s skipped: %s", self._prefix(), provider, reason)

    def log_state(self, state: str, providers: List[str], duration_ms: float):
        """Log the terminal orchestration state of the request."""
        self.events.append(
            AnalysisEvent(
                timestamp=datetime.now(),
                event_type="state",
                data={"state": state, "providers": list(providers)},
                duration_ms=duration_ms,
            )
        )
        self.logger.info(
            "%sAnalysis finished: state=%s providers=%s (%.2fms)",
            self._prefix(),
            state,
            ",".join(providers) or "-",
            duration_ms,
        )

    def log_error(self, error_type: str, message: str, context: Optional[Dict[str, Any]] = None):
        self.events.append(
            AnalysisEvent(
                timestamp=datetime.now(),
                event_type="error",
                data={"error_type": error_type, "message": message, "context": context or {}},
            )
        )
        self.logger.error("%sError (%s): %s", self._prefix(), error_type, message)

    def get_session_stats(self) -> Dict[str, Any]:
        """
        Get aggregated statistics for the request.

        Returns:
            Dictionary with request statistics
        """
        calls = [e for e in self.events if e.event_type == "provider_call"]
        skipped = [e for e in self.events if e.event_type == "provider_skipped"]
        errors = [e for e in self.events if e.event_type == "error"]
        succeeded = [e for e in calls if e.data.get("success")]

        return {
            "event_count": len(self.events),
            "provider_calls": len(calls),
            "provider_successes": len(succeeded),
            "provider_failures": len(calls) - len(succeeded),
            "providers_skipped": len(skipped),
            "errors": len(errors),
            "total_tokens": sum(e.tokens_used or 0 for e in calls),
            "slowest_provider_ms": max((e.duration_ms or 0 for e in calls), default=0.0),
        }
