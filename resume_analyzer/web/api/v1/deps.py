"""Dependency providers for v1 API."""

from __future__ import annotations

from fastapi import Request

from ....core import AnalysisOrchestrator, AnalyzerConfig


def get_orchestrator(request: Request) -> AnalysisOrchestrator:
    """Access the shared (stateless) orchestrator from app state."""
    return request.app.state.orchestrator


def get_config(request: Request) -> AnalyzerConfig:
    return request.app.state.config
