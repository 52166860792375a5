"""Analysis orchestration, provider adapters and configuration."""

from .adapters import ProviderAdapter, build_adapter, build_adapters, find_json_object, parse_provider_json
from .config import AnalyzerConfig, ProviderSettings, load_config, load_raw_config
from .observability import AnalysisObserver
from .orchestrator import AnalysisOrchestrator, AnalysisOutcome, AnalysisState

__all__ = [
    "AnalysisObserver",
    "AnalysisOrchestrator",
    "AnalysisOutcome",
    "AnalysisState",
    "AnalyzerConfig",
    "ProviderAdapter",
    "ProviderSettings",
    "build_adapter",
    "build_adapters",
    "find_json_object",
    "load_config",
    "load_raw_config",
    "parse_provider_json",
]
