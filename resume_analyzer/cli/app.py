"""CLI - Command line interface for the resume analyzer."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel

from resume_analyzer.analysis import AnalysisRecord, build_job_search_query
from resume_analyzer.core import AnalysisOrchestrator, AnalysisOutcome, load_config, load_raw_config
from resume_analyzer.core.config import DEFAULT_CONFIG_PATH
from resume_analyzer.documents import extract_text
from resume_analyzer.errors import PreconditionFailure, TotalAnalysisFailure

from .config_validator import Severity, has_errors, validate_config

console = Console()


def render_record(record: AnalysisRecord) -> str:
    """Render an analysis record as Markdown."""

    def _section(title: str, items: Sequence[str]) -> str:
        if not items:
            return ""
        return f"## {title}\n\n" + "\n".join(f"- {item}" for item in items) + "\n\n"

    detailed = record.detailed_analysis
    text = f"# Resume Score: {record.resume_score}/100\n\n"
    if record.summary:
        text += f"## Summary\n\n{record.summary}\n\n"
    text += _section("Skills", record.skills)
    text += _section("Strengths", record.strengths)
    text += _section("Areas to Improve", record.areas_to_improve)
    text += _section("Recommendations", record.recommendations)
    text += _section("Recommended Job Titles", record.job_titles)
    if detailed.professional_profile and detailed.professional_profile != record.summary:
        text += f"## Professional Profile\n\n{detailed.professional_profile}\n\n"
    text += _section("Key Achievements", detailed.key_achievements)
    text += _section("Industry Fit", detailed.industry_fit)
    text += _section("Skill Gaps", detailed.skill_gaps)
    return text


async def run_analysis(path: Path, config_path: Optional[str], offline: bool = False) -> AnalysisOutcome:
    config = load_config(config_path)
    if offline:
        orchestrator = AnalysisOrchestrator([], max_text_length=config.max_text_length, verbose=config.verbose)
    else:
        orchestrator = AnalysisOrchestrator.from_config(config)
    text = extract_text(path.read_bytes(), path.name)
    return await orchestrator.analyze(text)


def cmd_analyze(args: argparse.Namespace) -> int:
    path = Path(args.file)
    if not path.is_file():
        console.print(f"❌ File not found: {args.file}", style="red")
        return 1

    try:
        outcome = asyncio.run(run_analysis(path, args.config, offline=args.offline))
    except PreconditionFailure as e:
        console.print(f"❌ {e}", style="red")
        return 1
    except TotalAnalysisFailure as e:
        console.print(f"❌ Analysis failed: {e}", style="red")
        return 2

    if args.json:
        payload = {
            "analysis": outcome.record.to_dict(),
            "state": outcome.state.value,
            "providers": outcome.providers,
        }
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return 0

    console.print(Markdown(render_record(outcome.record)))
    providers = ", ".join(outcome.providers) or "local fallback"
    console.print(
        Panel(
            f"State: {outcome.state.value}\nProviders: {providers}\n"
            f"Job search query: {build_job_search_query(outcome.record) or '-'}",
            title="📊 Analysis",
        )
    )
    for name, reason in outcome.failures.items():
        console.print(f"⚠️ {name} failed: {reason}", style="yellow")
    return 0


def cmd_check_config(args: argparse.Namespace) -> int:
    config_path = args.config or DEFAULT_CONFIG_PATH
    try:
        raw = load_raw_config(config_path)
    except FileNotFoundError:
        console.print(f"⚠️ Config file not found: {config_path}", style="yellow")
        console.print("Checking built-in defaults instead.", style="dim")
        raw = {}

    issues = validate_config(raw)
    if not issues:
        console.print("✅ Configuration is valid.", style="green")
        return 0

    for issue in issues:
        style = "red" if issue.severity == Severity.ERROR else "yellow"
        console.print(f"[{issue.severity.value}] {issue.field}: {issue.message}", style=style)
    return 1 if has_errors(issues) else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resume-analyzer",
        description="Resume Analyzer - structured resume analysis with LLM providers",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Analyze a resume file (.pdf, .docx, .md, .txt)")
    analyze.add_argument("file", help="Path to the resume file")
    analyze.add_argument(
        "--config", "-c",
        default=None,
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH})",
    )
    analyze.add_argument(
        "--json",
        action="store_true",
        help="Print the analysis as JSON instead of formatted text",
    )
    analyze.add_argument(
        "--offline",
        action="store_true",
        help="Skip all providers and run the local heuristic analysis only",
    )
    analyze.set_defaults(handler=cmd_analyze)

    check = subparsers.add_parser("check-config", help="Validate configuration and provider keys")
    check.add_argument(
        "--config", "-c",
        default=None,
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH})",
    )
    check.set_defaults(handler=cmd_check_config)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
