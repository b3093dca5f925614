"""
abi-lens command line.

Usage:
    abi-lens analyze path/to/abi.json              # grouped tables
    abi-lens analyze path/to/abi.json --json       # AnalyzedInterface as JSON
    abi-lens analyze path/to/abi.json --search bal # only functions matching "bal"
    abi-lens signature path/to/abi.json            # canonical signatures, one per line
    abi-lens validate uint256 1000                 # single-field validation
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from abi_lens.analysis.engine import AnalyzedInterface, analyze_interface, search_functions
from abi_lens.analysis.functions import AnalyzedFunction
from abi_lens.analysis.params import ParameterInfo
from abi_lens.analysis.validation import validate_input
from abi_lens.config import AnalyzerConfig
from abi_lens.env import layered_env
from abi_lens.manifest import ManifestStatus
from abi_lens.utils import read_manifest_text

logger = logging.getLogger(__name__)

console = Console()

CATEGORY_LABELS = {
    "read": "[green]Read Functions[/green]",
    "write": "[yellow]Write Functions[/yellow]",
    "payable": "[red]Payable Functions[/red]",
}

# Statuses that produced no analysis; `analyze` exits 1 on these.
_FAILED_STATUSES = frozenset({ManifestStatus.MALFORMED, ManifestStatus.TOO_DEEP})


def _load_config(env_file: Path | None) -> AnalyzerConfig:
    return AnalyzerConfig.from_env(layered_env(env_file))


def _analyze_path(path: Path, config: AnalyzerConfig) -> AnalyzedInterface:
    text = read_manifest_text(path)
    if text is None:
        raise SystemExit(f"Could not read manifest from {path}")
    return analyze_interface(text, config=config)


def _format_params(params: list[ParameterInfo]) -> str:
    return ", ".join(f"{p.type} {p.name}".strip() for p in params)


def _function_table(title: str, functions: list[AnalyzedFunction]) -> Table:
    table = Table(title=title, title_justify="left")
    table.add_column("Signature", style="cyan")
    table.add_column("Inputs")
    table.add_column("Returns")
    table.add_column("Complexity")
    table.add_column("Cost (rough)", justify="right")
    for f in functions:
        table.add_row(
            f.canonical_signature,
            _format_params(f.inputs),
            _format_params(f.outputs),
            f.complexity.value,
            f.cost_estimate.label,
        )
    return table


def print_analysis(analysis: AnalyzedInterface, functions: list[AnalyzedFunction]) -> None:
    if analysis.status in _FAILED_STATUSES:
        console.print(f"[bold red]{escape(analysis.error or '')}[/bold red]")

    for category, label in CATEGORY_LABELS.items():
        group = [f for f in functions if f.category.value == category]
        if group:
            console.print(_function_table(label, group))

    if analysis.events:
        table = Table(title="Events", title_justify="left")
        table.add_column("Signature", style="cyan")
        table.add_column("Declaration")
        for ev in analysis.events:
            table.add_row(ev.canonical_signature, ev.display_signature)
        console.print(table)

    if analysis.constructor_inputs is not None:
        console.print(f"[bold]Constructor:[/bold] ({escape(_format_params(analysis.constructor_inputs))})")

    console.print(
        f"[bold]read[/bold]={analysis.read_count} "
        f"[bold]write[/bold]={analysis.write_count} "
        f"[bold]payable[/bold]={analysis.payable_count} "
        f"[bold]events[/bold]={analysis.event_count}"
    )


def cmd_analyze(args: argparse.Namespace) -> int:
    config = _load_config(args.env_file)
    analysis = _analyze_path(args.path, config)
    functions = search_functions(analysis, args.search) if args.search else analysis.functions

    if args.json:
        data = analysis.to_dict()
        if args.search:
            matched = {f.name for f in functions}
            data["functions"] = [f for f in data["functions"] if f["name"] in matched]
        sys.stdout.write(json.dumps(data, indent=2, sort_keys=True) + "\n")
    else:
        print_analysis(analysis, functions)

    logger.info(f"functions={len(analysis.functions)} events={analysis.event_count} status={analysis.status.value}")
    return 1 if analysis.status in _FAILED_STATUSES else 0


def cmd_signature(args: argparse.Namespace) -> int:
    analysis = _analyze_path(args.path, _load_config(args.env_file))
    for f in analysis.functions:
        sys.stdout.write(f.canonical_signature + "\n")
    for ev in analysis.events:
        sys.stdout.write(ev.canonical_signature + "\n")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    result = validate_input(args.type, args.value)
    if result.valid:
        console.print(f"[green]valid[/green] {escape(args.type)}")
        return 0
    console.print(f"[red]invalid[/red] {escape(args.type)}: {escape(result.error or '')}")
    return 1


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Analyze smart-contract interface manifests")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_analyze = subparsers.add_parser("analyze", help="Analyze a manifest file")
    p_analyze.add_argument("path", type=Path, help="ABI JSON file (list or artifact with 'abi')")
    p_analyze.add_argument("--json", action="store_true", help="Emit the analysis as JSON")
    p_analyze.add_argument("--search", type=str, default=None, help="Filter functions by name")
    p_analyze.add_argument("--env-file", type=Path, default=None, help=".env file with ABI_LENS_* overrides")
    p_analyze.set_defaults(func=cmd_analyze)

    p_sig = subparsers.add_parser("signature", help="Print canonical signatures")
    p_sig.add_argument("path", type=Path, help="ABI JSON file")
    p_sig.add_argument("--env-file", type=Path, default=None, help=".env file with ABI_LENS_* overrides")
    p_sig.set_defaults(func=cmd_signature)

    p_val = subparsers.add_parser("validate", help="Validate a single value against a type")
    p_val.add_argument("type", type=str, help="Type string, e.g. uint256 or address[]")
    p_val.add_argument("value", type=str, help="Value as typed into a form")
    p_val.set_defaults(func=cmd_validate)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
