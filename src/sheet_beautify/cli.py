"""
Command-line interface for sheet-beautify.

    sheet-beautify list                   - List the built-in property tests
    sheet-beautify run <test>             - Run a test by index or name
    sheet-beautify next                   - Resume the last failing test at its next sample
    sheet-beautify beautify <circuit>     - Build a YAML circuit, beautify it, report
    sheet-beautify metrics <circuit>      - Layout metrics over generated samples
    sheet-beautify config                 - View/manage configuration

Examples:
    sheet-beautify run 0
    sheet-beautify run gate-loop-beautify --start 120 --json
    sheet-beautify next
    sheet-beautify beautify circuits/gate_loop.yaml --offset 20 40
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from . import __version__
from .beautify import BeautifyOptions, beautify_sheet_with_report
from .config import (
    CONFIG_FILENAMES,
    USER_CONFIG_PATH,
    Config,
    generate_template,
    get_config_paths,
)
from .exceptions import SheetBeautifyError
from .geometry import XYPos
from .gentest import (
    ConsoleDisplay,
    ResultReport,
    SessionStore,
    collect_metrics,
    default_suite,
    make_display,
    next_error,
    run_suite_test,
    truncate,
)
from .gentest.circuits import (
    load_circuit,
    make_demux_mux_circuit,
    make_described_circuit,
    make_gate_loop_circuit,
    make_samples_demux_mux,
    make_samples_gate_loop,
)
from .logging import enable_verbose
from .router import ManhattanRouter

__all__ = ["main"]

BUILTIN_CIRCUITS = ("demux-mux", "gate-loop")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sheet-beautify",
        description="Schematic sheet beautifier and property test runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only print errors")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("list", help="List the built-in property tests")

    run_parser = subparsers.add_parser("run", help="Run a property test")
    run_parser.add_argument("test", help="Test index or name (see `list`)")
    run_parser.add_argument("--start", type=int, default=0, help="First sample to test")
    run_parser.add_argument("--display", choices=["none", "console"], help="Failing sample display")
    run_parser.add_argument("--json", action="store_true", help="Print results as JSON")

    next_parser = subparsers.add_parser("next", help="Resume the last failing test")
    next_parser.add_argument("--display", choices=["none", "console"], help="Failing sample display")
    next_parser.add_argument("--json", action="store_true", help="Print results as JSON")

    beautify_parser = subparsers.add_parser("beautify", help="Beautify a YAML circuit")
    beautify_parser.add_argument("circuit", type=Path, help="Circuit description file")
    beautify_parser.add_argument(
        "--offset",
        type=float,
        nargs=2,
        default=(0.0, 0.0),
        metavar=("DX", "DY"),
        help="Offset applied to every component position",
    )
    beautify_parser.add_argument("--phases", nargs="+", help="Phases to run (default: config)")

    metrics_parser = subparsers.add_parser("metrics", help="Layout metrics over samples")
    metrics_parser.add_argument("circuit", choices=BUILTIN_CIRCUITS, help="Sample circuit")
    metrics_parser.add_argument("--samples", type=int, default=20, help="Number of samples")
    metrics_parser.add_argument(
        "--no-beautify", action="store_true", help="Measure the circuits as routed"
    )
    metrics_parser.add_argument("--json", action="store_true", help="Print results as JSON")

    config_parser = subparsers.add_parser("config", help="View and manage configuration")
    group = config_parser.add_mutually_exclusive_group()
    group.add_argument("--show", action="store_true", help="Show effective configuration")
    group.add_argument("--init", action="store_true", help="Create template config file")
    group.add_argument("--paths", action="store_true", help="Show config file paths")
    config_parser.add_argument("--user", action="store_true", help="Use user config for --init")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the sheet-beautify CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    console = Console()
    err_console = Console(stderr=True)

    try:
        config = Config.load()
        if args.verbose or (config.defaults.verbose and not args.quiet):
            enable_verbose("DEBUG" if args.verbose else "INFO")

        if args.command == "list":
            return _list_tests(config, console)
        if args.command == "run":
            return _run_test(config, args, console)
        if args.command == "next":
            return _next_error(config, args, console)
        if args.command == "beautify":
            return _beautify(config, args, console)
        if args.command == "metrics":
            return _metrics(config, args, console)
        if args.command == "config":
            return _config(args, console)
    except SheetBeautifyError as e:
        if getattr(args, "json", False):
            print(json.dumps(e.to_dict(), indent=2))
        else:
            err_console.print(f"[red]Error:[/red] {e}")
        return 1
    except (ValidationError, ValueError, FileNotFoundError) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        return 1

    return 0


# ----------------------------------------------------------------------------
# Commands
# ----------------------------------------------------------------------------


def _list_tests(config: Config, console: Console) -> int:
    suite = default_suite(config)
    table = Table(title="Property tests")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="bold", no_wrap=True)
    table.add_column("Description")
    for i, test in enumerate(suite.tests):
        table.add_row(str(i), test.name, test.description)
    console.print(table)
    return 0


def _resolve_test(suite, key: str) -> int:
    if key.isdigit():
        index = int(key)
        if index < len(suite):
            return index
    else:
        index = suite.index_of(key)
        if index is not None:
            return index
    raise ValueError(f"No test '{key}'; run `sheet-beautify list` to see available tests")


def _report(result, as_json: bool, console: Console) -> int:
    report = ResultReport.from_result(result)
    if as_json:
        print(report.model_dump_json(indent=2))
        return 0 if report.passed else 1
    if report.passed:
        console.print(f"[green]Test {report.test_name} has PASSED.[/green]")
        return 0
    first = report.failures[0]
    console.print(
        f"[red]Test {report.test_name} has FAILED on sample {first.sample}[/red] "
        f"({len(report.failures)} of {report.samples - report.first_sample_tested} samples failed)"
    )
    console.print(first.message)
    return 1


def _display_for(config: Config, mode: Optional[str], console: Console):
    return make_display(mode or config.testing.display, console)


def _run_test(config: Config, args: argparse.Namespace, console: Console) -> int:
    suite = default_suite(config)
    index = _resolve_test(suite, args.test)
    store = SessionStore(config.testing.session_file)
    display = _display_for(config, args.display or ("none" if args.json else None), console)
    result = run_suite_test(suite, index, store, display, args.start)
    return _report(result, args.json, console)


def _next_error(config: Config, args: argparse.Namespace, console: Console) -> int:
    suite = default_suite(config)
    store = SessionStore(config.testing.session_file)
    display = _display_for(config, args.display or ("none" if args.json else None), console)
    result = next_error(suite, store, display)
    if result is None:
        console.print("Test finished")
        return 0
    return _report(result, args.json, console)


def _beautify(config: Config, args: argparse.Namespace, console: Console) -> int:
    description = load_circuit(args.circuit)
    router = ManhattanRouter(config.router.nub_length, config.router.separation)
    sheet = make_described_circuit(
        description, XYPos(*args.offset), router, max_coord=config.sheet.max_coord
    )
    options = BeautifyOptions.from_config(config)
    if args.phases:
        options = BeautifyOptions(tuple(args.phases), options.reject_out_of_bounds)
    result, report = beautify_sheet_with_report(sheet, router, options)

    console.print(f"[bold]{description.name}[/bold]")
    console.print(
        f"Straight wires: {report.straight_before} -> {report.straight_after} "
        f"of {report.total_wires}"
    )
    ConsoleDisplay(console).show_failing_sample(result)
    return 0


def _metrics(config: Config, args: argparse.Namespace, console: Console) -> int:
    if args.circuit == "demux-mux":
        samples = make_samples_demux_mux(limit=40)
        maker = lambda s: make_demux_mux_circuit(450.0, s)  # noqa: E731
    else:
        samples = make_samples_gate_loop(limit=40)
        maker = lambda s: make_gate_loop_circuit(200.0, s)  # noqa: E731

    transform = None
    if not args.no_beautify:
        router = ManhattanRouter(config.router.nub_length, config.router.separation)
        options = BeautifyOptions.from_config(config)
        transform = lambda sheet: beautify_sheet_with_report(sheet, router, options)[0]  # noqa: E731

    results = collect_metrics(truncate(samples, args.samples), maker, transform)
    if args.json:
        print(json.dumps([r.model_dump() for r in results], indent=2))
        return 0

    table = Table(title=f"Metrics: {args.circuit}")
    table.add_column("Sample", justify="right")
    table.add_column("Symbol overlaps", justify="right")
    table.add_column("Wire/symbol intersections", justify="right")
    table.add_column("Straight wires", justify="right")
    for r in results:
        m = r.metrics
        table.add_row(
            str(r.sample),
            str(m.symbol_overlaps),
            str(m.wire_symbol_intersections),
            f"{m.straight_wires}/{m.total_wires}",
        )
    console.print(table)
    return 0


def _config(args: argparse.Namespace, console: Console) -> int:
    if args.init:
        target = USER_CONFIG_PATH if args.user else Path.cwd() / CONFIG_FILENAMES[1]
        if target.exists():
            console.print(f"[yellow]Config file already exists: {target}[/yellow]")
            return 1
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(generate_template())
        console.print(f"Created {target}")
        return 0

    if args.paths:
        for name, path in get_config_paths().items():
            console.print(f"{name}: {path if path else '(not found)'}")
        return 0

    config = Config.load()
    table = Table(title="Effective configuration")
    table.add_column("Key", style="bold")
    table.add_column("Value")
    table.add_column("Source", style="dim")
    for key, value in config.items():
        table.add_row(key, repr(value), config.get_source(key))
    console.print(table)
    return 0


if __name__ == "__main__":
    sys.exit(main())
