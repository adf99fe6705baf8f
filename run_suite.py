#!/usr/bin/env python3
"""
Run the StorySpoil API suite against a live deployment.

Usage:
    python run_suite.py                              - run against STORYSPOIL_BASE_URL
    python run_suite.py --base-url http://host/api   - run against another deployment
    python run_suite.py -v                           - include request-level debug logs

Exit codes:
    0 - every scenario passed or was skipped
    1 - at least one scenario failed
    2 - test account could not be registered or logged in
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from storyspoil import scenarios
from storyspoil.config import SuiteConfig, get_log_level, get_suite_config
from storyspoil.errors import FixtureSetupError
from storyspoil.logging import configure_logging
from storyspoil.scenarios import Outcome, SuiteReport

OUTCOME_STYLES = {
    Outcome.PASSED: "green",
    Outcome.FAILED: "bold red",
    Outcome.SKIPPED: "yellow",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="End-to-end checks for the StorySpoil story API"
    )
    parser.add_argument(
        "--base-url",
        help="API root, e.g. https://host/api (default: STORYSPOIL_BASE_URL)"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Request timeout in seconds (default: STORYSPOIL_TIMEOUT or 30)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every request"
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Plain console output"
    )
    return parser


def resolve_config(args: argparse.Namespace) -> SuiteConfig:
    config = get_suite_config()
    return SuiteConfig(
        base_url=args.base_url or config.base_url,
        timeout=args.timeout if args.timeout is not None else config.timeout,
        password=config.password,
        username_prefix=config.username_prefix,
    )


def render_report(report: SuiteReport, console: Console) -> None:
    table = Table(title="StorySpoil API suite")
    table.add_column("#", justify="right")
    table.add_column("Scenario")
    table.add_column("Outcome")
    table.add_column("Time", justify="right")
    table.add_column("Details", overflow="fold")

    for result in report.results:
        style = OUTCOME_STYLES[result.outcome]
        table.add_row(
            str(result.order),
            result.name,
            f"[{style}]{result.outcome.value}[/{style}]",
            f"{result.elapsed:.2f}s",
            escape(result.message),
        )
    console.print(table)
    console.print(
        f"{report.count(Outcome.PASSED)} passed, "
        f"{report.count(Outcome.FAILED)} failed, "
        f"{report.count(Outcome.SKIPPED)} skipped"
    )


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    console = Console(color_system=None if args.no_color else "auto")

    try:
        configure_logging(
            logging.DEBUG if args.verbose else get_log_level(), color=not args.no_color
        )
        config = resolve_config(args)
    except ValueError as e:
        console.print(f"Error: {escape(str(e))}")
        return 2

    try:
        report = scenarios.run_suite(config)
    except FixtureSetupError as e:
        console.print(f"Setup failed, no scenarios were run: {escape(str(e))}")
        return 2

    render_report(report, console)
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
