"""Command-line interface for inflating .unitypackage files.

This module provides the CLI entry point. Progress, warnings and errors
go to stderr; stdout is reserved for the optional JSON report.
"""

import argparse
import json
import sys
from pathlib import Path

from .config import configure
from .core.report import build_report
from .core.types import InflateResult
from .core.validator import collect_report_errors
from .pipeline import inflate_packages


def report_result(result: InflateResult) -> None:
    """Print the outcome of one package to stderr."""
    for warning in result.warnings:
        print(f"Warning: {warning.entry}: {warning.reason}. Skipping.", file=sys.stderr)

    for failure in result.failures:
        destination = result.output_root / failure.destination
        print(f"Error: {destination}: {failure.reason}", file=sys.stderr)

    if result.error is not None:
        print(f"Error: Failed to inflate {result.package} ({result.error})", file=sys.stderr)
    elif result.failures:
        print(
            f"Error: Failed to inflate {result.package} "
            f"({len(result.failures)} file(s) could not be written)",
            file=sys.stderr,
        )
    else:
        print(f"Info: Successfully inflated {result.package}.", file=sys.stderr)


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the inflate command."""
    parser = argparse.ArgumentParser(
        prog="unitypackage-inflate",
        description="Extract .unitypackage files into plain directory trees",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Inflate one package into ./Props/
  unitypackage-inflate Props.unitypackage

  # Inflate several packages on four worker processes
  unitypackage-inflate -w 4 downloads/*.unitypackage

  # Also print a JSON report of what was written
  unitypackage-inflate --report Props.unitypackage > report.json
        """,
    )

    parser.add_argument(
        "packages",
        nargs="+",
        type=Path,
        metavar="PACKAGE",
        help="Package file(s) to inflate; each is extracted next to itself",
    )

    parser.add_argument(
        "-w",
        "--workers",
        type=int,
        help="Number of packages inflated in parallel (default: CPU count, "
        "or $UNITYPACKAGE_INFLATE_WORKERS)",
    )

    parser.add_argument(
        "--report",
        action="store_true",
        help="Print a JSON report of every package to stdout",
    )

    args = parser.parse_args(argv)

    try:
        config = configure(max_workers=args.workers)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    for package in args.packages:
        print(f"Info: Inflating {package.stem}...", file=sys.stderr)

    results = inflate_packages(args.packages, config)

    for result in results:
        report_result(result)

    failed = any(not result.ok for result in results)

    if args.report:
        reports = [build_report(result) for result in results]

        report_errors = collect_report_errors(reports)
        if report_errors:
            for package, messages in report_errors.items():
                for message in messages:
                    print(f"Error: Invalid report for {package}: {message}", file=sys.stderr)
            sys.exit(1)

        json.dump(reports, sys.stdout, indent=2)
        print()  # Add newline at end

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
