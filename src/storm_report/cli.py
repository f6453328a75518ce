"""
Command-line interface for storm-report.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from storm_report import __version__
from storm_report.config import get_settings
from storm_report.errors import RenderError, ValidationError
from storm_report.flows.analyze import analyze
from storm_report.flows.report import build_report
from storm_report.schemas import AnalysisRequest

EXIT_OK = 0
EXIT_RENDER_ERROR = 1
EXIT_INVALID_REQUEST = 2


def _request_arguments() -> argparse.ArgumentParser:
    """Arguments shared by every command that runs an analysis."""
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument("place", nargs="?", help="Place name (e.g. Porto)")
    parent.add_argument("--lat", type=float, help="Latitude, instead of a place name")
    parent.add_argument("--lon", type=float, help="Longitude, instead of a place name")
    parent.add_argument("--start", required=True, help="First day, YYYY-MM-DD")
    parent.add_argument("--end", required=True, help="Last day, YYYY-MM-DD")
    parent.add_argument(
        "--resolution",
        default="hourly",
        help="Requested resolution (only 'hourly' is computed; default: hourly)",
    )
    fallback = parent.add_mutually_exclusive_group()
    fallback.add_argument(
        "--fallback",
        dest="reanalysis_fallback",
        action="store_const",
        const=True,
        help="Fill station gaps with reanalysis values",
    )
    fallback.add_argument(
        "--no-fallback",
        dest="reanalysis_fallback",
        action="store_const",
        const=False,
        help="Use station observations only",
    )
    return parent


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="storm-report",
        description="Reconciled hourly wind, rain and thunder reports for a place and period",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    request_args = _request_arguments()

    # 'analyze' command - print the merged timeline as JSON
    subparsers.add_parser(
        "analyze", parents=[request_args], help="Print the analysis result as JSON"
    )

    # 'report' command - write the HTML report
    report_parser = subparsers.add_parser(
        "report", parents=[request_args], help="Write the HTML report document"
    )
    report_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output file or directory (default: reports/<generated name>)",
    )

    # 'info' command
    subparsers.add_parser("info", help="Show application info")

    return parser


def _parse_request(args: argparse.Namespace) -> AnalysisRequest:
    return AnalysisRequest.parse(
        place=args.place,
        lat=args.lat,
        lon=args.lon,
        start=args.start,
        end=args.end,
        resolution=args.resolution,
        reanalysis_fallback=args.reanalysis_fallback,
    )


def cmd_analyze(args: argparse.Namespace) -> int:
    """Handle the 'analyze' command."""
    try:
        request = _parse_request(args)
        result = analyze(request)
    except ValidationError as exc:
        print(f"Invalid request: {exc}", file=sys.stderr)
        return EXIT_INVALID_REQUEST

    print(result.model_dump_json(indent=2))
    return EXIT_OK


def cmd_report(args: argparse.Namespace) -> int:
    """Handle the 'report' command."""
    try:
        request = _parse_request(args)
        summary = build_report(request, output=args.output)
    except ValidationError as exc:
        print(f"Invalid request: {exc}", file=sys.stderr)
        return EXIT_INVALID_REQUEST
    except RenderError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_RENDER_ERROR

    print(f"Report written: {summary['output']} ({summary['size']} bytes)")
    for note in summary["notes"]:
        print(f"  note: {note}")
    return EXIT_OK


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Time zone: {settings.timezone}")
    print(f"Country: {settings.country_code}")
    print(f"Default locality: {settings.default_locality}")
    print(f"Reanalysis fallback: {settings.reanalysis_fallback}")
    print(f"Meteostat API key: {'set' if settings.meteostat_api_key else 'not set'}")
    print(f"Debug: {settings.debug}")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    debug = args.debug or get_settings().debug
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    commands = {
        "analyze": cmd_analyze,
        "report": cmd_report,
        "info": cmd_info,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
