"""
Tests for CLI functionality.

These tests verify the command-line interface logic.
"""

from __future__ import annotations

import argparse
import json
from datetime import date
from io import StringIO
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest

from storm_report.cli import (
    EXIT_INVALID_REQUEST,
    EXIT_RENDER_ERROR,
    cmd_analyze,
    cmd_info,
    cmd_report,
    create_parser,
    main,
)
from storm_report.errors import RenderError
from storm_report.reference.localities import SEEDED_PLACES
from storm_report.schemas import AnalysisRequest, AnalysisResult

if TYPE_CHECKING:
    from pathlib import Path


def _args(*argv: str) -> argparse.Namespace:
    return create_parser().parse_args(list(argv))


def _result() -> AnalysisResult:
    return AnalysisResult(
        resolution_requested="hourly",
        tz="Europe/Lisbon",
        period_start=date(2025, 5, 2),
        period_end=date(2025, 5, 3),
        place=SEEDED_PLACES["porto"],
        icao="LPPR",
    )


class TestCreateParser:
    """Tests for create_parser function."""

    def test_creates_parser(self) -> None:
        """Parser is created successfully."""
        parser = create_parser()
        assert isinstance(parser, argparse.ArgumentParser)
        assert parser.prog == "storm-report"

    def test_parser_has_version(self) -> None:
        """Parser has version argument."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--version"])

    def test_parser_has_debug_flag(self) -> None:
        """Parser accepts --debug flag."""
        args = _args("--debug", "info")
        assert args.debug is True

    def test_parser_analyze_command(self) -> None:
        """Analyze takes a place and a date range."""
        args = _args("analyze", "Porto", "--start", "2025-05-02", "--end", "2025-05-03")
        assert args.command == "analyze"
        assert args.place == "Porto"
        assert args.resolution == "hourly"
        assert args.reanalysis_fallback is None

    def test_parser_coordinates(self) -> None:
        """Coordinates replace the place name."""
        args = _args("analyze", "--lat", "41.0", "--lon", "-8.63", "--start", "2025-05-02", "--end", "2025-05-03")
        assert args.place is None
        assert (args.lat, args.lon) == (41.0, -8.63)

    def test_parser_fallback_flags(self) -> None:
        """--fallback and --no-fallback set the merge option."""
        base = ("analyze", "Porto", "--start", "2025-05-02", "--end", "2025-05-03")
        assert _args(*base, "--no-fallback").reanalysis_fallback is False
        assert _args(*base, "--fallback").reanalysis_fallback is True

    def test_parser_report_output(self) -> None:
        """Report accepts an output path."""
        args = _args("report", "Porto", "--start", "2025-05-02", "--end", "2025-05-03", "-o", "out.html")
        assert str(args.output) == "out.html"

    def test_parser_info_command(self) -> None:
        """Parser accepts info command."""
        assert _args("info").command == "info"


class TestCmdAnalyze:
    """Tests for cmd_analyze function."""

    def test_prints_json(self) -> None:
        """The result is printed as JSON."""
        args = _args("analyze", "Porto", "--start", "2025-05-02", "--end", "2025-05-03")

        with (
            patch("storm_report.cli.analyze", return_value=_result()) as mock_analyze,
            patch("sys.stdout", new=StringIO()) as mock_stdout,
        ):
            exit_code = cmd_analyze(args)

        assert exit_code == 0
        payload = json.loads(mock_stdout.getvalue())
        assert payload["ok"] is True
        assert payload["icao"] == "LPPR"
        request = mock_analyze.call_args.args[0]
        assert isinstance(request, AnalysisRequest)
        assert request.place == "Porto"

    def test_invalid_dates(self) -> None:
        """start after end exits with 2 without running the flow."""
        args = _args("analyze", "Porto", "--start", "2025-05-04", "--end", "2025-05-03")

        with (
            patch("storm_report.cli.analyze") as mock_analyze,
            patch("sys.stderr", new=StringIO()) as mock_stderr,
        ):
            exit_code = cmd_analyze(args)

        assert exit_code == EXIT_INVALID_REQUEST
        assert "Invalid request" in mock_stderr.getvalue()
        mock_analyze.assert_not_called()

    def test_missing_place(self) -> None:
        """Neither place nor coordinates is invalid."""
        args = _args("analyze", "--start", "2025-05-02", "--end", "2025-05-03")
        with patch("storm_report.cli.analyze"), patch("sys.stderr", new=StringIO()):
            assert cmd_analyze(args) == EXIT_INVALID_REQUEST


class TestCmdReport:
    """Tests for cmd_report function."""

    def test_writes_report(self, tmp_path: Path) -> None:
        """Report command passes the output path to the flow."""
        args = _args("report", "Porto", "--start", "2025-05-02", "--end", "2025-05-03", "-o", str(tmp_path))
        summary = {"output": str(tmp_path / "r.html"), "size": 10, "notes": ["station data unavailable"]}

        with (
            patch("storm_report.cli.build_report", return_value=summary) as mock_build,
            patch("sys.stdout", new=StringIO()) as mock_stdout,
        ):
            exit_code = cmd_report(args)

        assert exit_code == 0
        assert mock_build.call_args.kwargs["output"] == tmp_path
        output = mock_stdout.getvalue()
        assert "r.html" in output
        assert "station data unavailable" in output

    def test_render_error(self) -> None:
        """A render failure exits with 1."""
        args = _args("report", "Porto", "--start", "2025-05-02", "--end", "2025-05-03")

        with (
            patch("storm_report.cli.build_report", side_effect=RenderError("boom")),
            patch("sys.stderr", new=StringIO()) as mock_stderr,
        ):
            exit_code = cmd_report(args)

        assert exit_code == EXIT_RENDER_ERROR
        assert "boom" in mock_stderr.getvalue()


class TestCmdInfo:
    """Tests for cmd_info function."""

    def test_returns_zero(self) -> None:
        """Info command returns exit code 0."""
        with patch("sys.stdout", new=StringIO()):
            assert cmd_info(argparse.Namespace()) == 0

    def test_prints_app_info(self) -> None:
        """Info command prints application information."""
        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            cmd_info(argparse.Namespace())
        output = mock_stdout.getvalue()
        assert "Application" in output
        assert "Version" in output
        assert "Time zone" in output


class TestMain:
    """Tests for main function."""

    def test_no_command_shows_help(self) -> None:
        """No command shows help and exits 0."""
        with patch("sys.stdout", new=StringIO()):
            assert main([]) == 0

    def test_info_command_executes(self) -> None:
        """Info command executes successfully."""
        with patch("storm_report.cli.cmd_info", return_value=0) as mock_cmd:
            assert main(["info"]) == 0
            mock_cmd.assert_called_once()

    def test_analyze_command_executes(self) -> None:
        """Analyze command is dispatched."""
        with patch("storm_report.cli.cmd_analyze", return_value=0) as mock_cmd:
            assert main(["analyze", "Porto", "--start", "2025-05-02", "--end", "2025-05-03"]) == 0
            mock_cmd.assert_called_once()

    def test_exit_code_propagates(self) -> None:
        """The command's exit code is returned."""
        with patch("storm_report.cli.cmd_report", return_value=EXIT_RENDER_ERROR):
            assert main(["report", "Porto", "--start", "2025-05-02", "--end", "2025-05-03"]) == 1
