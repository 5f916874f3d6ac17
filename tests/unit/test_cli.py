"""CLI tests.

Covers the version, resolve and map-point commands in text and JSON form.
"""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from worldraster import __version__
from worldraster.cli.main import app

runner = CliRunner()
ENV = {"NO_COLOR": "1", "TERM": "dumb"}


def test_help_shown_without_subcommand() -> None:
    result = runner.invoke(app, [], env=ENV)
    assert result.exit_code == 0
    assert "resolve" in result.stdout
    assert "map-point" in result.stdout


def test_version_command_outputs_version() -> None:
    result = runner.invoke(app, ["version"], env=ENV)
    assert result.exit_code == 0
    assert f"worldraster {__version__}" in result.stdout


def test_version_json() -> None:
    result = runner.invoke(app, ["version", "--json"], env=ENV)
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"version": __version__}


class TestResolve:
    """Tests for the resolve command."""

    def test_text_output(self) -> None:
        result = runner.invoke(
            app,
            ["resolve", "--area", "-5", "-5", "10", "10", "--resolution", "0.1", "0.1"],
            env=ENV,
        )
        assert result.exit_code == 0
        assert "Pixels: 100 x 100" in result.stdout
        assert "Effective resolution: 0.1 x 0.1" in result.stdout

    def test_json_output(self) -> None:
        result = runner.invoke(
            app,
            [
                "resolve",
                "--area", "0", "0", "10", "20",
                "--resolution", "3", "0.4",
                "--json",
            ],
            env=ENV,
        )
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert (payload["width"], payload["height"]) == (3, 50)
        assert payload["resolution"]["x"] == pytest.approx(10 / 3)
        assert payload["resolution"]["y"] == pytest.approx(0.4)

    def test_invalid_resolution_json(self) -> None:
        result = runner.invoke(
            app,
            ["resolve", "--area", "0", "0", "1", "1", "--resolution", "0", "1", "--json"],
            env=ENV,
        )
        assert result.exit_code == 1
        assert "finite and positive" in json.loads(result.stdout)["error"]

    def test_invalid_area_text(self) -> None:
        result = runner.invoke(
            app,
            ["resolve", "--area", "0", "0", "0", "1", "--resolution", "1", "1"],
            env=ENV,
        )
        assert result.exit_code == 1
        assert "Error:" in result.output


class TestMapPoint:
    """Tests for the map-point command."""

    def test_text_output(self) -> None:
        result = runner.invoke(
            app,
            [
                "map-point",
                "--area", "-5", "-5", "10", "10",
                "--size", "100", "100",
                "--point", "0", "0",
            ],
            env=ENV,
        )
        assert result.exit_code == 0
        assert "Pixel: (50, 50)" in result.stdout

    def test_json_output(self) -> None:
        result = runner.invoke(
            app,
            [
                "map-point",
                "--area", "0", "0", "10", "10",
                "--size", "100", "50",
                "--point", "2.5", "12",
                "--json",
            ],
            env=ENV,
        )
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["x"] == pytest.approx(25)
        assert payload["y"] == pytest.approx(60)

    def test_empty_grid_rejected(self) -> None:
        result = runner.invoke(
            app,
            [
                "map-point",
                "--area", "0", "0", "10", "10",
                "--size", "0", "10",
                "--point", "1", "1",
                "--json",
            ],
            env=ENV,
        )
        assert result.exit_code == 1
        assert "must be positive" in json.loads(result.stdout)["error"]
