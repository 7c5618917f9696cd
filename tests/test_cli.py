"""Tests for the nzbeam command-line interface."""
import sys

import pytest
import yaml
from click.testing import CliRunner
from loguru import logger

from nzbeam import __version__
from nzbeam.cli import main
from nzbeam.input_parser import generate_template


@pytest.fixture(autouse=True)
def restore_logging():
    """The CLI points loguru at the runner's captured stderr; put it back."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def design_file(tmp_path):
    path = tmp_path / "beam.yaml"
    path.write_text(generate_template(), encoding="utf-8")
    return path


@pytest.fixture
def no_reinforcement_file(tmp_path):
    data = yaml.safe_load(generate_template())
    del data["final_reinforcement"]
    path = tmp_path / "bare.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


class TestCommands:

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_template(self, runner):
        result = runner.invoke(main, ["template"])
        assert result.exit_code == 0
        assert yaml.safe_load(result.output)["design_forces"]["moment"] == 50

    def test_grades(self, runner):
        result = runner.invoke(main, ["grades"])
        assert result.exit_code == 0
        assert "C30" in result.output
        assert "500E" in result.output
        assert "Observation Type A" in result.output

    def test_options(self, runner, design_file):
        result = runner.invoke(main, ["options", str(design_file), "--limit", "3"])
        assert result.exit_code == 0
        assert "feasible option(s)" in result.output
        assert " x HD" in result.output

    def test_check(self, runner, design_file):
        result = runner.invoke(main, ["check", str(design_file)])
        assert result.exit_code == 0
        assert "Moment Capacity" in result.output
        assert "Overall: FAIL" in result.output

    def test_check_with_option(self, runner, design_file):
        result = runner.invoke(main, ["check", str(design_file), "--option", "1"])
        assert result.exit_code == 0
        assert "Shear Capacity" in result.output

    def test_check_without_reinforcement(self, runner, no_reinforcement_file):
        result = runner.invoke(main, ["check", str(no_reinforcement_file)])
        assert result.exit_code == 0
        assert "No final reinforcement selected." in result.output

    def test_sls(self, runner, design_file):
        result = runner.invoke(main, ["sls", str(design_file)])
        assert result.exit_code == 0
        assert "SLS Crack Width, w_sls" in result.output

    def test_report(self, runner, design_file, tmp_path):
        out = tmp_path / "out" / "report.pdf"
        result = runner.invoke(main, ["report", str(design_file), "-o", str(out)])
        assert result.exit_code == 0
        assert out.read_bytes().startswith(b"%PDF")

    def test_report_with_option_generates_options_once(self, runner, design_file, tmp_path, monkeypatch):
        from nzbeam import cli

        calls = []
        real_generate = cli.generate_options

        def counting_generate(*args, **kwargs):
            calls.append(args)
            return real_generate(*args, **kwargs)

        monkeypatch.setattr(cli, "generate_options", counting_generate)
        out = tmp_path / "option.pdf"
        result = runner.invoke(main, ["report", str(design_file), "-o", str(out), "--option", "1"])
        assert result.exit_code == 0
        assert len(calls) == 1
        assert out.read_bytes().startswith(b"%PDF")

    def test_verbose_flag(self, runner, design_file):
        result = runner.invoke(main, ["-v", "options", str(design_file)])
        assert result.exit_code == 0


class TestErrors:

    def test_sls_without_reinforcement(self, runner, no_reinforcement_file):
        result = runner.invoke(main, ["sls", str(no_reinforcement_file)])
        assert result.exit_code == 1

    def test_option_out_of_range(self, runner, design_file):
        result = runner.invoke(main, ["check", str(design_file), "--option", "999"])
        assert result.exit_code == 1

    def test_no_feasible_option(self, runner, tmp_path):
        data = yaml.safe_load(generate_template())
        data["design_forces"]["moment"] = 5000
        path = tmp_path / "huge.yaml"
        path.write_text(yaml.safe_dump(data), encoding="utf-8")

        assert runner.invoke(main, ["options", str(path)]).exit_code == 0
        assert runner.invoke(main, ["sls", str(path), "--option", "1"]).exit_code == 1

    def test_invalid_input(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("beam_geometry:\n  breadth: -200\n", encoding="utf-8")
        result = runner.invoke(main, ["check", str(path)])
        assert result.exit_code == 1

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(main, ["check", str(tmp_path / "missing.yaml")])
        assert result.exit_code != 0
