import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from changescope.analyzers import ImpactReport
from changescope.cli import analyze
from changescope.core import ChangeSet, ChangeListError, ImpactConfiguration


def make_report():
    return ImpactReport(
        changes=ChangeSet.from_paths(["pkgA/a.go", "main.go"]),
        altered={"pkgA", "."},
        seeded={"pkgA", "."},
        impacted={"pkgA", "pkgB", "."},
        buildable=[".", "pkgA", "pkgB"],
        reasons={".": "altered", "pkgA": "altered", "pkgB": "imports pkgA (regular)"},
    )


@pytest.fixture
def analyzer():
    with patch("changescope.cli.ImpactAnalyzer") as cls:
        instance = cls.return_value
        instance.changed_files.return_value = ChangeSet.from_paths(["pkgA/a.go", "main.go"])
        instance.analyze.return_value = make_report()
        yield cls


def test_prints_dot_prefixed_paths(analyzer):
    result = CliRunner().invoke(analyze, ["./..."])
    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines() == ["./.", "./pkgA", "./pkgB"]

    config = analyzer.call_args[0][0]
    assert isinstance(config, ImpactConfiguration)
    assert config.diff == "HEAD"
    assert config.package_patterns == ("./...",)
    assert config.include_staged is False


def test_options_reach_configuration(analyzer):
    result = CliRunner().invoke(analyze, ["--diff", "a...b", "--include-staged", "--go", "go1.22", "./x"])
    assert result.exit_code == 0, result.output
    config = analyzer.call_args[0][0]
    assert config.diff == "a...b"
    assert config.include_staged is True
    assert config.go_binary == "go1.22"


def test_json_format(analyzer):
    result = CliRunner().invoke(analyze, ["--format", "json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["buildable"] == [".", "pkgA", "pkgB"]
    assert data["reasons"]["pkgB"] == "imports pkgA (regular)"


def test_output_file(analyzer, tmp_path):
    target = tmp_path / "impacted.txt"
    result = CliRunner().invoke(analyze, ["--output", str(target)])
    assert result.exit_code == 0, result.output
    assert target.read_text() == "./.\n./pkgA\n./pkgB\n"
    assert result.stdout == ""


def test_debug_sections(analyzer):
    result = CliRunner().invoke(analyze, ["--debug"])
    assert result.exit_code == 0, result.output
    assert "--- git diffs ---" in result.stderr
    assert "--- paths impacted ---" in result.stderr
    assert "--- buildable paths impacted ---" in result.stderr
    assert result.stdout.splitlines() == ["./.", "./pkgA", "./pkgB"]


def test_fatal_error_exits_non_zero(analyzer):
    analyzer.return_value.changed_files.side_effect = ChangeListError("git diff failed: bad revision")
    result = CliRunner().invoke(analyze, ["--diff", "nope"])
    assert result.exit_code == 1
    assert "bad revision" in result.stderr
    assert result.stdout == ""
