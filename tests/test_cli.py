import json

import pytest
from typer.testing import CliRunner

from ngsreports import __version__
from ngsreports.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for key in ("NGSREPORTS_CONCURRENCY", "NGSREPORTS_SCAN_DEPTH", "NGSREPORTS_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def run_dir(tmp_path, make_output):
    run = tmp_path / "run"
    run.mkdir()
    make_output(run, "S1")
    make_output(run, "S2", archive=False)
    return run


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert f"ngsreports v{__version__}" in result.output


def test_parse_json(run_dir):
    result = runner.invoke(app, ["parse", str(run_dir), "--json"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert [r["Basic_Statistics"]["rows"][0]["Filename"] for r in payload] == [
        "S1.fastq.gz", "S2.fastq.gz",
    ]
    assert payload[0]["Total_Deduplicated_Percentage"] == 87.25


def test_parse_table(run_dir):
    result = runner.invoke(app, ["parse", str(run_dir / "S1_fastqc.zip")])
    assert result.exit_code == 0, result.output
    assert "25,000" in result.output


def test_parse_failure_exits_non_zero(run_dir, make_output, make_lines):
    make_output(run_dir, "S3", lines=make_lines("S3.fastq.gz", drop=("Kmer Content",)))
    result = runner.invoke(app, ["parse", str(run_dir)])
    assert result.exit_code == 1
    assert "Kmer_Content" in result.output

    partial = runner.invoke(app, ["parse", str(run_dir), "--partial", "--json"])
    assert partial.exit_code == 1
    assert "MissingModule" in partial.output


def test_parse_without_reports(tmp_path):
    empty = tmp_path / "empty"
    empty.mkdir()
    result = runner.invoke(app, ["parse", str(empty)])
    assert result.exit_code == 1
    assert "No FastQC reports found" in result.output


def test_summary_grid(run_dir):
    result = runner.invoke(app, ["summary", str(run_dir)])
    assert result.exit_code == 0, result.output
    assert "FAIL" in result.output
    assert "WARN" in result.output


def test_totals(run_dir):
    result = runner.invoke(app, ["totals", str(run_dir)])
    assert result.exit_code == 0, result.output
    assert "25,000" in result.output

    millions = runner.invoke(app, ["totals", str(run_dir), "--millions"])
    assert millions.exit_code == 0
    assert "(millions)" in millions.output


def test_scan(run_dir):
    result = runner.invoke(app, ["scan", str(run_dir)])
    assert result.exit_code == 0
    assert "S1_fastqc.zip (archive)" in result.output
    assert "S2_fastqc (directory)" in result.output


def test_scan_missing_directory(tmp_path):
    result = runner.invoke(app, ["scan", str(tmp_path / "missing")])
    assert result.exit_code == 1


def test_scan_file_instead_of_directory(run_dir):
    result = runner.invoke(app, ["scan", str(run_dir / "S1_fastqc.zip")])
    assert result.exit_code == 1
    assert "Not a directory" in result.output
