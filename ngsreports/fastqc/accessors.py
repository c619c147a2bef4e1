"""Accessors that work on a single Report or on any sequence of Reports.

Each function accepts a Report, a ReportCollection, a PartialCollection
or a plain iterable of Reports and returns long-format records with a
``Filename`` column first, ready for the plotting and reporting layers.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Iterator, Union

from ngsreports.fastqc.models import PartialCollection, Report

# Captures everything before .fastq / .fq (and any compression suffix)
DEFAULT_NAME_PATTERN = r"(.+)\.(fastq|fq).*"

Reports = Union[Report, PartialCollection, Iterable[Report]]


def iter_reports(reports: Reports) -> Iterator[Report]:
    if isinstance(reports, Report):
        yield reports
    elif isinstance(reports, PartialCollection):
        yield from reports.reports
    else:
        yield from reports


def file_names(reports: Reports) -> list[str]:
    return [report.filename for report in iter_reports(reports)]


def versions(reports: Reports) -> list[dict[str, Any]]:
    return [
        {"Filename": report.filename, "Version": report.version}
        for report in iter_reports(reports)
    ]


def module_records(reports: Reports, module: str) -> list[dict[str, Any]]:
    """All rows of one module across reports, each prefixed with its Filename."""
    records = []
    for report in iter_reports(reports):
        filename = report.filename
        for record in report.module(module).to_records():
            records.append({"Filename": filename, **record})
    return records


def summary_records(reports: Reports) -> list[dict[str, Any]]:
    return [row.record() for report in iter_reports(reports) for row in report.summary]


def deduplicated_percentages(reports: Reports) -> list[dict[str, Any]]:
    """Total Deduplicated Percentage per file (``None`` when not reported)."""
    return [
        {"Filename": report.filename, "Total": report.deduplicated_percentage}
        for report in iter_reports(reports)
    ]


def read_totals(reports: Reports) -> list[dict[str, Any]]:
    return [
        {
            "Filename": report.filename,
            "Total_Sequences": report.basic_statistics.rows[0].total_sequences,
        }
        for report in iter_reports(reports)
    ]


def trim_names(names: list[str], pattern: str = DEFAULT_NAME_PATTERN) -> list[str]:
    """Shorten file names to the first capture group of `pattern`.

    Names that do not match are returned unchanged.

    Raises:
        ValueError: the pattern has no capture group, or trimming would make
            two different files share a name.
    """
    regex = re.compile(pattern)
    if regex.groups < 1:
        raise ValueError(f"Pattern {pattern!r} has no capture group")
    trimmed = []
    for name in names:
        match = regex.fullmatch(name)
        trimmed.append(match.group(1) if match else name)
    if len(set(trimmed)) != len(set(names)):
        raise ValueError(
            "The supplied pattern results in duplicated file names"
        )
    return trimmed


def top_kmers(reports: Reports, n: int = 6, method: str = "overall") -> list[str]:
    """Select the k-mers with the highest Obs/Exp_Max.

    ``overall`` ranks all k-mers across files together; ``individual``
    takes the top `n` from each file and returns their union, in order of
    first appearance.
    """
    if method not in ("overall", "individual"):
        raise ValueError(f"Unknown method {method!r}; use 'overall' or 'individual'")

    if method == "overall":
        rows = [row for report in iter_reports(reports) for row in report.kmer_content.rows]
        groups = [rows]
    else:
        groups = [list(report.kmer_content.rows) for report in iter_reports(reports)]

    selected: list[str] = []
    for rows in groups:
        ranked = sorted(rows, key=lambda row: row.obs_exp_max, reverse=True)
        picked: list[str] = []
        for row in ranked:
            if row.sequence not in picked:
                picked.append(row.sequence)
            if len(picked) == n:
                break
        selected.extend(seq for seq in picked if seq not in selected)
    return selected
