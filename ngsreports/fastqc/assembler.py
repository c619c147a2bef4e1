"""Assemble decoded modules into a validated Report."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence

from ngsreports.fastqc.decoders import DecodedModule, registry
from ngsreports.fastqc.errors import MalformedSummary, ReportError
from ngsreports.fastqc.models import (
    MODULE_FIELDS,
    REQUIRED_MODULES,
    Report,
    SummaryRow,
)
from ngsreports.fastqc.source import parse_summary, read_lines, read_summary_lines
from ngsreports.fastqc.splitter import SplitReport, split_modules

logger = logging.getLogger(__name__)


def decode_modules(split: SplitReport) -> dict[str, DecodedModule]:
    """Run the registered decoder of every required module."""
    decoded: dict[str, DecodedModule] = {}
    modules = split.modules
    for name in REQUIRED_MODULES:
        if not registry.has(name):
            raise RuntimeError(f"No decoder registered for module {name}")
        decoded[name] = registry.get(name)().decode(modules[name])
    return decoded


def validate_summary(summary: Sequence[SummaryRow], filename: str) -> tuple[SummaryRow, ...]:
    """Check the PASS/WARN/FAIL table against the parsed report.

    An empty summary is accepted. Otherwise every row must refer to
    `filename`, no (module, filename) pair may repeat, and each required
    module needs a row. Unknown modules are passed through.

    Raises:
        MalformedSummary: any of the above does not hold.
    """
    rows = tuple(summary)
    if not rows:
        return rows

    others = sorted({row.filename for row in rows if row.filename != filename})
    if others:
        raise MalformedSummary(
            f"Summary refers to {', '.join(others)}; report is for {filename}"
        )

    seen: set[str] = set()
    for row in rows:
        if row.module in seen:
            raise MalformedSummary(
                f"Summary has more than one row for {row.module} / {row.filename}"
            )
        seen.add(row.module)

    unknown = [row.module for row in rows if row.module not in MODULE_FIELDS]
    if unknown:
        logger.warning("Summary lists unknown module(s): %s", ", ".join(unknown))

    missing = [name for name in REQUIRED_MODULES if name not in seen]
    if missing:
        raise MalformedSummary(f"Summary has no row for: {', '.join(missing)}")
    return rows


def assemble_report(
    split: SplitReport,
    summary: Sequence[SummaryRow] | None = None,
    source_path: str = "<memory>",
) -> Report:
    """Decode all required modules and build one immutable Report.

    Any ReportError raised on the way is re-raised with its `source` set to
    `source_path`; no partially built Report is ever returned.
    """
    try:
        decoded = decode_modules(split)
        basic = decoded["Basic_Statistics"].table
        filename = basic.rows[0].filename
        checked = validate_summary(summary or (), filename)
        fields = {MODULE_FIELDS[name]: module.table for name, module in decoded.items()}
        report = Report(
            source_path=source_path,
            format_version=split.version,
            summary=checked,
            deduplicated_percentage=decoded["Sequence_Duplication_Levels"].scalar,
            **fields,
        )
    except ReportError as exc:
        exc.source = exc.source or source_path
        raise

    logger.debug("Assembled report for %s from %s", filename, source_path)
    return report


def parse_report(
    lines: Iterable[str],
    summary: Sequence[SummaryRow] | None = None,
    source_path: str = "<memory>",
) -> Report:
    """Split and assemble the text lines of one report."""
    try:
        split = split_modules(lines)
    except ReportError as exc:
        exc.source = exc.source or source_path
        raise
    return assemble_report(split, summary, source_path)


def load_report(path: str | Path) -> Report:
    """Read a FastQC output (zip, directory or data file) and parse it.

    ``summary.txt`` is loaded alongside ``fastqc_data.txt`` when the
    resource has one.
    """
    source_path = str(path)
    try:
        lines = read_lines(path)
        summary_lines = read_summary_lines(path)
        summary = parse_summary(summary_lines) if summary_lines is not None else ()
    except ReportError as exc:
        exc.source = exc.source or source_path
        raise
    report = parse_report(lines, summary, source_path)
    logger.info("Parsed %s (%s)", report.filename, source_path)
    return report
