"""FastQC report parsing: splitter, module decoders and report assembly."""

from ngsreports.fastqc.assembler import (
    assemble_report,
    load_report,
    parse_report,
    validate_summary,
)
from ngsreports.fastqc.collection import (
    parse_collection,
    parse_collection_async,
    parse_collection_partial,
)
from ngsreports.fastqc.errors import (
    CollectionError,
    MalformedReport,
    MalformedSummary,
    MissingColumn,
    MissingModule,
    ReportError,
    ResourceUnavailable,
    TypeCoercionFailure,
)
from ngsreports.fastqc.models import (
    REQUIRED_MODULES,
    ModuleTable,
    ParseFailure,
    PartialCollection,
    Report,
    ReportCollection,
    Status,
    SummaryRow,
)
from ngsreports.fastqc.scanner import ReportScan, find_reports, find_reports_async
from ngsreports.fastqc.source import is_archive, parse_summary, read_lines, read_summary_lines
from ngsreports.fastqc.splitter import SplitReport, split_modules

__all__ = [
    "CollectionError",
    "MalformedReport",
    "MalformedSummary",
    "MissingColumn",
    "MissingModule",
    "ModuleTable",
    "ParseFailure",
    "PartialCollection",
    "REQUIRED_MODULES",
    "Report",
    "ReportCollection",
    "ReportError",
    "ReportScan",
    "ResourceUnavailable",
    "SplitReport",
    "Status",
    "SummaryRow",
    "TypeCoercionFailure",
    "assemble_report",
    "find_reports",
    "find_reports_async",
    "is_archive",
    "load_report",
    "parse_collection",
    "parse_collection_async",
    "parse_collection_partial",
    "parse_report",
    "parse_summary",
    "read_lines",
    "read_summary_lines",
    "split_modules",
    "validate_summary",
]
