"""Directory scanner for discovering FastQC outputs."""

import asyncio
from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from ngsreports.fastqc.source import DATA_FILENAME, is_archive


ARCHIVE_SUFFIX = "_fastqc.zip"


class OutputKind(str, Enum):
    """How a FastQC output is stored on disk."""

    ARCHIVE = "archive"
    DIRECTORY = "directory"


class DiscoveredReport(BaseModel):
    """A FastQC output found while scanning."""

    path: str = Field(..., description="Absolute path to the archive or directory")
    name: str = Field(..., description="Archive or directory name")
    kind: OutputKind = Field(..., description="Archive or unzipped directory")
    size_bytes: int = Field(..., description="Size of the archive or of fastqc_data.txt")
    size_human: str = Field(..., description="Human-readable size")
    modified_at: datetime = Field(..., description="Last modification timestamp")


class ReportScan(BaseModel):
    """Result of scanning a directory for FastQC outputs."""

    scan_path: str = Field(..., description="Root path that was scanned")
    scanned_at: datetime = Field(default_factory=datetime.now, description="Scan timestamp")
    reports: list[DiscoveredReport] = Field(default_factory=list, description="Discovered outputs")
    archive_count: int = Field(default=0, description="Number of zip archives")
    directory_count: int = Field(default=0, description="Number of unzipped output directories")

    def paths(self) -> list[str]:
        return [r.path for r in self.reports]


def human_readable_size(size_bytes: int) -> str:
    """Convert bytes to human-readable format."""
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if abs(size_bytes) < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.1f} PB"


def describe_output(path: Path, kind: OutputKind) -> DiscoveredReport | None:
    """Build metadata for one output, or None if it cannot be stat'ed."""
    try:
        stat = path.stat() if kind == OutputKind.ARCHIVE else (path / DATA_FILENAME).stat()
    except OSError:
        return None
    return DiscoveredReport(
        path=str(path.absolute()),
        name=path.name,
        kind=kind,
        size_bytes=stat.st_size,
        size_human=human_readable_size(stat.st_size),
        modified_at=datetime.fromtimestamp(stat.st_mtime),
    )


def find_reports(
    root_path: str | Path,
    max_depth: int = 10,
    include_hidden: bool = False,
) -> ReportScan:
    """
    Scan a directory recursively for FastQC outputs.

    ``*_fastqc.zip`` archives and directories holding ``fastqc_data.txt``
    are both reported; an output directory is not descended into.

    Args:
        root_path: Path to scan
        max_depth: Maximum directory depth to traverse
        include_hidden: Whether to include hidden files/directories

    Returns:
        ReportScan with outputs sorted by path
    """
    root = Path(root_path).resolve()

    if not root.exists():
        raise FileNotFoundError(f"Directory not found: {root}")

    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    found: list[DiscoveredReport] = []

    def scan_recursive(current: Path, depth: int = 0):
        if depth > max_depth:
            return

        if (current / DATA_FILENAME).is_file():
            meta = describe_output(current, OutputKind.DIRECTORY)
            if meta:
                found.append(meta)
            return

        try:
            entries = sorted(current.iterdir())
        except (PermissionError, OSError):
            return

        for entry in entries:
            if not include_hidden and entry.name.startswith("."):
                continue
            if entry.is_dir() and not entry.is_symlink():
                scan_recursive(entry, depth + 1)
            elif entry.name.endswith(ARCHIVE_SUFFIX) and is_archive(entry):
                meta = describe_output(entry, OutputKind.ARCHIVE)
                if meta:
                    found.append(meta)

    scan_recursive(root)
    found.sort(key=lambda r: r.path)

    return ReportScan(
        scan_path=str(root),
        scanned_at=datetime.now(),
        reports=found,
        archive_count=sum(1 for r in found if r.kind == OutputKind.ARCHIVE),
        directory_count=sum(1 for r in found if r.kind == OutputKind.DIRECTORY),
    )


async def find_reports_async(
    root_path: str | Path,
    max_depth: int = 10,
    include_hidden: bool = False,
) -> ReportScan:
    """Async wrapper for find_reports."""
    return await asyncio.to_thread(find_reports, root_path, max_depth, include_hidden)
