"""Read FastQC output from disk: plain files, output directories and zip archives.

FastQC writes ``<sample>_fastqc.zip`` containing ``<sample>_fastqc/``
with ``fastqc_data.txt`` and ``summary.txt``; the same folder may also be
present unzipped. Every function here opens its own handle and releases it
before returning, so concurrent callers never share an archive.
"""

from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Iterable

from ngsreports.fastqc.errors import MalformedSummary, ResourceUnavailable
from ngsreports.fastqc.models import Status, SummaryRow

DATA_FILENAME = "fastqc_data.txt"
SUMMARY_FILENAME = "summary.txt"


def is_archive(path: str | Path) -> bool:
    """True for a readable ``.zip`` file."""
    path = Path(path)
    return path.suffix.lower() == ".zip" and path.is_file() and zipfile.is_zipfile(path)


def _archive_member(archive: zipfile.ZipFile, path: Path, filename: str) -> str | None:
    """Locate ``filename`` inside a FastQC archive."""
    names = archive.namelist()
    preferred = f"{path.name[:-len(path.suffix)]}/{filename}"
    if preferred in names:
        return preferred
    for name in names:
        if name == filename or name.endswith(f"/{filename}"):
            return name
    return None


def _read_text(path: str | Path, filename: str, required: bool) -> list[str] | None:
    path = Path(path)
    try:
        if is_archive(path):
            with zipfile.ZipFile(path) as archive:
                member = _archive_member(archive, path, filename)
                if member is None:
                    if required:
                        raise ResourceUnavailable(f"{filename} not found in archive", str(path))
                    return None
                with archive.open(member) as handle:
                    return handle.read().decode("utf-8").splitlines()

        if path.is_dir():
            target = path / filename
        elif required:
            target = path
        else:
            # Only a genuine fastqc_data.txt has a sibling summary
            target = path.parent / filename if path.name == DATA_FILENAME else None

        if target is None or (not required and not target.is_file()):
            return None
        return target.read_text(encoding="utf-8").splitlines()
    except (OSError, zipfile.BadZipFile, UnicodeDecodeError) as e:
        raise ResourceUnavailable(f"Cannot read {filename}: {e}", str(path)) from e


def read_lines(path: str | Path) -> list[str]:
    """Return every line of the resource's ``fastqc_data.txt``.

    Raises:
        ResourceUnavailable: the file, directory or archive member is
            missing or unreadable.
    """
    return _read_text(path, DATA_FILENAME, required=True) or []


def read_summary_lines(path: str | Path) -> list[str] | None:
    """Return the lines of ``summary.txt`` for the resource, or None if it has none."""
    return _read_text(path, SUMMARY_FILENAME, required=False)


def parse_summary(lines: Iterable[str]) -> tuple[SummaryRow, ...]:
    """Parse ``STATUS<TAB>Module name<TAB>Filename`` rows.

    Raises:
        MalformedSummary: a row does not have three fields or has an
            unknown status.
    """
    rows = []
    for number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        fields = line.rstrip("\r\n").split("\t")
        if len(fields) != 3:
            raise MalformedSummary(f"Summary line {number} has {len(fields)} field(s): {line!r}")
        status, module, filename = fields
        try:
            status = Status(status.strip())
        except ValueError:
            raise MalformedSummary(
                f"Summary line {number} has unknown status {status!r}"
            ) from None
        rows.append(
            SummaryRow(
                status=status,
                module=module.strip().replace(" ", "_"),
                filename=filename.strip(),
            )
        )
    return tuple(rows)
