"""Exceptions raised while reading and parsing FastQC reports."""

from __future__ import annotations


class ReportError(Exception):
    """Base class for every report parsing failure.

    `source` is filled in by the report assembler once the failing
    resource is known, so decoders never need to know where their lines
    came from.
    """

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.message = message
        self.source = source

    def __str__(self) -> str:
        if self.source:
            return f"{self.source}: {self.message}"
        return self.message


class ResourceUnavailable(ReportError):
    """The report file or archive member could not be opened or read."""


class MalformedReport(ReportError):
    """The report text does not have the expected structure."""


class MissingModule(MalformedReport):
    """One or more required modules are absent from the report."""

    def __init__(self, modules: list[str], source: str | None = None):
        self.modules = list(modules)
        super().__init__(
            f"Missing required module(s): {', '.join(self.modules)}", source
        )


class MissingColumn(MalformedReport):
    """A module header lacks one or more required columns."""

    def __init__(self, module: str, columns: list[str], source: str | None = None):
        self.module = module
        self.columns = list(columns)
        super().__init__(
            f"Module {module} is missing required column(s): {', '.join(self.columns)}",
            source,
        )


class TypeCoercionFailure(MalformedReport):
    """A cell could not be converted to the type declared for its column."""

    def __init__(
        self,
        module: str,
        column: str,
        row: int | None,
        value: str,
        expected: str = "number",
        source: str | None = None,
    ):
        self.module = module
        self.column = column
        self.row = row
        self.value = value
        self.expected = expected
        where = f"row {row}" if row is not None else "scalar"
        super().__init__(
            f"Module {module}, column {column}, {where}: "
            f"cannot convert {value!r} to {expected}",
            source,
        )


class MalformedSummary(ReportError):
    """The PASS/WARN/FAIL summary table does not match the parsed report."""


class CollectionError(ReportError):
    """A member of a report collection failed to parse."""

    def __init__(self, index: int, source: str, cause: ReportError):
        self.index = index
        self.cause = cause
        super().__init__(
            f"Report #{index} failed: {cause.message}", source
        )
