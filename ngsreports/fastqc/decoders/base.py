"""Abstract base class and shared helpers for FastQC module decoders."""

from __future__ import annotations

import abc
import logging
import math
from typing import Any, Callable, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ngsreports.fastqc.errors import MissingColumn, TypeCoercionFailure
from ngsreports.fastqc.models import ModuleTable, TableRow

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Tokenizing and coercion helpers
# ---------------------------------------------------------------------------


def normalize_column(name: str) -> str:
    """Header cell -> canonical column name (``Lower Quartile`` -> ``Lower_Quartile``)."""
    return name.strip().lstrip("#").strip().replace(" ", "_")


def split_row(line: str) -> list[str]:
    """Split a data line on tabs, dropping trailing empty cells."""
    cells = line.split("\t")
    while cells and not cells[-1].strip():
        cells.pop()
    return cells


def split_table(lines: Sequence[str]) -> tuple[list[str], list[list[str]]]:
    """Split module lines into a normalized header and rectangular rows.

    Short rows are padded with empty strings so they fail numeric coercion
    rather than shifting columns. Non-empty cells beyond the header width
    are dropped.
    """
    if not lines:
        return [], []
    header = [normalize_column(c) for c in split_row(lines[0])]
    width = len(header)
    rows: list[list[str]] = []
    for index, line in enumerate(lines[1:]):
        cells = split_row(line)
        if len(cells) > width:
            logger.warning(
                "Ignoring %d trailing cell(s) in row %d: %r",
                len(cells) - width, index, cells[width:],
            )
            cells = cells[:width]
        rows.append(cells + [""] * (width - len(cells)))
    return header, rows


def coerce_int(value: str) -> int:
    """Parse an integer cell.

    FastQC writes some counts as doubles (``1234.0``, ``2.5E7``); those are
    accepted and truncated toward zero.
    """
    text = value.strip()
    try:
        return int(text)
    except ValueError:
        pass
    number = float(text)
    if not math.isfinite(number):
        raise ValueError(f"not a finite number: {value!r}")
    return int(number)


def coerce_float(value: str) -> float:
    return float(value.strip())


def split_range(value: str) -> tuple[int, int]:
    """Split a ``min-max`` token into integers; ``50`` gives ``(50, 50)``."""
    lower, sep, upper = value.strip().partition("-")
    if not sep:
        number = int(lower)
        return number, number
    return int(lower), int(upper)


# Human-readable type names used in coercion errors
TYPE_NAMES: dict[Callable[[str], Any], str] = {
    coerce_int: "integer",
    coerce_float: "float",
    split_range: "range",
}


# ---------------------------------------------------------------------------
# Decoder base class
# ---------------------------------------------------------------------------


class DecodedModule(BaseModel):
    """Output of a decoder: the module table and, for some modules, a scalar."""

    model_config = ConfigDict(frozen=True)

    module_name: str
    table: ModuleTable
    scalar: float | None = Field(
        default=None, description="Stand-alone value carried inside the module text"
    )


class ModuleDecoder(abc.ABC):
    """Abstract base class for a FastQC module decoder.

    Subclasses declare:
    - `name` (class attribute): canonical module name used in the registry.
    - `description` (class attribute): short description of the module.
    - `table_cls` / `row_cls`: the typed table and row models produced.
    - `converters`: canonical column name -> parser for that column.

    Optionally override:
    - `required_columns`: defaults to the keys of `converters`.
    - `allow_empty`: True for modules FastQC may leave without any lines;
      a header, when present, is still checked.
    - `build_record()`: per-row conversion, for derived columns.
    - `decode()`: for modules that are not a plain table.
    """

    name: str = ""
    description: str = ""
    allow_empty: bool = False

    table_cls: type[ModuleTable] = ModuleTable
    row_cls: type[TableRow] = TableRow
    converters: dict[str, Callable[[str], Any]] = {}
    required_columns: tuple[str, ...] = ()

    def required(self) -> tuple[str, ...]:
        return self.required_columns or tuple(self.converters)

    def output_columns(self, header: list[str]) -> tuple[str, ...]:
        """Columns of the decoded table; extra header columns are not kept."""
        return tuple(self.converters)

    def convert(
        self,
        parser: Callable[[str], Any],
        value: str,
        column: str,
        row: int | None,
    ) -> Any:
        """Apply a column parser, turning ValueError into TypeCoercionFailure."""
        try:
            return parser(value)
        except ValueError:
            raise TypeCoercionFailure(
                self.name, column, row, value, TYPE_NAMES.get(parser, "str")
            ) from None

    def check_columns(self, header: list[str]) -> None:
        missing = [c for c in self.required() if c not in header]
        if missing:
            raise MissingColumn(self.name, missing)

    def build_record(self, cells: dict[str, str], row: int) -> dict[str, Any]:
        return {
            column: self.convert(parser, cells[column], column, row)
            for column, parser in self.converters.items()
        }

    def empty(self) -> DecodedModule:
        """Zero-row table for a module FastQC wrote without any lines."""
        return DecodedModule(module_name=self.name, table=self.table_cls(columns=self.required()))

    def decode(self, lines: Sequence[str]) -> DecodedModule:
        """Decode the module body (start marker already removed).

        Raises:
            MissingColumn: the header lacks a required column.
            TypeCoercionFailure: a cell does not parse as its column type.
        """
        header, rows = split_table(lines)
        if self.allow_empty and not header:
            return self.empty()

        self.check_columns(header)
        records = [
            self.build_record(dict(zip(header, cells)), index)
            for index, cells in enumerate(rows)
        ]
        table = self.table_cls(
            columns=self.output_columns(header),
            rows=tuple(self.row_cls.model_validate(r) for r in records),
        )
        logger.debug("Decoded %s: %d row(s)", self.name, len(table))
        return DecodedModule(module_name=self.name, table=table)
