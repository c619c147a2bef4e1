"""Basic Statistics decoder.

Unlike the other modules this one is a list of ``Measure -> Value`` pairs.
The pairs are transposed into a single-row table, and ``Sequence_length``
(``35-151``, or ``151`` when every read has the same length) is split into
``Shortest_sequence`` / ``Longest_sequence``.
"""

from __future__ import annotations

from typing import Any, Sequence

from ngsreports.fastqc.decoders.base import (
    DecodedModule,
    ModuleDecoder,
    coerce_int,
    normalize_column,
    split_range,
    split_row,
)
from ngsreports.fastqc.decoders import registry
from ngsreports.fastqc.errors import TypeCoercionFailure
from ngsreports.fastqc.models import BasicStatisticsRow, BasicStatisticsTable


@registry.register
class BasicStatistics(ModuleDecoder):
    name = "Basic_Statistics"
    description = "File name, encoding, read totals, length range and GC content"
    table_cls = BasicStatisticsTable
    row_cls = BasicStatisticsRow
    converters = {
        "Filename": str,
        "Total_Sequences": coerce_int,
        "Sequences_flagged_as_poor_quality": coerce_int,
        "Sequence_length": str,
        "%GC": coerce_int,
        "File_type": str,
        "Encoding": str,
    }

    def output_columns(self, header: list[str]) -> tuple[str, ...]:
        return (
            "Filename",
            "Total_Sequences",
            "Sequences_flagged_as_poor_quality",
            "Sequence_length",
            "Shortest_sequence",
            "Longest_sequence",
            "%GC",
            "File_type",
            "Encoding",
        )

    def build_record(self, cells: dict[str, str], row: int) -> dict[str, Any]:
        record = super().build_record(cells, row)
        shortest, longest = self.convert(
            split_range, cells["Sequence_length"], "Sequence_length", row
        )
        record["Shortest_sequence"] = shortest
        record["Longest_sequence"] = longest
        return record

    def decode(self, lines: Sequence[str]) -> DecodedModule:
        # First line is the "Measure / Value" header
        values: dict[str, str] = {}
        positions: dict[str, int] = {}
        for index, line in enumerate(lines[1:]):
            cells = split_row(line)
            if not cells:
                continue
            measure = normalize_column(cells[0])
            values[measure] = cells[-1] if len(cells) > 1 else ""
            positions[measure] = index

        self.check_columns(list(values))
        try:
            record = self.build_record(values, 0)
        except TypeCoercionFailure as exc:
            # Report the line of the offending measure rather than the single output row
            raise TypeCoercionFailure(
                self.name, exc.column, positions.get(exc.column), exc.value, exc.expected
            ) from None
        table = self.table_cls(
            columns=self.output_columns(list(values)),
            rows=(self.row_cls.model_validate(record),),
        )
        return DecodedModule(module_name=self.name, table=table)
