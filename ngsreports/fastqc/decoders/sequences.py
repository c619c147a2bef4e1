"""Decoders for the sequence-content modules.

FastQC leaves these modules without data rows when nothing is flagged
(no overrepresented sequences, adapter analysis disabled, no enriched
k-mers), so each of them accepts a header-only or empty body.
"""

from __future__ import annotations

from typing import Any

from ngsreports.fastqc.decoders.base import ModuleDecoder, coerce_float, coerce_int
from ngsreports.fastqc.decoders import registry
from ngsreports.fastqc.errors import MissingColumn
from ngsreports.fastqc.models import (
    AdapterContentRow,
    AdapterContentTable,
    KmerContentRow,
    KmerContentTable,
    OverrepresentedSequenceRow,
    OverrepresentedSequencesTable,
)


@registry.register
class OverrepresentedSequences(ModuleDecoder):
    name = "Overrepresented_sequences"
    description = "Sequences making up an unexpectedly large share of reads"
    allow_empty = True
    table_cls = OverrepresentedSequencesTable
    row_cls = OverrepresentedSequenceRow
    converters = {
        "Sequence": str,
        "Count": coerce_int,
        "Percentage": coerce_float,
        "Possible_Source": str,
    }


@registry.register
class AdapterContent(ModuleDecoder):
    """Cumulative adapter percentages by position.

    Adapter column names depend on the adapter list FastQC was run with, so
    only ``Position`` is fixed; every other column is a float.
    """

    name = "Adapter_Content"
    description = "Cumulative percentage of reads containing each adapter"
    allow_empty = True
    table_cls = AdapterContentTable
    row_cls = AdapterContentRow
    converters = {"Position": str}

    def check_columns(self, header: list[str]) -> None:
        super().check_columns(header)
        if len(header) < 2:
            raise MissingColumn(self.name, ["<adapter>"])

    def output_columns(self, header: list[str]) -> tuple[str, ...]:
        return tuple(header)

    def build_record(self, cells: dict[str, str], row: int) -> dict[str, Any]:
        return {
            "Position": cells["Position"],
            "adapter_values": tuple(
                (column, self.convert(coerce_float, value, column, row))
                for column, value in cells.items()
                if column != "Position"
            ),
        }


@registry.register
class KmerContent(ModuleDecoder):
    name = "Kmer_Content"
    description = "Positionally biased k-mers"
    allow_empty = True
    table_cls = KmerContentTable
    row_cls = KmerContentRow
    # Max_Obs/Exp_Position may be a bin label such as "10-14"
    converters = {
        "Sequence": str,
        "Count": coerce_int,
        "PValue": coerce_float,
        "Obs/Exp_Max": coerce_float,
        "Max_Obs/Exp_Position": str,
    }
