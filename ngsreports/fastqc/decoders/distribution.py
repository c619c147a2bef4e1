"""Decoders for the read length and duplication modules."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from ngsreports.fastqc.decoders.base import (
    DecodedModule,
    ModuleDecoder,
    coerce_float,
    coerce_int,
    split_range,
    split_row,
)
from ngsreports.fastqc.decoders import registry
from ngsreports.fastqc.errors import MalformedReport
from ngsreports.fastqc.models import (
    DuplicationLevelRow,
    LengthDistributionRow,
    SequenceDuplicationLevelsTable,
    SequenceLengthDistributionTable,
)

logger = logging.getLogger(__name__)

TOTAL_DEDUPLICATED_LABEL = "Total Deduplicated Percentage"


@registry.register
class SequenceLengthDistribution(ModuleDecoder):
    name = "Sequence_Length_Distribution"
    description = "Read counts per read length bin"
    table_cls = SequenceLengthDistributionTable
    row_cls = LengthDistributionRow
    converters = {
        "Length": str,
        "Count": coerce_int,
    }

    def output_columns(self, header: list[str]) -> tuple[str, ...]:
        return ("Length", "Lower", "Upper", "Count")

    def build_record(self, cells: dict[str, str], row: int) -> dict[str, Any]:
        record = super().build_record(cells, row)
        record["Lower"], record["Upper"] = self.convert(
            split_range, cells["Length"], "Length", row
        )
        return record


@registry.register
class SequenceDuplicationLevels(ModuleDecoder):
    """Duplication levels, plus the Total Deduplicated Percentage scalar.

    FastQC >= 0.11 writes ``#Total Deduplicated Percentage\\t<value>`` as the
    first line of the module, ahead of the table header. That line is pulled
    out before the table is parsed and returned as the decoded scalar; older
    reports without it give ``None``.
    """

    name = "Sequence_Duplication_Levels"
    description = "Relative number of reads at each duplication level"
    table_cls = SequenceDuplicationLevelsTable
    row_cls = DuplicationLevelRow
    converters = {
        "Duplication_Level": str,
        "Percentage_of_deduplicated": coerce_float,
        "Percentage_of_total": coerce_float,
    }

    def decode(self, lines: Sequence[str]) -> DecodedModule:
        totals = [line for line in lines if TOTAL_DEDUPLICATED_LABEL in line]
        if len(totals) > 1:
            raise MalformedReport(
                f"Module {self.name} has {len(totals)} '{TOTAL_DEDUPLICATED_LABEL}' lines"
            )

        total: float | None = None
        if totals:
            cells = split_row(totals[0])
            total = self.convert(
                coerce_float,
                cells[-1] if len(cells) > 1 else "",
                "Total_Deduplicated_Percentage",
                None,
            )
        else:
            logger.debug("No %s line in %s", TOTAL_DEDUPLICATED_LABEL, self.name)

        table_lines = [line for line in lines if TOTAL_DEDUPLICATED_LABEL not in line]
        decoded = super().decode(table_lines)
        return DecodedModule(module_name=self.name, table=decoded.table, scalar=total)
