"""Decoders for the quality-score modules."""

from __future__ import annotations

from ngsreports.fastqc.decoders.base import ModuleDecoder, coerce_float, coerce_int
from ngsreports.fastqc.decoders import registry
from ngsreports.fastqc.models import (
    PerBaseQualityRow,
    PerBaseSequenceQualityTable,
    PerSequenceQualityScoresTable,
    PerTileQualityRow,
    PerTileSequenceQualityTable,
    QualityScoreRow,
)


@registry.register
class PerBaseSequenceQuality(ModuleDecoder):
    name = "Per_base_sequence_quality"
    description = "Quality score distribution at each read position"
    table_cls = PerBaseSequenceQualityTable
    row_cls = PerBaseQualityRow
    # Base is a position label, possibly a bin such as "10-14"
    converters = {
        "Base": str,
        "Mean": coerce_float,
        "Median": coerce_float,
        "Lower_Quartile": coerce_float,
        "Upper_Quartile": coerce_float,
        "10th_Percentile": coerce_float,
        "90th_Percentile": coerce_float,
    }


@registry.register
class PerTileSequenceQuality(ModuleDecoder):
    name = "Per_tile_sequence_quality"
    description = "Mean quality deviation per flowcell tile and position"
    table_cls = PerTileSequenceQualityTable
    row_cls = PerTileQualityRow
    converters = {
        "Tile": str,
        "Base": str,
        "Mean": coerce_float,
    }


@registry.register
class PerSequenceQualityScores(ModuleDecoder):
    name = "Per_sequence_quality_scores"
    description = "Number of reads per mean read quality"
    table_cls = PerSequenceQualityScoresTable
    row_cls = QualityScoreRow
    converters = {
        "Quality": coerce_int,
        "Count": coerce_int,
    }
