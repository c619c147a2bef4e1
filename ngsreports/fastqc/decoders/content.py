"""Decoders for the base composition modules."""

from __future__ import annotations

from ngsreports.fastqc.decoders.base import ModuleDecoder, coerce_float, coerce_int
from ngsreports.fastqc.decoders import registry
from ngsreports.fastqc.models import (
    BaseContentRow,
    GcContentRow,
    NContentRow,
    PerBaseNContentTable,
    PerBaseSequenceContentTable,
    PerSequenceGcContentTable,
)


@registry.register
class PerBaseSequenceContent(ModuleDecoder):
    name = "Per_base_sequence_content"
    description = "Percentage of G, A, T and C at each read position"
    table_cls = PerBaseSequenceContentTable
    row_cls = BaseContentRow
    converters = {
        "Base": str,
        "G": coerce_float,
        "A": coerce_float,
        "T": coerce_float,
        "C": coerce_float,
    }


@registry.register
class PerSequenceGcContent(ModuleDecoder):
    name = "Per_sequence_GC_content"
    description = "Distribution of per-read GC content"
    table_cls = PerSequenceGcContentTable
    row_cls = GcContentRow
    converters = {
        "GC_Content": coerce_int,
        "Count": coerce_int,
    }


@registry.register
class PerBaseNContent(ModuleDecoder):
    name = "Per_base_N_content"
    description = "Number of N calls at each read position"
    table_cls = PerBaseNContentTable
    row_cls = NContentRow
    converters = {
        "Base": str,
        "N-Count": coerce_int,
    }
