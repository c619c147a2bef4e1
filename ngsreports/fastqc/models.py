"""Pydantic models for parsed FastQC reports.

Every model is frozen: a Report is built once by the assembler and never
mutated afterwards. Row fields use snake_case attribute names and carry
the canonical FastQC column name as their alias, so
``row.model_dump(by_alias=True)`` returns records keyed exactly as the
columns appear in the report (``%GC``, ``10th_Percentile``, ``N-Count``...).
"""

from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Iterator, Mapping

from pydantic import BaseModel, ConfigDict, Field, RootModel


# Canonical module names in report order
REQUIRED_MODULES: tuple[str, ...] = (
    "Basic_Statistics",
    "Per_base_sequence_quality",
    "Per_tile_sequence_quality",
    "Per_sequence_quality_scores",
    "Per_base_sequence_content",
    "Per_sequence_GC_content",
    "Per_base_N_content",
    "Sequence_Length_Distribution",
    "Sequence_Duplication_Levels",
    "Overrepresented_sequences",
    "Adapter_Content",
    "Kmer_Content",
)


class Status(str, Enum):
    """PASS/WARN/FAIL flag assigned by FastQC to each module."""

    PASS = "PASS"
    WARN = "WARN"
    FAIL = "FAIL"


class SummaryRow(BaseModel):
    """One line of the FastQC ``summary.txt`` table."""

    model_config = ConfigDict(frozen=True)

    status: Status = Field(..., description="PASS, WARN or FAIL")
    module: str = Field(..., description="Module name, spaces replaced by underscores")
    filename: str = Field(..., description="Name of the sequence file the flag refers to")

    def record(self) -> dict[str, Any]:
        return {"Filename": self.filename, "Category": self.module, "Status": self.status.value}


# ---------------------------------------------------------------------------
# Row models
# ---------------------------------------------------------------------------


class TableRow(BaseModel):
    """Base class for a single decoded table row."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def record(self) -> dict[str, Any]:
        """Return the row keyed by canonical column names."""
        return self.model_dump(by_alias=True)


class BasicStatisticsRow(TableRow):
    filename: str = Field(..., alias="Filename")
    file_type: str = Field(..., alias="File_type")
    encoding: str = Field(..., alias="Encoding")
    total_sequences: int = Field(..., alias="Total_Sequences")
    sequences_flagged_as_poor_quality: int = Field(
        ..., alias="Sequences_flagged_as_poor_quality"
    )
    sequence_length: str = Field(..., alias="Sequence_length")
    shortest_sequence: int = Field(..., alias="Shortest_sequence")
    longest_sequence: int = Field(..., alias="Longest_sequence")
    gc_percent: int = Field(..., alias="%GC")


class PerBaseQualityRow(TableRow):
    base: str = Field(..., alias="Base")
    mean: float = Field(..., alias="Mean")
    median: float = Field(..., alias="Median")
    lower_quartile: float = Field(..., alias="Lower_Quartile")
    upper_quartile: float = Field(..., alias="Upper_Quartile")
    percentile_10: float = Field(..., alias="10th_Percentile")
    percentile_90: float = Field(..., alias="90th_Percentile")


class PerTileQualityRow(TableRow):
    tile: str = Field(..., alias="Tile")
    base: str = Field(..., alias="Base")
    mean: float = Field(..., alias="Mean")


class QualityScoreRow(TableRow):
    quality: int = Field(..., alias="Quality")
    count: int = Field(..., alias="Count")


class BaseContentRow(TableRow):
    base: str = Field(..., alias="Base")
    g: float = Field(..., alias="G")
    a: float = Field(..., alias="A")
    t: float = Field(..., alias="T")
    c: float = Field(..., alias="C")


class GcContentRow(TableRow):
    gc_content: int = Field(..., alias="GC_Content")
    count: int = Field(..., alias="Count")


class NContentRow(TableRow):
    base: str = Field(..., alias="Base")
    n_count: int = Field(..., alias="N-Count")


class LengthDistributionRow(TableRow):
    length: str = Field(..., alias="Length")
    lower: int = Field(..., alias="Lower")
    upper: int = Field(..., alias="Upper")
    count: int = Field(..., alias="Count")


class DuplicationLevelRow(TableRow):
    duplication_level: str = Field(..., alias="Duplication_Level")
    percentage_of_deduplicated: float = Field(..., alias="Percentage_of_deduplicated")
    percentage_of_total: float = Field(..., alias="Percentage_of_total")


class OverrepresentedSequenceRow(TableRow):
    sequence: str = Field(..., alias="Sequence")
    count: int = Field(..., alias="Count")
    percentage: float = Field(..., alias="Percentage")
    possible_source: str = Field(..., alias="Possible_Source")


class AdapterContentRow(TableRow):
    """Adapter columns are named by FastQC at run time, so they are stored as pairs."""

    position: str = Field(..., alias="Position")
    adapter_values: tuple[tuple[str, float], ...] = Field(
        default=(), description="(adapter column, percentage) pairs in header order"
    )

    @property
    def percentages(self) -> Mapping[str, float]:
        return MappingProxyType(dict(self.adapter_values))

    def record(self) -> dict[str, Any]:
        return {"Position": self.position, **dict(self.adapter_values)}


class KmerContentRow(TableRow):
    sequence: str = Field(..., alias="Sequence")
    count: int = Field(..., alias="Count")
    p_value: float = Field(..., alias="PValue")
    obs_exp_max: float = Field(..., alias="Obs/Exp_Max")
    max_obs_exp_position: str = Field(..., alias="Max_Obs/Exp_Position")


# ---------------------------------------------------------------------------
# Module tables
# ---------------------------------------------------------------------------


class ModuleTable(BaseModel):
    """A decoded, rectangular module table."""

    model_config = ConfigDict(frozen=True)

    module: ClassVar[str] = ""

    columns: tuple[str, ...] = Field(default=(), description="Canonical column names")
    rows: tuple[TableRow, ...] = Field(default=(), description="Decoded rows")

    def __len__(self) -> int:
        return len(self.rows)

    def column(self, name: str) -> list[Any]:
        """Return every value of one column, by canonical name."""
        if name not in self.columns:
            raise KeyError(f"{self.module} has no column {name!r}")
        return [row.record()[name] for row in self.rows]

    def to_records(self) -> list[dict[str, Any]]:
        return [row.record() for row in self.rows]


class BasicStatisticsTable(ModuleTable):
    module: ClassVar[str] = "Basic_Statistics"
    rows: tuple[BasicStatisticsRow, ...] = ()


class PerBaseSequenceQualityTable(ModuleTable):
    module: ClassVar[str] = "Per_base_sequence_quality"
    rows: tuple[PerBaseQualityRow, ...] = ()


class PerTileSequenceQualityTable(ModuleTable):
    module: ClassVar[str] = "Per_tile_sequence_quality"
    rows: tuple[PerTileQualityRow, ...] = ()


class PerSequenceQualityScoresTable(ModuleTable):
    module: ClassVar[str] = "Per_sequence_quality_scores"
    rows: tuple[QualityScoreRow, ...] = ()


class PerBaseSequenceContentTable(ModuleTable):
    module: ClassVar[str] = "Per_base_sequence_content"
    rows: tuple[BaseContentRow, ...] = ()


class PerSequenceGcContentTable(ModuleTable):
    module: ClassVar[str] = "Per_sequence_GC_content"
    rows: tuple[GcContentRow, ...] = ()


class PerBaseNContentTable(ModuleTable):
    module: ClassVar[str] = "Per_base_N_content"
    rows: tuple[NContentRow, ...] = ()


class SequenceLengthDistributionTable(ModuleTable):
    module: ClassVar[str] = "Sequence_Length_Distribution"
    rows: tuple[LengthDistributionRow, ...] = ()


class SequenceDuplicationLevelsTable(ModuleTable):
    module: ClassVar[str] = "Sequence_Duplication_Levels"
    rows: tuple[DuplicationLevelRow, ...] = ()


class OverrepresentedSequencesTable(ModuleTable):
    module: ClassVar[str] = "Overrepresented_sequences"
    rows: tuple[OverrepresentedSequenceRow, ...] = ()


class AdapterContentTable(ModuleTable):
    module: ClassVar[str] = "Adapter_Content"
    rows: tuple[AdapterContentRow, ...] = ()

    @property
    def adapters(self) -> list[str]:
        return [c for c in self.columns if c != "Position"]


class KmerContentTable(ModuleTable):
    module: ClassVar[str] = "Kmer_Content"
    rows: tuple[KmerContentRow, ...] = ()


# ---------------------------------------------------------------------------
# Report and collections
# ---------------------------------------------------------------------------


# Module name -> Report attribute
MODULE_FIELDS: dict[str, str] = {
    "Basic_Statistics": "basic_statistics",
    "Per_base_sequence_quality": "per_base_sequence_quality",
    "Per_tile_sequence_quality": "per_tile_sequence_quality",
    "Per_sequence_quality_scores": "per_sequence_quality_scores",
    "Per_base_sequence_content": "per_base_sequence_content",
    "Per_sequence_GC_content": "per_sequence_gc_content",
    "Per_base_N_content": "per_base_n_content",
    "Sequence_Length_Distribution": "sequence_length_distribution",
    "Sequence_Duplication_Levels": "sequence_duplication_levels",
    "Overrepresented_sequences": "overrepresented_sequences",
    "Adapter_Content": "adapter_content",
    "Kmer_Content": "kmer_content",
}


class Report(BaseModel):
    """The fully parsed and validated contents of one FastQC report."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source_path: str = Field(..., description="Resource the report was read from")
    format_version: str = Field(..., description="FastQC version line")
    summary: tuple[SummaryRow, ...] = Field(default=(), description="PASS/WARN/FAIL flags")

    basic_statistics: BasicStatisticsTable = Field(..., alias="Basic_Statistics")
    per_base_sequence_quality: PerBaseSequenceQualityTable = Field(
        ..., alias="Per_base_sequence_quality"
    )
    per_tile_sequence_quality: PerTileSequenceQualityTable = Field(
        ..., alias="Per_tile_sequence_quality"
    )
    per_sequence_quality_scores: PerSequenceQualityScoresTable = Field(
        ..., alias="Per_sequence_quality_scores"
    )
    per_base_sequence_content: PerBaseSequenceContentTable = Field(
        ..., alias="Per_base_sequence_content"
    )
    per_sequence_gc_content: PerSequenceGcContentTable = Field(
        ..., alias="Per_sequence_GC_content"
    )
    per_base_n_content: PerBaseNContentTable = Field(..., alias="Per_base_N_content")
    sequence_length_distribution: SequenceLengthDistributionTable = Field(
        ..., alias="Sequence_Length_Distribution"
    )
    sequence_duplication_levels: SequenceDuplicationLevelsTable = Field(
        ..., alias="Sequence_Duplication_Levels"
    )
    overrepresented_sequences: OverrepresentedSequencesTable = Field(
        ..., alias="Overrepresented_sequences"
    )
    adapter_content: AdapterContentTable = Field(..., alias="Adapter_Content")
    kmer_content: KmerContentTable = Field(..., alias="Kmer_Content")

    deduplicated_percentage: float | None = Field(
        default=None,
        alias="Total_Deduplicated_Percentage",
        description="Total Deduplicated Percentage, None when the report omits it",
    )

    @property
    def version(self) -> str:
        return self.format_version

    @property
    def filename(self) -> str:
        """Sequence file name recorded in Basic Statistics."""
        return self.basic_statistics.rows[0].filename

    def module(self, name: str) -> ModuleTable:
        """Fetch a module table by its canonical name (e.g. ``Kmer_Content``)."""
        try:
            return getattr(self, MODULE_FIELDS[name])
        except KeyError:
            raise KeyError(f"Unknown module: {name!r}") from None

    def summary_for(self, module: str) -> Status | None:
        for row in self.summary:
            if row.module == module:
                return row.status
        return None


class ReportCollection(RootModel[tuple[Report, ...]]):
    """Ordered reports, index-aligned with the resources they came from."""

    model_config = ConfigDict(frozen=True)

    def __len__(self) -> int:
        return len(self.root)

    def __iter__(self) -> Iterator[Report]:  # type: ignore[override]
        return iter(self.root)

    def __getitem__(self, item):
        if isinstance(item, slice):
            return ReportCollection(self.root[item])
        return self.root[item]

    def file_names(self) -> list[str]:
        return [report.filename for report in self.root]


class ParseFailure(BaseModel):
    """A collection member that could not be parsed."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., description="Position of the resource in the input list")
    source: str = Field(..., description="Resource identifier")
    error_type: str = Field(..., description="Exception class name")
    message: str = Field(..., description="Human-readable failure message")


class PartialCollection(BaseModel):
    """Result of parsing a collection while tolerating member failures."""

    model_config = ConfigDict(frozen=True)

    reports: ReportCollection = Field(default_factory=lambda: ReportCollection(()))
    indices: tuple[int, ...] = Field(
        default=(), description="Input index of each successfully parsed report"
    )
    failures: tuple[ParseFailure, ...] = Field(default=())

    @property
    def ok(self) -> bool:
        return not self.failures
