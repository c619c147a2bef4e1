import zipfile
from pathlib import Path

import pytest


# Display name -> (status, body lines) in FastQC 0.11.9 layout
MODULES = {
    "Basic Statistics": ("pass", [
        "#Measure\tValue",
        "Filename\t{filename}",
        "File type\tConventional base calls",
        "Encoding\tSanger / Illumina 1.9",
        "Total Sequences\t25000",
        "Sequences flagged as poor quality\t0",
        "Sequence length\t35-151",
        "%GC\t48",
    ]),
    "Per base sequence quality": ("pass", [
        "#Base\tMean\tMedian\tLower Quartile\tUpper Quartile\t10th Percentile\t90th Percentile",
        "1\t32.1\t33.0\t32.0\t34.0\t31.0\t34.0",
        "2\t32.4\t34.0\t32.0\t34.0\t31.0\t34.0",
        "3-4\t35.2\t37.0\t35.0\t37.0\t32.0\t37.0",
    ]),
    "Per tile sequence quality": ("pass", [
        "#Tile\tBase\tMean",
        "1101\t1\t0.12",
        "1101\t2\t-0.05",
    ]),
    "Per sequence quality scores": ("pass", [
        "#Quality\tCount",
        "20\t12.0",
        "36\t24988.0",
    ]),
    "Per base sequence content": ("warn", [
        "#Base\tG\tA\tT\tC",
        "1\t20.1\t30.2\t29.5\t20.2",
        "2\t21.0\t29.0\t28.0\t22.0",
    ]),
    "Per sequence GC content": ("pass", [
        "#GC Content\tCount",
        "0\t0.0",
        "47\t1250.5",
        "48\t1300.0",
    ]),
    "Per base N content": ("pass", [
        "#Base\tN-Count",
        "1\t0.0",
        "2\t3.0",
    ]),
    "Sequence Length Distribution": ("warn", [
        "#Length\tCount",
        "35-39\t12.0",
        "151\t24988.0",
    ]),
    "Sequence Duplication Levels": ("pass", [
        "#Total Deduplicated Percentage\t87.25",
        "#Duplication Level\tPercentage of deduplicated\tPercentage of total",
        "1\t93.1\t81.2",
        ">10\t0.5\t4.1",
        ">10k+\t0.0\t0.0",
    ]),
    "Overrepresented sequences": ("warn", [
        "#Sequence\tCount\tPercentage\tPossible Source",
        "AGATCGGAAGAGCACACGTCTGAACTCCAGTCA\t150\t0.6\tTruSeq Adapter, Index 1 (100% over 33bp)",
    ]),
    "Adapter Content": ("pass", [
        "#Position\tIllumina Universal Adapter\tNextera Transposase Sequence",
        "1\t0.0\t0.0",
        "2\t0.004\t0.0",
    ]),
    "Kmer Content": ("fail", [
        "#Sequence\tCount\tPValue\tObs/Exp Max\tMax Obs/Exp Position",
        "GGGGGGG\t120\t0.0\t12.5\t140-144",
        "CCCCCAA\t45\t1.2E-4\t7.1\t3",
    ]),
}


def build_lines(filename="sample_R1.fastq.gz", drop=(), replace=None, extra=None):
    """Render a fastqc_data.txt as a list of lines.

    `drop` removes modules by display name, `replace` maps display names to
    new body lines and `extra` appends additional (display name, body) pairs.
    """
    replace = replace or {}
    lines = ["##FastQC\t0.11.9"]
    modules = list(MODULES.items()) + [(name, ("pass", body)) for name, body in (extra or [])]
    for name, (status, body) in modules:
        if name in drop:
            continue
        lines.append(f">>{name}\t{status}")
        for line in replace.get(name, body):
            lines.append(line.format(filename=filename))
        lines.append(">>END_MODULE")
    return lines


def build_summary(filename="sample_R1.fastq.gz", drop=()):
    return [
        f"{status.upper()}\t{name}\t{filename}"
        for name, (status, _) in MODULES.items()
        if name not in drop
    ]


def write_output(directory: Path, sample: str, archive: bool = True, lines=None, summary=None) -> Path:
    """Write a FastQC output as ``<sample>_fastqc.zip`` or an unzipped folder."""
    filename = f"{sample}.fastq.gz"
    data = "\n".join(lines if lines is not None else build_lines(filename)) + "\n"
    summary_text = "\n".join(summary if summary is not None else build_summary(filename)) + "\n"
    folder = f"{sample}_fastqc"

    if archive:
        path = directory / f"{folder}.zip"
        with zipfile.ZipFile(path, "w") as zf:
            zf.writestr(f"{folder}/fastqc_data.txt", data)
            zf.writestr(f"{folder}/summary.txt", summary_text)
            zf.writestr(f"{folder}/fastqc_report.html", "<html></html>")
        return path

    path = directory / folder
    path.mkdir(parents=True)
    (path / "fastqc_data.txt").write_text(data)
    (path / "summary.txt").write_text(summary_text)
    return path


@pytest.fixture
def report_lines():
    return build_lines()


@pytest.fixture
def make_lines():
    return build_lines


@pytest.fixture
def make_summary():
    return build_summary


@pytest.fixture
def make_output():
    return write_output
