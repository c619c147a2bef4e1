import asyncio

import pytest

from ngsreports.fastqc import (
    CollectionError,
    MissingModule,
    PartialCollection,
    ReportCollection,
    ResourceUnavailable,
    load_report,
    parse_collection,
    parse_collection_async,
    parse_collection_partial,
)


@pytest.fixture
def outputs(tmp_path, make_output, make_lines):
    """Five valid archives with one broken report in fourth position."""
    paths = [make_output(tmp_path, f"S{i}") for i in range(1, 4)]
    broken = make_lines("S4.fastq.gz", drop=("Adapter Content",))
    paths.append(make_output(tmp_path, "S4", lines=broken))
    paths += [make_output(tmp_path, f"S{i}", archive=False) for i in range(5, 7)]
    return paths


def test_collection_keeps_input_order(tmp_path, make_output):
    paths = [make_output(tmp_path, name) for name in ("zeta", "alpha", "mid")]
    collection = parse_collection(paths)
    assert isinstance(collection, ReportCollection)
    assert collection.file_names() == ["zeta.fastq.gz", "alpha.fastq.gz", "mid.fastq.gz"]
    assert collection[1].filename == "alpha.fastq.gz"
    assert collection[1:].file_names() == ["alpha.fastq.gz", "mid.fastq.gz"]


def test_empty_collection():
    assert len(parse_collection([])) == 0


def test_collection_fails_on_first_bad_member(outputs):
    with pytest.raises(CollectionError) as excinfo:
        parse_collection(outputs)
    error = excinfo.value
    assert error.index == 3
    assert error.source == str(outputs[3])
    assert isinstance(error.cause, MissingModule)
    assert error.cause.modules == ["Adapter_Content"]
    assert "Report #3 failed" in str(error)


def test_partial_collection(outputs):
    result = parse_collection_partial(outputs)
    assert isinstance(result, PartialCollection)
    assert not result.ok
    assert len(result.reports) == 5
    assert result.indices == (0, 1, 2, 4, 5)
    assert len(result.failures) == 1
    failure = result.failures[0]
    assert failure.index == 3
    assert failure.error_type == "MissingModule"
    assert "Adapter_Content" in failure.message


def test_partial_collection_without_failures(tmp_path, make_output):
    result = parse_collection_partial([make_output(tmp_path, "ok")])
    assert result.ok
    assert result.indices == (0,)


def test_async_collection_matches_sequential(tmp_path, make_output):
    paths = [make_output(tmp_path, f"R{i}", archive=bool(i % 2)) for i in range(8)]
    collection = asyncio.run(parse_collection_async(paths, concurrency=3))
    assert collection == parse_collection(paths)


def test_async_collection_raises_first_failure_in_input_order(tmp_path, make_output):
    paths = [make_output(tmp_path, "good"), tmp_path / "missing_fastqc.zip", tmp_path / "also_missing"]
    with pytest.raises(CollectionError) as excinfo:
        asyncio.run(parse_collection_async(paths))
    assert excinfo.value.index == 1
    assert isinstance(excinfo.value.cause, ResourceUnavailable)


def test_async_partial_collection(outputs):
    result = asyncio.run(parse_collection_async(outputs, concurrency=2, partial=True))
    assert result == parse_collection_partial(outputs)


def test_custom_loader_errors_other_than_report_errors_propagate():
    def loader(source):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        parse_collection(["x"], loader=loader)


def test_async_collection_finishes_every_member_before_raising(tmp_path, make_output):
    paths = [make_output(tmp_path, f"T{i}") for i in range(4)]
    loaded = []

    def loader(source):
        if source == paths[0]:
            raise RuntimeError("boom")
        loaded.append(source)
        return load_report(source)

    with pytest.raises(RuntimeError, match="boom"):
        asyncio.run(parse_collection_async(paths, concurrency=2, loader=loader))
    assert sorted(loaded) == sorted(paths[1:])
