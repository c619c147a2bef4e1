"""Parse many FastQC reports into an ordered ReportCollection."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable, Sequence

from ngsreports.fastqc.assembler import load_report
from ngsreports.fastqc.errors import CollectionError, ReportError
from ngsreports.fastqc.models import (
    ParseFailure,
    PartialCollection,
    Report,
    ReportCollection,
)

logger = logging.getLogger(__name__)

Loader = Callable[[str | Path], Report]


def _failure(index: int, source: str | Path, error: ReportError) -> ParseFailure:
    return ParseFailure(
        index=index,
        source=str(source),
        error_type=type(error).__name__,
        message=str(error),
    )


def _partial(
    sources: Sequence[str | Path],
    outcomes: Sequence[Report | ReportError],
) -> PartialCollection:
    reports: list[Report] = []
    indices: list[int] = []
    failures: list[ParseFailure] = []
    for index, (source, outcome) in enumerate(zip(sources, outcomes)):
        if isinstance(outcome, ReportError):
            failures.append(_failure(index, source, outcome))
        else:
            reports.append(outcome)
            indices.append(index)
    if failures:
        logger.warning(
            "Parsed %d of %d report(s); %d failed",
            len(reports), len(sources), len(failures),
        )
    return PartialCollection(
        reports=ReportCollection(tuple(reports)),
        indices=tuple(indices),
        failures=tuple(failures),
    )


def parse_collection(
    sources: Sequence[str | Path],
    loader: Loader = load_report,
) -> ReportCollection:
    """Parse every source in order; stop at the first failure.

    Raises:
        CollectionError: wraps the first member's ReportError together
            with its index and source.
    """
    reports = []
    for index, source in enumerate(sources):
        try:
            reports.append(loader(source))
        except ReportError as e:
            raise CollectionError(index, str(source), e) from e
    logger.info("Parsed %d report(s)", len(reports))
    return ReportCollection(tuple(reports))


def parse_collection_partial(
    sources: Sequence[str | Path],
    loader: Loader = load_report,
) -> PartialCollection:
    """Parse every source in order, recording failures instead of stopping."""
    outcomes: list[Report | ReportError] = []
    for source in sources:
        try:
            outcomes.append(loader(source))
        except ReportError as e:
            outcomes.append(e)
    return _partial(sources, outcomes)


async def parse_collection_async(
    sources: Sequence[str | Path],
    concurrency: int = 4,
    partial: bool = False,
    loader: Loader = load_report,
) -> ReportCollection | PartialCollection:
    """Parse sources on worker threads, keeping results in input order.

    Each member opens its own resource handle. With ``partial=False`` the
    first failure in input order is raised as a CollectionError; with
    ``partial=True`` a PartialCollection is returned.

    Every member runs to completion before anything is raised. An exception
    that is not a ReportError is then re-raised as is, the first one in
    input order winning.
    """
    semaphore = asyncio.Semaphore(max(1, concurrency))

    async def run(source: str | Path) -> Report:
        async with semaphore:
            return await asyncio.to_thread(loader, source)

    outcomes = await asyncio.gather(
        *(run(source) for source in sources), return_exceptions=True
    )
    for outcome in outcomes:
        if isinstance(outcome, BaseException) and not isinstance(outcome, ReportError):
            raise outcome

    if partial:
        return _partial(sources, outcomes)

    for index, (source, outcome) in enumerate(zip(sources, outcomes)):
        if isinstance(outcome, ReportError):
            raise CollectionError(index, str(source), outcome) from outcome
    logger.info("Parsed %d report(s)", len(outcomes))
    return ReportCollection(tuple(outcomes))
