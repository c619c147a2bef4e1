"""Report parsing routes."""

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ngsreports.config import Settings, load_settings
from ngsreports.fastqc import (
    CollectionError,
    ParseFailure,
    PartialCollection,
    ReportCollection,
    ResourceUnavailable,
    find_reports_async,
    parse_collection_async,
)
from ngsreports.fastqc.accessors import deduplicated_percentages, read_totals, summary_records


router = APIRouter(prefix="/reports", tags=["reports"])


class ParseRequest(BaseModel):
    """Request body for parsing FastQC outputs."""

    paths: list[str] = Field(..., min_length=1, description="Zip archives, output folders or data files")
    partial: bool = Field(default=False, description="Return successes and failures instead of failing")


class ParseResponse(BaseModel):
    """Parsed reports plus any per-resource failures."""

    message: str
    reports: list[dict[str, Any]]
    failures: list[ParseFailure] = Field(default_factory=list)


class SummaryResponse(BaseModel):
    """Flags, totals and duplication for every report below a directory."""

    directory: str
    files: list[str]
    summary: list[dict[str, Any]]
    totals: list[dict[str, Any]]
    deduplicated: list[dict[str, Any]]


_settings: Settings | None = None


def set_settings(settings: Settings):
    """Set the settings instance for this router."""
    global _settings
    _settings = settings


def get_settings() -> Settings:
    if _settings is None:
        return load_settings()
    return _settings


def _http_error(error: CollectionError) -> HTTPException:
    status = 404 if isinstance(error.cause, ResourceUnavailable) else 422
    return HTTPException(status_code=status, detail=str(error))


@router.post("/parse", response_model=ParseResponse)
async def parse_reports(request: ParseRequest) -> ParseResponse:
    """
    Parse one or more FastQC outputs.

    Reports are returned in request order, keyed by canonical FastQC
    column names.
    """
    settings = get_settings()
    try:
        result = await parse_collection_async(
            request.paths,
            concurrency=settings.concurrency,
            partial=request.partial,
        )
    except CollectionError as e:
        raise _http_error(e)

    if isinstance(result, PartialCollection):
        reports: ReportCollection = result.reports
        failures = list(result.failures)
    else:
        reports, failures = result, []

    return ParseResponse(
        message=f"Parsed {len(reports)} of {len(request.paths)} report(s).",
        reports=reports.model_dump(mode="json", by_alias=True),
        failures=failures,
    )


@router.get("/summary", response_model=SummaryResponse)
async def summarize_directory(directory: str, max_depth: int | None = None) -> SummaryResponse:
    """
    Discover FastQC outputs below a directory and summarise them.

    Any report that fails to parse fails the whole request.
    """
    settings = get_settings()
    try:
        scan = await find_reports_async(
            directory,
            max_depth=settings.scan_depth if max_depth is None else max_depth,
        )
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except NotADirectoryError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        reports = await parse_collection_async(scan.paths(), concurrency=settings.concurrency)
    except CollectionError as e:
        raise _http_error(e)

    return SummaryResponse(
        directory=scan.scan_path,
        files=reports.file_names(),
        summary=summary_records(reports),
        totals=read_totals(reports),
        deduplicated=deduplicated_percentages(reports),
    )
