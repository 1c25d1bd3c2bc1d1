"""FastAPI application for report generation and retrieval."""

from __future__ import annotations

import logging
import os
from typing import Any

from dotenv import load_dotenv
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.ingest import load_sample_snapshots
from app.logic.daily import process_captured_data
from app.reports.errors import RenderError, ReportInputError, ReportNotFoundError
from app.reports.layout import artifact_filename
from app.reports.models import DeliveryOptions
from app.reports.service import ReportService, build_report, build_report_service
from app.utils.dates import utc_now_iso

logger = logging.getLogger(__name__)

load_dotenv()

VERSION = "1.0.0"

app = FastAPI(title="Uber Eats Analytics API", version=VERSION)
app.state.report_service = build_report_service()

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in os.environ.get("CORS_ORIGINS", "*").split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Origin", "X-Requested-With", "Accept"],
)

router = APIRouter(prefix="/api")


class GenerateReportRequest(BaseModel):
    captured_data: list[Any] | None = Field(default=None, alias="capturedData")
    # Checked when the email is composed; a bad address only fails delivery.
    email: str | None = None


def get_report_service(request: Request) -> ReportService:
    return request.app.state.report_service


def _debug_enabled() -> bool:
    return os.environ.get("DEBUG", "").lower() in {"1", "true", "yes"}


def _failure(status_code: int, error: str, message: str | None = None) -> JSONResponse:
    body: dict[str, Any] = {"success": False, "error": error}
    if message is not None:
        body["message"] = message
    return JSONResponse(body, status_code=status_code)


@app.get("/health")
async def health() -> JSONResponse:
    return JSONResponse({"status": "healthy", "timestamp": utc_now_iso(), "version": VERSION})


@router.post("/generate-report")
async def generate_report(
    payload: GenerateReportRequest, service: ReportService = Depends(get_report_service)
) -> JSONResponse:
    options = DeliveryOptions(format="both" if payload.email else "pdf", email=payload.email)
    try:
        result = await service.generate_from_capture(payload.captured_data or [], options)
    except ReportInputError as exc:
        return _failure(400, str(exc))
    except RenderError as exc:
        logger.error("Report rendering failed: %s", exc)
        return _failure(500, "Failed to generate report", str(exc))
    except Exception as exc:
        logger.exception("Error generating report")
        return _failure(500, "Failed to generate report", str(exc))
    return JSONResponse(
        {
            "success": True,
            "reportId": result.report_id,
            "downloadUrl": result.download_url,
            "emailSent": result.email_sent,
        }
    )


@router.get("/report/{report_id}")
async def get_report(report_id: str, service: ReportService = Depends(get_report_service)) -> JSONResponse:
    try:
        report = service.get_report(report_id)
    except ReportNotFoundError:
        return _failure(404, "Report not found")
    return JSONResponse({"success": True, "report": report.to_dict()})


@router.get("/report/{report_id}/download")
async def download_report(report_id: str, service: ReportService = Depends(get_report_service)) -> Response:
    try:
        content = await service.read_artifact(report_id)
    except ReportNotFoundError:
        return _failure(404, "Report PDF not found")
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{artifact_filename(report_id)}"'},
    )


@router.post("/test-data")
async def sample_report() -> JSONResponse:
    """Report computed from the bundled sample capture; nothing is stored."""
    data = process_captured_data(load_sample_snapshots())
    if data is None:
        return _failure(500, "Failed to process test data")
    return JSONResponse({"success": True, "report": build_report(data).to_dict()})


app.include_router(router)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return _failure(404, "Route not found")
    return _failure(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s", request.url.path)
    message = str(exc) if _debug_enabled() else "Something went wrong"
    return _failure(500, "Internal server error", message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    return _failure(400, "Invalid request body", problems)
