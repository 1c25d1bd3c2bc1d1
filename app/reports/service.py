"""Report assembly, storage and delivery."""

from __future__ import annotations

import asyncio
import logging
import uuid
from pathlib import Path
from typing import Any, Callable, Sequence

from pydantic.networks import validate_email

from app.email.render import render_email
from app.logic.daily import process_captured_data
from app.logic.pdf_report import write_pdf
from app.logic.recommendations import generate_recommendations
from app.logic.summary import calculate_summary
from app.reports.errors import ReportInputError, ReportNotFoundError
from app.reports.layout import artifact_filename
from app.reports.models import DeliveryOptions, GenerationResult, Report, RestaurantData
from app.reports.store import ReportStore
from app.utils.dates import utc_now_iso
from app.utils.esp import EmailAttachment, EmailMessage, EmailProvider

logger = logging.getLogger(__name__)

DOWNLOAD_PATH = "/api/report/{report_id}/download"

PdfWriter = Callable[[Report, str], Path]


def build_report(data: RestaurantData, *, generated_at: str | None = None) -> Report:
    summary = calculate_summary(data)
    return Report(
        restaurant_id=data.restaurant_id,
        restaurant_name=data.restaurant_name,
        period=data.period,
        summary=summary,
        recommendations=tuple(generate_recommendations(summary)),
        generated_at=generated_at or utc_now_iso(),
    )


class ReportService:
    def __init__(
        self,
        store: ReportStore | None = None,
        *,
        email_provider: EmailProvider | None = None,
        pdf_writer: PdfWriter | None = None,
    ) -> None:
        # ReportStore defines __len__, so an empty store is falsy.
        self.store = store if store is not None else ReportStore()
        self.email_provider = email_provider if email_provider is not None else EmailProvider()
        self.pdf_writer = pdf_writer if pdf_writer is not None else write_pdf

    async def generate(self, data: RestaurantData, options: DeliveryOptions) -> GenerationResult:
        """Build and store a report, then render and deliver it as requested.

        A rendering failure propagates after the report is stored. A
        delivery failure, from composing the email through the provider, is
        logged and reported as ``email_sent=False``.
        """
        report = build_report(data)
        report_id = str(uuid.uuid4())
        self.store.save(report_id, report)
        logger.info("Generated report %s for %s", report_id, report.restaurant_name)

        result = GenerationResult(report_id=report_id)
        if options.format in ("pdf", "both"):
            path = await asyncio.get_running_loop().run_in_executor(None, self.pdf_writer, report, report_id)
            self.store.attach_artifact(report_id, path)
            result.download_url = DOWNLOAD_PATH.format(report_id=report_id)

        if options.email and options.format in ("email", "both"):
            result.email_sent = await self._deliver(report, report_id, options.email)
        return result

    async def generate_from_capture(
        self, captured: Sequence[Any], options: DeliveryOptions
    ) -> GenerationResult:
        if not captured:
            raise ReportInputError("No captured data provided")
        data = process_captured_data(captured)
        if data is None:
            raise ReportInputError("Unable to process captured data")
        return await self.generate(data, options)

    def get_report(self, report_id: str) -> Report:
        report = self.store.get(report_id)
        if report is None:
            raise ReportNotFoundError(report_id)
        return report

    def get_artifact(self, report_id: str) -> bytes:
        path = self.store.artifact_path(report_id)
        if path is None or not path.exists():
            raise ReportNotFoundError(report_id, what="Report PDF")
        return path.read_bytes()

    async def read_artifact(self, report_id: str) -> bytes:
        """``get_artifact`` off the event loop, for request handlers."""
        return await asyncio.get_running_loop().run_in_executor(None, self.get_artifact, report_id)

    def _compose(self, report: Report, report_id: str, email: str) -> EmailMessage:
        validate_email(email)
        subject, html = render_email(report)
        message = EmailMessage(to=email, subject=subject, html=html)
        path = self.store.artifact_path(report_id)
        if path is not None and path.exists():
            message.attachments.append(
                EmailAttachment(filename=artifact_filename(report_id), content=path.read_bytes())
            )
        return message

    async def _deliver(self, report: Report, report_id: str, email: str) -> bool:
        try:
            message = await asyncio.get_running_loop().run_in_executor(
                None, self._compose, report, report_id, email
            )
            await self.email_provider.send(message)
        except Exception as exc:
            logger.warning("Email for report %s not delivered: %s", report_id, exc)
            return False
        logger.info("Emailed report %s to %s", report_id, email)
        return True


def build_report_service() -> ReportService:
    return ReportService(ReportStore())
