"""PDF rendering of generated reports."""

from __future__ import annotations

import io
import logging
import os
from pathlib import Path
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from app.reports.errors import RenderError
from app.reports.layout import (
    REPORT_TITLE,
    artifact_filename,
    generated_label,
    period_label,
    summary_sections,
)
from app.reports.models import Report

logger = logging.getLogger(__name__)

OUTPUT_DIR = Path(os.environ.get("REPORT_OUTPUT_DIR", "artifacts/reports"))

BRAND_COLOR = colors.HexColor("#00D4AA")
TEXT_COLOR = colors.HexColor("#333333")
MUTED_COLOR = colors.HexColor("#666666")


def _styles() -> dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "title": ParagraphStyle("ReportTitle", parent=base["Title"], fontSize=24, leading=28, textColor=BRAND_COLOR, alignment=0),
        "restaurant": ParagraphStyle("Restaurant", parent=base["Heading2"], fontSize=16, textColor=TEXT_COLOR),
        "period": ParagraphStyle("Period", parent=base["Normal"], fontSize=12, textColor=MUTED_COLOR),
        "section": ParagraphStyle("Section", parent=base["Heading2"], fontSize=16, textColor=TEXT_COLOR, spaceBefore=12),
        "body": ParagraphStyle("Body", parent=base["Normal"], fontSize=12, leading=16, textColor=TEXT_COLOR),
        "footer": ParagraphStyle("Footer", parent=base["Normal"], fontSize=10, textColor=MUTED_COLOR),
    }


def _pdf_text(value: str) -> str:
    # The built-in PDF fonts only cover Latin-1, so emoji markers are dropped.
    latin = value.encode("latin-1", errors="ignore").decode("latin-1")
    return escape(latin.strip())


def render_pdf(report: Report) -> bytes:
    styles = _styles()
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=letter,
        leftMargin=50,
        rightMargin=50,
        topMargin=50,
        bottomMargin=50,
        title=f"{REPORT_TITLE} - {report.restaurant_name}",
    )
    story = [
        Paragraph(REPORT_TITLE, styles["title"]),
        Paragraph(_pdf_text(report.restaurant_name), styles["restaurant"]),
        Paragraph(period_label(report), styles["period"]),
        Spacer(1, 0.2 * inch),
    ]

    for section in summary_sections(report):
        story.append(Paragraph(section.title, styles["section"]))
        table = Table(
            [[Paragraph(f"{row.label}:", styles["body"]), Paragraph(row.value, styles["body"])] for row in section.rows],
            colWidths=[2.1 * inch, 3.5 * inch],
            hAlign="LEFT",
        )
        table.setStyle(
            TableStyle(
                [
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("LEFTPADDING", (0, 0), (-1, -1), 0),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        story.append(table)

    story.append(Paragraph("Recommendations", styles["section"]))
    for index, recommendation in enumerate(report.recommendations, start=1):
        story.append(Paragraph(f"{index}. {_pdf_text(recommendation)}", styles["body"]))
        story.append(Spacer(1, 0.1 * inch))

    story.append(Spacer(1, 0.3 * inch))
    story.append(Paragraph(generated_label(report), styles["footer"]))

    doc.build(story)
    return buffer.getvalue()


def write_pdf(report: Report, report_id: str, *, output_dir: Path | None = None) -> Path:
    """Render ``report`` and write it under the report output directory."""
    target_dir = output_dir or OUTPUT_DIR
    try:
        content = render_pdf(report)
        target_dir.mkdir(parents=True, exist_ok=True)
        file_path = target_dir / artifact_filename(report_id)
        file_path.write_bytes(content)
    except OSError as exc:
        raise RenderError(f"Could not write PDF for report {report_id}: {exc}") from exc
    except Exception as exc:
        raise RenderError(f"Could not render PDF for report {report_id}: {exc}") from exc
    logger.info("Wrote PDF for report %s to %s", report_id, file_path)
    return file_path
