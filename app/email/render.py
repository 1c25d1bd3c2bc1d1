"""Email rendering utilities."""

from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.reports.layout import (
    PRODUCT_NAME,
    REPORT_TITLE,
    generated_label,
    period_label,
    summary_sections,
)
from app.reports.models import Report

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent
ENV = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(enabled_extensions=("html",)),
)


def report_subject(report: Report) -> str:
    return f"{REPORT_TITLE} - {report.restaurant_name}"


def render_report_html(report: Report) -> str:
    template = ENV.get_template("report.html")
    return template.render(
        title=REPORT_TITLE,
        product_name=PRODUCT_NAME,
        restaurant_name=report.restaurant_name,
        period=period_label(report),
        sections=summary_sections(report),
        recommendations=report.recommendations,
        generated=generated_label(report),
    )


def render_email(report: Report) -> tuple[str, str]:
    subject = report_subject(report)
    html = render_report_html(report)
    logger.debug("Rendered email %r (%d bytes)", subject, len(html))
    return subject, html
