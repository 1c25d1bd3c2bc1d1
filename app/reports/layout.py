"""Render-ready view of a report shared by the PDF and email sinks."""

from __future__ import annotations

from dataclasses import dataclass

from app.reports.models import Report
from app.utils.dates import parse_timestamp

REPORT_TITLE = "Uber Eats Analytics Report"
PRODUCT_NAME = "Uber Eats Analytics Tool"


@dataclass(slots=True, frozen=True)
class MetricRow:
    label: str
    value: str


@dataclass(slots=True, frozen=True)
class Section:
    title: str
    rows: tuple[MetricRow, ...]


def format_currency(value: float) -> str:
    return f"${value:,.2f}"


def format_count(value: float) -> str:
    return f"{value:,.0f}"


def format_percent(value: float) -> str:
    return f"{value:.1f}%"


def artifact_filename(report_id: str) -> str:
    return f"uber-eats-report-{report_id}.pdf"


def period_label(report: Report) -> str:
    return f"Period: {report.period.start_date} to {report.period.end_date}"


def generated_label(report: Report) -> str:
    stamp = parse_timestamp(report.generated_at)
    when = stamp.format("YYYY-MM-DD HH:mm [UTC]") if stamp is not None else report.generated_at
    return f"Generated on {when}"


def summary_sections(report: Report) -> list[Section]:
    """Metric blocks in display order.

    Advertising and promotion blocks only appear when the period had spend.
    """
    s = report.summary
    sections = [
        Section(
            "Performance Summary",
            (
                MetricRow("Total Sales", format_currency(s.total_sales)),
                MetricRow("Total Orders", format_count(s.total_orders)),
                MetricRow("Average Basket", format_currency(s.average_basket)),
                MetricRow("Net Delivery Gross", format_currency(s.net_delivery_gross)),
                MetricRow("NDG Percentage", format_percent(s.net_delivery_gross_percentage)),
            ),
        )
    ]
    if s.total_ad_spend > 0:
        sections.append(
            Section(
                "Advertising Performance",
                (
                    MetricRow("Ad Spend", format_currency(s.total_ad_spend)),
                    MetricRow("Ad Sales", format_currency(s.total_ad_sales)),
                    MetricRow("Ad ROI", format_percent(s.ad_roi)),
                ),
            )
        )
    if s.total_promotion_spend > 0:
        sections.append(
            Section(
                "Promotion Performance",
                (
                    MetricRow("Promotion Spend", format_currency(s.total_promotion_spend)),
                    MetricRow("Promotion Sales", format_currency(s.total_promotion_sales)),
                    MetricRow("Promotion ROI", format_percent(s.promotion_roi)),
                ),
            )
        )
    return sections
