from dataclasses import replace

import pytest

from app.email.render import render_email
from app.logic import pdf_report
from app.reports.errors import RenderError
from app.reports.layout import summary_sections
from app.reports.service import build_report


@pytest.fixture()
def report(restaurant_data):
    return build_report(restaurant_data, generated_at="2024-01-03T08:30:00+00:00")


def test_sections_with_spend(report):
    sections = summary_sections(report)
    assert [section.title for section in sections] == [
        "Performance Summary",
        "Advertising Performance",
        "Promotion Performance",
    ]
    assert [len(section.rows) for section in sections] == [5, 3, 3]
    assert sections[0].rows[0].value == "$2,000.00"
    assert sections[0].rows[4].value == "75.0%"


def test_sections_without_spend(report):
    quiet = replace(report, summary=replace(report.summary, total_ad_spend=0, total_promotion_spend=0))
    assert [section.title for section in summary_sections(quiet)] == ["Performance Summary"]


def test_email_html(report):
    subject, html = render_email(report)
    assert subject == "Uber Eats Analytics Report - Test Restaurant"
    assert "Period: 2024-01-01 to 2024-01-02" in html
    assert "Advertising Performance" in html
    assert "Promotion Performance" in html
    assert html.count('class="recommendation"') == len(report.recommendations)
    assert "Generated on 2024-01-03 08:30 UTC" in html


def test_email_html_escapes_names(report):
    _, html = render_email(replace(report, restaurant_name="Fish & <Chips>"))
    assert "Fish &amp; &lt;Chips&gt;" in html


def test_render_pdf(report):
    content = pdf_report.render_pdf(replace(report, restaurant_name="Fish & <Chips>"))
    assert content.startswith(b"%PDF")


def test_write_pdf(tmp_path, report):
    path = pdf_report.write_pdf(report, "abc", output_dir=tmp_path)
    assert path.name == "uber-eats-report-abc.pdf"
    assert path.read_bytes().startswith(b"%PDF")


def test_write_pdf_io_failure(tmp_path, report):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    with pytest.raises(RenderError):
        pdf_report.write_pdf(report, "abc", output_dir=blocker)
