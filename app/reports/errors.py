"""Errors raised along the report lifecycle."""

from __future__ import annotations


class ReportError(RuntimeError):
    pass


class ReportInputError(ReportError):
    """The capture batch is empty or carries no restaurant identity."""


class ReportNotFoundError(ReportError):
    def __init__(self, report_id: str, what: str = "Report") -> None:
        super().__init__(f"{what} {report_id} not found")
        self.report_id = report_id


class RenderError(ReportError):
    pass


class DeliveryError(ReportError):
    pass
