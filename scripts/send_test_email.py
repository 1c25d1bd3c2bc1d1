"""Generate a report from the sample capture and email it."""

from __future__ import annotations

import asyncio
import os

from dotenv import load_dotenv

from app.ingest import load_sample_snapshots
from app.reports.models import DeliveryOptions
from app.reports.service import build_report_service


async def main() -> None:
    load_dotenv()
    recipient = os.environ.get("TEST_RECIPIENT")
    if not recipient:
        raise SystemExit("TEST_RECIPIENT env var required")
    service = build_report_service()
    result = await service.generate_from_capture(
        load_sample_snapshots(), DeliveryOptions(format="both", email=recipient)
    )
    if not result.email_sent:
        raise SystemExit(f"Report {result.report_id} generated but the email was not delivered")
    print("Sent report", result.report_id, "to", recipient)


if __name__ == "__main__":
    asyncio.run(main())
