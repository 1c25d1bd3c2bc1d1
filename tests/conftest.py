from functools import partial

import pytest
from fastapi.testclient import TestClient

from app.api import main
from app.logic.pdf_report import write_pdf
from app.reports.errors import DeliveryError
from app.reports.models import (
    DailyAdMetric,
    DailySalesMetric,
    PeriodWindow,
    PromotionRecord,
    RestaurantData,
)
from app.reports.service import ReportService
from app.reports.store import ReportStore


class RecordingEmailProvider:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent = []

    async def send(self, message):
        if self.fail:
            raise DeliveryError("smtp down")
        self.sent.append(message)


def snapshot(timestamp="2024-01-01T10:00:00Z", **data):
    return {"pageType": "dashboard", "url": "https://merchants.example/dashboard", "timestamp": timestamp, "data": data}


RESTAURANT = {"name": "Test Restaurant", "id": "test-restaurant-123"}


@pytest.fixture()
def captured():
    return [
        snapshot(
            "2024-01-01T09:00:00Z",
            restaurant=RESTAURANT,
            sales={"totalSales": 1000, "totalOrders": 20, "netDeliveryGross": 800},
            ads={"adSpend": 100, "adSales": 400, "impressions": 5000, "clicks": 50},
        ),
        snapshot(
            "2024-01-01T17:30:00Z",
            restaurant=RESTAURANT,
            sales={"totalSales": 500, "totalOrders": 10, "netDeliveryGross": 400},
        ),
        snapshot(
            "2024-01-03T12:00:00Z",
            restaurant=RESTAURANT,
            promotions=[{"name": "BOGO Burgers", "type": "bogo", "spend": 50, "sales": 100, "orders": 4, "redemptions": 4}],
        ),
    ]


@pytest.fixture()
def restaurant_data():
    return RestaurantData(
        restaurant_id="test-restaurant-123",
        restaurant_name="Test Restaurant",
        period=PeriodWindow("2024-01-01", "2024-01-02"),
        sales=(
            DailySalesMetric("2024-01-01", 1500.0, 45.0, 1500 / 45, 1200.0, 80.0),
            DailySalesMetric("2024-01-02", 500.0, 5.0, 100.0, 300.0, 60.0),
        ),
        ads=(DailyAdMetric("2024-01-01", 100.0, 300.0, 10.0, 200.0, 5000.0, 50.0, 1.0, 2.0),),
        promotions=(PromotionRecord("2024-01-01", "20% Off First Order", "discount", 50.0, 200.0, 8.0, 300.0, 8.0),),
        captured_at="2024-01-02T12:00:00+00:00",
    )


@pytest.fixture()
def email_provider():
    return RecordingEmailProvider()


@pytest.fixture()
def service(tmp_path, email_provider):
    return ReportService(
        ReportStore(),
        email_provider=email_provider,
        pdf_writer=partial(write_pdf, output_dir=tmp_path / "reports"),
    )


@pytest.fixture()
def client(service):
    main.app.dependency_overrides[main.get_report_service] = lambda: service
    with TestClient(main.app) as test_client:
        yield test_client
    main.app.dependency_overrides.clear()
