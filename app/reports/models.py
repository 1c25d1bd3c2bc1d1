"""Report value types and their JSON projection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

PromotionType = Literal["discount", "free_delivery", "bogo", "other"]
PROMOTION_TYPES: frozenset[str] = frozenset({"discount", "free_delivery", "bogo", "other"})

ReportFormat = Literal["pdf", "email", "both"]


@dataclass(slots=True, frozen=True)
class PeriodWindow:
    start_date: str
    end_date: str

    def to_dict(self) -> dict[str, Any]:
        return {"startDate": self.start_date, "endDate": self.end_date}


@dataclass(slots=True, frozen=True)
class DailySalesMetric:
    date: str | None
    total_sales: float
    total_orders: float
    average_basket: float
    net_delivery_gross: float
    net_delivery_gross_percentage: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "totalSales": self.total_sales,
            "totalOrders": self.total_orders,
            "averageBasket": self.average_basket,
            "netDeliveryGross": self.net_delivery_gross,
            "netDeliveryGrossPercentage": self.net_delivery_gross_percentage,
        }


@dataclass(slots=True, frozen=True)
class DailyAdMetric:
    date: str | None
    ad_spend: float
    ad_sales: float
    ad_orders: float
    ad_roi: float
    impressions: float
    clicks: float
    ctr: float
    cpc: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "adSpend": self.ad_spend,
            "adSales": self.ad_sales,
            "adOrders": self.ad_orders,
            "adROI": self.ad_roi,
            "impressions": self.impressions,
            "clicks": self.clicks,
            "ctr": self.ctr,
            "cpc": self.cpc,
        }


@dataclass(slots=True, frozen=True)
class PromotionRecord:
    date: str | None
    promotion_name: str
    promotion_type: PromotionType
    promotion_spend: float
    promotion_sales: float
    promotion_orders: float
    promotion_roi: float
    redemption_count: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "promotionName": self.promotion_name,
            "promotionType": self.promotion_type,
            "promotionSpend": self.promotion_spend,
            "promotionSales": self.promotion_sales,
            "promotionOrders": self.promotion_orders,
            "promotionROI": self.promotion_roi,
            "redemptionCount": self.redemption_count,
        }


@dataclass(slots=True, frozen=True)
class RestaurantData:
    """Aggregated capture for one restaurant over one period."""

    restaurant_id: str
    restaurant_name: str
    period: PeriodWindow
    sales: tuple[DailySalesMetric, ...]
    ads: tuple[DailyAdMetric, ...]
    promotions: tuple[PromotionRecord, ...]
    captured_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "restaurantId": self.restaurant_id,
            "restaurantName": self.restaurant_name,
            "period": self.period.to_dict(),
            "sales": [metric.to_dict() for metric in self.sales],
            "ads": [metric.to_dict() for metric in self.ads],
            "promotions": [record.to_dict() for record in self.promotions],
            "capturedAt": self.captured_at,
        }


@dataclass(slots=True, frozen=True)
class AnalyticsSummary:
    total_sales: float
    total_orders: float
    average_basket: float
    net_delivery_gross: float
    net_delivery_gross_percentage: float
    total_ad_spend: float
    total_ad_sales: float
    ad_roi: float
    total_promotion_spend: float
    total_promotion_sales: float
    promotion_roi: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalSales": self.total_sales,
            "totalOrders": self.total_orders,
            "averageBasket": self.average_basket,
            "netDeliveryGross": self.net_delivery_gross,
            "netDeliveryGrossPercentage": self.net_delivery_gross_percentage,
            "totalAdSpend": self.total_ad_spend,
            "totalAdSales": self.total_ad_sales,
            "adROI": self.ad_roi,
            "totalPromotionSpend": self.total_promotion_spend,
            "totalPromotionSales": self.total_promotion_sales,
            "promotionROI": self.promotion_roi,
        }


@dataclass(slots=True, frozen=True)
class Report:
    restaurant_id: str
    restaurant_name: str
    period: PeriodWindow
    summary: AnalyticsSummary
    recommendations: tuple[str, ...]
    generated_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "restaurantId": self.restaurant_id,
            "restaurantName": self.restaurant_name,
            "period": self.period.to_dict(),
            "summary": self.summary.to_dict(),
            "recommendations": list(self.recommendations),
            "generatedAt": self.generated_at,
        }


@dataclass(slots=True, frozen=True)
class DeliveryOptions:
    format: ReportFormat = "pdf"
    email: str | None = None


@dataclass(slots=True)
class GenerationResult:
    report_id: str
    download_url: str | None = None
    email_sent: bool = False
