"""Whole-period summary of aggregated restaurant data."""

from __future__ import annotations

from app.logic.metrics import percentage_of, roi_percentage, safe_ratio
from app.reports.models import AnalyticsSummary, RestaurantData


def calculate_summary(data: RestaurantData) -> AnalyticsSummary:
    """Sum every day and record, then derive ratios once from the totals.

    Per-day ratios are never averaged.
    """
    total_sales = sum((day.total_sales for day in data.sales), 0.0)
    total_orders = sum((day.total_orders for day in data.sales), 0.0)
    net_delivery_gross = sum((day.net_delivery_gross for day in data.sales), 0.0)

    total_ad_spend = sum((day.ad_spend for day in data.ads), 0.0)
    total_ad_sales = sum((day.ad_sales for day in data.ads), 0.0)

    total_promotion_spend = sum((promo.promotion_spend for promo in data.promotions), 0.0)
    total_promotion_sales = sum((promo.promotion_sales for promo in data.promotions), 0.0)

    return AnalyticsSummary(
        total_sales=total_sales,
        total_orders=total_orders,
        average_basket=safe_ratio(total_sales, total_orders),
        net_delivery_gross=net_delivery_gross,
        net_delivery_gross_percentage=percentage_of(net_delivery_gross, total_sales),
        total_ad_spend=total_ad_spend,
        total_ad_sales=total_ad_sales,
        ad_roi=roi_percentage(total_ad_sales, total_ad_spend),
        total_promotion_spend=total_promotion_spend,
        total_promotion_sales=total_promotion_sales,
        promotion_roi=roi_percentage(total_promotion_sales, total_promotion_spend),
    )
