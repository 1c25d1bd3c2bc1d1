"""Per-day aggregation of captured snapshots."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from app.ingest.models import Observation, RestaurantFragment
from app.ingest.snapshots import normalize_snapshots
from app.logic.metrics import percentage_of, roi_percentage, safe_ratio
from app.reports.models import (
    PROMOTION_TYPES,
    DailyAdMetric,
    DailySalesMetric,
    PeriodWindow,
    PromotionRecord,
    RestaurantData,
)
from app.utils.dates import format_date, utc_date_key, utc_now, utc_now_iso

logger = logging.getLogger(__name__)

UNKNOWN_RESTAURANT_ID = "unknown"
UNKNOWN_PROMOTION_NAME = "Unknown Promotion"


@dataclass(slots=True)
class _SalesTotals:
    total_sales: float = 0.0
    total_orders: float = 0.0
    net_delivery_gross: float = 0.0


@dataclass(slots=True)
class _AdTotals:
    ad_spend: float = 0.0
    ad_sales: float = 0.0
    ad_orders: float = 0.0
    impressions: float = 0.0
    clicks: float = 0.0


def aggregate_sales(observations: Iterable[Observation]) -> list[DailySalesMetric]:
    # dicts keep first-seen date order, which is the output order
    by_date: dict[str | None, _SalesTotals] = {}
    for obs in observations:
        if obs.sales is None:
            continue
        totals = by_date.setdefault(obs.date, _SalesTotals())
        totals.total_sales += obs.sales.total_sales or 0
        totals.total_orders += obs.sales.total_orders or 0
        totals.net_delivery_gross += obs.sales.net_delivery_gross or 0

    return [
        DailySalesMetric(
            date=day,
            total_sales=totals.total_sales,
            total_orders=totals.total_orders,
            average_basket=safe_ratio(totals.total_sales, totals.total_orders),
            net_delivery_gross=totals.net_delivery_gross,
            net_delivery_gross_percentage=percentage_of(totals.net_delivery_gross, totals.total_sales),
        )
        for day, totals in by_date.items()
    ]


def aggregate_ads(observations: Iterable[Observation]) -> list[DailyAdMetric]:
    by_date: dict[str | None, _AdTotals] = {}
    for obs in observations:
        if obs.ads is None:
            continue
        totals = by_date.setdefault(obs.date, _AdTotals())
        totals.ad_spend += obs.ads.ad_spend or 0
        totals.ad_sales += obs.ads.ad_sales or 0
        totals.ad_orders += obs.ads.ad_orders or 0
        totals.impressions += obs.ads.impressions or 0
        totals.clicks += obs.ads.clicks or 0

    return [
        DailyAdMetric(
            date=day,
            ad_spend=totals.ad_spend,
            ad_sales=totals.ad_sales,
            ad_orders=totals.ad_orders,
            ad_roi=roi_percentage(totals.ad_sales, totals.ad_spend),
            impressions=totals.impressions,
            clicks=totals.clicks,
            ctr=percentage_of(totals.clicks, totals.impressions),
            cpc=safe_ratio(totals.ad_spend, totals.clicks),
        )
        for day, totals in by_date.items()
    ]


def aggregate_promotions(observations: Iterable[Observation]) -> list[PromotionRecord]:
    records: list[PromotionRecord] = []
    for obs in observations:
        for promo in obs.promotions:
            promo_type = promo.type if promo.type in PROMOTION_TYPES else "other"
            records.append(
                PromotionRecord(
                    date=obs.date,
                    promotion_name=promo.name or UNKNOWN_PROMOTION_NAME,
                    promotion_type=promo_type,
                    promotion_spend=promo.spend or 0.0,
                    promotion_sales=promo.sales or 0.0,
                    promotion_orders=promo.orders or 0.0,
                    promotion_roi=promo.roi or 0.0,
                    redemption_count=promo.redemptions or 0.0,
                )
            )
    return records


def determine_date_range(observations: Sequence[Observation]) -> PeriodWindow | None:
    """Span of every parseable snapshot timestamp, whatever fragments it carries."""
    stamps = [obs.timestamp for obs in observations if obs.timestamp is not None]
    if not stamps:
        return None
    return PeriodWindow(start_date=utc_date_key(min(stamps)), end_date=utc_date_key(max(stamps)))


def find_restaurant(observations: Iterable[Observation]) -> RestaurantFragment | None:
    for obs in observations:
        if obs.restaurant is not None and obs.restaurant.name:
            return obs.restaurant
    return None


def process_captured_data(raw_snapshots: Sequence[Any] | None, *, captured_at: str | None = None) -> RestaurantData | None:
    """Fold a capture batch into per-day metrics for one restaurant.

    Returns ``None`` when the batch is empty or no snapshot names the
    restaurant; no report can be produced from such a batch.
    """
    if not raw_snapshots:
        return None
    observations = normalize_snapshots(raw_snapshots)
    restaurant = find_restaurant(observations)
    if restaurant is None:
        logger.info("No restaurant identity in %d snapshots", len(observations))
        return None

    period = determine_date_range(observations)
    if period is None:
        today = format_date(utc_now().date())
        period = PeriodWindow(start_date=today, end_date=today)

    data = RestaurantData(
        restaurant_id=restaurant.restaurant_id or UNKNOWN_RESTAURANT_ID,
        restaurant_name=restaurant.name,
        period=period,
        sales=tuple(aggregate_sales(observations)),
        ads=tuple(aggregate_ads(observations)),
        promotions=tuple(aggregate_promotions(observations)),
        captured_at=captured_at or utc_now_iso(),
    )
    logger.info(
        "Aggregated %d snapshots for %s (%s to %s)",
        len(observations),
        data.restaurant_name,
        period.start_date,
        period.end_date,
    )
    return data
