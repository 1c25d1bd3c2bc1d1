"""Normalization of raw snapshots posted by the capture extension."""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Iterable, Mapping

from app.ingest.models import (
    AdFragment,
    Observation,
    PromotionFragment,
    RestaurantFragment,
    SalesFragment,
)
from app.utils.dates import parse_timestamp, utc_date_key

logger = logging.getLogger(__name__)

NUMBER_RE = re.compile(r"(\d+\.?\d*)")
NOISE_RE = re.compile(r"[$,\s]")

SALES_FIELDS = {
    "total_sales": "totalSales",
    "total_orders": "totalOrders",
    "average_basket": "averageBasket",
    "net_delivery_gross": "netDeliveryGross",
    "net_delivery_gross_percentage": "netDeliveryGrossPercentage",
}

AD_FIELDS = {
    "ad_spend": "adSpend",
    "ad_sales": "adSales",
    "ad_orders": "adOrders",
    "ad_roi": "adROI",
    "impressions": "impressions",
    "clicks": "clicks",
    "ctr": "ctr",
    "cpc": "cpc",
}

PROMOTION_FIELDS = {
    "spend": "spend",
    "sales": "sales",
    "orders": "orders",
    "roi": "roi",
    "redemptions": "redemptions",
}


def coerce_number(value: Any) -> float | None:
    """Coerce a scraped value to a number, or ``None`` when it holds none.

    Strings are cleaned like page text: currency symbols, thousands
    separators and whitespace are dropped and the first decimal is taken.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None
    if isinstance(value, str):
        match = NUMBER_RE.search(NOISE_RE.sub("", value))
        return float(match.group(1)) if match else None
    return None


def _text(value: Any) -> str | None:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _mapping(value: Any) -> Mapping[str, Any] | None:
    return value if isinstance(value, Mapping) else None


def _numbers(raw: Mapping[str, Any], fields: Mapping[str, str]) -> dict[str, float | None]:
    return {attr: coerce_number(raw.get(key)) for attr, key in fields.items()}


def _restaurant(raw: Any) -> RestaurantFragment | None:
    data = _mapping(raw)
    if data is None:
        return None
    return RestaurantFragment(restaurant_id=_text(data.get("id")), name=_text(data.get("name")))


def _sales(raw: Any) -> SalesFragment | None:
    data = _mapping(raw)
    return SalesFragment(**_numbers(data, SALES_FIELDS)) if data is not None else None


def _ads(raw: Any) -> AdFragment | None:
    data = _mapping(raw)
    return AdFragment(**_numbers(data, AD_FIELDS)) if data is not None else None


def _promotions(raw: Any) -> tuple[PromotionFragment, ...]:
    if not isinstance(raw, list):
        return ()
    promotions = []
    for entry in raw:
        data = _mapping(entry)
        if data is None:
            continue
        promotions.append(
            PromotionFragment(
                name=_text(data.get("name")),
                type=_text(data.get("type")),
                **_numbers(data, PROMOTION_FIELDS),
            )
        )
    return tuple(promotions)


def normalize_snapshot(raw: Any) -> Observation:
    """Turn one captured page record into a typed observation.

    The extension posts ``{pageType, url, data: {...}, timestamp}``; a flat
    mapping carrying the fragments directly is accepted as well.
    """
    envelope = _mapping(raw)
    if envelope is None:
        logger.debug("Ignoring non-mapping snapshot of type %s", type(raw).__name__)
        return Observation()
    payload = _mapping(envelope.get("data"))
    if payload is None:
        payload = envelope

    raw_timestamp = envelope.get("timestamp")
    if raw_timestamp is None:
        raw_timestamp = payload.get("timestamp")
    timestamp = parse_timestamp(raw_timestamp)
    if timestamp is None:
        logger.debug("Snapshot timestamp %r is not parseable", raw_timestamp)

    return Observation(
        timestamp=timestamp,
        date=utc_date_key(timestamp) if timestamp is not None else None,
        restaurant=_restaurant(payload.get("restaurant")),
        sales=_sales(payload.get("sales")),
        ads=_ads(payload.get("ads")),
        promotions=_promotions(payload.get("promotions")),
    )


def normalize_snapshots(raw_snapshots: Iterable[Any]) -> list[Observation]:
    return [normalize_snapshot(raw) for raw in raw_snapshots]
