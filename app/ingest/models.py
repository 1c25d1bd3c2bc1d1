"""Typed fragments of a captured snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field

import pendulum


@dataclass(slots=True, frozen=True)
class RestaurantFragment:
    restaurant_id: str | None
    name: str | None


@dataclass(slots=True, frozen=True)
class SalesFragment:
    total_sales: float | None = None
    total_orders: float | None = None
    average_basket: float | None = None
    net_delivery_gross: float | None = None
    net_delivery_gross_percentage: float | None = None


@dataclass(slots=True, frozen=True)
class AdFragment:
    ad_spend: float | None = None
    ad_sales: float | None = None
    ad_orders: float | None = None
    ad_roi: float | None = None
    impressions: float | None = None
    clicks: float | None = None
    ctr: float | None = None
    cpc: float | None = None


@dataclass(slots=True, frozen=True)
class PromotionFragment:
    name: str | None = None
    type: str | None = None
    spend: float | None = None
    sales: float | None = None
    orders: float | None = None
    roi: float | None = None
    redemptions: float | None = None


@dataclass(slots=True, frozen=True)
class Observation:
    """One normalized snapshot; every fragment is optional."""

    timestamp: pendulum.DateTime | None = None
    date: str | None = None
    restaurant: RestaurantFragment | None = None
    sales: SalesFragment | None = None
    ads: AdFragment | None = None
    promotions: tuple[PromotionFragment, ...] = field(default_factory=tuple)
