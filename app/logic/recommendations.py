"""Rule table turning a period summary into advisory messages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from app.reports.models import AnalyticsSummary

MAX_RECOMMENDATIONS = 3

AD_ROI_EXCELLENT = 200.0
AD_ROI_PROFITABLE = 100.0
PROMOTION_ROI_EXCELLENT = 300.0
PROMOTION_ROI_WORKING = 100.0
NDG_LOW = 70.0
NDG_EXCELLENT = 85.0

FALLBACK_MESSAGE = (
    "📊 Continue monitoring your performance metrics. "
    "Focus on improving ad ROI and promotion effectiveness."
)


@dataclass(slots=True, frozen=True)
class Band:
    tier: str
    matches: Callable[[AnalyticsSummary], bool]
    template: str

    def render(self, summary: AnalyticsSummary) -> str:
        return self.template.format(s=summary)


@dataclass(slots=True, frozen=True)
class Category:
    name: str
    bands: Sequence[Band]
    applies: Callable[[AnalyticsSummary], bool] = lambda summary: True

    def evaluate(self, summary: AnalyticsSummary) -> str | None:
        """First matching band wins; bands are ordered high to low."""
        if not self.applies(summary):
            return None
        for band in self.bands:
            if band.matches(summary):
                return band.render(summary)
        return None


AD_ROI = Category(
    name="advertising",
    bands=(
        Band(
            "excellent",
            lambda s: s.ad_roi > AD_ROI_EXCELLENT,
            "🚀 Your ads are performing excellently ({s.ad_roi:.0f}% ROI). "
            "Consider increasing your ad budget to scale successful campaigns.",
        ),
        Band(
            "profitable",
            lambda s: s.ad_roi > AD_ROI_PROFITABLE,
            "✅ Your ads are profitable ({s.ad_roi:.0f}% ROI). "
            "Monitor performance and consider moderate budget increases.",
        ),
        Band(
            "marginal",
            lambda s: s.ad_roi > 0,
            "⚠️ Your ads are barely profitable ({s.ad_roi:.0f}% ROI). "
            "Review targeting and creative to improve performance.",
        ),
        Band(
            "losing",
            lambda s: s.total_ad_spend > 0,
            "❌ Your ads are losing money ({s.ad_roi:.0f}% ROI). "
            "Consider pausing campaigns and optimizing before restarting.",
        ),
    ),
)

PROMOTION_ROI = Category(
    name="promotions",
    bands=(
        Band(
            "excellent",
            lambda s: s.promotion_roi > PROMOTION_ROI_EXCELLENT,
            "🎯 Your promotions are highly effective ({s.promotion_roi:.0f}% ROI). "
            "Scale successful offers and test similar promotions.",
        ),
        Band(
            "working",
            lambda s: s.promotion_roi > PROMOTION_ROI_WORKING,
            "👍 Your promotions are working well ({s.promotion_roi:.0f}% ROI). "
            "Continue with current strategy and test new offers.",
        ),
        Band(
            "needs-optimization",
            lambda s: s.promotion_roi > 0,
            "⚠️ Your promotions need optimization ({s.promotion_roi:.0f}% ROI). "
            "Review offer terms and targeting.",
        ),
        Band(
            "unprofitable",
            lambda s: s.total_promotion_spend > 0,
            "❌ Your promotions are not profitable ({s.promotion_roi:.0f}% ROI). "
            "Consider pausing and redesigning offers.",
        ),
    ),
)

# An all-zero period has 0% NDG by the zero guard; that is not a low margin.
# Spend without sales still reads as low NDG.
NET_DELIVERY_GROSS = Category(
    name="net-delivery-gross",
    applies=lambda s: s.total_sales > 0 or s.total_ad_spend > 0 or s.total_promotion_spend > 0,
    bands=(
        Band(
            "low",
            lambda s: s.net_delivery_gross_percentage < NDG_LOW,
            "📉 Your Net Delivery Gross is low ({s.net_delivery_gross_percentage:.1f}%). "
            "Consider optimizing menu pricing or reducing delivery fees.",
        ),
        Band(
            "excellent",
            lambda s: s.net_delivery_gross_percentage > NDG_EXCELLENT,
            "📈 Excellent Net Delivery Gross ({s.net_delivery_gross_percentage:.1f}%). "
            "Your pricing strategy is working well.",
        ),
    ),
)

RULES: tuple[Category, ...] = (AD_ROI, PROMOTION_ROI, NET_DELIVERY_GROSS)


def generate_recommendations(
    summary: AnalyticsSummary, rules: Sequence[Category] = RULES
) -> list[str]:
    """Evaluate ``rules`` in order, at most one message per category.

    The result always holds between one and ``MAX_RECOMMENDATIONS``
    messages, in evaluation order.
    """
    messages = [message for category in rules if (message := category.evaluate(summary))]
    if not messages:
        messages.append(FALLBACK_MESSAGE)
    return messages[:MAX_RECOMMENDATIONS]
