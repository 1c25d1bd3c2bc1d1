"""Zero-guarded ratio helpers shared by the daily and summary folds."""

from __future__ import annotations


def safe_ratio(numerator: float, denominator: float) -> float:
    if denominator <= 0:
        return 0.0
    return numerator / denominator


def percentage_of(part: float, whole: float) -> float:
    if whole <= 0:
        return 0.0
    return part / whole * 100


def roi_percentage(sales: float, spend: float) -> float:
    """Return over spend as a percentage, ``(sales - spend) / spend * 100``."""
    if spend <= 0:
        return 0.0
    return (sales - spend) / spend * 100
