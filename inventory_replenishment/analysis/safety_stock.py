"""
Safety stock from a target service level or a weeks-of-cover target.

The inverse normal uses the rational approximation of Abramowitz and
Stegun (26.2.23), absolute error below 4.5e-4.
"""

import math

from ..config import SafetyStockStrategy


Z_SCORE_LIMIT = 3.5

_C0, _C1, _C2 = 2.515517, 0.802853, 0.010328
_D1, _D2, _D3 = 1.432788, 0.189269, 0.001308


def z_score(probability: float) -> float:
    """Inverse standard normal CDF, clamped to +/-3.5 at the extremes."""
    if probability >= 1:
        return Z_SCORE_LIMIT
    if probability <= 0:
        return -Z_SCORE_LIMIT

    q = probability if probability < 0.5 else 1 - probability
    t = math.sqrt(-2 * math.log(q))
    numerator = _C0 + _C1 * t + _C2 * t * t
    denominator = 1 + _D1 * t + _D2 * t * t + _D3 * t * t * t
    z = t - numerator / denominator

    return -z if probability < 0.5 else z


class SafetyStockCalculator:
    """Buffer stock against demand uncertainty over the lead time."""

    def __init__(
        self,
        strategy: SafetyStockStrategy = SafetyStockStrategy.STATISTICAL,
        weeks_of_safety_stock: float = 2.0
    ):
        self.strategy = SafetyStockStrategy(strategy)
        self.weeks_of_safety_stock = weeks_of_safety_stock

    def calculate(
        self,
        service_level: float,
        avg_daily_usage: float,
        std_dev_usage: float,
        lead_time_days: float
    ) -> int:
        if self.strategy == SafetyStockStrategy.WEEKS_OF_COVER:
            return math.ceil(avg_daily_usage * 7 * self.weeks_of_safety_stock)

        return math.ceil(z_score(service_level) * std_dev_usage * math.sqrt(lead_time_days))
