"""
Tests for the inverse-normal approximation and safety stock strategies.
"""

import math

import pytest
from scipy import stats

from inventory_replenishment.analysis.safety_stock import SafetyStockCalculator, z_score
from inventory_replenishment.config import SafetyStockStrategy


class TestZScore:
    """Rational approximation of the inverse standard normal."""

    @pytest.mark.parametrize("p", [0.01, 0.1, 0.5, 0.8, 0.9, 0.95, 0.975, 0.99, 0.999])
    def test_close_to_exact_quantile(self, p):
        assert z_score(p) == pytest.approx(stats.norm.ppf(p), abs=4.5e-4)

    def test_common_service_level(self):
        assert z_score(0.95) == pytest.approx(1.6452, abs=1e-3)

    def test_median_is_zero(self):
        assert z_score(0.5) == pytest.approx(0.0, abs=1e-3)

    def test_lower_tail_is_negative(self):
        assert z_score(0.1) < 0
        assert z_score(0.1) == pytest.approx(-z_score(0.9), abs=1e-9)

    @pytest.mark.parametrize("p,expected", [(1, 3.5), (1.2, 3.5), (0, -3.5), (-0.1, -3.5)])
    def test_clamped_at_extremes(self, p, expected):
        assert z_score(p) == expected


class TestStatisticalSafetyStock:

    def test_zero_variance_gives_zero(self):
        calc = SafetyStockCalculator(SafetyStockStrategy.STATISTICAL)
        for service_level in (0.5, 0.9, 0.99, 0.999):
            assert calc.calculate(service_level, 10.0, 0.0, 14) == 0

    def test_rounds_up(self):
        calc = SafetyStockCalculator(SafetyStockStrategy.STATISTICAL)
        # 1.645 * 2 * sqrt(4) = 6.58
        assert calc.calculate(0.95, 5.0, 2.0, 4) == 7

    def test_matches_formula(self):
        calc = SafetyStockCalculator("STATISTICAL")
        expected = math.ceil(z_score(0.98) * 3.3 * math.sqrt(9))
        assert calc.calculate(0.98, 8.0, 3.3, 9) == expected


class TestWeeksOfCover:

    def test_weeks_of_daily_usage(self):
        calc = SafetyStockCalculator(SafetyStockStrategy.WEEKS_OF_COVER, weeks_of_safety_stock=2)
        assert calc.calculate(0.95, 2.0, 99.0, 10) == 28

    def test_ignores_service_level_and_variance(self):
        calc = SafetyStockCalculator(SafetyStockStrategy.WEEKS_OF_COVER, weeks_of_safety_stock=1)
        assert calc.calculate(0.5, 3.0, 0.0, 1) == calc.calculate(0.999, 3.0, 50.0, 30) == 21

    def test_partial_units_round_up(self):
        calc = SafetyStockCalculator(SafetyStockStrategy.WEEKS_OF_COVER, weeks_of_safety_stock=0.5)
        # 0.3 * 7 * 0.5 = 1.05
        assert calc.calculate(0.95, 0.3, 0.0, 7) == 2
