"""
Tests for daily demand estimation.
"""

import pandas as pd
import pytest

from inventory_replenishment.analysis.demand import DemandEstimator
from inventory_replenishment.analysis.history import latest_date, transactions_frame


def _days(start, quantities):
    """(date, quantity) pairs for consecutive days."""
    dates = pd.date_range(start, periods=len(quantities), freq="D")
    return [(d.strftime("%Y-%m-%d"), q) for d, q in zip(dates, quantities)]


class TestDailySeries:

    def test_missing_days_count_as_zero(self, out_tx):
        history = transactions_frame([
            out_tx("P1", "2025-01-01", 10),
            out_tx("P1", "2025-01-03", 10),
        ])
        estimate = DemandEstimator().estimate(history, pd.Timestamp("2025-01-04"))

        # [10, 0, 10, 0]
        assert estimate.avg_daily_usage == pytest.approx(5.0)
        assert estimate.std_dev_usage == pytest.approx(5.0)
        assert estimate.anomalies_detected_count == 0

    def test_span_runs_to_global_max_date(self, out_tx):
        history = transactions_frame([out_tx("P1", "2025-01-01", 10)])
        estimate = DemandEstimator().estimate(history, pd.Timestamp("2025-01-10"))
        assert estimate.avg_daily_usage == pytest.approx(1.0)

    def test_incoming_moves_start_the_span_but_add_no_usage(self, in_tx, out_tx):
        history = transactions_frame([
            in_tx("P1", "2025-01-01", 100),
            out_tx("P1", "2025-01-03", 6),
        ])
        estimate = DemandEstimator().estimate(history, pd.Timestamp("2025-01-03"))

        # [0, 0, 6]
        assert estimate.avg_daily_usage == pytest.approx(2.0)
        assert estimate.has_usage_history

    def test_same_day_moves_are_summed(self, out_tx):
        history = transactions_frame([
            out_tx("P1", "2025-01-01", 4),
            out_tx("P1", "2025-01-01T15:30:00", 6),
        ])
        estimate = DemandEstimator().estimate(history, pd.Timestamp("2025-01-02"))
        assert estimate.avg_daily_usage == pytest.approx(5.0)

    def test_single_day_span(self, out_tx):
        history = transactions_frame([out_tx("P1", "2025-03-01", 7)])
        estimate = DemandEstimator().estimate(history, pd.Timestamp("2025-03-01"))
        assert estimate.avg_daily_usage == pytest.approx(7.0)
        assert estimate.std_dev_usage == 0

    def test_unparsable_dates_are_ignored(self, out_tx):
        history = transactions_frame([
            out_tx("P1", "2025-01-01", 10),
            out_tx("P1", "not-a-date", 500),
            out_tx("P1", None, 500),
        ])
        estimate = DemandEstimator().estimate(history, pd.Timestamp("2025-01-02"))

        assert estimate.avg_daily_usage == pytest.approx(5.0)
        assert estimate.has_usage_history

    def test_only_unparsable_dates_gives_zero_usage(self, out_tx):
        history = transactions_frame([out_tx("P1", "garbage", 10)])
        estimate = DemandEstimator().estimate(history, latest_date(history))

        assert estimate.avg_daily_usage == 0
        assert estimate.std_dev_usage == 0
        assert estimate.has_usage_history

    def test_no_history(self):
        estimate = DemandEstimator().estimate(transactions_frame([]), None)

        assert estimate.avg_daily_usage == 0
        assert estimate.std_dev_usage == 0
        assert not estimate.has_usage_history
        assert estimate.monthly_trend == []


class TestOutlierTrimming:

    def _spiky_history(self, out_tx):
        # nine days of 1 and one day of 100
        return transactions_frame([
            out_tx("P1", d, q) for d, q in _days("2025-01-01", [1] * 9 + [100])
        ])

    def test_spike_is_dropped(self, out_tx):
        history = self._spiky_history(out_tx)
        estimate = DemandEstimator(outlier_threshold=2).estimate(history, pd.Timestamp("2025-01-10"))

        assert estimate.anomalies_detected_count == 1
        assert estimate.avg_daily_usage == pytest.approx(1.0)
        assert estimate.std_dev_usage == pytest.approx(0.0)

    def test_zero_threshold_disables_trimming(self, out_tx):
        history = self._spiky_history(out_tx)
        estimate = DemandEstimator(outlier_threshold=0).estimate(history, pd.Timestamp("2025-01-10"))

        assert estimate.anomalies_detected_count == 0
        assert estimate.avg_daily_usage == pytest.approx(10.9)

    def test_flat_series_is_never_trimmed(self, out_tx):
        history = transactions_frame([
            out_tx("P1", d, q) for d, q in _days("2025-01-01", [3] * 5)
        ])
        estimate = DemandEstimator(outlier_threshold=0.1).estimate(history, pd.Timestamp("2025-01-05"))

        assert estimate.anomalies_detected_count == 0
        assert estimate.avg_daily_usage == pytest.approx(3.0)


class TestGrowthFactor:

    def test_growth_scales_mean_not_deviation(self, out_tx):
        history = transactions_frame([
            out_tx("P1", "2025-01-01", 10),
            out_tx("P1", "2025-01-03", 10),
        ])
        base = DemandEstimator(growth_factor=1.0).estimate(history, pd.Timestamp("2025-01-04"))
        grown = DemandEstimator(growth_factor=2.0).estimate(history, pd.Timestamp("2025-01-04"))

        assert grown.avg_daily_usage == pytest.approx(10.0)
        assert grown.std_dev_usage == pytest.approx(base.std_dev_usage) == pytest.approx(5.0)

    def test_zero_growth(self, out_tx):
        history = transactions_frame([
            out_tx("P1", "2025-01-01", 10),
            out_tx("P1", "2025-01-03", 10),
        ])
        estimate = DemandEstimator(growth_factor=0).estimate(history, pd.Timestamp("2025-01-04"))

        assert estimate.avg_daily_usage == 0
        assert estimate.std_dev_usage == pytest.approx(5.0)


class TestManualUsage:

    def test_positive_override_is_used_directly(self, out_tx):
        history = transactions_frame([out_tx("P1", "2025-01-01", 100)])
        estimate = DemandEstimator().estimate(history, pd.Timestamp("2025-01-01"), 4.0)

        assert estimate.avg_daily_usage == 4.0
        assert estimate.std_dev_usage == pytest.approx(1.2)
        assert estimate.is_manual_usage
        assert estimate.monthly_trend == []

    def test_zero_override_is_ignored(self, out_tx):
        history = transactions_frame([out_tx("P1", "2025-01-01", 8)])
        estimate = DemandEstimator().estimate(history, pd.Timestamp("2025-01-02"), 0)

        assert not estimate.is_manual_usage
        assert estimate.avg_daily_usage == pytest.approx(4.0)


class TestMonthlyTrend:

    def test_grouped_by_month_ascending(self, in_tx, out_tx):
        history = transactions_frame([
            out_tx("P1", "2025-02-10", 5),
            out_tx("P1", "2025-01-15", 3),
            in_tx("P1", "2025-01-16", 50),
            out_tx("P1", "2025-01-20", 2),
        ])
        trend = DemandEstimator.monthly_trend(history)

        assert [(m.month, m.quantity) for m in trend] == [("2025-01", 5.0), ("2025-02", 5.0)]
