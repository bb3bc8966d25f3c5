"""
Daily demand estimation from transaction history.

Usage is measured on a daily series that runs from an item's first
recorded activity up to the latest transaction date across the whole
dataset, so every item is compared over the same coverage window. Days
without outgoing movements count as zero usage.
"""

from dataclasses import dataclass, field
from typing import Optional

import numpy as np
import pandas as pd

from .models import MonthlyUsage


MANUAL_USAGE_DISPERSION = 0.3


@dataclass
class DemandEstimate:
    """Demand statistics for one item."""
    avg_daily_usage: float = 0.0
    std_dev_usage: float = 0.0
    anomalies_detected_count: int = 0
    is_manual_usage: bool = False
    has_usage_history: bool = False
    monthly_trend: list[MonthlyUsage] = field(default_factory=list)


class DemandEstimator:
    """Outlier-trimmed mean and deviation of daily usage."""

    def __init__(self, growth_factor: float = 1.0, outlier_threshold: float = 0.0):
        self.growth_factor = growth_factor
        self.outlier_threshold = outlier_threshold

    def estimate(
        self,
        history: pd.DataFrame,
        global_max_date: Optional[pd.Timestamp],
        manual_avg_daily_usage: Optional[float] = None
    ) -> DemandEstimate:
        """
        Estimate daily demand for one item.

        Args:
            history: The item's transactions (columns date, quantity, is_out)
            global_max_date: Latest transaction date across all items
            manual_avg_daily_usage: Override; used as-is when positive

        Returns:
            DemandEstimate
        """
        out_moves = history[history["is_out"].astype(bool)] if not history.empty else history
        has_usage = not out_moves.empty

        if manual_avg_daily_usage is not None and manual_avg_daily_usage > 0:
            return DemandEstimate(
                avg_daily_usage=float(manual_avg_daily_usage),
                std_dev_usage=float(manual_avg_daily_usage) * MANUAL_USAGE_DISPERSION,
                is_manual_usage=True,
                has_usage_history=has_usage,
            )

        dated = history[history["date"].notna()] if not history.empty else history
        if dated.empty or global_max_date is None:
            return DemandEstimate(has_usage_history=has_usage)

        daily = self._build_daily_series(dated, global_max_date)
        avg, std, anomalies = self._trimmed_statistics(daily)

        return DemandEstimate(
            avg_daily_usage=avg,
            std_dev_usage=std,
            anomalies_detected_count=anomalies,
            has_usage_history=has_usage,
            monthly_trend=self.monthly_trend(dated),
        )

    def _build_daily_series(
        self,
        dated: pd.DataFrame,
        global_max_date: pd.Timestamp
    ) -> np.ndarray:
        """Daily OUT totals from first activity to the global max date, zero filled."""
        first_activity = dated["date"].min()
        span_days = max(1, (global_max_date - first_activity).days + 1)

        out_moves = dated[dated["is_out"].astype(bool)]
        daily = out_moves.groupby("date")["quantity"].sum()

        full_range = pd.date_range(first_activity, periods=span_days, freq="D")
        daily = daily.reindex(full_range, fill_value=0.0)

        return daily.to_numpy(dtype=float)

    def _trimmed_statistics(self, values: np.ndarray) -> tuple[float, float, int]:
        """Return (growth-adjusted mean, deviation around the pre-growth mean, anomaly count)."""
        raw_mean = values.mean()
        raw_std = values.std()

        clean = values
        anomalies = 0
        if self.outlier_threshold > 0 and raw_std > 0:
            max_allowed = raw_mean + self.outlier_threshold * raw_std
            outliers = values > max_allowed
            anomalies = int(outliers.sum())
            clean = values[~outliers]

        if clean.size == 0:
            return 0.0, 0.0, anomalies

        base_mean = clean.mean()
        std = float(np.sqrt(np.mean((clean - base_mean) ** 2)))

        return float(base_mean * self.growth_factor), std, anomalies

    @staticmethod
    def monthly_trend(history: pd.DataFrame) -> list[MonthlyUsage]:
        """OUT quantities summed by calendar month, oldest first."""
        if history.empty:
            return []
        out_moves = history[history["is_out"].astype(bool) & history["date"].notna()]
        if out_moves.empty:
            return []

        months = out_moves["date"].dt.to_period("M")
        monthly = out_moves.groupby(months)["quantity"].sum().sort_index()

        return [
            MonthlyUsage(month=str(period), quantity=float(qty))
            for period, qty in monthly.items()
        ]
