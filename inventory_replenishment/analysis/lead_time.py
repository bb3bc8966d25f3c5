"""
Supplier lead time inference from purchase order history.
"""

import math
from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd

from ..config import DEFAULT_LEAD_TIME_DAYS, LeadTimeMode


MAX_VALID_LEAD_TIME_DAYS = 365


@dataclass
class LeadTimeEstimate:
    lead_time_days: float
    is_calculated: bool
    sample_count: int = 0


def default_lead_time(value: Any) -> float:
    """Product lead time, 7 days when missing or non-numeric, never below 1."""
    try:
        days = float(value)
    except (TypeError, ValueError):
        return float(DEFAULT_LEAD_TIME_DAYS)
    if math.isnan(days):
        return float(DEFAULT_LEAD_TIME_DAYS)
    return max(1.0, days)


class LeadTimeEstimator:
    """Average or worst-case observed lead time, falling back to the product default."""

    def __init__(self, mode: LeadTimeMode = LeadTimeMode.AVERAGE):
        self.mode = LeadTimeMode(mode)

    def estimate(self, purchase_orders: pd.DataFrame, product_lead_time: Any) -> LeadTimeEstimate:
        """
        Estimate lead time for one item.

        Args:
            purchase_orders: The item's purchase orders (columns order_date, receive_date)
            product_lead_time: Lead time recorded on the product

        Returns:
            LeadTimeEstimate, flagged calculated when purchase orders supplied it
        """
        fallback = default_lead_time(product_lead_time)
        samples = self.lead_time_samples(purchase_orders)

        if samples.size == 0:
            return LeadTimeEstimate(lead_time_days=fallback, is_calculated=False)

        if self.mode == LeadTimeMode.MAX:
            observed = float(samples.max())
        else:
            observed = float(samples.mean())

        return LeadTimeEstimate(
            lead_time_days=max(1.0, observed),
            is_calculated=True,
            sample_count=int(samples.size),
        )

    @staticmethod
    def lead_time_samples(purchase_orders: pd.DataFrame) -> np.ndarray:
        """Whole-day order-to-receipt durations within [0, 365)."""
        if purchase_orders.empty:
            return np.array([], dtype=float)

        complete = purchase_orders.dropna(subset=["order_date", "receive_date"])
        if complete.empty:
            return np.array([], dtype=float)

        elapsed = (complete["receive_date"] - complete["order_date"]).abs()
        days = np.ceil(elapsed.dt.total_seconds().to_numpy(dtype=float) / 86400.0)

        return days[(days >= 0) & (days < MAX_VALID_LEAD_TIME_DAYS)]
