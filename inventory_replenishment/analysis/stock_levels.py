"""
Reorder targets and stock health classification.
"""

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..config import ReplenishmentModel, StockBasis
from .models import AnalysisResult, StockStatus


# Below this daily usage an empty shelf is treated as inactive rather than a stockout
ACTIVE_USAGE_THRESHOLD = 0.01

SHORTAGE_STATUSES = (StockStatus.LOW, StockStatus.STOCKOUT)


@dataclass
class StockTargets:
    """Reorder point (min) and order-up-to level (max)."""
    min_stock: int
    max_stock: int
    replenishment_model: ReplenishmentModel


class ReplenishmentPolicy:
    """Min/max targets from demand, lead time and safety stock."""

    def __init__(
        self,
        order_cycle_days: float = 30,
        model: ReplenishmentModel = ReplenishmentModel.MIN_MAX
    ):
        self.order_cycle_days = order_cycle_days
        # PERIODIC_REVIEW and FIXED_DAYS are recorded only; every model uses min/max
        self.model = ReplenishmentModel(model)

    def targets(
        self,
        avg_daily_usage: float,
        lead_time_days: float,
        safety_stock: float
    ) -> StockTargets:
        min_stock = math.ceil(avg_daily_usage * lead_time_days + safety_stock)
        max_stock = min_stock + math.ceil(avg_daily_usage * self.order_cycle_days)
        return StockTargets(min_stock=min_stock, max_stock=max_stock, replenishment_model=self.model)


class StockClassifier:
    """Assigns one health status per item from effective stock against its targets."""

    def classify(
        self,
        effective_stock: float,
        min_stock: float,
        max_stock: float,
        avg_daily_usage: float,
        has_usage_history: bool
    ) -> StockStatus:
        """Determine stock status. The first matching rule wins."""
        if not has_usage_history and effective_stock > 0:
            return StockStatus.DEAD
        if effective_stock <= 0:
            if avg_daily_usage > ACTIVE_USAGE_THRESHOLD:
                return StockStatus.STOCKOUT
            return StockStatus.INACTIVE
        if effective_stock < min_stock:
            return StockStatus.LOW
        if effective_stock > max_stock:
            return StockStatus.HIGH
        if avg_daily_usage == 0 and effective_stock > 0:
            return StockStatus.DEAD
        return StockStatus.OK

    def suggested_order_qty(
        self,
        status: StockStatus,
        effective_stock: float,
        max_stock: float,
        on_order_qty: float
    ) -> float:
        """Quantity to order up to max, net of stock on order, for shortage items only."""
        if status not in SHORTAGE_STATUSES:
            return 0
        return max(0, max_stock - effective_stock - on_order_qty)


def get_reorder_alerts(results: list[AnalysisResult]) -> list[AnalysisResult]:
    """
    Get items that need replenishment.

    Returns:
        Shortage items and items with a suggested order, stockouts first,
        then by shortfall valuation (largest first)
    """
    alerts = [
        r for r in results
        if r.stock_status in SHORTAGE_STATUSES or r.suggested_order_qty > 0
    ]

    status_priority = {
        StockStatus.STOCKOUT: 0,
        StockStatus.LOW: 1,
    }

    def sort_key(r: AnalysisResult):
        return (status_priority.get(r.stock_status, 2), -r.shortfall_valuation)

    alerts.sort(key=sort_key)
    return alerts


def get_stock_summary(results: list[AnalysisResult]) -> dict:
    """
    Get summary statistics of an analysis run.

    Args:
        results: Final analysis results

    Returns:
        Dictionary with valuation totals, status counts and health ratios
    """
    if not results:
        return {
            "total_items": 0,
            "total_valuation": 0,
            "status_breakdown": {},
            "health_percentage": 0,
            "items_needing_reorder": 0
        }

    status_counts = {status.value: 0 for status in StockStatus}
    total_valuation = 0.0
    total_optimal = 0.0
    overstock_opportunity = 0.0
    dead_stock_valuation = 0.0
    total_shortfall = 0.0
    total_order_qty = 0.0
    total_transfer_qty = 0.0
    reorder_count = 0
    transfer_count = 0

    for r in results:
        status_counts[r.stock_status.value] += 1

        total_valuation += r.current_valuation
        total_optimal += r.optimal_valuation
        total_shortfall += r.shortfall_valuation

        if r.stock_status == StockStatus.HIGH:
            overstock_opportunity += r.gross_overstock_valuation
        if r.stock_status == StockStatus.DEAD:
            dead_stock_valuation += r.current_valuation

        if r.suggested_order_qty > 0:
            reorder_count += 1
            total_order_qty += r.suggested_order_qty
        if r.suggested_transfer_qty > 0:
            transfer_count += 1
            total_transfer_qty += r.suggested_transfer_qty

    active_items = len(results) - status_counts[StockStatus.INACTIVE.value]
    healthy_items = status_counts[StockStatus.OK.value] + status_counts[StockStatus.HIGH.value]
    health_pct = healthy_items / active_items * 100 if active_items > 0 else 0

    lead_times = [r.lead_time_used for r in results]

    return {
        "total_items": len(results),
        "active_items": active_items,
        "total_valuation": round(total_valuation, 2),
        "total_optimal_valuation": round(total_optimal, 2),
        "capital_efficiency_pct": round(total_optimal / (total_valuation or 1) * 100, 1),
        "overstock_opportunity": round(overstock_opportunity, 2),
        "dead_stock_valuation": round(dead_stock_valuation, 2),
        "total_shortfall": round(total_shortfall, 2),
        "status_breakdown": status_counts,
        "stockouts": status_counts[StockStatus.STOCKOUT.value],
        "unhealthy_items": status_counts[StockStatus.LOW.value] + status_counts[StockStatus.STOCKOUT.value],
        "dead_items": status_counts[StockStatus.DEAD.value],
        "health_percentage": round(health_pct, 1),
        "items_needing_reorder": reorder_count,
        "total_suggested_order_qty": round(total_order_qty, 2),
        "items_with_transfer": transfer_count,
        "total_suggested_transfer_qty": round(total_transfer_qty, 2),
        "avg_lead_time_days": round(float(np.mean(lead_times)), 1),
    }


def effective_stock(
    current_stock: float,
    physical_stock: Optional[float],
    available_stock: Optional[float],
    stock_basis: StockBasis
) -> float:
    """Stock reading selected by the configured basis, falling back to current stock."""
    if stock_basis == StockBasis.PHYSICAL and physical_stock is not None:
        return physical_stock
    if stock_basis == StockBasis.AVAILABLE and available_stock is not None:
        return available_stock
    return current_stock
