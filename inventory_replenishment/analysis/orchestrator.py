"""
Two-pass replenishment analysis.

Pass 1 derives demand, lead time, safety stock, targets, status and EOQ
for each product row independently. Pass 2 runs over the complete pass-1
result set: a global ABC ranking, then inter-branch transfer matching.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

import pandas as pd

from ..config import ServiceLevelConfig
from .abc import ABCClassifier, revenue_contribution
from .demand import DemandEstimator
from .eoq import EOQCalculator
from .history import (
    HistoryIndex,
    latest_date,
    purchase_orders_frame,
    transactions_frame,
)
from .lead_time import LeadTimeEstimator
from .models import AnalysisResult, Product, PurchaseOrder, StockStatus, Transaction
from .safety_stock import SafetyStockCalculator
from .stock_levels import ReplenishmentPolicy, StockClassifier, effective_stock
from .transfers import TransferMatcher


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisInputs:
    """Everything one analysis run depends on."""
    products: Sequence[Product]
    transactions: Sequence[Transaction] = ()
    purchase_orders: Sequence[PurchaseOrder] = ()
    config: ServiceLevelConfig = field(default_factory=ServiceLevelConfig)


class AnalysisOrchestrator:
    """Sequences the per-item estimators and the global ranking passes."""

    def __init__(self, config: ServiceLevelConfig):
        self.config = config
        self.demand = DemandEstimator(
            growth_factor=config.growth_factor,
            outlier_threshold=config.outlier_threshold,
        )
        self.lead_time = LeadTimeEstimator(mode=config.lead_time_mode)
        self.safety_stock = SafetyStockCalculator(
            strategy=config.safety_stock_strategy,
            weeks_of_safety_stock=config.weeks_of_safety_stock,
        )
        self.policy = ReplenishmentPolicy(
            order_cycle_days=config.order_cycle_days,
            model=config.replenishment_model,
        )
        self.classifier = StockClassifier()
        self.eoq = EOQCalculator(
            order_placement_cost=config.order_placement_cost,
            holding_cost_annual_pct=config.holding_cost_annual_pct,
        )
        self.abc = ABCClassifier()

    def run(
        self,
        products: Sequence[Product],
        transactions: Sequence[Transaction],
        purchase_orders: Sequence[PurchaseOrder]
    ) -> list[AnalysisResult]:
        if not products:
            return []

        tx_frame = transactions_frame(transactions)
        po_frame = purchase_orders_frame(purchase_orders)
        tx_index = HistoryIndex(tx_frame)
        po_index = HistoryIndex(po_frame)
        global_max_date = latest_date(tx_frame)

        logger.debug(
            "Analysing %d products (%d transactions over %d items, %d purchase orders)",
            len(products), len(tx_frame), len(tx_index), len(po_frame)
        )

        first_pass = tuple(
            self._analyze_item(
                product,
                tx_index.get(product.id, product.branch),
                po_index.get(product.id, product.branch),
                global_max_date,
            )
            for product in products
        )

        ranked = self.abc.classify(list(first_pass))
        return TransferMatcher(first_pass).match(ranked)

    def _analyze_item(
        self,
        product: Product,
        history: pd.DataFrame,
        purchase_orders: pd.DataFrame,
        global_max_date: Optional[pd.Timestamp]
    ) -> AnalysisResult:
        """Pass 1 for a single (SKU, branch) row."""
        config = self.config
        cost = product.cost or 0.0
        service_level = config.service_level_for(product.category, product.service_level_override)
        stock = effective_stock(
            product.current_stock,
            product.physical_stock,
            product.available_stock,
            config.stock_basis,
        )
        on_order_qty = product.stock_on_order or 0.0

        lead_time = self.lead_time.estimate(purchase_orders, product.lead_time_days)
        demand = self.demand.estimate(history, global_max_date, product.manual_avg_daily_usage)

        safety_stock = self.safety_stock.calculate(
            service_level,
            demand.avg_daily_usage,
            demand.std_dev_usage,
            lead_time.lead_time_days,
        )
        targets = self.policy.targets(demand.avg_daily_usage, lead_time.lead_time_days, safety_stock)

        status = self.classifier.classify(
            stock,
            targets.min_stock,
            targets.max_stock,
            demand.avg_daily_usage,
            demand.has_usage_history,
        )
        suggested_order = self.classifier.suggested_order_qty(
            status, stock, targets.max_stock, on_order_qty
        )

        eoq = self.eoq.calculate(demand.avg_daily_usage, cost)

        current_valuation = stock * cost
        optimal_valuation = (targets.min_stock + targets.max_stock) / 2 * cost
        max_valuation = targets.max_stock * cost
        if status == StockStatus.DEAD:
            gross_overstock = current_valuation
        else:
            gross_overstock = max(0, current_valuation - max_valuation)

        return AnalysisResult(
            product_id=product.id,
            product_name=product.name,
            sku=product.sku,
            category=product.category,
            branch=product.branch,
            unit_cost=cost,
            calculated_stock=stock,
            on_order_qty=on_order_qty,
            stock_basis_used=config.stock_basis.value,
            avg_daily_usage=demand.avg_daily_usage,
            std_dev_usage=demand.std_dev_usage,
            monthly_trend=tuple(demand.monthly_trend),
            is_manual_usage=demand.is_manual_usage,
            anomalies_detected_count=demand.anomalies_detected_count,
            lead_time_used=lead_time.lead_time_days,
            is_lead_time_calculated=lead_time.is_calculated,
            lead_time_mode_used=config.lead_time_mode.value,
            safety_stock=safety_stock,
            safety_stock_strategy_used=config.safety_stock_strategy.value,
            min_stock=targets.min_stock,
            max_stock=targets.max_stock,
            order_cycle_used=config.order_cycle_days,
            replenishment_model_used=targets.replenishment_model.value,
            service_level_used=service_level,
            eoq=eoq.eoq,
            stock_status=status,
            suggested_order_qty=suggested_order,
            current_min_setting=product.current_min or 0.0,
            current_max_setting=product.current_max or 0.0,
            current_valuation=current_valuation,
            current_min_valuation=(product.current_min or 0.0) * cost,
            current_max_valuation=(product.current_max or 0.0) * cost,
            optimal_min_valuation=targets.min_stock * cost,
            optimal_max_valuation=max_valuation,
            optimal_valuation=optimal_valuation,
            gross_overstock_valuation=gross_overstock,
            shortfall_valuation=max(0, optimal_valuation - (current_valuation + on_order_qty * cost)),
            revenue_contribution=revenue_contribution(demand.avg_daily_usage, cost),
        )


def compute_analysis(
    products: Sequence[Product],
    transactions: Sequence[Transaction],
    purchase_orders: Sequence[PurchaseOrder],
    config: ServiceLevelConfig
) -> list[AnalysisResult]:
    """
    Run the full replenishment analysis.

    Args:
        products: One row per (SKU, branch)
        transactions: Stock movements joined to products on (id, branch)
        purchase_orders: Order history for lead time inference
        config: Settings for this run

    Returns:
        One AnalysisResult per product, ordered by revenue contribution
        (descending, ties in input order). Empty when there are no products.
    """
    return AnalysisOrchestrator(config).run(products, transactions, purchase_orders)


def recompute(inputs: AnalysisInputs) -> list[AnalysisResult]:
    """Run the analysis; any unexpected failure is logged and yields an empty list."""
    try:
        return compute_analysis(
            inputs.products,
            inputs.transactions,
            inputs.purchase_orders,
            inputs.config,
        )
    except Exception:
        logger.exception("Replenishment analysis failed; returning no results")
        return []
