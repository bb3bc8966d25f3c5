"""
Shared fixtures for the replenishment analysis tests.
"""

import pytest

from inventory_replenishment.analysis.models import (
    AnalysisResult,
    Product,
    PurchaseOrder,
    StockStatus,
    Transaction,
    TransactionType,
)
from inventory_replenishment.config import SafetyStockStrategy, ServiceLevelConfig


@pytest.fixture
def config():
    """Statistical safety stock with outlier trimming off."""
    return ServiceLevelConfig(outlier_threshold=0)


@pytest.fixture
def flat_config():
    """No safety stock: targets are pure lead-time and cycle demand."""
    return ServiceLevelConfig(
        outlier_threshold=0,
        safety_stock_strategy=SafetyStockStrategy.WEEKS_OF_COVER,
        weeks_of_safety_stock=0,
    )


@pytest.fixture
def make_product():
    def _make(id="P1", branch="Main", **kwargs):
        kwargs.setdefault("sku", id)
        kwargs.setdefault("name", f"Product {id}")
        return Product(id=id, branch=branch, **kwargs)
    return _make


@pytest.fixture
def out_tx():
    def _make(product_id, date, quantity, branch="Main"):
        return Transaction(
            product_id=product_id,
            branch=branch,
            date=date,
            quantity=quantity,
            type=TransactionType.OUT,
        )
    return _make


@pytest.fixture
def in_tx():
    def _make(product_id, date, quantity, branch="Main"):
        return Transaction(
            product_id=product_id,
            branch=branch,
            date=date,
            quantity=quantity,
            type=TransactionType.IN,
        )
    return _make


@pytest.fixture
def make_po():
    def _make(product_id, order_date, receive_date, branch="Main", quantity=10):
        return PurchaseOrder(
            product_id=product_id,
            branch=branch,
            order_date=order_date,
            receive_date=receive_date,
            quantity=quantity,
        )
    return _make


@pytest.fixture
def make_result():
    """An AnalysisResult with neutral defaults; override what the test cares about."""
    def _make(**kwargs):
        defaults = dict(
            product_id="P1",
            product_name="Product P1",
            sku="SKU-1",
            category="General",
            branch="Main",
            unit_cost=1.0,
            calculated_stock=50,
            on_order_qty=0,
            stock_basis_used="physical",
            avg_daily_usage=1.0,
            std_dev_usage=0.0,
            monthly_trend=(),
            is_manual_usage=False,
            anomalies_detected_count=0,
            lead_time_used=7,
            is_lead_time_calculated=False,
            lead_time_mode_used="AVERAGE",
            safety_stock=0,
            safety_stock_strategy_used="STATISTICAL",
            min_stock=10,
            max_stock=100,
            order_cycle_used=30,
            replenishment_model_used="MIN_MAX",
            service_level_used=0.95,
            eoq=0,
            stock_status=StockStatus.OK,
            suggested_order_qty=0,
        )
        defaults.update(kwargs)
        return AnalysisResult(**defaults)
    return _make
