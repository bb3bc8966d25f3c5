"""
Domain records shared by the replenishment analysis steps.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional, Union


DateLike = Union[str, date, datetime, None]


class TransactionType(str, Enum):
    """Direction of a stock movement."""
    IN = "IN"
    OUT = "OUT"


class StockStatus(str, Enum):
    """Stock health classification."""
    OK = "OK"
    LOW = "LOW"
    HIGH = "HIGH"
    STOCKOUT = "STOCKOUT"
    INACTIVE = "INACTIVE"
    DEAD = "DEAD"


class ABCClass(str, Enum):
    A = "A"
    B = "B"
    C = "C"


@dataclass(frozen=True)
class Product:
    """One SKU held at one branch."""
    id: str
    sku: str
    name: str
    category: str = "General"
    branch: str = "Main"
    cost: float = 0.0
    lead_time_days: Optional[float] = 7
    current_stock: float = 0.0
    physical_stock: Optional[float] = None
    available_stock: Optional[float] = None
    stock_on_order: float = 0.0
    current_min: float = 0.0
    current_max: float = 0.0
    service_level_override: Optional[float] = None
    manual_avg_daily_usage: Optional[float] = None


@dataclass(frozen=True)
class Transaction:
    """A dated stock movement. Quantity is non-negative, direction is in `type`."""
    product_id: str
    branch: str
    date: DateLike
    quantity: float
    type: TransactionType


@dataclass(frozen=True)
class PurchaseOrder:
    """An order/receive date pair, used for lead time inference only."""
    product_id: str
    branch: str
    order_date: DateLike
    receive_date: DateLike
    quantity: float = 0.0
    po_number: str = "PO"


@dataclass(frozen=True)
class MonthlyUsage:
    month: str  # YYYY-MM
    quantity: float


@dataclass(frozen=True)
class AnalysisResult:
    """Replenishment analysis for one (SKU, branch) pair."""
    product_id: str
    product_name: str
    sku: str
    category: str
    branch: str
    unit_cost: float

    # Stock readings
    calculated_stock: float
    on_order_qty: float
    stock_basis_used: str

    # Demand
    avg_daily_usage: float
    std_dev_usage: float
    monthly_trend: tuple[MonthlyUsage, ...]
    is_manual_usage: bool
    anomalies_detected_count: int

    # Lead time
    lead_time_used: float
    is_lead_time_calculated: bool
    lead_time_mode_used: str

    # Targets
    safety_stock: int
    safety_stock_strategy_used: str
    min_stock: int
    max_stock: int
    order_cycle_used: float
    replenishment_model_used: str
    service_level_used: float
    eoq: int

    # Recommendations
    stock_status: StockStatus
    suggested_order_qty: float
    suggested_transfer_qty: float = 0.0
    transfer_source_branch: Optional[str] = None

    current_min_setting: float = 0.0
    current_max_setting: float = 0.0

    # Valuations
    current_valuation: float = 0.0
    current_min_valuation: float = 0.0
    current_max_valuation: float = 0.0
    optimal_min_valuation: float = 0.0
    optimal_max_valuation: float = 0.0
    optimal_valuation: float = 0.0
    gross_overstock_valuation: float = 0.0
    shortfall_valuation: float = 0.0

    # Ranking, filled in by the second pass
    revenue_contribution: float = 0.0
    cumulative_revenue_pct: float = 0.0
    abc_class: Optional[ABCClass] = None
