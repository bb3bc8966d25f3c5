"""
Configuration and constants for the replenishment analysis.
"""

import json
import os
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional


DEFAULT_LEAD_TIME_DAYS = 7
DEFAULT_ORDER_PLACEMENT_COST = 50.0
DEFAULT_HOLDING_COST_ANNUAL_PCT = 0.20


class StockBasis(str, Enum):
    """Which stock reading drives classification and targets."""
    PHYSICAL = "physical"
    AVAILABLE = "available"


class SafetyStockStrategy(str, Enum):
    STATISTICAL = "STATISTICAL"
    WEEKS_OF_COVER = "WEEKS_OF_COVER"


class LeadTimeMode(str, Enum):
    AVERAGE = "AVERAGE"
    MAX = "MAX"


class ReplenishmentModel(str, Enum):
    """Recorded on every result; all models share the min/max arithmetic."""
    MIN_MAX = "MIN_MAX"
    PERIODIC_REVIEW = "PERIODIC_REVIEW"
    FIXED_DAYS = "FIXED_DAYS"


@dataclass(frozen=True)
class ServiceLevelConfig:
    """Settings for one analysis run. Treat as read-only."""
    global_service_level: float = 0.95
    category_service_levels: dict[str, float] = field(default_factory=dict)
    stock_basis: StockBasis = StockBasis.PHYSICAL
    outlier_threshold: float = 3.0  # sigma multiplier, 0 disables trimming
    order_cycle_days: float = 30
    safety_stock_strategy: SafetyStockStrategy = SafetyStockStrategy.STATISTICAL
    weeks_of_safety_stock: float = 2.0
    lead_time_mode: LeadTimeMode = LeadTimeMode.AVERAGE
    growth_factor: float = 1.0
    rebalancing_strategy: float = 0.5  # not consumed by the engine
    replenishment_model: ReplenishmentModel = ReplenishmentModel.MIN_MAX
    order_placement_cost: float = DEFAULT_ORDER_PLACEMENT_COST
    holding_cost_annual_pct: float = DEFAULT_HOLDING_COST_ANNUAL_PCT

    def __post_init__(self):
        if not 0 <= self.global_service_level <= 1:
            raise ValueError(
                f"global_service_level must be within [0, 1], got {self.global_service_level}"
            )
        for category, level in self.category_service_levels.items():
            if not 0 <= level <= 1:
                raise ValueError(f"Service level for category '{category}' must be within [0, 1]")
        if self.outlier_threshold < 0:
            raise ValueError("outlier_threshold must be >= 0")
        if self.order_cycle_days < 0:
            raise ValueError("order_cycle_days must be >= 0")
        if self.weeks_of_safety_stock < 0:
            raise ValueError("weeks_of_safety_stock must be >= 0")
        if self.growth_factor < 0:
            raise ValueError("growth_factor must be >= 0")
        if not 0 <= self.rebalancing_strategy <= 1:
            raise ValueError("rebalancing_strategy must be within [0, 1]")
        if self.order_placement_cost < 0:
            raise ValueError("order_placement_cost must be >= 0")
        if self.holding_cost_annual_pct < 0:
            raise ValueError("holding_cost_annual_pct must be >= 0")

        # Accept plain strings for the selectors
        object.__setattr__(self, "stock_basis", StockBasis(self.stock_basis))
        object.__setattr__(
            self, "safety_stock_strategy", SafetyStockStrategy(self.safety_stock_strategy)
        )
        object.__setattr__(self, "lead_time_mode", LeadTimeMode(self.lead_time_mode))
        object.__setattr__(
            self, "replenishment_model", ReplenishmentModel(self.replenishment_model)
        )

    def service_level_for(self, category: str, override: Optional[float] = None) -> float:
        """Resolve the target service level: product override, then category, then global."""
        if override:
            return override
        category_level = self.category_service_levels.get(category)
        if category_level:
            return category_level
        return self.global_service_level


# Tool argument name -> config field
CONFIG_OVERRIDE_FIELDS = {
    "service_level": "global_service_level",
    "stock_basis": "stock_basis",
    "safety_stock_strategy": "safety_stock_strategy",
    "lead_time_mode": "lead_time_mode",
    "growth_factor": "growth_factor",
    "outlier_threshold": "outlier_threshold",
    "order_cycle_days": "order_cycle_days",
    "weeks_of_safety_stock": "weeks_of_safety_stock",
}


def apply_overrides(config: ServiceLevelConfig, arguments: dict[str, Any]) -> ServiceLevelConfig:
    """Return a copy of config with any per-call overrides from tool arguments."""
    changes = {
        config_field: arguments[arg]
        for arg, config_field in CONFIG_OVERRIDE_FIELDS.items()
        if arguments.get(arg) is not None
    }
    if not changes:
        return config
    return replace(config, **changes)


def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got '{value}'")


def get_service_level_config() -> ServiceLevelConfig:
    """Build the analysis configuration from environment variables."""
    categories_raw = os.environ.get("REPLENISHMENT_CATEGORY_SERVICE_LEVELS", "").strip()
    category_levels = {}
    if categories_raw:
        try:
            category_levels = {str(k): float(v) for k, v in json.loads(categories_raw).items()}
        except (ValueError, AttributeError) as e:
            raise ValueError(f"REPLENISHMENT_CATEGORY_SERVICE_LEVELS must be a JSON object: {e}")

    return ServiceLevelConfig(
        global_service_level=_env_float("REPLENISHMENT_SERVICE_LEVEL", 0.95),
        category_service_levels=category_levels,
        stock_basis=os.environ.get("REPLENISHMENT_STOCK_BASIS", StockBasis.PHYSICAL.value),
        outlier_threshold=_env_float("REPLENISHMENT_OUTLIER_THRESHOLD", 3.0),
        order_cycle_days=_env_float("REPLENISHMENT_ORDER_CYCLE_DAYS", 30),
        safety_stock_strategy=os.environ.get(
            "REPLENISHMENT_SAFETY_STOCK_STRATEGY", SafetyStockStrategy.STATISTICAL.value
        ),
        weeks_of_safety_stock=_env_float("REPLENISHMENT_WEEKS_OF_SAFETY_STOCK", 2.0),
        lead_time_mode=os.environ.get("REPLENISHMENT_LEAD_TIME_MODE", LeadTimeMode.AVERAGE.value),
        growth_factor=_env_float("REPLENISHMENT_GROWTH_FACTOR", 1.0),
        replenishment_model=os.environ.get(
            "REPLENISHMENT_MODEL", ReplenishmentModel.MIN_MAX.value
        ),
        order_placement_cost=_env_float("REPLENISHMENT_ORDER_COST", DEFAULT_ORDER_PLACEMENT_COST),
        holding_cost_annual_pct=_env_float(
            "REPLENISHMENT_HOLDING_COST_PCT", DEFAULT_HOLDING_COST_ANNUAL_PCT
        ),
    )


def get_dataset():
    """Load the inventory dataset from the CSV paths in the environment."""
    from .dataset import InventoryDataset

    products_path = os.environ.get("INVENTORY_PRODUCTS_CSV")
    if not products_path:
        raise RuntimeError("INVENTORY_PRODUCTS_CSV is not set.")
    return InventoryDataset.from_csv(
        products_path,
        transactions_path=os.environ.get("INVENTORY_TRANSACTIONS_CSV") or None,
        purchase_orders_path=os.environ.get("INVENTORY_PURCHASE_ORDERS_CSV") or None,
    )
