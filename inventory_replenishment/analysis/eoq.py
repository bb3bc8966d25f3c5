"""
Economic order quantity.
"""

import math
from dataclasses import dataclass

from ..config import DEFAULT_HOLDING_COST_ANNUAL_PCT, DEFAULT_ORDER_PLACEMENT_COST


DAYS_PER_YEAR = 365


@dataclass
class EOQResult:
    annual_demand: float
    holding_cost_per_unit: float
    eoq: int


class EOQCalculator:
    """Order size minimising combined ordering and holding cost: sqrt(2DS / H)."""

    def __init__(
        self,
        order_placement_cost: float = DEFAULT_ORDER_PLACEMENT_COST,
        holding_cost_annual_pct: float = DEFAULT_HOLDING_COST_ANNUAL_PCT
    ):
        self.order_placement_cost = order_placement_cost or DEFAULT_ORDER_PLACEMENT_COST
        self.holding_cost_annual_pct = holding_cost_annual_pct or DEFAULT_HOLDING_COST_ANNUAL_PCT

    def calculate(self, avg_daily_usage: float, unit_cost: float) -> EOQResult:
        annual_demand = avg_daily_usage * DAYS_PER_YEAR
        holding_cost = unit_cost * self.holding_cost_annual_pct
        # A free-to-hold item would divide by zero
        divisor = holding_cost or 1
        eoq = math.ceil(math.sqrt(2 * annual_demand * self.order_placement_cost / divisor))
        return EOQResult(
            annual_demand=annual_demand,
            holding_cost_per_unit=holding_cost,
            eoq=eoq,
        )
