"""
Tool definitions (schemas) for all MCP tools.
"""

from mcp.types import Tool


STATUS_VALUES = ["OK", "LOW", "HIGH", "STOCKOUT", "INACTIVE", "DEAD"]

FILTER_PROPERTIES = {
    "branch": {
        "type": "string",
        "description": "Only include items at this branch (case-insensitive)"
    },
    "category": {
        "type": "string",
        "description": "Only include items in this category (case-insensitive)"
    },
    "sku": {
        "type": "string",
        "description": "Only include this SKU"
    },
    "status": {
        "type": "array",
        "items": {"type": "string", "enum": STATUS_VALUES},
        "description": "Only include items with one of these stock statuses"
    },
    "abc_class": {
        "type": "string",
        "enum": ["A", "B", "C"],
        "description": "Only include items of this ABC class"
    },
    "limit": {
        "type": "integer",
        "description": "Maximum number of items to return"
    }
}

CONFIG_PROPERTIES = {
    "service_level": {
        "type": "number",
        "description": "Global target service level for this call, e.g. 0.95"
    },
    "stock_basis": {
        "type": "string",
        "enum": ["physical", "available"],
        "description": "Stock reading used for classification"
    },
    "safety_stock_strategy": {
        "type": "string",
        "enum": ["STATISTICAL", "WEEKS_OF_COVER"],
        "description": "Safety stock from service level or from weeks of cover"
    },
    "weeks_of_safety_stock": {
        "type": "number",
        "description": "Weeks of cover when safety_stock_strategy is WEEKS_OF_COVER"
    },
    "lead_time_mode": {
        "type": "string",
        "enum": ["AVERAGE", "MAX"],
        "description": "Use the average or the longest observed purchase order lead time"
    },
    "growth_factor": {
        "type": "number",
        "description": "Demand growth multiplier, e.g. 1.1 for +10%"
    },
    "outlier_threshold": {
        "type": "number",
        "description": "Standard deviations above the mean beyond which a day is ignored (0 disables)"
    },
    "order_cycle_days": {
        "type": "number",
        "description": "Days of demand between min and max"
    }
}


def _schema(*property_sets: dict, extra: dict = None, required: list = None) -> dict:
    properties = {}
    for props in property_sets:
        properties.update(props)
    if extra:
        properties.update(extra)
    schema = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


def get_tool_definitions() -> list[Tool]:
    """Return all tool definitions."""
    return [
        Tool(
            name="run_replenishment_analysis",
            description="Run the replenishment analysis for every SKU and branch. Returns demand statistics, lead time, safety stock, min/max targets, EOQ, ABC class, stock status, suggested order and transfer quantities, and valuations, ordered by revenue contribution.",
            inputSchema=_schema(FILTER_PROPERTIES, CONFIG_PROPERTIES)
        ),
        Tool(
            name="get_replenishment_summary",
            description="Get dashboard totals: stock valuation vs optimal, overstock opportunity, dead stock value, shortfall, status breakdown, health percentage, and total suggested order and transfer quantities.",
            inputSchema=_schema(FILTER_PROPERTIES, CONFIG_PROPERTIES)
        ),
        Tool(
            name="get_reorder_recommendations",
            description="Get items that are low or out of stock with their suggested order quantity (net of stock on order and inter-branch transfers), EOQ and shortfall value. Stockouts are listed first.",
            inputSchema=_schema(FILTER_PROPERTIES, CONFIG_PROPERTIES)
        ),
        Tool(
            name="get_transfer_suggestions",
            description="Get suggested inter-branch transfers: shortage items paired with another branch holding the same SKU above its maximum.",
            inputSchema=_schema(FILTER_PROPERTIES, CONFIG_PROPERTIES)
        ),
        Tool(
            name="get_abc_summary",
            description="Get the ABC classification distribution by revenue contribution (A: top 80% of revenue, B: next 15%, C: remainder).",
            inputSchema=_schema(FILTER_PROPERTIES, CONFIG_PROPERTIES)
        ),
        Tool(
            name="get_item_analysis",
            description="Get the full calculation breakdown for one item (by product ID or SKU), including the monthly usage trend, across all branches or at one branch.",
            inputSchema=_schema(
                CONFIG_PROPERTIES,
                extra={
                    "item": {
                        "type": "string",
                        "description": "Product ID or SKU (exact, case-insensitive)"
                    },
                    "branch": FILTER_PROPERTIES["branch"]
                },
                required=["item"]
            )
        ),
        Tool(
            name="get_lead_times",
            description="Get the lead time used for each item and whether it was calculated from purchase order history or taken from the product default.",
            inputSchema=_schema(FILTER_PROPERTIES, CONFIG_PROPERTIES)
        ),
    ]
