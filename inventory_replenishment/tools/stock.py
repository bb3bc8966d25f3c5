"""
Stock tools - get_reorder_recommendations
"""

from typing import Any

from mcp.types import CallToolResult

from ..analysis.stock_levels import get_reorder_alerts
from ..config import ServiceLevelConfig
from ..dataset import InventoryDataset
from .analysis import apply_limit, filter_results, json_result, run_analysis


def handle_get_reorder_recommendations(
    dataset: InventoryDataset,
    config: ServiceLevelConfig,
    arguments: dict[str, Any]
) -> CallToolResult:
    """Get items to replenish, most urgent first, with order and transfer quantities."""
    results = filter_results(run_analysis(dataset, config, arguments), arguments)
    alerts = apply_limit(get_reorder_alerts(results), arguments)

    recommendations = [
        {
            'product_id': r.product_id,
            'sku': r.sku,
            'name': r.product_name,
            'branch': r.branch,
            'status': r.stock_status.value,
            'abc_class': r.abc_class.value if r.abc_class else None,
            'stock': r.calculated_stock,
            'on_order': r.on_order_qty,
            'min_stock': r.min_stock,
            'max_stock': r.max_stock,
            'eoq': r.eoq,
            'suggested_order_qty': r.suggested_order_qty,
            'suggested_transfer_qty': r.suggested_transfer_qty,
            'transfer_source_branch': r.transfer_source_branch,
            'order_value': round(r.suggested_order_qty * r.unit_cost, 2),
            'shortfall_valuation': round(r.shortfall_valuation, 2)
        }
        for r in alerts
    ]

    summary = {
        'items_to_replenish': len(recommendations),
        'stockouts': sum(1 for r in recommendations if r['status'] == 'STOCKOUT'),
        'total_order_qty': round(sum(r['suggested_order_qty'] for r in recommendations), 2),
        'total_order_value': round(sum(r['order_value'] for r in recommendations), 2),
        'total_transfer_qty': round(sum(r['suggested_transfer_qty'] for r in recommendations), 2)
    }

    return json_result({'summary': summary, 'recommendations': recommendations})
