"""
Lead time tools - get_lead_times
"""

from typing import Any

from mcp.types import CallToolResult

from ..config import ServiceLevelConfig
from ..dataset import InventoryDataset
from .analysis import apply_limit, filter_results, json_result, run_analysis


def handle_get_lead_times(
    dataset: InventoryDataset,
    config: ServiceLevelConfig,
    arguments: dict[str, Any]
) -> CallToolResult:
    """Get the lead time used per item and whether purchase orders supplied it."""
    results = filter_results(run_analysis(dataset, config, arguments), arguments)

    lead_times = [
        {
            'product_id': r.product_id,
            'sku': r.sku,
            'name': r.product_name,
            'branch': r.branch,
            'lead_time_days': round(r.lead_time_used, 2),
            'calculated_from_purchase_orders': r.is_lead_time_calculated,
            'mode': r.lead_time_mode_used
        }
        for r in results
    ]

    # Longest lead times first
    lead_times.sort(key=lambda x: x['lead_time_days'], reverse=True)

    summary = {
        'total_items': len(lead_times),
        'calculated_count': sum(1 for x in lead_times if x['calculated_from_purchase_orders']),
        'default_count': sum(1 for x in lead_times if not x['calculated_from_purchase_orders']),
        'avg_lead_time_days': round(sum(x['lead_time_days'] for x in lead_times) / len(lead_times), 1) if lead_times else 0,
        'max_lead_time_days': max((x['lead_time_days'] for x in lead_times), default=0),
        'min_lead_time_days': min((x['lead_time_days'] for x in lead_times), default=0)
    }

    return json_result({'summary': summary, 'items': apply_limit(lead_times, arguments)})
