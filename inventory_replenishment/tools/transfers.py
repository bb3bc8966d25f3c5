"""
Transfer tools - get_transfer_suggestions
"""

from typing import Any

from mcp.types import CallToolResult

from ..analysis.transfers import get_transfer_suggestions
from ..config import ServiceLevelConfig
from ..dataset import InventoryDataset
from .analysis import apply_limit, filter_results, json_result, run_analysis


def handle_get_transfer_suggestions(
    dataset: InventoryDataset,
    config: ServiceLevelConfig,
    arguments: dict[str, Any]
) -> CallToolResult:
    """Get suggested inter-branch transfers."""
    results = filter_results(run_analysis(dataset, config, arguments), arguments)
    transfers = get_transfer_suggestions(results)

    # Largest moves first
    transfers.sort(key=lambda t: t['value'], reverse=True)
    transfers = apply_limit(transfers, arguments)

    summary = {
        'total_transfers': len(transfers),
        'total_quantity': round(sum(t['quantity'] for t in transfers), 2),
        'total_value': round(sum(t['value'] for t in transfers), 2),
        'donor_branches': sorted({t['from_branch'] for t in transfers})
    }

    return json_result({'summary': summary, 'transfers': transfers})
