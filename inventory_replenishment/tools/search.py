"""
Item tools - get_item_analysis
"""

from typing import Any

from mcp.types import TextContent, CallToolResult

from ..config import ServiceLevelConfig
from ..dataset import InventoryDataset
from .analysis import json_result, run_analysis, serialize_results


def handle_get_item_analysis(
    dataset: InventoryDataset,
    config: ServiceLevelConfig,
    arguments: dict[str, Any]
) -> CallToolResult:
    """Get the full calculation breakdown for one SKU, across branches or at one branch."""
    query = str(arguments.get("item", "")).strip().lower()
    branch = arguments.get("branch")
    if not query:
        return CallToolResult(
            content=[TextContent(type="text", text="Error: 'item' is required")],
            isError=True
        )

    matches = [
        r for r in run_analysis(dataset, config, arguments)
        if query in (r.product_id.strip().lower(), r.sku.strip().lower())
        and (not branch or r.branch.strip().lower() == str(branch).strip().lower())
    ]

    if not matches:
        return json_result({"error": f"No analysed item matches '{arguments.get('item')}'"})

    return json_result(serialize_results(matches))
