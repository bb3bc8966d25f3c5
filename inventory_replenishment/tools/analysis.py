"""
Analysis tools - run_replenishment_analysis, get_replenishment_summary, get_abc_summary
"""

import json
from dataclasses import asdict
from typing import Any

from mcp.types import TextContent, CallToolResult

from ..analysis import AnalysisInputs, AnalysisResult, recompute
from ..analysis.abc import get_abc_summary
from ..analysis.stock_levels import get_stock_summary
from ..config import ServiceLevelConfig, apply_overrides
from ..dataset import InventoryDataset


def serialize_results(results: list) -> list[dict]:
    """Convert dataclass results to serializable dictionaries."""
    serialized = []
    for r in results:
        if hasattr(r, "__dataclass_fields__"):
            d = asdict(r)
            # Convert Enum values to strings
            for key, value in d.items():
                if hasattr(value, "value"):
                    d[key] = value.value
            serialized.append(d)
        else:
            serialized.append(r)
    return serialized


def json_result(payload: Any) -> CallToolResult:
    return CallToolResult(
        content=[TextContent(
            type="text",
            text=json.dumps(payload, indent=2)
        )]
    )


def run_analysis(
    dataset: InventoryDataset,
    config: ServiceLevelConfig,
    arguments: dict[str, Any]
) -> list[AnalysisResult]:
    """Recompute the analysis with any per-call configuration overrides."""
    return recompute(AnalysisInputs(
        products=dataset.products,
        transactions=dataset.transactions,
        purchase_orders=dataset.purchase_orders,
        config=apply_overrides(config, arguments),
    ))


def _as_set(value: Any) -> set[str]:
    if value is None:
        return set()
    if isinstance(value, str):
        value = [value]
    return {str(v).strip().lower() for v in value}


def filter_results(results: list[AnalysisResult], arguments: dict[str, Any]) -> list[AnalysisResult]:
    """Apply the branch/category/sku/status/abc_class filters common to all tools."""
    branches = _as_set(arguments.get("branch"))
    categories = _as_set(arguments.get("category"))
    skus = _as_set(arguments.get("sku"))
    statuses = _as_set(arguments.get("status"))
    classes = _as_set(arguments.get("abc_class"))

    filtered = []
    for r in results:
        if branches and r.branch.strip().lower() not in branches:
            continue
        if categories and r.category.strip().lower() not in categories:
            continue
        if skus and r.sku.strip().lower() not in skus:
            continue
        if statuses and r.stock_status.value.lower() not in statuses:
            continue
        if classes and (r.abc_class is None or r.abc_class.value.lower() not in classes):
            continue
        filtered.append(r)
    return filtered


def apply_limit(items: list, arguments: dict[str, Any]) -> list:
    limit = arguments.get("limit")
    if limit is None:
        return items
    return items[:max(0, int(limit))]


def handle_run_replenishment_analysis(
    dataset: InventoryDataset,
    config: ServiceLevelConfig,
    arguments: dict[str, Any]
) -> CallToolResult:
    """Run the full analysis and return per-item results."""
    results = filter_results(run_analysis(dataset, config, arguments), arguments)
    return json_result(serialize_results(apply_limit(results, arguments)))


def handle_get_replenishment_summary(
    dataset: InventoryDataset,
    config: ServiceLevelConfig,
    arguments: dict[str, Any]
) -> CallToolResult:
    """Get dashboard totals for the (filtered) analysis."""
    results = filter_results(run_analysis(dataset, config, arguments), arguments)
    return json_result(get_stock_summary(results))


def handle_get_abc_summary(
    dataset: InventoryDataset,
    config: ServiceLevelConfig,
    arguments: dict[str, Any]
) -> CallToolResult:
    """Get the ABC class distribution."""
    results = filter_results(run_analysis(dataset, config, arguments), arguments)
    return json_result(get_abc_summary(results))
