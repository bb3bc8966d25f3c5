"""
Tools package for MCP server.
"""

from .definitions import get_tool_definitions
from .analysis import (
    handle_run_replenishment_analysis,
    handle_get_replenishment_summary,
    handle_get_abc_summary,
)
from .stock import handle_get_reorder_recommendations
from .transfers import handle_get_transfer_suggestions
from .search import handle_get_item_analysis
from .lead_time import handle_get_lead_times

__all__ = [
    'get_tool_definitions',
    'handle_run_replenishment_analysis',
    'handle_get_replenishment_summary',
    'handle_get_abc_summary',
    'handle_get_reorder_recommendations',
    'handle_get_transfer_suggestions',
    'handle_get_item_analysis',
    'handle_get_lead_times',
]
