"""
Inventory replenishment analytics with an MCP server front end.
"""

from .analysis import AnalysisInputs, compute_analysis, recompute
from .config import ServiceLevelConfig

__all__ = ["AnalysisInputs", "ServiceLevelConfig", "compute_analysis", "recompute"]
