# Analysis modules
from .models import (
    ABCClass,
    AnalysisResult,
    MonthlyUsage,
    Product,
    PurchaseOrder,
    StockStatus,
    Transaction,
    TransactionType,
)
from .demand import DemandEstimator
from .lead_time import LeadTimeEstimator
from .safety_stock import SafetyStockCalculator, z_score
from .stock_levels import ReplenishmentPolicy, StockClassifier
from .eoq import EOQCalculator
from .abc import ABCClassifier
from .transfers import TransferMatcher
from .orchestrator import AnalysisInputs, AnalysisOrchestrator, compute_analysis, recompute

__all__ = [
    "ABCClass",
    "AnalysisResult",
    "MonthlyUsage",
    "Product",
    "PurchaseOrder",
    "StockStatus",
    "Transaction",
    "TransactionType",
    "DemandEstimator",
    "LeadTimeEstimator",
    "SafetyStockCalculator",
    "z_score",
    "ReplenishmentPolicy",
    "StockClassifier",
    "EOQCalculator",
    "ABCClassifier",
    "TransferMatcher",
    "AnalysisInputs",
    "AnalysisOrchestrator",
    "compute_analysis",
    "recompute",
]
