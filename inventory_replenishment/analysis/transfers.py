"""
Inter-branch transfer suggestions.

Shortage items are paired with the first branch holding the same SKU
above its order-up-to level. The donor list is scanned in its original
order and a donor's excess is not reduced as recipients claim it, so two
shortage branches can be offered the same surplus.
"""

from dataclasses import replace
from typing import Optional, Sequence

from .models import AnalysisResult, StockStatus
from .stock_levels import SHORTAGE_STATUSES


class TransferMatcher:
    """Greedy, first-match shortage/excess pairing across branches."""

    def __init__(self, candidates: Sequence[AnalysisResult]):
        # First-pass results in their original order
        self.candidates = tuple(candidates)

    def find_donor(self, item: AnalysisResult) -> Optional[AnalysisResult]:
        """First other branch of the same SKU with stock above its max."""
        for other in self.candidates:
            if (
                other.sku == item.sku
                and other.branch != item.branch
                and other.stock_status == StockStatus.HIGH
                and other.calculated_stock > other.max_stock
            ):
                return other
        return None

    def apply(self, item: AnalysisResult) -> AnalysisResult:
        """Return item with a transfer suggestion, or item unchanged when none applies."""
        if item.stock_status not in SHORTAGE_STATUSES:
            return item

        donor = self.find_donor(item)
        if donor is None:
            return item

        needed = item.max_stock - item.calculated_stock
        donor_excess = donor.calculated_stock - donor.max_stock
        transfer_qty = min(needed, donor_excess)
        if transfer_qty <= 0:
            return item

        return replace(
            item,
            suggested_transfer_qty=transfer_qty,
            transfer_source_branch=donor.branch,
            suggested_order_qty=max(0, item.suggested_order_qty - transfer_qty),
        )

    def match(self, items: Sequence[AnalysisResult]) -> list[AnalysisResult]:
        return [self.apply(item) for item in items]


def get_transfer_suggestions(results: list[AnalysisResult]) -> list[dict]:
    """Flatten results with a suggested transfer into source/destination moves."""
    return [
        {
            "sku": r.sku,
            "product_id": r.product_id,
            "product_name": r.product_name,
            "from_branch": r.transfer_source_branch,
            "to_branch": r.branch,
            "quantity": r.suggested_transfer_qty,
            "value": round(r.suggested_transfer_qty * r.unit_cost, 2),
            "recipient_status": r.stock_status.value,
            "remaining_order_qty": r.suggested_order_qty,
        }
        for r in results
        if r.suggested_transfer_qty > 0
    ]
