"""
ABC Inventory Classification by revenue contribution.

ABC Analysis ranks every (SKU, branch) item by annualised revenue
  - A: items up to 80% of cumulative revenue
  - B: items up to 95% of cumulative revenue
  - C: the remainder
"""

from dataclasses import replace

from .eoq import DAYS_PER_YEAR
from .models import ABCClass, AnalysisResult


def revenue_contribution(avg_daily_usage: float, unit_cost: float) -> float:
    """Annualised revenue of an item."""
    return avg_daily_usage * unit_cost * DAYS_PER_YEAR


class ABCClassifier:
    """Global ABC ranking over a complete result set."""

    # Default thresholds
    ABC_THRESHOLDS = {"A": 0.80, "B": 0.95}  # Cumulative revenue shares

    def __init__(self, thresholds: dict = None):
        self.thresholds = thresholds or self.ABC_THRESHOLDS

    def classify(self, results: list[AnalysisResult]) -> list[AnalysisResult]:
        """
        Rank items by revenue contribution and assign ABC classes.

        Args:
            results: Complete first-pass results

        Returns:
            New results sorted by revenue contribution (descending, ties in
            original order), each carrying its class and cumulative share
        """
        ranked = sorted(results, key=lambda r: r.revenue_contribution, reverse=True)
        total_revenue = sum(r.revenue_contribution for r in ranked)

        cumulative = 0.0
        classified = []
        for r in ranked:
            cumulative += r.revenue_contribution
            if total_revenue > 0:
                cumulative_pct = cumulative / total_revenue
                abc_class = self._classify_abc(cumulative_pct)
            else:
                # no revenue anywhere: everything is C
                cumulative_pct = 0.0
                abc_class = ABCClass.C
            classified.append(replace(
                r,
                abc_class=abc_class,
                cumulative_revenue_pct=cumulative_pct,
            ))

        return classified

    def _classify_abc(self, cumulative_pct: float) -> ABCClass:
        """Classify product into ABC category."""
        if cumulative_pct <= self.thresholds["A"]:
            return ABCClass.A
        elif cumulative_pct <= self.thresholds["B"]:
            return ABCClass.B
        else:
            return ABCClass.C


def get_abc_summary(results: list[AnalysisResult]) -> dict:
    """Get summary statistics of ABC classification."""
    if not results:
        return {}

    counts = {c.value: 0 for c in ABCClass}
    revenue = {c.value: 0.0 for c in ABCClass}

    for r in results:
        if r.abc_class is None:
            continue
        counts[r.abc_class.value] += 1
        revenue[r.abc_class.value] += r.revenue_contribution

    total_items = len(results)
    total_revenue = sum(revenue.values())

    return {
        "total_items": total_items,
        "total_annual_revenue": round(total_revenue, 2),
        "abc_distribution": {
            cls: {
                "count": counts[cls],
                "percentage": round(counts[cls] / total_items * 100, 1),
                "revenue": round(revenue[cls], 2),
                "revenue_percentage": round(revenue[cls] / total_revenue * 100, 1) if total_revenue else 0
            }
            for cls in counts
        }
    }
