"""
Indexing of transaction and purchase order history by (product id, branch).
"""

from typing import Any, Iterable, Optional

import pandas as pd

from .models import PurchaseOrder, Transaction, TransactionType


DEFAULT_BRANCH = "Main"

TRANSACTION_COLUMNS = ["product_key", "branch_key", "date", "quantity", "is_out"]
PURCHASE_ORDER_COLUMNS = ["product_key", "branch_key", "order_date", "receive_date"]


def normalize_key(value: Any) -> str:
    """Join key normalisation: trimmed, lower-cased, empty for missing values."""
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value or "").strip().lower()


def branch_key(branch: Any) -> str:
    return normalize_key(branch or DEFAULT_BRANCH)


def parse_dates(values: Iterable[Any]) -> pd.Series:
    """Parse mixed date values to day-resolution timestamps; unparsable values become NaT."""
    series = pd.Series(list(values), dtype=object)
    if series.empty:
        return pd.Series([], dtype="datetime64[ns]")
    parsed = pd.to_datetime(series, errors="coerce", utc=True, format="mixed")
    return parsed.dt.tz_localize(None).dt.normalize()


def transactions_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """Tabulate transactions with normalised join keys and parsed dates."""
    transactions = list(transactions)
    if not transactions:
        frame = pd.DataFrame(columns=TRANSACTION_COLUMNS)
        frame["date"] = pd.Series([], dtype="datetime64[ns]")
        return frame

    return pd.DataFrame({
        "product_key": [normalize_key(t.product_id) for t in transactions],
        "branch_key": [branch_key(t.branch) for t in transactions],
        "date": parse_dates(t.date for t in transactions),
        "quantity": [float(t.quantity) for t in transactions],
        "is_out": [TransactionType(t.type) == TransactionType.OUT for t in transactions],
    })


def purchase_orders_frame(purchase_orders: Iterable[PurchaseOrder]) -> pd.DataFrame:
    """Tabulate purchase orders with normalised join keys and parsed dates."""
    purchase_orders = list(purchase_orders)
    if not purchase_orders:
        frame = pd.DataFrame(columns=PURCHASE_ORDER_COLUMNS)
        frame["order_date"] = pd.Series([], dtype="datetime64[ns]")
        frame["receive_date"] = pd.Series([], dtype="datetime64[ns]")
        return frame

    return pd.DataFrame({
        "product_key": [normalize_key(po.product_id) for po in purchase_orders],
        "branch_key": [branch_key(po.branch) for po in purchase_orders],
        "order_date": parse_dates(po.order_date for po in purchase_orders),
        "receive_date": parse_dates(po.receive_date for po in purchase_orders),
    })


class HistoryIndex:
    """Rows of a history frame grouped by (product key, branch key)."""

    def __init__(self, frame: pd.DataFrame):
        self._empty = frame.iloc[0:0]
        self._groups: dict[tuple[str, str], pd.DataFrame] = {}
        if not frame.empty:
            for key, group in frame.groupby(["product_key", "branch_key"], sort=False):
                self._groups[key] = group

    def get(self, product_id: Any, branch: Any) -> pd.DataFrame:
        """Rows for one item; an empty frame when it has no history."""
        return self._groups.get((normalize_key(product_id), branch_key(branch)), self._empty)

    def __len__(self) -> int:
        return len(self._groups)


def latest_date(frame: pd.DataFrame, column: str = "date") -> Optional[pd.Timestamp]:
    """Latest parsable date in a history frame, or None."""
    if frame.empty:
        return None
    value = frame[column].max()
    return None if pd.isna(value) else value
