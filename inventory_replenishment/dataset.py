"""
CSV dataset loader for inventory data.

Files use canonical column names; header mapping is done upstream.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from .analysis.models import Product, PurchaseOrder, Transaction, TransactionType


PathLike = Union[str, Path]

PRODUCT_NUMERIC_COLUMNS = {
    "current_stock": 0.0,
    "stock_on_order": 0.0,
    "current_min": 0.0,
    "current_max": 0.0,
}
PRODUCT_OPTIONAL_COLUMNS = [
    "lead_time_days",
    "physical_stock",
    "available_stock",
    "service_level_override",
    "manual_avg_daily_usage",
]


class DatasetError(ValueError):
    """Raised when a dataset file is missing required columns."""


@dataclass
class InventoryDataset:
    """Products, transactions and purchase orders for one analysis."""
    products: list[Product]
    transactions: list[Transaction] = field(default_factory=list)
    purchase_orders: list[PurchaseOrder] = field(default_factory=list)

    @classmethod
    def from_csv(
        cls,
        products_path: PathLike,
        transactions_path: Optional[PathLike] = None,
        purchase_orders_path: Optional[PathLike] = None
    ) -> "InventoryDataset":
        """Load a dataset from CSV files. Only the products file is required."""
        products = load_products(_read_csv(products_path, required=["id"]))

        transactions = []
        if transactions_path:
            transactions = load_transactions(
                _read_csv(transactions_path, required=["product_id", "date", "quantity"])
            )

        purchase_orders = []
        if purchase_orders_path:
            purchase_orders = load_purchase_orders(
                _read_csv(purchase_orders_path, required=["product_id", "order_date", "receive_date"])
            )

        return cls(products=products, transactions=transactions, purchase_orders=purchase_orders)

    @property
    def categories(self) -> list[str]:
        return sorted({p.category for p in self.products})

    @property
    def branches(self) -> list[str]:
        return sorted({p.branch for p in self.products})


def _read_csv(path: PathLike, required: list[str]) -> pd.DataFrame:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dataset file not found: {path}")

    df = pd.read_csv(path, dtype=str, keep_default_na=False, skipinitialspace=True)
    df.columns = [c.strip() for c in df.columns]

    missing = [c for c in required if c not in df.columns]
    if missing:
        raise DatasetError(f"{path.name} is missing required columns: {', '.join(missing)}")
    return df


def _text(df: pd.DataFrame, column: str, default: str) -> pd.Series:
    if column not in df.columns:
        return pd.Series([default] * len(df), index=df.index)
    values = df[column].str.strip()
    return values.where(values != "", default)


def _numbers(df: pd.DataFrame, column: str) -> pd.Series:
    """Numeric column with NaN for blanks and junk."""
    if column not in df.columns:
        return pd.Series([float("nan")] * len(df), index=df.index)
    return pd.to_numeric(df[column], errors="coerce")


def _money(df: pd.DataFrame, column: str) -> pd.Series:
    """Numeric column tolerant of currency symbols and thousands separators."""
    if column not in df.columns:
        return _numbers(df, column)
    cleaned = df[column].str.replace(r"[^0-9.\-]", "", regex=True)
    return pd.to_numeric(cleaned, errors="coerce")


def _optional(value: float) -> Optional[float]:
    return None if pd.isna(value) else float(value)


def load_products(df: pd.DataFrame) -> list[Product]:
    """Products from a frame; rows without an id are skipped."""
    df = df[df["id"].str.strip() != ""]
    if df.empty:
        return []

    ids = df["id"].str.strip()
    sku = _text(df, "sku", "")
    sku = sku.where(sku != "", ids)
    name = _text(df, "name", "")
    name = name.where(name != "", ids)

    numeric = {
        column: _numbers(df, column).fillna(default)
        for column, default in PRODUCT_NUMERIC_COLUMNS.items()
    }
    cost = _money(df, "cost").fillna(0.0)
    optional = {column: _numbers(df, column) for column in PRODUCT_OPTIONAL_COLUMNS}

    category = _text(df, "category", "General")
    branch = _text(df, "branch", "Main")

    products = []
    for idx in df.index:
        products.append(Product(
            id=ids[idx],
            sku=sku[idx],
            name=name[idx],
            category=category[idx],
            branch=branch[idx],
            cost=max(0.0, float(cost[idx])),
            lead_time_days=_optional(optional["lead_time_days"][idx]),
            current_stock=float(numeric["current_stock"][idx]),
            physical_stock=_optional(optional["physical_stock"][idx]),
            available_stock=_optional(optional["available_stock"][idx]),
            stock_on_order=float(numeric["stock_on_order"][idx]),
            current_min=float(numeric["current_min"][idx]),
            current_max=float(numeric["current_max"][idx]),
            service_level_override=_optional(optional["service_level_override"][idx]),
            manual_avg_daily_usage=_optional(optional["manual_avg_daily_usage"][idx]),
        ))
    return products


def load_transactions(df: pd.DataFrame) -> list[Transaction]:
    """
    Transactions from a frame.

    Without a `type` column a negative quantity is an outgoing movement;
    quantities are stored unsigned either way.
    """
    df = df[df["product_id"].str.strip() != ""]
    if df.empty:
        return []

    quantity = _numbers(df, "quantity").fillna(0.0)
    branch = _text(df, "branch", "Main")

    if "type" in df.columns:
        types = df["type"].str.strip().str.upper()
        types = types.where(types.isin([t.value for t in TransactionType]), None)
        derived = quantity.lt(0).map({True: TransactionType.OUT.value, False: TransactionType.IN.value})
        types = types.fillna(derived)
    else:
        types = quantity.lt(0).map({True: TransactionType.OUT.value, False: TransactionType.IN.value})

    return [
        Transaction(
            product_id=df["product_id"][idx].strip(),
            branch=branch[idx],
            date=df["date"][idx].strip() or None,
            quantity=abs(float(quantity[idx])),
            type=TransactionType(types[idx]),
        )
        for idx in df.index
    ]


def load_purchase_orders(df: pd.DataFrame) -> list[PurchaseOrder]:
    """Purchase orders from a frame."""
    df = df[df["product_id"].str.strip() != ""]
    if df.empty:
        return []

    quantity = _numbers(df, "quantity").fillna(0.0)
    branch = _text(df, "branch", "Main")
    po_number = _text(df, "po_number", "PO")

    return [
        PurchaseOrder(
            product_id=df["product_id"][idx].strip(),
            branch=branch[idx],
            order_date=df["order_date"][idx].strip() or None,
            receive_date=df["receive_date"][idx].strip() or None,
            quantity=float(quantity[idx]),
            po_number=po_number[idx],
        )
        for idx in df.index
    ]
