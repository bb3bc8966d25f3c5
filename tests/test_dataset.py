"""
Tests for the CSV dataset loader.
"""

import pytest

from inventory_replenishment.analysis.models import TransactionType
from inventory_replenishment.dataset import DatasetError, InventoryDataset


@pytest.fixture
def write_csv(tmp_path):
    def _write(name, text):
        path = tmp_path / name
        path.write_text(text.strip() + "\n")
        return path
    return _write


class TestProducts:

    def test_columns_are_parsed(self, write_csv):
        path = write_csv("products.csv", """
id,sku,name,category,branch,cost,current_stock,physical_stock,lead_time_days,manual_avg_daily_usage
P1,SKU-1,Widget,Tools,North,2.5,10,8,14,
""")
        [product] = InventoryDataset.from_csv(path).products

        assert product.id == "P1"
        assert product.sku == "SKU-1"
        assert product.category == "Tools"
        assert product.branch == "North"
        assert product.cost == 2.5
        assert product.current_stock == 10
        assert product.physical_stock == 8
        assert product.available_stock is None
        assert product.lead_time_days == 14
        assert product.manual_avg_daily_usage is None

    def test_blank_and_bad_values_use_defaults(self, write_csv):
        path = write_csv("products.csv", """
id,sku,name,category,branch,cost,current_stock
P2,,,,,-3,abc
,X,Orphan,Tools,North,1,1
""")
        [product] = InventoryDataset.from_csv(path).products

        assert product.sku == "P2"
        assert product.name == "P2"
        assert product.category == "General"
        assert product.branch == "Main"
        assert product.cost == 0
        assert product.current_stock == 0
        assert product.lead_time_days is None

    def test_cost_with_currency_formatting(self, write_csv):
        path = write_csv("products.csv", """
id,cost
P1,"$1,200.50"
P2, AUD 7.25
P3,n/a
""")
        costs = [p.cost for p in InventoryDataset.from_csv(path).products]

        assert costs == [1200.5, 7.25, 0]

    def test_only_id_is_required(self, write_csv):
        path = write_csv("products.csv", "sku,name\nSKU-1,Widget")
        with pytest.raises(DatasetError, match="id"):
            InventoryDataset.from_csv(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            InventoryDataset.from_csv(tmp_path / "nope.csv")

    def test_categories_and_branches(self, write_csv):
        path = write_csv("products.csv", """
id,category,branch
P1,Tools,North
P2,Paint,South
P3,Tools,North
""")
        dataset = InventoryDataset.from_csv(path)

        assert dataset.categories == ["Paint", "Tools"]
        assert dataset.branches == ["North", "South"]


class TestTransactions:

    def test_type_column(self, write_csv):
        products = write_csv("products.csv", "id\nP1")
        transactions = write_csv("transactions.csv", """
product_id,branch,date,quantity,type
P1,North,2025-01-01,5,OUT
P1,North,2025-01-02,-3,
P1,North,,4,in
""")
        dataset = InventoryDataset.from_csv(products, transactions_path=transactions)

        assert [(t.type, t.quantity) for t in dataset.transactions] == [
            (TransactionType.OUT, 5),
            (TransactionType.OUT, 3),
            (TransactionType.IN, 4),
        ]
        assert dataset.transactions[2].date is None

    def test_direction_from_sign(self, write_csv):
        products = write_csv("products.csv", "id\nP1")
        transactions = write_csv("transactions.csv", """
product_id,date,quantity
P1,2025-01-01,-2
P1,2025-01-02,7
""")
        dataset = InventoryDataset.from_csv(products, transactions_path=transactions)

        assert [(t.type, t.quantity, t.branch) for t in dataset.transactions] == [
            (TransactionType.OUT, 2, "Main"),
            (TransactionType.IN, 7, "Main"),
        ]

    def test_required_columns(self, write_csv):
        products = write_csv("products.csv", "id\nP1")
        transactions = write_csv("transactions.csv", "product_id,quantity\nP1,1")
        with pytest.raises(DatasetError, match="date"):
            InventoryDataset.from_csv(products, transactions_path=transactions)


class TestPurchaseOrders:

    def test_loaded(self, write_csv):
        products = write_csv("products.csv", "id\nP1")
        orders = write_csv("purchase_orders.csv", """
product_id,order_date,receive_date,po_number
P1,2025-01-01,2025-01-08,PO-7
P1,2025-01-01,,
""")
        dataset = InventoryDataset.from_csv(products, purchase_orders_path=orders)

        first, second = dataset.purchase_orders
        assert first.po_number == "PO-7"
        assert first.branch == "Main"
        assert second.receive_date is None
        assert second.po_number == "PO"
