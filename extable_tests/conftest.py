import pytest

from extable.api import ExColumn, ExTable


@pytest.fixture
def products():
    return [
        {
            "id": 1,
            "name": "Laptop",
            "category": "electronics",
            "price": 1299.99,
            "stock": 5,
            "status": "active",
            "created_at": "2024-01-15",
        },
        {
            "id": 2,
            "name": "desk",
            "category": "furniture",
            "price": 349.5,
            "stock": 0,
            "status": "inactive",
            "created_at": "2024-02-20",
        },
        {
            "id": 3,
            "name": "Monitor",
            "category": "electronics",
            "price": 199,
            "stock": 12,
            "status": "pending",
            "created_at": "2024-03-05",
        },
        {
            "id": 4,
            "name": "Chair",
            "category": "furniture",
            "price": "89.90",
            "stock": 30,
            "status": "active",
            "created_at": "2024-03-18",
        },
        {
            "id": 5,
            "name": "keyboard",
            "category": "electronics",
            "price": 49,
            "stock": 3,
            "status": "active",
            "created_at": None,
        },
    ]


@pytest.fixture
def product_table(products):
    return (
        ExTable.make()
        .set_columns(
            [
                ExColumn.numeric("id").set_sortable(),
                ExColumn.text("name").set_sortable().set_searchable(),
                ExColumn.text("category").set_searchable(),
                ExColumn.money("price").set_sortable(),
                ExColumn.numeric("stock").set_sortable(),
                ExColumn.badge("status"),
                ExColumn.date("created_at"),
            ]
        )
        .set_data(products)
    )
