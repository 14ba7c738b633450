"""Shared fixtures and fakes for the storefront tests."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

from haatbazar.core.exceptions import BackendAPIError
from haatbazar.crud.cart_crud import InMemoryCartRepository
from haatbazar.crud.session_crud import InMemorySessionRepository
from haatbazar.schemas.product_schema import ProductResponse


def make_product(product_id: str, price: float, seller: Any = "S1", **extra) -> ProductResponse:
    data = {
        "_id": product_id,
        "name": extra.pop("name", f"Product {product_id}"),
        "image": f"https://img.example/{product_id}.jpg",
        "unit": "kg",
        "price_per_unit": price,
        "seller_id": seller,
    }
    data.update(extra)
    return ProductResponse.model_validate(data)


@dataclass
class FakeBackend:
    """In-memory stand-in for BackendClient."""

    products: dict[str, dict] = field(default_factory=dict)
    fail_order_for_sellers: set = field(default_factory=set)
    fail_transactions: bool = False
    orders: list[dict] = field(default_factory=list)
    transactions: list[dict] = field(default_factory=list)
    calls: list[tuple[str, Any]] = field(default_factory=list)
    login_response: dict | None = None
    buyer_orders: list[dict] = field(default_factory=list)
    reviews: list[dict] = field(default_factory=list)
    complaints: list[dict] = field(default_factory=list)

    async def get_products(self):
        self.calls.append(("get_products", None))
        return list(self.products.values())

    async def get_product(self, product_id):
        self.calls.append(("get_product", product_id))
        if product_id not in self.products:
            raise BackendAPIError("Product not found", status_code=404)
        return self.products[product_id]

    async def create_order(self, order_data):
        self.calls.append(("create_order", order_data))
        if order_data.get("seller_id") in self.fail_order_for_sellers:
            raise BackendAPIError("Seller is not accepting orders", status_code=400)
        order = dict(order_data, _id=f"ORD{len(self.orders) + 1}")
        self.orders.append(order)
        return order

    async def update_order(self, order_id, data):
        self.calls.append(("update_order", (order_id, data)))
        return {"_id": order_id, **data}

    async def create_transaction(self, transaction_data):
        self.calls.append(("create_transaction", transaction_data))
        if self.fail_transactions:
            raise BackendAPIError("Payment failed", status_code=500)
        self.transactions.append(transaction_data)
        return {"_id": f"TX{len(self.transactions)}", **transaction_data}

    async def login(self, data):
        self.calls.append(("login", data))
        if self.login_response is None:
            raise BackendAPIError("Invalid email or password", status_code=401)
        return self.login_response

    async def register(self, data):
        self.calls.append(("register", data))
        return {"_id": "U-new"}

    async def verify_phone(self, data):
        self.calls.append(("verify_phone", data))
        return {}

    async def reset_password(self, data):
        self.calls.append(("reset_password", data))
        return {}

    async def update_buyer(self, buyer_id, data):
        self.calls.append(("update_buyer", (buyer_id, data)))
        return {"_id": buyer_id, **data}

    async def get_buyer_orders(self, buyer_id):
        return self.buyer_orders

    async def get_buyer_reviews(self, buyer_id):
        return self.reviews

    async def update_review(self, review_id, data):
        self.calls.append(("update_review", (review_id, data)))
        return {"_id": review_id, **data}

    async def delete_review(self, review_id):
        self.calls.append(("delete_review", review_id))

    async def get_buyer_complaints(self, buyer_id):
        return self.complaints

    async def create_complaint(self, data):
        self.calls.append(("create_complaint", data))
        return {"_id": "C1", **data}

    async def get_sellers(self):
        return [{"_id": "S1", "name": "Rahim Farms"}]

    async def aclose(self):
        pass


@pytest.fixture
def cart_store() -> dict[str, str]:
    return {}


@pytest.fixture
def cart_repository(cart_store) -> InMemoryCartRepository:
    return InMemoryCartRepository("browser-1", store=cart_store)


@pytest.fixture
def session_repository() -> InMemorySessionRepository:
    return InMemorySessionRepository("browser-1", store={})


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()
