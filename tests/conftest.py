"""Pytest configuration and fixtures"""
import asyncio
import os
from decimal import Decimal

import pytest

# Set test environment variables before rocketcart.config is imported
os.environ.setdefault("INVENTORY_API_URL", "http://inventory.test")
os.environ.setdefault("CART_LANGUAGE", "pt")
os.environ["UPSTASH_REDIS_REST_URL"] = ""
os.environ["UPSTASH_REDIS_REST_TOKEN"] = ""
os.environ["TELEGRAM_TOKEN"] = ""
os.environ["TELEGRAM_CHAT_ID"] = ""

from rocketcart.cart import CartStore, MemoryCartStorage  # noqa: E402
from rocketcart.errors import InventoryUnavailableError  # noqa: E402
from rocketcart.models import Product, Stock  # noqa: E402


class FakeInventory:
    """In-memory stock + catalog with call recording."""

    def __init__(self, stock=None, products=None):
        self.stock = dict(stock or {})
        self.products = dict(products or {})
        self.stock_calls = []
        self.product_calls = []
        self.fail_stock = False
        self.fail_products = False

    async def get_stock(self, product_id):
        self.stock_calls.append(product_id)
        # Yield like a real request would
        await asyncio.sleep(0)
        if self.fail_stock:
            raise InventoryUnavailableError("stock down")
        return Stock(product_id=product_id, amount=self.stock.get(product_id, 0))

    async def get_product(self, product_id):
        self.product_calls.append(product_id)
        if self.fail_products or product_id not in self.products:
            raise InventoryUnavailableError("catalog down", status_code=404)
        return self.products[product_id]


class RecordingSink:
    """Notification sink that keeps (message, severity) pairs."""

    def __init__(self):
        self.messages = []

    def notify(self, message, severity):
        self.messages.append((message, severity))


class FailingStorage(MemoryCartStorage):
    """Memory storage whose save() can be switched to raise."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fail_save = False

    async def save(self, items):
        if self.fail_save:
            raise RuntimeError("disk full")
        await super().save(items)


@pytest.fixture
def sample_products():
    """Catalog products"""
    return {
        1: Product(
            id=1,
            name="Tênis de Caminhada Leve Confortável",
            price=Decimal("179.90"),
            image_url="https://example.test/tenis1.jpg",
        ),
        2: Product(
            id=2,
            name="Tênis VR Caminhada Confortável Detalhes Couro Masculino",
            price=Decimal("139.90"),
            image_url="https://example.test/tenis2.jpg",
        ),
        3: Product(
            id=3,
            name="Tênis Adidas Duramo Lite 2.0",
            price=Decimal("219.90"),
            image_url="https://example.test/tenis3.jpg",
        ),
    }


@pytest.fixture
def inventory(sample_products):
    return FakeInventory(stock={1: 5, 2: 2, 3: 10}, products=sample_products)


@pytest.fixture
def storage():
    return FailingStorage()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def store(inventory, storage, sink):
    """Empty cart store wired to fakes"""
    return CartStore(inventory, inventory, storage, sink, language="pt", notify_success=False)
