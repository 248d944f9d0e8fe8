"""Tests for the inventory API client"""
from decimal import Decimal

import httpx
import pytest

from rocketcart.errors import InventoryUnavailableError
from rocketcart.services.inventory import InventoryClient

STOCK = {1: {"id": 1, "amount": 3}, 2: {"id": 2, "amount": 0}}
PRODUCTS = {
    1: {
        "id": 1,
        "title": "Tênis de Caminhada Leve Confortável",
        "price": 179.9,
        "image": "https://example.test/tenis1.jpg",
    },
}


def inventory_handler(request: httpx.Request) -> httpx.Response:
    _, resource, product_id = request.url.path.split("/")
    table = STOCK if resource == "stock" else PRODUCTS
    data = table.get(int(product_id))
    if data is None:
        return httpx.Response(404, json={})
    return httpx.Response(200, json=data)


def make_client(handler=inventory_handler) -> InventoryClient:
    http_client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler),
        base_url="http://inventory.test",
    )
    return InventoryClient(base_url="http://inventory.test", http_client=http_client)


@pytest.mark.asyncio
async def test_get_stock():
    async with make_client() as client:
        stock = await client.get_stock(1)

    assert stock.product_id == 1
    assert stock.amount == 3


@pytest.mark.asyncio
async def test_get_stock_zero():
    async with make_client() as client:
        stock = await client.get_stock(2)

    assert stock.amount == 0


@pytest.mark.asyncio
async def test_get_product_maps_catalog_fields():
    async with make_client() as client:
        product = await client.get_product(1)

    assert product.name == "Tênis de Caminhada Leve Confortável"
    assert product.price == Decimal("179.9")
    assert product.image_url == "https://example.test/tenis1.jpg"


@pytest.mark.asyncio
async def test_not_found_raises():
    async with make_client() as client:
        with pytest.raises(InventoryUnavailableError) as exc_info:
            await client.get_product(42)

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_transport_error_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with make_client(handler) as client:
        with pytest.raises(InventoryUnavailableError):
            await client.get_stock(1)


@pytest.mark.asyncio
async def test_invalid_payload_raises():
    def handler(request):
        return httpx.Response(200, json={"id": 1, "amount": -4})

    async with make_client(handler) as client:
        with pytest.raises(InventoryUnavailableError):
            await client.get_stock(1)


@pytest.mark.asyncio
async def test_non_json_payload_raises():
    def handler(request):
        return httpx.Response(200, text="<html>maintenance</html>")

    async with make_client(handler) as client:
        with pytest.raises(InventoryUnavailableError):
            await client.get_stock(1)


def test_base_url_trailing_slash_stripped():
    client = InventoryClient(base_url="http://inventory.test/")

    assert client.base_url == "http://inventory.test"
