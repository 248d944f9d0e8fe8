"""
Inventory API Client

Fetches stock levels and product data from the inventory API:
- GET {base_url}/stock/{product_id}    -> {"id": 1, "amount": 3}
- GET {base_url}/products/{product_id} -> {"id": 1, "title": "...", "price": 179.9, "image": "..."}
"""

from typing import Optional, Protocol

import httpx
from pydantic import BaseModel, ValidationError

from rocketcart import config
from rocketcart.errors import InventoryUnavailableError
from rocketcart.logging import get_logger
from rocketcart.models import Product, Stock

logger = get_logger(__name__)


class StockService(Protocol):
    async def get_stock(self, product_id: int) -> Stock:
        ...


class ProductCatalog(Protocol):
    async def get_product(self, product_id: int) -> Product:
        ...


class InventoryClient:
    """
    HTTP client for the inventory API. Serves as both StockService and
    ProductCatalog.

    Usage:
        async with InventoryClient() as inventory:
            stock = await inventory.get_stock(1)
            product = await inventory.get_product(1)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = (base_url or config.INVENTORY_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else config.INVENTORY_TIMEOUT
        self._http_client = http_client

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)
        return self._http_client

    async def aclose(self) -> None:
        if self._http_client is not None and not self._http_client.is_closed:
            await self._http_client.aclose()

    async def __aenter__(self) -> "InventoryClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _get(self, path: str, model: type[BaseModel]):
        client = await self._get_http_client()

        try:
            response = await client.get(path)
        except httpx.HTTPError as e:
            logger.warning(f"Inventory request {path} failed: {e}")
            raise InventoryUnavailableError(f"Inventory request {path} failed: {e}") from e

        if response.status_code != 200:
            logger.warning(f"Inventory request {path} returned {response.status_code}")
            raise InventoryUnavailableError(
                f"Inventory request {path} returned {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.warning(f"Inventory response for {path} is invalid: {e}")
            raise InventoryUnavailableError(f"Invalid inventory response for {path}") from e

    async def get_stock(self, product_id: int) -> Stock:
        """Get available quantity for a product."""
        return await self._get(f"/stock/{product_id}", Stock)

    async def get_product(self, product_id: int) -> Product:
        """Get descriptive data for a product."""
        return await self._get(f"/products/{product_id}", Product)
