"""Cart store: the single owner of the session cart."""
import asyncio
from typing import Optional

from rocketcart import config
from rocketcart.cart.models import EMPTY_CART, Cart, CartItem
from rocketcart.cart.results import CartOutcome, CartResult
from rocketcart.cart.storage import CartStorage, MemoryCartStorage, RedisCartStorage
from rocketcart.i18n import get_text
from rocketcart.logging import get_logger, loggable_id
from rocketcart.services.inventory import InventoryClient, ProductCatalog, StockService
from rocketcart.services.notifications import (
    LoggingNotificationSink,
    NotificationSink,
    TelegramNotificationSink,
)

logger = get_logger(__name__)


class CartStore:
    """
    Owns the cart for one session and keeps it in sync with storage.

    Every mutation checks current stock, computes a new Cart, writes it to
    storage and only then swaps the in-memory cart. Mutations are
    serialized on one lock so a validate-then-commit cycle never
    interleaves with another one. Operations never raise: they return a
    CartResult and report rejections and failures to the notification sink.

    Usage:
        store = CartStore(inventory, inventory, RedisCartStorage(), LoggingNotificationSink())
        await store.load()
        result = await store.add_product(1)
        if result.ok:
            print(result.cart.total_items)
    """

    def __init__(
        self,
        stock: StockService,
        catalog: ProductCatalog,
        storage: CartStorage,
        notifications: NotificationSink,
        language: Optional[str] = None,
        notify_success: Optional[bool] = None,
    ):
        self._stock = stock
        self._catalog = catalog
        self._storage = storage
        self._notifications = notifications
        self.language = language or config.CART_LANGUAGE
        self.notify_success = config.CART_NOTIFY_SUCCESS if notify_success is None else notify_success
        self._cart: Cart = EMPTY_CART
        self._lock = asyncio.Lock()

    @property
    def storage(self) -> CartStorage:
        return self._storage

    @property
    def notifications(self) -> NotificationSink:
        return self._notifications

    def get_cart(self) -> Cart:
        """Current cart snapshot (immutable)."""
        return self._cart

    async def load(self) -> Cart:
        """
        Read the saved cart from storage.

        A missing or malformed snapshot starts an empty cart.
        """
        async with self._lock:
            try:
                data = await self._storage.load()
            except Exception as e:
                logger.error(f"Failed to load cart, starting empty: {e}", exc_info=True)
                data = None

            cart = EMPTY_CART
            if data:
                try:
                    cart = Cart.from_list(data)
                except (KeyError, TypeError, ValueError, AttributeError) as e:
                    logger.warning(f"Saved cart is malformed, starting empty: {e}")

            self._cart = cart
            logger.info(f"Cart loaded with {cart.size} products")
            return cart

    async def add_product(self, product_id: int) -> CartResult:
        """Add one unit of a product, fetching its data on first addition."""
        async with self._lock:
            try:
                stock = await self._stock.get_stock(product_id)
            except Exception as e:
                return self._fail(CartOutcome.ADDITION_FAILED, product_id, e)

            existing = self._cart.find(product_id)
            amount = existing.amount + 1 if existing else 1

            if amount > stock.amount:
                return self._reject(CartOutcome.OUT_OF_STOCK, product_id)

            if existing:
                new_cart = self._cart.with_amount(product_id, amount)
                outcome = CartOutcome.INCREMENTED
            else:
                try:
                    product = await self._catalog.get_product(product_id)
                except Exception as e:
                    return self._fail(CartOutcome.ADDITION_FAILED, product_id, e)
                try:
                    item = CartItem.from_product(product, amount=1, product_id=product_id)
                    new_cart = self._cart.with_item(item)
                except ValueError as e:
                    return self._fail(CartOutcome.ADDITION_FAILED, product_id, e)
                outcome = CartOutcome.ADDED

            return await self._commit(new_cart, outcome, product_id, CartOutcome.ADDITION_FAILED)

    async def remove_product(self, product_id: int) -> CartResult:
        """Remove a product line entirely, whatever its amount."""
        async with self._lock:
            if product_id not in self._cart:
                return self._reject(CartOutcome.PRODUCT_NOT_FOUND, product_id)

            new_cart = self._cart.without(product_id)
            return await self._commit(new_cart, CartOutcome.REMOVED, product_id, CartOutcome.REMOVAL_FAILED)

    async def update_product_amount(self, product_id: int, amount: int) -> CartResult:
        """Set a product's amount exactly, within stock. Does not delete."""
        async with self._lock:
            try:
                stock = await self._stock.get_stock(product_id)
            except Exception as e:
                return self._fail(CartOutcome.UPDATE_FAILED, product_id, e)

            if amount < 1:
                return self._reject(CartOutcome.INVALID_AMOUNT, product_id)

            if product_id not in self._cart:
                return self._reject(CartOutcome.PRODUCT_NOT_FOUND, product_id)

            if amount > stock.amount:
                return self._reject(CartOutcome.OUT_OF_STOCK, product_id)

            new_cart = self._cart.with_amount(product_id, amount)
            return await self._commit(new_cart, CartOutcome.UPDATED, product_id, CartOutcome.UPDATE_FAILED)

    async def _commit(
        self,
        new_cart: Cart,
        outcome: CartOutcome,
        product_id: int,
        failure: CartOutcome,
    ) -> CartResult:
        """Write to storage, then memory. On a storage error neither changes."""
        previous = self._cart.find(product_id)

        try:
            await self._storage.save(new_cart.to_list())
        except Exception as e:
            return self._fail(failure, product_id, e)

        self._cart = new_cart

        item = new_cart.find(product_id) or previous
        message = get_text(
            outcome.message_key,
            self.language,
            name=item.name if item else product_id,
            amount=item.amount if item else 0,
        )
        logger.info(f"Cart {outcome.value}: product {loggable_id(product_id)}")

        if self.notify_success:
            self._notify(message, outcome)

        return CartResult(outcome=outcome, cart=new_cart, product_id=product_id, message=message)

    def _reject(self, outcome: CartOutcome, product_id: int) -> CartResult:
        message = get_text(outcome.message_key, self.language)
        logger.info(f"Cart operation rejected ({outcome.value}): product {loggable_id(product_id)}")
        self._notify(message, outcome)
        return CartResult(outcome=outcome, cart=self._cart, product_id=product_id, message=message)

    def _fail(self, outcome: CartOutcome, product_id: int, error: Exception) -> CartResult:
        message = get_text(outcome.message_key, self.language)
        logger.error(
            f"Cart operation failed ({outcome.value}): product {loggable_id(product_id)}: {error}",
            exc_info=error,
        )
        self._notify(message, outcome)
        return CartResult(outcome=outcome, cart=self._cart, product_id=product_id, message=message, error=error)

    def _notify(self, message: str, outcome: CartOutcome) -> None:
        try:
            self._notifications.notify(message, outcome.severity)
        except Exception:
            logger.exception("Notification sink raised, message dropped")


async def create_cart_store(
    inventory: Optional[InventoryClient] = None,
    storage: Optional[CartStorage] = None,
    notifications: Optional[NotificationSink] = None,
    **kwargs,
) -> CartStore:
    """
    Build a CartStore from configuration and load the saved cart.

    Redis storage is used when Upstash credentials are set, in-memory
    storage otherwise. Telegram notifications are used when a bot token
    and chat id are set, the log otherwise.
    """
    inventory = inventory or InventoryClient()

    if storage is None:
        storage = RedisCartStorage() if config.redis_configured() else MemoryCartStorage()

    if notifications is None:
        notifications = TelegramNotificationSink() if config.telegram_configured() else LoggingNotificationSink()

    store = CartStore(inventory, inventory, storage, notifications, **kwargs)
    await store.load()
    return store
