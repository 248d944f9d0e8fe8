"""Cart package: models, storage, results and the store."""
from .models import EMPTY_CART, Cart, CartItem
from .results import CartOutcome, CartResult, CartStatus
from .service import CartStore, create_cart_store
from .storage import CartStorage, MemoryCartStorage, RedisCartStorage

__all__ = [
    "EMPTY_CART",
    "Cart",
    "CartItem",
    "CartOutcome",
    "CartResult",
    "CartStatus",
    "CartStore",
    "create_cart_store",
    "CartStorage",
    "MemoryCartStorage",
    "RedisCartStorage",
]
