"""
Cart errors and message keys.

Message keys are centralized here to avoid string duplication; the texts
themselves live in the locale files.
"""

# Notification message keys
MSG_PRODUCT_ADDED = "cart.product_added"
MSG_PRODUCT_INCREMENTED = "cart.product_incremented"
MSG_PRODUCT_REMOVED = "cart.product_removed"
MSG_AMOUNT_UPDATED = "cart.amount_updated"
MSG_OUT_OF_STOCK = "cart.out_of_stock"
MSG_PRODUCT_NOT_FOUND = "cart.product_not_found"
MSG_INVALID_AMOUNT = "cart.invalid_amount"
MSG_ADDITION_FAILED = "cart.addition_failed"
MSG_REMOVAL_FAILED = "cart.removal_failed"
MSG_UPDATE_FAILED = "cart.update_failed"

# Generic errors
ERROR_INVENTORY_UNAVAILABLE = "Inventory service unavailable"
ERROR_STORAGE_UNAVAILABLE = "Cart storage unavailable"


class CartError(Exception):
    """Base class for all rocketcart errors."""


class InventoryUnavailableError(CartError):
    """Stock or product data could not be fetched."""

    def __init__(self, message: str = ERROR_INVENTORY_UNAVAILABLE, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class StorageUnavailableError(CartError):
    """The cart snapshot could not be read or written."""

    def __init__(self, message: str = ERROR_STORAGE_UNAVAILABLE):
        super().__init__(message)


class CartOperationError(CartError):
    """Raised by CartResult.raise_for_status() for unsuccessful operations."""

    def __init__(self, message: str, product_id: int | None = None):
        super().__init__(message)
        self.product_id = product_id


class OutOfStockError(CartOperationError):
    pass


class ProductNotFoundError(CartOperationError):
    pass


class InvalidAmountError(CartOperationError):
    pass


class AdditionFailedError(CartOperationError):
    pass


class RemovalFailedError(CartOperationError):
    pass


class UpdateFailedError(CartOperationError):
    pass
