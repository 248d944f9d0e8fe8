"""Operation results returned by CartStore."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from rocketcart import errors
from rocketcart.cart.models import Cart
from rocketcart.services.notifications import Severity


class CartStatus(str, Enum):
    OK = "ok"
    REJECTED = "rejected"  # Expected refusal, cart untouched
    FAILED = "failed"  # A collaborator raised, cart untouched


class CartOutcome(str, Enum):
    ADDED = "added"
    INCREMENTED = "incremented"
    REMOVED = "removed"
    UPDATED = "updated"
    OUT_OF_STOCK = "out_of_stock"
    PRODUCT_NOT_FOUND = "product_not_found"
    INVALID_AMOUNT = "invalid_amount"
    ADDITION_FAILED = "addition_failed"
    REMOVAL_FAILED = "removal_failed"
    UPDATE_FAILED = "update_failed"

    @property
    def status(self) -> CartStatus:
        if self in _SUCCESSES:
            return CartStatus.OK
        if self in _FAILURES:
            return CartStatus.FAILED
        return CartStatus.REJECTED

    @property
    def message_key(self) -> str:
        return _MESSAGE_KEYS[self]

    @property
    def severity(self) -> Severity:
        return _SEVERITIES[self]


_SUCCESSES = {
    CartOutcome.ADDED,
    CartOutcome.INCREMENTED,
    CartOutcome.REMOVED,
    CartOutcome.UPDATED,
}

_FAILURES = {
    CartOutcome.ADDITION_FAILED,
    CartOutcome.REMOVAL_FAILED,
    CartOutcome.UPDATE_FAILED,
}

_MESSAGE_KEYS = {
    CartOutcome.ADDED: errors.MSG_PRODUCT_ADDED,
    CartOutcome.INCREMENTED: errors.MSG_PRODUCT_INCREMENTED,
    CartOutcome.REMOVED: errors.MSG_PRODUCT_REMOVED,
    CartOutcome.UPDATED: errors.MSG_AMOUNT_UPDATED,
    CartOutcome.OUT_OF_STOCK: errors.MSG_OUT_OF_STOCK,
    CartOutcome.PRODUCT_NOT_FOUND: errors.MSG_PRODUCT_NOT_FOUND,
    CartOutcome.INVALID_AMOUNT: errors.MSG_INVALID_AMOUNT,
    CartOutcome.ADDITION_FAILED: errors.MSG_ADDITION_FAILED,
    CartOutcome.REMOVAL_FAILED: errors.MSG_REMOVAL_FAILED,
    CartOutcome.UPDATE_FAILED: errors.MSG_UPDATE_FAILED,
}

_SEVERITIES = {
    CartOutcome.ADDED: Severity.SUCCESS,
    CartOutcome.INCREMENTED: Severity.SUCCESS,
    CartOutcome.REMOVED: Severity.SUCCESS,
    CartOutcome.UPDATED: Severity.SUCCESS,
    CartOutcome.OUT_OF_STOCK: Severity.WARNING,
    CartOutcome.PRODUCT_NOT_FOUND: Severity.ERROR,
    CartOutcome.INVALID_AMOUNT: Severity.ERROR,
    CartOutcome.ADDITION_FAILED: Severity.ERROR,
    CartOutcome.REMOVAL_FAILED: Severity.ERROR,
    CartOutcome.UPDATE_FAILED: Severity.ERROR,
}

_EXCEPTIONS = {
    CartOutcome.OUT_OF_STOCK: errors.OutOfStockError,
    CartOutcome.PRODUCT_NOT_FOUND: errors.ProductNotFoundError,
    CartOutcome.INVALID_AMOUNT: errors.InvalidAmountError,
    CartOutcome.ADDITION_FAILED: errors.AdditionFailedError,
    CartOutcome.REMOVAL_FAILED: errors.RemovalFailedError,
    CartOutcome.UPDATE_FAILED: errors.UpdateFailedError,
}


@dataclass(frozen=True)
class CartResult:
    """How a cart operation ended, and the cart after it."""
    outcome: CartOutcome
    cart: Cart
    product_id: int
    message: str = ""
    error: Optional[BaseException] = None

    @property
    def status(self) -> CartStatus:
        return self.outcome.status

    @property
    def ok(self) -> bool:
        return self.status is CartStatus.OK

    @property
    def rejected(self) -> bool:
        return self.status is CartStatus.REJECTED

    @property
    def failed(self) -> bool:
        return self.status is CartStatus.FAILED

    def raise_for_status(self) -> "CartResult":
        """Raise the matching CartOperationError unless the operation succeeded."""
        if self.ok:
            return self
        exc_class = _EXCEPTIONS[self.outcome]
        raise exc_class(self.message or self.outcome.value, product_id=self.product_id) from self.error
