"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Iterator, Optional

from rocketcart.models import Product
from rocketcart.services.money import multiply, round_money, to_decimal, to_float


@dataclass(frozen=True)
class CartItem:
    """One product line in the cart, quantity included."""
    id: int
    name: str
    price: Decimal
    image_url: str
    amount: int

    def __post_init__(self):
        # Frozen dataclass, so normalize through object.__setattr__
        object.__setattr__(self, "price", to_decimal(self.price))
        if not self.price.is_finite():
            raise ValueError(f"price must be finite, got {self.price}")
        if self.amount < 1:
            raise ValueError(f"amount must be >= 1, got {self.amount}")

    @property
    def total_price(self) -> Decimal:
        """Price for all units of this line."""
        return round_money(multiply(self.price, self.amount))

    def with_amount(self, amount: int) -> "CartItem":
        return replace(self, amount=amount)

    def to_dict(self) -> dict:
        """Convert to the persisted snapshot shape."""
        return {
            "id": self.id,
            "name": self.name,
            "price": to_float(self.price),
            "imageUrl": self.image_url,
            "amount": self.amount,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartItem":
        """Create from a persisted snapshot entry."""
        return cls(
            id=int(data["id"]),
            name=data.get("name", data.get("title", "")),
            price=to_decimal(data.get("price")),
            image_url=data.get("imageUrl", data.get("image", "")),
            amount=int(data["amount"]),
        )

    @classmethod
    def from_product(cls, product: Product, amount: int = 1, product_id: Optional[int] = None) -> "CartItem":
        """Build a line from catalog data, keyed by product_id when given."""
        return cls(
            id=product.id if product_id is None else product_id,
            name=product.name,
            price=product.price,
            image_url=product.image_url,
            amount=amount,
        )


@dataclass(frozen=True)
class Cart:
    """
    Ordered, id-unique sequence of cart items.

    Carts are immutable: every mutation helper returns a new Cart and
    leaves the original untouched, so a Cart handed to a caller is a
    stable snapshot.
    """
    items: tuple[CartItem, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))
        ids = [item.id for item in self.items]
        if len(ids) != len(set(ids)):
            raise ValueError("cart contains duplicate product ids")

    def __iter__(self) -> Iterator[CartItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __contains__(self, product_id: object) -> bool:
        return self.find(product_id) is not None

    def find(self, product_id: object) -> Optional[CartItem]:
        """Get the item for a product id, or None."""
        return next((item for item in self.items if item.id == product_id), None)

    def with_item(self, item: CartItem) -> "Cart":
        """Append a new product line."""
        return Cart(self.items + (item,))

    def with_amount(self, product_id: int, amount: int) -> "Cart":
        """Replace one item's amount, keeping every other item and the order."""
        return Cart(tuple(
            item.with_amount(amount) if item.id == product_id else item
            for item in self.items
        ))

    def without(self, product_id: int) -> "Cart":
        return Cart(tuple(item for item in self.items if item.id != product_id))

    @property
    def size(self) -> int:
        """Number of distinct products."""
        return len(self.items)

    @property
    def total_items(self) -> int:
        """Total number of units in cart."""
        return sum(item.amount for item in self.items)

    @property
    def subtotal(self) -> Decimal:
        return round_money(sum((item.total_price for item in self.items), Decimal("0")))

    @property
    def amounts(self) -> dict[int, int]:
        """Product id -> amount."""
        return {item.id: item.amount for item in self.items}

    def to_list(self) -> list[dict]:
        """Convert to the persisted snapshot shape."""
        return [item.to_dict() for item in self.items]

    @classmethod
    def from_list(cls, data: list) -> "Cart":
        """Create from a persisted snapshot."""
        return cls(tuple(CartItem.from_dict(entry) for entry in data))


EMPTY_CART = Cart()
