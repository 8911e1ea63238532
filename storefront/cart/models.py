"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List

from storefront.catalog.models import Product, ProductId


@dataclass(frozen=True)
class CartEntry:
    """Membership record of one product in the cart."""
    product: Product

    @property
    def product_id(self) -> ProductId:
        return self.product.id

    @property
    def price(self) -> Decimal:
        return self.product.price

    def to_dict(self) -> dict:
        """Convert to the persisted snapshot form."""
        return self.product.to_snapshot()

    @classmethod
    def from_dict(cls, data: dict) -> "CartEntry":
        """Rebuild from a snapshot; only "id" and "price" are required."""
        if not isinstance(data, dict):
            raise TypeError(f"Cart entry must be an object, got {type(data).__name__}")
        return cls(product=Product.model_validate(data))


@dataclass
class Cart:
    """
    Set of cart entries keyed by product id.

    Insertion order is kept so the cart lists products in the order they
    were added. A product id never appears twice.
    """
    entries: Dict[ProductId, CartEntry] = field(default_factory=dict)

    def __contains__(self, product_id: ProductId) -> bool:
        return product_id in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def products(self) -> List[Product]:
        return [entry.product for entry in self.entries.values()]

    @property
    def total(self) -> Decimal:
        """Sum of entry prices; Decimal("0") for an empty cart."""
        return sum((entry.price for entry in self.entries.values()), Decimal("0"))

    def add(self, product: Product) -> bool:
        """Add product if absent. Returns True if the cart changed."""
        if product.id in self.entries:
            return False
        self.entries[product.id] = CartEntry(product=product)
        return True

    def remove(self, product_id: ProductId) -> bool:
        """Remove product if present. Returns True if the cart changed."""
        return self.entries.pop(product_id, None) is not None

    def to_payload(self) -> List[dict]:
        """Convert to the JSON array stored under the cart key."""
        return [entry.to_dict() for entry in self.entries.values()]

    @classmethod
    def from_payload(cls, payload) -> "Cart":
        """
        Create from a stored JSON array.

        Raises TypeError/ValueError when the payload is not an array of
        product snapshots. Repeated ids keep the first occurrence.
        """
        if not isinstance(payload, list):
            raise TypeError(f"Cart payload must be a list, got {type(payload).__name__}")
        cart = cls()
        for item in payload:
            entry = CartEntry.from_dict(item)
            cart.entries.setdefault(entry.product_id, entry)
        return cart
