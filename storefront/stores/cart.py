"""Shopping cart store with write-through persistence."""
from __future__ import annotations

from dataclasses import replace

from logging_config import logger
from storefront.core.constants import CART_STORAGE_KEY
from storefront.core.exceptions import ValidationException
from storefront.core.persistence import PersistedRecord
from storefront.core.storage import KeyValueStorage
from storefront.domain.cart_item import CartItem
from storefront.domain.schemas import CartItemRecord, CartState


class CartStore:
    """Ordered cart of one browsing session.

    Holds at most one line per ``product_id`` and never a line with a
    quantity below 1. Every mutation is written to storage before the call
    returns; storage errors propagate to the caller.
    """

    def __init__(self, storage: KeyValueStorage, key: str = CART_STORAGE_KEY):
        self._record = PersistedRecord(storage, key, CartState)
        self._items: list[CartItem] = []
        self.rehydrate()

    def rehydrate(self) -> None:
        """Replace in-memory state with what storage holds."""
        state = self._record.load()
        self._items = [CartItem(**record.model_dump()) for record in state.items]
        logger.debug("Rehydrated cart %s with %s items", self._record.key, len(self._items))

    def _persist(self) -> None:
        state = CartState(items=[CartItemRecord(**item.to_dict()) for item in self._items])
        self._record.save(state)

    def _find(self, product_id: str) -> CartItem | None:
        for item in self._items:
            if item.product_id == product_id:
                return item
        return None

    @property
    def items(self) -> list[CartItem]:
        return [replace(item) for item in self._items]

    def get_item(self, product_id: str) -> CartItem | None:
        item = self._find(product_id)
        return replace(item) if item else None

    def add_item(self, item: CartItem) -> CartItem:
        """Add item or increase quantity of the existing line.

        An existing line keeps its own price and display fields; only the
        quantity of the incoming item is used.
        """
        existing = self._find(item.product_id)
        if existing is not None:
            existing.quantity += item.quantity
            logger.info("Updated cart item %s qty=%s", item.product_id, existing.quantity)
            result = existing
        else:
            result = replace(item)
            self._items.append(result)
            logger.info("Added item %s to cart qty=%s", item.product_id, item.quantity)
        self._persist()
        return replace(result)

    def remove_item(self, product_id: str) -> bool:
        """Remove item from cart. Returns True if found and removed."""
        existing = self._find(product_id)
        if existing is None:
            return False
        self._items.remove(existing)
        logger.info("Removed item %s from cart", product_id)
        self._persist()
        return True

    def update_quantity(self, product_id: str, quantity: int) -> bool:
        """Set exact quantity; zero or less removes the line. Returns True if found."""
        existing = self._find(product_id)
        if existing is None:
            return False
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise ValidationException(f"quantity must be an integer, got {quantity!r}")
        if quantity <= 0:
            return self.remove_item(product_id)
        existing.quantity = quantity
        logger.info("Set cart item %s qty=%s", product_id, existing.quantity)
        self._persist()
        return True

    def clear_cart(self) -> None:
        self._items = []
        self._persist()
        logger.info("Cleared cart %s", self._record.key)

    def get_total_items(self) -> int:
        return sum(item.quantity for item in self._items)

    def get_total_price(self) -> int | float:
        return sum(item.price * item.quantity for item in self._items)

    def is_empty(self) -> bool:
        return len(self._items) == 0

    def to_dict(self) -> dict:
        return {
            "items": [item.to_dict() for item in self._items],
            "total_items": self.get_total_items(),
            "total_price": self.get_total_price(),
        }
