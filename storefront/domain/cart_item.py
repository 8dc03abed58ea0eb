"""Cart line item snapshot."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from storefront.core.exceptions import ValidationException


@dataclass
class CartItem:
    """Single item in cart.

    Price and display fields are a snapshot taken when the product was added;
    they are never re-fetched.
    """

    product_id: str
    quantity: int
    price: int | float
    name: str = ""
    image_url: str = ""
    material: str = ""

    def __post_init__(self) -> None:
        if not self.product_id:
            raise ValidationException("product_id is required")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValidationException(f"quantity must be an integer, got {self.quantity!r}")
        if self.quantity < 1:
            raise ValidationException(f"quantity must be at least 1, got {self.quantity}")
        if isinstance(self.price, bool) or not isinstance(self.price, (int, float)):
            raise ValidationException(f"price must be a number, got {self.price!r}")
        if not math.isfinite(self.price):
            raise ValidationException(f"price must be a finite number, got {self.price}")
        if self.price < 0:
            raise ValidationException(f"price must not be negative, got {self.price}")

    @property
    def line_total(self) -> int | float:
        return self.price * self.quantity

    def to_dict(self) -> dict[str, Any]:
        return {
            "product_id": self.product_id,
            "quantity": self.quantity,
            "price": self.price,
            "name": self.name,
            "image_url": self.image_url,
            "material": self.material,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CartItem:
        try:
            return cls(
                product_id=str(data["product_id"]),
                quantity=data["quantity"],
                price=data["price"],
                name=str(data.get("name", "")),
                image_url=str(data.get("image_url", "")),
                material=str(data.get("material", "")),
            )
        except KeyError as exc:
            raise ValidationException(f"missing cart item field: {exc.args[0]}") from exc
