"""
Pydantic models for persisted store state.

Validation happens when a record is read back from storage, so a
hand-edited or truncated record never reaches the totals arithmetic.
"""
from __future__ import annotations

import math
from typing import Union

from pydantic import BaseModel, Field, field_validator

from storefront.core.constants import (
    DEFAULT_CURRENCY,
    DEFAULT_LANGUAGE,
    DEFAULT_PRICE_RANGE,
    DEFAULT_SORT,
    SORT_OPTIONS,
    Currency,
    Language,
)


class CartItemRecord(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)
    price: Union[int, float]
    name: str = ""
    image_url: str = ""
    material: str = ""

    @field_validator("price")
    @classmethod
    def price_not_negative(cls, v: Union[int, float]) -> Union[int, float]:
        if not math.isfinite(v):
            raise ValueError("price must be a finite number")
        if v < 0:
            raise ValueError("price must not be negative")
        return v


class CartState(BaseModel):
    items: list[CartItemRecord] = Field(default_factory=list)

    @field_validator("items")
    @classmethod
    def product_ids_unique(cls, v: list[CartItemRecord]) -> list[CartItemRecord]:
        seen: set[str] = set()
        for item in v:
            if item.product_id in seen:
                raise ValueError(f"duplicate product_id in cart: {item.product_id}")
            seen.add(item.product_id)
        return v


class PreferencesState(BaseModel):
    language: Language = DEFAULT_LANGUAGE
    currency: Currency = DEFAULT_CURRENCY


class ProductFiltersState(BaseModel):
    selected_materials: list[str] = Field(default_factory=list)
    price_range: tuple[Union[int, float], Union[int, float]] = DEFAULT_PRICE_RANGE
    sort_by: str = DEFAULT_SORT

    @field_validator("price_range")
    @classmethod
    def price_range_ordered(cls, v: tuple) -> tuple:
        low, high = v
        if not (math.isfinite(low) and math.isfinite(high)):
            raise ValueError("price range bounds must be finite numbers")
        if low < 0 or high < 0:
            raise ValueError("price range bounds must not be negative")
        if low > high:
            raise ValueError("price range minimum must not exceed maximum")
        return v

    @field_validator("sort_by")
    @classmethod
    def sort_option_known(cls, v: str) -> str:
        if v not in SORT_OPTIONS:
            raise ValueError(f"unknown sort option: {v}")
        return v
