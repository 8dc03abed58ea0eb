"""Catalog listing state: filters are persisted, loaded products are not."""
from __future__ import annotations

from typing import Any, Iterable

from logging_config import logger
from storefront.core.constants import DEFAULT_PRICE_RANGE, PRODUCTS_STORAGE_KEY
from storefront.core.exceptions import ValidationException
from storefront.core.persistence import PersistedRecord
from storefront.core.storage import KeyValueStorage
from storefront.domain.schemas import ProductFiltersState


class ProductsStore:
    def __init__(self, storage: KeyValueStorage, key: str = PRODUCTS_STORAGE_KEY):
        self._record = PersistedRecord(storage, key, ProductFiltersState)
        self._filters = self._record.load()
        self.current_page = 1
        self.all_loaded_products: list[dict[str, Any]] = []
        self.has_more = True

    @property
    def selected_materials(self) -> list[str]:
        return list(self._filters.selected_materials)

    @property
    def price_range(self) -> tuple:
        return tuple(self._filters.price_range)

    @property
    def sort_by(self) -> str:
        return self._filters.sort_by

    def update_filters(self, **changes: Any) -> None:
        """Validate all changes together, then persist them in one write."""
        data = self._filters.model_dump()
        data.update(changes)
        try:
            filters = ProductFiltersState.model_validate(data)
        except ValueError as exc:
            raise ValidationException(f"invalid product filters: {exc}") from exc
        self._filters = filters
        self._record.save(self._filters)

    def set_selected_materials(self, materials: Iterable[str]) -> None:
        self.update_filters(selected_materials=list(materials))

    def toggle_material(self, material_id: str) -> None:
        materials = self.selected_materials
        if material_id in materials:
            materials.remove(material_id)
        else:
            materials.append(material_id)
        self.update_filters(selected_materials=materials)

    def set_price_range(self, price_range: tuple) -> None:
        self.update_filters(price_range=tuple(price_range))

    def set_sort_by(self, sort_by: str) -> None:
        self.update_filters(sort_by=sort_by)

    def set_current_page(self, page: int) -> None:
        if isinstance(page, bool) or not isinstance(page, int):
            raise ValidationException(f"page must be an integer, got {page!r}")
        if page < 1:
            raise ValidationException(f"page must be at least 1, got {page}")
        self.current_page = page

    def set_has_more(self, has_more: bool) -> None:
        self.has_more = bool(has_more)

    def set_all_loaded_products(self, products: Iterable[dict[str, Any]]) -> None:
        self.all_loaded_products = list(products)

    def append_products(self, products: Iterable[dict[str, Any]]) -> int:
        """Append products not loaded yet (ids compared as strings). Returns count added."""
        existing_ids = {str(p.get("id")) for p in self.all_loaded_products}
        added = 0
        for product in products:
            product_id = str(product.get("id"))
            if product_id in existing_ids:
                continue
            existing_ids.add(product_id)
            self.all_loaded_products.append(product)
            added += 1
        return added

    def clear_filters(self) -> None:
        self.update_filters(selected_materials=[], price_range=DEFAULT_PRICE_RANGE)

    def reset_state(self) -> None:
        self._filters = ProductFiltersState()
        self._record.save(self._filters)
        self.current_page = 1
        self.all_loaded_products = []
        self.has_more = True
        logger.info("Reset products listing state")

    def filters_dict(self) -> dict[str, Any]:
        return {
            "selected_materials": self.selected_materials,
            "price_range": list(self.price_range),
            "sort_by": self.sort_by,
        }
