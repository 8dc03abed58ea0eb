"""JSON API over one session's cart, preferences and catalog filters."""
from __future__ import annotations

import functools
import json
from typing import Any, Awaitable, Callable

from aiohttp import web

from logging_config import logger
from storefront.core.exceptions import StorageException, ValidationException
from storefront.core.pricing import format_price
from storefront.domain.cart_item import CartItem
from storefront.stores.session import SessionRegistry, StorefrontSession

SESSION_HEADER = "X-Session-Id"

Handler = Callable[[web.Request], Awaitable[web.Response]]


def _error(message: str, status: int) -> web.Response:
    return web.json_response({"error": message}, status=status)


def _handle_errors(handler: Handler) -> Handler:
    @functools.wraps(handler)
    async def wrapper(request: web.Request) -> web.Response:
        try:
            return await handler(request)
        except ValidationException as e:
            return _error(e.message, 400)
        except StorageException as e:
            logger.error("API storage error on %s: %s", request.path, e)
            return _error("storage unavailable", 503)

    return wrapper


def _cart_payload(session: StorefrontSession) -> dict[str, Any]:
    payload = session.cart.to_dict()
    payload["formatted_total"] = format_price(payload["total_price"], session.preferences.currency)
    return payload


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a valid JSON number")


def _strict_loads(raw: str) -> Any:
    return json.loads(raw, parse_constant=_reject_constant)


async def _json_body(request: web.Request) -> dict[str, Any]:
    try:
        data = await request.json(loads=_strict_loads)
    except ValueError as exc:
        raise ValidationException("request body must be valid JSON") from exc
    if not isinstance(data, dict):
        raise ValidationException("request body must be a JSON object")
    return data


def build_session_handlers(registry: SessionRegistry) -> dict[str, Handler]:
    def _session(request: web.Request) -> StorefrontSession:
        session_id = request.headers.get(SESSION_HEADER, "").strip()
        if not session_id:
            raise ValidationException(f"{SESSION_HEADER} header required")
        return registry.get(session_id)

    @_handle_errors
    async def api_get_cart(request: web.Request) -> web.Response:
        """GET /api/v1/cart - Items and totals."""
        return web.json_response(_cart_payload(_session(request)))

    @_handle_errors
    async def api_add_cart_item(request: web.Request) -> web.Response:
        """POST /api/v1/cart/items - Add item or increase its quantity."""
        session = _session(request)
        item = CartItem.from_dict(await _json_body(request))
        added = session.cart.add_item(item)
        return web.json_response({"item": added.to_dict(), **_cart_payload(session)}, status=201)

    @_handle_errors
    async def api_update_cart_item(request: web.Request) -> web.Response:
        """PATCH /api/v1/cart/items/{product_id} - Set exact quantity."""
        session = _session(request)
        product_id = request.match_info["product_id"]
        data = await _json_body(request)
        if "quantity" not in data:
            raise ValidationException("quantity required")
        found = session.cart.update_quantity(product_id, data["quantity"])
        if not found:
            return _error(f"product {product_id} not in cart", 404)
        return web.json_response(_cart_payload(session))

    @_handle_errors
    async def api_remove_cart_item(request: web.Request) -> web.Response:
        """DELETE /api/v1/cart/items/{product_id} - Remove item if present."""
        session = _session(request)
        session.cart.remove_item(request.match_info["product_id"])
        return web.json_response(_cart_payload(session))

    @_handle_errors
    async def api_clear_cart(request: web.Request) -> web.Response:
        """DELETE /api/v1/cart - Empty the cart."""
        session = _session(request)
        session.cart.clear_cart()
        return web.json_response(_cart_payload(session))

    @_handle_errors
    async def api_get_preferences(request: web.Request) -> web.Response:
        """GET /api/v1/preferences"""
        return web.json_response(_session(request).preferences.to_dict())

    @_handle_errors
    async def api_update_preferences(request: web.Request) -> web.Response:
        """PUT /api/v1/preferences - Set language and/or currency."""
        session = _session(request)
        data = await _json_body(request)
        if "language" not in data and "currency" not in data:
            raise ValidationException("language or currency required")
        session.preferences.update(language=data.get("language"), currency=data.get("currency"))
        return web.json_response(session.preferences.to_dict())

    @_handle_errors
    async def api_get_product_filters(request: web.Request) -> web.Response:
        """GET /api/v1/products/filters"""
        return web.json_response(_session(request).products.filters_dict())

    @_handle_errors
    async def api_update_product_filters(request: web.Request) -> web.Response:
        """PUT /api/v1/products/filters - Replace any of the listing filters."""
        products = _session(request).products
        data = await _json_body(request)
        changes: dict[str, Any] = {}
        if "selected_materials" in data:
            materials = data["selected_materials"]
            if not isinstance(materials, list):
                raise ValidationException("selected_materials must be a list")
            changes["selected_materials"] = materials
        if "price_range" in data:
            price_range = data["price_range"]
            if not isinstance(price_range, list) or len(price_range) != 2:
                raise ValidationException("price_range must be a [min, max] pair")
            changes["price_range"] = tuple(price_range)
        if "sort_by" in data:
            changes["sort_by"] = data["sort_by"]
        products.update_filters(**changes)
        return web.json_response(products.filters_dict())

    return {
        "api_get_cart": api_get_cart,
        "api_add_cart_item": api_add_cart_item,
        "api_update_cart_item": api_update_cart_item,
        "api_remove_cart_item": api_remove_cart_item,
        "api_clear_cart": api_clear_cart,
        "api_get_preferences": api_get_preferences,
        "api_update_preferences": api_update_preferences,
        "api_get_product_filters": api_get_product_filters,
        "api_update_product_filters": api_update_product_filters,
    }
