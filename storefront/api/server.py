"""aiohttp application factory."""
from __future__ import annotations

from aiohttp import web

from storefront import __version__
from storefront.api.routes import build_session_handlers
from storefront.core.constants import MAX_CACHED_SESSIONS
from storefront.core.storage import KeyValueStorage
from storefront.stores.session import SessionRegistry


def create_app(
    storage: KeyValueStorage, max_sessions: int = MAX_CACHED_SESSIONS
) -> web.Application:
    registry = SessionRegistry(storage, max_sessions=max_sessions)
    handlers = build_session_handlers(registry)

    async def health_check(request: web.Request) -> web.Response:
        return web.json_response(
            {"status": "ok", "version": __version__, "sessions": len(registry)}
        )

    app = web.Application()
    app.router.add_get("/health", health_check)
    app.router.add_get("/api/v1/cart", handlers["api_get_cart"])
    app.router.add_delete("/api/v1/cart", handlers["api_clear_cart"])
    app.router.add_post("/api/v1/cart/items", handlers["api_add_cart_item"])
    app.router.add_patch("/api/v1/cart/items/{product_id}", handlers["api_update_cart_item"])
    app.router.add_delete("/api/v1/cart/items/{product_id}", handlers["api_remove_cart_item"])
    app.router.add_get("/api/v1/preferences", handlers["api_get_preferences"])
    app.router.add_put("/api/v1/preferences", handlers["api_update_preferences"])
    app.router.add_get("/api/v1/products/filters", handlers["api_get_product_filters"])
    app.router.add_put("/api/v1/products/filters", handlers["api_update_product_filters"])
    return app
