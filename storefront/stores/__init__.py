from storefront.stores.cart import CartStore
from storefront.stores.preferences import PreferencesStore
from storefront.stores.products import ProductsStore
from storefront.stores.session import SessionRegistry, StorefrontSession

__all__ = [
    "CartStore",
    "PreferencesStore",
    "ProductsStore",
    "SessionRegistry",
    "StorefrontSession",
]
