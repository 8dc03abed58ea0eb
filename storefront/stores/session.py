"""Per-session container bundling the stores over one injected storage."""
from __future__ import annotations

from collections import OrderedDict

from logging_config import logger
from storefront.core.constants import MAX_CACHED_SESSIONS
from storefront.core.storage import KeyValueStorage, NamespacedStorage
from storefront.stores.cart import CartStore
from storefront.stores.preferences import PreferencesStore
from storefront.stores.products import ProductsStore


class StorefrontSession:
    """State of one browsing session.

    With a ``session_id`` every key is namespaced so sessions can share a
    backend; without one the fixed keys are used directly.
    """

    def __init__(self, storage: KeyValueStorage, session_id: str | None = None):
        self.session_id = session_id
        if session_id:
            storage = NamespacedStorage(storage, session_id)
        self.storage = storage
        self.cart = CartStore(storage)
        self.preferences = PreferencesStore(storage)
        self.products = ProductsStore(storage)


class SessionRegistry:
    """Keeps the most recently used sessions for the HTTP API.

    Least recently used sessions are evicted past ``max_sessions``; their
    state stays in storage and is rehydrated on the next request.
    """

    def __init__(self, storage: KeyValueStorage, max_sessions: int = MAX_CACHED_SESSIONS):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self._storage = storage
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[str, StorefrontSession] = OrderedDict()

    def get(self, session_id: str) -> StorefrontSession:
        session = self._sessions.get(session_id)
        if session is not None:
            self._sessions.move_to_end(session_id)
            return session
        session = StorefrontSession(self._storage, session_id)
        self._sessions[session_id] = session
        while len(self._sessions) > self._max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            logger.debug("Evicted session %s from cache", evicted)
        return session

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
