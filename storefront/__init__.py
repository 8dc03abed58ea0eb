"""Persisted session state for the storefront: cart, preferences and catalog filters."""

__version__ = "1.0.0"
