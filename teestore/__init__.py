"""Teestore: backend API for a custom t-shirt storefront."""

__version__ = "0.1.0"
