"""
Middleware modules for the Teestore server.

This package contains custom middleware for request timing and logging.
"""

from .logfire_middleware import LogfireMiddleware

__all__ = ["LogfireMiddleware"]
