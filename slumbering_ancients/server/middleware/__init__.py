"""
Middleware modules for the Slumbering Ancients server.
"""

from .logfire_middleware import LogfireMiddleware

__all__ = ["LogfireMiddleware"]
