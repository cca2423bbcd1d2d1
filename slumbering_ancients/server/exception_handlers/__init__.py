"""
Exception handlers for the Slumbering Ancients server.

This package contains the handler for domain errors, the catch-all handler
for unexpected exceptions and a setup function registering both with the
FastAPI application.
"""

from .domain_handler import domain_exception_handler
from .global_handler import global_exception_handler, setup_exception_handlers

__all__ = ["domain_exception_handler", "global_exception_handler", "setup_exception_handlers"]
