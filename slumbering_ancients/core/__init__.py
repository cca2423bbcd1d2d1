"""
Core utilities and configuration for Slumbering Ancients.

This package provides core functionality including logging configuration,
database setup, coordinate conversion and other shared utilities.
"""

from slumbering_ancients.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
