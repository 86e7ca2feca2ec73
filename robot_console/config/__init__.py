"""
Configuration management for the IoT Robot Console.

This package contains application settings and logging setup.
"""

from .settings import settings, configure_logging

__all__ = ["settings", "configure_logging"]
