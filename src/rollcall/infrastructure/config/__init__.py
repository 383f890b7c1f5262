"""
Configuration infrastructure package.
"""

from rollcall.infrastructure.config.repository import ConfigRepository

__all__ = ["ConfigRepository"]
