"""
Configuration domain models package.
"""

from .settings import RollcallSettings

__all__ = ["RollcallSettings"]
