"""
Enum definitions shared across confcache.
"""

from .formats import ConfigFormat

__all__ = [
    'ConfigFormat'
]
