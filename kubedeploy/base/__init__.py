"""
kubedeploy Base Command Classes

Abstract base class for consistent command structure.
"""

from .base_command import BaseCommand

__all__ = [
    "BaseCommand",
]
