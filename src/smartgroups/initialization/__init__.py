"""Seeding strategies for distance clustering."""

from .farthest_first import FarthestFirstInit

__all__ = [
    'FarthestFirstInit'
]
