"""Example models for Corral.

This package demonstrates library usage but is not part of the core API.
"""

from .models import Product, Tag

__all__ = [
    "Product",
    "Tag",
]
