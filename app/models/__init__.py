from .base import Base
from .recipe import Recipe

__all__ = [
    "Base",
    "Recipe",
]
