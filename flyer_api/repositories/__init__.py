# flyer_api/repositories/__init__.py
"""
Repository layer public exports.

Downstream code can import from this module instead of individual files, e.g.:

    from flyer_api.repositories import ProductsRepository
"""

from .flyers import FlyersRepository
from .products import ProductsRepository
from .scoping import OwnerScope
from .users import UsersRepository

__all__ = [
    "OwnerScope",
    "ProductsRepository",
    "FlyersRepository",
    "UsersRepository",
]
