"""
flyer_api.services
------------------

Service layer aggregation for the flyer backend.

Routers and other callers should import service classes from this package
instead of depending directly on repositories.

Example:

    from flyer_api.services import FlyersService, ProductsService
"""

from .auth_service import AuthService
from .flyers_service import FlyersService
from .products_service import ProductsService
from .security import Identity

__all__ = [
    "AuthService",
    "FlyersService",
    "ProductsService",
    "Identity",
]
