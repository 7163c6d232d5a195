"""
Top-level export module for HTTP API schemas.
"""
from . import auth, common, flyers, products

# Common primitives
from .common import APIModel, ErrorResponse, MessageResponse

# Auth
from .auth import (
    AuthResponse,
    LoginRequest,
    ProfileUpdate,
    ProfileUpdateResponse,
    RegisterRequest,
    UserRead,
)

# Products
from .products import ProductCreate, ProductRead, ProductUpdate

# Flyers
from .flyers import (
    BusinessInfo,
    FlyerCreate,
    FlyerLayout,
    FlyerProductRef,
    FlyerRead,
    FlyerUpdate,
    ProductSnapshotRead,
)

__all__ = [
    # Submodules
    "common", "auth", "products", "flyers",

    # Common
    "APIModel", "ErrorResponse", "MessageResponse",

    # Auth
    "AuthResponse", "LoginRequest", "ProfileUpdate", "ProfileUpdateResponse",
    "RegisterRequest", "UserRead",

    # Products
    "ProductCreate", "ProductRead", "ProductUpdate",

    # Flyers
    "BusinessInfo", "FlyerCreate", "FlyerLayout", "FlyerProductRef",
    "FlyerRead", "FlyerUpdate", "ProductSnapshotRead",
]
