# flyer_api/routers/dependencies.py
from __future__ import annotations

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from flyer_api.db.session import get_session
from flyer_api.domain.snapshots import SnapshotResolver
from flyer_api.exceptions import UnauthenticatedError
from flyer_api.repositories import FlyersRepository, ProductsRepository, UsersRepository
from flyer_api.services import AuthService, FlyersService, Identity, ProductsService

# -----------------------------------------------------------------------------
# Service factories
# -----------------------------------------------------------------------------
# Keeping these in one place makes it easy to swap implementations in tests
# through app.dependency_overrides.


def get_auth_service(session: Session = Depends(get_session)) -> AuthService:
    return AuthService(UsersRepository(session))


def get_products_service(session: Session = Depends(get_session)) -> ProductsService:
    return ProductsService(ProductsRepository(session))


def get_flyers_service(session: Session = Depends(get_session)) -> FlyersService:
    resolver = SnapshotResolver(ProductsRepository(session))
    return FlyersService(FlyersRepository(session), resolver)


# -----------------------------------------------------------------------------
# Security: bearer token -> Identity
# -----------------------------------------------------------------------------
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> Identity:
    """
    Resolve the caller from the ``Authorization: Bearer <token>`` header.

    Rejects the request before any repository is touched when the header is
    missing, the token does not verify, or its user no longer exists.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError("No token, authorization denied")
    return auth.authenticate(credentials.credentials)


__all__ = [
    "bearer_scheme",
    "get_auth_service",
    "get_products_service",
    "get_flyers_service",
    "get_current_identity",
]
