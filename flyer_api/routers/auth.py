# flyer_api/routers/auth.py

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from flyer_api.routers.dependencies import get_auth_service, get_current_identity
from flyer_api.schemas.auth import (
    AuthResponse,
    LoginRequest,
    ProfileUpdate,
    ProfileUpdateResponse,
    RegisterRequest,
    UserRead,
)
from flyer_api.schemas.common import ErrorResponse
from flyer_api.services import AuthService, Identity

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
    responses={status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse}},
)


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user",
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
def register(
    *,
    payload: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    return service.register(payload)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Log in",
    description="Exchange email and password for a bearer token.",
)
def login(
    *,
    payload: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    return service.login(payload)


@router.get("/profile", response_model=UserRead, summary="Get the caller's profile")
def get_profile(
    *,
    identity: Identity = Depends(get_current_identity),
    service: AuthService = Depends(get_auth_service),
) -> UserRead:
    return service.get_profile(identity)


@router.put(
    "/profile",
    response_model=ProfileUpdateResponse,
    summary="Update the caller's profile",
)
def update_profile(
    *,
    payload: ProfileUpdate,
    identity: Identity = Depends(get_current_identity),
    service: AuthService = Depends(get_auth_service),
) -> ProfileUpdateResponse:
    return service.update_profile(identity, payload)
