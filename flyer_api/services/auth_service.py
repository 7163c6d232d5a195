# flyer_api/services/auth_service.py

from __future__ import annotations

import structlog
from sqlalchemy.exc import IntegrityError

from flyer_api.db.models import utcnow
from flyer_api.exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    UnauthenticatedError,
    UserNotFoundError,
)
from flyer_api.repositories.users import UsersRepository
from flyer_api.schemas.auth import (
    AuthResponse,
    LoginRequest,
    ProfileUpdate,
    ProfileUpdateResponse,
    RegisterRequest,
    UserRead,
)
from flyer_api.services.security import (
    Identity,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

logger = structlog.get_logger(__name__)


class AuthService:
    """
    Registration, login and profile management.

    Responsibilities:
    - Enforce email uniqueness and credential checks.
    - Issue bearer tokens, and resolve them back into an ``Identity``.
    - Delegate persistence to ``UsersRepository``.
    """

    def __init__(self, repo: UsersRepository) -> None:
        self._repo = repo

    def register(self, payload: RegisterRequest) -> AuthResponse:
        email = str(payload.email).lower()
        if self._repo.get_by_email(email) is not None:
            raise EmailAlreadyRegisteredError(email)

        try:
            user = self._repo.create(
                email=email,
                password_hash=hash_password(payload.password),
                first_name=payload.first_name,
                last_name=payload.last_name,
            )
            self._repo.session.commit()
        except IntegrityError:
            self._repo.session.rollback()
            raise EmailAlreadyRegisteredError(email) from None

        logger.info("user_registered", user_id=user.id)
        return AuthResponse(
            message="User registered successfully",
            token=create_access_token(user.id, user.email),
            user=UserRead.model_validate(user),
        )

    def login(self, payload: LoginRequest) -> AuthResponse:
        user = self._repo.get_by_email(str(payload.email))
        # Unknown email and wrong password are reported identically.
        if user is None or not verify_password(payload.password, user.password_hash):
            logger.info("login_rejected")
            raise InvalidCredentialsError()

        self._repo.update_fields(user, last_login_at=utcnow())
        self._repo.session.commit()

        logger.info("user_logged_in", user_id=user.id)
        return AuthResponse(
            message="Login successful",
            token=create_access_token(user.id, user.email),
            user=UserRead.model_validate(user),
        )

    def authenticate(self, token: str) -> Identity:
        """
        Resolve a bearer token into the caller's identity. The user must
        still exist.
        """
        claims = decode_access_token(token)
        user = self._repo.get_by_id(str(claims["userId"]))
        if user is None:
            raise UnauthenticatedError("Token is not valid")
        return Identity(user_id=user.id, email=user.email)

    def get_profile(self, identity: Identity) -> UserRead:
        user = self._repo.get_by_id(identity.user_id)
        if user is None:
            raise UserNotFoundError(identity.user_id)
        return UserRead.model_validate(user)

    def update_profile(self, identity: Identity, payload: ProfileUpdate) -> ProfileUpdateResponse:
        user = self._repo.get_by_id(identity.user_id)
        if user is None:
            raise UserNotFoundError(identity.user_id)

        updates = payload.model_dump(exclude_unset=True)
        if updates:
            self._repo.update_fields(user, **updates)
            self._repo.session.commit()

        return ProfileUpdateResponse(
            message="Profile updated successfully",
            user=UserRead.model_validate(user),
        )
