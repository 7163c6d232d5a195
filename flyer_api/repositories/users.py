# flyer_api/repositories/users.py

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db import models


class UsersRepository:
    """
    Data access for user accounts. Users are not owner-scoped: a user is
    looked up by its own id or by email.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        return self._session

    def get_by_id(self, user_id: str) -> Optional[models.User]:
        return self._session.get(models.User, user_id)

    def get_by_email(self, email: str) -> Optional[models.User]:
        stmt = select(models.User).where(models.User.email == email.lower())
        return self._session.execute(stmt).scalar_one_or_none()

    def create(
        self,
        *,
        email: str,
        password_hash: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> models.User:
        user = models.User(
            email=email.lower(),
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
        )
        self._session.add(user)
        self._session.flush()
        return user

    def update_fields(self, user: models.User, **fields: Any) -> models.User:
        for key, value in fields.items():
            setattr(user, key, value)
        self._session.add(user)
        self._session.flush()
        return user
