# flyer_api/repositories/flyers.py

from __future__ import annotations

from typing import Any, Optional, Sequence

from sqlalchemy.orm import Session

from ..db import models
from .scoping import OwnerScope


class FlyersRepository:
    """
    Thin data-access layer around the Flyer model.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        return self._session

    def scope(self, owner_id: str) -> OwnerScope[models.Flyer]:
        return OwnerScope(self._session, models.Flyer, owner_id)

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def list_flyers(
        self,
        owner_id: str,
        *,
        status: Optional[models.FlyerStatus] = None,
    ) -> Sequence[models.Flyer]:
        criteria = []
        if status is not None:
            criteria.append(models.Flyer.status == status)

        return self.scope(owner_id).find_many(
            *criteria,
            order_by=(models.Flyer.created_at.desc(), models.Flyer.id),
        )

    def get_by_id(self, owner_id: str, flyer_id: str) -> Optional[models.Flyer]:
        return self.scope(owner_id).find_by_id(flyer_id)

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def create(self, owner_id: str, **fields: Any) -> models.Flyer:
        return self.scope(owner_id).insert(**fields)

    def update_fields(
        self,
        owner_id: str,
        flyer_id: str,
        *,
        fields: dict[str, Any],
    ) -> Optional[models.Flyer]:
        return self.scope(owner_id).update_by_id(flyer_id, fields)

    def delete_by_id(self, owner_id: str, flyer_id: str) -> bool:
        return self.scope(owner_id).delete_by_id(flyer_id)
