# flyer_api/services/flyers_service.py

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, List, Optional

import structlog
from pydantic import BaseModel

from flyer_api.db import models
from flyer_api.db.models import FlyerStatus, utcnow
from flyer_api.domain.snapshots import SnapshotResolver
from flyer_api.exceptions import FlyerNotFoundError
from flyer_api.repositories.flyers import FlyersRepository
from flyer_api.schemas.flyers import (
    FlyerCreate,
    FlyerRead,
    FlyerUpdate,
    split_product_refs,
)
from flyer_api.services.security import Identity

logger = structlog.get_logger(__name__)

COPY_SUFFIX = " - Copy"
TITLE_MAX_LENGTH = 100


def _document(value: Any) -> Any:
    """Nested request models are stored as plain JSON documents."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    return value


def _copy_title(title: str) -> str:
    room = TITLE_MAX_LENGTH - len(COPY_SUFFIX)
    return f"{title[:room]}{COPY_SUFFIX}"


class FlyersService:
    """
    High-level service for a user's flyers.

    Responsibilities:
    - Materialize the ``products`` field through the ``SnapshotResolver`` on
      create, and on update when a new product list is sent.
    - Duplicate flyers without re-resolving their snapshots.
    - Delegate persistence to ``FlyersRepository``, always with the caller's
      user id.
    """

    def __init__(self, repo: FlyersRepository, resolver: SnapshotResolver) -> None:
        self._repo = repo
        self._resolver = resolver

    def _snapshot_documents(
        self,
        owner_id: str,
        items: Optional[list],
    ) -> List[Dict[str, Any]]:
        product_ids, overrides = split_product_refs(items or [])
        snapshots = self._resolver.resolve(owner_id, product_ids, overrides)
        return [s.to_document() for s in snapshots]

    # -------------------------------------------------------------------------
    # Core CRUD operations
    # -------------------------------------------------------------------------

    def create_flyer(self, identity: Identity, payload: FlyerCreate) -> FlyerRead:
        owner_id = identity.user_id

        flyer = self._repo.create(
            owner_id,
            title=payload.title,
            description=payload.description,
            template=payload.template,
            layout=_document(payload.layout),
            business_info=_document(payload.business_info),
            products=self._snapshot_documents(owner_id, payload.products),
            status=payload.status,
            is_public=payload.is_public,
            published_at=utcnow() if payload.status == FlyerStatus.PUBLISHED else None,
        )
        self._repo.session.commit()

        logger.info(
            "flyer_created",
            flyer_id=flyer.id,
            owner_id=owner_id,
            product_count=len(flyer.products),
        )
        return FlyerRead.model_validate(flyer)

    def list_flyers(
        self,
        identity: Identity,
        *,
        status: Optional[FlyerStatus] = None,
    ) -> List[FlyerRead]:
        flyers = self._repo.list_flyers(identity.user_id, status=status)
        return [FlyerRead.model_validate(f) for f in flyers]

    def get_flyer(self, identity: Identity, flyer_id: str) -> FlyerRead:
        return FlyerRead.model_validate(self._get_owned(identity, flyer_id))

    def update_flyer(
        self,
        identity: Identity,
        flyer_id: str,
        payload: FlyerUpdate,
    ) -> FlyerRead:
        owner_id = identity.user_id
        flyer = self._get_owned(identity, flyer_id)

        updates: Dict[str, Any] = {
            name: _document(getattr(payload, name))
            for name in payload.model_fields_set
            if name != "products"
        }

        # An absent (or null) product list keeps the current snapshots; a
        # list, even an empty one, replaces them wholesale.
        if payload.replaces_products:
            updates["products"] = self._snapshot_documents(owner_id, payload.products)

        if updates.get("status") == FlyerStatus.PUBLISHED and flyer.published_at is None:
            updates["published_at"] = utcnow()

        if updates:
            flyer = self._repo.update_fields(owner_id, flyer_id, fields=updates)
            self._repo.session.commit()
            logger.info(
                "flyer_updated",
                flyer_id=flyer_id,
                owner_id=owner_id,
                fields=sorted(updates),
            )

        return FlyerRead.model_validate(flyer)

    def delete_flyer(self, identity: Identity, flyer_id: str) -> None:
        if not self._repo.delete_by_id(identity.user_id, flyer_id):
            raise FlyerNotFoundError(flyer_id)

        self._repo.session.commit()
        logger.info("flyer_deleted", flyer_id=flyer_id, owner_id=identity.user_id)

    def duplicate_flyer(self, identity: Identity, flyer_id: str) -> FlyerRead:
        """
        Copy a flyer, snapshots included. The copy keeps the prices captured
        by the original even if the source products have changed since.
        """
        owner_id = identity.user_id
        original = self._get_owned(identity, flyer_id)

        duplicate = self._repo.create(
            owner_id,
            title=_copy_title(original.title),
            description=original.description,
            template=original.template,
            layout=deepcopy(original.layout or {}),
            business_info=deepcopy(original.business_info or {}),
            products=deepcopy(original.products or []),
            status=original.status,
            is_public=original.is_public,
            published_at=original.published_at,
        )
        self._repo.session.commit()

        logger.info(
            "flyer_duplicated",
            flyer_id=duplicate.id,
            source_flyer_id=original.id,
            owner_id=owner_id,
        )
        return FlyerRead.model_validate(duplicate)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _get_owned(self, identity: Identity, flyer_id: str) -> models.Flyer:
        flyer = self._repo.get_by_id(identity.user_id, flyer_id)
        if flyer is None:
            raise FlyerNotFoundError(flyer_id)
        return flyer
