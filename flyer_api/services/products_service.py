# flyer_api/services/products_service.py

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Optional

import structlog
from sqlalchemy.exc import IntegrityError

from flyer_api.exceptions import DuplicateBarcodeError, ProductNotFoundError
from flyer_api.repositories.products import ProductsRepository
from flyer_api.schemas.products import ProductCreate, ProductRead, ProductUpdate
from flyer_api.services.security import Identity

logger = structlog.get_logger(__name__)


class ProductsService:
    """
    High-level service for a user's product catalogue.

    Responsibilities:
    - Enforce per-owner barcode uniqueness and existence checks.
    - Delegate persistence to ``ProductsRepository``, always with the
      caller's user id.
    - Convert repository models to API schemas (``ProductRead``).
    """

    def __init__(self, repo: ProductsRepository) -> None:
        self._repo = repo

    @contextmanager
    def _barcode_guard(self, barcode: Optional[str]) -> Iterator[None]:
        # The unique (owner, barcode) index catches a racing write that
        # slipped past the pre-check.
        try:
            yield
            self._repo.session.commit()
        except IntegrityError:
            self._repo.session.rollback()
            raise DuplicateBarcodeError(barcode or "") from None

    # -------------------------------------------------------------------------
    # Core CRUD operations
    # -------------------------------------------------------------------------

    def create_product(self, identity: Identity, payload: ProductCreate) -> ProductRead:
        owner_id = identity.user_id

        if payload.barcode and self._repo.barcode_taken(owner_id, payload.barcode):
            raise DuplicateBarcodeError(payload.barcode)

        with self._barcode_guard(payload.barcode):
            product = self._repo.create(owner_id, **payload.model_dump())

        logger.info("product_created", product_id=product.id, owner_id=owner_id)
        return ProductRead.model_validate(product)

    def list_products(self, identity: Identity) -> List[ProductRead]:
        products = self._repo.list_products(identity.user_id)
        return [ProductRead.model_validate(p) for p in products]

    def get_product(self, identity: Identity, product_id: str) -> ProductRead:
        product = self._repo.get_by_id(identity.user_id, product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return ProductRead.model_validate(product)

    def search_products(self, identity: Identity, query: str) -> List[ProductRead]:
        query = query.strip()
        if not query:
            return self.list_products(identity)
        products = self._repo.search(identity.user_id, query)
        return [ProductRead.model_validate(p) for p in products]

    def update_product(
        self,
        identity: Identity,
        product_id: str,
        payload: ProductUpdate,
    ) -> ProductRead:
        owner_id = identity.user_id

        product = self._repo.get_by_id(owner_id, product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        updates = payload.model_dump(exclude_unset=True)
        barcode = updates.get("barcode")
        if barcode and self._repo.barcode_taken(owner_id, barcode, exclude_id=product_id):
            raise DuplicateBarcodeError(barcode)

        if updates:
            with self._barcode_guard(barcode):
                product = self._repo.update_fields(owner_id, product_id, fields=updates)
            logger.info(
                "product_updated",
                product_id=product_id,
                owner_id=owner_id,
                fields=sorted(updates),
            )

        return ProductRead.model_validate(product)

    def delete_product(self, identity: Identity, product_id: str) -> None:
        """
        Delete a product. Flyers that embed a snapshot of it are unaffected.
        """
        if not self._repo.delete_by_id(identity.user_id, product_id):
            raise ProductNotFoundError(product_id)

        self._repo.session.commit()
        logger.info("product_deleted", product_id=product_id, owner_id=identity.user_id)
