# flyer_api/repositories/scoping.py

"""
Owner scoping policy.

Every read and write against an owned table goes through an ``OwnerScope``,
which folds ``owner_user_id == <owner>`` into each statement. Repositories
build one per call from the owner id they are handed, so there is no
ambient "current user" anywhere in the data layer.
"""

from __future__ import annotations

from typing import Any, Generic, Iterable, Mapping, Optional, Sequence, Type, TypeVar

from sqlalchemy import ColumnElement, Select, delete, func, select
from sqlalchemy.orm import Session

ModelT = TypeVar("ModelT")


class OwnerScope(Generic[ModelT]):
    """
    Thin wrapper around a session that restricts one model to one owner.

    The model must expose ``id`` and ``owner_user_id`` columns.
    """

    def __init__(self, session: Session, model: Type[ModelT], owner_id: str) -> None:
        if not owner_id:
            raise ValueError("owner_id is required for scoped access")
        self._session = session
        self._model = model
        self._owner_id = owner_id

    @property
    def owner_id(self) -> str:
        return self._owner_id

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _owner_clause(self) -> ColumnElement[bool]:
        return self._model.owner_user_id == self._owner_id  # type: ignore[attr-defined]

    def select(self, *criteria: ColumnElement[bool]) -> Select[Any]:
        return select(self._model).where(self._owner_clause(), *criteria)

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def find_by_id(self, record_id: str) -> Optional[ModelT]:
        stmt = self.select(self._model.id == record_id)  # type: ignore[attr-defined]
        return self._session.execute(stmt).scalar_one_or_none()

    def find_many(
        self,
        *criteria: ColumnElement[bool],
        order_by: Iterable[Any] = (),
        limit: Optional[int] = None,
    ) -> Sequence[ModelT]:
        stmt = self.select(*criteria)
        order = list(order_by)
        if order:
            stmt = stmt.order_by(*order)
        if limit:
            stmt = stmt.limit(limit)
        return list(self._session.execute(stmt).scalars().all())

    def count(self, *criteria: ColumnElement[bool]) -> int:
        stmt = (
            select(func.count())
            .select_from(self._model)
            .where(self._owner_clause(), *criteria)
        )
        return int(self._session.execute(stmt).scalar_one())

    def exists(self, *criteria: ColumnElement[bool]) -> bool:
        return self.count(*criteria) > 0

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def insert(self, **fields: Any) -> ModelT:
        """
        Create a record owned by this scope. Any ``owner_user_id`` passed in
        ``fields`` is overridden.
        """
        fields["owner_user_id"] = self._owner_id
        record = self._model(**fields)
        self._session.add(record)
        self._session.flush()
        return record

    def update_by_id(self, record_id: str, fields: Mapping[str, Any]) -> Optional[ModelT]:
        record = self.find_by_id(record_id)
        if record is None:
            return None

        for key, value in fields.items():
            if key in ("id", "owner_user_id"):
                continue
            setattr(record, key, value)

        self._session.add(record)
        self._session.flush()
        return record

    def delete_by_id(self, record_id: str) -> bool:
        stmt = delete(self._model).where(
            self._owner_clause(),
            self._model.id == record_id,  # type: ignore[attr-defined]
        )
        result = self._session.execute(stmt)
        return bool(result.rowcount)


__all__ = ["OwnerScope"]
