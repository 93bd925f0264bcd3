"""Module: repository."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import Select, func, inspect, select, update
from sqlalchemy.orm import Session
from sqlalchemy.orm.util import identity_key

from pawfund.core.errors import InvalidArgument, NotFound
from pawfund.db.base import Base

T = TypeVar("T", bound=Base)


class Repository(Generic[T]):
    """
    Data access for one mapped entity type.

    Writes are only staged on the session; the owning UnitOfWork decides
    when they are flushed and committed.
    """

    def __init__(self, session: Session, model: type[T]):
        self.session = session
        self.model = model
        self._mapper = inspect(model)
        self._pk = self._mapper.primary_key

    # -------------------------
    # Reads
    # -------------------------
    def get_by_id(self, id: Any, for_update: bool = False) -> T | None:
        if not for_update:
            return self.session.get(self.model, id)

        # SELECT ... FOR UPDATE; refresh so a cached instance reflects the locked row.
        stmt = (
            select(self.model)
            .where(*self._pk_criteria(id))
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def get_all(self) -> list[T]:
        return self.query(self.as_queryable())

    def as_queryable(self) -> Select:
        return select(self.model)

    def query(self, stmt: Select) -> list[T]:
        return list(self.session.execute(stmt).scalars().all())

    def scalar(self, stmt: Select) -> Any:
        return self.session.execute(stmt).scalar()

    # -------------------------
    # Staged writes
    # -------------------------
    def insert(self, entity: T) -> T:
        self.session.add(entity)
        # Flush so the database assigns the identity inside the open transaction.
        self.session.flush()
        return entity

    def update(self, entity: T, id: Any) -> T:
        if self._identity_of(entity) != self._normalize(id):
            raise InvalidArgument(
                f"{self.model.__name__} id {id} does not match entity identity",
                field="id",
            )
        if entity in self.session:
            return entity
        return self.session.merge(entity)

    def delete(self, entity: T) -> None:
        self.session.delete(entity)

    def increment(self, id: Any, column: str, delta: Decimal) -> None:
        """
        Atomically add ``delta`` to a numeric column in the database.

        Runs ``UPDATE ... SET col = coalesce(col, 0) + delta`` so concurrent
        writers never overwrite each other's read-modify-write.
        """
        target = getattr(self.model, column)
        self.assign(id, column, func.coalesce(target, 0) + delta)

    def assign(self, id: Any, column: str, value: Any) -> None:
        """Set one column in the database to a value or SQL expression evaluated at write time."""
        stmt = (
            update(self.model)
            .where(*self._pk_criteria(id))
            .values({column: value})
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)
        if result.rowcount == 0:
            raise NotFound(self.model.__name__.lower(), id)

        cached = self.session.identity_map.get(identity_key(self.model, id))
        if cached is not None:
            self.session.expire(cached, [column])

    # -------------------------
    # Helpers
    # -------------------------
    def _pk_criteria(self, id: Any) -> list:
        values = self._normalize(id)
        if len(values) != len(self._pk):
            raise InvalidArgument(f"Expected {len(self._pk)} key part(s) for {self.model.__name__}")
        return [col == value for col, value in zip(self._pk, values)]

    def _identity_of(self, entity: T) -> tuple:
        return tuple(self._mapper.primary_key_from_instance(entity))

    @staticmethod
    def _normalize(id: Any) -> tuple:
        if isinstance(id, Sequence) and not isinstance(id, str):
            return tuple(id)
        return (id,)
