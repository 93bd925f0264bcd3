"""Module: unit_of_work."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pawfund.core.errors import StorageFailure
from pawfund.db.repository import Repository, T

logger = logging.getLogger(__name__)


class Transaction:
    """
    Handle for one transaction scope opened by ``UnitOfWork.begin_transaction``.

    Used as a context manager it always releases the scope: an exception or a
    block that exits without ``commit()`` rolls everything back.
    """

    def __init__(self, uow: UnitOfWork):
        self._uow = uow
        self.completed = False

    def commit(self) -> None:
        self._ensure_open()
        try:
            self._uow.session.commit()
        except SQLAlchemyError as exc:
            logger.warning("Transaction commit failed, rolling back: %s", exc)
            try:
                self._uow.session.rollback()
            finally:
                self._finish()
            raise StorageFailure(f"Commit failed: {exc.__class__.__name__}") from exc
        self._finish()

    def rollback(self) -> None:
        if self.completed:
            return
        self._uow.session.rollback()
        self._finish()

    def __enter__(self) -> Transaction:
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self.completed:
            return False

        if exc is None:
            logger.warning("Transaction scope exited without commit; rolling back")
            self.rollback()
            return False

        logger.warning("Rolling back transaction after %s: %s", exc_type.__name__, exc)
        try:
            self.rollback()
        except SQLAlchemyError:
            logger.exception("Rollback failed")
            self._finish()

        if isinstance(exc, SQLAlchemyError):
            raise StorageFailure(f"Transaction failed: {exc.__class__.__name__}") from exc
        return False

    def _ensure_open(self) -> None:
        if self.completed:
            raise StorageFailure("Transaction already completed")

    def _finish(self) -> None:
        self.completed = True
        self._uow._release(self)


class UnitOfWork:
    """Groups repository operations on one Session into a single commit."""

    def __init__(self, session: Session):
        self.session = session
        self._repositories: dict[type, Repository[Any]] = {}
        self._transaction: Transaction | None = None

    def repository(self, model: type[T]) -> Repository[T]:
        repo = self._repositories.get(model)
        if repo is None:
            repo = Repository(self.session, model)
            self._repositories[model] = repo
        return repo

    @property
    def in_transaction(self) -> bool:
        return self._transaction is not None

    def begin_transaction(self) -> Transaction:
        if self._transaction is not None:
            raise StorageFailure("A transaction is already active on this unit of work")

        # Joins a transaction the session autobegan for earlier reads.
        if not self.session.in_transaction():
            self.session.begin()
        self._transaction = Transaction(self)
        return self._transaction

    def commit(self) -> None:
        """
        Flush all staged repository operations.

        Inside a transaction scope this only sends the pending SQL; the
        handle's commit() makes it durable. Outside one, the session is
        committed directly.
        """
        if self._transaction is not None:
            self.session.flush()
            return

        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            logger.warning("Commit failed, rolling back: %s", exc)
            self.session.rollback()
            raise StorageFailure(f"Commit failed: {exc.__class__.__name__}") from exc

    def _release(self, transaction: Transaction) -> None:
        if self._transaction is transaction:
            self._transaction = None
