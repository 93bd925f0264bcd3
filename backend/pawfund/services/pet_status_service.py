"""Module: pet_status_service."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from pawfund.core.errors import Conflict, InvalidArgument, NotFound
from pawfund.db.models.pet import Pet
from pawfund.db.models.pet_status import PetStatus
from pawfund.db.models.status import Status
from pawfund.db.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


def _require_id(value, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidArgument(f"{field_name} must be greater than 0", field=field_name)
    return value


def _clean_label(value: str | None, field_name: str) -> str:
    if value is None:
        raise InvalidArgument(f"{field_name} is required", field=field_name)
    return value.strip()


class PetStatusService:
    """Maintains the pet <-> status links; a status is linked to a given pet at most once."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.pets = uow.repository(Pet)
        self.statuses = uow.repository(Status)
        self.links = uow.repository(PetStatus)

    def list_for_pet(self, pet_id: int) -> list[Status]:
        _require_id(pet_id, "pet_id")
        pet = self._load_pet_with_links(pet_id)
        return sorted((link.status for link in pet.statuses), key=lambda s: s.id)

    def add(self, pet_id: int, status_id: int) -> PetStatus:
        _require_id(pet_id, "pet_id")
        _require_id(status_id, "status_id")

        with self.uow.begin_transaction() as txn:
            pet = self._load_pet_with_links(pet_id)
            if any(link.status_id == status_id for link in pet.statuses):
                raise Conflict(f"Status {status_id} is already linked to pet {pet_id}")

            if self.statuses.get_by_id(status_id) is None:
                raise NotFound("status", status_id)

            try:
                link = self.links.insert(PetStatus(pet_id=pet_id, status_id=status_id))
                self.uow.commit()
            except IntegrityError as exc:
                # A concurrent request linked the same pair first.
                raise Conflict(f"Status {status_id} is already linked to pet {pet_id}") from exc
            txn.commit()

        logger.info("Linked status %s to pet %s", status_id, pet_id)
        return link

    def update(self, pet_id: int, status_id: int, disease: str, vaccine: str) -> Status:
        _require_id(pet_id, "pet_id")
        _require_id(status_id, "status_id")
        disease = _clean_label(disease, "disease")
        vaccine = _clean_label(vaccine, "vaccine")

        with self.uow.begin_transaction() as txn:
            link = self._load_link(pet_id, status_id)

            status = self.statuses.get_by_id(link.status_id, for_update=True)
            status.disease = disease
            status.vaccine = vaccine
            status.date = datetime.now(UTC)
            self.statuses.update(status, status.id)

            self.uow.commit()
            txn.commit()

        logger.info("Updated status %s of pet %s", status_id, pet_id)
        return status

    def remove(self, pet_id: int, status_id: int) -> None:
        _require_id(pet_id, "pet_id")
        _require_id(status_id, "status_id")

        with self.uow.begin_transaction() as txn:
            link = self._load_link(pet_id, status_id)
            # Only the join row goes; the Status record stays for other pets.
            self.links.delete(link)

            self.uow.commit()
            txn.commit()

        logger.info("Unlinked status %s from pet %s", status_id, pet_id)

    # -------------------------
    # Internals
    # -------------------------
    def _load_pet_with_links(self, pet_id: int) -> Pet:
        stmt = (
            self.pets.as_queryable()
            .where(Pet.id == pet_id)
            .options(selectinload(Pet.statuses).selectinload(PetStatus.status))
            .execution_options(populate_existing=True)
        )
        pets = self.pets.query(stmt)
        if not pets:
            raise NotFound("pet", pet_id)
        return pets[0]

    def _load_link(self, pet_id: int, status_id: int) -> PetStatus:
        link = self.links.get_by_id((pet_id, status_id))
        if link is None:
            raise NotFound("pet status", f"{pet_id}/{status_id}")
        return link
