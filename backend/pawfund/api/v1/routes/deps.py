"""Module: deps."""

from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from pawfund.db.session import SessionLocal
from pawfund.db.unit_of_work import UnitOfWork
from pawfund.services.donation_service import DonationService
from pawfund.services.pet_status_service import PetStatusService

# Dependency provider: one DB session per request lifecycle.
def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# One unit of work per request, bound to the request's session.
def get_uow(db: Session = Depends(get_db)) -> UnitOfWork:
    return UnitOfWork(db)


def get_donation_service(uow: UnitOfWork = Depends(get_uow)) -> DonationService:
    return DonationService(uow)


def get_pet_status_service(uow: UnitOfWork = Depends(get_uow)) -> PetStatusService:
    return PetStatusService(uow)
