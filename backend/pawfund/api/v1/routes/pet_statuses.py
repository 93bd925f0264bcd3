"""Module: pet_statuses."""

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from pawfund.api.v1.routes.deps import get_pet_status_service
from pawfund.db.models.status import Status
from pawfund.services.pet_status_service import PetStatusService

router = APIRouter()


class PetStatusCreatePayload(BaseModel):
    status_id: int = Field(gt=0)


class StatusUpdatePayload(BaseModel):
    disease: str
    vaccine: str


def _status_out(s: Status, pet_id: int) -> dict:
    return {
        "id": s.id,
        "pet_id": pet_id,
        "date": s.date.isoformat() if s.date else None,
        "disease": s.disease,
        "vaccine": s.vaccine,
    }


@router.get("/{pet_id}/statuses", summary="List statuses linked to a pet")
def list_pet_statuses(pet_id: int, service: PetStatusService = Depends(get_pet_status_service)):
    return [_status_out(s, pet_id) for s in service.list_for_pet(pet_id)]


@router.post("/{pet_id}/statuses", status_code=status.HTTP_201_CREATED, summary="Link a status to a pet")
def add_pet_status(
    pet_id: int,
    payload: PetStatusCreatePayload,
    service: PetStatusService = Depends(get_pet_status_service),
):
    link = service.add(pet_id, payload.status_id)
    return {"pet_id": link.pet_id, "status_id": link.status_id}


@router.put("/{pet_id}/statuses/{status_id}", summary="Update a pet's linked status")
def update_pet_status(
    pet_id: int,
    status_id: int,
    payload: StatusUpdatePayload,
    service: PetStatusService = Depends(get_pet_status_service),
):
    updated = service.update(pet_id, status_id, payload.disease, payload.vaccine)
    return _status_out(updated, pet_id)


@router.delete("/{pet_id}/statuses/{status_id}", summary="Unlink a status from a pet")
def remove_pet_status(
    pet_id: int,
    status_id: int,
    service: PetStatusService = Depends(get_pet_status_service),
):
    service.remove(pet_id, status_id)
    return {"ok": True}
