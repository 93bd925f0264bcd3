"""Module: donations."""

from decimal import Decimal

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from pawfund.api.v1.routes.deps import get_donation_service
from pawfund.db.models.donation import Donation
from pawfund.services.donation_service import DonationService

router = APIRouter()


class DonationPayload(BaseModel):
    amount: Decimal = Field(gt=0)
    donor_id: int = Field(gt=0)
    shelter_id: int = Field(gt=0)


# -------------------------
# Helpers
# -------------------------
def _donation_out(d: Donation) -> dict:
    return {
        "id": d.id,
        "amount": str(d.amount),
        "date": d.date.isoformat() if d.date else None,
        "donor_id": d.donor_id,
        "shelter_id": d.shelter_id,
    }


# -------------------------
# Endpoints
# -------------------------

@router.get("", summary="List all donations")
def list_donations(service: DonationService = Depends(get_donation_service)):
    return [_donation_out(d) for d in service.list_all()]


@router.get("/by-donor/{donor_id}", summary="List donations made by a donor")
def list_donations_by_donor(donor_id: int, service: DonationService = Depends(get_donation_service)):
    return [_donation_out(d) for d in service.list_by_donor(donor_id)]


@router.get("/total/shelter/{shelter_id}", summary="Sum of donations received by a shelter")
def total_by_shelter(shelter_id: int, service: DonationService = Depends(get_donation_service)):
    return {"shelter_id": shelter_id, "total": str(service.total_by_shelter(shelter_id))}


@router.get("/total/donor/{donor_id}", summary="Sum of donations made by a donor")
def total_by_donor(donor_id: int, service: DonationService = Depends(get_donation_service)):
    return {"donor_id": donor_id, "total": str(service.total_by_donor(donor_id))}


@router.get("/drift", summary="Running totals that disagree with their donations")
def total_drift(service: DonationService = Depends(get_donation_service)):
    return [
        {
            "entity": item.entity,
            "id": item.id,
            "cached": str(item.cached),
            "actual": str(item.actual),
        }
        for item in service.find_total_drift()
    ]


@router.get("/{donation_id}", summary="Get a donation")
def get_donation(donation_id: int, service: DonationService = Depends(get_donation_service)):
    return _donation_out(service.get_by_id(donation_id))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Record a donation")
def create_donation(payload: DonationPayload, service: DonationService = Depends(get_donation_service)):
    donation = service.create(payload.amount, payload.donor_id, payload.shelter_id)
    return _donation_out(donation)


@router.put("/{donation_id}", summary="Amend a donation")
def update_donation(
    donation_id: int,
    payload: DonationPayload,
    service: DonationService = Depends(get_donation_service),
):
    donation = service.update(donation_id, payload.amount, payload.donor_id, payload.shelter_id)
    return _donation_out(donation)


@router.delete("/{donation_id}", summary="Delete a donation")
def delete_donation(donation_id: int, service: DonationService = Depends(get_donation_service)):
    service.delete(donation_id)
    return {"ok": True, "id": donation_id}
