"""Module: api."""

# backend/pawfund/api/v1/api.py
from fastapi import APIRouter

# Core operational routes.
from pawfund.api.v1.routes.health import router as health_router

# Domain routes backed by the ledger and association services.
from pawfund.api.v1.routes.donations import router as donations_router
from pawfund.api.v1.routes.pet_statuses import router as pet_statuses_router


api_router = APIRouter()

api_router.include_router(health_router, prefix="/health", tags=["health"])

api_router.include_router(donations_router, prefix="/donations", tags=["donations"])
api_router.include_router(pet_statuses_router, prefix="/pets", tags=["pet-statuses"])
