"""Therapist router"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import Identity, require_admin
from ...database import get_db
from ...shared.schemas import MessageResponse
from .schemas import TherapistCreate, TherapistResponse, TherapistUpdate
from .service import TherapistService

router = APIRouter(prefix="/therapist", tags=["Therapists"])


def get_therapist_service(db: Session = Depends(get_db)) -> TherapistService:
    """Dependency injection for TherapistService"""
    return TherapistService(db)


@router.get("", response_model=list[TherapistResponse])
async def get_all_therapists(service: TherapistService = Depends(get_therapist_service)):
    return [TherapistResponse.model_validate(t) for t in service.list_therapists()]


@router.get("/service/{service_id}", response_model=list[TherapistResponse])
async def get_therapists_by_service(
    service_id: str, service: TherapistService = Depends(get_therapist_service)
):
    """Therapists specialised in a service"""
    return [TherapistResponse.model_validate(t) for t in service.list_by_service(service_id)]


@router.post("", response_model=TherapistResponse, status_code=201)
async def create_therapist(
    data: TherapistCreate,
    _admin: Identity = Depends(require_admin),
    service: TherapistService = Depends(get_therapist_service),
):
    return TherapistResponse.model_validate(service.create_therapist(data))


@router.get("/{therapist_id}", response_model=TherapistResponse)
async def get_therapist(therapist_id: str, service: TherapistService = Depends(get_therapist_service)):
    return TherapistResponse.model_validate(service.get_therapist(therapist_id))


@router.put("/{therapist_id}", response_model=TherapistResponse)
async def update_therapist(
    therapist_id: str,
    data: TherapistUpdate,
    _admin: Identity = Depends(require_admin),
    service: TherapistService = Depends(get_therapist_service),
):
    return TherapistResponse.model_validate(service.update_therapist(therapist_id, data))


@router.delete("/{therapist_id}", response_model=MessageResponse)
async def delete_therapist(
    therapist_id: str,
    _admin: Identity = Depends(require_admin),
    service: TherapistService = Depends(get_therapist_service),
):
    return service.delete_therapist(therapist_id)
