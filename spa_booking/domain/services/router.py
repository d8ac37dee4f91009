"""Service catalog router"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import Identity, require_staff
from ...database import get_db
from ...shared.schemas import MessageResponse
from .schemas import ServiceCreate, ServiceResponse, ServiceUpdate
from .service import ServiceCatalog

router = APIRouter(prefix="/service", tags=["Services"])


def get_service_catalog(db: Session = Depends(get_db)) -> ServiceCatalog:
    """Dependency injection for ServiceCatalog"""
    return ServiceCatalog(db)


@router.get("", response_model=list[ServiceResponse])
async def get_all_services(catalog: ServiceCatalog = Depends(get_service_catalog)):
    return [ServiceResponse.model_validate(s) for s in catalog.list_services()]


@router.post("", response_model=ServiceResponse, status_code=201)
async def create_service(
    data: ServiceCreate,
    _staff: Identity = Depends(require_staff),
    catalog: ServiceCatalog = Depends(get_service_catalog),
):
    return ServiceResponse.model_validate(catalog.create_service(data))


@router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(service_id: str, catalog: ServiceCatalog = Depends(get_service_catalog)):
    return ServiceResponse.model_validate(catalog.get_service(service_id))


@router.put("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: str,
    data: ServiceUpdate,
    _staff: Identity = Depends(require_staff),
    catalog: ServiceCatalog = Depends(get_service_catalog),
):
    return ServiceResponse.model_validate(catalog.update_service(service_id, data))


@router.delete("/{service_id}", response_model=MessageResponse)
async def delete_service(
    service_id: str,
    _staff: Identity = Depends(require_staff),
    catalog: ServiceCatalog = Depends(get_service_catalog),
):
    return catalog.delete_service(service_id)
