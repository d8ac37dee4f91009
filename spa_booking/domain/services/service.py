"""Service catalog business logic"""

import logging

from sqlalchemy.orm import Session

from ...errors import NotFoundError
from ...models import Service
from .repository import ServiceRepository
from .schemas import ServiceCreate, ServiceUpdate

logger = logging.getLogger(__name__)


class ServiceCatalog:
    """Service layer for the spa's bookable services"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ServiceRepository()

    def list_services(self) -> list[Service]:
        services = self.repo.list_all(self.db)
        if not services:
            raise NotFoundError("No services found")
        return services

    def get_service(self, service_id: str) -> Service:
        service = self.repo.get(self.db, service_id)
        if not service:
            raise NotFoundError("Service not found")
        return service

    def create_service(self, data: ServiceCreate) -> Service:
        service = self.repo.create(self.db, **data.model_dump())
        logger.info(f"🆕 Service created: {service.service_name}")
        return service

    def update_service(self, service_id: str, data: ServiceUpdate) -> Service:
        service = self.get_service(service_id)
        return self.repo.update(self.db, service, **data.model_dump(exclude_unset=True))

    def delete_service(self, service_id: str) -> dict:
        service = self.get_service(service_id)
        self.repo.delete(self.db, service)
        logger.info(f"🗑️ Service {service_id} deleted")
        return {"message": "Service deleted successfully"}
