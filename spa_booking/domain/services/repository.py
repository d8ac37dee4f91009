"""Service catalog repository"""

from ...models import Service
from ...shared.repository import CRUDRepository


class ServiceRepository(CRUDRepository[Service]):
    model = Service
    entity_name = "Service"
