"""Therapist business logic"""

import logging

from sqlalchemy.orm import Session

from ...enums import RoleEnum
from ...errors import BadRequestError, ConflictError, NotFoundError
from ...models import Account, Service, Therapist
from ...shared.repository import ensure_exists
from .repository import TherapistRepository
from .schemas import TherapistCreate, TherapistUpdate

logger = logging.getLogger(__name__)


class TherapistService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = TherapistRepository()

    def list_therapists(self) -> list[Therapist]:
        therapists = self.repo.list_all(self.db)
        if not therapists:
            raise NotFoundError("No therapists found")
        return therapists

    def list_by_service(self, service_id: str) -> list[Therapist]:
        therapists = self.repo.list_by_service(self.db, service_id)
        if not therapists:
            raise NotFoundError("No therapists found for this service")
        return therapists

    def get_therapist(self, therapist_id: str) -> Therapist:
        therapist = self.repo.get(self.db, therapist_id)
        if not therapist:
            raise NotFoundError("Therapist not found")
        return therapist

    def _load_services(self, service_ids: list[str]) -> list[Service]:
        unique_ids = list(dict.fromkeys(service_ids))
        services = self.repo.get_services(self.db, unique_ids)
        if len(services) != len(unique_ids):
            raise NotFoundError("Service not found")
        by_id = {s.id: s for s in services}
        return [by_id[service_id] for service_id in unique_ids]

    def create_therapist(self, data: TherapistCreate) -> Therapist:
        account = ensure_exists(self.db, Account, data.account_id, "Account")
        if account.role != RoleEnum.THERAPIST:
            logger.warning(f"⚠️ Refused to link {account.role.value} account {account.id} as therapist")
            raise BadRequestError("Account must have the Therapist role")
        if self.repo.get_by_account(self.db, data.account_id):
            raise ConflictError("Account is already linked to a therapist")

        therapist = Therapist(
            account_id=data.account_id,
            specialization=self._load_services(data.specialization),
            certification=[c.model_dump(mode="json", by_alias=True) for c in data.certification],
            experience=data.experience,
        )
        therapist = self.repo.add(self.db, therapist)
        logger.info(f"🆕 Therapist {therapist.id} created for account {data.account_id}")
        return therapist

    def update_therapist(self, therapist_id: str, data: TherapistUpdate) -> Therapist:
        therapist = self.get_therapist(therapist_id)
        updates = {"experience": data.experience}
        if data.specialization is not None:
            updates["specialization"] = self._load_services(data.specialization)
        if data.certification is not None:
            updates["certification"] = [
                c.model_dump(mode="json", by_alias=True) for c in data.certification
            ]
        return self.repo.update(self.db, therapist, **updates)

    def delete_therapist(self, therapist_id: str) -> dict:
        therapist = self.get_therapist(therapist_id)
        self.repo.delete(self.db, therapist)
        logger.info(f"🗑️ Therapist {therapist_id} deleted")
        return {"message": "Therapist deleted successfully"}
