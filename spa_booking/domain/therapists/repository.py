"""Therapist repository"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import Service, Therapist
from ...shared.repository import CRUDRepository


class TherapistRepository(CRUDRepository[Therapist]):
    model = Therapist
    entity_name = "Therapist"

    def populate_options(self) -> list:
        return [joinedload(Therapist.account), selectinload(Therapist.specialization)]

    def get_by_account(self, db: Session, account_id: str) -> Optional[Therapist]:
        return db.query(Therapist).filter(Therapist.account_id == account_id).first()

    def list_by_service(self, db: Session, service_id: str) -> list[Therapist]:
        """Therapists specialised in the given service"""
        return self.list_all(db, Therapist.specialization.any(Service.id == service_id))

    def get_services(self, db: Session, service_ids: list[str]) -> list[Service]:
        return db.query(Service).filter(Service.id.in_(service_ids)).all()
