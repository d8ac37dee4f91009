"""Feedback repository"""

from sqlalchemy.orm import Session, joinedload

from ...models import Feedback
from ...shared.repository import CRUDRepository


class FeedbackRepository(CRUDRepository[Feedback]):
    model = Feedback
    entity_name = "Feedback"

    def populate_options(self) -> list:
        return [joinedload(Feedback.account), joinedload(Feedback.service)]

    def list_by_therapist(self, db: Session, therapist_id: str) -> list[Feedback]:
        return self.list_all(db, Feedback.therapist_id == therapist_id)

    def list_by_service(self, db: Session, service_id: str) -> list[Feedback]:
        return self.list_all(db, Feedback.service_id == service_id)
