"""Feedback business logic"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...auth import Identity
from ...enums import RoleEnum
from ...errors import ForbiddenError, NotFoundError
from ...models import Appointment, Feedback
from ...shared.repository import ensure_exists
from ...utils.image_storage import PendingImage, store_image
from .repository import FeedbackRepository
from .schemas import FeedbackCreate, FeedbackUpdate

logger = logging.getLogger(__name__)

STAFF_ROLES = {RoleEnum.STAFF, RoleEnum.ADMIN}


class FeedbackService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = FeedbackRepository()

    def list_feedback(self) -> list[Feedback]:
        feedback = self.repo.list_all(self.db)
        if not feedback:
            raise NotFoundError("No feedback found")
        return feedback

    def list_by_therapist(self, therapist_id: str) -> list[Feedback]:
        feedback = self.repo.list_by_therapist(self.db, therapist_id)
        if not feedback:
            raise NotFoundError("No feedback found for this therapist")
        return feedback

    def list_by_service(self, service_id: str) -> list[Feedback]:
        feedback = self.repo.list_by_service(self.db, service_id)
        if not feedback:
            raise NotFoundError("No feedback found for this service")
        return feedback

    def get_feedback(self, feedback_id: str) -> Feedback:
        feedback = self.repo.get(self.db, feedback_id)
        if not feedback:
            raise NotFoundError("Feedback not found")
        return feedback

    def _check_author(self, feedback: Feedback, identity: Identity) -> None:
        if identity.role not in STAFF_ROLES and feedback.account_id != identity.account_id:
            raise ForbiddenError("You can only modify your own feedback")

    def create_feedback(
        self, data: FeedbackCreate, identity: Identity, image: Optional[PendingImage] = None
    ) -> Feedback:
        """Create feedback, taking service and therapist from the appointment"""
        appointment = ensure_exists(self.db, Appointment, data.appointment_id, "Appointment")
        if identity.role not in STAFF_ROLES and appointment.customer_id != identity.account_id:
            logger.warning(
                f"⚠️ Account {identity.account_id} tried to review appointment {appointment.id}"
            )
            raise ForbiddenError("You can only review your own appointments")

        feedback = self.repo.create(
            self.db,
            account_id=identity.account_id,
            appointment_id=appointment.id,
            service_id=appointment.service_id,
            therapist_id=appointment.therapist_id,
            images=store_image(image) if image is not None else data.images,
            comment=data.comment,
            rating=data.rating,
        )
        logger.info(f"⭐ Feedback {feedback.id} ({feedback.rating}/5) for appointment {appointment.id}")
        return feedback

    def update_feedback(self, feedback_id: str, data: FeedbackUpdate, identity: Identity) -> Feedback:
        feedback = self.get_feedback(feedback_id)
        self._check_author(feedback, identity)
        return self.repo.update(self.db, feedback, **data.model_dump(exclude_unset=True))

    def delete_feedback(self, feedback_id: str, identity: Identity) -> dict:
        feedback = self.get_feedback(feedback_id)
        self._check_author(feedback, identity)
        self.repo.delete(self.db, feedback)
        logger.info(f"🗑️ Feedback {feedback_id} deleted")
        return {"message": "Feedback deleted successfully"}
