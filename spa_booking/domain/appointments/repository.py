"""Appointment repository"""

from sqlalchemy.orm import Session, joinedload

from ...models import Appointment, Shift
from ...shared.repository import CRUDRepository


class AppointmentRepository(CRUDRepository[Appointment]):
    model = Appointment
    entity_name = "Appointment"

    def populate_options(self) -> list:
        return [
            joinedload(Appointment.customer),
            joinedload(Appointment.service),
            joinedload(Appointment.slot),
        ]

    def list_by_customer(self, db: Session, customer_id: str) -> list[Appointment]:
        return self.list_all(db, Appointment.customer_id == customer_id)

    def linked_shifts(self, db: Session, appointment_id: str) -> list[Shift]:
        return db.query(Shift).filter(Shift.appointment_id == appointment_id).all()
