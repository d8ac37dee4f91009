"""Appointment business logic"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...auth import Identity
from ...enums import AppointmentStatusEnum, RoleEnum
from ...errors import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from ...models import Account, Appointment, Service, Shift, Slot, Therapist, generate_id
from ...shared.repository import commit_or_raise, ensure_exists
from ...utils.image_storage import PendingImage, store_image
from ..scheduling.repository import ShiftRepository
from .repository import AppointmentRepository
from .schemas import AppointmentCreate, AppointmentUpdate

logger = logging.getLogger(__name__)

STAFF_ROLES = {RoleEnum.STAFF, RoleEnum.ADMIN}


class AppointmentService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = AppointmentRepository()
        self.shift_repo = ShiftRepository()

    def list_appointments(self) -> list[Appointment]:
        appointments = self.repo.list_all(self.db)
        if not appointments:
            raise NotFoundError("No appointments found")
        return appointments

    def list_by_customer(self, customer_id: str) -> list[Appointment]:
        appointments = self.repo.list_by_customer(self.db, customer_id)
        if not appointments:
            raise NotFoundError("No appointments found for this customer")
        return appointments

    def get_appointment(self, appointment_id: str) -> Appointment:
        appointment = self.repo.get(self.db, appointment_id)
        if not appointment:
            raise NotFoundError("Appointment not found")
        return appointment

    def _check_owner(self, customer_id: str, identity: Identity, action: str):
        if identity.role not in STAFF_ROLES and customer_id != identity.account_id:
            logger.warning(f"⚠️ Account {identity.account_id} tried to {action} for {customer_id}")
            raise ForbiddenError(f"You can only {action} for your own account")

    def _reserve_shift(self, appointment: Appointment, date) -> Shift:
        """Claim the therapist's shift for the booked slot and date"""
        shift = self.shift_repo.find_for_slot(
            self.db, appointment.therapist_id, date, appointment.slots_id
        )
        if shift is None:
            shift = Shift(
                therapist_id=appointment.therapist_id,
                slots_id=appointment.slots_id,
                date=date,
            )
            self.db.add(shift)
        elif not shift.is_available or shift.appointment_id:
            raise ConflictError("This slot is already booked for the therapist")

        shift.appointment = appointment
        shift.is_available = False
        return shift

    def _release_shifts(self, appointment_id: str) -> None:
        for shift in self.repo.linked_shifts(self.db, appointment_id):
            shift.appointment_id = None
            shift.is_available = True

    def create_appointment(self, data: AppointmentCreate, identity: Identity) -> Appointment:
        self._check_owner(data.customer_id, identity, "book appointments")

        ensure_exists(self.db, Account, data.customer_id, "Customer")
        ensure_exists(self.db, Therapist, data.therapist_id, "Therapist")
        ensure_exists(self.db, Slot, data.slots_id, "Slot")
        service = ensure_exists(self.db, Service, data.service_id, "Service")
        if not service.is_active:
            raise BadRequestError("Service is not available for booking")

        appointment = Appointment(
            id=generate_id(),
            therapist_id=data.therapist_id,
            customer_id=data.customer_id,
            service_id=data.service_id,
            slots_id=data.slots_id,
            status=data.status,
            amount=data.amount if data.amount is not None else service.price,
            notes=data.notes,
        )

        # Appointment and shift reservation commit together or not at all
        try:
            self.db.add(appointment)
            if data.date is not None:
                self._reserve_shift(appointment, data.date)
        except ConflictError:
            self.db.rollback()
            raise
        commit_or_raise(self.db, "Appointment")
        self.db.refresh(appointment)

        logger.info(f"🆕 Appointment {appointment.id} booked by customer {data.customer_id}")
        return appointment

    def _move_shifts(self, appointment: Appointment, therapist_id: str, slots_id: str) -> None:
        """Re-point held reservations at a new therapist/slot pairing on the same dates"""
        dates = [shift.date for shift in self.repo.linked_shifts(self.db, appointment.id)]
        self._release_shifts(appointment.id)
        appointment.therapist_id = therapist_id
        appointment.slots_id = slots_id
        for date in dates:
            self._reserve_shift(appointment, date)

    def update_appointment(
        self,
        appointment_id: str,
        data: AppointmentUpdate,
        identity: Identity,
        check_in_image: Optional[PendingImage] = None,
        check_out_image: Optional[PendingImage] = None,
    ) -> Appointment:
        """Patch an appointment; images are replaced only when a new upload is given"""
        appointment = self.get_appointment(appointment_id)
        self._check_owner(appointment.customer_id, identity, "update appointments")
        if data.customer_id:
            self._check_owner(data.customer_id, identity, "update appointments")

        ensure_exists(self.db, Account, data.customer_id, "Customer")
        ensure_exists(self.db, Therapist, data.therapist_id, "Therapist")
        ensure_exists(self.db, Service, data.service_id, "Service")
        ensure_exists(self.db, Slot, data.slots_id, "Slot")

        if (
            appointment.status == AppointmentStatusEnum.CANCELLED
            and data.status is not None
            and data.status != AppointmentStatusEnum.CANCELLED
        ):
            raise BadRequestError("Cancelled appointments cannot be reopened, book a new one instead")

        updates = data.model_dump(exclude_unset=True)
        therapist_id = data.therapist_id or appointment.therapist_id
        slots_id = data.slots_id or appointment.slots_id

        # Shift changes and the patch commit together or not at all
        try:
            if data.status == AppointmentStatusEnum.CANCELLED:
                self._release_shifts(appointment.id)
            elif (therapist_id, slots_id) != (appointment.therapist_id, appointment.slots_id):
                self._move_shifts(appointment, therapist_id, slots_id)
        except ConflictError:
            self.db.rollback()
            raise

        if check_in_image is not None:
            updates["check_in_image"] = store_image(check_in_image)
        if check_out_image is not None:
            updates["check_out_image"] = store_image(check_out_image)

        appointment = self.repo.update(self.db, appointment, **updates)
        logger.info(f"✏️ Appointment {appointment.id} updated ({appointment.status.value})")
        return appointment

    def delete_appointment(self, appointment_id: str) -> dict:
        appointment = self.get_appointment(appointment_id)
        self._release_shifts(appointment.id)
        self.repo.delete(self.db, appointment)
        logger.info(f"🗑️ Appointment {appointment_id} deleted")
        return {"message": "Appointment deleted successfully"}
