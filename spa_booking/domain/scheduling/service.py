"""Scheduling business logic - slots, shifts and work schedules"""

import datetime as dt
import logging

from sqlalchemy.orm import Session

from ...errors import BadRequestError, ConflictError, NotFoundError
from ...models import Appointment, Shift, Slot, Therapist, WorkSchedule
from ...shared.repository import ensure_exists
from .repository import ShiftRepository, SlotRepository, WorkScheduleRepository
from .schemas import (
    ShiftCreate,
    ShiftUpdate,
    SlotCreate,
    SlotUpdate,
    WorkScheduleCreate,
    WorkScheduleUpdate,
)

logger = logging.getLogger(__name__)


class SlotService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = SlotRepository()

    def list_slots(self) -> list[Slot]:
        slots = self.repo.list_all(self.db)
        if not slots:
            raise NotFoundError("No slots found")
        return slots

    def get_slot(self, slot_id: str) -> Slot:
        slot = self.repo.get(self.db, slot_id)
        if not slot:
            raise NotFoundError("Slot not found")
        return slot

    def create_slot(self, data: SlotCreate) -> Slot:
        slot = self.repo.create(self.db, **data.model_dump())
        logger.info(f"🆕 Slot {slot.slot_num} created ({slot.start_time}-{slot.end_time})")
        return slot

    def update_slot(self, slot_id: str, data: SlotUpdate) -> Slot:
        slot = self.get_slot(slot_id)
        start_time = data.start_time or slot.start_time
        end_time = data.end_time or slot.end_time
        if end_time <= start_time:
            raise BadRequestError("endTime must be after startTime")
        return self.repo.update(self.db, slot, **data.model_dump(exclude_unset=True))

    def delete_slot(self, slot_id: str) -> dict:
        slot = self.get_slot(slot_id)
        self.repo.delete(self.db, slot)
        return {"message": "Slot deleted successfully"}


class ShiftService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ShiftRepository()

    def list_shifts(self) -> list[Shift]:
        shifts = self.repo.list_all(self.db)
        if not shifts:
            raise NotFoundError("No shifts found")
        return shifts

    def get_shift(self, shift_id: str) -> Shift:
        shift = self.repo.get(self.db, shift_id)
        if not shift:
            raise NotFoundError("Shift not found")
        return shift

    def list_by_therapist(self, therapist_id: str) -> list[Shift]:
        shifts = self.repo.list_by_therapist(self.db, therapist_id)
        if not shifts:
            raise NotFoundError("No shifts found for this therapist")
        return shifts

    def list_upcoming_by_therapist(self, therapist_id: str, today: dt.date | None = None) -> list[Shift]:
        shifts = self.repo.list_upcoming_by_therapist(
            self.db, therapist_id, today or dt.date.today()
        )
        if not shifts:
            raise NotFoundError("No upcoming shifts found for this therapist")
        return shifts

    def _ensure_slot_free(self, therapist_id: str, date: dt.date, slots_id: str, exclude_id=None):
        existing = self.repo.find_for_slot(self.db, therapist_id, date, slots_id)
        if existing and existing.id != exclude_id:
            raise ConflictError("Therapist already has a shift for this slot and date")

    def create_shift(self, data: ShiftCreate) -> Shift:
        ensure_exists(self.db, Slot, data.slots_id, "Slot")
        ensure_exists(self.db, Therapist, data.therapist_id, "Therapist")
        ensure_exists(self.db, Appointment, data.appointment_id, "Appointment")
        self._ensure_slot_free(data.therapist_id, data.date, data.slots_id)

        shift = self.repo.create(self.db, **data.model_dump())
        logger.info(f"🆕 Shift {shift.id} created for therapist {shift.therapist_id} on {shift.date}")
        return shift

    def update_shift(self, shift_id: str, data: ShiftUpdate) -> Shift:
        shift = self.get_shift(shift_id)
        ensure_exists(self.db, Slot, data.slots_id, "Slot")
        ensure_exists(self.db, Therapist, data.therapist_id, "Therapist")
        ensure_exists(self.db, Appointment, data.appointment_id, "Appointment")
        self._ensure_slot_free(
            data.therapist_id or shift.therapist_id,
            data.date or shift.date,
            data.slots_id or shift.slots_id,
            exclude_id=shift.id,
        )
        return self.repo.update(self.db, shift, **data.model_dump(exclude_unset=True))

    def delete_shift(self, shift_id: str) -> dict:
        shift = self.get_shift(shift_id)
        self.repo.delete(self.db, shift)
        return {"message": "Shift deleted successfully"}


class WorkScheduleService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = WorkScheduleRepository()

    def list_work_schedules(self) -> list[WorkSchedule]:
        schedules = self.repo.list_all(self.db)
        if not schedules:
            raise NotFoundError("No work schedules found")
        return schedules

    def list_by_therapist(self, therapist_id: str) -> list[WorkSchedule]:
        schedules = self.repo.list_by_therapist(self.db, therapist_id)
        if not schedules:
            raise NotFoundError("No work schedules found for this therapist")
        return schedules

    def get_work_schedule(self, schedule_id: str) -> WorkSchedule:
        schedule = self.repo.get(self.db, schedule_id)
        if not schedule:
            raise NotFoundError("Work schedule not found")
        return schedule

    def _dump_entries(self, entries) -> list[dict]:
        for entry in entries:
            ensure_exists(self.db, Slot, entry.slots_id, "Slot")
            ensure_exists(self.db, Appointment, entry.appointment_id, "Appointment")
        return [entry.model_dump(mode="json", by_alias=True) for entry in entries]

    def create_work_schedule(self, data: WorkScheduleCreate) -> WorkSchedule:
        ensure_exists(self.db, Therapist, data.therapist_id, "Therapist")
        return self.repo.create(
            self.db,
            therapist_id=data.therapist_id,
            date=data.date,
            shift=self._dump_entries(data.shift),
        )

    def update_work_schedule(self, schedule_id: str, data: WorkScheduleUpdate) -> WorkSchedule:
        schedule = self.get_work_schedule(schedule_id)
        updates = {"date": data.date}
        if data.shift is not None:
            updates["shift"] = self._dump_entries(data.shift)
        return self.repo.update(self.db, schedule, **updates)

    def delete_work_schedule(self, schedule_id: str) -> dict:
        schedule = self.get_work_schedule(schedule_id)
        self.repo.delete(self.db, schedule)
        return {"message": "Work schedule deleted successfully"}
