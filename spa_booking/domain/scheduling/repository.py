"""Scheduling repositories"""

import datetime as dt
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Shift, Slot, WorkSchedule
from ...shared.repository import CRUDRepository


class SlotRepository(CRUDRepository[Slot]):
    model = Slot
    entity_name = "Slot"

    def list_all(self, db: Session, *criteria, order_by=None) -> list[Slot]:
        return super().list_all(db, *criteria, order_by=order_by if order_by is not None else Slot.slot_num)


class ShiftRepository(CRUDRepository[Shift]):
    model = Shift
    entity_name = "Shift"

    def populate_options(self) -> list:
        return [joinedload(Shift.slot)]

    def list_by_therapist(self, db: Session, therapist_id: str) -> list[Shift]:
        return self.list_all(db, Shift.therapist_id == therapist_id, order_by=Shift.date)

    def list_upcoming_by_therapist(
        self, db: Session, therapist_id: str, today: dt.date
    ) -> list[Shift]:
        """Shifts dated today or later, ordered by date then slot start time"""
        return (
            db.query(Shift)
            .join(Slot, Shift.slots_id == Slot.id)
            .options(joinedload(Shift.slot))
            .filter(Shift.therapist_id == therapist_id, Shift.date >= today)
            .order_by(Shift.date, Slot.start_time)
            .all()
        )

    def find_for_slot(
        self, db: Session, therapist_id: str, date: dt.date, slots_id: str
    ) -> Optional[Shift]:
        return (
            db.query(Shift)
            .filter(
                Shift.therapist_id == therapist_id,
                Shift.date == date,
                Shift.slots_id == slots_id,
            )
            .first()
        )


class WorkScheduleRepository(CRUDRepository[WorkSchedule]):
    model = WorkSchedule
    entity_name = "Work schedule"

    def list_by_therapist(self, db: Session, therapist_id: str) -> list[WorkSchedule]:
        return self.list_all(db, WorkSchedule.therapist_id == therapist_id, order_by=WorkSchedule.date)
