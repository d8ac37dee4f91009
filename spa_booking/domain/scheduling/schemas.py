"""Scheduling schemas - slots, shifts and work schedules"""

import datetime as dt
from typing import Optional

from pydantic import Field, field_validator, model_validator

from ...shared.schemas import ApiModel, DocumentResponse
from ...shared.validators import validate_reference_id


# ============================================================================
# SLOTS
# ============================================================================


class SlotCreate(ApiModel):
    """Time-of-day template, not a calendar instance"""

    slot_num: int = Field(gt=0)
    start_time: dt.time
    end_time: dt.time

    @model_validator(mode="after")
    def check_order(self):
        if self.end_time <= self.start_time:
            raise ValueError("endTime must be after startTime")
        return self


class SlotUpdate(ApiModel):
    slot_num: Optional[int] = Field(default=None, gt=0)
    start_time: Optional[dt.time] = None
    end_time: Optional[dt.time] = None


class SlotResponse(DocumentResponse):
    slot_num: int
    start_time: dt.time
    end_time: dt.time


# ============================================================================
# SHIFTS
# ============================================================================


class ShiftCreate(ApiModel):
    slots_id: str
    therapist_id: str
    appointment_id: Optional[str] = None
    date: dt.date
    is_available: bool = True

    @field_validator("slots_id", "therapist_id", "appointment_id")
    @classmethod
    def validate_ids(cls, v):
        return validate_reference_id(v)


class ShiftUpdate(ApiModel):
    slots_id: Optional[str] = None
    therapist_id: Optional[str] = None
    appointment_id: Optional[str] = None
    date: Optional[dt.date] = None
    is_available: Optional[bool] = None

    @field_validator("slots_id", "therapist_id", "appointment_id")
    @classmethod
    def validate_ids(cls, v):
        return validate_reference_id(v)


class ShiftResponse(DocumentResponse):
    slots_id: str
    slot: Optional[SlotResponse] = None
    therapist_id: str
    appointment_id: Optional[str] = None
    date: dt.date
    is_available: bool


# ============================================================================
# WORK SCHEDULES
# ============================================================================


class WorkShiftEntry(ApiModel):
    slots_id: str
    appointment_id: Optional[str] = None
    is_available: bool = True

    @field_validator("slots_id", "appointment_id")
    @classmethod
    def validate_ids(cls, v):
        return validate_reference_id(v)


class WorkScheduleCreate(ApiModel):
    therapist_id: str
    date: dt.date
    shift: list[WorkShiftEntry] = []

    @field_validator("therapist_id")
    @classmethod
    def validate_therapist_id(cls, v):
        return validate_reference_id(v)


class WorkScheduleUpdate(ApiModel):
    date: Optional[dt.date] = None
    shift: Optional[list[WorkShiftEntry]] = None


class WorkScheduleResponse(DocumentResponse):
    therapist_id: str
    date: dt.date
    shift: list[WorkShiftEntry] = []
