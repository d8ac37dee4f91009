"""Appointment domain schemas"""

import datetime as dt
from typing import Optional

from pydantic import Field, field_validator

from ...enums import AppointmentStatusEnum
from ...shared.schemas import ApiModel, DocumentResponse
from ...shared.validators import validate_reference_id
from ..accounts.schemas import AccountResponse
from ..scheduling.schemas import SlotResponse
from ..services.schemas import ServiceResponse


class AppointmentCreate(ApiModel):
    """
    Booking request.

    When ``date`` is given the matching shift for (therapist, date, slot) is
    reserved in the same transaction as the appointment.
    """

    therapist_id: str
    customer_id: str
    service_id: str
    slots_id: str
    date: Optional[dt.date] = None
    status: AppointmentStatusEnum = AppointmentStatusEnum.SCHEDULED
    amount: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None

    @field_validator("therapist_id", "customer_id", "service_id", "slots_id")
    @classmethod
    def validate_ids(cls, v):
        return validate_reference_id(v)


class AppointmentUpdate(ApiModel):
    therapist_id: Optional[str] = None
    customer_id: Optional[str] = None
    service_id: Optional[str] = None
    slots_id: Optional[str] = None
    status: Optional[AppointmentStatusEnum] = None
    amount: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None

    @field_validator("therapist_id", "customer_id", "service_id", "slots_id")
    @classmethod
    def validate_ids(cls, v):
        return validate_reference_id(v)


class AppointmentResponse(DocumentResponse):
    therapist_id: str
    customer_id: str
    customer: Optional[AccountResponse] = None
    service_id: str
    service: Optional[ServiceResponse] = None
    slots_id: str
    slot: Optional[SlotResponse] = None
    status: AppointmentStatusEnum
    amount: Optional[float] = None
    notes: Optional[str] = None
    check_in_image: Optional[str] = None
    check_out_image: Optional[str] = None
