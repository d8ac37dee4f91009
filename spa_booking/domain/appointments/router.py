"""Appointment router"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from ...auth import Identity, get_current_identity, require_active_account, require_staff
from ...database import get_db
from ...enums import AppointmentStatusEnum
from ...errors import BadRequestError
from ...shared.schemas import MessageResponse
from ...utils.image_storage import PendingImage, image_upload
from .schemas import AppointmentCreate, AppointmentResponse, AppointmentUpdate
from .service import AppointmentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointment", tags=["Appointments"])


def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db)


async def appointment_update_body(
    request: Request,
    therapistId: Optional[str] = Form(None),
    customerId: Optional[str] = Form(None),
    serviceId: Optional[str] = Form(None),
    slotsId: Optional[str] = Form(None),
    status: Optional[AppointmentStatusEnum] = Form(None),
    amount: Optional[float] = Form(None),
    notes: Optional[str] = Form(None),
) -> AppointmentUpdate:
    """
    Read the update fields from a JSON body, or from the multipart text
    fields sent next to the check-in/check-out images.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except ValueError as e:
            raise BadRequestError("Invalid JSON body") from e
        if not isinstance(payload, dict):
            raise BadRequestError("Request body must be a JSON object")
        try:
            return AppointmentUpdate.model_validate(payload)
        except ValidationError as e:
            raise RequestValidationError(e.errors()) from e

    fields = {
        "therapistId": therapistId,
        "customerId": customerId,
        "serviceId": serviceId,
        "slotsId": slotsId,
        "status": status,
        "amount": amount,
        "notes": notes,
    }
    try:
        return AppointmentUpdate(**{k: v for k, v in fields.items() if v is not None})
    except ValidationError as e:
        raise RequestValidationError(e.errors()) from e


@router.get("", response_model=list[AppointmentResponse])
async def get_all_appointments(service: AppointmentService = Depends(get_appointment_service)):
    return [AppointmentResponse.model_validate(a) for a in service.list_appointments()]


@router.post("", response_model=AppointmentResponse, status_code=201)
async def create_appointment(
    data: AppointmentCreate,
    identity: Identity = Depends(require_active_account),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Book an appointment (authenticated, active accounts only)"""
    return AppointmentResponse.model_validate(service.create_appointment(data, identity))


@router.get("/customer/{customer_id}", response_model=list[AppointmentResponse])
async def get_appointments_by_customer(
    customer_id: str, service: AppointmentService = Depends(get_appointment_service)
):
    return [AppointmentResponse.model_validate(a) for a in service.list_by_customer(customer_id)]


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: str, service: AppointmentService = Depends(get_appointment_service)
):
    return AppointmentResponse.model_validate(service.get_appointment(appointment_id))


@router.put("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: str,
    identity: Identity = Depends(get_current_identity),
    data: AppointmentUpdate = Depends(appointment_update_body),
    check_in_image: Optional[PendingImage] = Depends(image_upload("checkInImage")),
    check_out_image: Optional[PendingImage] = Depends(image_upload("checkOutImage")),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Update an appointment from JSON, or from multipart with check-in/check-out images"""
    appointment = service.update_appointment(
        appointment_id, data, identity, check_in_image, check_out_image
    )
    return AppointmentResponse.model_validate(appointment)


@router.delete("/{appointment_id}", response_model=MessageResponse)
async def delete_appointment(
    appointment_id: str,
    _staff: Identity = Depends(require_staff),
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.delete_appointment(appointment_id)
