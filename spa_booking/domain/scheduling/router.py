"""Scheduling routers - slots, shifts and work schedules"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import Identity, require_staff
from ...database import get_db
from ...shared.schemas import MessageResponse
from .schemas import (
    ShiftCreate,
    ShiftResponse,
    ShiftUpdate,
    SlotCreate,
    SlotResponse,
    SlotUpdate,
    WorkScheduleCreate,
    WorkScheduleResponse,
    WorkScheduleUpdate,
)
from .service import ShiftService, SlotService, WorkScheduleService

slots_router = APIRouter(prefix="/slots", tags=["Slots"])
shifts_router = APIRouter(prefix="/shifts", tags=["Shifts"])
work_schedules_router = APIRouter(prefix="/work-schedule", tags=["Work Schedules"])


def get_slot_service(db: Session = Depends(get_db)) -> SlotService:
    return SlotService(db)


def get_shift_service(db: Session = Depends(get_db)) -> ShiftService:
    return ShiftService(db)


def get_work_schedule_service(db: Session = Depends(get_db)) -> WorkScheduleService:
    return WorkScheduleService(db)


# ============================================================================
# SLOTS
# ============================================================================


@slots_router.get("", response_model=list[SlotResponse])
async def get_all_slots(service: SlotService = Depends(get_slot_service)):
    return [SlotResponse.model_validate(s) for s in service.list_slots()]


@slots_router.post("", response_model=SlotResponse, status_code=201)
async def create_slot(
    data: SlotCreate,
    _staff: Identity = Depends(require_staff),
    service: SlotService = Depends(get_slot_service),
):
    return SlotResponse.model_validate(service.create_slot(data))


@slots_router.get("/{slot_id}", response_model=SlotResponse)
async def get_slot(slot_id: str, service: SlotService = Depends(get_slot_service)):
    return SlotResponse.model_validate(service.get_slot(slot_id))


@slots_router.put("/{slot_id}", response_model=SlotResponse)
async def update_slot(
    slot_id: str,
    data: SlotUpdate,
    _staff: Identity = Depends(require_staff),
    service: SlotService = Depends(get_slot_service),
):
    return SlotResponse.model_validate(service.update_slot(slot_id, data))


@slots_router.delete("/{slot_id}", response_model=MessageResponse)
async def delete_slot(
    slot_id: str,
    _staff: Identity = Depends(require_staff),
    service: SlotService = Depends(get_slot_service),
):
    return service.delete_slot(slot_id)


# ============================================================================
# SHIFTS
# ============================================================================


@shifts_router.get("", response_model=list[ShiftResponse])
async def get_all_shifts(service: ShiftService = Depends(get_shift_service)):
    return [ShiftResponse.model_validate(s) for s in service.list_shifts()]


@shifts_router.post("", response_model=ShiftResponse, status_code=201)
async def create_shift(
    data: ShiftCreate,
    _staff: Identity = Depends(require_staff),
    service: ShiftService = Depends(get_shift_service),
):
    return ShiftResponse.model_validate(service.create_shift(data))


@shifts_router.get("/therapist/upcoming/{therapist_id}", response_model=list[ShiftResponse])
async def get_upcoming_shifts_by_therapist(
    therapist_id: str, service: ShiftService = Depends(get_shift_service)
):
    """Shifts from today onwards, earliest first"""
    return [ShiftResponse.model_validate(s) for s in service.list_upcoming_by_therapist(therapist_id)]


@shifts_router.get("/therapist/{therapist_id}", response_model=list[ShiftResponse])
async def get_shifts_by_therapist(therapist_id: str, service: ShiftService = Depends(get_shift_service)):
    return [ShiftResponse.model_validate(s) for s in service.list_by_therapist(therapist_id)]


@shifts_router.get("/{shift_id}", response_model=ShiftResponse)
async def get_shift(shift_id: str, service: ShiftService = Depends(get_shift_service)):
    return ShiftResponse.model_validate(service.get_shift(shift_id))


@shifts_router.put("/{shift_id}", response_model=ShiftResponse)
async def update_shift(
    shift_id: str,
    data: ShiftUpdate,
    _staff: Identity = Depends(require_staff),
    service: ShiftService = Depends(get_shift_service),
):
    return ShiftResponse.model_validate(service.update_shift(shift_id, data))


@shifts_router.delete("/{shift_id}", response_model=MessageResponse)
async def delete_shift(
    shift_id: str,
    _staff: Identity = Depends(require_staff),
    service: ShiftService = Depends(get_shift_service),
):
    return service.delete_shift(shift_id)


# ============================================================================
# WORK SCHEDULES
# ============================================================================


@work_schedules_router.get("", response_model=list[WorkScheduleResponse])
async def get_all_work_schedules(service: WorkScheduleService = Depends(get_work_schedule_service)):
    return [WorkScheduleResponse.model_validate(w) for w in service.list_work_schedules()]


@work_schedules_router.post("", response_model=WorkScheduleResponse, status_code=201)
async def create_work_schedule(
    data: WorkScheduleCreate,
    _staff: Identity = Depends(require_staff),
    service: WorkScheduleService = Depends(get_work_schedule_service),
):
    return WorkScheduleResponse.model_validate(service.create_work_schedule(data))


@work_schedules_router.get("/therapist/{therapist_id}", response_model=list[WorkScheduleResponse])
async def get_work_schedules_by_therapist(
    therapist_id: str, service: WorkScheduleService = Depends(get_work_schedule_service)
):
    return [WorkScheduleResponse.model_validate(w) for w in service.list_by_therapist(therapist_id)]


@work_schedules_router.get("/{schedule_id}", response_model=WorkScheduleResponse)
async def get_work_schedule(
    schedule_id: str, service: WorkScheduleService = Depends(get_work_schedule_service)
):
    return WorkScheduleResponse.model_validate(service.get_work_schedule(schedule_id))


@work_schedules_router.put("/{schedule_id}", response_model=WorkScheduleResponse)
async def update_work_schedule(
    schedule_id: str,
    data: WorkScheduleUpdate,
    _staff: Identity = Depends(require_staff),
    service: WorkScheduleService = Depends(get_work_schedule_service),
):
    return WorkScheduleResponse.model_validate(service.update_work_schedule(schedule_id, data))


@work_schedules_router.delete("/{schedule_id}", response_model=MessageResponse)
async def delete_work_schedule(
    schedule_id: str,
    _staff: Identity = Depends(require_staff),
    service: WorkScheduleService = Depends(get_work_schedule_service),
):
    return service.delete_work_schedule(schedule_id)
