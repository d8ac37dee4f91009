"""Feedback router"""

from typing import Optional

from fastapi import APIRouter, Depends, Form
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from ...auth import Identity, get_current_identity, require_active_account
from ...database import get_db
from ...shared.schemas import MessageResponse
from ...utils.image_storage import PendingImage, image_upload
from .schemas import FeedbackCreate, FeedbackResponse, FeedbackUpdate
from .service import FeedbackService

router = APIRouter(prefix="/feedback", tags=["Feedback"])


def get_feedback_service(db: Session = Depends(get_db)) -> FeedbackService:
    """Dependency injection for FeedbackService"""
    return FeedbackService(db)


def feedback_create_form(
    appointmentId: Optional[str] = Form(None),
    comment: Optional[str] = Form(None),
    rating: Optional[int] = Form(None),
    images: Optional[str] = Form(None),
) -> FeedbackCreate:
    """Collect the multipart text fields sent next to the feedback image"""
    fields = {"appointmentId": appointmentId, "comment": comment, "rating": rating, "images": images}
    try:
        return FeedbackCreate(**{k: v for k, v in fields.items() if v is not None})
    except ValidationError as e:
        raise RequestValidationError(e.errors()) from e


@router.get("", response_model=list[FeedbackResponse])
async def get_all_feedback(service: FeedbackService = Depends(get_feedback_service)):
    return [FeedbackResponse.model_validate(f) for f in service.list_feedback()]


@router.post("", response_model=FeedbackResponse, status_code=201)
async def create_feedback(
    identity: Identity = Depends(require_active_account),
    data: FeedbackCreate = Depends(feedback_create_form),
    image: Optional[PendingImage] = Depends(image_upload("image")),
    service: FeedbackService = Depends(get_feedback_service),
):
    """Review an appointment (multipart, optional ``image`` file)"""
    return FeedbackResponse.model_validate(service.create_feedback(data, identity, image))


@router.get("/therapist/{therapist_id}", response_model=list[FeedbackResponse])
async def get_feedback_by_therapist(
    therapist_id: str, service: FeedbackService = Depends(get_feedback_service)
):
    return [FeedbackResponse.model_validate(f) for f in service.list_by_therapist(therapist_id)]


@router.get("/service/{service_id}", response_model=list[FeedbackResponse])
async def get_feedback_by_service(
    service_id: str, service: FeedbackService = Depends(get_feedback_service)
):
    return [FeedbackResponse.model_validate(f) for f in service.list_by_service(service_id)]


@router.get("/{feedback_id}", response_model=FeedbackResponse)
async def get_feedback(feedback_id: str, service: FeedbackService = Depends(get_feedback_service)):
    return FeedbackResponse.model_validate(service.get_feedback(feedback_id))


@router.put("/{feedback_id}", response_model=FeedbackResponse)
async def update_feedback(
    feedback_id: str,
    data: FeedbackUpdate,
    identity: Identity = Depends(get_current_identity),
    service: FeedbackService = Depends(get_feedback_service),
):
    return FeedbackResponse.model_validate(service.update_feedback(feedback_id, data, identity))


@router.delete("/{feedback_id}", response_model=MessageResponse)
async def delete_feedback(
    feedback_id: str,
    identity: Identity = Depends(get_current_identity),
    service: FeedbackService = Depends(get_feedback_service),
):
    return service.delete_feedback(feedback_id, identity)
