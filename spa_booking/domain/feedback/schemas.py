"""Feedback schemas"""

from typing import Optional

from pydantic import Field, field_validator

from ...shared.schemas import ApiModel, DocumentResponse
from ...shared.validators import validate_reference_id, validate_required_text
from ..accounts.schemas import AccountResponse
from ..services.schemas import ServiceResponse


class FeedbackCreate(ApiModel):
    """
    Review of a finished appointment.

    Service and therapist are not accepted from the client; they are copied
    from the referenced appointment.
    """

    appointment_id: str
    comment: str
    rating: int = Field(ge=1, le=5)
    images: Optional[str] = None

    @field_validator("appointment_id")
    @classmethod
    def validate_appointment_id(cls, v):
        return validate_reference_id(v)

    @field_validator("comment")
    @classmethod
    def not_blank(cls, v):
        return validate_required_text(v)


class FeedbackUpdate(ApiModel):
    comment: Optional[str] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    images: Optional[str] = None

    @field_validator("comment")
    @classmethod
    def not_blank(cls, v):
        return validate_required_text(v)


class FeedbackResponse(DocumentResponse):
    account_id: str
    account: Optional[AccountResponse] = None
    appointment_id: str
    service_id: str
    service: Optional[ServiceResponse] = None
    therapist_id: str
    images: Optional[str] = None
    comment: str
    rating: int
