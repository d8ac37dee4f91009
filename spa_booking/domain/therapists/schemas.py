"""Therapist domain schemas"""

from datetime import date
from typing import Optional

from pydantic import Field, field_validator

from ...shared.schemas import ApiModel, DocumentResponse
from ...shared.validators import validate_reference_id, validate_required_text
from ..accounts.schemas import AccountResponse
from ..services.schemas import ServiceResponse


class Certification(ApiModel):
    name: str
    issued_by: str
    issued_date: date

    @field_validator("name", "issued_by")
    @classmethod
    def not_blank(cls, v):
        return validate_required_text(v)


class TherapistCreate(ApiModel):
    account_id: str
    specialization: list[str] = Field(min_length=1)
    certification: list[Certification]
    experience: str

    @field_validator("account_id")
    @classmethod
    def validate_account_id(cls, v):
        return validate_reference_id(v)

    @field_validator("specialization")
    @classmethod
    def validate_specialization(cls, v):
        return [validate_reference_id(service_id) for service_id in v]

    @field_validator("experience")
    @classmethod
    def not_blank(cls, v):
        return validate_required_text(v)


class TherapistUpdate(ApiModel):
    specialization: Optional[list[str]] = None
    certification: Optional[list[Certification]] = None
    experience: Optional[str] = None

    @field_validator("specialization")
    @classmethod
    def validate_specialization(cls, v):
        if v is None:
            return v
        return [validate_reference_id(service_id) for service_id in v]

    @field_validator("experience")
    @classmethod
    def not_blank(cls, v):
        return validate_required_text(v)


class TherapistResponse(DocumentResponse):
    """Therapist with its account and specializations expanded"""

    account_id: str
    account: Optional[AccountResponse] = None
    specialization: list[ServiceResponse] = []
    certification: list[Certification] = []
    experience: str
