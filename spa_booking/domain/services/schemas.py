"""Service catalog schemas"""

from typing import Optional

from pydantic import Field, field_validator

from ...shared.schemas import ApiModel, DocumentResponse
from ...shared.validators import validate_required_text


class ServiceCreate(ApiModel):
    service_name: str
    description: str
    price: float = Field(ge=0)
    is_active: bool = True
    images: Optional[str] = None

    @field_validator("service_name", "description")
    @classmethod
    def not_blank(cls, v):
        return validate_required_text(v)


class ServiceUpdate(ApiModel):
    service_name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    is_active: Optional[bool] = None
    images: Optional[str] = None

    @field_validator("service_name", "description")
    @classmethod
    def not_blank(cls, v):
        return validate_required_text(v)


class ServiceResponse(DocumentResponse):
    service_name: str
    description: str
    price: float
    is_active: bool
    images: Optional[str] = None
