"""Payment method and transaction schemas"""

from typing import Optional

from pydantic import field_validator

from ...enums import TransactionStatusEnum
from ...shared.schemas import ApiModel, DocumentResponse
from ...shared.validators import validate_reference_id, validate_required_text


class PaymentMethodCreate(ApiModel):
    method: str
    is_active: bool = True

    @field_validator("method")
    @classmethod
    def not_blank(cls, v):
        return validate_required_text(v)


class PaymentMethodUpdate(ApiModel):
    method: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("method")
    @classmethod
    def not_blank(cls, v):
        return validate_required_text(v)


class PaymentMethodResponse(DocumentResponse):
    method: str
    is_active: bool


class TransactionCreate(ApiModel):
    customer_id: str
    appointment_id: str
    payment_method_id: str
    status: TransactionStatusEnum = TransactionStatusEnum.PENDING

    @field_validator("customer_id", "appointment_id", "payment_method_id")
    @classmethod
    def validate_ids(cls, v):
        return validate_reference_id(v)


class TransactionUpdate(ApiModel):
    customer_id: Optional[str] = None
    appointment_id: Optional[str] = None
    payment_method_id: Optional[str] = None
    status: Optional[TransactionStatusEnum] = None

    @field_validator("customer_id", "appointment_id", "payment_method_id")
    @classmethod
    def validate_ids(cls, v):
        return validate_reference_id(v)


class TransactionResponse(DocumentResponse):
    customer_id: str
    appointment_id: str
    payment_method_id: str
    payment_method: Optional[PaymentMethodResponse] = None
    status: TransactionStatusEnum
