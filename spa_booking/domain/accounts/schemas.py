"""Account domain schemas - Pydantic models for validation"""

from datetime import date
from typing import Optional

from pydantic import EmailStr, Field, field_validator, model_validator

from ...enums import RoleEnum
from ...shared.schemas import ApiModel, DocumentResponse
from ...shared.validators import validate_phone, validate_required_text


class _AccountFields(ApiModel):
    @field_validator("username", check_fields=False)
    @classmethod
    def validate_username(cls, v):
        return validate_required_text(v)

    @field_validator("email", check_fields=False)
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if v else v

    @field_validator("phone", check_fields=False)
    @classmethod
    def validate_phone(cls, v):
        return validate_phone(v)


class RegisterRequest(_AccountFields):
    """Schema for public self-registration (always a Customer)"""

    username: str
    password: str = Field(min_length=1)
    email: EmailStr
    dob: date
    phone: Optional[str] = None
    avatar: Optional[str] = None


class AccountCreate(RegisterRequest):
    """Schema for creating an account; role defaults to Customer"""

    role: Optional[RoleEnum] = None


class AccountUpdate(_AccountFields):
    """Schema for updating an account; password changes go through changePassword"""

    username: Optional[str] = None
    email: Optional[EmailStr] = None
    dob: Optional[date] = None
    phone: Optional[str] = None
    avatar: Optional[str] = None
    role: Optional[RoleEnum] = None
    is_active: Optional[bool] = None


class LoginRequest(ApiModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: str

    @model_validator(mode="after")
    def require_identifier(self):
        if not (self.username or self.email):
            raise ValueError("username or email is required")
        return self


class ChangePasswordRequest(ApiModel):
    old_password: str
    new_password: str = Field(min_length=6)


class AccountResponse(DocumentResponse):
    """Schema for account response; the password hash is never exposed"""

    username: str
    email: str
    role: RoleEnum
    avatar: Optional[str] = None
    dob: date
    phone: Optional[str] = None
    is_active: bool


class LoginResponse(ApiModel):
    message: str
    account: AccountResponse
