"""Blog schemas"""

from typing import Optional

from pydantic import field_validator

from ...enums import BlogStatusEnum
from ...shared.schemas import ApiModel, DocumentResponse
from ...shared.validators import validate_required_text
from ..accounts.schemas import AccountResponse


class BlogBlock(ApiModel):
    """One section of a post: text with an optional illustration"""

    content: str
    image: Optional[str] = None
    image_description: Optional[str] = None


class BlogCreate(ApiModel):
    title: str
    status: BlogStatusEnum = BlogStatusEnum.DRAFT
    content: list[BlogBlock] = []

    @field_validator("title")
    @classmethod
    def not_blank(cls, v):
        return validate_required_text(v)


class BlogUpdate(ApiModel):
    title: Optional[str] = None
    status: Optional[BlogStatusEnum] = None
    content: Optional[list[BlogBlock]] = None

    @field_validator("title")
    @classmethod
    def not_blank(cls, v):
        return validate_required_text(v)


class BlogResponse(DocumentResponse):
    staff_id: str
    staff: Optional[AccountResponse] = None
    title: str
    status: BlogStatusEnum
    content: list[BlogBlock] = []
