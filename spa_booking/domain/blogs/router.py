"""Blog router"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import Identity, require_staff
from ...database import get_db
from ...shared.schemas import MessageResponse
from .schemas import BlogCreate, BlogResponse, BlogUpdate
from .service import BlogService

router = APIRouter(prefix="/blog", tags=["Blogs"])


def get_blog_service(db: Session = Depends(get_db)) -> BlogService:
    """Dependency injection for BlogService"""
    return BlogService(db)


@router.get("", response_model=list[BlogResponse])
async def get_all_blogs(service: BlogService = Depends(get_blog_service)):
    return [BlogResponse.model_validate(b) for b in service.list_blogs()]


@router.post("", response_model=BlogResponse, status_code=201)
async def create_blog(
    data: BlogCreate,
    staff: Identity = Depends(require_staff),
    service: BlogService = Depends(get_blog_service),
):
    return BlogResponse.model_validate(service.create_blog(data, staff))


@router.get("/{blog_id}", response_model=BlogResponse)
async def get_blog(blog_id: str, service: BlogService = Depends(get_blog_service)):
    return BlogResponse.model_validate(service.get_blog(blog_id))


@router.put("/{blog_id}", response_model=BlogResponse)
async def update_blog(
    blog_id: str,
    data: BlogUpdate,
    _staff: Identity = Depends(require_staff),
    service: BlogService = Depends(get_blog_service),
):
    return BlogResponse.model_validate(service.update_blog(blog_id, data))


@router.delete("/{blog_id}", response_model=MessageResponse)
async def delete_blog(
    blog_id: str,
    _staff: Identity = Depends(require_staff),
    service: BlogService = Depends(get_blog_service),
):
    return service.delete_blog(blog_id)
