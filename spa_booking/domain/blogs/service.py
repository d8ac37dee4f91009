"""Blog business logic"""

import logging

from sqlalchemy.orm import Session

from ...auth import Identity
from ...errors import NotFoundError
from ...models import Blog
from .repository import BlogRepository
from .schemas import BlogBlock, BlogCreate, BlogUpdate

logger = logging.getLogger(__name__)


def _dump_blocks(blocks: list[BlogBlock]) -> list[dict]:
    return [block.model_dump(mode="json", by_alias=True) for block in blocks]


class BlogService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = BlogRepository()

    def list_blogs(self) -> list[Blog]:
        blogs = self.repo.list_all(self.db)
        if not blogs:
            raise NotFoundError("No blogs found")
        return blogs

    def get_blog(self, blog_id: str) -> Blog:
        blog = self.repo.get(self.db, blog_id)
        if not blog:
            raise NotFoundError("Blog not found")
        return blog

    def create_blog(self, data: BlogCreate, identity: Identity) -> Blog:
        """Create a post authored by the calling staff member"""
        blog = self.repo.create(
            self.db,
            staff_id=identity.account_id,
            title=data.title,
            status=data.status,
            content=_dump_blocks(data.content),
        )
        logger.info(f"📝 Blog '{blog.title}' created by {identity.account_id}")
        return blog

    def update_blog(self, blog_id: str, data: BlogUpdate) -> Blog:
        blog = self.get_blog(blog_id)
        updates = data.model_dump(exclude_unset=True, exclude={"content"})
        if data.content is not None:
            updates["content"] = _dump_blocks(data.content)
        return self.repo.update(self.db, blog, **updates)

    def delete_blog(self, blog_id: str) -> dict:
        blog = self.get_blog(blog_id)
        self.repo.delete(self.db, blog)
        logger.info(f"🗑️ Blog {blog_id} deleted")
        return {"message": "Blog deleted successfully"}
