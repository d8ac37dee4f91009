"""Blog repository"""

from sqlalchemy.orm import joinedload

from ...models import Blog
from ...shared.repository import CRUDRepository


class BlogRepository(CRUDRepository[Blog]):
    model = Blog
    entity_name = "Blog"

    def populate_options(self) -> list:
        return [joinedload(Blog.staff)]
