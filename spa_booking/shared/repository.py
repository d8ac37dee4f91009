"""Generic repository - one persistence operation per method"""

import logging
from typing import Any, Generic, Optional, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..database import Base
from ..errors import AppError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def commit_or_raise(db: Session, entity_name: str) -> None:
    """Commit the session, rolling back and mapping failures to AppErrors"""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"⚠️ {entity_name} write rejected by constraint: {e.orig}")
        raise ConflictError(f"{entity_name} conflicts with an existing record") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"❌ Failed to persist {entity_name}: {e}")
        raise AppError("Internal Server Error", 500) from e


def ensure_exists(db: Session, model: type[Base], entity_id: Optional[str], label: str):
    """Load a referenced row or raise 404"""
    if entity_id is None:
        return None
    instance = db.get(model, entity_id)
    if instance is None:
        raise NotFoundError(f"{label} not found")
    return instance


class CRUDRepository(Generic[ModelT]):
    """
    Repository for a single model.

    Subclasses set ``model`` and ``entity_name`` and override
    ``populate_options`` to expand references on reads.
    """

    model: type[ModelT]
    entity_name: str = "Document"

    def populate_options(self) -> list:
        return []

    def query(self, db: Session, populate: bool = True):
        query = db.query(self.model)
        if populate:
            query = query.options(*self.populate_options())
        return query

    def list_all(self, db: Session, *criteria, order_by=None) -> list[ModelT]:
        query = self.query(db).filter(*criteria)
        if order_by is not None:
            query = query.order_by(order_by)
        elif hasattr(self.model, "created_at"):
            query = query.order_by(self.model.created_at)
        return query.all()

    def get(self, db: Session, entity_id: str) -> Optional[ModelT]:
        return self.query(db).filter(self.model.id == entity_id).first()

    def add(self, db: Session, instance: ModelT) -> ModelT:
        db.add(instance)
        commit_or_raise(db, self.entity_name)
        db.refresh(instance)
        return instance

    def create(self, db: Session, **data: Any) -> ModelT:
        return self.add(db, self.model(**data))

    def update(self, db: Session, instance: ModelT, **updates: Any) -> ModelT:
        """Apply a partial patch; None values leave the stored field unchanged"""
        for key, value in updates.items():
            if value is not None and hasattr(instance, key):
                setattr(instance, key, value)
        commit_or_raise(db, self.entity_name)
        db.refresh(instance)
        return instance

    def delete(self, db: Session, instance: ModelT) -> None:
        db.delete(instance)
        commit_or_raise(db, self.entity_name)
